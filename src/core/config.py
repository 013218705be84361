# -----------------------------------------------------------------------------
# GENERATOR CONFIGURATION
# -----------------------------------------------------------------------------
# Responsibility: Loads the generator settings (generated-by marker, default
# git ref, output image tag, webhook secret length) from a YAML file.
# A missing file is not an error: defaults are used.
# -----------------------------------------------------------------------------

import os
from pathlib import Path
from typing import Optional

import yaml
from pydantic import BaseModel, Field
from rich.console import Console

console = Console(stderr=True)

# Config file location (overridable with APPGEN_CONFIG)
CONFIG_PATH = Path(__file__).parent.parent.parent / "appgen.yaml"

GENERATED_BY_ANNOTATION = "openshift.io/generated-by"


class GeneratorConfig(BaseModel):
    """
    Pydantic model for the generator configuration.

    Loaded from appgen.yaml at startup.
    """

    generated_by: str = "OpenShiftWebConsole"
    default_git_ref: str = "master"
    image_tag: str = "latest"
    secret_length: int = Field(16, gt=0)


def load_config(path: Optional[Path] = None) -> GeneratorConfig:
    """
    Load generator settings from YAML.

    Args:
        path: Config file. Defaults to $APPGEN_CONFIG, then appgen.yaml
            in the project root.

    Returns:
        GeneratorConfig with validated settings. APPGEN_GENERATED_BY, when
        set, overrides the generated_by value from the file.
    """
    if path is None:
        path = Path(os.getenv("APPGEN_CONFIG", str(CONFIG_PATH)))

    if not path.exists():
        console.print(f"[yellow][CONFIG] {path.name} not found, using defaults[/yellow]")
        data = {}
    else:
        with open(path) as f:
            data = yaml.safe_load(f) or {}

    generated_by = os.getenv("APPGEN_GENERATED_BY")
    if generated_by:
        data["generated_by"] = generated_by

    return GeneratorConfig(**data)
