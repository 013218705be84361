"""
appgen - print the manifests for a new application descriptor.

Usage:
  python appgen.py descriptor.yaml
  python appgen.py descriptor.json --format json --list
  python appgen.py descriptor.yaml --route-only my-service
"""

import argparse
import json
import sys
from pathlib import Path

PROJECT_ROOT = Path(__file__).parent
sys.path.insert(0, str(PROJECT_ROOT))

# Load environment variables from .env
from dotenv import load_dotenv

load_dotenv(PROJECT_ROOT / ".env")

import yaml
from pydantic import ValidationError
from rich.console import Console
from rich.panel import Panel

from src.core.config import load_config
from src.core.generator import ApplicationGenerator, GenerationError
from src.domain.models import NewAppInput

SYSTEM_NAME = "APPGEN"
console = Console(stderr=True)


def _parse_args(argv):
    parser = argparse.ArgumentParser(
        prog="appgen",
        description="Generate ImageStream, BuildConfig, DeploymentConfig, Service and Route manifests",
    )
    parser.add_argument("descriptor", type=Path, help="New application descriptor (YAML or JSON)")
    parser.add_argument("--config", type=Path, default=None, help="Generator config (appgen.yaml)")
    parser.add_argument("--format", choices=("yaml", "json"), default="yaml", dest="fmt")
    parser.add_argument("--list", action="store_true", help="Emit a single v1 List manifest")
    parser.add_argument(
        "--route-only", metavar="SERVICE", default=None,
        help="Only build a route for SERVICE from the descriptor's routing block",
    )
    return parser.parse_args(argv)


class DescriptorError(Exception):
    """Raised when the descriptor file does not hold a mapping."""

    pass


def _load_descriptor(path: Path) -> dict:
    # YAML is a superset of JSON, one loader covers both
    with open(path) as f:
        data = yaml.safe_load(f) or {}
    if not isinstance(data, dict):
        raise DescriptorError(f"{path.name}: expected a mapping, got {type(data).__name__}")
    return data


class _NoAliasDumper(yaml.SafeDumper):
    """Labels are shared between manifests; write them out in full every time."""

    def ignore_aliases(self, data):
        return True


def _dump(data, fmt: str) -> str:
    if fmt == "json":
        return json.dumps(data, indent=2)
    return yaml.dump(data, Dumper=_NoAliasDumper, sort_keys=False)


def main(argv=None) -> int:
    args = _parse_args(argv)

    try:
        data = _load_descriptor(args.descriptor)
        generator = ApplicationGenerator(config=load_config(args.config))

        if args.route_only:
            route = generator.create_route(
                data.get("routing") or {}, args.route_only, labels=data.get("labels")
            )
            if route is None:
                console.print("[yellow][APPGEN] Routing not included, nothing to emit[/yellow]")
                return 0
            output = route
        else:
            app = NewAppInput.model_validate(data)
            console.print(f"[cyan][APPGEN] Generating resources for {app.name}[/cyan]")
            resources = generator.generate(app)
            kinds = [m["kind"] for m in resources.manifests()]
            console.print(f"[green][APPGEN] {app.name}: {', '.join(kinds)}[/green]")
            output = resources.as_list() if args.list else resources.to_dict()

    except (OSError, yaml.YAMLError, DescriptorError, ValidationError, GenerationError) as e:
        console.print(Panel(
            f"[bold red]{type(e).__name__}[/bold red]\n\n{e}",
            title=f"{SYSTEM_NAME} FAILED",
            border_style="red",
        ))
        return 1

    print(_dump(output, args.fmt))
    return 0


if __name__ == "__main__":
    sys.exit(main())
