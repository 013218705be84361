# -----------------------------------------------------------------------------
# CORE LAYER
# -----------------------------------------------------------------------------
# The business logic of the application generator:
# - ApplicationGenerator: builds ImageStream/BuildConfig/DeploymentConfig/
#   Service/Route manifests from a NewAppInput
# - parse_ports: exposed container ports from image metadata
# - resolve_image_spec / format_image_spec: output image reference
# - generate_secret: webhook trigger secrets
# - load_config: generator settings (appgen.yaml)
# -----------------------------------------------------------------------------

from .config import GeneratorConfig, load_config
from .generator import ApplicationGenerator, GenerationError
from .images import format_image_spec, resolve_image_spec
from .ports import parse_ports
from .tokens import generate_secret

__all__ = [
    "ApplicationGenerator", "GenerationError",
    "GeneratorConfig", "load_config",
    "format_image_spec", "resolve_image_spec",
    "parse_ports",
    "generate_secret",
]
