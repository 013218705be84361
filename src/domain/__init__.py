# -----------------------------------------------------------------------------
# DOMAIN LAYER
# -----------------------------------------------------------------------------
# Contains the New Application descriptor (Pydantic models) consumed by the
# ApplicationGenerator and the GeneratedResources it returns.
# -----------------------------------------------------------------------------

from .models import (
    BuildConfigInput,
    ContainerSpec,
    DeploymentConfigInput,
    GeneratedResources,
    ImageSpec,
    NewAppInput,
    Port,
    RoutingOptions,
    Scaling,
    TLSConfig,
    TLSTermination,
)

__all__ = [
    "BuildConfigInput", "ContainerSpec", "DeploymentConfigInput",
    "GeneratedResources", "ImageSpec", "NewAppInput", "Port",
    "RoutingOptions", "Scaling", "TLSConfig", "TLSTermination",
]
