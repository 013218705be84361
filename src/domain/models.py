# Copyright 2026 Pramod Kumar Voola
#
# Licensed under the Apache License, Version 2.0 (the "License");
# you may not use this file except in compliance with the License.
# You may obtain a copy of the License at
#
#     http://www.apache.org/licenses/LICENSE-2.0
#
# Unless required by applicable law or agreed to in writing, software
# distributed under the License is distributed on an "AS IS" BASIS,
# WITHOUT WARRANTIES OR CONDITIONS OF ANY KIND, either express or implied.
# See the License for the specific language governing permissions and
# limitations under the License.

# -----------------------------------------------------------------------------
# DOMAIN MODELS - NEW APPLICATION DESCRIPTOR
# -----------------------------------------------------------------------------
# These Pydantic models define the "New Application" descriptor that the
# ApplicationGenerator turns into ImageStream, BuildConfig, DeploymentConfig,
# Service and Route manifests.
#
# Attribute names are snake_case; every field also accepts its camelCase
# wire name (buildConfig, sourceUrl, containerPort, ...) so descriptors
# written against the orchestration API validate directly.
# -----------------------------------------------------------------------------

from dataclasses import dataclass
from enum import Enum
from typing import Any, Optional

from pydantic import BaseModel, Field, field_validator


class TLSTermination(str, Enum):
    """
    Supported route TLS termination modes.

    - edge: TLS is decrypted at the router
    - passthrough: the router forwards encrypted traffic, the pod terminates TLS
    - reencrypt: decrypted at the router, re-encrypted towards the pod
    """

    EDGE = "edge"
    PASSTHROUGH = "passthrough"
    REENCRYPT = "reencrypt"


class Port(BaseModel):
    """A container port derived from image metadata."""

    container_port: int = Field(..., alias="containerPort", gt=0)
    protocol: str = Field("TCP", description="TCP or UDP, always upper case")

    @field_validator("protocol")
    @classmethod
    def _upper_protocol(cls, value: str) -> str:
        return value.upper()

    class Config:
        populate_by_name = True


def _env_values_to_str(value: Any) -> Any:
    """YAML reads `PORT: 8080` as an int; env values are always strings."""
    if not isinstance(value, dict):
        return value
    env = {}
    for name, v in value.items():
        if isinstance(v, bool):
            v = "true" if v else "false"
        elif isinstance(v, (int, float)):
            v = str(v)
        env[name] = v
    return env


class ImageSpec(BaseModel):
    """
    Output image produced by the build pipeline.

    Only resolved when a source URL is supplied. Use
    src.core.images.format_image_spec for the canonical "name:tag" form.
    """

    name: str
    tag: str = "latest"
    kind: str = "ImageStreamTag"


class BuildConfigInput(BaseModel):
    """Build pipeline options of the descriptor."""

    source_url: Optional[str] = Field(
        None, alias="sourceUrl", description="Git URL, may carry a '#ref' fragment"
    )
    git_ref: Optional[str] = Field(None, alias="gitRef")
    context_dir: Optional[str] = Field(None, alias="contextDir")
    env_vars: dict[str, str] = Field(default_factory=dict, alias="envVars")
    build_on_source_change: bool = Field(False, alias="buildOnSourceChange")
    build_on_image_change: bool = Field(False, alias="buildOnImageChange")
    build_on_config_change: bool = Field(False, alias="buildOnConfigChange")

    coerce_env = field_validator("env_vars", mode="before")(_env_values_to_str)

    class Config:
        populate_by_name = True


class DeploymentConfigInput(BaseModel):
    """Deployment options of the descriptor."""

    env_vars: dict[str, str] = Field(default_factory=dict, alias="envVars")
    deploy_on_new_image: bool = Field(False, alias="deployOnNewImage")
    deploy_on_config_change: bool = Field(False, alias="deployOnConfigChange")

    coerce_env = field_validator("env_vars", mode="before")(_env_values_to_str)

    class Config:
        populate_by_name = True


class Scaling(BaseModel):
    replicas: int = Field(1, ge=0)


class ContainerSpec(BaseModel):
    """Resource limits/requests, passed through to the container verbatim."""

    resources: Optional[dict[str, Any]] = None


class TLSConfig(BaseModel):
    """Route TLS policy. Which fields are emitted depends on the termination."""

    termination: Optional[TLSTermination] = None
    insecure_edge_termination_policy: Optional[str] = Field(
        None, alias="insecureEdgeTerminationPolicy"
    )
    certificate: Optional[str] = None
    key: Optional[str] = None
    ca_certificate: Optional[str] = Field(None, alias="caCertificate")
    destination_ca_certificate: Optional[str] = Field(None, alias="destinationCACertificate")

    class Config:
        populate_by_name = True
        use_enum_values = True


class RoutingOptions(BaseModel):
    """
    Route options.

    `include` defaults to True; setting it to False is an explicit opt-out
    and suppresses the route even when a service exists. `name` is only
    used by ApplicationGenerator.create_route.
    """

    name: Optional[str] = None
    include: bool = True
    host: Optional[str] = None
    path: Optional[str] = None
    target_port: Optional[Port] = Field(None, alias="targetPort")
    tls: Optional[TLSConfig] = None

    class Config:
        populate_by_name = True


class NewAppInput(BaseModel):
    """
    The "new application" descriptor.

    `labels` and `annotations` are mutated in place during generation
    (the `app` label and the generated-by annotation are injected) and the
    same dict instances end up on every generated manifest.
    """

    name: str = Field(..., min_length=1, description="Base name of every generated resource")
    image: dict[str, Any] = Field(
        default_factory=dict, description="Image metadata holding the exposed ports"
    )
    labels: dict[str, str] = Field(default_factory=dict)
    annotations: dict[str, str] = Field(default_factory=dict)
    build_config: BuildConfigInput = Field(default_factory=BuildConfigInput, alias="buildConfig")
    deployment_config: DeploymentConfigInput = Field(
        default_factory=DeploymentConfigInput, alias="deploymentConfig"
    )
    scaling: Scaling = Field(default_factory=Scaling)
    container: Optional[ContainerSpec] = None
    routing: RoutingOptions = Field(default_factory=RoutingOptions)
    namespace: str = Field(..., description="Namespace of the builder image stream")
    image_name: str = Field(..., alias="imageName")
    image_tag: str = Field(..., alias="imageTag")

    class Config:
        populate_by_name = True


@dataclass
class GeneratedResources:
    """Manifests produced for one NewAppInput."""

    image_stream: dict
    build_config: dict
    deployment_config: dict
    service: dict | None = None
    route: dict | None = None

    def to_dict(self) -> dict:
        """Wire form keyed by imageStream/buildConfig/... with absent manifests omitted."""
        resources = {
            "imageStream": self.image_stream,
            "buildConfig": self.build_config,
            "deploymentConfig": self.deployment_config,
        }
        if self.service is not None:
            resources["service"] = self.service
        if self.route is not None:
            resources["route"] = self.route
        return resources

    def manifests(self) -> list[dict]:
        return list(self.to_dict().values())

    def as_list(self) -> dict:
        """Wrap all manifests in a single v1 List for one-shot submission."""
        return {"apiVersion": "v1", "kind": "List", "items": self.manifests()}
