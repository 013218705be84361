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
# THE GENERATOR - NEW APPLICATION MANIFESTS
# -----------------------------------------------------------------------------
# Responsibility: Turns a NewAppInput into the resources needed to build
# and run it: ImageStream, BuildConfig, DeploymentConfig and, when the
# image exposes ports, a Service and a Route.
#
# Dependency order:
#   ports + image spec -> image stream, build config (independent)
#                      -> deployment config (ports + image spec)
#                      -> service (ports) -> route (service)
#
# Nothing here performs I/O. The only side effect is diagnostic output
# through the `warn` collaborator.
# -----------------------------------------------------------------------------

from typing import Any, Callable, Optional
from urllib.parse import urldefrag

from rich.console import Console

from src.core.config import GENERATED_BY_ANNOTATION, GeneratorConfig
from src.core.images import format_image_spec, resolve_image_spec
from src.core.ports import parse_ports
from src.core.tokens import generate_secret
from src.domain.models import (
    GeneratedResources,
    ImageSpec,
    NewAppInput,
    Port,
    RoutingOptions,
    TLSTermination,
)

console = Console(stderr=True)

API_VERSION = "v1"


class GenerationError(Exception):
    """
    Raised when a descriptor cannot produce a consistent resource set.

    Carries the resource kind that could not be built.
    """

    def __init__(self, message: str, resource: str, details: str = "") -> None:
        super().__init__(message)
        self.resource = resource
        self.details = details


def _warn(message: str) -> None:
    console.print(f"[yellow][GENERATOR] {message}[/yellow]")


def _env_list(env_vars: dict[str, str]) -> list[dict]:
    """Flatten an env mapping into name/value pairs, keeping mapping order."""
    return [{"name": name, "value": value} for name, value in env_vars.items()]


class ApplicationGenerator:
    """
    Builds the manifests for a new application.

    Stateless between calls: each generate() consumes one descriptor and
    returns one GeneratedResources snapshot.
    """

    def __init__(
        self,
        config: Optional[GeneratorConfig] = None,
        secret_source: Optional[Callable[[], str]] = None,
        warn: Optional[Callable[[str], None]] = None,
    ) -> None:
        """
        Initialize the generator.

        Args:
            config: Generator settings. Defaults to GeneratorConfig().
            secret_source: Returns a fresh webhook secret per call.
            warn: Receives non-fatal diagnostics (skipped ports, route hints).
        """
        self._config = config or GeneratorConfig()
        self._secret_source = secret_source or (
            lambda: generate_secret(self._config.secret_length)
        )
        self._warn = warn or _warn

    def parse_ports(self, image: Optional[dict]) -> list[Port]:
        """Exposed ports of the image, sorted by container port."""
        return parse_ports(image, warn=self._warn)

    def generate(self, app: NewAppInput) -> GeneratedResources:
        """
        Generate resource definitions for the given descriptor.

        Args:
            app: The new application descriptor. Its labels and annotations
                are augmented in place.

        Returns:
            GeneratedResources. `service` is set only when ports were found,
            `route` only when there is a service and routing is included.

        Raises:
            GenerationError: If the descriptor has no source URL, since the
                build config and deployment both need the built image.
        """
        image_spec = resolve_image_spec(app, tag=self._config.image_tag)
        if image_spec is None:
            raise GenerationError(
                f"Cannot generate {app.name}: no source URL to build an image from",
                resource="DeploymentConfig",
                details="build_config.source_url is required",
            )

        ports = self.parse_ports(app.image)

        app.labels["app"] = app.name
        app.annotations[GENERATED_BY_ANNOTATION] = self._config.generated_by

        resources = GeneratedResources(
            image_stream=self._generate_image_stream(app),
            build_config=self._generate_build_config(app, image_spec),
            deployment_config=self._generate_deployment_config(app, image_spec, ports),
        )

        service = self._generate_service(app, app.name, ports)
        if service:
            resources.service = service
            # Only attempt to generate a route if there is a service.
            resources.route = self._generate_route(
                app.labels, app.annotations, app.routing, app.name,
                service["metadata"]["name"], ports,
            )
        return resources

    def create_route(
        self,
        route_options: RoutingOptions | dict,
        service_name: str,
        labels: Optional[dict[str, str]] = None,
    ) -> Optional[dict]:
        """
        Build a route on its own, outside full application generation.

        Args:
            route_options: Routing options; `include` defaults to True and
                `name` names the route.
            service_name: Service the route targets.
            labels: Labels for the route. Defaults to none.

        Returns:
            The Route manifest, or None when the options opt out.
        """
        if isinstance(route_options, RoutingOptions):
            route_options = route_options.model_dump(by_alias=True, exclude_unset=True)
        options = RoutingOptions.model_validate({"include": True, **route_options})

        return self._generate_route(
            labels if labels is not None else {}, None, options, options.name, service_name
        )

    def _metadata(self, name: str, labels: dict, annotations: Optional[dict]) -> dict:
        metadata = {"name": name, "labels": labels}
        if annotations is not None:
            metadata["annotations"] = annotations
        return metadata

    def _generate_image_stream(self, app: NewAppInput) -> dict:
        return {
            "apiVersion": API_VERSION,
            "kind": "ImageStream",
            "metadata": self._metadata(app.name, app.labels, app.annotations),
        }

    def _build_triggers(self, app: NewAppInput) -> list[dict]:
        triggers = [{"generic": {"secret": self._secret_source()}, "type": "Generic"}]
        if app.build_config.build_on_source_change:
            triggers.append({"github": {"secret": self._secret_source()}, "type": "GitHub"})
        if app.build_config.build_on_image_change:
            triggers.append({"imageChange": {}, "type": "ImageChange"})
        if app.build_config.build_on_config_change:
            triggers.append({"type": "ConfigChange"})
        return triggers

    def _generate_build_config(self, app: NewAppInput, image_spec: ImageSpec) -> dict:
        build = app.build_config

        # The user can put a ref in the URL fragment
        source_url, source_ref = urldefrag(build.source_url)
        source_ref = source_ref or self._config.default_git_ref

        source: dict[str, Any] = {
            "git": {"ref": build.git_ref or source_ref, "uri": source_url},
            "type": "Git",
        }
        if build.context_dir:
            source["contextDir"] = build.context_dir

        return {
            "apiVersion": API_VERSION,
            "kind": "BuildConfig",
            "metadata": self._metadata(app.name, app.labels, app.annotations),
            "spec": {
                "output": {
                    "to": {"name": format_image_spec(image_spec), "kind": image_spec.kind}
                },
                "source": source,
                "strategy": {
                    "type": "Source",
                    "sourceStrategy": {
                        "from": {
                            "kind": "ImageStreamTag",
                            "name": f"{app.image_name}:{app.image_tag}",
                            "namespace": app.namespace,
                        },
                        "env": _env_list(build.env_vars),
                    },
                },
                "triggers": self._build_triggers(app),
            },
        }

    def _generate_deployment_config(
        self, app: NewAppInput, image_spec: ImageSpec, ports: list[Port]
    ) -> dict:
        deploy = app.deployment_config
        image = format_image_spec(image_spec)

        template_labels = dict(app.labels)
        template_labels["deploymentconfig"] = app.name

        container: dict[str, Any] = {
            "image": image,
            "name": app.name,
            "ports": [port.model_dump(by_alias=True) for port in ports],
            "env": _env_list(deploy.env_vars),
        }
        if app.container and app.container.resources is not None:
            container["resources"] = app.container.resources

        triggers = []
        if deploy.deploy_on_new_image:
            triggers.append({
                "type": "ImageChange",
                "imageChangeParams": {
                    "automatic": True,
                    "containerNames": [app.name],
                    "from": {"kind": image_spec.kind, "name": image},
                },
            })
        if deploy.deploy_on_config_change:
            triggers.append({"type": "ConfigChange"})

        return {
            "apiVersion": API_VERSION,
            "kind": "DeploymentConfig",
            "metadata": self._metadata(app.name, app.labels, app.annotations),
            "spec": {
                "replicas": app.scaling.replicas,
                "selector": {"deploymentconfig": app.name},
                "triggers": triggers,
                "template": {
                    "metadata": {"labels": template_labels},
                    "spec": {"containers": [container]},
                },
            },
        }

    def _generate_service(
        self, app: NewAppInput, service_name: str, ports: list[Port]
    ) -> Optional[dict]:
        if not ports:
            return None

        return {
            "kind": "Service",
            "apiVersion": API_VERSION,
            "metadata": self._metadata(service_name, app.labels, app.annotations),
            "spec": {
                "selector": {"deploymentconfig": app.name},
                "ports": [
                    {
                        "port": port.container_port,
                        "targetPort": port.container_port,
                        "protocol": port.protocol,
                        # Same naming convention as the CLI new-app command
                        "name": f"{port.container_port}-{port.protocol}".lower(),
                    }
                    for port in ports
                ],
            },
        }

    def _generate_route(
        self,
        labels: dict,
        annotations: Optional[dict],
        routing: RoutingOptions,
        name: Optional[str],
        service_name: str,
        ports: Optional[list[Port]] = None,
    ) -> Optional[dict]:
        if not routing.include:
            return None

        spec: dict[str, Any] = {"to": {"kind": "Service", "name": service_name}}
        if routing.host:
            spec["host"] = routing.host
        if routing.path:
            spec["path"] = routing.path
        if routing.target_port:
            spec["port"] = {"targetPort": routing.target_port.container_port}
        elif ports and len(ports) > 1:
            self._warn(
                f"Route {name} has no target port and service {service_name} "
                f"exposes {len(ports)} ports"
            )

        tls = self._route_tls(routing)
        if tls:
            spec["tls"] = tls
            if routing.path and tls["termination"] == TLSTermination.PASSTHROUGH.value:
                self._warn(f"Route {name} is passthrough; path {routing.path} will be ignored")

        return {
            "kind": "Route",
            "apiVersion": API_VERSION,
            "metadata": self._metadata(name, labels, annotations),
            "spec": spec,
        }

    def _route_tls(self, routing: RoutingOptions) -> Optional[dict]:
        """TLS block for the route; fields emitted depend on the termination."""
        tls = routing.tls
        if not tls or not tls.termination:
            return None

        termination = TLSTermination(tls.termination)
        block = {"termination": termination.value}
        if termination == TLSTermination.PASSTHROUGH:
            return block

        if termination == TLSTermination.EDGE and tls.insecure_edge_termination_policy:
            block["insecureEdgeTerminationPolicy"] = tls.insecure_edge_termination_policy
        if tls.certificate:
            block["certificate"] = tls.certificate
        if tls.key:
            block["key"] = tls.key
        if tls.ca_certificate:
            block["caCertificate"] = tls.ca_certificate
        if termination == TLSTermination.REENCRYPT and tls.destination_ca_certificate:
            block["destinationCACertificate"] = tls.destination_ca_certificate
        return block
