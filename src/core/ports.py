# -----------------------------------------------------------------------------
# PORT SPEC PARSER
# -----------------------------------------------------------------------------
# Responsibility: Extracts the exposed container ports from Docker image
# metadata. Keys look like "8080/tcp" or "9090" (protocol defaults to tcp).
#
# Malformed keys are skipped with a warning; they never abort parsing.
# -----------------------------------------------------------------------------

import re
from typing import Any, Callable, Optional

from rich.console import Console

from src.domain.models import Port

console = Console(stderr=True)

# Exposed ports live under one of these paths, tried in order
EXPOSED_PORT_PATHS = (
    ("dockerImageMetadata", "Config", "ExposedPorts"),
    ("dockerImageMetadata", "ContainerConfig", "ExposedPorts"),
)

DEFAULT_PROTOCOL = "tcp"

# Leading ASCII digits only: "8080abc" reads as 8080, "1_000" as 1
LEADING_INT_RE = re.compile(r"\s*([+-]?[0-9]+)")


def _warn(message: str) -> None:
    console.print(f"[yellow][PORTS] {message}[/yellow]")


def _lookup(data: Any, path: tuple[str, ...]) -> Any:
    for key in path:
        if not isinstance(data, dict):
            return None
        data = data.get(key)
    return data


def exposed_ports(image: Optional[dict]) -> dict:
    """Return the first non-empty ExposedPorts mapping of the image, or {}."""
    for path in EXPOSED_PORT_PATHS:
        spec = _lookup(image, path)
        if isinstance(spec, dict) and spec:
            return spec
    return {}


def parse_ports(
    image: Optional[dict], warn: Optional[Callable[[str], None]] = None
) -> list[Port]:
    """
    Parse the exposed ports of an image into Port records.

    Args:
        image: Image metadata (e.g. an ImageStreamImage).
        warn: Receives a message for each skipped key. Defaults to the console.

    Returns:
        Ports sorted ascending by container port. The sort is stable, so
        entries sharing a port number keep their metadata order.
    """
    warn = warn or _warn
    image_name = _lookup(image, ("metadata", "name"))

    ports = []
    for key in exposed_ports(image):
        parts = str(key).split("/")
        if len(parts) == 1:
            parts.append(DEFAULT_PROTOCOL)

        match = LEADING_INT_RE.match(parts[0])
        container_port = int(match.group(1)) if match else None

        if container_port is None or container_port <= 0:
            warn(f"Container port {parts[0]} is not a number for image {image_name}")
            continue

        ports.append(Port(container_port=container_port, protocol=parts[1]))

    ports.sort(key=lambda port: port.container_port)
    return ports
