"""Resolution of the image the build pipeline pushes and the deployment runs."""

from typing import Optional

from src.domain.models import ImageSpec, NewAppInput


def resolve_image_spec(app: NewAppInput, tag: str = "latest") -> Optional[ImageSpec]:
    """
    Decide the output image of the build pipeline.

    A pipeline is only generated when the descriptor carries a source URL,
    so without one there is no image to resolve and None is returned.
    """
    if app.build_config.source_url is None:
        return None
    return ImageSpec(name=app.name, tag=tag, kind="ImageStreamTag")


def format_image_spec(spec: ImageSpec) -> str:
    """Canonical "name:tag" reference."""
    return f"{spec.name}:{spec.tag}"
