"""Output providers for markup snapshots."""

from dataclasses import dataclass
from pathlib import Path

from .base import OutputProvider
from .html_provider import HtmlOutputProvider
from .markup_inject_provider import MarkupInjectOutputProvider
from .svg_provider import SvgOutputProvider


@dataclass(frozen=True)
class OutputFormatSpec:
    extensions: tuple[str, ...]
    media_type: str
    provider_class: type[OutputProvider]


_OUTPUT_FORMATS: dict[str, OutputFormatSpec] = {
    "svg": OutputFormatSpec(
        extensions=(".svg",),
        media_type="image/svg+xml",
        provider_class=SvgOutputProvider,
    ),
    "html": OutputFormatSpec(
        extensions=(".html", ".htm"),
        media_type="text/html",
        provider_class=HtmlOutputProvider,
    ),
}


def resolve_output_provider(file_path: str) -> OutputProvider:
    """
    Resolve the appropriate output provider based on file extension.

    Args:
        file_path: Output file path (extension determines format)

    Returns:
        An OutputProvider instance

    Raises:
        ValueError: If file extension is not supported
    """
    ext = Path(file_path).suffix.lower()
    spec = _output_spec_from_extension(ext)
    return spec.provider_class(file_path)


def create_output_provider(output_format: str, path: str = "") -> OutputProvider:
    """Create a provider for a supported output format name."""
    spec = _output_spec_from_format(output_format)
    return spec.provider_class(path)


def supported_output_formats() -> tuple[str, ...]:
    """Return supported output format names."""
    return tuple(_OUTPUT_FORMATS.keys())


def media_type_for_output_format(output_format: str) -> str:
    """Resolve media type for a supported output format."""
    spec = _output_spec_from_format(output_format)
    return spec.media_type


def _output_spec_from_extension(ext: str) -> OutputFormatSpec:
    for spec in _OUTPUT_FORMATS.values():
        if ext in spec.extensions:
            return spec
    supported = ", ".join(
        extension for spec in _OUTPUT_FORMATS.values() for extension in spec.extensions
    )
    raise ValueError(f"Unsupported output format: {ext}. Supported formats: {supported}")


def _output_spec_from_format(output_format: str) -> OutputFormatSpec:
    spec = _OUTPUT_FORMATS.get(output_format.lower())
    if spec is not None:
        return spec
    supported = ", ".join(supported_output_formats())
    raise ValueError(f"Invalid format. Choose from: {supported}")


__all__ = [
    "OutputFormatSpec",
    "OutputProvider",
    "HtmlOutputProvider",
    "MarkupInjectOutputProvider",
    "SvgOutputProvider",
    "resolve_output_provider",
    "create_output_provider",
    "supported_output_formats",
    "media_type_for_output_format",
]
