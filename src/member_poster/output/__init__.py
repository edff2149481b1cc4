"""Output providers for different poster formats."""

from dataclasses import dataclass
from pathlib import Path

from ..constants import DEFAULT_QUALITY
from .base import OutputProvider, PillowOutputProvider
from .jpeg_provider import JpegOutputProvider
from .webp_provider import WebPOutputProvider


@dataclass(frozen=True)
class OutputFormatSpec:
    extension: str
    media_type: str
    provider_class: type[PillowOutputProvider]


_OUTPUT_FORMATS: dict[str, OutputFormatSpec] = {
    "jpeg": OutputFormatSpec(
        extension=".jpg",
        media_type="image/jpeg",
        provider_class=JpegOutputProvider,
    ),
    "webp": OutputFormatSpec(
        extension=".webp",
        media_type="image/webp",
        provider_class=WebPOutputProvider,
    ),
}

_FORMAT_ALIASES = {"jpg": "jpeg"}


def provider_for_format(
    output_format: str,
    file_path: str | Path = "",
    quality: int = DEFAULT_QUALITY,
) -> OutputProvider:
    """Build the provider for a named format, optionally bound to a path."""
    spec = _output_spec_from_format(output_format)
    return spec.provider_class(str(file_path), quality=quality)


def supported_output_formats() -> tuple[str, ...]:
    """Return supported output format names."""
    return tuple(_OUTPUT_FORMATS.keys())


def media_type_for_output_format(output_format: str) -> str:
    """Resolve media type for a supported output format."""
    spec = _output_spec_from_format(output_format)
    return spec.media_type


def output_path_for_format(output_format: str, base_name: str = "poster") -> str:
    """Build an output path from an output format name."""
    spec = _output_spec_from_format(output_format)
    return f"{base_name}{spec.extension}"


def _output_spec_from_format(output_format: str) -> OutputFormatSpec:
    name = output_format.lower()
    spec = _OUTPUT_FORMATS.get(_FORMAT_ALIASES.get(name, name))
    if spec is not None:
        return spec
    supported = ", ".join(supported_output_formats())
    raise ValueError(f"Invalid format. Choose from: {supported}")


__all__ = [
    "OutputFormatSpec",
    "OutputProvider",
    "PillowOutputProvider",
    "JpegOutputProvider",
    "WebPOutputProvider",
    "provider_for_format",
    "supported_output_formats",
    "media_type_for_output_format",
    "output_path_for_format",
]
