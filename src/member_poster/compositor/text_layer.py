"""SVG text block for the footer band, rasterized with cairosvg."""

from io import BytesIO
from xml.sax.saxutils import escape

import cairosvg
from PIL import Image

from ..config import PosterConfig
from ..constants import TEXT_LINE_COUNT
from ..errors import CompositeError
from ..models import MemberProfile
from .geometry import GeometryPlan


def _hex(rgb: tuple[int, int, int]) -> str:
    return f"#{rgb[0]:02x}{rgb[1]:02x}{rgb[2]:02x}"


def _num(value: float) -> str:
    if abs(value - round(value)) < 1e-9:
        return str(int(round(value)))
    return f"{value:.2f}".rstrip("0").rstrip(".")


def footer_text_lines(member: MemberProfile, config: PosterConfig) -> tuple[str, str, str, str]:
    """Return the four footer lines in top-to-bottom order."""
    return (
        member.name.upper(),
        f"{member.designation} | {config.brand_name}",
        f"Phone No: {member.phone}",
        config.credential_caption,
    )


def line_baselines(plan: GeometryPlan) -> list[float]:
    """Baseline y for each line; the block is centered vertically."""
    first = plan.vertical_padding + plan.font_size
    return [first + index * plan.line_spacing for index in range(TEXT_LINE_COUNT)]


def build_footer_svg(member: MemberProfile, plan: GeometryPlan, config: PosterConfig) -> str:
    """
    Build the SVG document for the text layer.

    The canvas is text_width x footer_height with a transparent background.
    Lines are left-aligned, bold, and filled with a horizontal gradient. Long
    values overflow the canvas rather than wrap.
    """
    start, end = config.text_gradient
    text_elements = [
        f'<text x="0" y="{_num(y)}" class="t">{escape(line)}</text>'
        for line, y in zip(footer_text_lines(member, config), line_baselines(plan))
    ]
    parts = [
        '<?xml version="1.0" encoding="UTF-8"?>',
        f'<svg xmlns="http://www.w3.org/2000/svg" width="{plan.text_width}" '
        f'height="{plan.footer_height}" viewBox="0 0 {plan.text_width} {plan.footer_height}">',
        "<defs>",
        '<linearGradient id="gradText" x1="0%" y1="0%" x2="100%" y2="0%">',
        f'<stop offset="0%" stop-color="{_hex(start)}" stop-opacity="1"/>',
        f'<stop offset="100%" stop-color="{_hex(end)}" stop-opacity="1"/>',
        "</linearGradient>",
        "</defs>",
        "<style>",
        f".t {{ font-family: {escape(config.font_family)}; font-size: {plan.font_size}px; "
        "font-weight: bold; fill: url(#gradText); text-anchor: start; }",
        "</style>",
        *text_elements,
        "</svg>",
    ]
    return "\n".join(parts)


def render_text_layer(member: MemberProfile, plan: GeometryPlan, config: PosterConfig) -> Image.Image:
    """
    Rasterize the footer text into an RGBA image of text_width x footer_height.

    Raises:
        CompositeError: If the SVG cannot be rasterized
    """
    svg = build_footer_svg(member, plan, config)
    try:
        png_bytes = cairosvg.svg2png(
            bytestring=svg.encode("utf-8"),
            output_width=plan.text_width,
            output_height=plan.footer_height,
        )
        layer = Image.open(BytesIO(png_bytes))
        layer.load()
    except (ValueError, OSError, SyntaxError, MemoryError) as e:
        raise CompositeError(f"Failed to rasterize text layer: {e}") from e

    layer = layer.convert("RGBA")
    if layer.size != (plan.text_width, plan.footer_height):
        layer = layer.resize((plan.text_width, plan.footer_height), Image.Resampling.LANCZOS)
    return layer
