"""Poster compositing stages: geometry planning, layer rendering and assembly."""

from .footer import compose_footer, stack_poster
from .geometry import GeometryPlan, plan_geometry
from .image_layers import (
    circle_mask,
    circular_photo,
    load_image,
    normalize_logo,
    resize_template,
)
from .text_layer import build_footer_svg, footer_text_lines, render_text_layer

__all__ = [
    "GeometryPlan",
    "plan_geometry",
    "build_footer_svg",
    "footer_text_lines",
    "render_text_layer",
    "load_image",
    "resize_template",
    "circle_mask",
    "circular_photo",
    "normalize_logo",
    "compose_footer",
    "stack_poster",
]
