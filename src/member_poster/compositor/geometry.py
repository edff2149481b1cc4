"""Footer layout derived from the resized template width."""

import logging
import math
from dataclasses import dataclass

from ..config import PosterConfig
from ..constants import TEXT_LINE_COUNT
from ..errors import GeometryError

logger = logging.getLogger(__name__)


@dataclass(frozen=True, slots=True)
class GeometryPlan:
    """Pixel measurements and layer offsets for one footer band."""

    width: int
    photo_diameter: int
    font_size: int
    line_spacing: int
    text_width: int
    text_block_height: int
    logo_side: int
    divider_width: int
    divider_height: int
    footer_height: int
    photo_xy: tuple[int, int]
    text_xy: tuple[int, int]
    divider_xy: tuple[int, int]
    logo_xy: tuple[int, int]

    @property
    def vertical_padding(self) -> float:
        """Space above and below the text block inside the footer."""
        return (self.footer_height - self.text_block_height) / 2


def _scaled(value: int, scale: float) -> int:
    return max(0, round(value * scale))


def _centered(outer: int, inner: int) -> int:
    return max(0, (outer - inner) // 2)


def plan_geometry(width: int, config: PosterConfig | None = None) -> GeometryPlan:
    """
    Derive every footer measurement from the template width.

    Horizontal margins and gaps are defined at the canonical width and scale
    with the actual width; every size is at least one pixel. Widths too
    narrow to hold photo, text, divider and logo side by side (under 5px with
    the default ratios) are rejected rather than clipped.

    Args:
        width: Pixel width of the resized template
        config: Layout ratios and spacing

    Returns:
        A complete GeometryPlan

    Raises:
        GeometryError: If width is not positive or the layers do not fit
    """
    config = config or PosterConfig()
    if width <= 0:
        raise GeometryError(f"Template width must be positive (got {width})")
    if config.canonical_width <= 0:
        raise GeometryError(f"Canonical width must be positive (got {config.canonical_width})")

    scale = width / config.canonical_width
    margin = _scaled(config.left_margin, scale)
    gap = _scaled(config.layer_gap, scale)

    photo_diameter = max(1, math.floor(width * config.photo_ratio))
    font_size = max(1, math.floor(photo_diameter * config.font_ratio))
    line_spacing = font_size + max(0, config.line_gap)
    text_width = max(1, math.floor(width * config.text_ratio))
    text_block_height = TEXT_LINE_COUNT * line_spacing
    logo_side = max(1, math.floor(width * config.logo_ratio))
    divider_width = max(1, config.divider_width)
    footer_height = (
        max(photo_diameter, text_block_height, logo_side) + max(0, config.footer_padding)
    )

    photo_x = margin
    text_x = photo_x + photo_diameter + gap
    divider_x = text_x + text_width + gap
    logo_area_x = divider_x + divider_width + gap
    logo_area_width = width - margin - logo_area_x
    if logo_area_width < logo_side:
        raise GeometryError(
            f"Footer layout does not fit within width {width}: "
            f"logo needs {logo_side}px but only {max(0, logo_area_width)}px remain"
        )
    logo_x = logo_area_x + _centered(logo_area_width, logo_side)

    plan = GeometryPlan(
        width=width,
        photo_diameter=photo_diameter,
        font_size=font_size,
        line_spacing=line_spacing,
        text_width=text_width,
        text_block_height=text_block_height,
        logo_side=logo_side,
        divider_width=divider_width,
        divider_height=logo_side,
        footer_height=footer_height,
        photo_xy=(photo_x, _centered(footer_height, photo_diameter)),
        text_xy=(text_x, 0),
        divider_xy=(divider_x, _centered(footer_height, logo_side)),
        logo_xy=(logo_x, _centered(footer_height, logo_side)),
    )
    logger.debug("Planned footer for width %d: %s", width, plan)
    return plan
