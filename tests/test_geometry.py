"""Tests for the footer geometry planner."""

import pytest

from member_poster.compositor import plan_geometry
from member_poster.config import PosterConfig
from member_poster.errors import GeometryError


WIDTHS = [5, 7, 40, 333, 800, 1024, 1600, 4000]


@pytest.mark.parametrize("width", WIDTHS)
def test_plan_dimensions_positive_for_any_width(width):
    """Every size in the plan should be strictly positive for positive widths."""
    plan = plan_geometry(width)

    assert plan.photo_diameter > 0
    assert plan.font_size > 0
    assert plan.text_width > 0
    assert plan.logo_side > 0
    assert plan.divider_width > 0
    assert plan.footer_height > 0
    assert plan.footer_height >= max(plan.photo_diameter, plan.logo_side)
    assert plan.footer_height >= plan.text_block_height


def test_canonical_width_scenario():
    """An 800px template yields the documented footer measurements."""
    plan = plan_geometry(800)

    assert 120 <= plan.photo_diameter <= 144
    assert 17 <= plan.font_size <= 20
    assert 104 <= plan.logo_side <= 144
    assert plan.footer_height >= max(plan.photo_diameter, plan.logo_side) + 20
    assert plan.line_spacing == plan.font_size + 6
    assert plan.text_block_height == 4 * plan.line_spacing


LAYOUT_CASES = [(width, PosterConfig()) for width in WIDTHS] + [
    (width, config)
    for width in (40, 333, 800, 1024, 1600, 4000)
    for config in (PosterConfig(text_ratio=0.45), PosterConfig(logo_ratio=0.2, photo_ratio=0.1))
]


@pytest.mark.parametrize("width, config", LAYOUT_CASES)
def test_layers_ordered_left_to_right_within_width(width, config):
    """Photo, text, divider and logo should not overlap and should fit in the band."""
    plan = plan_geometry(width, config)

    photo_right = plan.photo_xy[0] + plan.photo_diameter
    text_right = plan.text_xy[0] + plan.text_width
    divider_right = plan.divider_xy[0] + plan.divider_width

    assert plan.photo_xy[0] >= 0
    assert photo_right <= plan.text_xy[0]
    assert text_right <= plan.divider_xy[0]
    assert divider_right <= plan.logo_xy[0]
    assert plan.logo_xy[0] + plan.logo_side <= width - plan.photo_xy[0]
    for _, y in (plan.photo_xy, plan.divider_xy, plan.logo_xy):
        assert y >= 0
    assert plan.photo_xy[1] + plan.photo_diameter <= plan.footer_height
    assert plan.logo_xy[1] + plan.logo_side <= plan.footer_height


def test_canonical_layer_offsets():
    """At 800px the layers sit at the documented offsets."""
    plan = plan_geometry(800)

    assert plan.photo_xy[0] == 40
    assert plan.text_xy[0] == 204
    assert plan.divider_xy[0] == 528
    assert plan.logo_xy[0] == 603


@pytest.mark.parametrize("width", [1, 2, 3, 4])
def test_too_narrow_width_rejected(width):
    """Widths that cannot hold every layer raise instead of clipping the logo."""
    with pytest.raises(GeometryError, match="does not fit"):
        plan_geometry(width)


def test_overflowing_config_rejected():
    """A text block wide enough to push the logo past the edge is an error."""
    with pytest.raises(GeometryError, match="does not fit within width 800"):
        plan_geometry(800, PosterConfig(text_ratio=0.7))


def test_vertical_centering():
    """Photo, divider and logo are centered; the divider matches the logo height."""
    plan = plan_geometry(800)

    assert plan.photo_xy[1] == (plan.footer_height - plan.photo_diameter) // 2
    assert plan.logo_xy[1] == (plan.footer_height - plan.logo_side) // 2
    assert plan.divider_height == plan.logo_side
    assert plan.divider_xy[1] == plan.logo_xy[1]
    assert plan.vertical_padding == (plan.footer_height - 4 * plan.line_spacing) / 2


def test_plan_is_deterministic():
    """Identical widths should always produce identical plans."""
    assert plan_geometry(640) == plan_geometry(640)


def test_margins_scale_with_width():
    """Horizontal spacing is defined at the canonical width and scales with it."""
    plan = plan_geometry(1600)

    assert plan.photo_xy[0] == 80
    assert plan.logo_xy[0] + plan.logo_side <= 1600 - 80


@pytest.mark.parametrize("width", [0, -1, -800])
def test_non_positive_width_rejected(width):
    """Non-positive widths are an input error."""
    with pytest.raises(GeometryError, match="must be positive"):
        plan_geometry(width)


def test_config_changes_constants():
    """Plan should follow the ratios and padding in the supplied config."""
    config = PosterConfig(photo_ratio=0.16, line_gap=2, footer_padding=30)
    plan = plan_geometry(800, config)

    assert plan.photo_diameter == 128
    assert plan.line_spacing == plan.font_size + 2
    assert plan.footer_height == max(plan.photo_diameter, plan.text_block_height, plan.logo_side) + 30
