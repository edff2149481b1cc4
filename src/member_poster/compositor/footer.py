"""Footer band assembly and final template + footer stacking."""

from PIL import Image, ImageDraw

from ..config import PosterConfig
from ..errors import CompositeError
from .geometry import GeometryPlan


def _check_size(layer: Image.Image, expected: tuple[int, int], name: str) -> None:
    if layer.size != expected:
        raise CompositeError(f"{name} layer is {layer.size}, expected {expected}")


def compose_footer(
    photo: Image.Image,
    text: Image.Image,
    logo: Image.Image,
    plan: GeometryPlan,
    config: PosterConfig,
) -> Image.Image:
    """
    Paste photo, text, divider and logo onto a blank footer band.

    Layers are placed left to right at the offsets in the plan. Photo and
    text are pasted through their alpha channel.

    Raises:
        CompositeError: If a layer does not match the plan or cannot be pasted
    """
    _check_size(photo, (plan.photo_diameter, plan.photo_diameter), "Photo")
    _check_size(text, (plan.text_width, plan.footer_height), "Text")
    _check_size(logo, (plan.logo_side, plan.logo_side), "Logo")

    try:
        footer = Image.new("RGB", (plan.width, plan.footer_height), config.footer_background)
        footer.paste(photo, plan.photo_xy, photo)
        footer.paste(text, plan.text_xy, text)

        divider_x, divider_y = plan.divider_xy
        ImageDraw.Draw(footer).rectangle(
            (
                divider_x,
                divider_y,
                divider_x + plan.divider_width - 1,
                divider_y + plan.divider_height - 1,
            ),
            fill=config.divider_color,
        )

        footer.paste(logo, plan.logo_xy)
    except (ValueError, MemoryError) as e:
        raise CompositeError(f"Failed to compose footer band: {e}") from e
    return footer


def stack_poster(
    template: Image.Image,
    footer: Image.Image,
    background: tuple[int, int, int] = (255, 255, 255),
) -> Image.Image:
    """
    Place the footer band directly below the template.

    Raises:
        CompositeError: If widths differ or the canvas cannot be allocated
    """
    if template.width != footer.width:
        raise CompositeError(
            f"Footer width {footer.width} does not match template width {template.width}"
        )
    try:
        poster = Image.new("RGB", (template.width, template.height + footer.height), background)
        poster.paste(template, (0, 0))
        poster.paste(footer, (0, template.height))
    except (ValueError, MemoryError) as e:
        raise CompositeError(f"Failed to stack poster: {e}") from e
    return poster
