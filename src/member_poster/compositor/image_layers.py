"""Raster layers: resized template, circular member photo and flattened logo."""

from io import BytesIO
from pathlib import Path

from PIL import Image, ImageDraw, ImageOps, UnidentifiedImageError

from ..errors import CompositeError, InputDecodeError
from ..models import ImageSource


def load_image(source: ImageSource, role: str) -> Image.Image:
    """
    Open and fully decode an image from a path or byte buffer.

    Args:
        source: Filesystem path or encoded image bytes
        role: What the image is for (template, photo, logo), used in errors

    Raises:
        InputDecodeError: If the source is missing or not a decodable image
    """
    if isinstance(source, (bytes, bytearray)):
        if not source:
            raise InputDecodeError(f"Empty {role} image buffer")
        fp = BytesIO(source)
        label = f"{role} buffer"
    else:
        if not source or not Path(source).is_file():
            raise InputDecodeError(f"{role.capitalize()} image not found: {source!r}")
        fp = source
        label = str(source)

    try:
        with Image.open(fp) as img:
            img.load()
            # Honour camera orientation before any cropping
            return ImageOps.exif_transpose(img)
    except (
        UnidentifiedImageError,
        Image.DecompressionBombError,
        OSError,
        SyntaxError,
        ValueError,
    ) as e:
        raise InputDecodeError(f"Cannot decode {role} image {label}: {e}") from e


def resize_template(source: ImageSource, width: int) -> Image.Image:
    """Resize the template to the canonical width, keeping its aspect ratio."""
    template = load_image(source, "template")
    if template.width <= 0 or template.height <= 0:
        raise InputDecodeError(f"Template image has no pixels: {template.size}")
    height = max(1, round(template.height * width / template.width))
    try:
        return template.convert("RGB").resize((width, height), Image.Resampling.LANCZOS)
    except (ValueError, MemoryError) as e:
        raise CompositeError(f"Failed to resize template: {e}") from e


def circle_mask(diameter: int) -> Image.Image:
    """An 'L' mask with an opaque disc filling a diameter x diameter square."""
    mask = Image.new("L", (diameter, diameter), 0)
    ImageDraw.Draw(mask).ellipse((0, 0, diameter - 1, diameter - 1), fill=255)
    return mask


def circular_photo(source: ImageSource, diameter: int) -> Image.Image:
    """
    Center-crop the photo to a square of the given diameter and clip it to a circle.

    Returns:
        RGBA image whose corners are fully transparent

    Raises:
        InputDecodeError: If the photo cannot be decoded
    """
    photo = load_image(source, "photo")
    try:
        square = ImageOps.fit(
            photo.convert("RGB"),
            (diameter, diameter),
            method=Image.Resampling.LANCZOS,
            centering=(0.5, 0.5),
        )
        square.putalpha(circle_mask(diameter))
    except (ValueError, MemoryError) as e:
        raise CompositeError(f"Failed to mask member photo: {e}") from e
    return square


def normalize_logo(
    source: ImageSource,
    side: int,
    background: tuple[int, int, int],
) -> Image.Image:
    """
    Fit the logo inside a side x side square and flatten it onto the background.

    The aspect ratio is preserved; leftover space is filled with the background
    color. The returned image is RGB with no alpha channel.

    Raises:
        InputDecodeError: If the logo cannot be decoded
    """
    logo = load_image(source, "logo")
    try:
        fitted = ImageOps.contain(logo.convert("RGBA"), (side, side), Image.Resampling.LANCZOS)
        canvas = Image.new("RGB", (side, side), background)
        offset = ((side - fitted.width) // 2, (side - fitted.height) // 2)
        canvas.paste(fitted, offset, fitted)
    except (ValueError, MemoryError) as e:
        raise CompositeError(f"Failed to normalize logo: {e}") from e
    return canvas
