"""Runtime configuration passed explicitly into the poster pipeline and mailer."""

import os
from dataclasses import dataclass, replace

from . import constants
from .errors import MailConfigError

RGB = tuple[int, int, int]


@dataclass(frozen=True)
class PosterConfig:
    """Layout ratios, spacing, colors and encoding options for one poster run."""

    canonical_width: int = constants.CANONICAL_WIDTH
    photo_ratio: float = constants.PHOTO_RATIO
    font_ratio: float = constants.FONT_RATIO
    text_ratio: float = constants.TEXT_RATIO
    logo_ratio: float = constants.LOGO_RATIO
    left_margin: int = constants.LEFT_MARGIN
    layer_gap: int = constants.LAYER_GAP
    divider_width: int = constants.DIVIDER_WIDTH
    line_gap: int = constants.LINE_GAP
    footer_padding: int = constants.FOOTER_PADDING
    footer_background: RGB = constants.FOOTER_BACKGROUND
    canvas_background: RGB = constants.CANVAS_BACKGROUND
    divider_color: RGB = constants.DIVIDER_COLOR
    text_gradient: tuple[RGB, RGB] = constants.TEXT_GRADIENT
    font_family: str = constants.FONT_FAMILY
    brand_name: str = constants.BRAND_NAME
    credential_caption: str = constants.CREDENTIAL_CAPTION
    output_format: str = constants.DEFAULT_OUTPUT_FORMAT
    quality: int = constants.DEFAULT_QUALITY

    def with_overrides(self, **changes: object) -> "PosterConfig":
        """Return a copy with the given fields replaced."""
        return replace(self, **changes)


@dataclass(frozen=True)
class MailSettings:
    """SMTP account used to deliver posters."""

    sender: str
    password: str
    host: str = "smtp.gmail.com"
    port: int = 465

    @classmethod
    def from_env(cls) -> "MailSettings":
        """
        Build settings from environment variables.

        Reads EMAIL and APP_PASSWORD (required) plus SMTP_HOST and SMTP_PORT.
        Callers load the .env file beforehand.

        Raises:
            MailConfigError: If the credentials are missing
        """
        sender = os.getenv("EMAIL")
        password = os.getenv("APP_PASSWORD")
        if not sender or not password:
            raise MailConfigError(
                "Email credentials not configured. "
                "Set EMAIL and APP_PASSWORD in the environment or .env file."
            )
        port_text = os.getenv("SMTP_PORT", "465")
        try:
            port = int(port_text)
        except ValueError:
            raise MailConfigError(f"SMTP_PORT must be an integer (got '{port_text}')")
        return cls(
            sender=sender,
            password=password,
            host=os.getenv("SMTP_HOST", "smtp.gmail.com"),
            port=port,
        )
