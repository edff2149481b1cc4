"""WebP output provider."""

from ..constants import DEFAULT_QUALITY
from .base import PillowOutputProvider


class WebPOutputProvider(PillowOutputProvider):
    """Output provider for lossy WebP format."""

    def __init__(self, path: str = "", quality: int = DEFAULT_QUALITY):
        super().__init__(path)
        self.quality = quality

    @property
    def output_format(self) -> str:
        return "webp"

    @property
    def save_options(self) -> dict[str, object]:
        return {
            "lossless": False,
            "quality": self.quality,
            "method": 4,
        }
