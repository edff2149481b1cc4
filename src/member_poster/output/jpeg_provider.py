"""JPEG output provider."""

from ..constants import DEFAULT_QUALITY
from .base import PillowOutputProvider


class JpegOutputProvider(PillowOutputProvider):
    """Output provider for JPEG format."""

    def __init__(self, path: str = "", quality: int = DEFAULT_QUALITY):
        super().__init__(path)
        self.quality = quality

    @property
    def output_format(self) -> str:
        return "jpeg"

    @property
    def save_options(self) -> dict[str, object]:
        return {"quality": self.quality, "optimize": False, "subsampling": 0}
