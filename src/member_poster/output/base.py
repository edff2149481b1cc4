"""Base class for poster output format providers."""

import os
import tempfile
from abc import ABC, abstractmethod
from io import BytesIO
from pathlib import Path

from PIL import Image

from ..errors import CompositeError, WriteError


class OutputProvider(ABC):
    """Abstract base class for output format providers."""

    def __init__(self, path: str | Path = ""):
        """
        Initialize the provider with an output file path.

        Args:
            path: Path to the output file
        """
        self.path = str(path) if path else ""

    @abstractmethod
    def encode(self, image: Image.Image) -> bytes:
        """
        Encode a finished poster into the output format.

        Args:
            image: The composed poster

        Returns:
            Encoded output as bytes
        """
        raise NotImplementedError

    def write(self, data: bytes) -> Path:
        """
        Write encoded data to the output path in one step.

        Data goes to a temporary file in the target directory which then
        replaces the target, so a failed write never leaves a partial file.

        Args:
            data: Encoded data to write

        Returns:
            The written path

        Raises:
            WriteError: If the path is unset or not writable
        """
        if not self.path:
            raise WriteError("Output path not set")
        target = Path(self.path)
        tmp_name = None
        try:
            fd, tmp_name = tempfile.mkstemp(
                prefix=f".{target.name}.", suffix=".tmp", dir=target.parent or "."
            )
            with os.fdopen(fd, "wb") as f:
                f.write(data)
            os.replace(tmp_name, target)
        except OSError as e:
            if tmp_name is not None and os.path.exists(tmp_name):
                os.remove(tmp_name)
            raise WriteError(f"Cannot write poster to '{target}': {e}") from e
        return target


class PillowOutputProvider(OutputProvider, ABC):
    """Template output provider for Pillow-supported still image formats."""

    @property
    @abstractmethod
    def output_format(self) -> str:
        """Pillow format identifier (for example, ``jpeg`` or ``webp``)."""
        raise NotImplementedError

    def encode(self, image: Image.Image) -> bytes:
        buffer = BytesIO()
        try:
            image.convert("RGB").save(buffer, format=self.output_format, **self.save_options)
        except (OSError, ValueError) as e:
            raise CompositeError(f"Failed to encode {self.output_format.upper()}: {e}") from e
        return buffer.getvalue()

    @property
    def save_options(self) -> dict[str, object]:
        """Additional Pillow ``save`` kwargs for this format."""
        return {}
