"""Abstract capability interfaces for image decode/encode and resampling."""

from abc import ABC, abstractmethod
from pathlib import Path
from typing import Any

from ..models import Dimensions

# Decoded pixel data. Concrete type belongs to the backend (PIL.Image.Image for Pillow).
RasterBuffer = Any


class ImageCodec(ABC):
    """Reads source images and writes resized ones in the fixed output format."""

    #: Extension (with leading dot) of every file written by encode()
    output_extension: str = ".jpg"

    @abstractmethod
    def read_dimensions(self, path: Path) -> Dimensions:
        """Return the image size without decoding pixel data.

        Raises:
            DecodeError: If the file is not a readable, supported image
        """
        ...

    @abstractmethod
    def decode(self, path: Path) -> RasterBuffer:
        """Decode a source file into an in-memory buffer.

        Raises:
            DecodeError: If the file is not a readable, supported image
        """
        ...

    @abstractmethod
    def encode(self, buffer: RasterBuffer, path: Path) -> None:
        """Write a buffer to path in the output format.

        Raises:
            OSError: On I/O failure (disk full, permission denied)
        """
        ...

    @abstractmethod
    def buffer_size(self, buffer: RasterBuffer) -> Dimensions:
        """Return the dimensions of a decoded buffer."""
        ...


class Resampler(ABC):
    """Whole-image rescale. Implementations must be stateless and thread-safe."""

    @abstractmethod
    def resample(self, buffer: RasterBuffer, target: Dimensions) -> RasterBuffer:
        """Map the full source rectangle onto a new buffer of the target size.

        Raises:
            ResampleError: If the buffer cannot be resampled
        """
        ...
