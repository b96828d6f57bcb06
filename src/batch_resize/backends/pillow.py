"""Pillow implementations of the codec and resampler interfaces."""

from pathlib import Path

from PIL import Image, UnidentifiedImageError

from ..errors import DecodeError, InvalidDimensions, ResampleError
from ..models import Dimensions
from .base import ImageCodec, Resampler

RESAMPLE_FILTERS = {
    "lanczos": Image.Resampling.LANCZOS,
    "bicubic": Image.Resampling.BICUBIC,
    "bilinear": Image.Resampling.BILINEAR,
}

# Modes the resampler handles natively with high-quality filters
_NATIVE_MODES = ("RGB", "RGBA", "L")


class PillowCodec(ImageCodec):
    """Decode PNG/JPEG sources with Pillow and encode results as JPEG.

    JPEG has no alpha channel, so images with transparency are flattened onto
    background_color before saving.
    """

    output_extension = ".jpg"

    def __init__(self, quality: int = 85, background_color: tuple[int, int, int] = (0, 0, 0)):
        self.quality = quality
        self.background_color = background_color

    def read_dimensions(self, path: Path) -> Dimensions:
        try:
            with Image.open(path) as img:
                width, height = img.size
        except (UnidentifiedImageError, OSError, Image.DecompressionBombError) as e:
            raise DecodeError(f"Cannot read {path.name}: {e}") from e

        try:
            return Dimensions(width, height)
        except InvalidDimensions as e:
            raise DecodeError(f"Cannot read {path.name}: {e}") from e

    def decode(self, path: Path) -> Image.Image:
        try:
            with Image.open(path) as img:
                img.load()
                if img.mode in _NATIVE_MODES:
                    return img.copy()
                if img.mode in ("LA", "PA") or "transparency" in img.info:
                    return img.convert("RGBA")
                return img.convert("RGB")
        except (UnidentifiedImageError, OSError, ValueError, Image.DecompressionBombError) as e:
            raise DecodeError(f"Cannot decode {path.name}: {e}") from e

    def encode(self, buffer: Image.Image, path: Path) -> None:
        if buffer.mode == "RGBA":
            canvas = Image.new("RGB", buffer.size, self.background_color)
            canvas.paste(buffer, mask=buffer.getchannel("A"))
            buffer = canvas
        elif buffer.mode not in ("RGB", "L"):
            buffer = buffer.convert("RGB")

        # Explicit format: the path may carry a temporary suffix
        buffer.save(path, format="JPEG", quality=self.quality, optimize=True)

    def buffer_size(self, buffer: Image.Image) -> Dimensions:
        width, height = buffer.size
        return Dimensions(width, height)


class PillowResampler(Resampler):
    """Resize with a Pillow filter (LANCZOS by default)."""

    def __init__(self, filter_name: str = "lanczos"):
        try:
            self.filter = RESAMPLE_FILTERS[filter_name.lower()]
        except KeyError:
            raise ValueError(
                f"Unknown resample filter: {filter_name}. Available: {', '.join(RESAMPLE_FILTERS)}"
            ) from None
        self.filter_name = filter_name.lower()

    def resample(self, buffer: Image.Image, target: Dimensions) -> Image.Image:
        try:
            return buffer.resize(target.as_tuple(), resample=self.filter)
        except (ValueError, OSError, MemoryError) as e:
            raise ResampleError(f"Resize to {target} failed: {e}") from e
