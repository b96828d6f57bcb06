"""Image codec and resampler backends."""

from .base import ImageCodec, RasterBuffer, Resampler
from .pillow import RESAMPLE_FILTERS, PillowCodec, PillowResampler

__all__ = [
    "ImageCodec",
    "RasterBuffer",
    "Resampler",
    "PillowCodec",
    "PillowResampler",
    "RESAMPLE_FILTERS",
]
