"""Settings for batch_resize, loaded from environment variables.

Every field can be set with a BATCH_RESIZE_ prefixed variable or in a .env
file, e.g. BATCH_RESIZE_SCALE=0.5. CLI options override these values.
"""

import os
from functools import lru_cache
from pathlib import Path

from pydantic import Field, field_validator
from pydantic_settings import BaseSettings, SettingsConfigDict

from .backends.pillow import RESAMPLE_FILTERS


def default_max_concurrency() -> int:
    """Two workers per logical processor."""
    return (os.cpu_count() or 1) * 2


class Settings(BaseSettings):
    """Batch resize settings."""

    model_config = SettingsConfigDict(
        env_prefix="BATCH_RESIZE_",
        env_file=".env",
        env_file_encoding="utf-8",
        case_sensitive=False,
        extra="ignore",
    )

    # Resize
    scale: float = Field(default=2.0, gt=0, allow_inf_nan=False)
    resample: str = "lanczos"

    # Paths
    source_path: Path = Path("images")
    dest_path: Path = Path("output")

    # Concurrency (None = derive from processor count)
    max_concurrency: int | None = Field(default=None, ge=1)
    timeout_seconds: float | None = Field(default=None, gt=0)

    # JPEG output
    jpeg_quality: int = Field(default=85, ge=1, le=95)
    background_color: tuple[int, int, int] = (0, 0, 0)

    @field_validator("resample")
    @classmethod
    def _known_filter(cls, value: str) -> str:
        value = value.lower()
        if value not in RESAMPLE_FILTERS:
            raise ValueError(f"Unknown resample filter: {value}. Available: {', '.join(RESAMPLE_FILTERS)}")
        return value

    @field_validator("background_color")
    @classmethod
    def _valid_color(cls, value: tuple[int, int, int]) -> tuple[int, int, int]:
        if any(not 0 <= channel <= 255 for channel in value):
            raise ValueError(f"Background color channels must be 0-255, got {value}")
        return value

    @property
    def effective_max_concurrency(self) -> int:
        """Worker pool size for concurrent passes."""
        if self.max_concurrency is not None:
            return self.max_concurrency
        return default_max_concurrency()


@lru_cache
def get_settings() -> Settings:
    """Get cached settings instance."""
    return Settings()
