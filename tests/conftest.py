"""Shared fixtures: an in-memory codec/resampler pair and real image helpers.

The fake codec treats a source file's text content "WIDTHxHEIGHT" as its
header, so tests can build image trees without encoding real pixels.
"""

import threading
import time
from dataclasses import dataclass
from pathlib import Path

import pytest
from PIL import Image

from batch_resize.backends.base import ImageCodec, Resampler
from batch_resize.errors import DecodeError, ResampleError
from batch_resize.models import Dimensions
from batch_resize.output import OutputArea


@dataclass
class FakeBuffer:
    width: int
    height: int
    origin: str


class FakeCodec(ImageCodec):
    """Codec reading "WxH" text headers and writing "WxH" text outputs.

    Sources whose content is not "WxH" raise DecodeError. Destinations whose
    stem is in fail_writes raise OSError like a full disk would.
    """

    output_extension = ".jpg"

    def __init__(self, fail_writes: set[str] | None = None, fail_decodes: set[str] | None = None):
        self.fail_writes = fail_writes or set()
        self.fail_decodes = fail_decodes or set()

    def _header(self, path: Path) -> tuple[int, int]:
        try:
            width, height = path.read_text().strip().split("x")
            return int(width), int(height)
        except (OSError, ValueError) as e:
            raise DecodeError(f"Cannot read {path.name}: {e}") from e

    def read_dimensions(self, path: Path) -> Dimensions:
        return Dimensions(*self._header(path))

    def decode(self, path: Path) -> FakeBuffer:
        if path.name in self.fail_decodes:
            raise DecodeError(f"Cannot decode {path.name}: truncated")
        width, height = self._header(path)
        return FakeBuffer(width, height, path.name)

    def encode(self, buffer: FakeBuffer, path: Path) -> None:
        if path.name.split(".")[0] in self.fail_writes:
            raise OSError(28, "No space left on device")
        path.write_text(f"{buffer.width}x{buffer.height}")

    def buffer_size(self, buffer: FakeBuffer) -> Dimensions:
        return Dimensions(buffer.width, buffer.height)


class FakeResampler(Resampler):
    """Resampler returning a buffer of the target size.

    Optionally sleeps per call and records the peak number of overlapping calls.
    """

    def __init__(self, delay: float = 0.0, fail_on: set[str] | None = None):
        self.delay = delay
        self.fail_on = fail_on or set()
        self.calls: list[str] = []
        self.in_flight = 0
        self.peak_in_flight = 0
        self._lock = threading.Lock()

    def resample(self, buffer: FakeBuffer, target: Dimensions) -> FakeBuffer:
        with self._lock:
            self.calls.append(buffer.origin)
            self.in_flight += 1
            self.peak_in_flight = max(self.peak_in_flight, self.in_flight)
        try:
            if buffer.origin in self.fail_on:
                raise ResampleError(f"Resize to {target} failed: unsupported")
            if self.delay:
                time.sleep(self.delay)
            return FakeBuffer(target.width, target.height, buffer.origin)
        finally:
            with self._lock:
                self.in_flight -= 1


def write_fake_image(path: Path, width: int, height: int) -> Path:
    """Write a fake-codec source file."""
    path.parent.mkdir(parents=True, exist_ok=True)
    path.write_text(f"{width}x{height}")
    return path


def write_real_image(path: Path, width: int, height: int, mode: str = "RGB") -> Path:
    """Write a real image file; the format follows the suffix."""
    path.parent.mkdir(parents=True, exist_ok=True)
    color = (200, 30, 60, 128) if mode == "RGBA" else (200, 30, 60)
    if mode == "L":
        color = 128
    Image.new(mode, (width, height), color).save(path)
    return path


@pytest.fixture
def fake_codec():
    return FakeCodec()


@pytest.fixture
def fake_resampler():
    return FakeResampler()


@pytest.fixture
def source_dir(tmp_path):
    path = tmp_path / "images"
    path.mkdir()
    return path


@pytest.fixture
def output_area(tmp_path):
    return OutputArea(tmp_path / "output")
