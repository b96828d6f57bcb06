"""Tests for settings loading."""

import os
from pathlib import Path

import pytest
from pydantic import ValidationError

from batch_resize.config import Settings, default_max_concurrency


@pytest.fixture(autouse=True)
def clean_env(monkeypatch, tmp_path):
    for key in list(os.environ):
        if key.startswith("BATCH_RESIZE_"):
            monkeypatch.delenv(key)
    # Keep a stray .env in the working directory out of these tests
    monkeypatch.chdir(tmp_path)


@pytest.mark.unit
def test_defaults():
    settings = Settings()

    assert settings.scale == 2.0
    assert settings.source_path == Path("images")
    assert settings.dest_path == Path("output")
    assert settings.max_concurrency is None
    assert settings.timeout_seconds is None
    assert settings.jpeg_quality == 85
    assert settings.resample == "lanczos"
    assert settings.effective_max_concurrency == default_max_concurrency()


@pytest.mark.unit
def test_default_concurrency_is_multiple_of_processors(monkeypatch):
    monkeypatch.setattr(os, "cpu_count", lambda: 6)
    assert default_max_concurrency() == 12

    monkeypatch.setattr(os, "cpu_count", lambda: None)
    assert default_max_concurrency() == 2


@pytest.mark.unit
def test_environment_overrides(monkeypatch):
    monkeypatch.setenv("BATCH_RESIZE_SCALE", "0.5")
    monkeypatch.setenv("BATCH_RESIZE_MAX_CONCURRENCY", "3")
    monkeypatch.setenv("BATCH_RESIZE_SOURCE_PATH", "/data/in")
    monkeypatch.setenv("BATCH_RESIZE_RESAMPLE", "Bicubic")

    settings = Settings()

    assert settings.scale == 0.5
    assert settings.effective_max_concurrency == 3
    assert settings.source_path == Path("/data/in")
    assert settings.resample == "bicubic"


@pytest.mark.unit
def test_env_file(tmp_path):
    (tmp_path / ".env").write_text("BATCH_RESIZE_JPEG_QUALITY=70\n")

    assert Settings().jpeg_quality == 70


@pytest.mark.unit
@pytest.mark.parametrize(
    "overrides",
    [
        {"scale": 0},
        {"scale": -1.5},
        {"scale": float("inf")},
        {"scale": float("nan")},
        {"max_concurrency": 0},
        {"timeout_seconds": 0},
        {"jpeg_quality": 100},
        {"resample": "cubic-spline"},
        {"background_color": (0, 0, 300)},
    ],
)
def test_invalid_values_rejected(overrides):
    with pytest.raises(ValidationError):
        Settings(**overrides)
