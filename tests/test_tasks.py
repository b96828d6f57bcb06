"""Tests for resize task planning."""

import pytest

from batch_resize.discovery import find_images
from batch_resize.models import Dimensions, TaskStatus
from batch_resize.tasks import build_tasks
from tests.conftest import write_fake_image


@pytest.mark.unit
def test_builds_task_per_source(source_dir, output_area, fake_codec):
    write_fake_image(source_dir / "photo.png", 100, 50)

    plan = build_tasks(find_images(source_dir), 2.0, output_area, fake_codec)

    assert plan.skipped == []
    [task] = plan.tasks
    assert task.source == source_dir / "photo.png"
    assert task.source_size == Dimensions(100, 50)
    assert task.target_size == Dimensions(200, 100)
    assert task.destination == output_area.root / "photo.jpg"


@pytest.mark.unit
def test_undecodable_file_skipped(source_dir, output_area, fake_codec):
    write_fake_image(source_dir / "good.png", 10, 10)
    (source_dir / "corrupt.png").write_bytes(b"\x89PNG garbage")

    plan = build_tasks(find_images(source_dir), 1.0, output_area, fake_codec)

    assert [task.source.name for task in plan.tasks] == ["good.png"]
    [skipped] = plan.skipped
    assert skipped.source.name == "corrupt.png"
    assert skipped.status == TaskStatus.SKIPPED
    assert skipped.error_kind == "DecodeError"


@pytest.mark.unit
def test_zero_area_target_skipped(source_dir, output_area, fake_codec):
    write_fake_image(source_dir / "wide.png", 100, 1)
    write_fake_image(source_dir / "square.png", 100, 100)

    plan = build_tasks(find_images(source_dir), 0.5, output_area, fake_codec)

    assert [task.source.name for task in plan.tasks] == ["square.png"]
    assert plan.skipped[0].source.name == "wide.png"
    assert plan.skipped[0].error_kind == "InvalidDimensions"


@pytest.mark.unit
@pytest.mark.parametrize("scale", [0.0, -2.0, float("inf"), float("nan")])
def test_unusable_scale_skips_every_file(source_dir, output_area, fake_codec, scale):
    write_fake_image(source_dir / "a.png", 10, 10)
    write_fake_image(source_dir / "b.png", 10, 10)

    plan = build_tasks(find_images(source_dir), scale, output_area, fake_codec)

    assert plan.tasks == []
    assert [outcome.error_kind for outcome in plan.skipped] == ["InvalidDimensions", "InvalidDimensions"]


@pytest.mark.unit
def test_destination_collision_skips_later_source(source_dir, output_area, fake_codec):
    write_fake_image(source_dir / "a.jpg", 10, 10)
    write_fake_image(source_dir / "a.png", 10, 10)

    plan = build_tasks(find_images(source_dir), 1.0, output_area, fake_codec)

    assert [task.source.name for task in plan.tasks] == ["a.jpg"]
    [skipped] = plan.skipped
    assert skipped.source.name == "a.png"
    assert skipped.error_kind == "DestinationCollision"
    assert skipped.destination == output_area.root / "a.jpg"


@pytest.mark.unit
def test_collision_across_subdirectories_and_case(source_dir, output_area, fake_codec):
    """Destination names compare case-insensitively on every filesystem, not just case-folding ones."""
    write_fake_image(source_dir / "one" / "Photo.png", 10, 10)
    write_fake_image(source_dir / "two" / "photo.jpeg", 10, 10)

    plan = build_tasks(find_images(source_dir), 1.0, output_area, fake_codec)

    assert len(plan.tasks) == 1
    assert plan.skipped[0].error_kind == "DestinationCollision"


@pytest.mark.unit
def test_invalid_file_does_not_claim_destination(source_dir, output_area, fake_codec):
    (source_dir / "a.jpg").write_text("not an image")
    write_fake_image(source_dir / "a.png", 10, 10)

    plan = build_tasks(find_images(source_dir), 1.0, output_area, fake_codec)

    assert [task.source.name for task in plan.tasks] == ["a.png"]
    assert plan.skipped[0].error_kind == "DecodeError"


@pytest.mark.unit
def test_total(source_dir, output_area, fake_codec):
    write_fake_image(source_dir / "a.png", 10, 10)
    (source_dir / "b.png").write_text("bad")

    plan = build_tasks(find_images(source_dir), 1.0, output_area, fake_codec)

    assert plan.total == 2
