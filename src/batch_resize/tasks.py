"""Resize task planning.

A plan is built once from a discovery snapshot and reused for every pass, so
sequential and concurrent runs always see the same task set.
"""

import logging
from collections.abc import Iterable
from dataclasses import dataclass, field
from pathlib import Path

from .backends.base import ImageCodec
from .errors import DecodeError, DestinationCollision, InvalidDimensions
from .models import ResizeTask, TaskOutcome, TaskStatus, compute_target_dimensions
from .output import OutputArea

logger = logging.getLogger(__name__)


@dataclass
class TaskPlan:
    """Tasks to schedule plus files rejected while planning."""

    tasks: list[ResizeTask] = field(default_factory=list)
    skipped: list[TaskOutcome] = field(default_factory=list)

    @property
    def total(self) -> int:
        return len(self.tasks) + len(self.skipped)


def build_tasks(
    sources: Iterable[Path],
    scale: float,
    output_area: OutputArea,
    codec: ImageCodec,
) -> TaskPlan:
    """Build one ResizeTask per usable source file.

    Each source is probed for its dimensions. Files that cannot be decoded,
    whose target would be smaller than 1px, or whose destination is already
    claimed by an earlier source are recorded as skipped instead of aborting
    the batch.

    Args:
        sources: Source image paths, in the order collisions should be resolved
        scale: Scale factor applied to both sides
        output_area: Output directory that names destinations
        codec: Codec used to read source dimensions

    Returns:
        TaskPlan with tasks and skipped outcomes
    """
    plan = TaskPlan()
    # Keyed case-insensitively: photo.png and Photo.jpg collide on macOS/Windows
    claimed: dict[str, Path] = {}

    for source in sources:
        try:
            source_size = codec.read_dimensions(source)
            target_size = compute_target_dimensions(source_size, scale)
        except (DecodeError, InvalidDimensions) as e:
            logger.warning(f"Skipping {source}: {e}")
            plan.skipped.append(TaskOutcome.from_error(source, TaskStatus.SKIPPED, e))
            continue

        destination = output_area.destination_for(source)
        # Case-insensitive on every filesystem so outputs stay portable
        key = destination.name.casefold()
        if key in claimed:
            error = DestinationCollision(
                f"{source.name} and {claimed[key].name} both map to {destination.name}"
            )
            logger.warning(f"Skipping {source}: {error}")
            plan.skipped.append(TaskOutcome.from_error(source, TaskStatus.SKIPPED, error, destination))
            continue

        claimed[key] = source
        plan.tasks.append(
            ResizeTask(
                source=source,
                source_size=source_size,
                target_size=target_size,
                destination=destination,
            )
        )

    logger.info(f"Planned {len(plan.tasks)} tasks, skipped {len(plan.skipped)} files")
    return plan
