"""Data models for batch resize passes.

Sizes are always (width, height) in pixels. Target sizes come from truncating
source size times scale toward zero, so a 101x51 image at scale 0.5 becomes
50x25.
"""

import math
from dataclasses import dataclass, field
from enum import Enum
from pathlib import Path

from .errors import InvalidDimensions


class PassMode(str, Enum):
    """Execution strategy for a pass."""

    SEQUENTIAL = "sequential"
    CONCURRENT = "concurrent"


class TaskStatus(str, Enum):
    """Final state of one source file within a pass."""

    SUCCESS = "success"
    SKIPPED = "skipped"
    FAILED = "failed"


@dataclass(frozen=True)
class Dimensions:
    """Image size in pixels.

    Attributes:
        width: Width in pixels, must be >= 1
        height: Height in pixels, must be >= 1
    """

    width: int
    height: int

    def __post_init__(self) -> None:
        if self.width < 1 or self.height < 1:
            raise InvalidDimensions(f"Invalid dimensions: {self.width}x{self.height}")

    def as_tuple(self) -> tuple[int, int]:
        """Return (width, height), the form Pillow expects."""
        return (self.width, self.height)

    def scaled(self, scale: float) -> "Dimensions":
        """Return these dimensions multiplied by scale, truncated toward zero.

        Raises:
            InvalidDimensions: If scale <= 0 or either result is smaller than 1px
        """
        return compute_target_dimensions(self, scale)

    def __str__(self) -> str:
        return f"{self.width}×{self.height}"


def compute_target_dimensions(source: Dimensions, scale: float) -> Dimensions:
    """Compute the resize target for a source size and scale factor.

    Args:
        source: Source image dimensions
        scale: Positive scale factor (2.0 doubles both sides)

    Returns:
        Target dimensions

    Raises:
        InvalidDimensions: If scale is not a positive finite number or a target side would be 0px
    """
    if not scale > 0:
        raise InvalidDimensions(f"Scale must be positive, got {scale}")
    if not math.isfinite(scale):
        raise InvalidDimensions(f"Scale must be finite, got {scale}")

    target_width = int(source.width * scale)
    target_height = int(source.height * scale)
    if target_width < 1 or target_height < 1:
        raise InvalidDimensions(
            f"Scale {scale} maps {source} to {target_width}x{target_height}, which has zero area"
        )
    return Dimensions(target_width, target_height)


def improvement_percent(sequential_seconds: float, concurrent_seconds: float) -> float:
    """Percentage of wall-clock time saved by the concurrent pass.

    >>> improvement_percent(1.0, 0.4)
    60.0
    """
    if sequential_seconds <= 0:
        return 0.0
    return (sequential_seconds - concurrent_seconds) / sequential_seconds * 100


@dataclass(frozen=True)
class ResizeTask:
    """One unit of work: resize source into destination.

    Attributes:
        source: Path to the input image
        source_size: Dimensions read from the input header
        target_size: Dimensions of the image to write
        destination: Output file path inside the output area
    """

    source: Path
    source_size: Dimensions
    target_size: Dimensions
    destination: Path


@dataclass(frozen=True)
class TaskOutcome:
    """What happened to one source file.

    Attributes:
        source: Path to the input image
        status: success, skipped (rejected before scheduling) or failed (error during the pass)
        destination: Output path, when one was assigned
        output_size: Size of the written image on success
        error_kind: Error class name for skipped/failed files
        reason: Human-readable error message for skipped/failed files
    """

    source: Path
    status: TaskStatus
    destination: Path | None = None
    output_size: Dimensions | None = None
    error_kind: str | None = None
    reason: str | None = None

    @classmethod
    def from_error(cls, source: Path, status: TaskStatus, error: BaseException, destination: Path | None = None):
        """Build a skipped/failed outcome from an exception."""
        return cls(
            source=source,
            status=status,
            destination=destination,
            error_kind=type(error).__name__,
            reason=str(error),
        )


@dataclass
class PassResult:
    """Outcome of one full pass over a task plan.

    Outcomes hold one entry per source file: skipped files from planning first,
    then scheduled tasks in plan order regardless of completion order.
    """

    mode: PassMode
    outcomes: list[TaskOutcome] = field(default_factory=list)
    elapsed_seconds: float = 0.0

    def _count(self, status: TaskStatus) -> int:
        return sum(1 for outcome in self.outcomes if outcome.status == status)

    @property
    def succeeded(self) -> int:
        return self._count(TaskStatus.SUCCESS)

    @property
    def skipped(self) -> int:
        return self._count(TaskStatus.SKIPPED)

    @property
    def failed(self) -> int:
        return self._count(TaskStatus.FAILED)

    @property
    def output_names(self) -> list[str]:
        """Sorted file names written by this pass."""
        return sorted(
            outcome.destination.name
            for outcome in self.outcomes
            if outcome.status == TaskStatus.SUCCESS and outcome.destination is not None
        )


@dataclass
class BenchmarkResult:
    """Sequential and concurrent passes over the same task plan."""

    sequential: PassResult
    concurrent: PassResult

    @property
    def elapsed_sequential(self) -> float:
        return self.sequential.elapsed_seconds

    @property
    def elapsed_concurrent(self) -> float:
        return self.concurrent.elapsed_seconds

    @property
    def improvement_percent(self) -> float:
        return improvement_percent(self.elapsed_sequential, self.elapsed_concurrent)
