"""Batch image resizing with a sequential vs. concurrent benchmark."""

from batch_resize.backends import ImageCodec, PillowCodec, PillowResampler, Resampler
from batch_resize.benchmark import BenchmarkRunner
from batch_resize.discovery import IMAGE_EXTENSIONS, find_images
from batch_resize.errors import (
    DecodeError,
    DestinationCollision,
    DirectoryNotFound,
    InvalidDimensions,
    OutputAreaError,
    PassTimeout,
    ResampleError,
    ResizeError,
    WriteError,
)
from batch_resize.models import (
    BenchmarkResult,
    Dimensions,
    PassMode,
    PassResult,
    ResizeTask,
    TaskOutcome,
    TaskStatus,
    compute_target_dimensions,
    improvement_percent,
)
from batch_resize.output import OutputArea
from batch_resize.scheduler import Scheduler, process_task
from batch_resize.tasks import TaskPlan, build_tasks

try:
    from batch_resize._version import __version__, __version_tuple__
except ImportError:
    __version__ = "0.0.0+unknown"
    __version_tuple__ = (0, 0, 0, "unknown", "unknown")

__all__ = [
    "__version__",
    "__version_tuple__",
    # Models
    "Dimensions",
    "ResizeTask",
    "TaskOutcome",
    "TaskStatus",
    "PassMode",
    "PassResult",
    "BenchmarkResult",
    "compute_target_dimensions",
    "improvement_percent",
    # Backends
    "ImageCodec",
    "Resampler",
    "PillowCodec",
    "PillowResampler",
    # Pipeline
    "IMAGE_EXTENSIONS",
    "find_images",
    "TaskPlan",
    "build_tasks",
    "OutputArea",
    "Scheduler",
    "process_task",
    "BenchmarkRunner",
    # Errors
    "ResizeError",
    "DirectoryNotFound",
    "OutputAreaError",
    "DecodeError",
    "InvalidDimensions",
    "ResampleError",
    "WriteError",
    "DestinationCollision",
    "PassTimeout",
]
