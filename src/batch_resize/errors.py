"""Error kinds raised by the resize pipeline.

Per-file errors (decode, dimensions, resample, write, collision, timeout) are
caught by the scheduler and turned into task outcomes. Directory-level errors
(missing source root, unusable output area) propagate to the caller.
"""


class ResizeError(Exception):
    """Base class for all batch_resize errors."""

    pass


class DirectoryNotFound(ResizeError, FileNotFoundError):
    """Raised when the source root does not exist or is not a directory."""

    pass


class OutputAreaError(ResizeError):
    """Raised when the output directory cannot be created or cleared."""

    pass


class DecodeError(ResizeError):
    """Raised when a source file is unreadable, corrupt, or not a supported image."""

    pass


class InvalidDimensions(ResizeError, ValueError):
    """Raised for non-positive dimensions or scale, or a target smaller than 1px."""

    pass


class ResampleError(ResizeError):
    """Raised when resampling fails or yields a buffer of the wrong size."""

    pass


class WriteError(ResizeError):
    """Raised when a resized image cannot be written to its destination."""

    pass


class DestinationCollision(ResizeError):
    """Raised when two sources map to the same output file."""

    pass


class PassTimeout(ResizeError):
    """Raised for tasks that never started because the pass timed out."""

    pass
