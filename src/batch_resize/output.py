"""Output directory management."""

import logging
from pathlib import Path

from .backends.base import ImageCodec, RasterBuffer
from .errors import OutputAreaError, WriteError

logger = logging.getLogger(__name__)

PARTIAL_SUFFIX = ".part"


class OutputArea:
    """Destination directory shared by every task of a pass.

    Destinations are derived 1:1 from source stems and collisions are rejected
    when tasks are planned, so concurrent writes never target the same file.
    """

    def __init__(self, root: Path, output_extension: str = ".jpg"):
        self.root = root
        self.output_extension = output_extension

    def prepare(self) -> None:
        """Make sure the root directory exists.

        Raises:
            OutputAreaError: If the directory cannot be created
        """
        try:
            self.root.mkdir(parents=True, exist_ok=True)
        except OSError as e:
            raise OutputAreaError(f"Cannot create output directory {self.root}: {e}") from e

    def clean(self) -> int:
        """Create the root if missing, otherwise delete everything beneath it.

        Safe to call repeatedly; a second call finds nothing to remove.

        Returns:
            Number of files removed

        Raises:
            OutputAreaError: If the directory cannot be created or cleared
        """
        self.prepare()

        removed = 0
        try:
            # Reverse order visits children before their parent directories
            for path in sorted(self.root.rglob("*"), reverse=True):
                if path.is_dir() and not path.is_symlink():
                    path.rmdir()
                else:
                    path.unlink()
                    removed += 1
        except OSError as e:
            raise OutputAreaError(f"Cannot clear output directory {self.root}: {e}") from e

        if removed:
            logger.info(f"Removed {removed} files from {self.root}")
        return removed

    def destination_for(self, source: Path) -> Path:
        """Output path for a source: <root>/<stem><output extension>."""
        return self.root / f"{source.stem}{self.output_extension}"

    def write(self, destination: Path, buffer: RasterBuffer, codec: ImageCodec) -> Path:
        """Encode buffer to destination.

        The image is written to a temporary sibling and renamed into place,
        so a reader never sees a half-written file.

        Raises:
            WriteError: On any I/O or encode failure
        """
        partial = destination.with_name(destination.name + PARTIAL_SUFFIX)
        try:
            codec.encode(buffer, partial)
            partial.replace(destination)
        except (OSError, ValueError) as e:
            partial.unlink(missing_ok=True)
            raise WriteError(f"Cannot write {destination.name}: {e}") from e
        return destination

    def list_outputs(self) -> list[str]:
        """Sorted names of finished output files."""
        if not self.root.is_dir():
            return []
        return sorted(
            path.name
            for path in self.root.iterdir()
            if path.is_file() and path.suffix.lower() == self.output_extension
        )
