"""Source image discovery."""

import logging
from collections.abc import Iterable
from pathlib import Path

from .errors import DirectoryNotFound

logger = logging.getLogger(__name__)

IMAGE_EXTENSIONS = frozenset({".png", ".jpg", ".jpeg"})


def find_images(root: Path, extensions: Iterable[str] = IMAGE_EXTENSIONS) -> list[Path]:
    """Find image files recursively under root.

    Extensions are matched case-insensitively, so "photo.PNG" matches ".png".
    Each file appears once even if several extensions match it.

    Args:
        root: Directory to search
        extensions: File extensions with leading dot (default: .png, .jpg, .jpeg)

    Returns:
        Matching file paths, sorted for stable display

    Raises:
        DirectoryNotFound: If root does not exist or is not a directory
    """
    if not root.is_dir():
        raise DirectoryNotFound(f"Source directory not found: {root}")

    wanted = {ext.lower() for ext in extensions}
    found: dict[Path, Path] = {}
    for path in root.rglob("*"):
        if path.suffix.lower() not in wanted or not path.is_file():
            continue
        found.setdefault(path.resolve(), path)

    images = sorted(found.values())
    logger.info(f"Found {len(images)} images under {root}")
    return images
