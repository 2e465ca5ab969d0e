"""Path helpers and the input directory listing.

Keep this module free of imaging dependencies.
"""

from __future__ import annotations

from pathlib import Path

from .errors import NoImagesError, SheetIOError
from .logger import get_logger

_logger = get_logger("path_utils")

IMAGE_EXTENSIONS = frozenset({".png", ".jpg", ".jpeg", ".webp", ".gif", ".tif", ".tiff"})


def abs_path(path: str | Path) -> Path:
    """Return an absolute path without requiring that it exists."""
    p = Path(path).expanduser()
    try:
        # strict=False avoids exceptions for non-existent paths.
        return p.resolve(strict=False)
    except OSError:
        return p.absolute()


def abs_path_str(path: str | Path) -> str:
    return str(abs_path(path))


def is_image_file(path: Path) -> bool:
    return path.suffix.lower() in IMAGE_EXTENSIONS


def list_images(folder: str | Path) -> list[str]:
    """List eligible image files directly inside ``folder``, sorted by name.

    Raises:
        SheetIOError: if the directory cannot be listed.
        NoImagesError: if it holds no eligible image.
    """
    root = abs_path(folder)
    try:
        entries = sorted(root.iterdir(), key=lambda p: p.name)
    except OSError as e:
        raise SheetIOError(str(root), f"could not list the directory ({e})") from e

    paths = [str(p) for p in entries if p.is_file() and is_image_file(p)]
    _logger.debug("list_images: %s -> %d of %d entries", root, len(paths), len(entries))
    if not paths:
        raise NoImagesError(str(root))
    return paths
