"""Sheet rendering, atomic file output and the optional rescale step."""

from __future__ import annotations

import contextlib
import math
import os
import stat
import tempfile
from collections.abc import Sequence

import pyvips  # type: ignore

from .errors import InvalidScale, SheetIOError
from .image_engine import SpriteImage
from .layout import SheetLayout
from .logger import get_logger

_logger = get_logger("compositor")

RGBA_BANDS = 4
# Scales above this are read as tenths: 3 means 0.3.
SCALE_TENTHS_THRESHOLD = 1.0


def create_canvas(width: int, height: int) -> pyvips.Image:
    """Fully transparent RGBA canvas."""
    return pyvips.Image.black(width, height, bands=RGBA_BANDS).copy(interpretation="srgb").cast("uchar")


def compose_sheet(images: Sequence[SpriteImage], layout: SheetLayout) -> pyvips.Image:
    """Place every image at its cell in one composite pass."""
    canvas = create_canvas(layout.width, layout.height)
    if not images:
        return canvas
    sheet = canvas.composite(
        [sprite.image for sprite in images],
        ["over"] * len(images),
        x=[cell.x for cell in layout.cells],
        y=[cell.y for cell in layout.cells],
    )
    if sheet.format != "uchar":
        sheet = sheet.cast("uchar")
    return sheet


def _output_mode(output_path: str) -> int:
    """Mode for a new output file: the existing file's mode, else 0o666 minus the umask."""
    try:
        return stat.S_IMODE(os.stat(output_path).st_mode)
    except OSError:
        pass
    umask = os.umask(0)
    os.umask(umask)
    return 0o666 & ~umask


def write_atomic(image: pyvips.Image, output_path: str) -> str:
    """Write ``image`` next to ``output_path`` and rename it into place.

    The saver is picked from the output suffix. On failure the temporary
    file is removed and any existing file at ``output_path`` is untouched.
    """
    directory = os.path.dirname(os.path.abspath(output_path))
    stem, suffix = os.path.splitext(os.path.basename(output_path))
    try:
        os.makedirs(directory, exist_ok=True)
        fd, tmp_path = tempfile.mkstemp(prefix=f".{stem}.", suffix=suffix, dir=directory)
        os.close(fd)
    except OSError as e:
        raise SheetIOError(output_path, str(e)) from e

    try:
        os.chmod(tmp_path, _output_mode(output_path))
        image.write_to_file(tmp_path)
        os.replace(tmp_path, output_path)
    except (pyvips.Error, OSError) as e:
        with contextlib.suppress(OSError):
            os.remove(tmp_path)
        _logger.error("write failed for %s: %s", output_path, e)
        raise SheetIOError(output_path, str(e).strip()) from e
    _logger.debug("wrote %s (%dx%d)", output_path, image.width, image.height)
    return output_path


def normalize_scale(value: str | float) -> float:
    """Parse a scale factor; values above 1.0 are taken as tenths."""
    try:
        scale = float(value)
    except (TypeError, ValueError):
        raise InvalidScale(value) from None
    if not math.isfinite(scale) or scale <= 0:
        raise InvalidScale(value)
    if scale > SCALE_TENTHS_THRESHOLD:
        scale = scale / 10
    return scale


def scaled_size(width: int, height: int, scale: float) -> tuple[int, int]:
    return max(1, math.floor(width * scale + 0.5)), max(1, math.floor(height * scale + 0.5))


def rescale_sheet(output_path: str, scale: float) -> tuple[int, int]:
    """Resize the sheet already written at ``output_path`` and replace it."""
    try:
        sheet = pyvips.Image.new_from_file(output_path, access="sequential")
    except pyvips.Error as e:
        raise SheetIOError(output_path, str(e).strip()) from e
    width, height = scaled_size(sheet.width, sheet.height, scale)
    resized = sheet.thumbnail_image(width, height=height, size=pyvips.Size.FORCE)
    write_atomic(resized, output_path)
    _logger.info("rescaled %s by %.3f: %dx%d -> %dx%d", output_path, scale, sheet.width, sheet.height, width, height)
    return width, height
