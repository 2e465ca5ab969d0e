from __future__ import annotations

from collections.abc import Sequence

import numpy as np
import pyvips  # type: ignore

from sprite_sheet.image_engine import SpriteImage, run_stage
from sprite_sheet.logger import get_logger

_logger = get_logger("trim")

OPAQUE = 255


def image_to_array(image: pyvips.Image) -> np.ndarray:
    if image.format != "uchar":
        image = image.cast("uchar")
    mem = image.write_to_memory()
    return np.frombuffer(mem, dtype=np.uint8).reshape(image.height, image.width, image.bands)


def content_mask(arr: np.ndarray) -> np.ndarray:
    """Pixels that belong to the sprite rather than its border.

    With any transparency present, content is every pixel with alpha > 0.
    Fully opaque images fall back to the top-left pixel as a uniform
    background colour.
    """
    bands = arr.shape[2]
    has_alpha = bands in (2, 4)
    if has_alpha:
        alpha = arr[..., -1]
        if int(alpha.min()) < OPAQUE:
            return alpha > 0
        arr = arr[..., :-1]
    background = arr[0, 0, :]
    return (arr != background).any(axis=2)


def detect_trim_box(image: pyvips.Image) -> tuple[int, int, int, int] | None:
    """Bounding box ``(left, top, width, height)`` of the image content.

    Returns None when there is nothing to trim: the content already spans
    the whole image, or the image has no content at all.
    """
    mask = content_mask(image_to_array(image))
    if not mask.any():
        return None
    ys = np.flatnonzero(mask.any(axis=1))
    xs = np.flatnonzero(mask.any(axis=0))
    top, bottom = int(ys[0]), int(ys[-1])
    left, right = int(xs[0]), int(xs[-1])
    box = left, top, right - left + 1, bottom - top + 1
    if box == (0, 0, image.width, image.height):
        return None
    return box


def trim_image(sprite: SpriteImage) -> SpriteImage:
    box = detect_trim_box(sprite.image)
    if box is None:
        _logger.debug("trim: nothing to remove from %s", sprite.path)
        return sprite
    left, top, width, height = box
    trimmed = sprite.replace_image(sprite.image.crop(left, top, width, height))
    _logger.debug(
        "trim: %s %dx%d -> %dx%d at (%d,%d)",
        sprite.path,
        sprite.width,
        sprite.height,
        width,
        height,
        left,
        top,
    )
    return trimmed


def trim_images(images: Sequence[SpriteImage], workers: int) -> list[SpriteImage]:
    trimmed = run_stage("trim", trim_image, images, workers)
    changed = sum(1 for before, after in zip(images, trimmed) if before is not after)
    _logger.info("trimmed %d of %d images", changed, len(images))
    return trimmed
