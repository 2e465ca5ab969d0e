"""Crop backend using pyvips.

Pure functions, applied to decoded sprites.
"""

from __future__ import annotations

from collections.abc import Sequence

from sprite_sheet.image_engine import SpriteImage, run_stage
from sprite_sheet.logger import get_logger

from .region import Rect

_logger = get_logger("crop")


def clip_rect(img_width: int, img_height: int, rect: Rect) -> Rect | None:
    """Intersection of ``rect`` with the image bounds, or None if they do not overlap."""
    left = min(rect.left, img_width)
    top = min(rect.top, img_height)
    right = min(rect.left + rect.width, img_width)
    bottom = min(rect.top + rect.height, img_height)
    if right <= left or bottom <= top:
        return None
    return Rect(left, top, right - left, bottom - top)


def crop_image(sprite: SpriteImage, rect: Rect) -> SpriteImage:
    """Extract ``rect`` from the sprite.

    Sprites whose area is smaller than the target's are returned unchanged.
    The comparison is by area only, so a same-area region of a different
    aspect ratio is still clipped to the image bounds.
    """
    if rect.area > sprite.meta.area:
        _logger.debug("crop: %s smaller than %s, kept", sprite.path, rect)
        return sprite
    region = clip_rect(sprite.width, sprite.height, rect)
    if region is None:
        _logger.warning("crop: %s lies outside %s (%dx%d), kept", rect, sprite.path, sprite.width, sprite.height)
        return sprite
    if region != rect:
        _logger.info(
            "crop: %s clipped to %s for %s (%dx%d)", rect, region, sprite.path, sprite.width, sprite.height
        )
    return sprite.replace_image(sprite.image.crop(*region.as_tuple()))


def crop_images(images: Sequence[SpriteImage], rect: Rect, workers: int) -> list[SpriteImage]:
    cropped = run_stage("crop", lambda sprite: crop_image(sprite, rect), images, workers)
    changed = sum(1 for before, after in zip(images, cropped) if before is not after)
    _logger.info("cropped %d of %d images to %dx%d", changed, len(images), rect.width, rect.height)
    return cropped
