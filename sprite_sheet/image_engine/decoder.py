"""Image decoder using pyvips.

Decodes sprite files into RGBA uchar images paired with their metadata.
"""

from __future__ import annotations

import contextlib
import os
from dataclasses import dataclass

import pyvips  # type: ignore

from sprite_sheet.errors import DecodeError
from sprite_sheet.layout import Size
from sprite_sheet.logger import get_logger

_logger = get_logger("decoder")

RGBA_BANDS = 4


@dataclass(frozen=True)
class SpriteImage:
    """A decoded image handle paired with its metadata.

    Stages never mutate a SpriteImage; they return a new one.
    """

    path: str
    image: pyvips.Image
    meta: Size

    @property
    def width(self) -> int:
        return self.meta.width

    @property
    def height(self) -> int:
        return self.meta.height

    def replace_image(self, image: pyvips.Image) -> SpriteImage:
        return SpriteImage(path=self.path, image=image, meta=Size(image.width, image.height))


def configure_pyvips() -> None:
    # Configure pyvips caches to avoid memory growth
    with contextlib.suppress(pyvips.Error):
        pyvips.cache_set_max(0)
        pyvips.cache_set_max_mem(0)
        pyvips.cache_set_max_files(0)


def to_rgba(image: pyvips.Image) -> pyvips.Image:
    """Convert to 8-bit sRGB with an alpha band."""
    if image.interpretation != "srgb":
        image = image.colourspace("srgb")
    if image.format != "uchar":
        image = image.cast("uchar")
    if not image.hasalpha():
        image = image.bandjoin(255)
    if image.bands > RGBA_BANDS:
        image = image.extract_band(0, n=RGBA_BANDS)
    return image


def decode_image(path: str) -> SpriteImage:
    """Decode ``path`` fully into memory and read its dimensions.

    Raises:
        DecodeError: if the file is missing or is not a readable image.
    """
    if not os.path.isfile(path):
        raise DecodeError(path, "file not found")
    try:
        image = pyvips.Image.new_from_file(path, access="sequential")
        # Materialise pixels so truncated files fail here rather than at composite time.
        image = to_rgba(image).copy_memory()
    except pyvips.Error as e:
        _logger.debug("decode failed: %s: %s", path, e)
        raise DecodeError(path, str(e).strip()) from e

    sprite = SpriteImage(path=path, image=image, meta=Size(image.width, image.height))
    _logger.debug("decoded %s: %dx%d", path, sprite.width, sprite.height)
    return sprite
