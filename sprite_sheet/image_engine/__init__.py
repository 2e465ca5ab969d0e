"""Image engine: decoding and the per-image stage runner.

Usage:
    from sprite_sheet.image_engine import load_images

    images = load_images(paths, workers=4)
"""

from .decoder import SpriteImage, configure_pyvips, decode_image, to_rgba
from .loader import load_images, run_stage

__all__ = [
    "SpriteImage",
    "configure_pyvips",
    "decode_image",
    "load_images",
    "run_stage",
    "to_rgba",
]
