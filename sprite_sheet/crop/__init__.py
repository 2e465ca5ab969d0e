"""Crop package public API.

Resolves crop directives into rectangles and applies them to sprites.
"""

from .crop import clip_rect, crop_image, crop_images
from .region import CropSpec, Rect, check_image_count, parse_crop_spec, resolve_region, select_region

__all__ = [
    "CropSpec",
    "Rect",
    "check_image_count",
    "clip_rect",
    "crop_image",
    "crop_images",
    "parse_crop_spec",
    "resolve_region",
    "select_region",
]
