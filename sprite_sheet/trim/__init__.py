"""Trim package public API.

Removes transparent or uniform-background borders from decoded sprites.
"""

from sprite_sheet.trim.trim import content_mask, detect_trim_box, image_to_array, trim_image, trim_images

__all__ = [
    "content_mask",
    "detect_trim_box",
    "image_to_array",
    "trim_image",
    "trim_images",
]
