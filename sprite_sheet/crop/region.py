"""Crop directive parsing and region selection.

A directive is one of:
    "smallest" / "biggest"      named policy over the bounding pair
    "left,top,width,height"     explicit rectangle
    "3"                         full size of the image at that index
"""

from __future__ import annotations

from collections.abc import Sequence
from dataclasses import dataclass
from typing import TYPE_CHECKING

from sprite_sheet.errors import InvalidCropSpec
from sprite_sheet.layout import BoundingPair, Size

if TYPE_CHECKING:
    from sprite_sheet.image_engine import SpriteImage

POLICY_SMALLEST = "smallest"
POLICY_BIGGEST = "biggest"
KIND_POLICY = "policy"
KIND_RECT = "rect"
KIND_INDEX = "index"
_RECT_PARTS = 4


@dataclass(frozen=True)
class Rect:
    left: int
    top: int
    width: int
    height: int

    @property
    def area(self) -> int:
        return self.width * self.height

    def as_tuple(self) -> tuple[int, int, int, int]:
        return self.left, self.top, self.width, self.height

    @classmethod
    def from_size(cls, size: Size) -> Rect:
        return cls(0, 0, size.width, size.height)


@dataclass(frozen=True)
class CropSpec:
    text: str
    kind: str
    policy: str | None = None
    rect: Rect | None = None
    index: int | None = None


def _parse_int(spec: str, part: str) -> int:
    part = part.strip()
    try:
        return int(part)
    except ValueError:
        raise InvalidCropSpec(spec, f"{part!r} is not an integer") from None


def parse_crop_spec(text: str) -> CropSpec:
    normalized = text.strip().lower()
    if normalized in (POLICY_SMALLEST, POLICY_BIGGEST):
        return CropSpec(text=text, kind=KIND_POLICY, policy=normalized)

    if "," in normalized:
        parts = normalized.split(",")
        if len(parts) != _RECT_PARTS:
            raise InvalidCropSpec(text, "expected left,top,width,height")
        left, top, width, height = (_parse_int(text, p) for p in parts)
        if left < 0 or top < 0:
            raise InvalidCropSpec(text, "left and top must not be negative")
        if width <= 0 or height <= 0:
            raise InvalidCropSpec(text, "width and height must be positive")
        return CropSpec(text=text, kind=KIND_RECT, rect=Rect(left, top, width, height))

    try:
        index = int(normalized)
    except ValueError:
        raise InvalidCropSpec(text) from None
    if index < 0:
        raise InvalidCropSpec(text, "image index must not be negative")
    return CropSpec(text=text, kind=KIND_INDEX, index=index)


def check_image_count(spec: CropSpec, count: int) -> None:
    """Reject an index reference past the end of a set of ``count`` images."""
    if spec.kind == KIND_INDEX and spec.index is not None and spec.index >= count:
        raise InvalidCropSpec(spec.text, f"image index {spec.index} out of range for {count} images")


def select_region(spec: CropSpec, images: Sequence[SpriteImage], bounds: BoundingPair) -> Rect:
    if spec.kind == KIND_POLICY:
        return Rect.from_size(bounds.smallest if spec.policy == POLICY_SMALLEST else bounds.biggest)
    if spec.kind == KIND_RECT and spec.rect is not None:
        return spec.rect
    if spec.kind == KIND_INDEX and spec.index is not None:
        check_image_count(spec, len(images))
        return Rect.from_size(images[spec.index].meta)
    raise InvalidCropSpec(spec.text)


def resolve_region(text: str, images: Sequence[SpriteImage], bounds: BoundingPair) -> Rect:
    return select_region(parse_crop_spec(text), images, bounds)
