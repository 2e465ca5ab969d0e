"""Sprite sheet pipeline.

list -> decode -> (trim) -> bounds -> (region, crop) -> layout -> composite -> (rescale)
"""

from __future__ import annotations

from collections.abc import Sequence
from dataclasses import dataclass

from .compositor import compose_sheet, normalize_scale, rescale_sheet, write_atomic
from .crop import check_image_count, crop_images, select_region
from .image_engine import SpriteImage, load_images
from .layout import SheetLayout, compute_layout, ensure_uniform_size, measure_bounds
from .logger import get_logger
from .path_utils import list_images
from .settings import Options
from .trim import trim_images

_logger = get_logger("sheet")


@dataclass(frozen=True)
class SheetResult:
    output_path: str
    width: int
    height: int
    grid: int
    count: int
    scale: float | None = None


def prepare_images(paths: Sequence[str], options: Options) -> list[SpriteImage]:
    """Decode, trim and crop every image; the returned set is final."""
    crop_spec = options.crop_spec
    if crop_spec is not None:
        check_image_count(crop_spec, len(paths))
    images = load_images(paths, options.workers)
    if options.trim:
        images = trim_images(images, options.workers)
    elif crop_spec is None:
        ensure_uniform_size([s.path for s in images], [s.meta for s in images])

    if crop_spec is not None:
        bounds = measure_bounds(s.meta for s in images)
        rect = select_region(crop_spec, images, bounds)
        _logger.info("crop %r resolved to %s", crop_spec.text, rect)
        images = crop_images(images, rect, options.workers)
    return images


def layout_images(images: Sequence[SpriteImage]) -> SheetLayout:
    bounds = measure_bounds(s.meta for s in images)
    return compute_layout([s.meta for s in images], bounds.biggest)


def build_sheet(paths: Sequence[str], options: Options) -> SheetResult:
    """Render ``paths`` into one sheet at ``options.output_path``.

    Raises InvalidScale only after the unscaled sheet has been written.
    """
    images = prepare_images(paths, options)
    layout = layout_images(images)
    sheet = compose_sheet(images, layout)
    write_atomic(sheet, options.output_path)
    _logger.info(
        "sprite sheet generated: %s (%dx%d, grid %d, %d images)",
        options.output_path,
        layout.width,
        layout.height,
        layout.grid,
        len(images),
    )
    result = SheetResult(
        output_path=options.output_path,
        width=layout.width,
        height=layout.height,
        grid=layout.grid,
        count=len(images),
    )
    if options.scale is None:
        return result

    scale = normalize_scale(options.scale)
    width, height = rescale_sheet(options.output_path, scale)
    return SheetResult(
        output_path=options.output_path,
        width=width,
        height=height,
        grid=layout.grid,
        count=len(images),
        scale=scale,
    )


def create_sprite_sheet(options: Options) -> SheetResult:
    paths = list_images(options.input_path)
    _logger.info("found %d images in %s", len(paths), options.input_path)
    return build_sheet(paths, options)
