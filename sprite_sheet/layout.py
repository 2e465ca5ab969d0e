"""Bounding rect analysis and square grid placement.

The grid dimension is ``floor(sqrt(N + 1))``. For some counts (N=5 gives
G=2) this leaves fewer cells than images; trailing images are then placed
outside the canvas and clipped by the composite.
"""

from __future__ import annotations

import math
from collections.abc import Iterable, Sequence
from dataclasses import dataclass

from .errors import NoImagesError, SizeMismatchError
from .logger import get_logger

_logger = get_logger("layout")


@dataclass(frozen=True)
class Size:
    width: int
    height: int

    @property
    def area(self) -> int:
        return self.width * self.height


@dataclass(frozen=True)
class BoundingPair:
    smallest: Size
    biggest: Size


@dataclass(frozen=True)
class Cell:
    index: int
    row: int
    col: int
    x: int
    y: int


@dataclass(frozen=True)
class SheetLayout:
    grid: int
    cell_width: int
    cell_height: int
    cells: tuple[Cell, ...]

    @property
    def width(self) -> int:
        return self.grid * self.cell_width

    @property
    def height(self) -> int:
        return self.grid * self.cell_height


def measure_bounds(sizes: Iterable[Size]) -> BoundingPair:
    """Smallest and biggest width/height, each axis tracked independently."""
    big_w, big_h = 0, 0
    small_w, small_h = math.inf, math.inf
    count = 0
    for size in sizes:
        count += 1
        big_w = max(big_w, size.width)
        big_h = max(big_h, size.height)
        small_w = min(small_w, size.width)
        small_h = min(small_h, size.height)
    if count == 0:
        raise NoImagesError("the image set")
    bounds = BoundingPair(smallest=Size(int(small_w), int(small_h)), biggest=Size(big_w, big_h))
    _logger.debug("bounds over %d images: %s", count, bounds)
    return bounds


def ensure_uniform_size(paths: Sequence[str], sizes: Sequence[Size]) -> Size:
    """Require every image to match the first one's dimensions."""
    if not sizes:
        raise NoImagesError("the image set")
    base = sizes[0]
    for path, size in zip(paths, sizes):
        if size != base:
            raise SizeMismatchError(path, (base.width, base.height), (size.width, size.height))
    return base


def grid_size(count: int) -> int:
    return math.isqrt(count + 1)


def _round_half_up(value: float) -> int:
    return math.floor(value + 0.5)


def cell_position(index: int, grid: int, cell: Size, size: Size) -> Cell:
    row, col = divmod(index, grid)
    x = col * cell.width + _round_half_up(cell.width * 0.5 - size.width * 0.5)
    y = row * cell.height + _round_half_up(cell.height * 0.5 - size.height * 0.5)
    return Cell(index=index, row=row, col=col, x=x, y=y)


def compute_layout(sizes: Sequence[Size], biggest: Size) -> SheetLayout:
    if not sizes:
        raise NoImagesError("the image set")
    grid = grid_size(len(sizes))
    cells = tuple(cell_position(i, grid, biggest, size) for i, size in enumerate(sizes))
    layout = SheetLayout(grid=grid, cell_width=biggest.width, cell_height=biggest.height, cells=cells)
    if grid * grid < len(sizes):
        _logger.warning(
            "grid %dx%d holds %d cells for %d images; trailing images fall outside the sheet",
            grid,
            grid,
            grid * grid,
            len(sizes),
        )
    _logger.debug("layout: grid=%d canvas=%dx%d", grid, layout.width, layout.height)
    return layout
