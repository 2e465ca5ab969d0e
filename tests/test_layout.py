import math

import pytest

from sprite_sheet.errors import NoImagesError, SizeMismatchError
from sprite_sheet.layout import (
    Size,
    cell_position,
    compute_layout,
    ensure_uniform_size,
    grid_size,
    measure_bounds,
)


@pytest.mark.parametrize("count", [1, 2, 3, 4, 5, 8, 9, 15, 24, 99, 100])
def test_grid_size_is_floor_sqrt_of_count_plus_one(count):
    assert grid_size(count) == math.floor(math.sqrt(count + 1))


def test_measure_bounds_tracks_axes_independently():
    bounds = measure_bounds([Size(10, 40), Size(30, 5), Size(20, 20)])
    assert bounds.smallest == Size(10, 5)
    assert bounds.biggest == Size(30, 40)


def test_measure_bounds_single_image_is_both_smallest_and_biggest():
    bounds = measure_bounds([Size(17, 9)])
    assert bounds.smallest == Size(17, 9)
    assert bounds.biggest == Size(17, 9)


def test_measure_bounds_accepts_generators():
    bounds = measure_bounds(Size(w, w * 2) for w in (3, 1, 2))
    assert bounds.smallest == Size(1, 2)
    assert bounds.biggest == Size(3, 6)


def test_measure_bounds_rejects_empty_set():
    with pytest.raises(NoImagesError):
        measure_bounds([])


def test_uniform_layout_places_images_on_cell_origins():
    sizes = [Size(32, 16)] * 7
    layout = compute_layout(sizes, Size(32, 16))
    assert layout.grid == 2
    assert (layout.width, layout.height) == (64, 32)
    for i, cell in enumerate(layout.cells):
        assert (cell.row, cell.col) == (i // 2, i % 2)
        assert (cell.x, cell.y) == ((i % 2) * 32, (i // 2) * 16)


def test_five_images_overflow_two_by_two_grid():
    layout = compute_layout([Size(100, 100)] * 5, Size(100, 100))
    assert layout.grid == 2
    assert (layout.width, layout.height) == (200, 200)
    last = layout.cells[4]
    assert (last.row, last.col) == (2, 0)
    assert (last.x, last.y) == (0, 200)


def test_smaller_images_are_centered_in_their_cell():
    cell = cell_position(3, 2, Size(10, 10), Size(4, 6))
    assert (cell.row, cell.col) == (1, 1)
    assert (cell.x, cell.y) == (10 + 3, 10 + 2)


def test_centering_rounds_half_up():
    # 10*0.5 - 5*0.5 = 2.5
    cell = cell_position(0, 1, Size(10, 10), Size(5, 10))
    assert (cell.x, cell.y) == (3, 0)


def test_placed_images_stay_within_canvas_when_grid_is_large_enough():
    sizes = [Size(w, h) for w, h in [(3, 7), (9, 2), (5, 5), (1, 1), (9, 7), (4, 4), (2, 6), (8, 3)]]
    bounds = measure_bounds(sizes)
    layout = compute_layout(sizes, bounds.biggest)
    assert layout.grid**2 >= len(sizes)
    for cell, size in zip(layout.cells, sizes):
        assert 0 <= cell.x and cell.x + size.width <= layout.width
        assert 0 <= cell.y and cell.y + size.height <= layout.height


def test_ensure_uniform_size_names_offending_file():
    with pytest.raises(SizeMismatchError) as exc:
        ensure_uniform_size(["a.png", "b.png", "c.png"], [Size(4, 4), Size(4, 4), Size(4, 5)])
    assert exc.value.path == "c.png"
    assert "c.png" in str(exc.value)


def test_ensure_uniform_size_returns_common_size():
    assert ensure_uniform_size(["a", "b"], [Size(2, 3), Size(2, 3)]) == Size(2, 3)
