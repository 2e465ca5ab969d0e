"""Pytest configuration.

Fixtures author small sprite files with Pillow so the pipeline is exercised
through real decode/encode paths.
"""

from __future__ import annotations

from collections.abc import Callable
from pathlib import Path

import pytest

TRANSPARENT = (0, 0, 0, 0)
RED = (255, 0, 0, 255)


@pytest.fixture
def make_png(tmp_path: Path) -> Callable[..., str]:
    """Write an RGBA PNG and return its path.

    ``box`` is (left, top, right, bottom) filled with ``color``; without a
    box the whole image is filled.
    """
    from PIL import Image

    def _make(
        name: str,
        size: tuple[int, int],
        color: tuple[int, ...] = RED,
        box: tuple[int, int, int, int] | None = None,
        background: tuple[int, ...] = TRANSPARENT,
        folder: Path | None = None,
    ) -> str:
        target = folder or tmp_path
        target.mkdir(parents=True, exist_ok=True)
        img = Image.new("RGBA", size, background if box else color)
        if box:
            img.paste(color, box)
        path = target / name
        img.save(path)
        return str(path)

    return _make


@pytest.fixture
def sprite_dir(tmp_path: Path) -> Path:
    folder = tmp_path / "images"
    folder.mkdir()
    return folder
