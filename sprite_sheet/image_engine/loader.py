"""Bounded concurrent runner for per-image pipeline stages.

Each image is transformed independently, so stages fan out over a thread
pool (pyvips releases the GIL while it works). Results keep input order so
the index to grid cell mapping stays stable.
"""

from __future__ import annotations

import time
from collections.abc import Callable, Sequence
from concurrent.futures import ThreadPoolExecutor
from typing import TypeVar

from sprite_sheet.logger import get_logger

from .decoder import SpriteImage, configure_pyvips, decode_image

_logger = get_logger("loader")

T = TypeVar("T")
R = TypeVar("R")


def run_stage(name: str, fn: Callable[[T], R], items: Sequence[T], workers: int) -> list[R]:
    """Apply ``fn`` to every item on at most ``workers`` threads.

    The first exception raised by ``fn`` propagates once the pool has drained.
    """
    if not items:
        return []
    max_workers = max(1, min(workers, len(items)))
    started = time.perf_counter()
    with ThreadPoolExecutor(max_workers=max_workers, thread_name_prefix=f"sheet-{name}") as pool:
        results = list(pool.map(fn, items))
    _logger.debug(
        "stage %s: %d items, workers=%d, %.1f ms",
        name,
        len(items),
        max_workers,
        (time.perf_counter() - started) * 1000.0,
    )
    return results


def load_images(paths: Sequence[str], workers: int) -> list[SpriteImage]:
    configure_pyvips()
    images = run_stage("decode", decode_image, paths, workers)
    _logger.info("loaded %d images", len(images))
    return images
