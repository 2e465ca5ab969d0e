from __future__ import annotations

import json
import os
from collections.abc import Mapping
from dataclasses import dataclass
from typing import Any

from .crop.region import CropSpec, parse_crop_spec
from .errors import ConfigError
from .logger import get_logger
from .path_utils import abs_path_str

_logger = get_logger("settings")

DEFAULT_OUTPUT_PATH = "./spriteSheet.png"


def default_workers() -> int:
    return max(2, min(4, (os.cpu_count() or 2)))


class SettingsManager:
    """Read-only JSON settings file providing defaults beneath CLI flags."""

    DEFAULTS: dict[str, Any] = {
        "input_path": None,
        "output_path": DEFAULT_OUTPUT_PATH,
        "trim": False,
        "crop": None,
        "scale": None,
        "workers": None,
    }

    def __init__(self, settings_path: str | None = None):
        self.settings_path = settings_path
        self._settings: dict[str, Any] = {}
        self.load()

    def load(self) -> None:
        self._settings = {}
        if not self.settings_path:
            return
        try:
            with open(self.settings_path, encoding="utf-8") as f:
                data = json.load(f)
        except (OSError, ValueError) as e:
            _logger.warning("settings load failed: %s", e)
            return
        if not isinstance(data, dict):
            _logger.warning("settings file %s does not hold an object; ignored", self.settings_path)
            return
        unknown = sorted(set(data) - set(self.DEFAULTS))
        if unknown:
            _logger.warning("unknown settings ignored: %s", ", ".join(unknown))
        self._settings = {k: v for k, v in data.items() if k in self.DEFAULTS}
        _logger.debug("settings loaded: %s", self.settings_path)

    def get(self, key: str) -> Any:
        """Value from the settings file, else the built-in default."""
        return self._settings.get(key, self.DEFAULTS.get(key))

    def merged(self, overrides: Mapping[str, Any]) -> dict[str, Any]:
        """Defaults, then the settings file, then every non-None override."""
        values = {key: self.get(key) for key in self.DEFAULTS}
        values.update({k: v for k, v in overrides.items() if v is not None})
        return values


@dataclass(frozen=True)
class Options:
    """Run configuration, resolved once at startup and passed to every stage."""

    input_path: str
    output_path: str
    trim: bool = False
    crop: str | None = None
    # Kept raw; parsed by the compositor once the base sheet exists.
    scale: str | float | None = None
    workers: int = 0

    def __post_init__(self) -> None:
        if self.crop is not None:
            parse_crop_spec(self.crop)
        if self.workers <= 0:
            object.__setattr__(self, "workers", default_workers())

    @property
    def crop_spec(self) -> CropSpec | None:
        return None if self.crop is None else parse_crop_spec(self.crop)

    @classmethod
    def from_mapping(cls, values: Mapping[str, Any]) -> Options:
        input_path = values.get("input_path")
        if not input_path:
            raise ConfigError("input_path", "an input directory is required")
        output_path = values.get("output_path") or DEFAULT_OUTPUT_PATH

        workers_raw = values.get("workers")
        try:
            workers = int(workers_raw) if workers_raw is not None else 0
        except (TypeError, ValueError) as e:
            raise ConfigError("workers", f"{workers_raw!r} is not an integer") from e
        if workers_raw is not None and workers < 1:
            raise ConfigError("workers", "must be at least 1")

        trim = values.get("trim")
        if trim is None:
            trim = False
        elif not isinstance(trim, bool):
            raise ConfigError("trim", f"{trim!r} is not true or false")

        crop = values.get("crop")
        scale = values.get("scale")
        return cls(
            input_path=abs_path_str(input_path),
            output_path=abs_path_str(output_path),
            trim=trim,
            crop=None if crop is None else str(crop),
            scale=scale,
            workers=workers,
        )
