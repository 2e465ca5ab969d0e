"""Error kinds raised by the sprite sheet pipeline.

Every error names the offending file or parameter in its message so the
command line can report it as is.
"""

from __future__ import annotations


class SpriteSheetError(Exception):
    """Base class for all pipeline failures."""


class DecodeError(SpriteSheetError):
    def __init__(self, path: str, reason: str):
        super().__init__(f"Could not decode image {path}: {reason}")
        self.path = path
        self.reason = reason


class SizeMismatchError(SpriteSheetError):
    def __init__(self, path: str, expected: tuple[int, int], actual: tuple[int, int]):
        super().__init__(
            f"Not all images are the same size: {path} is {actual[0]}x{actual[1]}, expected {expected[0]}x{expected[1]}"
        )
        self.path = path
        self.expected = expected
        self.actual = actual


class InvalidCropSpec(SpriteSheetError):
    def __init__(self, spec: str, reason: str = "not a recognized crop directive"):
        super().__init__(f"Invalid crop spec {spec!r}: {reason}")
        self.spec = spec
        self.reason = reason


class InvalidScale(SpriteSheetError):
    """Scale is non-numeric or not positive.

    Raised after the base sheet was written, which stays valid on disk.
    """

    def __init__(self, value: object):
        super().__init__(f"Invalid scale {value!r}: expected a positive number")
        self.value = value


class NoImagesError(SpriteSheetError):
    def __init__(self, where: str):
        super().__init__(f"No images were found in {where}")
        self.where = where


class SheetIOError(SpriteSheetError, OSError):
    def __init__(self, path: str, reason: str):
        super().__init__(f"I/O failure for {path}: {reason}")
        self.path = path
        self.reason = reason


class ConfigError(SpriteSheetError):
    def __init__(self, key: str, reason: str):
        super().__init__(f"Invalid setting {key}: {reason}")
        self.key = key
        self.reason = reason
