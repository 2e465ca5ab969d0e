"""Assemble sprite images into a single sprite sheet."""

__version__ = "1.0.0"
