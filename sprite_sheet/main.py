"""Command line entry point.

Exit codes: 0 success, 1 fatal error, 2 sheet written but rescale abandoned.
"""

from __future__ import annotations

import argparse
import os
import sys

from . import __version__
from .errors import InvalidScale, SpriteSheetError
from .logger import LOG_CATS_ENV, LOG_LEVEL_ENV, get_logger, setup_logger
from .settings import DEFAULT_OUTPUT_PATH, Options, SettingsManager
from .sheet import create_sprite_sheet

EXIT_OK = 0
EXIT_FAILURE = 1
EXIT_PARTIAL = 2

logger = get_logger("main")


def _apply_cli_logging_options(argv: list[str]) -> list[str]:
    """Move --log-level/--log-cats into the env so every logger call sees them."""
    parser = argparse.ArgumentParser(add_help=False)
    parser.add_argument("--log-level", help="Set log level")
    parser.add_argument("--log-cats", help="Set log categories")
    args, remaining = parser.parse_known_args(argv)
    if args.log_level:
        os.environ[LOG_LEVEL_ENV] = args.log_level
    if args.log_cats:
        os.environ[LOG_CATS_ENV] = args.log_cats
    setup_logger()
    return remaining


def build_parser() -> argparse.ArgumentParser:
    parser = argparse.ArgumentParser(
        prog="sprite-sheet",
        description="Assemble a directory of sprites into a single sprite sheet.",
        epilog="example: sprite-sheet --input-path images --output-path spriteSheet.png",
    )
    parser.add_argument("-v", "--version", action="version", version=f"%(prog)s {__version__}")
    parser.add_argument("--input-path", help="Path to the images directory")
    parser.add_argument(
        "--output-path",
        help=f"Path to the sprite sheet destination (default: {DEFAULT_OUTPUT_PATH})",
    )
    parser.add_argument(
        "--trim",
        action=argparse.BooleanOptionalAction,
        default=None,
        help="Remove transparent borders from every image first",
    )
    parser.add_argument(
        "--crop",
        help='Crop every image: "smallest", "biggest", "left,top,width,height" or an image index',
    )
    parser.add_argument("--scale", help="Scale the final sheet; values above 1 are tenths (3 means 0.3)")
    parser.add_argument("--workers", type=int, help="Maximum concurrent image operations")
    parser.add_argument("--config", help="JSON settings file with defaults for the options above")
    parser.add_argument("--log-level", help="Set log level (debug, info, warning, error)")
    parser.add_argument("--log-cats", help="Only log these categories (comma separated)")
    return parser


def main(argv: list[str] | None = None) -> int:
    if argv is None:
        argv = sys.argv[1:]
    remaining = _apply_cli_logging_options(argv)
    parser = build_parser()
    args = parser.parse_args(remaining)

    settings = SettingsManager(args.config)
    try:
        options = Options.from_mapping(
            settings.merged(
                {
                    "input_path": args.input_path,
                    "output_path": args.output_path,
                    "trim": args.trim,
                    "crop": args.crop,
                    "scale": args.scale,
                    "workers": args.workers,
                }
            )
        )
    except SpriteSheetError as e:
        logger.error("%s", e)
        return EXIT_FAILURE
    logger.debug("options: %s", options)

    try:
        result = create_sprite_sheet(options)
    except InvalidScale as e:
        logger.warning("%s; the unscaled sheet was kept at %s", e, options.output_path)
        return EXIT_PARTIAL
    except SpriteSheetError as e:
        logger.error("%s", e)
        return EXIT_FAILURE
    except Exception:
        logger.exception("Error generating sprite sheet")
        return EXIT_FAILURE

    logger.info("Sprite sheet generated: %s (%dx%d)", result.output_path, result.width, result.height)
    return EXIT_OK


if __name__ == "__main__":
    raise SystemExit(main())
