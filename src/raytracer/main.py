# main.py
"""Command line entry point: render a JSON scene file to a PNG image.

Usage:
    raytracer CONFIG_FILE OUTPUT_FILE [--workers N] [--verbose]
"""

import argparse
import logging
import sys
from typing import Optional, Sequence

from raytracer import __version__
from raytracer.config import load_scene
from raytracer.errors import ConfigError, ImageWriteError
from raytracer.renderer.raytracer import render

logger = logging.getLogger(__name__)

LOG_FORMAT = "%(asctime)s - %(name)s - %(levelname)s - %(message)s"

EXIT_CONFIG_ERROR = 1
EXIT_WRITE_ERROR = 2


def positive_int(value: str) -> int:
    """argparse type for counts that must be at least one."""
    try:
        number = int(value)
    except ValueError:
        raise argparse.ArgumentTypeError(f"invalid int value: {value!r}") from None
    if number < 1:
        raise argparse.ArgumentTypeError(f"must be at least 1, got {number}")
    return number


def setup_logging(level: int = logging.INFO) -> logging.Logger:
    """Attach a console handler to the package logger.

    Records stop at the package logger so a configured root logger does not
    print them a second time.
    """
    root = logging.getLogger("raytracer")
    if not root.handlers:
        handler = logging.StreamHandler()
        handler.setFormatter(logging.Formatter(LOG_FORMAT))
        root.addHandler(handler)
        root.propagate = False
    root.setLevel(level)
    return root


def parse_args(argv: Optional[Sequence[str]] = None) -> argparse.Namespace:
    """Parse command-line arguments."""
    parser = argparse.ArgumentParser(
        prog="raytracer",
        description="Render scenes using a raytracer",
    )
    parser.add_argument("config_file", help="Sets the path to the configuration file")
    parser.add_argument("output_file", help="Sets the path to the output file")
    parser.add_argument(
        "--workers",
        type=positive_int,
        default=None,
        help="Number of render processes (default: one per CPU)",
    )
    parser.add_argument(
        "-v", "--verbose",
        action="store_true",
        help="Log debug output",
    )
    parser.add_argument("--version", action="version", version=f"%(prog)s {__version__}")
    return parser.parse_args(argv)


def main(argv: Optional[Sequence[str]] = None) -> int:
    args = parse_args(argv)
    setup_logging(logging.DEBUG if args.verbose else logging.INFO)

    try:
        scene = load_scene(args.config_file)
    except ConfigError as e:
        logger.error("%s", e)
        return EXIT_CONFIG_ERROR

    logger.info("Rendering %s -> %s", args.config_file, args.output_file)
    try:
        render(args.output_file, scene, workers=args.workers)
    except ImageWriteError as e:
        logger.error("%s", e)
        return EXIT_WRITE_ERROR
    return 0


if __name__ == "__main__":
    sys.exit(main())
