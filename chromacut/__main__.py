# Copyright (c) 2026 Chromacut
# SPDX-License-Identifier: MIT

"""chromacut -- extract a UI theming palette from an image.

Usage: python -m chromacut IMAGE [options]

Prints the dominant swatch and the swatch chosen for each built-in target
(vibrant / muted, light / dark) along with readable text colors.

Environment variables:
  CHROMACUT_MAX_COLORS, CHROMACUT_RESIZE_AREA and
  CHROMACUT_RESIZE_MAX_DIMENSION set defaults; command line options win.
"""

from __future__ import annotations

import argparse
import logging
import sys
from typing import Optional, Sequence

from chromacut.config import PaletteConfig, setup_logging
from chromacut.palette import PaletteBuilder
from chromacut.runtime.serializers import SerializerFormat, serialize

logger = logging.getLogger(__name__)


def _build_parser() -> argparse.ArgumentParser:
    parser = argparse.ArgumentParser(
        prog="chromacut",
        description="Extract representative swatches from an image.",
        epilog=(
            "Examples:\n"
            "  chromacut cover.jpg\n"
            "  chromacut cover.jpg --max-colors 24 --format css\n"
            "  chromacut screenshot.png --region 0 0 400 120 --format json\n"
        ),
        formatter_class=argparse.RawTextHelpFormatter,
    )
    parser.add_argument("image", help="Path to an image file")
    parser.add_argument(
        "-n",
        "--max-colors",
        type=int,
        default=None,
        metavar="N",
        help="Maximum number of swatches to quantize to (default: 16)",
    )
    parser.add_argument(
        "-a",
        "--resize-area",
        type=int,
        default=None,
        metavar="PIXELS",
        help="Scale the image down to about this many pixels; 0 disables (default: 12544)",
    )
    parser.add_argument(
        "-r",
        "--region",
        type=int,
        nargs=4,
        default=None,
        metavar=("LEFT", "TOP", "RIGHT", "BOTTOM"),
        help="Only use pixels inside this rectangle",
    )
    parser.add_argument(
        "--no-filter",
        action="store_true",
        help="Keep near-black, near-white and skin-tone colors",
    )
    parser.add_argument(
        "-f",
        "--format",
        choices=[f.value for f in SerializerFormat],
        default=SerializerFormat.TEXT.value,
        help="Output format (default: text)",
    )
    parser.add_argument("-v", "--verbose", action="store_true", help="Log debug output")
    return parser


def main(argv: Optional[Sequence[str]] = None) -> int:
    parser = _build_parser()
    args = parser.parse_args(argv)
    setup_logging(verbose=args.verbose)

    try:
        config = PaletteConfig.from_env()
    except ValueError as e:
        parser.error(str(e))

    try:
        builder = PaletteBuilder(args.image, config=config)
    except OSError as e:
        logger.error("Could not read image %s: %s", args.image, e)
        return 1

    try:
        if args.max_colors is not None:
            builder.maximum_color_count(args.max_colors)
        if args.resize_area is not None:
            builder.resize_image_area(args.resize_area)
        if args.region is not None:
            builder.set_region(*args.region)
    except ValueError as e:
        parser.error(str(e))

    if args.no_filter:
        builder.clear_filters()

    palette = builder.generate()
    print(serialize(palette, SerializerFormat(args.format)))
    return 0


if __name__ == "__main__":
    sys.exit(main())
