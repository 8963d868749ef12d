#!/usr/bin/env python3
"""
Headless plate export.

Generate a perforation pattern from an image and write it as SVG.

Usage:
    perfoplate photo.jpg
    perfoplate photo.jpg -o out/ --width 300 --height 200 --spacing 5
    perfoplate photo.jpg --preset plate.json --invert

Exit codes:
    0  SVG written
    1  image could not be decoded
    2  pattern has no holes, nothing written
"""

import argparse
import logging
import sys
from dataclasses import replace
from typing import Optional, Sequence

from config_manager import ConfigManager, clamp_config
from image_processing import export_svg, generate_dot_set, load_image
from logging_config import setup_logging

logger = logging.getLogger(__name__)

EXIT_OK = 0
EXIT_DECODE_ERROR = 1
EXIT_NO_HOLES = 2

# CLI option -> PlateConfig field
_OVERRIDES = {
    "width": "width",
    "height": "height",
    "spacing": "spacing",
    "min_hole": "min_hole_size",
    "max_hole": "max_hole_size",
    "margin": "margin",
}


def build_parser() -> argparse.ArgumentParser:
    parser = argparse.ArgumentParser(
        prog="perfoplate",
        description="Convert an image into a perforated plate SVG",
        formatter_class=argparse.RawDescriptionHelpFormatter,
    )
    parser.add_argument("image", help="Input image (PNG, JPG, ...)")
    parser.add_argument(
        "-o",
        "--output-dir",
        default=".",
        help="Directory for the SVG (default: current directory)",
    )
    parser.add_argument("--preset", help="JSON file with plate settings")
    parser.add_argument("--width", type=float, help="Plate width in mm")
    parser.add_argument("--height", type=float, help="Plate height in mm")
    parser.add_argument("--spacing", type=float, help="Hole pitch in mm")
    parser.add_argument("--min-hole", type=float, help="Minimum hole diameter in mm")
    parser.add_argument("--max-hole", type=float, help="Maximum hole diameter in mm")
    parser.add_argument("--margin", type=float, help="Border without holes in mm")
    parser.add_argument(
        "--invert",
        action="store_true",
        help="Big holes in light areas instead of dark",
    )
    parser.add_argument(
        "--log-level",
        default="INFO",
        choices=["DEBUG", "INFO", "WARNING", "ERROR"],
    )
    return parser


def main(argv: Optional[Sequence[str]] = None) -> int:
    args = build_parser().parse_args(argv)
    setup_logging(args.log_level)

    config = ConfigManager(args.preset).load()
    overrides = {
        field: getattr(args, option)
        for option, field in _OVERRIDES.items()
        if getattr(args, option) is not None
    }
    if args.invert:
        overrides["inverted"] = True
    config = clamp_config(replace(config, **overrides))

    try:
        image = load_image(args.image)
    except ValueError as e:
        logger.error("%s", e)
        return EXIT_DECODE_ERROR

    dot_set = generate_dot_set(image, config)
    path = export_svg(dot_set, config, args.output_dir)
    if path is None:
        logger.warning("No holes produced; check margin, spacing and hole sizes")
        return EXIT_NO_HOLES

    print(path)
    return EXIT_OK


if __name__ == "__main__":
    sys.exit(main())
