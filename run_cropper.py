#!/usr/bin/env python3
"""
run_cropper.py

Remove a fixed number of pixel rows from the bottom of every JPEG/PNG image
in a directory, keeping each file's format.

Usage:
    python run_cropper.py [--input INPUT_DIR] [--output OUTPUT_DIR] [--cut PIXELS] [--verbose]

Results are written as cropped_<name> into the output directory. Exits 1 if
the input directory cannot be read or the output directory cannot be created.
"""

import argparse
import logging
import sys
from pathlib import Path

from cropper.batch import crop_images
from cropper.config import DEFAULT_CUT_PX, DEFAULT_INPUT_DIR, DEFAULT_OUTPUT_DIR
from cropper.errors import DirectoryError

logger = logging.getLogger(__name__)


def build_parser() -> argparse.ArgumentParser:
    parser = argparse.ArgumentParser(
        description="Crop pixels from the bottom of every image in a directory",
        formatter_class=argparse.RawDescriptionHelpFormatter
    )
    parser.add_argument('--input', type=Path, default=DEFAULT_INPUT_DIR,
                        help=f'Input directory path (default: {DEFAULT_INPUT_DIR})')
    parser.add_argument('--output', type=Path, default=DEFAULT_OUTPUT_DIR,
                        help=f'Output directory path (default: {DEFAULT_OUTPUT_DIR})')
    parser.add_argument('--cut', type=int, default=DEFAULT_CUT_PX,
                        help=f'Pixels to cut from bottom (default: {DEFAULT_CUT_PX})')
    parser.add_argument('--verbose', action='store_true',
                        help='Enable verbose logging')
    return parser


def main(argv=None) -> int:
    """Main entry point."""
    args = build_parser().parse_args(argv)

    logging.basicConfig(
        level=logging.INFO,
        format='%(asctime)s - %(levelname)s - %(message)s',
        handlers=[logging.StreamHandler()]
    )
    if args.verbose:
        logging.getLogger().setLevel(logging.DEBUG)

    try:
        crop_images(args.input, args.output, args.cut)
    except DirectoryError as e:
        logger.error(f"failed to crop images: {e}")
        return 1
    return 0


if __name__ == "__main__":
    sys.exit(main())
