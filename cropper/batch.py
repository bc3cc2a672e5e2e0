#!/usr/bin/env python3
"""
batch.py

Crop every image in a directory and write the results to another one.

Usage:
    from cropper.batch import crop_images
    result = crop_images(Path('in'), Path('out'), cut_px=60)

Only directory-level problems are fatal (DirectoryError). Files that fail
to decode or encode are logged, counted and skipped.
"""
from __future__ import annotations

import logging
from pathlib import Path
from typing import List, Tuple

from cropper import codec
from cropper.config import OUTPUT_PREFIX
from cropper.errors import CropperError, DirectoryError
from cropper.transform import crop_bottom

logger = logging.getLogger(__name__)


class BatchResult:
    def __init__(self):
        self.success_count = 0
        self.fail_count = 0
        self.failures: List[Tuple[str, CropperError]] = []

    @property
    def total(self) -> int:
        return self.success_count + self.fail_count

    def record_failure(self, name: str, error: CropperError) -> None:
        self.fail_count += 1
        self.failures.append((name, error))

    def __repr__(self) -> str:
        return f"BatchResult(success_count={self.success_count}, fail_count={self.fail_count})"


def build_image_path(dir_path, file_name: str) -> Path:
    return Path(dir_path) / file_name


def _list_files(input_dir: Path) -> List[Path]:
    try:
        entries = sorted(input_dir.iterdir(), key=lambda p: p.name)
    except OSError as exc:
        raise DirectoryError(f"failed to read input directory {input_dir}: {exc}", input_dir) from exc
    return [p for p in entries if not p.is_dir()]


def crop_images(input_dir, output_dir, cut_px: int) -> BatchResult:
    """Crop `cut_px` rows off the bottom of every file in `input_dir`.

    Subdirectories are skipped, not recursed into. Each output is written
    flat into `output_dir` as OUTPUT_PREFIX + original name.

    Raises:
        DirectoryError: output dir cannot be created or input dir cannot be read.
    """
    input_dir = Path(input_dir)
    output_dir = Path(output_dir)

    try:
        output_dir.mkdir(parents=True, exist_ok=True)
    except OSError as exc:
        raise DirectoryError(f"failed to create output directory {output_dir}: {exc}", output_dir) from exc

    files = _list_files(input_dir)
    logger.debug(f"Found {len(files)} file(s) in {input_dir}")

    result = BatchResult()
    for input_path in files:
        name = input_path.name
        output_path = build_image_path(output_dir, OUTPUT_PREFIX + name)

        try:
            image, fmt = codec.decode(input_path)
        except CropperError as e:
            logger.error(f"failed to decode {name}: {e}")
            result.record_failure(name, e)
            continue

        cropped = crop_bottom(image, cut_px)
        try:
            codec.encode(output_path, cropped, fmt)
        except CropperError as e:
            logger.error(f"failed to save {name}: {e}")
            result.record_failure(name, e)
            continue

        logger.info(f"processed: {name}")
        result.success_count += 1

    logger.info(f"completed: {result.success_count} succeeded, {result.fail_count} failed")
    return result
