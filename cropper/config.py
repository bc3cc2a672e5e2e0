#!/usr/bin/env python3
"""
config.py

Defaults shared by the cropper CLI and the batch driver.
"""
from __future__ import annotations

from pathlib import Path

DEFAULT_INPUT_DIR = Path('./tmp/images/input')
DEFAULT_OUTPUT_DIR = Path('./tmp/images/output')
DEFAULT_CUT_PX = 60

# Output files land flat in the output dir as OUTPUT_PREFIX + original name
OUTPUT_PREFIX = 'cropped_'

# Same as Pillow's own default JPEG quality
JPEG_QUALITY = 75
