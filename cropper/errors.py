#!/usr/bin/env python3
"""
errors.py

Exception types raised by the cropper.

DirectoryError aborts a batch run; the others are per-file and only counted
as failures by the batch driver.
"""
from __future__ import annotations

from pathlib import Path
from typing import Optional


class CropperError(Exception):
    def __init__(self, message: str, path: Optional[Path] = None):
        super().__init__(message)
        self.path = Path(path) if path is not None else None


class DirectoryError(CropperError):
    """Output dir cannot be created or input dir cannot be listed."""


class DecodeError(CropperError):
    """File cannot be opened or is not a valid image."""


class UnsupportedFormatError(CropperError):
    """Image format is outside the supported JPEG/PNG pair."""


class EncodeError(CropperError):
    """Destination file cannot be created or written."""
