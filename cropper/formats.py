#!/usr/bin/env python3
"""
formats.py

Closed set of image formats the cropper can round-trip.
"""
from __future__ import annotations

from enum import Enum
from typing import Optional

from cropper.errors import UnsupportedFormatError

# Pillow reports multi-picture JPEGs (common from cameras) as MPO
_PIL_ALIASES = {'MPO': 'JPEG'}


class ImageFormat(Enum):
    JPEG = 'JPEG'
    PNG = 'PNG'

    @property
    def pil_name(self) -> str:
        return self.value

    @classmethod
    def from_pil_name(cls, name: Optional[str], path=None) -> 'ImageFormat':
        """Map Pillow's detected format name to a member, rejecting anything else."""
        key = (name or '').upper()
        key = _PIL_ALIASES.get(key, key)
        for fmt in cls:
            if fmt.pil_name == key:
                return fmt
        raise UnsupportedFormatError(f"unsupported format: {name}", path)
