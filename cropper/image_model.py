#!/usr/bin/env python3
"""
image_model.py

In-memory pixel grids handled by the cropper.

Two backings exist:
- PackedImage: contiguous row-major numpy buffer for the 8-bit modes that
  map one-to-one onto an array (L, RGB, RGBA). Sub-regions are numpy views
  over the same buffer, no pixels are copied.
- PilImage: any other PIL image (palette, 16-bit, CMYK, ...). Sub-regions
  are copy-constructed with Image.crop, which keeps mode, palette and info.

Both keep the decoded mode; nothing here converts colours. Coordinates are
absolute: a sub-region keeps the min X/Y of the rectangle it was cut with,
so pixel(x, y) addresses the same pixel in the source and in the sub-region.
"""
from __future__ import annotations

from typing import NamedTuple, Tuple

import numpy as np
from PIL import Image

# 8-bit modes whose pixels map one-to-one onto a (h, w[, c]) uint8 array
PACKED_MODES = ('L', 'RGB', 'RGBA')


class Bounds(NamedTuple):
    min_x: int
    min_y: int
    max_x: int
    max_y: int

    @property
    def width(self) -> int:
        return self.max_x - self.min_x

    @property
    def height(self) -> int:
        return self.max_y - self.min_y

    def contains(self, other: 'Bounds') -> bool:
        return (self.min_x <= other.min_x and self.min_y <= other.min_y
                and other.max_x <= self.max_x and other.max_y <= self.max_y)


def _check_bounds(bounds: Bounds) -> Bounds:
    if bounds.width < 0 or bounds.height < 0:
        raise ValueError(f"negative image extent: {bounds}")
    return bounds


def _pixel_value(value):
    if isinstance(value, np.ndarray):
        return tuple(int(v) for v in value)
    return int(value)


class PackedImage:
    """Packed 8-bit buffer; supports zero-copy sub-region extraction."""

    def __init__(self, pixels: np.ndarray, origin: Tuple[int, int] = (0, 0), info=None):
        if pixels.dtype != np.uint8:
            raise ValueError(f"expected uint8 array, got {pixels.dtype}")
        if pixels.ndim == 2:
            self.mode = 'L'
        elif pixels.ndim == 3 and pixels.shape[2] == 3:
            self.mode = 'RGB'
        elif pixels.ndim == 3 and pixels.shape[2] == 4:
            self.mode = 'RGBA'
        else:
            raise ValueError(f"expected (h, w), (h, w, 3) or (h, w, 4) array, got {pixels.shape}")
        self.pixels = pixels
        self.info = dict(info or {})
        h, w = pixels.shape[:2]
        ox, oy = origin
        self.bounds = _check_bounds(Bounds(ox, oy, ox + w, oy + h))

    @classmethod
    def from_pil(cls, image: Image.Image) -> 'PackedImage':
        if image.mode not in PACKED_MODES:
            raise ValueError(f"mode {image.mode} has no packed layout")
        return cls(np.array(image, dtype=np.uint8), info=image.info)

    @property
    def width(self) -> int:
        return self.bounds.width

    @property
    def height(self) -> int:
        return self.bounds.height

    def pixel(self, x: int, y: int):
        if not self.bounds.contains(Bounds(x, y, x + 1, y + 1)):
            raise IndexError(f"pixel ({x}, {y}) outside {self.bounds}")
        return _pixel_value(self.pixels[y - self.bounds.min_y, x - self.bounds.min_x])

    def sub_image(self, bounds: Bounds) -> 'PackedImage':
        """Return a view of `bounds`; raises ValueError if it is not inside this image."""
        if not self.bounds.contains(bounds):
            raise ValueError(f"{bounds} is not inside {self.bounds}")
        ox, oy = self.bounds.min_x, self.bounds.min_y
        view = self.pixels[bounds.min_y - oy:bounds.max_y - oy,
                           bounds.min_x - ox:bounds.max_x - ox]
        return PackedImage(view, origin=(bounds.min_x, bounds.min_y), info=self.info)

    def to_pil(self) -> Image.Image:
        img = Image.fromarray(np.ascontiguousarray(self.pixels))
        img.info.update(self.info)
        return img


class PilImage:
    """PIL-backed image in its native mode; reduced images are copied, never shared."""

    def __init__(self, image: Image.Image, origin: Tuple[int, int] = (0, 0)):
        self.image = image
        ox, oy = origin
        self.bounds = _check_bounds(Bounds(ox, oy, ox + image.width, oy + image.height))

    @property
    def mode(self) -> str:
        return self.image.mode

    @property
    def width(self) -> int:
        return self.bounds.width

    @property
    def height(self) -> int:
        return self.bounds.height

    def pixel(self, x: int, y: int):
        if not self.bounds.contains(Bounds(x, y, x + 1, y + 1)):
            raise IndexError(f"pixel ({x}, {y}) outside {self.bounds}")
        return self.image.getpixel((x - self.bounds.min_x, y - self.bounds.min_y))

    def copy_region(self, bounds: Bounds) -> 'PilImage':
        if not self.bounds.contains(bounds):
            raise ValueError(f"{bounds} is not inside {self.bounds}")
        ox, oy = self.bounds.min_x, self.bounds.min_y
        box = (bounds.min_x - ox, bounds.min_y - oy, bounds.max_x - ox, bounds.max_y - oy)
        return PilImage(self.image.crop(box), origin=(bounds.min_x, bounds.min_y))

    def to_pil(self) -> Image.Image:
        return self.image


def from_pil(image: Image.Image):
    """Wrap a decoded PIL image in the backing that fits its mode.

    Both backings own their pixels, so the result stays valid after the
    source image is closed.
    """
    if image.mode in PACKED_MODES:
        return PackedImage.from_pil(image)
    return PilImage(image.copy())
