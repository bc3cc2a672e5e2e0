#!/usr/bin/env python3
"""
transform.py

Bottom-edge crop.

Usage:
    from cropper.transform import crop_bottom
    cropped = crop_bottom(image, 60)

The input is returned unchanged when cut_px <= 0 or when the image is not
taller than cut_px; an image is never cropped to zero height.
"""
from __future__ import annotations

import logging

from cropper.image_model import Bounds, PackedImage, PilImage

logger = logging.getLogger(__name__)


def crop_bottom(image, cut_px: int):
    """Remove `cut_px` rows from the bottom of `image`.

    PackedImage results are views over the source buffer; PilImage results
    are copies. Any other object is returned as-is with a warning.
    """
    if cut_px <= 0:
        return image

    if not isinstance(image, (PackedImage, PilImage)):
        logger.warning(f"{type(image).__name__} does not support sub-region extraction, returning original image")
        return image

    bounds = image.bounds
    if bounds.height <= cut_px:
        return image

    rect = Bounds(bounds.min_x, bounds.min_y, bounds.max_x, bounds.max_y - cut_px)
    if isinstance(image, PackedImage):
        return image.sub_image(rect)
    return image.copy_region(rect)
