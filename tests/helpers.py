"""Fixture images shared by the test modules."""
from pathlib import Path

import numpy as np
from PIL import Image

from cropper.image_model import PackedImage


def gradient_pixels(width: int, height: int) -> np.ndarray:
    ys, xs = np.mgrid[0:height, 0:width]
    pixels = np.empty((height, width, 4), dtype=np.uint8)
    pixels[..., 0] = xs % 256
    pixels[..., 1] = ys % 256
    pixels[..., 2] = (xs + ys) % 256
    pixels[..., 3] = 255
    return pixels


def gradient_image(width: int, height: int) -> PackedImage:
    return PackedImage(gradient_pixels(width, height))


def save_test_image(path: Path, width: int, height: int, pil_format: str) -> Path:
    img = Image.new('RGB', (width, height), (255, 0, 0))
    img.save(path, format=pil_format)
    return path
