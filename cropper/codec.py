#!/usr/bin/env python3
"""
codec.py

Decode image files into PackedImage or PilImage (see cropper.image_model)
and encode them back in the format and mode they came in. Only JPEG and PNG
are accepted (see cropper.formats).
"""
from __future__ import annotations

import logging
from pathlib import Path

from PIL import Image, UnidentifiedImageError

from cropper.config import JPEG_QUALITY
from cropper.errors import DecodeError, EncodeError, UnsupportedFormatError
from cropper.formats import ImageFormat
from cropper.image_model import from_pil

logger = logging.getLogger(__name__)

# Modes each Pillow encoder writes as-is
_JPEG_MODES = {'1', 'L', 'RGB', 'CMYK', 'YCbCr'}
_PNG_MODES = {'1', 'L', 'LA', 'I', 'I;16', 'I;16B', 'P', 'RGB', 'RGBA'}


def decode(path):
    """Read `path`, detect its format from the file signature and load the pixels.

    The image keeps the mode it was stored in (8-bit, 16-bit, palette, ...).

    Raises:
        DecodeError: the file cannot be opened or is not a valid image.
        UnsupportedFormatError: the image decodes but is neither JPEG nor PNG.
    """
    path = Path(path)
    try:
        with open(path, 'rb') as fh:
            with Image.open(fh) as img:
                fmt = ImageFormat.from_pil_name(img.format, path)
                img.load()
                image = from_pil(img)
    except UnidentifiedImageError as exc:
        raise DecodeError(f"not a valid image: {path}", path) from exc
    except Image.DecompressionBombError as exc:
        raise DecodeError(f"image too large: {path}: {exc}", path) from exc
    except (OSError, SyntaxError, ValueError) as exc:
        # Pillow reports truncated or malformed data as OSError/SyntaxError
        raise DecodeError(f"failed to decode {path}: {exc}", path) from exc

    logger.debug(f"Decoded {path.name}: {fmt.name} {image.mode} {image.width}x{image.height}")
    return image, fmt


def _encode_jpeg(image, fh) -> None:
    pil_image = image.to_pil()
    if pil_image.mode not in _JPEG_MODES:
        # JPEG has no alpha channel or palette
        pil_image = pil_image.convert('L' if pil_image.mode == 'LA' else 'RGB')
    pil_image.save(fh, format=ImageFormat.JPEG.pil_name, quality=JPEG_QUALITY)


def _encode_png(image, fh) -> None:
    pil_image = image.to_pil()
    if pil_image.mode not in _PNG_MODES:
        pil_image = pil_image.convert('RGBA')
    pil_image.save(fh, format=ImageFormat.PNG.pil_name)


_ENCODERS = {
    ImageFormat.JPEG: _encode_jpeg,
    ImageFormat.PNG: _encode_png,
}


def encode(path, image, fmt: ImageFormat) -> None:
    """Create or truncate `path` and write `image` in `fmt`.

    The image is written in its own mode unless the encoder cannot store
    it (e.g. RGBA as JPEG). A partially written file is removed on failure.

    Raises:
        UnsupportedFormatError: `fmt` is not a supported ImageFormat.
        EncodeError: the file cannot be created or written.
    """
    path = Path(path)
    encoder = _ENCODERS.get(fmt) if isinstance(fmt, ImageFormat) else None
    if encoder is None:
        raise UnsupportedFormatError(f"unsupported format: {fmt}", path)

    try:
        fh = open(path, 'wb')
    except OSError as exc:
        raise EncodeError(f"failed to create {path}: {exc}", path) from exc

    try:
        with fh:
            encoder(image, fh)
    except (OSError, ValueError) as exc:
        path.unlink(missing_ok=True)
        raise EncodeError(f"failed to write {path}: {exc}", path) from exc

    logger.debug(f"Encoded {path.name}: {fmt.name} {image.width}x{image.height}")
