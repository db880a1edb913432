"""Loading JPEG and PNG images into raw RGB pixels, and saving JPEGs."""

from __future__ import annotations

import io
from dataclasses import dataclass

from PIL import Image, UnidentifiedImageError

DEFAULT_JPEG_QUALITY = 85


@dataclass
class ImageFormat:
    """An image as rows of 8-bit RGB pixels, top row first."""

    width: int
    height: int
    data: bytes
    alpha: bool = False


def _load(data: bytes, expected: str) -> ImageFormat:
    try:
        with Image.open(io.BytesIO(bytes(data))) as picture:
            if picture.format != expected:
                raise ValueError(f"data is not a {expected} image")
            rgb = picture.convert("RGB")
            return ImageFormat(
                width=rgb.width, height=rgb.height, data=rgb.tobytes(), alpha=False
            )
    except (UnidentifiedImageError, OSError) as exc:
        raise ValueError(f"cannot decode {expected} image: {exc}") from exc


def jpeg_load(data: bytes) -> ImageFormat:
    """Decode JPEG data to RGB pixels; ValueError if it is not a JPEG."""
    return _load(data, "JPEG")


def png_load(data: bytes) -> ImageFormat:
    """Decode PNG data to RGB pixels, dropping any alpha; ValueError if not a PNG."""
    return _load(data, "PNG")


def jpeg_save(image: ImageFormat, quality: int = DEFAULT_JPEG_QUALITY) -> bytes:
    """Encode RGB pixels as a JPEG at the given quality (1 to 100)."""
    expected = image.width * image.height * 3
    if len(image.data) != expected:
        raise ValueError(
            f"expected {expected} bytes of RGB data, got {len(image.data)}"
        )
    picture = Image.frombytes("RGB", (image.width, image.height), bytes(image.data))
    out = io.BytesIO()
    picture.save(out, format="JPEG", quality=quality)
    return out.getvalue()