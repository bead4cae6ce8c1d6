"""
Module: ingest.media

Purpose:
    Best-guess media typing and data: URL encoding for assets.

Key Functions:
    - guess_media_type(): Declared type, extension, then image sniffing
    - sniff_image_type(): Identify raster images from their bytes
    - to_data_url(): Base64 data: URL for raw bytes

Dependencies:
    - PIL: Sniffs image formats when the name carries no usable extension
    - mimetypes (std): Extension lookup

Used By:
    - ingest.registry: Encodes every asset
"""

from __future__ import annotations

import base64
import io
import logging
import mimetypes
from typing import Optional

from PIL import Image, UnidentifiedImageError

logger = logging.getLogger(__name__)

FALLBACK_MEDIA_TYPE = "application/octet-stream"

# Font and vector types missing from some platform mime tables
_EXTRA_TYPES = {
    ".woff": "font/woff",
    ".woff2": "font/woff2",
    ".ttf": "font/ttf",
    ".otf": "font/otf",
    ".svg": "image/svg+xml",
    ".webp": "image/webp",
    ".avif": "image/avif",
}
for _ext, _type in _EXTRA_TYPES.items():
    mimetypes.add_type(_type, _ext)


def sniff_image_type(data: bytes) -> Optional[str]:
    """
    Identify a raster image from its header bytes.

    Returns:
        Media type such as "image/png", or None if Pillow cannot identify it
    """
    try:
        with Image.open(io.BytesIO(data)) as img:
            return Image.MIME.get(img.format) if img.format else None
    except (UnidentifiedImageError, OSError, ValueError):
        return None


def guess_media_type(name: str, data: bytes, declared: str = "") -> str:
    """
    Best-guess media type for an asset.

    Order: declared type, extension lookup, image sniffing, octet-stream.

    Example:
        >>> guess_media_type("logo.png", b"")
        'image/png'
    """
    if declared:
        return declared
    guessed, _ = mimetypes.guess_type(name, strict=False)
    if guessed:
        return guessed
    sniffed = sniff_image_type(data)
    if sniffed:
        logger.debug(f"Sniffed {sniffed} for {name}")
        return sniffed
    return FALLBACK_MEDIA_TYPE


def to_data_url(data: bytes, media_type: str) -> str:
    """Encode bytes as a base64 data: URL."""
    encoded = base64.b64encode(data).decode("ascii")
    return f"data:{media_type};base64,{encoded}"
