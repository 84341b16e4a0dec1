"""
Module: slicing.encoder

Purpose:
    Encode a horizontal band of the composite (or a whole image) into
    PNG or JPEG bytes. Bands are cut with a plain crop; pixels are never
    resampled here.

Key Functions:
    - encode_band(): Encode one band at full width
    - encode_image(): Encode an image as-is
    - jpeg_quality(): Map a [0, 1] quality to Pillow's scale

Dependencies:
    - PIL: Encoding
    - io (std)

Used By:
    - slicing.controller
    - core.models.images.Composite.preview_bytes
"""

from __future__ import annotations

import io
import logging

from PIL import Image

from slicestream.config import DEFAULT_QUALITY
from slicestream.core.errors import EncodeError
from slicestream.core.models import OutputFormat

logger = logging.getLogger(__name__)

# Pillow warns that JPEG quality above 95 mostly grows the file
MAX_JPEG_QUALITY = 95
MIN_JPEG_QUALITY = 1


def jpeg_quality(quality: float) -> int:
    """
    Convert a [0, 1] quality fraction to Pillow's JPEG quality.

    Example:
        >>> jpeg_quality(0.92)
        92
    """
    scaled = int(quality * 100 + 0.5)
    return max(MIN_JPEG_QUALITY, min(MAX_JPEG_QUALITY, scaled))


def encode_image(
    image: Image.Image,
    fmt: OutputFormat,
    quality: float = DEFAULT_QUALITY,
) -> bytes:
    """
    Encode an image to bytes.

    Args:
        image: Image to encode
        fmt: Output format
        quality: [0, 1] quality, used for lossy formats only

    Returns:
        Encoded bytes

    Raises:
        EncodeError: If the image is empty or the codec rejects it
    """
    if image.width <= 0 or image.height <= 0:
        raise EncodeError(f"Cannot encode empty image ({image.width}x{image.height})")

    buffer = io.BytesIO()
    try:
        if fmt.is_lossy:
            if image.mode != "RGB":
                image = image.convert("RGB")
            image.save(buffer, format=fmt.pil_format, quality=jpeg_quality(quality))
        else:
            image.save(buffer, format=fmt.pil_format)
    except (OSError, ValueError, SystemError) as e:
        raise EncodeError(f"{fmt.pil_format} encoder failed: {e}") from e
    return buffer.getvalue()


def encode_band(
    image: Image.Image,
    top: int,
    height: int,
    fmt: OutputFormat,
    quality: float = DEFAULT_QUALITY,
) -> bytes:
    """
    Encode the band [top, top + height) of an image at full width.

    Args:
        image: Composite image
        top: First row of the band
        height: Number of rows
        fmt: Output format
        quality: [0, 1] quality, used for lossy formats only

    Returns:
        Encoded bytes of a (image.width x height) image

    Raises:
        EncodeError: If the band is empty, lies outside the image, or
            the codec fails

    Example:
        >>> data = encode_band(composite.image, 0, 100, OutputFormat.PNG)
        >>> Image.open(io.BytesIO(data)).size
        (composite.width, 100)
    """
    if height <= 0:
        raise EncodeError(f"Cannot encode band of height {height} at y={top}")
    if top < 0 or top + height > image.height:
        raise EncodeError(
            f"Band [{top}, {top + height}) outside image of height {image.height}"
        )

    band = image.crop((0, top, image.width, top + height))
    return encode_image(band, fmt, quality)
