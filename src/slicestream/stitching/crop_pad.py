"""
Module: stitching.crop_pad

Purpose:
    Apply a per-image crop/pad to produce the "effective" image that is
    later scaled and stitched.

Key Functions:
    - effective_size(): Validated dimensions after crop/pad (no pixels touched)
    - apply_crop_pad(): Render the effective image

Dependencies:
    - PIL: Image manipulation
    - core.models: SourceImage, CropSpec

Used By:
    - stitching.compositor
"""

from __future__ import annotations

from typing import Optional, Tuple

from PIL import Image

from slicestream.config import DEFAULT_BACKGROUND
from slicestream.core.errors import ImageLoadError, InvalidCropError
from slicestream.core.models import CropSpec, SourceImage


def effective_size(source: SourceImage, crop: Optional[CropSpec] = None) -> Tuple[int, int]:
    """
    Dimensions of the source after crop/pad.

    Args:
        source: Source image
        crop: Override for source.crop

    Returns:
        (width, height), both positive

    Raises:
        InvalidCropError: If either dimension would be <= 0
    """
    crop = crop if crop is not None else source.crop
    width, height = crop.effective_size(source.width, source.height)
    if width <= 0 or height <= 0:
        raise InvalidCropError(source.id, source.name, width, height)
    return width, height


def apply_crop_pad(
    source: SourceImage,
    crop: Optional[CropSpec] = None,
    *,
    background: Tuple[int, int, int] = DEFAULT_BACKGROUND,
) -> Image.Image:
    """
    Render the effective image for a source.

    The source is drawn at (-left, -top) on a new canvas filled with
    `background`. Positive crop values push content off the canvas,
    negative ones leave background bands. Transparent pixels are
    composited over the background.

    Args:
        source: Source image (not modified)
        crop: Override for source.crop
        background: RGB fill colour

    Returns:
        New RGB image of the effective size

    Raises:
        InvalidCropError: If either dimension would be <= 0
        ImageLoadError: If the source pixels cannot be decoded

    Example:
        >>> img = apply_crop_pad(src, CropSpec(left=-10))
        >>> img.width == src.width + 10
        True
    """
    crop = crop if crop is not None else source.crop
    size = effective_size(source, crop)

    canvas = Image.new("RGB", size, background)
    pixels = source.image
    try:
        # Covers alpha bands as well as tRNS colour keys on RGB, L and P images
        if pixels.has_transparency_data:
            rgba = pixels.convert("RGBA")
            canvas.paste(rgba, crop.offset, rgba)
        else:
            canvas.paste(pixels.convert("RGB"), crop.offset)
    except (OSError, ValueError) as e:
        raise ImageLoadError(f"Could not decode image {source.name!r}: {e}") from e
    return canvas
