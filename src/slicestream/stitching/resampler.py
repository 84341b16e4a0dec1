"""
Module: stitching.resampler

Purpose:
    Aspect-preserving rescale of effective images to the common width.

Key Functions:
    - scaled_height(): Height after scaling, rounded half away from zero
    - resample_to_width(): Rescale a PIL image to a target width

Dependencies:
    - PIL: Resampling

Used By:
    - stitching.compositor
"""

from __future__ import annotations

from PIL import Image


def scaled_height(width: int, height: int, target_width: int) -> int:
    """
    Height of a (width x height) image scaled to target_width.

    Computes round(height * target_width / width) with halves rounded
    away from zero, using integer arithmetic so the result never depends
    on float representation.

    Args:
        width: Source width (> 0)
        height: Source height (> 0)
        target_width: Width to scale to (> 0)

    Returns:
        Scaled height in pixels

    Raises:
        ValueError: If any argument is not positive

    Example:
        >>> scaled_height(150, 60, 200)
        80
        >>> scaled_height(4, 1, 2)  # 0.5 rounds up
        1
    """
    if width <= 0 or height <= 0 or target_width <= 0:
        raise ValueError(
            f"Dimensions must be positive: {width}x{height} -> {target_width}"
        )
    numerator = height * target_width
    return (2 * numerator + width) // (2 * width)


def resample_to_width(
    image: Image.Image,
    target_width: int,
    *,
    resample: Image.Resampling = Image.Resampling.LANCZOS,
) -> Image.Image:
    """
    Rescale an image to target_width, preserving aspect ratio.

    Images already at the target width are copied without resampling.

    Args:
        image: Effective image
        target_width: Output width in pixels
        resample: PIL filter (deterministic for a given input)

    Returns:
        New image of size (target_width, scaled_height)

    Raises:
        ValueError: If the scaled height rounds to 0 rows
    """
    new_height = scaled_height(image.width, image.height, target_width)
    if new_height == 0:
        raise ValueError(
            f"{image.width}x{image.height} image scales to zero rows at width {target_width}"
        )
    if image.width == target_width and image.height == new_height:
        return image.copy()
    return image.resize((target_width, new_height), resample)
