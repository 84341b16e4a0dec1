"""
Module: core.errors

Purpose:
    Exception hierarchy for the stitch/slice pipeline. Every failure the
    pipeline reports is a SliceStreamError subclass so callers can handle
    them as typed results.

Key Classes:
    - SliceStreamError: Base class
    - InvalidCropError: Crop/pad leaves a non-positive dimension
    - EmptyInputError: Nothing to stitch
    - RasterContextError: Composite raster could not be allocated
    - EncodeError: A band could not be encoded
    - InvalidPolicyError: Slicing policy rejected at configuration time
    - ImageLoadError: Source could not be decoded

Used By:
    - stitching: InvalidCropError, EmptyInputError, RasterContextError, ImageLoadError
    - slicing: EncodeError
    - core.models.slices: InvalidPolicyError
"""

from __future__ import annotations

from typing import Optional


class SliceStreamError(Exception):
    """Base class for all pipeline errors."""
    pass


class InvalidCropError(SliceStreamError, ValueError):
    """
    Crop/pad settings leave an image with no pixels.

    Attributes:
        image_id: Id of the offending source image
        image_name: Display name of the offending source image
        width: Resulting width after crop/pad
        height: Resulting height after crop/pad
    """

    def __init__(self, image_id: str, image_name: str, width: int, height: int) -> None:
        self.image_id = image_id
        self.image_name = image_name
        self.width = width
        self.height = height
        super().__init__(
            f"Invalid crop dimensions for image {image_name!r} ({image_id}): "
            f"{width}x{height}"
        )


class EmptyInputError(SliceStreamError):
    """No images were supplied to stitch."""
    pass


class RasterContextError(SliceStreamError):
    """The output raster could not be allocated. Fatal for the run."""
    pass


class EncodeError(SliceStreamError):
    """
    A band could not be encoded.

    Attributes:
        index: 1-based slice index, when known
    """

    def __init__(self, message: str, *, index: Optional[int] = None) -> None:
        self.index = index
        super().__init__(message)


class InvalidPolicyError(SliceStreamError, ValueError):
    """Slicing policy values are out of range."""
    pass


class ImageLoadError(SliceStreamError):
    """Source image could not be opened or decoded."""
    pass
