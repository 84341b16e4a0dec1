"""
Module: images

Purpose:
    Image-carrying models: the caller-owned SourceImage and the stitched
    Composite produced by the stitching pipeline.

Key Classes:
    - SourceImage: Decoded input image with its own CropSpec
    - ImagePlacement: Where one source landed inside the composite
    - Composite: Stitched raster plus placement bookkeeping

Dependencies:
    - PIL.Image: Pixel storage
    - core.models.crop: CropSpec

Used By:
    - stitching.loader: Creates SourceImage
    - stitching.compositor: Creates Composite
    - slicing.controller: Reads Composite
"""

from __future__ import annotations

from dataclasses import dataclass, field, replace
from functools import cached_property

from PIL import Image

from .crop import CropSpec


@dataclass(frozen=True)
class SourceImage:
    """
    A decoded source image (immutable).

    The pipeline reads the pixel data but never modifies it; any derived
    image is a new PIL image.

    Attributes:
        id: Stable identifier
        name: Display name (file stem for loaded files)
        image: Decoded PIL image
        width: Original width in pixels
        height: Original height in pixels
        crop: Per-image crop/pad specification

    Example:
        >>> src = SourceImage("a1", "shot", img, img.width, img.height)
        >>> src.with_crop(CropSpec(top=20)).effective_size
        (img.width, img.height - 20)
    """

    id: str
    name: str
    image: Image.Image = field(compare=False, repr=False)
    width: int
    height: int
    crop: CropSpec = field(default_factory=CropSpec)

    def __post_init__(self) -> None:
        if self.width <= 0 or self.height <= 0:
            raise ValueError(
                f"Image dimensions must be positive: {self.width}x{self.height}"
            )

    @classmethod
    def from_image(
        cls,
        image: Image.Image,
        *,
        image_id: str,
        name: str,
        crop: CropSpec | None = None,
    ) -> SourceImage:
        """Build from a PIL image, taking dimensions from the image itself."""
        return cls(
            id=image_id,
            name=name,
            image=image,
            width=image.width,
            height=image.height,
            crop=crop or CropSpec(),
        )

    @property
    def effective_size(self) -> tuple[int, int]:
        """(width, height) after applying this image's crop/pad."""
        return self.crop.effective_size(self.width, self.height)

    def with_crop(self, crop: CropSpec) -> SourceImage:
        """Return a copy carrying a different crop spec."""
        return replace(self, crop=crop)


@dataclass(frozen=True, slots=True)
class ImagePlacement:
    """
    Vertical position of one source image inside a composite.

    Attributes:
        source_id: SourceImage.id
        name: SourceImage.name
        top: Y offset in the composite
        height: Resampled height in pixels
    """

    source_id: str
    name: str
    top: int
    height: int

    @property
    def bottom(self) -> int:
        """Bottom Y coordinate (exclusive)."""
        return self.top + self.height


@dataclass(frozen=True)
class Composite:
    """
    Stitched raster (read-only artifact for preview and slicing).

    Attributes:
        image: RGB PIL image of size (width, height)
        width: Common target width
        height: Sum of all resampled heights
        placements: One ImagePlacement per source, in input order
    """

    image: Image.Image = field(compare=False, repr=False)
    width: int
    height: int
    placements: tuple[ImagePlacement, ...] = ()

    @cached_property
    def preview_bytes(self) -> bytes:
        """PNG encoding of the whole composite, computed on first access."""
        from slicestream.slicing.encoder import encode_image
        from .slices import OutputFormat

        return encode_image(self.image, OutputFormat.PNG)

    @property
    def image_count(self) -> int:
        return len(self.placements)
