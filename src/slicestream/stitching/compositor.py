"""
Module: stitching.compositor

Purpose:
    Creates the composite image: every source is cropped/padded, scaled
    to a common width and stacked vertically in input order.

Key Functions:
    - plan_layout(): Target width and Y offsets, computed without pixels
    - stitch_images(): Build the composite

Key Classes:
    - StitchPlan: Geometry of a stitch pass

Dependencies:
    - PIL.Image: Image stitching
    - concurrent.futures: Optional per-image parallelism
    - stitching.crop_pad, stitching.resampler

Used By:
    - pipeline: build_composite(), run_pipeline()
    - session: StitchSession
"""

from __future__ import annotations

import logging
from concurrent.futures import ThreadPoolExecutor
from dataclasses import dataclass
from typing import List, Optional, Sequence, Tuple

from PIL import Image

from slicestream.config import StitchConfig
from slicestream.core.errors import EmptyInputError, RasterContextError
from slicestream.core.models import Composite, ImagePlacement, SourceImage
from slicestream.timing import TimingLog, timed_stage

from .crop_pad import apply_crop_pad, effective_size
from .resampler import resample_to_width, scaled_height

logger = logging.getLogger(__name__)


@dataclass(frozen=True)
class StitchPlan:
    """
    Geometry of a stitch pass (immutable).

    Attributes:
        width: Common target width
        effective_sizes: (width, height) of each image after crop/pad
        placements: Where each image goes, in input order
    """
    width: int
    effective_sizes: Tuple[Tuple[int, int], ...]
    placements: Tuple[ImagePlacement, ...]

    @property
    def height(self) -> int:
        """Total composite height."""
        return sum(p.height for p in self.placements)


def plan_layout(
    images: Sequence[SourceImage],
    target_width: Optional[int] = None,
) -> StitchPlan:
    """
    Compute composite geometry from declared dimensions only.

    Every crop is validated before any pixel work, so a bad crop fails
    fast and names the first offending image in input order.

    Args:
        images: Ordered source images
        target_width: Explicit width; None or <= 0 means "widest
            effective image"

    Returns:
        StitchPlan with per-image offsets

    Raises:
        EmptyInputError: If images is empty
        InvalidCropError: If any crop leaves a non-positive dimension

    Example:
        >>> plan = plan_layout([a, b, c])  # 100x50, 200x80, 150x60
        >>> plan.width, plan.height
        (200, 260)
    """
    if not images:
        raise EmptyInputError("No images to stitch")

    sizes = tuple(effective_size(img) for img in images)

    if target_width is not None and target_width > 0:
        width = int(target_width)
    else:
        width = max(w for w, _ in sizes)

    placements: List[ImagePlacement] = []
    y_offset = 0
    for img, (w, h) in zip(images, sizes):
        height = scaled_height(w, h, width)
        placements.append(ImagePlacement(source_id=img.id, name=img.name, top=y_offset, height=height))
        y_offset += height

    return StitchPlan(width=width, effective_sizes=sizes, placements=tuple(placements))


def stitch_images(
    images: Sequence[SourceImage],
    target_width: Optional[int] = None,
    *,
    config: Optional[StitchConfig] = None,
    timings: Optional[TimingLog] = None,
) -> Composite:
    """
    Stitch source images into a single composite.

    Each image is cropped/padded, scaled to the common width and pasted
    at its pre-computed Y offset. With config.max_workers > 1 the per-image
    work runs on a thread pool; paste positions come from the plan, so the
    result is identical to a sequential run.

    Args:
        images: Ordered source images. A snapshot is taken on entry.
        target_width: Explicit composite width (None = widest image)
        config: Stitch settings (defaults to StitchConfig())
        timings: Optional timing log

    Returns:
        Composite of size (width, sum of scaled heights)

    Raises:
        EmptyInputError: If images is empty
        InvalidCropError: If any crop leaves a non-positive dimension
        ImageLoadError: If a source image's pixels cannot be decoded
        RasterContextError: If the composite cannot be allocated
    """
    config = config or StitchConfig()
    snapshot = tuple(images)
    plan = plan_layout(snapshot, target_width)

    composite = _allocate(plan.width, plan.height, config)

    def render(index: int) -> Optional[Image.Image]:
        source = snapshot[index]
        placement = plan.placements[index]
        if placement.height == 0:
            logger.debug(f"Image {source.name!r} scales to zero rows, skipping draw")
            return None
        with timed_stage(timings, "crop_pad", image_id=source.id):
            effective = apply_crop_pad(source, background=config.background)
        with timed_stage(timings, "resample", image_id=source.id):
            return resample_to_width(effective, plan.width, resample=config.resample)

    with timed_stage(timings, "stitch"):
        indices = range(len(snapshot))
        if config.parallel and len(snapshot) > 1:
            with ThreadPoolExecutor(max_workers=config.max_workers) as pool:
                # map() yields in submission order regardless of completion order
                rendered = list(pool.map(render, indices))
        else:
            rendered = [render(i) for i in indices]

        for placement, scaled in zip(plan.placements, rendered):
            if scaled is not None:
                composite.paste(scaled, (0, placement.top))

    logger.info(
        f"Stitched {len(snapshot)} images into {plan.width}x{plan.height} composite"
    )

    return Composite(
        image=composite,
        width=plan.width,
        height=plan.height,
        placements=plan.placements,
    )


def _allocate(width: int, height: int, config: StitchConfig) -> Image.Image:
    """Allocate the composite canvas or raise RasterContextError."""
    if height <= 0:
        raise RasterContextError(f"Composite would have no rows ({width}x{height})")
    if width * height > config.max_pixels:
        raise RasterContextError(
            f"Composite {width}x{height} exceeds limit of {config.max_pixels} pixels"
        )
    try:
        return Image.new("RGB", (width, height), config.background)
    except (MemoryError, ValueError) as e:
        raise RasterContextError(f"Could not allocate {width}x{height} composite: {e}") from e
