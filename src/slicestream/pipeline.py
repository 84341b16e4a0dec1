"""
Module: pipeline

Purpose:
    Orchestrate the complete stitch-and-slice pipeline.
    Crop/Pad → Resample → Stitch → Partition → Encode + Name

Key Functions:
    - build_composite(): Stitch stage; None when there is nothing to stitch
    - run_pipeline(): Both stages in one call

Key Classes:
    - PipelineResult: Composite, slice batch and timings

Dependencies:
    - slicestream.stitching
    - slicestream.slicing

Used By:
    - slicestream.session
    - Callers wiring the pipeline into a UI or export flow
"""

from __future__ import annotations

import logging
from dataclasses import dataclass, field
from datetime import date
from typing import Optional, Sequence

from slicestream.config import StitchConfig
from slicestream.core.errors import EmptyInputError, SliceStreamError
from slicestream.core.models import Composite, SliceBatch, SlicePolicy, SourceImage
from slicestream.slicing import EncodeFailurePolicy, slice_composite
from slicestream.stitching import stitch_images
from slicestream.timing import TimingLog

logger = logging.getLogger(__name__)


@dataclass(frozen=True)
class PipelineResult:
    """
    Complete pipeline result (immutable).

    Attributes:
        composite: Stitched composite (for preview)
        batch: Generated slices
        timings: Stage timings for the run
    """
    composite: Composite
    batch: SliceBatch
    timings: TimingLog = field(default_factory=TimingLog, compare=False, repr=False)

    @property
    def slice_count(self) -> int:
        return len(self.batch.slices)


def build_composite(
    images: Sequence[SourceImage],
    target_width: Optional[int] = None,
    *,
    config: Optional[StitchConfig] = None,
    timings: Optional[TimingLog] = None,
) -> Optional[Composite]:
    """
    Run the stitch stage.

    Empty input is not an error at this level: it means there is
    nothing to preview, so None is returned.

    Args:
        images: Ordered source images
        target_width: Explicit width (None = widest image)
        config: Stitch settings
        timings: Optional timing log

    Returns:
        Composite, or None if images is empty

    Raises:
        InvalidCropError: If any crop leaves a non-positive dimension
        RasterContextError: If the composite cannot be allocated
    """
    try:
        return stitch_images(images, target_width, config=config, timings=timings)
    except EmptyInputError:
        logger.debug("No images to stitch")
        return None


def run_pipeline(
    images: Sequence[SourceImage],
    policy: SlicePolicy,
    *,
    target_width: Optional[int] = None,
    config: Optional[StitchConfig] = None,
    today: Optional[date] = None,
    on_error: EncodeFailurePolicy = EncodeFailurePolicy.ABORT,
) -> PipelineResult:
    """
    Stitch images and slice the composite.

    Args:
        images: Ordered source images
        policy: Validated slicing policy
        target_width: Explicit composite width (None = widest image)
        config: Stitch settings
        today: Date for filename templates
        on_error: Encode failure handling

    Returns:
        PipelineResult

    Raises:
        EmptyInputError: If images is empty
        InvalidCropError: If any crop leaves a non-positive dimension
        RasterContextError: If the composite cannot be allocated
        EncodeError: Under ABORT, if any slice fails to encode

    Example:
        >>> result = run_pipeline(images, SlicePolicy.equal_parts(3, format="png"))
        >>> [s.filename for s in result.batch.slices]
        ['slice_01.png', 'slice_02.png', 'slice_03.png']
    """
    timings = TimingLog()
    logger.info(f"Starting pipeline for {len(images)} images")

    try:
        composite = stitch_images(images, target_width, config=config, timings=timings)
        batch = slice_composite(
            composite,
            policy,
            today=today,
            on_error=on_error,
            timings=timings,
        )
    except SliceStreamError as e:
        logger.error(f"Pipeline failed: {e}")
        raise

    logger.debug(timings.summary())
    return PipelineResult(composite=composite, batch=batch, timings=timings)
