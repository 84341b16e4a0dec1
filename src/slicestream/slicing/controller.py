"""
Module: slicing.controller

Purpose:
    Orchestrate the slicing stage for one composite.
    Partition → Plan bands → Encode + Name each band

Key Functions:
    - slice_composite(): Main entry point

Key Classes:
    - EncodeFailurePolicy: What to do when one band fails to encode

Dependencies:
    - slicing.partitioner, slicing.encoder, slicing.namer

Used By:
    - slicestream.pipeline
"""

from __future__ import annotations

import logging
from datetime import date
from enum import Enum
from typing import List, Optional

from slicestream.core.errors import EncodeError
from slicestream.core.models import (
    Composite,
    GeneratedSlice,
    SliceBatch,
    SliceFailure,
    SlicePolicy,
)
from slicestream.timing import TimingLog, timed_stage

from .encoder import encode_band
from .namer import expand_filename
from .partitioner import partition_heights, plan_bands

logger = logging.getLogger(__name__)


class EncodeFailurePolicy(str, Enum):
    """
    Handling of per-slice encode failures.

    ABORT: re-raise the first EncodeError; no partial batch is returned.
    SKIP: record a SliceFailure and keep going. Remaining slices keep
        their original index, so the gap is visible in the filenames.
    """

    ABORT = "abort"
    SKIP = "skip"


def slice_composite(
    composite: Composite,
    policy: SlicePolicy,
    *,
    today: Optional[date] = None,
    on_error: EncodeFailurePolicy = EncodeFailurePolicy.ABORT,
    timings: Optional[TimingLog] = None,
) -> SliceBatch:
    """
    Cut a composite into encoded, named slices.

    Args:
        composite: Stitched composite
        policy: Validated slicing policy
        today: Date for <YYMMDD>; captured once for the whole batch
        on_error: Encode failure handling (default ABORT)
        timings: Optional timing log

    Returns:
        SliceBatch with slices in top-to-bottom order

    Raises:
        EncodeError: Under ABORT, if any band fails to encode

    Example:
        >>> batch = slice_composite(composite, SlicePolicy.fixed_height(100))
        >>> [s.height for s in batch.slices]
        [100, 100, 50]
    """
    today = today or date.today()
    heights = partition_heights(composite.height, policy)
    bands = plan_bands(heights)

    slices: List[GeneratedSlice] = []
    failures: List[SliceFailure] = []

    with timed_stage(timings, "encode"):
        for index, band in enumerate(bands, start=1):
            try:
                data = encode_band(
                    composite.image,
                    band.top,
                    band.height,
                    policy.format,
                    policy.quality,
                )
            except EncodeError as e:
                if on_error is EncodeFailurePolicy.ABORT:
                    raise EncodeError(f"Slice {index} failed: {e}", index=index) from e
                logger.warning(f"Skipping slice {index} ({band.height}px at y={band.top}): {e}")
                failures.append(
                    SliceFailure(index=index, top=band.top, height=band.height, reason=str(e))
                )
                continue

            slices.append(
                GeneratedSlice(
                    index=index,
                    top=band.top,
                    width=composite.width,
                    height=band.height,
                    filename=expand_filename(policy.prefix, index, policy.format, today),
                    data=data,
                    format=policy.format,
                )
            )

    logger.info(
        f"Generated {len(slices)} {policy.format.value} slices from "
        f"{composite.width}x{composite.height} composite"
        + (f" ({len(failures)} skipped)" if failures else "")
    )

    return SliceBatch(slices=tuple(slices), failures=tuple(failures), policy=policy)
