"""
Module: slicing.partitioner

Purpose:
    Split a composite height into slice heights according to a policy.
    Pure arithmetic: no image is needed.

Algorithm:
    EQUAL_PARTS(n): n slices of total // n, the last one also takes
        total % n. The remainder is never spread across slices.
    FIXED_HEIGHT(h): slices of h until the height is used up; the final
        slice may be shorter.

Key Functions:
    - partition_heights(): Slice heights for a policy
    - plan_bands(): Convert heights to contiguous bands

Dependencies:
    - core.models.slices: SlicePolicy, SliceMode, Band

Used By:
    - slicing.controller
"""

from __future__ import annotations

import logging
from typing import List, Sequence

from slicestream.core.models import Band, SliceMode, SlicePolicy

logger = logging.getLogger(__name__)


def partition_heights(total_height: int, policy: SlicePolicy) -> List[int]:
    """
    Compute slice heights summing exactly to total_height.

    Args:
        total_height: Composite height in pixels (>= 0)
        policy: Validated slicing policy

    Returns:
        Slice heights in top-to-bottom order

    Raises:
        ValueError: If total_height is negative

    Example:
        >>> partition_heights(1000, SlicePolicy.equal_parts(3))
        [333, 333, 334]
        >>> partition_heights(250, SlicePolicy.fixed_height(100))
        [100, 100, 50]
    """
    if total_height < 0:
        raise ValueError(f"total_height must be >= 0: {total_height}")

    if policy.mode is SliceMode.EQUAL_PARTS:
        count = policy.value
        base, remainder = divmod(total_height, count)
        heights = [base] * count
        heights[-1] += remainder
    else:
        heights = []
        remaining = total_height
        while remaining > 0:
            h = min(policy.value, remaining)
            heights.append(h)
            remaining -= h

    logger.debug(
        f"Partitioned {total_height}px by {policy.mode.value}({policy.value}) "
        f"into {len(heights)} slices"
    )
    return heights


def plan_bands(heights: Sequence[int]) -> List[Band]:
    """
    Lay heights out as contiguous bands starting at y=0.

    Example:
        >>> plan_bands([100, 100, 50])
        [Band(top=0, height=100), Band(top=100, height=100), Band(top=200, height=50)]
    """
    bands: List[Band] = []
    top = 0
    for h in heights:
        bands.append(Band(top=top, height=h))
        top += h
    return bands
