"""
Module: config

Purpose:
    Configuration for the stitching pipeline and the defaults shared by
    slicing policies and the stitch session.

Key Classes:
    - StitchConfig: Immutable stitching configuration

Dependencies:
    - dataclasses (std)
    - PIL.Image: Resampling filters

Used By:
    - stitching.compositor: Stitch settings
    - core.models.slices: Policy defaults
    - session: Debounce default
"""

from __future__ import annotations

from dataclasses import dataclass
from typing import Optional, Tuple

from PIL import Image


# Slicing defaults (match the settings a fresh session starts with)
DEFAULT_SLICE_HEIGHT = 1000
DEFAULT_EQUAL_PARTS = 3
DEFAULT_PREFIX = "slice"
DEFAULT_FORMAT = "jpeg"
DEFAULT_QUALITY = 0.92

# Stitching defaults
DEFAULT_BACKGROUND: Tuple[int, int, int] = (255, 255, 255)
DEFAULT_MAX_PIXELS = 400_000_000
DEFAULT_DEBOUNCE_SECONDS = 0.5


@dataclass(frozen=True)
class StitchConfig:
    """
    Configuration for stitching (immutable).

    Attributes:
        resample: PIL resampling filter used when scaling to the target width
        background: RGB fill for padding and transparent pixels
        max_workers: Threads used for per-image crop/resample (1 = sequential)
        max_pixels: Upper bound on composite width * height

    Example:
        >>> config = StitchConfig(max_workers=4)
        >>> config.parallel
        True
    """

    resample: Image.Resampling = Image.Resampling.LANCZOS
    background: Tuple[int, int, int] = DEFAULT_BACKGROUND
    max_workers: Optional[int] = 1
    max_pixels: int = DEFAULT_MAX_PIXELS

    def __post_init__(self) -> None:
        """Validate configuration on construction."""
        if self.max_workers is not None and self.max_workers <= 0:
            raise ValueError(f"max_workers must be positive: {self.max_workers}")
        if self.max_pixels <= 0:
            raise ValueError(f"max_pixels must be positive: {self.max_pixels}")
        if len(self.background) != 3:
            raise ValueError(f"background must be an RGB triple: {self.background!r}")

    @property
    def parallel(self) -> bool:
        """Whether per-image work runs on a thread pool."""
        return self.max_workers is None or self.max_workers > 1
