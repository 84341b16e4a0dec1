"""
Core Models Package

Immutable, validated data models shared across the pipeline.

All models in this package are frozen dataclasses. This ensures:
1. Inputs are never mutated by the pipeline
2. Safe to hand to worker threads as snapshots
3. Derived values are always new objects
"""

from .crop import CropSpec
from .images import SourceImage, ImagePlacement, Composite
from .slices import (
    SliceMode,
    OutputFormat,
    SlicePolicy,
    Band,
    GeneratedSlice,
    SliceFailure,
    SliceBatch,
)
from .presets import Preset, dumps_presets, loads_presets

__all__ = [
    "CropSpec",
    "SourceImage",
    "ImagePlacement",
    "Composite",
    "SliceMode",
    "OutputFormat",
    "SlicePolicy",
    "Band",
    "GeneratedSlice",
    "SliceFailure",
    "SliceBatch",
    "Preset",
    "dumps_presets",
    "loads_presets",
]
