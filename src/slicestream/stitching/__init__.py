"""
Module: stitching

Purpose:
    Turns an ordered list of source images into one composite: per-image
    crop/pad, width-normalizing resample, vertical concatenation.

Key Functions:
    - load_source_image(): Decode a file or buffer
    - apply_crop_pad(): Effective image for one source
    - resample_to_width(): Aspect-preserving rescale
    - stitch_images(): Build the composite

Dependencies:
    - PIL: Image manipulation
    - slicestream.core.models: SourceImage, CropSpec, Composite

Used By:
    - slicestream.pipeline
    - slicestream.session
"""

from .loader import load_source_image, load_source_images
from .crop_pad import apply_crop_pad, effective_size
from .resampler import scaled_height, resample_to_width
from .compositor import StitchPlan, plan_layout, stitch_images

__all__ = [
    "load_source_image",
    "load_source_images",
    "apply_crop_pad",
    "effective_size",
    "scaled_height",
    "resample_to_width",
    "StitchPlan",
    "plan_layout",
    "stitch_images",
]
