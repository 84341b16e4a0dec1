"""
Module: slicing

Purpose:
    Slicing subpackage: partitions a composite by height, encodes each
    band and names the results.

Key Modules:
    - partitioner: Slice heights from a policy (pure)
    - encoder: Band -> PNG/JPEG bytes
    - namer: Filename templates
    - controller: slice_composite() orchestration

Dependencies:
    - PIL: Encoding
    - slicestream.core.models: SlicePolicy, Composite, GeneratedSlice

Used By:
    - slicestream.pipeline
"""

from .partitioner import partition_heights, plan_bands
from .encoder import encode_band, encode_image, jpeg_quality
from .namer import expand_filename, expand_base_name, format_date_token
from .controller import EncodeFailurePolicy, slice_composite

__all__ = [
    "partition_heights",
    "plan_bands",
    "encode_band",
    "encode_image",
    "jpeg_quality",
    "expand_filename",
    "expand_base_name",
    "format_date_token",
    "EncodeFailurePolicy",
    "slice_composite",
]
