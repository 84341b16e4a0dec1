"""
Module: output

Purpose:
    Export helpers for generated slices.

Key Functions:
    - write_slices_zip(): Bundle slices into ZIP bytes
"""

from .zip_writer import write_slices_zip

__all__ = [
    "write_slices_zip",
]
