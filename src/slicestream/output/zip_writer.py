"""
Module: output.zip_writer

Purpose:
    Bundle generated slices into a single ZIP archive held in memory, for
    callers that offer a "download all" action.

Key Functions:
    - write_slices_zip(): Slices -> ZIP bytes

Dependencies:
    - zipfile (std)

Used By:
    - Export collaborators
"""

from __future__ import annotations

import io
import logging
import zipfile
from typing import Dict, Iterable

from slicestream.core.models import GeneratedSlice

logger = logging.getLogger(__name__)


def write_slices_zip(
    slices: Iterable[GeneratedSlice],
    *,
    include_manifest: bool = False,
) -> bytes:
    """
    Pack slices into a ZIP archive.

    Slices are stored uncompressed; PNG and JPEG data is already
    compressed. Duplicate filenames (a template whose <NO> token was
    used more than once with the same index) get a numeric suffix.

    Args:
        slices: Generated slices, written in the given order
        include_manifest: Whether to add a manifest.txt listing each
            slice with its size and position

    Returns:
        ZIP archive bytes

    Example:
        >>> data = write_slices_zip(batch.slices)
        >>> zipfile.ZipFile(io.BytesIO(data)).namelist()
        ['slice_01.jpg', 'slice_02.jpg']
    """
    buffer = io.BytesIO()
    seen: Dict[str, int] = {}
    manifest = []

    with zipfile.ZipFile(buffer, "w", zipfile.ZIP_STORED) as zf:
        for generated in slices:
            arcname = _unique_name(generated.filename, seen)
            zf.writestr(arcname, generated.data)
            manifest.append(
                f"{generated.index}\t{arcname}\t{generated.width}x{generated.height}"
                f"\ty={generated.top}\t{generated.size_bytes} bytes"
            )
        if include_manifest:
            zf.writestr("manifest.txt", "\n".join(manifest) + "\n")

    logger.info(f"Bundled {len(manifest)} slices into ZIP archive")
    return buffer.getvalue()


def _unique_name(filename: str, seen: Dict[str, int]) -> str:
    """Return filename, or filename with " (n)" before the extension if taken."""
    count = seen.get(filename, 0)
    seen[filename] = count + 1
    if count == 0:
        return filename
    stem, dot, ext = filename.rpartition(".")
    if not dot:
        return f"{filename} ({count})"
    return f"{stem} ({count}).{ext}"
