"""
Module: stitching.loader

Purpose:
    Decode image files or in-memory buffers into SourceImage values.

Key Functions:
    - load_source_image(): Decode one source
    - load_source_images(): Decode several, preserving order

Dependencies:
    - PIL: Decoding
    - core.models.images: SourceImage

Used By:
    - Callers feeding the pipeline (upload handlers, tests)
"""

from __future__ import annotations

import io
import logging
import uuid
from pathlib import Path
from typing import BinaryIO, Iterable, List, Optional, Union

from PIL import Image, UnidentifiedImageError

from slicestream.core.errors import ImageLoadError
from slicestream.core.models import CropSpec, SourceImage

logger = logging.getLogger(__name__)

ImageSource = Union[str, Path, bytes, bytearray, BinaryIO]


def load_source_image(
    source: ImageSource,
    *,
    name: Optional[str] = None,
    image_id: Optional[str] = None,
    crop: Optional[CropSpec] = None,
) -> SourceImage:
    """
    Decode a source image.

    The pixel data is fully loaded so the returned value does not depend
    on the file staying open.

    Args:
        source: Path, raw bytes, or binary file object
        name: Display name; defaults to the file stem (or "image")
        image_id: Identifier; a random hex id when omitted
        crop: Initial crop/pad; defaults to no adjustment

    Returns:
        SourceImage with the decoded pixels

    Raises:
        ImageLoadError: If the source cannot be read or decoded

    Example:
        >>> src = load_source_image(Path("chat_01.png"))
        >>> src.name
        'chat_01'
    """
    if name is None:
        name = _default_name(source)

    try:
        if isinstance(source, (bytes, bytearray)):
            handle: Union[str, Path, BinaryIO] = io.BytesIO(source)
        else:
            handle = source
        with Image.open(handle) as opened:
            opened.load()
            image = opened.copy()
    except (OSError, UnidentifiedImageError, Image.DecompressionBombError) as e:
        raise ImageLoadError(f"Could not decode image {name!r}: {e}") from e

    if image.width <= 0 or image.height <= 0:
        raise ImageLoadError(f"Image {name!r} has no pixels")

    logger.debug(f"Loaded {name!r}: {image.width}x{image.height} {image.mode}")

    return SourceImage.from_image(
        image,
        image_id=image_id or uuid.uuid4().hex[:8],
        name=name,
        crop=crop,
    )


def load_source_images(sources: Iterable[ImageSource]) -> List[SourceImage]:
    """Decode several sources in order. Stops at the first failure."""
    return [load_source_image(s) for s in sources]


def _default_name(source: ImageSource) -> str:
    """File stem up to the first dot, or a generic name for buffers."""
    if isinstance(source, (str, Path)):
        return Path(source).name.split(".")[0]
    file_name = getattr(source, "name", None)
    if isinstance(file_name, str) and file_name:
        return Path(file_name).name.split(".")[0]
    return "image"
