"""
Module: slices

Purpose:
    Models for the slicing stage: the slicing policy chosen by the user,
    the geometric bands it produces, and the encoded output slices.

Key Classes:
    - SliceMode: FIXED_HEIGHT or EQUAL_PARTS
    - OutputFormat: PNG (lossless) or JPEG (lossy)
    - SlicePolicy: Validated slicing configuration
    - Band: Contiguous horizontal band of the composite
    - GeneratedSlice: Encoded, named output slice
    - SliceFailure: A band that could not be encoded
    - SliceBatch: Result of slicing one composite

Dependencies:
    - dataclasses (std)
    - enum (std)
    - slicestream.config: Default values

Used By:
    - slicing.partitioner: SlicePolicy, Band
    - slicing.controller: GeneratedSlice, SliceBatch
    - core.models.presets: SlicePolicy
"""

from __future__ import annotations

from dataclasses import dataclass, field
from enum import Enum
from typing import Any, Optional

from ...config import (
    DEFAULT_FORMAT,
    DEFAULT_PREFIX,
    DEFAULT_QUALITY,
    DEFAULT_SLICE_HEIGHT,
)
from ..errors import InvalidPolicyError


class SliceMode(str, Enum):
    """How the composite is partitioned."""

    FIXED_HEIGHT = "FIXED_HEIGHT"  # value = slice height in px
    EQUAL_PARTS = "EQUAL_PARTS"  # value = number of slices


class OutputFormat(str, Enum):
    """Encoded output format."""

    PNG = "png"
    JPEG = "jpeg"

    @property
    def extension(self) -> str:
        """Canonical filename extension (without dot)."""
        return "jpg" if self is OutputFormat.JPEG else "png"

    @property
    def pil_format(self) -> str:
        """Format name understood by PIL.Image.save."""
        return self.name

    @property
    def is_lossy(self) -> bool:
        return self is OutputFormat.JPEG

    @classmethod
    def parse(cls, value: Any) -> OutputFormat:
        """
        Parse a format from an enum member or string ("png", "jpeg", "jpg").

        Raises:
            InvalidPolicyError: If the format is not supported
        """
        if isinstance(value, cls):
            return value
        text = str(value).strip().lower()
        if text == "jpg":
            text = "jpeg"
        try:
            return cls(text)
        except ValueError:
            raise InvalidPolicyError(f"Unsupported output format: {value!r}") from None


@dataclass(frozen=True)
class SlicePolicy:
    """
    Slicing configuration (immutable, validated on construction).

    Attributes:
        mode: FIXED_HEIGHT or EQUAL_PARTS
        value: Slice height in pixels, or number of parts
        format: Output format
        quality: Lossy quality in [0, 1]; ignored for PNG
        prefix: Filename template (see slicing.namer)

    Example:
        >>> policy = SlicePolicy.equal_parts(3, format="png")
        >>> policy.value
        3
    """

    mode: SliceMode = SliceMode.FIXED_HEIGHT
    value: int = DEFAULT_SLICE_HEIGHT
    format: OutputFormat = OutputFormat(DEFAULT_FORMAT)
    quality: float = DEFAULT_QUALITY
    prefix: str = DEFAULT_PREFIX

    def __post_init__(self) -> None:
        """Validate configuration on construction."""
        if not isinstance(self.mode, SliceMode):
            try:
                object.__setattr__(self, "mode", SliceMode(str(self.mode).upper()))
            except ValueError:
                raise InvalidPolicyError(f"Unknown slice mode: {self.mode!r}") from None
        object.__setattr__(self, "format", OutputFormat.parse(self.format))

        if isinstance(self.value, bool) or not isinstance(self.value, int):
            raise InvalidPolicyError(f"value must be an integer: {self.value!r}")
        if self.value <= 0:
            if self.mode is SliceMode.FIXED_HEIGHT:
                raise InvalidPolicyError(f"Slice height must be positive: {self.value}")
            raise InvalidPolicyError(f"Number of parts must be positive: {self.value}")
        try:
            quality = float(self.quality)
        except (TypeError, ValueError):
            raise InvalidPolicyError(f"quality must be a number: {self.quality!r}") from None
        if not 0.0 <= quality <= 1.0:
            raise InvalidPolicyError(f"quality must be within [0, 1]: {self.quality}")
        object.__setattr__(self, "quality", quality)
        if not isinstance(self.prefix, str):
            raise InvalidPolicyError(f"prefix must be a string: {self.prefix!r}")

    @classmethod
    def fixed_height(cls, height: int, **kwargs: Any) -> SlicePolicy:
        """Slices of `height` pixels; the last one may be shorter."""
        return cls(mode=SliceMode.FIXED_HEIGHT, value=height, **kwargs)

    @classmethod
    def equal_parts(cls, count: int, **kwargs: Any) -> SlicePolicy:
        """`count` slices; the last one absorbs the remainder."""
        return cls(mode=SliceMode.EQUAL_PARTS, value=count, **kwargs)

    # ─────────────────────────────────────────────────────────────────────────
    # Serialization
    # ─────────────────────────────────────────────────────────────────────────

    def to_dict(self) -> dict:
        return {
            "mode": self.mode.value,
            "value": self.value,
            "format": self.format.value,
            "quality": self.quality,
            "prefix": self.prefix,
        }

    @classmethod
    def from_dict(cls, data: dict) -> SlicePolicy:
        """
        Deserialize from dictionary.

        Raises:
            InvalidPolicyError: If any value is invalid
            KeyError: If mode or value is missing
        """
        return cls(
            mode=data["mode"],
            value=data["value"],
            format=data.get("format", DEFAULT_FORMAT),
            quality=float(data.get("quality", DEFAULT_QUALITY)),
            prefix=data.get("prefix", DEFAULT_PREFIX),
        )


@dataclass(frozen=True, slots=True)
class Band:
    """
    Horizontal band of the composite, [top, top + height).

    Example:
        >>> Band(100, 50).bottom
        150
    """

    top: int
    height: int

    @property
    def bottom(self) -> int:
        """Bottom Y coordinate (exclusive)."""
        return self.top + self.height

    def as_box(self, width: int) -> tuple[int, int, int, int]:
        """(left, top, right, bottom) box for PIL crop at full width."""
        return (0, self.top, width, self.bottom)


@dataclass(frozen=True)
class GeneratedSlice:
    """
    One encoded output slice.

    Attributes:
        index: 1-based position in the batch
        top: Y offset of the band in the composite
        width: Slice width (composite width)
        height: Slice height
        filename: Expanded filename including extension
        data: Encoded image bytes
        format: Encoding used
    """

    index: int
    top: int
    width: int
    height: int
    filename: str
    data: bytes = field(repr=False)
    format: OutputFormat = OutputFormat.PNG

    @property
    def size_bytes(self) -> int:
        return len(self.data)


@dataclass(frozen=True, slots=True)
class SliceFailure:
    """A band that was skipped because it could not be encoded."""

    index: int
    top: int
    height: int
    reason: str


@dataclass(frozen=True)
class SliceBatch:
    """
    Result of slicing one composite.

    Attributes:
        slices: Successfully encoded slices in vertical order
        failures: Bands skipped under the SKIP encode-failure policy
        policy: Policy used to produce the batch
    """

    slices: tuple[GeneratedSlice, ...]
    failures: tuple[SliceFailure, ...] = ()
    policy: Optional[SlicePolicy] = None

    @property
    def is_complete(self) -> bool:
        """True if every planned band was encoded."""
        return not self.failures

    @property
    def filenames(self) -> list[str]:
        return [s.filename for s in self.slices]

    @property
    def total_bytes(self) -> int:
        return sum(s.size_bytes for s in self.slices)

    def __len__(self) -> int:
        return len(self.slices)

    def __iter__(self):
        return iter(self.slices)
