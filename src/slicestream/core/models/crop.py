"""
Module: crop

Purpose:
    Provides the CropSpec dataclass - signed per-edge pixel adjustments
    applied to a source image before stitching. Positive values remove
    pixels from that edge, negative values add white padding.

Key Functions:
    - CropSpec.effective_size(width, height): Dimensions after crop/pad
    - CropSpec.inverted(): Spec that undoes this one dimensionally
    - CropSpec.to_dict(): Serialize for JSON
    - CropSpec.from_dict(data): Deserialize from JSON

Dependencies:
    - dataclasses (std)

Used By:
    - core.models.images.SourceImage
    - stitching.crop_pad
"""

from __future__ import annotations

from dataclasses import dataclass


@dataclass(frozen=True, slots=True)
class CropSpec:
    """
    Per-edge crop/pad specification in pixels.

    The source is drawn at offset (-left, -top) on a canvas of size
    (width - left - right) x (height - top - bottom).

    Attributes:
        top: Rows removed from (positive) or added above (negative) the image
        bottom: Rows removed from or added below the image
        left: Columns removed from or added left of the image
        right: Columns removed from or added right of the image

    Example:
        >>> CropSpec(top=10, left=-5).effective_size(100, 50)
        (105, 40)
    """

    top: int = 0
    bottom: int = 0
    left: int = 0
    right: int = 0

    def __post_init__(self) -> None:
        for name in ("top", "bottom", "left", "right"):
            value = getattr(self, name)
            if isinstance(value, bool) or not isinstance(value, int):
                raise TypeError(f"{name} must be an int: {value!r}")

    # ─────────────────────────────────────────────────────────────────────────
    # Geometry
    # ─────────────────────────────────────────────────────────────────────────

    @property
    def is_identity(self) -> bool:
        """True when no edge is adjusted."""
        return self.top == 0 and self.bottom == 0 and self.left == 0 and self.right == 0

    @property
    def offset(self) -> tuple[int, int]:
        """Paste position of the source on the new canvas."""
        return (-self.left, -self.top)

    def effective_size(self, width: int, height: int) -> tuple[int, int]:
        """
        Dimensions of an image of (width, height) after this crop/pad.

        No validation: results may be zero or negative. Callers decide
        how to report that (see stitching.crop_pad).
        """
        return (width - self.left - self.right, height - self.top - self.bottom)

    def inverted(self) -> CropSpec:
        """Negate every edge, turning a crop into the matching pad."""
        return CropSpec(
            top=-self.top,
            bottom=-self.bottom,
            left=-self.left,
            right=-self.right,
        )

    # ─────────────────────────────────────────────────────────────────────────
    # Serialization
    # ─────────────────────────────────────────────────────────────────────────

    def to_dict(self) -> dict:
        return {
            "top": self.top,
            "bottom": self.bottom,
            "left": self.left,
            "right": self.right,
        }

    @classmethod
    def from_dict(cls, data: dict) -> CropSpec:
        """Deserialize from dictionary. Missing edges default to 0."""
        return cls(
            top=int(data.get("top", 0)),
            bottom=int(data.get("bottom", 0)),
            left=int(data.get("left", 0)),
            right=int(data.get("right", 0)),
        )

    def __repr__(self) -> str:
        return f"CropSpec({self.top}, {self.bottom}, {self.left}, {self.right})"
