"""
Unit Tests for CropSpec Model

Tests for signed per-edge crop/pad specifications.
"""

import pytest

from slicestream.core.models.crop import CropSpec


class TestCropSpec:
    """Tests for CropSpec dataclass."""

    # ─────────────────────────────────────────────────────────────────────────
    # Constructor Tests
    # ─────────────────────────────────────────────────────────────────────────

    def test_init_when_defaults_then_identity(self):
        """Default spec should not adjust any edge."""
        spec = CropSpec()
        assert spec.is_identity is True
        assert spec.offset == (0, 0)

    def test_init_when_float_value_then_raises_type_error(self):
        """Edges must be integers."""
        with pytest.raises(TypeError, match="top must be an int"):
            CropSpec(top=1.5)

    def test_init_when_bool_value_then_raises_type_error(self):
        """Booleans are not accepted as pixel counts."""
        with pytest.raises(TypeError):
            CropSpec(left=True)

    # ─────────────────────────────────────────────────────────────────────────
    # Geometry Tests
    # ─────────────────────────────────────────────────────────────────────────

    def test_effective_size_when_cropping_then_shrinks(self):
        """Positive values remove pixels."""
        spec = CropSpec(top=10, bottom=5, left=3, right=7)
        assert spec.effective_size(100, 50) == (90, 35)

    def test_effective_size_when_padding_then_grows(self):
        """Negative values add pixels."""
        spec = CropSpec(top=-10, left=-4)
        assert spec.effective_size(100, 50) == (104, 60)

    def test_effective_size_when_over_cropped_then_returns_non_positive(self):
        """No validation at this level; callers decide."""
        spec = CropSpec(left=60, right=40)
        assert spec.effective_size(100, 50) == (0, 50)

    def test_offset_when_padding_left_then_positive_x(self):
        """Padding shifts the source right/down on the new canvas."""
        assert CropSpec(top=-3, left=-10).offset == (10, 3)
        assert CropSpec(top=3, left=10).offset == (-10, -3)

    def test_inverted_when_applied_after_crop_then_restores_dimensions(self):
        """Crop (a,b,c,d) followed by pad (-a,-b,-c,-d) restores size."""
        spec = CropSpec(top=7, bottom=3, left=11, right=2)
        w, h = spec.effective_size(120, 80)
        assert spec.inverted().effective_size(w, h) == (120, 80)

    # ─────────────────────────────────────────────────────────────────────────
    # Serialization Tests
    # ─────────────────────────────────────────────────────────────────────────

    def test_from_dict_when_partial_then_defaults_missing_edges(self):
        """Missing edges should default to 0."""
        spec = CropSpec.from_dict({"top": 5, "right": -2})
        assert spec == CropSpec(top=5, right=-2)

    def test_to_dict_when_serialized_then_round_trips(self):
        """to_dict/from_dict should preserve all edges."""
        spec = CropSpec(top=1, bottom=-2, left=3, right=-4)
        assert CropSpec.from_dict(spec.to_dict()) == spec
