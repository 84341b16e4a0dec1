"""
Tests for stitching.compositor

Test Coverage:
- plan_layout(): Target width selection, rounded heights, offsets
- stitch_images(): Composite dimensions, order, pixels
- Errors: empty input, invalid crop, allocation limits
- Parallel rendering matches sequential rendering
"""
import pytest

from slicestream.config import StitchConfig
from slicestream.core.errors import EmptyInputError, InvalidCropError, RasterContextError
from slicestream.core.models import CropSpec
from slicestream.stitching.compositor import plan_layout, stitch_images
from slicestream.timing import TimingLog

RED = (255, 0, 0)
GREEN = (0, 128, 0)
BLUE = (0, 0, 255)
WHITE = (255, 255, 255)


class TestPlanLayout:
    """Geometry is computed from declared dimensions only."""

    def test_plan_when_no_target_width_then_uses_widest(self, scenario_images):
        """100x50, 200x80, 150x60 -> width 200, heights 100+80+80."""
        plan = plan_layout(scenario_images)

        assert plan.width == 200
        assert [p.height for p in plan.placements] == [100, 80, 80]
        assert plan.height == 260

    def test_plan_when_target_width_given_then_uses_it(self, scenario_images):
        plan = plan_layout(scenario_images, target_width=100)

        assert plan.width == 100
        assert [p.height for p in plan.placements] == [50, 40, 40]

    @pytest.mark.parametrize("width", [0, -10])
    def test_plan_when_non_positive_target_then_falls_back_to_widest(self, scenario_images, width):
        assert plan_layout(scenario_images, target_width=width).width == 200

    def test_plan_when_images_then_offsets_are_running_sum(self, scenario_images):
        plan = plan_layout(scenario_images)

        assert [p.top for p in plan.placements] == [0, 100, 180]
        for prev, nxt in zip(plan.placements, plan.placements[1:]):
            assert prev.bottom == nxt.top

    def test_plan_when_cropped_then_uses_effective_width(self, make_source):
        """The widest image is judged after crop/pad."""
        images = [
            make_source(300, 100, crop=CropSpec(left=150)),  # effective 150 wide
            make_source(200, 100),
        ]

        plan = plan_layout(images)

        assert plan.width == 200
        assert plan.effective_sizes == ((150, 100), (200, 100))
        assert [p.height for p in plan.placements] == [133, 100]

    def test_plan_when_empty_then_raises_error(self):
        with pytest.raises(EmptyInputError):
            plan_layout([])

    def test_plan_when_second_image_invalid_then_names_it(self, make_source):
        images = [
            make_source(100, 100),
            make_source(100, 100, name="bad", crop=CropSpec(top=60, bottom=40)),
            make_source(100, 100, name="also_bad", crop=CropSpec(left=100)),
        ]

        with pytest.raises(InvalidCropError) as exc_info:
            plan_layout(images)

        assert exc_info.value.image_name == "bad"


class TestStitchImages:
    """Tests for stitch_images()."""

    def test_stitch_when_scenario_then_composite_dimensions(self, scenario_images):
        composite = stitch_images(scenario_images)

        assert (composite.width, composite.height) == (200, 260)
        assert composite.image.size == (200, 260)
        assert composite.image_count == 3

    @pytest.mark.parametrize("target", [50, 120, 333])
    def test_stitch_when_target_width_then_height_is_sum_of_rounded(self, scenario_images, target):
        composite = stitch_images(scenario_images, target)

        expected = sum(
            (2 * h * target + w) // (2 * w) for w, h in [(100, 50), (200, 80), (150, 60)]
        )
        assert composite.width == target
        assert composite.height == expected

    def test_stitch_when_same_widths_then_order_preserved(self, make_source):
        """Images are stacked in input order with no gaps."""
        images = [
            make_source(50, 10, RED),
            make_source(50, 20, GREEN),
            make_source(50, 5, BLUE),
        ]

        composite = stitch_images(images)

        px = composite.image.getpixel
        assert px((25, 0)) == RED
        assert px((25, 9)) == RED
        assert px((25, 10)) == GREEN
        assert px((25, 29)) == GREEN
        assert px((25, 30)) == BLUE
        assert px((25, 34)) == BLUE
        assert [p.source_id for p in composite.placements] == [img.id for img in images]

    def test_stitch_when_padded_then_white_band_in_composite(self, make_source):
        images = [make_source(40, 10, RED, crop=CropSpec(bottom=-5)), make_source(40, 10, BLUE)]

        composite = stitch_images(images)

        assert composite.height == 25
        assert composite.image.getpixel((20, 12)) == WHITE
        assert composite.image.getpixel((20, 15)) == BLUE

    def test_stitch_when_called_then_inputs_untouched(self, scenario_images):
        before = [(img.image.size, img.image.tobytes()) for img in scenario_images]

        stitch_images(scenario_images, 120)

        assert [(img.image.size, img.image.tobytes()) for img in scenario_images] == before

    def test_stitch_when_input_list_mutated_later_then_result_unaffected(self, make_source):
        """stitch_images works on a snapshot of the sequence."""
        images = [make_source(20, 10, RED), make_source(20, 10, BLUE)]

        composite = stitch_images(images)
        images.reverse()

        assert composite.image.getpixel((5, 0)) == RED

    def test_stitch_when_parallel_then_identical_to_sequential(self, make_source):
        images = [make_source(60 + i * 7, 30 + i * 3, (i * 20, 100, 200 - i * 15)) for i in range(8)]

        sequential = stitch_images(images, 90, config=StitchConfig(max_workers=1))
        parallel = stitch_images(images, 90, config=StitchConfig(max_workers=4))

        assert parallel.placements == sequential.placements
        assert parallel.image.tobytes() == sequential.image.tobytes()

    def test_stitch_when_empty_then_raises_error(self):
        with pytest.raises(EmptyInputError):
            stitch_images([])

    def test_stitch_when_exceeds_pixel_limit_then_raises_context_error(self, scenario_images):
        config = StitchConfig(max_pixels=1000)

        with pytest.raises(RasterContextError, match="exceeds limit"):
            stitch_images(scenario_images, config=config)

    def test_stitch_when_timings_given_then_records_stages(self, scenario_images):
        timings = TimingLog()

        stitch_images(scenario_images, timings=timings)

        assert "stitch" in timings.stage_timings
        assert set(timings.image_timings) == {img.id for img in scenario_images}
