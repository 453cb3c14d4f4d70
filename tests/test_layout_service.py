import math

import pytest

from spritestrip.errors import EmptyInputError, InvalidArgumentsError
from spritestrip.models.layout_model import SizeSpec, round_half_away
from spritestrip.services.layout_service import plan_layout, scale_resize


class TestRoundHalfAway:
    @pytest.mark.parametrize(
        "value, expected",
        [(2.5, 3), (3.5, 4), (2.4999, 2), (-2.5, -3), (0.5, 1), (0.0, 0)],
    )
    def test_rounds_halves_away_from_zero(self, value, expected):
        assert round_half_away(value) == expected


class TestScaleResize:
    def test_scale_sets_both_sides(self):
        size = scale_resize(100, 50, SizeSpec(scale=0.5))
        assert (size.scale, size.width, size.height) == (0.5, 50, 25)

    def test_scale_rounds_half_up(self):
        size = scale_resize(5, 3, SizeSpec(scale=0.5))
        assert (size.width, size.height) == (3, 2)

    def test_height_derives_scale_and_width(self):
        size = scale_resize(300, 150, SizeSpec(height=200))
        assert size.scale == pytest.approx(200 / 150)
        assert size.width == 400
        assert size.height == 200

    def test_width_derives_scale_and_height(self):
        size = scale_resize(400, 100, SizeSpec(width=100))
        assert size.scale == pytest.approx(0.25)
        assert size.height == 25
        assert size.width == 100

    @pytest.mark.parametrize("w, h, target", [(123, 77, 50), (640, 480, 333), (7, 1000, 3)])
    def test_width_height_round_trip(self, w, h, target):
        height = scale_resize(w, h, SizeSpec(width=target)).height
        assert abs(scale_resize(w, h, SizeSpec(height=height)).width - target) <= 1

    def test_scale_wins_over_width(self):
        size = scale_resize(100, 100, SizeSpec(scale=2.0, width=10))
        assert (size.width, size.height) == (200, 200)

    @pytest.mark.parametrize(
        "spec",
        [SizeSpec(), SizeSpec(width=10, height=10), SizeSpec(scale=float("nan"))],
    )
    def test_unresolvable_spec_is_rejected(self, spec):
        with pytest.raises(InvalidArgumentsError):
            scale_resize(100, 100, spec)

    def test_zero_source_width(self):
        with pytest.raises(InvalidArgumentsError):
            scale_resize(0, 100, SizeSpec(width=50))

    def test_zero_source_height(self):
        with pytest.raises(InvalidArgumentsError):
            scale_resize(100, 0, SizeSpec(height=50))

    def test_infinite_scale(self):
        with pytest.raises(InvalidArgumentsError):
            scale_resize(100, 100, SizeSpec(scale=math.inf))


class TestPlanLayout:
    def test_empty(self):
        with pytest.raises(EmptyInputError):
            plan_layout([])

    def test_height_floor(self):
        plan = plan_layout([(100, 300), (50, 150), (100, 500)])
        assert plan.canvas_height == 200
        assert plan.widths == (67, 67, 40)

    def test_smallest_height_wins_above_floor(self):
        plan = plan_layout([(100, 600), (100, 400)])
        assert plan.canvas_height == 400
        assert plan.widths == (67, 100)

    def test_single_image(self):
        plan = plan_layout([(100, 200)])
        assert plan.widths == (100,)
        assert plan.offsets == (0.0,)
        assert plan.canvas_size == (100, 200)

    def test_two_images_overlap(self):
        plan = plan_layout([(100, 200), (100, 200)])
        assert plan.offsets == pytest.approx([0, 55])
        assert plan.canvas_width == pytest.approx(155)
        assert plan.positions == (0, 55)
        assert plan.canvas_size == (155, 200)

    def test_overlap_uses_previous_width(self):
        plan = plan_layout([(200, 200), (50, 200), (100, 200)])
        # 200 -> второе начинается на 200 - 90, третье на (110 + 50) - 22.5
        assert plan.offsets == pytest.approx([0, 110, 137.5])
        assert plan.canvas_width == pytest.approx(237.5)
        assert plan.positions == (0, 110, 138)
        assert plan.canvas_size == (238, 200)

    def test_offsets_non_decreasing(self):
        plan = plan_layout([(30, 200), (300, 200), (10, 200), (120, 200)])
        assert list(plan.offsets) == sorted(plan.offsets)

    def test_negative_overlap_spreads_images(self):
        plan = plan_layout([(100, 200), (100, 200)], overlap_fraction=-0.5)
        assert plan.offsets == pytest.approx([0, 150])
        assert plan.canvas_size == (250, 200)

    def test_full_overlap(self):
        plan = plan_layout([(100, 200), (100, 200)], overlap_fraction=1.0)
        assert plan.offsets == pytest.approx([0, 0])
        assert plan.canvas_size == (100, 200)

    def test_custom_min_height(self):
        plan = plan_layout([(100, 50)], min_height=100)
        assert plan.canvas_size == (200, 100)
        assert len(plan) == 1
