"""Unit tests for the outcode-based ClippingEngine."""

import math

import pytest

from clipping.engine import (
    OUT_BOTTOM,
    OUT_LEFT,
    OUT_RIGHT,
    OUT_TOP,
    ClippingEngine,
    Inside,
    Outside,
    PartlyInside,
    classify,
    outcode,
)
from clipping.primitives import Line, Point
from clipping.selection import RectangleSelection


def seg(x0, y0, x1, y1):
    return Line(Point(x0, y0), Point(x1, y1))


def assert_visible(outcome, start, end, tol=1e-4):
    assert isinstance(outcome, PartlyInside)
    v = outcome.visible
    assert v.start.x == pytest.approx(start[0], abs=tol)
    assert v.start.y == pytest.approx(start[1], abs=tol)
    assert v.end.x == pytest.approx(end[0], abs=tol)
    assert v.end.y == pytest.approx(end[1], abs=tol)


class TestOutcode:
    """Tests for outcode()."""

    def test_inside_is_zero(self, rect10):
        assert outcode(Point(0, 0), rect10) == 0

    def test_on_border_is_inside(self, rect10):
        assert outcode(Point(-10, 10), rect10) == 0
        assert outcode(Point(10, -10), rect10) == 0

    @pytest.mark.parametrize(
        "p, code",
        [
            (Point(-11, 0), OUT_LEFT),
            (Point(11, 0), OUT_RIGHT),
            (Point(0, -11), OUT_BOTTOM),
            (Point(0, 11), OUT_TOP),
            (Point(-11, 11), OUT_LEFT | OUT_TOP),
            (Point(11, -11), OUT_RIGHT | OUT_BOTTOM),
        ],
    )
    def test_regions(self, rect10, p, code):
        assert outcode(p, rect10) == code

    def test_bit_layout(self):
        assert (OUT_LEFT, OUT_RIGHT, OUT_BOTTOM, OUT_TOP) == (8, 4, 2, 1)


class TestTrivialCases:
    """Inside / Outside decided from outcodes alone."""

    def test_both_endpoints_inside(self, engine, rect10):
        assert engine.classify(rect10, seg(0, 0, 5, 5)) == Inside()

    def test_both_endpoints_share_left_and_top(self, engine, rect10):
        assert engine.classify(rect10, seg(-20, 20, -11, 11)) == Outside()

    @pytest.mark.parametrize(
        "line",
        [
            seg(-30, -5, -15, 5),  # both left
            seg(15, -5, 30, 5),  # both right
            seg(-5, 15, 5, 30),  # both above
            seg(-5, -30, 5, -15),  # both below
        ],
    )
    def test_same_violated_border_is_outside(self, engine, rect10, line):
        assert engine.classify(rect10, line) == Outside()

    def test_segment_on_border_is_inside(self, engine, rect10):
        assert engine.classify(rect10, seg(-10, -10, -10, 10)) == Inside()


class TestPartlyInside:
    """Boundary intersection resolution."""

    def test_horizontal_through_both_sides(self, engine, rect10):
        out = engine.classify(rect10, seg(-20, 0, 20, 0))
        assert_visible(out, (-10, 0), (10, 0))

    def test_single_interior_endpoint_at_start(self, engine, rect10):
        out = engine.classify(rect10, seg(0, 0, 20, 0))
        assert_visible(out, (0, 0), (10, 0))

    def test_single_interior_endpoint_at_end(self, engine, rect10):
        out = engine.classify(rect10, seg(0, 20, 0, 0))
        assert_visible(out, (0, 10), (0, 0))

    def test_vertical_through_top_and_bottom(self, engine, rect10):
        out = engine.classify(rect10, seg(3, 25, 3, -25))
        assert_visible(out, (3, 10), (3, -10))

    def test_diagonal_through_adjacent_borders(self, engine, rect10):
        # Crosses left at y=5 and top at x=-5.
        out = engine.classify(rect10, seg(-15, 0, 0, 15))
        assert_visible(out, (-10, 5), (-5, 10))

    def test_discovery_order_is_left_right_top_bottom(self, engine, rect10):
        """Direction of the input does not change the order crossings are reported in."""
        out = engine.classify(rect10, seg(20, 0, -20, 0))
        assert_visible(out, (-10, 0), (10, 0))

    def test_long_segment_through_narrow_rectangle(self, engine):
        """Both endpoints outside on opposite sides: neither shares a violated bit."""
        narrow = RectangleSelection(Point(-2, 10), Point(2, -10))
        out = engine.classify(narrow, seg(-500, 1, 500, 1))
        assert_visible(out, (-2, 1), (2, 1))

    def test_segment_passing_by_corner_is_outside(self, engine, rect10):
        """Outcodes do not share a bit, but the segment misses the rectangle."""
        line = seg(-20, 5, 5, 30)
        assert outcode(line.start, rect10) & outcode(line.end, rect10) == 0
        assert engine.classify(rect10, line) == Outside()

    def test_starting_on_border(self, engine, rect10):
        out = engine.classify(rect10, seg(-10, 0, 20, 0))
        assert_visible(out, (-10, 0), (10, 0))


class TestCornersAndBorders:
    """Crossings through corners and along borders."""

    def test_interior_to_corner(self, engine, rect10):
        out = engine.classify(rect10, seg(0, 0, 20, 20))
        assert_visible(out, (0, 0), (10, 10))

    def test_corner_to_corner_diagonal(self, engine, rect10):
        out = engine.classify(rect10, seg(-20, -20, 20, 20))
        assert_visible(out, (-10, -10), (10, 10))

    def test_along_top_border_from_outside(self, engine, rect10):
        out = engine.classify(rect10, seg(-20, 10, 20, 10))
        assert_visible(out, (-10, 10), (10, 10))

    def test_along_left_border_from_outside(self, engine, rect10):
        out = engine.classify(rect10, seg(-10, 20, -10, -20))
        assert_visible(out, (-10, 10), (-10, -10))

    def test_corner_hit_on_two_borders_is_kept_once(self, engine, rect10):
        """The exit corner lies on the right and top borders; one hit, not two."""
        out = engine.classify(rect10, seg(5, 5, 15, 15))
        assert_visible(out, (5, 5), (10, 10))

    def test_touching_a_single_corner_is_outside(self, engine, rect10):
        # y = x + 20 meets the rectangle only at (-10, 10).
        assert engine.classify(rect10, seg(-20, 0, 0, 20)) == Outside()

    def test_diagonal_through_corner_from_outside_in(self, engine, rect10):
        out = engine.classify(rect10, seg(-20, 20, 0, 0))
        assert_visible(out, (-10, 10), (0, 0))


class TestDegenerateInput:
    """Degenerate geometry never raises."""

    def test_zero_area_selection(self, engine):
        dot = RectangleSelection(Point(0, 0), Point(0, 0))
        assert engine.classify(dot, seg(-5, -5, 5, 5)) == Outside()
        assert engine.classify(dot, seg(-5, 0, 5, 0)) == Outside()
        assert engine.classify(dot, seg(0, 0, 0, 0)) == Inside()

    def test_zero_height_selection(self, engine):
        flat = RectangleSelection(Point(-10, 0), Point(10, 0))
        assert engine.classify(flat, seg(0, -5, 0, 5)) == Outside()

    def test_zero_length_segment(self, engine, rect10):
        assert engine.classify(rect10, seg(3, 3, 3, 3)) == Inside()
        assert engine.classify(rect10, seg(30, 3, 30, 3)) == Outside()

    def test_nan_input_does_not_raise(self, engine, rect10):
        engine.classify(rect10, seg(math.nan, 0, 5, 5))


class TestEngineProperties:
    """Idempotence, module-level classify, configuration."""

    def test_idempotent(self, engine, rect10):
        line = seg(-20, 3, 7, 3)
        assert engine.classify(rect10, line) == engine.classify(rect10, line)

    def test_module_classify_matches_engine(self, engine, rect10):
        line = seg(-20, 0, 20, 0)
        assert classify(rect10, line) == engine.classify(rect10, line)

    @pytest.mark.parametrize("eps", [0.0, -1.0])
    def test_rejects_non_positive_eps(self, eps):
        with pytest.raises(ValueError, match="eps must be > 0"):
            ClippingEngine(eps=eps)

    def test_inside_result_for_random_interior_segments(self, engine, rect10):
        for x0, y0, x1, y1 in [(-9.5, -9.5, 9.5, 9.5), (0, 9, 1, -9), (-1, -1, 1, 1)]:
            assert engine.classify(rect10, seg(x0, y0, x1, y1)) == Inside()
