"""Tests for NURBS edge curves."""

from math import sqrt

import pytest

from brepkit.curves import (
    curve_domain, curve_end, curve_param, curve_start, evaluate_curve,
    is_nurbs_curve, line_curve, nurbs_curve, reverse_curve, sample_curve,
    split_curve_by_param,
)
from brepkit.geom import point


def _quarter_circle():
    """Rational quadratic quarter circle from (1, 0) to (0, 1)."""
    w = sqrt(2) / 2
    return nurbs_curve([point(1, 0), point(1, 1), point(0, 1)],
                       [0, 0, 0, 1, 1, 1], 2, weights=[1, w, 1])


class TestCurveConstruction:
    """Test curve creation and validation."""

    def test_line_curve(self):
        """Test degree-1 line curves."""
        c = line_curve(point(0, 0, 0), point(2, 0, 0))
        assert is_nurbs_curve(c)
        assert curve_domain(c) == (0.0, 1.0)
        assert evaluate_curve(c, 0.25)[:3] == pytest.approx([0.5, 0, 0])

    def test_knot_count_checked(self):
        """Test knot vector length checking."""
        with pytest.raises(ValueError):
            nurbs_curve([point(0, 0), point(1, 0)], [0, 1, 1], 1)

    def test_weights_checked(self):
        """Test weight count checking."""
        with pytest.raises(ValueError):
            nurbs_curve([point(0, 0), point(1, 0)], [0, 0, 1, 1], 1, weights=[1])

    def test_decreasing_knots_rejected(self):
        """Test rejection of decreasing knots."""
        with pytest.raises(ValueError):
            nurbs_curve([point(0, 0), point(1, 0)], [0, 1, 0, 1], 1)


class TestEvaluation:
    """Test curve evaluation and sampling."""

    def test_rational_circle_stays_on_circle(self):
        """Test exactness of a rational quarter circle."""
        c = _quarter_circle()
        for p in sample_curve(c, 9):
            assert sqrt(p[0] ** 2 + p[1] ** 2) == pytest.approx(1.0)

    def test_end_points(self):
        """Test curve start and end points."""
        c = _quarter_circle()
        assert curve_start(c)[:2] == pytest.approx([1, 0])
        assert curve_end(c)[:2] == pytest.approx([0, 1])

    def test_sample_count(self):
        """Test sample counts and end point inclusion."""
        samples = sample_curve(line_curve(point(0, 0), point(1, 0)), 5)
        assert len(samples) == 5
        assert samples[-1][:2] == pytest.approx([1, 0])
        with pytest.raises(ValueError):
            sample_curve(line_curve(point(0, 0), point(1, 0)), 1)


class TestParam:
    """Test point inversion."""

    def test_param_on_line(self):
        """Test point inversion on a line."""
        c = line_curve(point(0, 0, 0), point(4, 0, 0))
        assert curve_param(c, point(1, 0, 0)) == pytest.approx(0.25, abs=1e-6)

    def test_param_of_off_curve_point_projects(self):
        """Test inversion of a point off the curve."""
        c = line_curve(point(0, 0, 0), point(4, 0, 0))
        assert curve_param(c, point(3, 2, 0)) == pytest.approx(0.75, abs=1e-6)

    def test_param_on_circle(self):
        """Test point inversion on an arc."""
        c = _quarter_circle()
        target = point(sqrt(2) / 2, sqrt(2) / 2)
        u = curve_param(c, target)
        assert evaluate_curve(c, u)[:2] == pytest.approx(target[:2], abs=1e-6)


class TestSplit:
    """Test splitting by knot insertion."""

    def test_split_line(self):
        """Test splitting a line."""
        c = line_curve(point(0, 0, 0), point(4, 0, 0))
        before, after = split_curve_by_param(c, 0.25)
        assert curve_start(before)[:3] == pytest.approx([0, 0, 0])
        assert curve_end(before)[:3] == pytest.approx([1, 0, 0])
        assert curve_start(after)[:3] == pytest.approx([1, 0, 0])
        assert curve_end(after)[:3] == pytest.approx([4, 0, 0])
        assert curve_domain(after) == pytest.approx((0.25, 1.0))

    def test_split_circle_keeps_shape(self):
        """Test that splitting an arc keeps its shape."""
        c = _quarter_circle()
        before, after = split_curve_by_param(c, 0.3)
        for part in (before, after):
            for p in sample_curve(part, 7):
                assert sqrt(p[0] ** 2 + p[1] ** 2) == pytest.approx(1.0)
        assert curve_end(before)[:2] == pytest.approx(evaluate_curve(c, 0.3)[:2])
        assert curve_start(after)[:2] == pytest.approx(evaluate_curve(c, 0.3)[:2])

    def test_split_at_domain_ends(self):
        """Test splits at the domain ends."""
        c = line_curve(point(0, 0), point(1, 0))
        before, after = split_curve_by_param(c, 0.0)
        assert before is None
        assert curve_end(after)[:2] == pytest.approx([1, 0])
        before, after = split_curve_by_param(c, 1.0)
        assert after is None
        assert curve_start(before)[:2] == pytest.approx([0, 0])

    def test_split_at_existing_knot(self):
        """Test a split at an existing knot."""
        c = nurbs_curve([point(0, 0), point(1, 0), point(2, 0)], [0, 0, 0.5, 1, 1], 1)
        before, after = split_curve_by_param(c, 0.5)
        assert curve_end(before)[:2] == pytest.approx([1, 0])
        assert curve_start(after)[:2] == pytest.approx([1, 0])


class TestReverse:
    """Test curve reversal."""

    def test_reverse(self):
        """Test curve reversal."""
        c = _quarter_circle()
        r = reverse_curve(c)
        assert curve_start(r)[:2] == pytest.approx([0, 1])
        assert curve_end(r)[:2] == pytest.approx([1, 0])
        assert evaluate_curve(r, 0.3)[:2] == pytest.approx(evaluate_curve(c, 0.7)[:2])
