"""Tests for planes and their 2D/3D transformations."""

from math import sqrt

import pytest

from brepkit.geom import dot, mag, point
from brepkit.plane import Plane


class TestPlaneBasis:
    """Orthonormal frame selection."""

    def test_xy_plane_basis(self):
        """Test the basis of the XY plane."""
        x, y, n = Plane([0, 0, 1], 0).basis()
        assert x[:3] == pytest.approx([1.0, 0.0, 0.0])
        assert y[:3] == pytest.approx([0.0, 1.0, 0.0])
        assert n[:3] == pytest.approx([0.0, 0.0, 1.0])

    def test_basis_near_y_uses_z(self):
        """Test the basis when the normal is the Y axis."""
        x, y, n = Plane([0, 1, 0], 2).basis()
        assert abs(dot(x, n)) < 1e-12
        assert abs(dot(y, n)) < 1e-12
        assert abs(dot(x, y)) < 1e-12
        assert mag(x) == pytest.approx(1.0)
        assert mag(y) == pytest.approx(1.0)

    def test_normal_is_normalized(self):
        """Test that the normal is made unit length."""
        plane = Plane([0, 0, 3], 1)
        assert plane.normal[:3] == pytest.approx([0.0, 0.0, 1.0])

    def test_zero_normal_rejected(self):
        """Test rejection of a zero normal."""
        with pytest.raises(ValueError):
            Plane([0, 0, 0], 1)


class TestPlaneTransforms:
    """2D projection and 3D lifting are inverses."""

    def test_offset_plane_projection(self):
        """Test projection onto an offset plane."""
        plane = Plane([0, 0, 1], 5)
        p2 = plane.to_2d(point(2, 3, 5))
        assert p2[:3] == pytest.approx([2.0, 3.0, 0.0])
        assert plane.to_3d(point(2, 3))[:3] == pytest.approx([2.0, 3.0, 5.0])

    def test_round_trip_on_tilted_plane(self):
        """Test 2D/3D round trips on a tilted plane."""
        s = 1 / sqrt(3)
        plane = Plane([s, s, s], 1.5)
        p = point(0.5, 0.25, 1.5 / s - 0.75)
        assert abs(plane.distance(p)) < 1e-9
        local = plane.get_2d_transformation().apply(p)
        assert abs(local[2]) < 1e-9
        back = plane.get_3d_transformation().apply(local)
        assert back[:3] == pytest.approx(p[:3])

    def test_distance_off_plane(self):
        """Test signed distance from the plane."""
        plane = Plane([0, 0, 1], 1)
        assert plane.to_2d(point(0, 0, 4))[2] == pytest.approx(3.0)
        assert plane.distance(point(0, 0, -1)) == pytest.approx(-2.0)
