"""Planes with paired 2D/3D coordinate transformations."""

from __future__ import annotations

from brepkit.geom import cross, dot, ispoint, normalize, point, scale3, vect
from brepkit.xform import Matrix, basis_matrix, inverse_basis_matrix

AXIS_Y = vect(0, 1, 0, 1)
AXIS_Z = vect(0, 0, 1, 1)


class Plane:
    """An oriented plane ``dot(normal, p) == w``.

    The plane carries an orthonormal frame ``(x, y, normal)`` whose origin
    is ``normal * w``.  Local 2D coordinates are ``(u, v)`` along ``x`` and
    ``y``; the third local coordinate is the signed distance from the
    plane.
    """

    def __init__(self, normal, w: float):
        if not isinstance(normal, (list, tuple)) or len(normal) < 3:
            raise ValueError('bad normal passed to Plane: {}'.format(normal))
        n = normalize(vect(normal))
        if n is None:
            raise ValueError('zero-length plane normal: {}'.format(normal))
        self.normal = n
        self.w = float(w)
        self._basis = None
        self._to_3d = None
        self._to_2d = None

    def __repr__(self):
        return "Plane({}, {})".format(self.normal[:3], self.w)

    def basis(self):
        """Return the ``(x, y, normal)`` axes of the plane's local frame.

        ``x`` is taken perpendicular to the Y axis unless the normal is
        nearly parallel to it, in which case the Z axis is used.
        """
        if self._basis is None:
            n = self.normal
            align = AXIS_Y if abs(dot(n, AXIS_Y)) < 0.5 else AXIS_Z
            x = normalize(cross(align, n))
            y = normalize(cross(n, x))
            self._basis = (x, y, n)
        return self._basis

    def origin(self):
        return scale3(self.normal, self.w)

    def get_3d_transformation(self) -> Matrix:
        """Matrix mapping local ``(u, v, 0)`` points onto the plane."""
        if self._to_3d is None:
            x, y, n = self.basis()
            self._to_3d = basis_matrix(x, y, n, self.origin())
        return self._to_3d

    def get_2d_transformation(self) -> Matrix:
        """Matrix mapping world points into local ``(u, v, distance)``."""
        if self._to_2d is None:
            x, y, n = self.basis()
            self._to_2d = inverse_basis_matrix(x, y, n, self.origin())
        return self._to_2d

    def to_2d(self, p):
        return self.get_2d_transformation().apply(p)

    def to_3d(self, p):
        q = point(p)
        return self.get_3d_transformation().apply(q)

    def distance(self, p) -> float:
        """Signed distance of ``p`` from the plane."""
        if not ispoint(p):
            p = point(p)
        return dot(self.normal, p) - self.w
