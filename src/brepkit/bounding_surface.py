"""Bounding-surface synthesis for faces declared without a carrier.

Three entry points, each refining its input and delegating to the next:

- :func:`create_bounding_surface` takes 3D boundary points, infers the
  supporting plane if none is given and projects into it.
- :func:`create_bounding_surface_from_2d_points` boxes the projected points
  and applies minimum-size and offset padding.
- :func:`create_bounding_surface_from_bbox` lifts the box corners back to
  3D and builds a bilinear NURBS patch.
"""

from __future__ import annotations

import logging
from typing import Optional, Sequence

from brepkit.bbox import BBox2D
from brepkit.errors import GeometricDegeneracyError
from brepkit.geom import distinct_points, dot, epsilon, normal_of_ccw_seq, point
from brepkit.plane import Plane
from brepkit.surfaces import bilinear_surface, brep_surface

logger = logging.getLogger(__name__)


def supporting_plane(points: Sequence, tolerance: float = epsilon) -> Plane:
    """Return the plane of a counter-clockwise boundary point sequence.

    The normal comes from Newell's method; the offset is the dot product
    of the first point with that normal.

    Raises
    ------
    GeometricDegeneracyError
        If there are fewer than three distinct points, or they are collinear
        (no thicker than ``tolerance`` across their longest edge).
    """
    pts = [point(p) for p in points]
    if len(distinct_points(pts, tolerance)) < 3:
        raise GeometricDegeneracyError(
            'at least 3 distinct points are needed to infer a plane',
            {'points': pts})
    normal = normal_of_ccw_seq(pts, tolerance)
    if normal is None:
        raise GeometricDegeneracyError(
            'boundary points are collinear to within the tolerance',
            {'points': pts})
    return Plane(normal, dot(pts[0], normal))


def create_bounding_surface(points: Sequence, plane: Optional[Plane] = None, *,
                            tolerance: float = epsilon, **padding):
    """Synthesize a carrier surface bounding a 3D polygon.

    ``padding`` is passed through to
    :func:`create_bounding_surface_from_2d_points` (``min_width``,
    ``min_height``, ``offset``).
    """
    if plane is None:
        plane = supporting_plane(points, tolerance)
    elif len(distinct_points([point(p) for p in points], tolerance)) < 3:
        raise GeometricDegeneracyError(
            'at least 3 distinct boundary points are needed', {'points': list(points)})
    to_2d = plane.get_2d_transformation()
    points2d = [to_2d.apply(p) for p in points]
    return create_bounding_surface_from_2d_points(points2d, plane, tolerance=tolerance,
                                                  **padding)


def create_bounding_surface_from_2d_points(points2d: Sequence, plane: Plane,
                                           min_width: Optional[float] = None,
                                           min_height: Optional[float] = None,
                                           offset: float = 0.0, *,
                                           tolerance: float = epsilon):
    """Synthesize a carrier surface from points in ``plane``'s 2D frame.

    If ``min_width`` exceeds the width of the points' bounding box the box
    is widened symmetrically about its centre to exactly ``min_width``;
    likewise ``min_height``.  A non-zero ``offset`` then moves every side
    outward by ``offset / 2`` (inward when negative).
    """
    if not points2d:
        raise GeometricDegeneracyError('no boundary points given')
    bbox = BBox2D(points2d)

    if min_width and bbox.width() < min_width:
        cx = (bbox.min_x + bbox.max_x) * 0.5
        bbox.min_x = cx - min_width * 0.5
        bbox.max_x = cx + min_width * 0.5
    if min_height and bbox.height() < min_height:
        cy = (bbox.min_y + bbox.max_y) * 0.5
        bbox.min_y = cy - min_height * 0.5
        bbox.max_y = cy + min_height * 0.5

    if offset != 0:
        bbox.expand(offset * 0.5, offset * 0.5)

    return create_bounding_surface_from_bbox(bbox, plane, tolerance=tolerance)


def create_bounding_surface_from_bbox(bbox: BBox2D, plane: Plane, *,
                                      tolerance: float = epsilon):
    """Build the bilinear carrier spanning ``bbox`` on ``plane``.

    The patch's ``u`` direction runs from the box's top edge to its bottom
    edge and ``v`` from left to right, so the surface normal agrees with the
    plane normal.
    """
    if bbox.is_empty() or bbox.width() <= tolerance or bbox.height() <= tolerance:
        raise GeometricDegeneracyError(
            'bounding box has no area', {'bbox': repr(bbox)})
    to_3d = plane.get_3d_transformation()
    p0, p1, p2, p3 = [to_3d.apply(p) for p in bbox.to_polygon()]
    logger.debug('bounding surface on %r spans %r', plane, bbox)
    return brep_surface(bilinear_surface(p3, p0, p2, p1))


__all__ = [
    'supporting_plane',
    'create_bounding_surface',
    'create_bounding_surface_from_2d_points',
    'create_bounding_surface_from_bbox',
]
