"""Parametric carrier surfaces for brepkit faces.

Two representations are provided:

- ``bspline_surface``: a (rational) B-spline/NURBS patch defined by a grid
  of control points, a knot vector per parametric direction and weights.
- ``brep_surface``: the carrier attached to a face.  It wraps a B-spline
  surface together with an ``inverted`` flag recording whether the face
  normal runs against the surface normal.

Both follow the tagged-list convention ``[tag, payload, metadata_dict]``.
"""

from math import sqrt

from brepkit.geom import point


# -----------------------------------------------------------------------------
# NURBS/B-Spline Surface
# -----------------------------------------------------------------------------

def bspline_surface(control_points, u_knots, v_knots, u_degree, v_degree, *,
                    weights=None, u_range=None, v_range=None):
    """Create a NURBS/B-spline surface.

    Parameters
    ----------
    control_points : list of list of points
        2D grid of control points ``[v_rows][u_cols]``.
    u_knots, v_knots : list of float
        Knot vectors in the u and v directions.
    u_degree, v_degree : int
        Degree in each direction.
    weights : list of list of float, optional
        Weights laid out like ``control_points``.  Defaults to 1.0.
    u_range, v_range : tuple, optional
        Parameter ranges.  Default to the valid span of each knot vector.

    Returns
    -------
    list
        ``['bspline_surface', control_points, metadata_dict]``
    """
    n_v = len(control_points)
    if n_v < 2:
        raise ValueError("Need at least 2 rows of control points")
    n_u = len(control_points[0])
    if n_u < 2:
        raise ValueError("Need at least 2 columns of control points")
    for row in control_points:
        if len(row) != n_u:
            raise ValueError("All rows must have the same number of control points")

    cpts = []
    for row in control_points:
        cpts_row = []
        for cp in row:
            if len(cp) < 3:
                raise ValueError("Control points must have at least 3 coordinates")
            cpts_row.append(point(float(cp[0]), float(cp[1]), float(cp[2])))
        cpts.append(cpts_row)

    u_knots = [float(k) for k in u_knots]
    v_knots = [float(k) for k in v_knots]

    expected_u_knots = n_u + u_degree + 1
    expected_v_knots = n_v + v_degree + 1
    if len(u_knots) != expected_u_knots:
        raise ValueError(f"u_knots should have {expected_u_knots} elements, got {len(u_knots)}")
    if len(v_knots) != expected_v_knots:
        raise ValueError(f"v_knots should have {expected_v_knots} elements, got {len(v_knots)}")

    if weights is None:
        w = [[1.0] * n_u for _ in range(n_v)]
    else:
        w = [[float(weights[j][i]) for i in range(n_u)] for j in range(n_v)]

    if u_range is None:
        u_range = (u_knots[u_degree], u_knots[n_u])
    if v_range is None:
        v_range = (v_knots[v_degree], v_knots[n_v])

    meta = {
        'u_knots': u_knots,
        'v_knots': v_knots,
        'u_degree': int(u_degree),
        'v_degree': int(v_degree),
        'weights': w,
        'n_u': n_u,
        'n_v': n_v,
        'u_range': tuple(u_range),
        'v_range': tuple(v_range),
    }

    return ['bspline_surface', cpts, meta]


def is_bspline_surface(obj):
    """Return True if obj is a B-spline surface."""
    return (isinstance(obj, list) and len(obj) == 3 and obj[0] == 'bspline_surface'
            and isinstance(obj[1], list) and isinstance(obj[2], dict)
            and 'u_knots' in obj[2] and 'v_knots' in obj[2])


def bspline_basis(knots, i, p, u):
    """Compute the B-spline basis function N_{i,p}(u) (Cox-de Boor)."""
    if p == 0:
        if knots[i] <= u < knots[i + 1]:
            return 1.0
        # the closing knot belongs to the last non-empty span
        if u == knots[-1] and knots[i] < knots[i + 1] == knots[-1]:
            return 1.0
        return 0.0

    left = 0.0
    denom = knots[i + p] - knots[i]
    if denom > 1e-12:
        left = ((u - knots[i]) / denom) * bspline_basis(knots, i, p - 1, u)

    right = 0.0
    denom = knots[i + p + 1] - knots[i + 1]
    if denom > 1e-12:
        right = ((knots[i + p + 1] - u) / denom) * bspline_basis(knots, i + 1, p - 1, u)

    return left + right


def evaluate_bspline_surface(surf, u, v):
    """Evaluate a point on a B-spline surface at parameters (u, v)."""
    if not is_bspline_surface(surf):
        raise ValueError("Not a B-spline surface")

    cpts = surf[1]
    meta = surf[2]
    u_knots = meta['u_knots']
    v_knots = meta['v_knots']
    p = meta['u_degree']
    q = meta['v_degree']
    weights = meta['weights']

    x, y, z, w_sum = 0.0, 0.0, 0.0, 0.0

    for j in range(meta['n_v']):
        nv = bspline_basis(v_knots, j, q, v)
        if nv == 0.0:
            continue
        for i in range(meta['n_u']):
            nu = bspline_basis(u_knots, i, p, u)
            if nu == 0.0:
                continue
            basis = nu * nv * weights[j][i]
            cp = cpts[j][i]
            x += basis * cp[0]
            y += basis * cp[1]
            z += basis * cp[2]
            w_sum += basis

    if w_sum < 1e-12:
        return point(cpts[0][0])

    return point(x / w_sum, y / w_sum, z / w_sum)


def bspline_surface_normal(surf, u, v, delta=1e-6):
    """Return the unit normal at (u, v) on a B-spline surface.

    Computed from one-sided finite differences, stepping backwards at the
    upper end of each parameter range.
    """
    if not is_bspline_surface(surf):
        raise ValueError("Not a B-spline surface")

    meta = surf[2]
    u_lo, u_hi = meta['u_range']
    v_lo, v_hi = meta['v_range']

    du = min(delta, (u_hi - u_lo) * 0.01)
    dv = min(delta, (v_hi - v_lo) * 0.01)
    if u + du > u_hi:
        du = -du
    if v + dv > v_hi:
        dv = -dv

    p0 = evaluate_bspline_surface(surf, u, v)
    pu = evaluate_bspline_surface(surf, u + du, v)
    pv = evaluate_bspline_surface(surf, u, v + dv)

    tu = [(pu[i] - p0[i]) / du for i in range(3)]
    tv = [(pv[i] - p0[i]) / dv for i in range(3)]

    nx = tu[1] * tv[2] - tu[2] * tv[1]
    ny = tu[2] * tv[0] - tu[0] * tv[2]
    nz = tu[0] * tv[1] - tu[1] * tv[0]

    mag = sqrt(nx * nx + ny * ny + nz * nz)
    if mag < 1e-12:
        return [0.0, 0.0, 1.0, 0.0]

    return [nx / mag, ny / mag, nz / mag, 0.0]


def bilinear_surface(p00, p10, p01, p11):
    """Create a degree (1, 1) patch through four corner points.

    ``pUV`` is the corner at parameter ``(u, v)``; both knot vectors are
    the clamped ``[0, 0, 1, 1]`` and all weights are 1.
    """
    return bspline_surface([[p00, p10], [p01, p11]],
                           [0, 0, 1, 1], [0, 0, 1, 1], 1, 1)


# -----------------------------------------------------------------------------
# Face carrier surface
# -----------------------------------------------------------------------------

def brep_surface(surface, *, inverted=False):
    """Wrap a B-spline surface as a face carrier.

    Returns
    -------
    list
        ``['brep_surface', bspline_surface, {'inverted': bool}]``
    """
    if not is_bspline_surface(surface):
        raise ValueError("brep_surface expects a B-spline surface")
    return ['brep_surface', surface, {'inverted': bool(inverted)}]


def is_brep_surface(obj):
    """Return True if obj is a face carrier surface."""
    return (isinstance(obj, list) and len(obj) == 3 and obj[0] == 'brep_surface'
            and is_bspline_surface(obj[1]) and isinstance(obj[2], dict))


def brep_surface_nurbs(surf):
    """Return the wrapped B-spline surface."""
    if not is_brep_surface(surf):
        raise ValueError("Not a brep surface")
    return surf[1]


def evaluate_brep_surface(surf, u, v):
    if not is_brep_surface(surf):
        raise ValueError("Not a brep surface")
    return evaluate_bspline_surface(surf[1], u, v)


def brep_surface_normal(surf, u, v):
    """Return the face-oriented unit normal, flipped when ``inverted``."""
    if not is_brep_surface(surf):
        raise ValueError("Not a brep surface")
    n = bspline_surface_normal(surf[1], u, v)
    if surf[2].get('inverted'):
        return [-n[0], -n[1], -n[2], 0.0]
    return n


def brep_surface_corners(surf):
    """Return the surface points at the four parameter-range corners.

    Order is ``(u0, v0), (u1, v0), (u1, v1), (u0, v1)``.
    """
    nurbs = brep_surface_nurbs(surf)
    u0, u1 = nurbs[2]['u_range']
    v0, v1 = nurbs[2]['v_range']
    return [evaluate_bspline_surface(nurbs, u, v)
            for u, v in ((u0, v0), (u1, v0), (u1, v1), (u0, v1))]


__all__ = [
    'bspline_surface',
    'is_bspline_surface',
    'bspline_basis',
    'evaluate_bspline_surface',
    'bspline_surface_normal',
    'bilinear_surface',
    'brep_surface',
    'is_brep_surface',
    'brep_surface_nurbs',
    'evaluate_brep_surface',
    'brep_surface_normal',
    'brep_surface_corners',
]
