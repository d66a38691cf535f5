"""NURBS curves used as edge carriers.

A curve is the tagged list ``['nurbs_curve', control_points, meta]`` with
``meta`` holding ``degree``, ``knots`` and ``weights``.  Parameters are
knot-space values, so a curve's domain is
``(knots[degree], knots[-degree - 1])``.

Besides evaluation and sampling this module provides the two operations
edge trimming relies on: point inversion (:func:`curve_param`) and
splitting at a parameter by knot insertion (:func:`split_curve_by_param`).
"""

from __future__ import annotations

from typing import List, Optional, Sequence, Tuple

from brepkit.geom import dist, point
from brepkit.surfaces import bspline_basis

PARAM_TOLERANCE = 1e-9


def nurbs_curve(control_points: Sequence, knots: Sequence[float], degree: int, *,
                weights: Optional[Sequence[float]] = None) -> list:
    """Create a (rational) B-spline curve.

    Raises
    ------
    ValueError
        If the knot vector length does not match ``len(control_points) +
        degree + 1``, or the weights do not match the control points.
    """
    n = len(control_points)
    degree = int(degree)
    if degree < 1:
        raise ValueError('curve degree must be >= 1')
    if n < degree + 1:
        raise ValueError(f'degree {degree} curve needs at least {degree + 1} control points')
    expected_knots = n + degree + 1
    if len(knots) != expected_knots:
        raise ValueError(f'Expected {expected_knots} knots, got {len(knots)}')
    knots = [float(k) for k in knots]
    if any(b < a for a, b in zip(knots, knots[1:])):
        raise ValueError('knot vector must be non-decreasing')

    if weights is None:
        w = [1.0] * n
    else:
        if len(weights) != n:
            raise ValueError('one weight per control point is required')
        w = [float(wi) for wi in weights]

    meta = {
        'degree': degree,
        'knots': knots,
        'weights': w,
    }
    return ['nurbs_curve', [point(p) for p in control_points], meta]


def line_curve(a, b) -> list:
    """Degree-1 curve from ``a`` (parameter 0) to ``b`` (parameter 1)."""
    return nurbs_curve([a, b], [0, 0, 1, 1], 1)


def is_nurbs_curve(obj) -> bool:
    return (isinstance(obj, list) and len(obj) == 3 and obj[0] == 'nurbs_curve'
            and isinstance(obj[1], list) and isinstance(obj[2], dict))


def curve_domain(curve) -> Tuple[float, float]:
    """Return the ``(start, end)`` parameters of ``curve``."""
    if not is_nurbs_curve(curve):
        raise ValueError('curve is not a NURBS curve')
    meta = curve[2]
    degree = meta['degree']
    knots = meta['knots']
    return knots[degree], knots[-degree - 1]


def evaluate_curve(curve, u: float) -> list:
    """Evaluate ``curve`` at parameter ``u`` (clamped to the domain)."""
    start, end = curve_domain(curve)
    u = max(start, min(end, float(u)))
    ctrl = curve[1]
    meta = curve[2]
    knots = meta['knots']
    degree = meta['degree']
    weights = meta['weights']

    x = y = z = denominator = 0.0
    for i, cp in enumerate(ctrl):
        basis = bspline_basis(knots, i, degree, u)
        if basis == 0.0:
            continue
        w = weights[i] * basis
        x += w * cp[0]
        y += w * cp[1]
        z += w * cp[2]
        denominator += w
    if denominator == 0.0:
        return point(ctrl[0])
    return point(x / denominator, y / denominator, z / denominator)


def curve_start(curve) -> list:
    return evaluate_curve(curve, curve_domain(curve)[0])


def curve_end(curve) -> list:
    return evaluate_curve(curve, curve_domain(curve)[1])


def sample_curve(curve, samples: int = 16) -> List[list]:
    """Sample ``curve`` at ``samples`` evenly spaced parameters, end points included."""
    if samples < 2:
        raise ValueError('samples must be >= 2')
    start, end = curve_domain(curve)
    out = []
    for i in range(samples):
        if i == samples - 1:
            u = end
        else:
            u = start + (end - start) * (i / (samples - 1))
        out.append(evaluate_curve(curve, u))
    return out


def curve_param(curve, p, *, samples: int = 64, iterations: int = 60) -> float:
    """Return the parameter of the point on ``curve`` closest to ``p``.

    The closest of ``samples`` evenly spaced parameters seeds a pattern
    search that halves its step each time neither neighbour improves.
    """
    start, end = curve_domain(curve)
    target = point(p)
    best_u = start
    best_d = dist(evaluate_curve(curve, start), target)
    for i in range(1, samples + 1):
        u = start + (end - start) * (i / samples)
        d = dist(evaluate_curve(curve, u), target)
        if d < best_d:
            best_u, best_d = u, d

    step = (end - start) / samples
    for _ in range(iterations):
        if step < PARAM_TOLERANCE:
            break
        moved = False
        for u in (best_u - step, best_u + step):
            u = max(start, min(end, u))
            d = dist(evaluate_curve(curve, u), target)
            if d < best_d:
                best_u, best_d = u, d
                moved = True
        if not moved:
            step *= 0.5
    return best_u


def _homogeneous(curve) -> List[List[float]]:
    return [[cp[0] * w, cp[1] * w, cp[2] * w, w]
            for cp, w in zip(curve[1], curve[2]['weights'])]


def _from_homogeneous(hpts, knots, degree) -> list:
    ctrl = [[h[0] / h[3], h[1] / h[3], h[2] / h[3]] for h in hpts]
    weights = [h[3] for h in hpts]
    return nurbs_curve(ctrl, knots, degree, weights=weights)


def _insert_knot(hpts, knots, degree, u):
    """Insert ``u`` once (Boehm's algorithm) into homogeneous control points."""
    k = max(i for i in range(len(knots) - 1) if knots[i] <= u)
    # stay inside the last non-empty span when u sits on the closing knot
    while k > degree and knots[k] == knots[k + 1]:
        k -= 1
    new_pts = []
    for i in range(len(hpts) + 1):
        if i <= k - degree:
            new_pts.append(list(hpts[i]))
        elif i > k:
            new_pts.append(list(hpts[i - 1]))
        else:
            denom = knots[i + degree] - knots[i]
            a = (u - knots[i]) / denom if denom != 0.0 else 0.0
            new_pts.append([(1.0 - a) * hpts[i - 1][j] + a * hpts[i][j] for j in range(4)])
    new_knots = knots[:k + 1] + [u] + knots[k + 1:]
    return new_pts, new_knots


def split_curve_by_param(curve, u: float) -> Tuple[Optional[list], Optional[list]]:
    """Split ``curve`` at parameter ``u``.

    Returns ``(before, after)``.  A side that would be empty, because ``u``
    lies at (or beyond) the corresponding end of the domain, is ``None``
    and the other side is a copy of the whole curve.
    """
    start, end = curve_domain(curve)
    u = float(u)
    if u <= start + PARAM_TOLERANCE:
        return None, reparametrized_copy(curve)
    if u >= end - PARAM_TOLERANCE:
        return reparametrized_copy(curve), None

    meta = curve[2]
    degree = meta['degree']
    knots = list(meta['knots'])
    # snap to an existing knot so multiplicity is counted exactly
    for k in knots:
        if abs(k - u) <= PARAM_TOLERANCE:
            u = k
            break

    hpts = _homogeneous(curve)
    multiplicity = sum(1 for k in knots if k == u)
    for _ in range(degree + 1 - multiplicity):
        hpts, knots = _insert_knot(hpts, knots, degree, u)

    r = knots.index(u)
    before = _from_homogeneous(hpts[:r], knots[:r + degree + 1], degree)
    after = _from_homogeneous(hpts[r:], knots[r:], degree)
    return before, after


def reparametrized_copy(curve) -> list:
    """Return a copy of ``curve`` (same knots, same control points)."""
    meta = curve[2]
    return nurbs_curve(curve[1], meta['knots'], meta['degree'], weights=meta['weights'])


def reverse_curve(curve) -> list:
    """Return ``curve`` traversed in the opposite direction over the same domain."""
    if not is_nurbs_curve(curve):
        raise ValueError('curve is not a NURBS curve')
    meta = curve[2]
    knots = meta['knots']
    lo, hi = knots[0], knots[-1]
    new_knots = [lo + hi - k for k in reversed(knots)]
    return nurbs_curve(list(reversed(curve[1])), new_knots, meta['degree'],
                       weights=list(reversed(meta['weights'])))


__all__ = [
    'nurbs_curve',
    'line_curve',
    'is_nurbs_curve',
    'curve_domain',
    'evaluate_curve',
    'curve_start',
    'curve_end',
    'sample_curve',
    'curve_param',
    'split_curve_by_param',
    'reparametrized_copy',
    'reverse_curve',
]
