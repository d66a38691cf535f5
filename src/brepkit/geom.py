"""Point and vector primitives for brepkit.

Points and vectors use homogeneous coordinates: a point is a
four-element list ``[x, y, z, 1.0]``.  The R^3 operations below ignore the
``w`` component and always return points in the ``w=1`` hyperplane.
"""

from copy import deepcopy
from math import sqrt

import numpy as np

## constants
epsilon = 0.000005


## operations on scalars
## -----------------------

## booleans are ints to python, but True and False are not numbers to us
def isgoodnum(n):
    """ determine if an argument is actually a scalar number, and not boolean
    """
    return (not isinstance(n, bool)) and isinstance(n, (int, float, np.floating))


def close(a, b):
    """ are two scalars the same within epsilon
    """
    return abs(a - b) < epsilon


## operations on vectors
## ------------------------

def vect(a=False, b=False, c=False, d=False):
    """Convenience function for making a homogeneous coordinates 4 vector
    from scalars or from a sequence
    """
    r = [0.0, 0.0, 0.0, 1.0]
    if isgoodnum(a):
        r[0] = float(a)
        if isgoodnum(b):
            r[1] = float(b)
            if isgoodnum(c):
                r[2] = float(c)
                if isgoodnum(d):
                    r[3] = float(d)
    elif isinstance(a, (tuple, list, np.ndarray)):
        for i in range(min(4, len(a))):
            x = a[i]
            if isgoodnum(x):
                r[i] = float(x)
    return r


def isvect(x):
    """
    check to see if argument is a proper vector for our purposes
    """
    return (isinstance(x, list) and len(x) == 4
            and all(isgoodnum(c) for c in x))


def point(x=False, y=False, z=False):
    """Point creation from a point, a coordinate sequence, or scalars"""
    if ispoint(x):
        return deepcopy(x)
    if isinstance(x, (tuple, list, np.ndarray)):
        if len(x) < 2:
            raise ValueError('bad coordinate sequence passed to point(): {}'.format(x))
        r = vect(x)
        r[3] = 1.0
        return r
    if not isgoodnum(x):
        raise ValueError('bad argument passed to point(): {}'.format(x))
    return vect(x, y if isgoodnum(y) else 0.0, z if isgoodnum(z) else 0.0, 1.0)


def ispoint(x):
    """ is it a point?"""
    return isvect(x) and x[3] > 0.0


## R^3 -> R^3 functions: ignore w component
## ------------------------------------------------
def add(a, b):
    """ 3 vector, `a + b`"""
    return [a[0]+b[0], a[1]+b[1], a[2]+b[2], 1.0]


def sub(a, b):
    """ 3 vector, `a - b`"""
    return [a[0]-b[0], a[1]-b[1], a[2]-b[2], 1.0]


def scale3(a, c):
    """ 3 vector, vector ``a`` times scalar ``c``, `a * c`"""
    return [a[0]*c, a[1]*c, a[2]*c, 1.0]


def cross(a, b):
    """Compute the cross product of a x b, assuming that both fall into
    the w=1 hyperplane
    """
    return [a[1]*b[2] - a[2]*b[1],
            a[2]*b[0] - a[0]*b[2],
            a[0]*b[1] - a[1]*b[0],
            1.0]


def normalize(a):
    """Return ``a`` scaled to unit length, or ``None`` if it is too short"""
    m = mag(a)
    if m < epsilon:
        return None
    return scale3(a, 1.0/m)


## R^3 -> R functions -- ignore w component
## ----------------------------------------
def dot(a, b):
    """ 3 vector ``a`` dot ``b`` """
    return a[0]*b[0] + a[1]*b[1] + a[2]*b[2]


def mag(a):
    """ compute the magnitude of 3 vector ``a``"""
    return sqrt(a[0]*a[0] + a[1]*a[1] + a[2]*a[2])


def dist(a, b):
    """ compute the euclidean distance between two points ``a`` and ``b``"""
    return mag(sub(a, b))


def vclose(a, b):
    """ are two points the same to within epsilon"""
    return close(dist(a, b), 0)


## polygon helpers
## ---------------

def distinct_points(points, tol=epsilon):
    """Return ``points`` with coincident duplicates removed, order kept."""
    result = []
    for p in points:
        if any(dist(p, q) <= tol for q in result):
            continue
        result.append(p)
    return result


def normal_of_ccw_seq(points, tol=epsilon):
    """Return the unit normal of a counter-clockwise point sequence.

    Uses Newell's method, which accumulates the signed areas of the
    polygon's projections onto the three coordinate planes.  It is
    robust for non-convex and slightly non-planar polygons.

    The accumulated vector has length twice the polygon's area, so
    dividing it by the longest edge gives the polygon's thickness across
    that edge (a triangle's height).  Returns ``None`` if that thickness is
    within ``tol``, as it is for collinear or coincident points.  The
    test does not depend on the polygon's absolute size.
    """
    if len(points) < 3:
        return None
    pts = np.asarray([[p[0], p[1], p[2]] for p in points], dtype=float)
    nxt = np.roll(pts, -1, axis=0)
    n = np.array([
        np.sum((pts[:, 1] - nxt[:, 1]) * (pts[:, 2] + nxt[:, 2])),
        np.sum((pts[:, 2] - nxt[:, 2]) * (pts[:, 0] + nxt[:, 0])),
        np.sum((pts[:, 0] - nxt[:, 0]) * (pts[:, 1] + nxt[:, 1])),
    ])
    length = float(np.linalg.norm(n))
    longest = float(np.max(np.linalg.norm(nxt - pts, axis=1)))
    if longest == 0.0 or length <= tol * longest:
        return None
    n = n / length
    return vect(float(n[0]), float(n[1]), float(n[2]), 1.0)


__all__ = [
    'epsilon',
    'isgoodnum',
    'close',
    'vect',
    'isvect',
    'point',
    'ispoint',
    'add',
    'sub',
    'scale3',
    'cross',
    'normalize',
    'dot',
    'mag',
    'dist',
    'vclose',
    'distinct_points',
    'normal_of_ccw_seq',
]
