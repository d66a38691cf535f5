## matrix transformation operations for 3D homogeneous coordinates in
## brepkit

## a matrix is represented as a list of four four-vectors.  Vectors
## represent rows unless the transpose flag is set.  Because points
## are plain lists, Mx implies a column vector.

import brepkit.geom as geom


class Matrix:
    """4x4 transformation matrix class for transforming homogeneous 3D coordinates"""

    def __init__(self, a=False, trans=False):
        self.m = [[1.0, 0.0, 0.0, 0.0],
                  [0.0, 1.0, 0.0, 0.0],
                  [0.0, 0.0, 1.0, 0.0],
                  [0.0, 0.0, 0.0, 1.0]]
        self.trans = False

        if isinstance(a, Matrix):
            for i in range(4):
                self.setrow(i, list(a.getrow(i)))

        elif isinstance(a, (tuple, list)):
            if len(a) == 4 and all(isinstance(r, (tuple, list)) and len(r) == 4 for r in a):
                for i in range(4):
                    for j in range(4):
                        self.set(i, j, a[i][j])
            elif len(a) == 16:
                for ind, x in enumerate(a):
                    self.set(ind // 4, ind % 4, x)
            else:
                raise ValueError('bad thing used in attempt to initialize matrix: {}'.format(a))
        elif a is not False:
            raise ValueError('bad thing used in attempt to initialize matrix: {}'.format(a))
        self.trans = trans

    def __repr__(self):
        return "Matrix({},{},{},{},{})".format(self.m[0], self.m[1],
                                               self.m[2], self.m[3], self.trans)

    # return value indexed by i,j
    def get(self, i, j):
        if i < 0 or i > 3 or j < 0 or j > 3:
            raise ValueError('bad index passed to get: {},{}'.format(i, j))
        if self.trans:
            return self.m[j][i]
        return self.m[i][j]

    # set value indexed by i,j
    def set(self, i, j, x):
        if i < 0 or i > 3 or j < 0 or j > 3:
            raise ValueError('bad index passed to set: {},{}'.format(i, j))
        if not geom.isgoodnum(x):
            raise ValueError('bad value passed to set: {}'.format(x))
        if self.trans:
            self.m[j][i] = float(x)
        else:
            self.m[i][j] = float(x)

    def getrow(self, i):
        if i < 0 or i > 3:
            raise ValueError('bad row passed to getrow: {}'.format(i))
        if self.trans:
            return [self.m[0][i], self.m[1][i], self.m[2][i], self.m[3][i]]
        return list(self.m[i])

    def getcol(self, j):
        if j < 0 or j > 3:
            raise ValueError('bad column passed to getcol: {}'.format(j))
        if not self.trans:
            return [self.m[0][j], self.m[1][j], self.m[2][j], self.m[3][j]]
        return list(self.m[j])

    def setrow(self, i, x):
        if not geom.isvect(x):
            raise ValueError('bad non-vector passed to setrow: {}'.format(x))
        for j in range(4):
            self.set(i, j, x[j])

    def setcol(self, j, x):
        if not geom.isvect(x):
            raise ValueError('bad non-vector passed to setcol: {}'.format(x))
        for i in range(4):
            self.set(i, j, x[i])

    def transpose(self):
        """Return a transposed copy."""
        return Matrix(self.m, trans=not self.trans)

    # matrix multiply.  If x is a matrix, compute MX.  If x is a
    # vector, compute Mx.  If x is a scalar, compute xM.  Respects
    # the transpose flag.
    def mul(self, x):
        if isinstance(x, Matrix):
            result = Matrix()
            for i in range(4):
                row = self.getrow(i)
                for j in range(4):
                    result.set(i, j, _dot4(row, x.getcol(j)))
            return result
        elif geom.isvect(x):
            return [_dot4(self.getrow(i), x) for i in range(4)]
        elif geom.isgoodnum(x):
            result = Matrix()
            for i in range(4):
                result.setrow(i, [c * x for c in self.getrow(i)])
            return result

        raise ValueError('bad thing passed to mul(): {}'.format(x))

    def apply(self, p):
        """Transform point ``p`` and return it homogenized in the w=1 plane."""
        r = self.mul(geom.point(p))
        if abs(r[3]) < geom.epsilon:
            raise ValueError('transformed point lies at infinity: {}'.format(r))
        return [r[0]/r[3], r[1]/r[3], r[2]/r[3], 1.0]


def _dot4(a, b):
    return a[0]*b[0] + a[1]*b[1] + a[2]*b[2] + a[3]*b[3]


def basis_matrix(x, y, z, origin=None):
    """Return the matrix that maps local ``(u, v, w)`` coordinates into the
    frame spanned by axes ``x``, ``y``, ``z`` placed at ``origin``.

    The axes become the matrix columns.  If the axes are orthonormal the
    inverse is :func:`inverse_basis_matrix` with the same arguments.
    """
    if origin is None:
        origin = geom.point(0, 0, 0)
    m = Matrix()
    for j, axis in enumerate((x, y, z)):
        m.setcol(j, [axis[0], axis[1], axis[2], 0.0])
    m.setcol(3, [origin[0], origin[1], origin[2], 1.0])
    return m


def inverse_basis_matrix(x, y, z, origin=None):
    """Inverse of :func:`basis_matrix` for an orthonormal basis.

    The rotation part is transposed and the translation becomes
    ``-R^T origin``.
    """
    if origin is None:
        origin = geom.point(0, 0, 0)
    m = basis_matrix(x, y, z).transpose()
    m.setcol(3, [-geom.dot(x, origin), -geom.dot(y, origin),
                 -geom.dot(z, origin), 1.0])
    return m
