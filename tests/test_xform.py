import pytest
from brepkit import geom
from brepkit.xform import Matrix, basis_matrix, inverse_basis_matrix
## unit tests for brepkit xform.py


class TestXform:
    """unit tests for brepkit matrix operations"""

    def test_matrix(self):
        """Test matrix multiplication."""
        foo = Matrix([1, 2, 3, 4, 5, 6, 7, 8, 9, 10, 11, 12, 13, 14, 15, 16])
        fooT = Matrix(foo, True)
        bar = Matrix([[1, 0, 0, 1], [0, 1, 0, 1], [0, 0, 1, 1], [0, 0, 0, 1]])
        baz = geom.vect(1, 2, 3)
        I = Matrix()
        a = 10.0
        assert I.mul(bar).m == bar.m
        assert I.mul(foo).m == foo.m
        assert I.mul(fooT).m == fooT.mul(I).m
        assert I.mul(I).m == I.m
        assert foo.mul(bar).m == [[1, 2, 3, 10], [5, 6, 7, 26], [9, 10, 11, 42], [13, 14, 15, 58]]
        assert foo.mul(baz) == [18, 46, 74, 102]
        assert foo.mul(a).m == [[10.0, 20.0, 30.0, 40.0],
                                [50.0, 60.0, 70.0, 80.0],
                                [90.0, 100.0, 110.0, 120.0],
                                [130.0, 140.0, 150.0, 160.0]]
        assert I.mul(baz) == baz

    def test_transpose(self):
        """Test transposition."""
        foo = Matrix([1, 2, 3, 4, 5, 6, 7, 8, 9, 10, 11, 12, 13, 14, 15, 16])
        t = foo.transpose()
        assert t.get(0, 1) == 5
        assert t.getrow(0) == [1, 5, 9, 13]
        assert t.getcol(0) == [1, 2, 3, 4]

    def test_bad_init(self):
        """Test bad initializers and indices."""
        with pytest.raises(ValueError):
            Matrix([1, 2, 3])
        with pytest.raises(ValueError):
            Matrix().set(4, 0, 1.0)
        with pytest.raises(ValueError):
            Matrix().set(0, 0, True)

    def test_apply_homogenizes(self):
        """Test that apply divides by w."""
        m = Matrix([[1, 0, 0, 0], [0, 1, 0, 0], [0, 0, 1, 0], [0, 0, 0, 2]])
        assert m.apply(geom.point(2, 4, 6)) == [1.0, 2.0, 3.0, 1.0]

    def test_basis_round_trip(self):
        """Test basis matrix round trips."""
        x = geom.point(0, 1, 0)
        y = geom.point(0, 0, 1)
        z = geom.point(1, 0, 0)
        origin = geom.point(5, 0, 0)
        fwd = basis_matrix(x, y, z, origin)
        inv = inverse_basis_matrix(x, y, z, origin)
        p = geom.point(0.25, -3, 2)
        world = fwd.apply(p)
        assert world[:3] == pytest.approx([7.0, 0.25, -3.0])
        back = inv.apply(world)
        assert back[:3] == pytest.approx(p[:3])

    def test_basis_columns_and_inverse_rotation(self):
        """Test that axes become columns and the inverse rotation is their transpose."""
        x = geom.point(0, 1, 0)
        y = geom.point(0, 0, 1)
        z = geom.point(1, 0, 0)
        origin = geom.point(1, 2, 3)
        fwd = basis_matrix(x, y, z, origin)
        assert fwd.getcol(0) == [0.0, 1.0, 0.0, 0.0]
        assert fwd.getcol(3) == [1.0, 2.0, 3.0, 1.0]
        inv = inverse_basis_matrix(x, y, z, origin)
        assert inv.getrow(0) == [0.0, 1.0, 0.0, -2.0]
        assert inv.getrow(2) == [1.0, 0.0, 0.0, -1.0]
        assert inv.getrow(3) == [0.0, 0.0, 0.0, 1.0]
