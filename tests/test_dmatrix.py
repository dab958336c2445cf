from fractions import Fraction

import pytest

from gridmapkit.dmatrix import (
    DMatrix,
    IncompatibleMatrixError,
    NotInvertibleMatrixError,
    NotSquareMatrixError,
)


def fmatrix(rows):
    return DMatrix.from_rows([[Fraction(v) for v in row] for row in rows])


def test_default_matrix_is_one_by_one_zero():
    m = DMatrix()
    assert (m.rows, m.columns) == (1, 1)
    assert m[0, 0] == 0


def test_non_positive_sizes_are_raised_to_one():
    m = DMatrix(-3, 0)
    assert (m.rows, m.columns) == (1, 1)


def test_str_format():
    assert str(DMatrix.from_rows([[1, 2], [3, 4]])) == "{{1,2},{3,4}}"
    assert str(DMatrix.from_rows([[1.5, 2.0]])) == "{{1.5,2}}"


def test_set_and_get_element_and_row():
    m = DMatrix(2, 3)
    m[1, 2] = 7
    assert m[1] == (0, 0, 7)
    m[0] = [1, 2, 3]
    assert m[0, 1] == 2


def test_set_row_with_wrong_length_raises():
    m = DMatrix(2, 2)
    with pytest.raises(ValueError):
        m.__setitem__(0, [1, 2, 3])
    assert m[0] == (0, 0)


def test_identity_determinant():
    assert DMatrix.identity(4).det() == 1


def test_determinant_of_swap_matrix():
    assert DMatrix.from_rows([[0, 1], [1, 0]]).det() == -1


def test_singular_determinant_is_zero():
    assert fmatrix([[1, 2], [2, 4]]).det() == 0


def test_determinant_is_multiplicative():
    a = fmatrix([[2, 1, 0], [1, 3, 1], [0, 1, 4]])
    b = fmatrix([[1, 0, 2], [0, 1, 1], [3, 1, 1]])
    assert (a * b).det() == a.det() * b.det()


def test_inverse_times_matrix_is_identity():
    a = fmatrix([[0, 2, 1], [1, 1, 0], [3, 0, 2]])
    assert a * a.inv() == DMatrix.identity(3)
    assert a.inv() * a == DMatrix.identity(3)


def test_inverse_of_singular_raises():
    with pytest.raises(NotInvertibleMatrixError):
        fmatrix([[1, 2], [2, 4]]).inv()


def test_inverse_of_non_square_raises():
    with pytest.raises(NotInvertibleMatrixError):
        DMatrix(2, 3).inv()


def test_determinant_of_non_square_raises():
    with pytest.raises(NotSquareMatrixError):
        DMatrix(3, 2).det()


def test_transpose_shape_and_involution():
    a = DMatrix.from_rows([[1, 2, 3], [4, 5, 6]])
    t = a.transpose()
    assert (t.rows, t.columns) == (3, 2)
    assert t[2, 1] == a[1, 2]
    assert t.transpose() == a


def test_multiply_incompatible_raises():
    with pytest.raises(IncompatibleMatrixError):
        DMatrix(2, 3) * DMatrix(2, 3)


def test_add_incompatible_raises():
    with pytest.raises(IncompatibleMatrixError):
        DMatrix(2, 3) + DMatrix(3, 2)


def test_add_then_subtract_round_trip():
    a = DMatrix.from_rows([[1, 2], [3, 4]])
    b = DMatrix.from_rows([[5, -1], [0, 2]])
    assert (a + b) - b == a


def test_scalar_multiplication():
    a = DMatrix.from_rows([[1, 2], [3, 4]])
    assert a * 2 == a + a
    assert 2 * a == a * 2