import pytest

from cssmatrix.algebra import compose, dot_product, invert, matrix_vector_product
from cssmatrix.errors import SingularMatrixError
from cssmatrix.models import Matrix, TransformKind

I = Matrix.identity()
M1 = Matrix(1, 2, 3, 4, 5, 6)
M2 = Matrix(0, 0, 0, 0, 0, 0)
M3 = Matrix(3, 5, 7, 11, 13, 17)


def test_matrix_vector_product_identity() -> None:
    assert matrix_vector_product(I, [11, 13, 17]) == [11, 13, 17]
    assert matrix_vector_product(I, [-1, -2, -3]) == [-1, -2, -3]


def test_matrix_vector_product() -> None:
    assert matrix_vector_product(M1, [11, 13, 17]) == [135, 176, 17]
    assert matrix_vector_product(M1, [-1, -2, -3]) == [-22, -28, -3]
    assert matrix_vector_product(M2, [11, 13, 17]) == [0, 0, 17]
    assert matrix_vector_product(M3, [11, 13, 17]) == [345, 487, 17]
    assert matrix_vector_product(M3, [-1, -2, -3]) == [-56, -78, -3]


def test_dot_product_identity() -> None:
    assert dot_product(I, I).css_vector == [1, 0, 0, 1, 0, 0]
    for m in (M1, M2, M3):
        assert dot_product(I, m) == m
        assert dot_product(m, I) == m


def test_dot_product() -> None:
    assert dot_product(M1, M1).css_vector == [7, 10, 15, 22, 28, 40]
    assert dot_product(M1, M2).css_vector == [0, 0, 0, 0, 5, 6]
    assert dot_product(M1, M3).css_vector == [18, 26, 40, 58, 69, 100]
    assert dot_product(M3, M1).css_vector == [17, 27, 37, 59, 70, 108]


def test_dot_product_recomputes_kind() -> None:
    product = dot_product(Matrix.from_scale(2, 2), Matrix.from_scale(0.5, 0.5))
    assert product.kind is TransformKind.IDENTITY

    product = dot_product(Matrix.from_scale(2, 2), Matrix.from_translation(3, 0))
    assert product.kind is TransformKind.COMPOSITE


def test_compose_folds_left() -> None:
    matrices = [M1, M3, M1]
    assert compose(matrices) == dot_product(dot_product(M1, M3), M1)


def test_invert_identity() -> None:
    assert invert(I) == I


def test_invert() -> None:
    assert invert(M1).css_vector == pytest.approx([-2, 1, 1.5, -0.5, 1, -2])
    assert invert(M3).css_vector == pytest.approx([-5.5, 2.5, 3.5, -1.5, 12, -7], abs=1e-3)


def test_invert_needs_row_swap() -> None:
    # swaps the axes, so the first pivot is zero
    m = Matrix(0, 1, 1, 0, 2, 3)
    assert invert(m).css_vector == pytest.approx([0, 1, 1, 0, -3, -2])


def test_invert_twice() -> None:
    for m in (M1, M3, Matrix.from_rotate(0.7), Matrix(0, 2, -3, 0, 1, 1)):
        assert invert(invert(m)).css_vector == pytest.approx(m.css_vector)


def test_invert_undoes_transform() -> None:
    x, y = M3.transform_point(4, -9)
    assert invert(M3).transform_point(x, y) == pytest.approx((4, -9))


def test_invert_singular() -> None:
    with pytest.raises(SingularMatrixError):
        invert(M2)
    with pytest.raises(SingularMatrixError):
        invert(Matrix(1, 2, 2, 4, 0, 0))
