from __future__ import annotations

from functools import reduce
from typing import TYPE_CHECKING, Sequence

from .errors import SingularMatrixError

if TYPE_CHECKING:
    from .models import Matrix


def matrix_vector_product(matrix: Matrix, vector: Sequence[float]) -> list[float]:
    """Multiply the augmented form of ``matrix`` by a 3-element vector."""
    return [sum(m * v for m, v in zip(row, vector)) for row in matrix.augmented]


def dot_product(m1: Matrix, m2: Matrix) -> Matrix:
    """Return ``m1 . m2``: rows of ``m1`` times columns of ``m2``."""
    rows = m1.augmented
    columns = list(zip(*m2.augmented))
    result = [[sum(r * c for r, c in zip(row, col)) for col in columns] for row in rows]
    return type(m1).from_array(result)


def compose(matrices: Sequence[Matrix]) -> Matrix:
    """Left fold ``matrices`` through :func:`dot_product`."""
    return reduce(dot_product, matrices)


def invert(matrix: Matrix) -> Matrix:
    """Invert ``matrix`` with Gauss-Jordan elimination.

    The augmented matrix is reduced to the identity while the same row
    operations are applied to an accumulator that starts as the identity;
    the accumulator then holds the inverse.
    """
    m = matrix.augmented
    acc = [[1.0, 0.0, 0.0], [0.0, 1.0, 0.0], [0.0, 0.0, 1.0]]

    for i in range(3):
        if m[i][i] == 0:
            # swap in the first row below with a usable pivot
            for k in range(i + 1, 3):
                if m[k][i] != 0:
                    m[i], m[k] = m[k], m[i]
                    acc[i], acc[k] = acc[k], acc[i]
                    break
            else:
                raise SingularMatrixError(f"matrix not invertible: {matrix.css_vector}")

        pivot = m[i][i]
        m[i] = [v / pivot for v in m[i]]
        acc[i] = [v / pivot for v in acc[i]]

        for k in range(3):
            if k == i:
                continue
            factor = m[k][i]
            m[k] = [v - factor * p for v, p in zip(m[k], m[i])]
            acc[k] = [v - factor * p for v, p in zip(acc[k], acc[i])]

    return type(matrix).from_array(acc)
