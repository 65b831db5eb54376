"""Decomposition of composite transforms into elementary CSS transforms.

Two factorizations of the linear part are computed (a QR-like one built
around a rotation and an LU-like one built around skews) and the one that
relies least on skew is kept, since authored CSS rarely skews. Neither is
guaranteed to recover the functions originally written; only the overall
transform is reproduced.

See http://frederic-wang.fr/decomposition-of-2d-transform-matrices.html
"""

from __future__ import annotations

import logging
import math
from typing import Iterable

from .models import Matrix, TransformKind

logger = logging.getLogger(__name__)


def decompose_transformation(matrix: Matrix) -> list[Matrix]:
    """Return elementary matrices whose product approximates ``matrix``.

    The identity decomposes into an empty list and non-composite matrices
    into a single clone. Otherwise the result starts with the translation
    (when there is one) followed by the linear factors.
    """
    if matrix.is_identity:
        return []
    if matrix.kind is not TransformKind.COMPOSITE:
        return [matrix.clone()]

    a, b, c, d, e, f = matrix.css_vector
    translation = Matrix.from_translation(e, f)

    if e != 0 and f != 0:
        linear = Matrix(a, b, c, d, 0, 0)
        if linear.kind is not TransformKind.COMPOSITE:
            logger.debug("translation plus %s, no factorization needed", linear.kind.value)
            return [translation, linear]

    qr = _qr_decomposition(a, b, c, d)
    lu = _lu_decomposition(a, b, c, d)

    qr_skew = skew_magnitude(qr)
    lu_skew = skew_magnitude(lu)
    chosen = lu if lu_skew < qr_skew else qr
    logger.debug(
        "skew magnitude qr=%g lu=%g, keeping %s",
        qr_skew, lu_skew, "lu" if chosen is lu else "qr",
    )

    return [m for m in [translation, *chosen] if not m.is_identity]


def skew_magnitude(matrices: Iterable[Matrix]) -> float:
    """Sum of the absolute skew angles (radians) among ``matrices``."""
    total = 0.0
    for m in matrices:
        if m.kind is TransformKind.SKEW_X:
            total += abs(math.atan(m.c))
        elif m.kind is TransformKind.SKEW_Y:
            total += abs(math.atan(m.b))
    return total


def _qr_decomposition(a: float, b: float, c: float, d: float) -> list[Matrix]:
    first_column = a != 0 or b != 0
    second_column = c != 0 or d != 0
    # with a zero second column the first one alone carries the map
    if (a != 0 and b != 0) or (first_column and not second_column):
        r = math.hypot(a, b)
        cos, sin = a / r, b / r
        rotation = math.acos(cos) if b > 0 else -math.acos(cos)
        return [
            Matrix.from_rotate(rotation),
            Matrix.from_scale(r, cos * d - sin * c),
            Matrix.from_skew_x(math.atan((cos * c + sin * d) / r)),
        ]
    if second_column:
        s = math.hypot(c, d)
        cos, sin = -c / s, d / s
        # rotate(pi/2 - rotation) must send (0, s) to (c, d)
        rotation = math.acos(cos) if d > 0 else -math.acos(cos)
        return [
            Matrix.from_rotate(math.pi / 2 - rotation),
            Matrix.from_scale(a * sin + b * cos, s),
            Matrix.from_skew_y(math.atan((b * sin - a * cos) / s)),
        ]
    # a = b = c = d = 0
    return [Matrix.identity()]


def _lu_decomposition(a: float, b: float, c: float, d: float) -> list[Matrix]:
    if a != 0:
        return [
            Matrix.from_skew_y(math.atan(b / a)),
            Matrix.from_scale(a, d - b * (c / a)),
            Matrix.from_skew_x(math.atan(c / a)),
        ]
    if b != 0:
        return [
            Matrix.from_rotate(math.pi / 2),
            Matrix.from_scale(b, a * (d / b) - c),
            Matrix.from_skew_x(math.atan(d / b)),
        ]
    # a = b = 0
    return [
        Matrix.from_scale(c, d),
        Matrix.from_skew_x(math.pi / 4),
        Matrix.from_scale(0, 1),
    ]
