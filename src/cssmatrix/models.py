from __future__ import annotations

import math
from dataclasses import dataclass, field
from enum import Enum
from typing import Iterable, Sequence, TypeAlias

from .algebra import compose, invert, matrix_vector_product

Point: TypeAlias = tuple[float, float]
Augmented: TypeAlias = list[list[float]]


class TransformKind(str, Enum):
    """Elementary CSS transform a matrix reduces to."""

    IDENTITY = "identity"
    TRANSLATE = "translate"
    SCALE = "scale"
    ROTATE = "rotate"
    SKEW_X = "skewX"
    SKEW_Y = "skewY"
    COMPOSITE = "composite"


def classify(a: float, b: float, c: float, d: float, e: float, f: float) -> TransformKind:
    """Return the kind of ``matrix(a, b, c, d, e, f)``.

    The checks use exact comparisons against 0 and 1 and the first match
    wins, so ``scale(1, 1)`` is an identity and ``scale(2) translate(1px)``
    is composite.
    """
    if a == 1 and d == 1 and b == 0 and c == 0:
        if e == 0 and f == 0:
            return TransformKind.IDENTITY
        return TransformKind.TRANSLATE
    if b == 0 and c == 0 and e == 0 and f == 0:
        return TransformKind.SCALE
    if a == 1 and d == 1 and e == 0 and f == 0:
        if b == 0:
            return TransformKind.SKEW_X
        if c == 0:
            return TransformKind.SKEW_Y
    if (
        e == 0
        and f == 0
        and all(-1 <= v <= 1 for v in (a, b, c, d))
        and a == d
        and b == -c
    ):
        return TransformKind.ROTATE
    return TransformKind.COMPOSITE


def format_number(value: float, precision: int | None = None) -> str:
    if precision is not None:
        value = round(value, precision)
    if value.is_integer():
        return str(int(value))
    return repr(value)


@dataclass(frozen=True, slots=True)
class Matrix:
    """2D affine transform in CSS ``matrix(a, b, c, d, e, f)`` notation.

    The augmented form is::

        [a, c, e]
        [b, d, f]
        [0, 0, 1]

    Instances are immutable; every operation returns a new matrix.
    """

    a: float
    b: float
    c: float
    d: float
    e: float
    f: float
    kind: TransformKind = field(init=False, repr=False, compare=False)

    def __post_init__(self) -> None:
        for name in ("a", "b", "c", "d", "e", "f"):
            object.__setattr__(self, name, float(getattr(self, name)))
        object.__setattr__(self, "kind", classify(*self.css_vector))

    @property
    def css_vector(self) -> list[float]:
        return [self.a, self.b, self.c, self.d, self.e, self.f]

    @property
    def augmented(self) -> Augmented:
        return [
            [self.a, self.c, self.e],
            [self.b, self.d, self.f],
            [0.0, 0.0, 1.0],
        ]

    @property
    def is_identity(self) -> bool:
        return self.kind is TransformKind.IDENTITY

    @property
    def is_skewed_or_rotated(self) -> bool:
        return self.b != 0 or self.c != 0

    def clone(self) -> Matrix:
        return Matrix(*self.css_vector)

    def inverse(self) -> Matrix:
        """Return the inverse transform.

        Raises SingularMatrixError when the matrix cannot be inverted.
        """
        return invert(self)

    def transform_point(self, x: float, y: float) -> Point:
        if self.is_identity:
            return (x, y)
        # 2D points are homogeneous 3-vectors whose last element is 1
        product = matrix_vector_product(self, [x, y, 1.0])
        return (product[0], product[1])

    def decompose(self) -> list[Matrix]:
        """Split this matrix into elementary transforms.

        Non-composite matrices come back as a single clone.
        """
        if self.kind is TransformKind.COMPOSITE:
            from .decomposition import decompose_transformation

            return decompose_transformation(self)
        return [self.clone()]

    def to_css(self, precision: int | None = None) -> str:
        values = ", ".join(format_number(v, precision) for v in self.css_vector)
        return f"matrix({values})"

    @staticmethod
    def compose(matrices: Iterable[Matrix]) -> Matrix:
        """Multiply ``matrices`` left to right into a single transform."""
        matrices = list(matrices)
        if not matrices:
            return Matrix.identity()
        return compose(matrices)

    @classmethod
    def identity(cls) -> Matrix:
        return cls(1, 0, 0, 1, 0, 0)

    @classmethod
    def from_array(cls, m: Sequence[Sequence[float]]) -> Matrix:
        """Build a matrix from a 3x3 augmented array."""
        return cls(m[0][0], m[1][0], m[0][1], m[1][1], m[0][2], m[1][2])

    @classmethod
    def from_translation(cls, tx: float, ty: float) -> Matrix:
        return cls(1, 0, 0, 1, tx, ty)

    @classmethod
    def from_scale(cls, sx: float, sy: float) -> Matrix:
        return cls(sx, 0, 0, sy, 0, 0)

    @classmethod
    def from_rotate(cls, theta: float) -> Matrix:
        """Rotation by ``theta`` radians."""
        cos_t = math.cos(theta)
        sin_t = math.sin(theta)
        return cls(cos_t, sin_t, -sin_t, cos_t, 0, 0)

    @classmethod
    def from_skew_x(cls, theta: float) -> Matrix:
        return cls(1, 0, math.tan(theta), 1, 0, 0)

    @classmethod
    def from_skew_y(cls, theta: float) -> Matrix:
        return cls(1, math.tan(theta), 0, 1, 0, 0)

    @classmethod
    def from_skew(cls, theta_x: float, theta_y: float) -> Matrix:
        return cls(1, math.tan(theta_y), math.tan(theta_x), 1, 0, 0)

    @classmethod
    def from_css(cls, value: str) -> Matrix:
        """Build a matrix from a computed-style ``matrix(...)`` string.

        ``none`` yields the identity.
        """
        from .css_parser import parse_matrix_string

        matrix = parse_matrix_string(value)
        if matrix is None:
            return cls.identity()
        return matrix
