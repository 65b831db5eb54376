from __future__ import annotations

import logging
import warnings
from typing import Iterable, Sequence

from .css_parser import parse_css, parse_matrix_string
from .errors import RotationScaleWarning, SingularMatrixError
from .models import Matrix, Point, TransformKind

logger = logging.getLogger(__name__)


class TransformChain:
    """Transforms applied between an element and one of its ancestors.

    ``matrices`` are ordered innermost first: the element's own transform,
    then its parent's, up to the outermost ancestor. ``None`` entries stand
    for elements without a transform and are dropped.
    """

    def __init__(self, matrices: Iterable[Matrix | None]) -> None:
        self._matrices = tuple(m for m in matrices if m is not None)
        self._inverses: tuple[Matrix, ...] | None = None

    @classmethod
    def from_css(cls, values: Iterable[str | None], safe_3d: bool = False) -> TransformChain:
        """Build a chain from per-element transform strings, innermost first.

        Each value may be None, ``none``, a computed ``matrix(...)`` value or
        an authored transform list, which is composed into one matrix.
        """
        matrices: list[Matrix | None] = []
        for value in values:
            if value is None:
                matrices.append(None)
                continue
            text = value.strip().lower()
            # computed styles are a single matrix() that may use exponents
            if text == "none" or (text.startswith("matrix(") and text.count("(") == 1):
                matrices.append(parse_matrix_string(text))
                continue
            parsed = parse_css(text, safe_3d=safe_3d)
            matrices.append(Matrix.compose(parsed) if parsed else None)
        return cls(matrices)

    @property
    def matrices(self) -> tuple[Matrix, ...]:
        return self._matrices

    @property
    def composite(self) -> Matrix:
        """Single matrix mapping element coordinates to the outermost space."""
        return Matrix.compose(reversed(self._matrices))

    def _inverted(self) -> tuple[Matrix, ...]:
        if self._inverses is None:
            self._inverses = tuple(m.inverse() for m in self._matrices)
        return self._inverses

    def transform_coords(self, coords: Point) -> Point:
        x, y = coords
        for m in self._matrices:
            x, y = m.transform_point(x, y)
        return (x, y)

    def untransform_coords(self, coords: Point) -> Point:
        x, y = coords
        for m in reversed(self._inverted()):
            x, y = m.transform_point(x, y)
        return (x, y)

    def composite_scale(self) -> Point:
        """Product of the scale factors found in each matrix's decomposition.

        Only meaningful when no matrix rotates or skews; a
        RotationScaleWarning is emitted otherwise.
        """
        if any(m.is_skewed_or_rotated for m in self._matrices):
            warnings.warn(
                "An ancestor appears to have a rotate or skew transformation applied",
                RotationScaleWarning,
                stacklevel=2,
            )
        sx, sy = 1.0, 1.0
        for m in self._matrices:
            for factor in m.decompose():
                if factor.kind is TransformKind.SCALE:
                    sx *= factor.a
                    sy *= factor.d
        logger.debug("composite scale %g x %g over %d matrices", sx, sy, len(self._matrices))
        return (sx, sy)

    def scale_coords(self, coords: Sequence[float]) -> Point:
        sx, sy = self.composite_scale()
        return (coords[0] * sx, coords[1] * sy)

    def unscale_coords(self, coords: Sequence[float]) -> Point:
        """Divide ``coords`` by the composite scale.

        Raises SingularMatrixError when either scale factor is zero.
        """
        sx, sy = self.composite_scale()
        if sx == 0 or sy == 0:
            raise SingularMatrixError(f"composite scale {sx:g} x {sy:g} cannot be undone")
        return (coords[0] / sx, coords[1] / sy)

    def __len__(self) -> int:
        return len(self._matrices)

    def __repr__(self) -> str:
        return f"TransformChain({list(self._matrices)!r})"
