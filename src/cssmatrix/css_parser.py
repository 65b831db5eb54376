from __future__ import annotations

import logging
import math
import re
import warnings
from typing import Callable, Literal

from .errors import (
    MalformedTransformError,
    ThreeDTransformError,
    ThreeDTransformWarning,
    UnitMismatchError,
    UnrecognizedFunctionError,
)
from .models import Matrix

logger = logging.getLogger(__name__)

UnitClass = Literal["number", "length", "angle"]

_DECIMAL = r"[-+]?(?:\d*\.\d+|\d+)"
_NUMBER_RE = re.compile(rf"^{_DECIMAL}$")
_LENGTH_RE = re.compile(rf"^({_DECIMAL})px$")
_ANGLE_RE = re.compile(rf"^({_DECIMAL})(deg|rad|grad|turn)$")
_WITH_UNIT_RE = re.compile(rf"^{_DECIMAL}\s*([a-z%]+)$")
_FUNCTION_RE = re.compile(r"^(\w+)\((.*)\)$")

_CSS_NUMBER = r"[-+]?(?:\d+\.?\d*|\.\d+)(?:e[-+]?\d+)?"
_COMPUTED_MATRIX_RE = re.compile(
    r"^matrix\(\s*" + r"\s*,\s*".join([f"({_CSS_NUMBER})"] * 6) + r"\s*\)$"
)

_ANGLE_FACTORS = {
    "deg": math.pi / 180.0,
    "rad": 1.0,
    "grad": math.pi / 200.0,
    "turn": 2.0 * math.pi,
}

THREE_D_FUNCTIONS = frozenset({
    "matrix3d", "perspective", "rotate3d", "rotatex", "rotatey", "rotatez",
    "scale3d", "scalez", "translate3d", "translatez",
})


def parse_css(value: str, safe_3d: bool = False) -> list[Matrix]:
    """Parse a CSS ``transform`` value into matrices, in textual order.

    3D functions are skipped with a ThreeDTransformWarning, or rejected with
    ThreeDTransformError when ``safe_3d`` is set.
    """
    text = normalize(value)
    matrices: list[Matrix] = []
    for token in split_functions(text):
        for parser in _PARSERS:
            matrix = parser(token)
            if matrix is not None:
                matrices.append(matrix)
                break
        else:
            name = _function_name(token)
            if name not in THREE_D_FUNCTIONS:
                raise UnrecognizedFunctionError(f"Unsupported transform function: {name}()")
            msg = f"Cannot apply 3D transform function {name}()"
            if safe_3d:
                raise ThreeDTransformError(msg)
            warnings.warn(msg, ThreeDTransformWarning, stacklevel=2)
    logger.debug("parsed %r into %d matrices", value, len(matrices))
    return matrices


def normalize(value: str) -> str:
    text = value.lower().strip()
    text = re.sub(r"^transform:\s*", "", text)
    text = re.sub(r";$", "", text)
    return re.sub(r"\s+", " ", text).strip()


def _is_name_char(ch: str) -> bool:
    return ch.isascii() and (ch.isalnum() or ch == "_")


def split_functions(text: str) -> list[str]:
    """Split ``text`` into ``name(args)`` tokens separated by single spaces."""
    between, in_name, in_body, at_end = range(4)
    state = between
    functions: list[str] = []
    current: list[str] = []

    for ch in text:
        if state == between:
            if _is_name_char(ch):
                current = [ch]
                state = in_name
            elif ch != " ":
                raise MalformedTransformError(f"Invalid CSS transform string: {text!r}")
        elif state == in_name:
            if _is_name_char(ch):
                current.append(ch)
            elif ch == "(":
                current.append(ch)
                state = in_body
            else:
                raise MalformedTransformError(f"Invalid CSS transform string: {text!r}")
        elif state == in_body:
            current.append(ch)
            if ch == ")":
                functions.append("".join(current))
                state = at_end
        elif ch == " ":
            state = between
        else:
            raise MalformedTransformError(f"Invalid CSS transform string: {text!r}")

    if state not in (between, at_end):
        raise MalformedTransformError(f"Invalid CSS transform string: {text!r}")
    return functions


def parse_args(token: str, unit_class: UnitClass = "number") -> list[float]:
    """Parse the comma separated arguments of ``token``.

    ``number`` arguments must be bare, ``length`` arguments must be in px
    and ``angle`` arguments are converted to radians.
    """
    match = _FUNCTION_RE.match(token.strip())
    if not match:
        raise MalformedTransformError(f"Invalid transform function: {token!r}")
    raw_args = [arg.strip() for arg in match.group(2).split(",")]
    if any(not arg for arg in raw_args):
        raise MalformedTransformError(f"Missing argument in {token!r}")
    return [_convert(arg, unit_class) for arg in raw_args]


def _convert(arg: str, unit_class: UnitClass) -> float:
    if unit_class == "number" and _NUMBER_RE.match(arg):
        return float(arg)
    if unit_class == "length":
        match = _LENGTH_RE.match(arg)
        if match:
            return float(match.group(1))
    if unit_class == "angle":
        match = _ANGLE_RE.match(arg)
        if match:
            return float(match.group(1)) * _ANGLE_FACTORS[match.group(2)]

    if _NUMBER_RE.match(arg) or _WITH_UNIT_RE.match(arg):
        if unit_class == "number":
            raise UnitMismatchError(f"Expected a unitless number, got {arg!r}")
        if unit_class == "length":
            raise UnitMismatchError(f"Length units must be provided in px, got {arg!r}")
        raise UnitMismatchError(f"Angle must use deg, rad, grad or turn, got {arg!r}")
    raise MalformedTransformError(f"Invalid argument: {arg!r}")


def _function_name(token: str) -> str:
    return token.split("(", 1)[0]


def _args(token: str, unit_class: UnitClass, arity: tuple[int, ...]) -> list[float]:
    args = parse_args(token, unit_class)
    if len(args) not in arity:
        expected = " or ".join(str(n) for n in arity)
        raise MalformedTransformError(
            f"{_function_name(token)}() takes {expected} argument(s), got {len(args)}"
        )
    return args


def _translate(token: str) -> Matrix | None:
    name = _function_name(token)
    if name == "translate":
        args = _args(token, "length", (1, 2))
        return Matrix.from_translation(args[0], args[1] if len(args) == 2 else 0.0)
    if name == "translatex":
        return Matrix.from_translation(_args(token, "length", (1,))[0], 0)
    if name == "translatey":
        return Matrix.from_translation(0, _args(token, "length", (1,))[0])
    return None


def _scale(token: str) -> Matrix | None:
    name = _function_name(token)
    if name == "scale":
        args = _args(token, "number", (1, 2))
        return Matrix.from_scale(args[0], args[-1])
    if name == "scalex":
        return Matrix.from_scale(_args(token, "number", (1,))[0], 1)
    if name == "scaley":
        return Matrix.from_scale(1, _args(token, "number", (1,))[0])
    return None


def _rotate(token: str) -> Matrix | None:
    if _function_name(token) == "rotate":
        return Matrix.from_rotate(_args(token, "angle", (1,))[0])
    return None


def _skew(token: str) -> Matrix | None:
    name = _function_name(token)
    if name == "skew":
        args = _args(token, "angle", (1, 2))
        if len(args) == 1:
            return Matrix.from_skew_x(args[0])
        return Matrix.from_skew(args[0], args[1])
    if name == "skewx":
        return Matrix.from_skew_x(_args(token, "angle", (1,))[0])
    if name == "skewy":
        return Matrix.from_skew_y(_args(token, "angle", (1,))[0])
    return None


def _matrix(token: str) -> Matrix | None:
    if _function_name(token) == "matrix":
        return Matrix(*_args(token, "number", (6,)))
    return None


_PARSERS: tuple[Callable[[str], Matrix | None], ...] = (_translate, _scale, _rotate, _skew, _matrix)


def parse_matrix_string(value: str) -> Matrix | None:
    """Read a computed-style transform such as ``matrix(1, 0, 0, 1, 10, 0)``.

    Returns None for ``none``.
    """
    text = value.strip().lower()
    if text == "none":
        return None
    if "matrix3d" in text:
        raise ThreeDTransformError("Cannot create a 2D matrix from a 3D transform")
    match = _COMPUTED_MATRIX_RE.match(text)
    if not match:
        raise MalformedTransformError(f"Not a CSS matrix() value: {value!r}")
    return Matrix(*(float(v) for v in match.groups()))
