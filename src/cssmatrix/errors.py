"""Exception and warning types raised by cssmatrix."""


class CssMatrixError(Exception):
    """Base exception for all cssmatrix errors."""


class SingularMatrixError(CssMatrixError, ArithmeticError):
    """The matrix has no inverse."""


class TransformParseError(CssMatrixError, ValueError):
    """A CSS transform value could not be parsed."""


class MalformedTransformError(TransformParseError):
    """The transform string is not a well-formed list of functions."""


class UnitMismatchError(TransformParseError):
    """An argument is missing its unit or carries one of the wrong class."""


class UnrecognizedFunctionError(TransformParseError):
    """The function name is not a supported 2D transform function."""


class ThreeDTransformError(TransformParseError):
    """A 3D transform function was found while 3D functions are refused."""


class CssMatrixWarning(UserWarning):
    """Base category for non-fatal diagnostics."""


class ThreeDTransformWarning(CssMatrixWarning):
    """A 3D transform function was skipped."""


class RotationScaleWarning(CssMatrixWarning):
    """A scale was extracted from a transform that also rotates or skews."""


__all__ = [
    "CssMatrixError",
    "SingularMatrixError",
    "TransformParseError",
    "MalformedTransformError",
    "UnitMismatchError",
    "UnrecognizedFunctionError",
    "ThreeDTransformError",
    "CssMatrixWarning",
    "ThreeDTransformWarning",
    "RotationScaleWarning",
]
