"""
Error types for arraymeta.

Every error is raised where it is detected and propagates to the caller.
Geometry and calibration results are either complete or not produced at all.
"""


class ArrayMetaError(Exception):
    """Base class for all arraymeta errors."""


class ParseError(ArrayMetaError, ValueError):
    """Malformed text input (epoch strings, antenna offset files)."""


class ShapeError(ArrayMetaError, ValueError):
    """Array size or shape mismatch."""


class StructuralError(ArrayMetaError, ValueError):
    """Calibration table rows do not map one-to-one onto antennas."""


class ConversionError(ArrayMetaError, RuntimeError):
    """Frame conversion by casacore measures failed."""


class RangeError(ArrayMetaError, ValueError):
    """Degenerate or out-of-range geometric input."""


__all__ = [
    "ArrayMetaError",
    "ParseError",
    "ShapeError",
    "StructuralError",
    "ConversionError",
    "RangeError",
]
