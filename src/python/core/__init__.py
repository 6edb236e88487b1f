"""Core numeric module.

This module contains the value types used throughout the raytracer:

Components:
    vector: Vector3 value type and free-function vector algebra
    color: 8-bit RGBA Color and conversion from linear vectors

Both types are immutable; every operation returns a new instance.
"""

from .color import BLACK, TRANSPARENT, WHITE, Color, ColorLike
from .vector import (
    DEFAULT_TOLERANCE,
    Vector3,
    ZeroLengthVectorError,
    add,
    cross,
    dot,
    length,
    length_squared,
    negate,
    normalize,
    scale_by,
    subtract,
)

__all__ = [
    "Vector3",
    "ZeroLengthVectorError",
    "DEFAULT_TOLERANCE",
    "add",
    "subtract",
    "negate",
    "scale_by",
    "dot",
    "cross",
    "length",
    "length_squared",
    "normalize",
    "Color",
    "ColorLike",
    "TRANSPARENT",
    "BLACK",
    "WHITE",
]
