"""Immutable 3D vector algebra for geometric computation.

This module provides the Vector3 value type used by every geometric component
of the raytracer, plus free-function equivalents of its operations. All
components are Python floats (IEEE double precision) and every operation
returns a new instance; there are no in-place variants.

Example:
    >>> from src.python.core.vector import Vector3, normalize
    >>> a = Vector3(1.0, 0.0, 0.0)
    >>> b = Vector3(0.0, 1.0, 0.0)
    >>> a.cross(b)
    Vector3(x=0.0, y=0.0, z=1.0)
    >>> normalize(Vector3(10.0, 0.0, 0.0))
    Vector3(x=1.0, y=0.0, z=0.0)
"""

from __future__ import annotations

import math
import numbers
from collections.abc import Iterator
from dataclasses import dataclass

import numpy as np
import numpy.typing as npt

# Absolute tolerance for comparing derived values (lengths, normalized components)
DEFAULT_TOLERANCE = 1e-9


class ZeroLengthVectorError(ZeroDivisionError):
    """Raised when an operation needs the direction of a zero-length vector."""


@dataclass(frozen=True)
class Vector3:
    """A three-component double precision vector.

    Attributes:
        x: The x component.
        y: The y component.
        z: The z component.
    """

    x: float
    y: float
    z: float

    # NumPy scalars defer to __rmul__ instead of broadcasting over the components
    __array_ufunc__ = None

    def __post_init__(self) -> None:
        # Frozen dataclass: coerce through object.__setattr__
        object.__setattr__(self, "x", float(self.x))
        object.__setattr__(self, "y", float(self.y))
        object.__setattr__(self, "z", float(self.z))

    # -------------------------------------------------------------------------
    # Constructors
    # -------------------------------------------------------------------------

    @classmethod
    def zero(cls) -> Vector3:
        """Return the zero vector."""
        return cls(0.0, 0.0, 0.0)

    @classmethod
    def unit_x(cls) -> Vector3:
        return cls(1.0, 0.0, 0.0)

    @classmethod
    def unit_y(cls) -> Vector3:
        return cls(0.0, 1.0, 0.0)

    @classmethod
    def unit_z(cls) -> Vector3:
        return cls(0.0, 0.0, 1.0)

    @classmethod
    def from_array(cls, array: npt.ArrayLike) -> Vector3:
        """Create a vector from a length-3 array.

        Args:
            array: Any array-like with exactly three numeric entries.

        Returns:
            A new Vector3.

        Raises:
            ValueError: If the array does not have shape (3,).
        """
        values = np.asarray(array, dtype=np.float64)
        if values.shape != (3,):
            raise ValueError(f"Expected an array of shape (3,), got {values.shape}")
        return cls(float(values[0]), float(values[1]), float(values[2]))

    # -------------------------------------------------------------------------
    # Sequence protocol
    # -------------------------------------------------------------------------

    def __iter__(self) -> Iterator[float]:
        yield self.x
        yield self.y
        yield self.z

    def __getitem__(self, index: int) -> float:
        return (self.x, self.y, self.z)[index]

    def __len__(self) -> int:
        return 3

    # -------------------------------------------------------------------------
    # Arithmetic operators
    # -------------------------------------------------------------------------

    def __add__(self, other: object) -> Vector3:
        if not isinstance(other, Vector3):
            return NotImplemented
        return Vector3(self.x + other.x, self.y + other.y, self.z + other.z)

    def __sub__(self, other: object) -> Vector3:
        if not isinstance(other, Vector3):
            return NotImplemented
        return Vector3(self.x - other.x, self.y - other.y, self.z - other.z)

    def __neg__(self) -> Vector3:
        return Vector3(-self.x, -self.y, -self.z)

    def __mul__(self, scalar: object) -> Vector3:
        if isinstance(scalar, bool) or not isinstance(scalar, numbers.Real):
            return NotImplemented
        return Vector3(self.x * scalar, self.y * scalar, self.z * scalar)

    __rmul__ = __mul__

    def __truediv__(self, scalar: object) -> Vector3:
        if isinstance(scalar, bool) or not isinstance(scalar, numbers.Real):
            return NotImplemented
        if scalar == 0:
            raise ZeroDivisionError("Cannot divide a vector by zero")
        return self * (1.0 / scalar)

    # -------------------------------------------------------------------------
    # Vector algebra
    # -------------------------------------------------------------------------

    def dot(self, other: Vector3) -> float:
        """Compute the dot product with another vector."""
        return self.x * other.x + self.y * other.y + self.z * other.z

    def cross(self, other: Vector3) -> Vector3:
        """Compute the cross product self x other.

        The result is perpendicular to both operands and the operation is
        anticommutative: a.cross(b) == -b.cross(a).
        """
        return Vector3(
            self.y * other.z - self.z * other.y,
            self.z * other.x - self.x * other.z,
            self.x * other.y - self.y * other.x,
        )

    def length_squared(self) -> float:
        """Squared Euclidean length; avoids the square root."""
        return self.dot(self)

    def length(self) -> float:
        """Euclidean length, always >= 0."""
        return math.sqrt(self.length_squared())

    def normalize(self) -> Vector3:
        """Return the unit vector pointing in the same direction.

        Returns:
            self scaled by 1 / length.

        Raises:
            ZeroLengthVectorError: If the vector has zero length.
        """
        magnitude = self.length()
        if magnitude == 0.0:
            raise ZeroLengthVectorError(f"Cannot normalize zero-length vector {self!r}")
        return self * (1.0 / magnitude)

    def is_close(self, other: Vector3, tol: float = DEFAULT_TOLERANCE) -> bool:
        """Check componentwise equality within an absolute tolerance.

        Use this for derived values; literal inputs compare exactly with ==.
        """
        return (
            abs(self.x - other.x) <= tol
            and abs(self.y - other.y) <= tol
            and abs(self.z - other.z) <= tol
        )

    def to_numpy(self) -> npt.NDArray[np.float64]:
        """Return the components as a float64 array of shape (3,)."""
        return np.array([self.x, self.y, self.z], dtype=np.float64)


# =============================================================================
# Free Functions
# =============================================================================


def add(a: Vector3, b: Vector3) -> Vector3:
    """Componentwise sum a + b."""
    return a + b


def subtract(a: Vector3, b: Vector3) -> Vector3:
    """Componentwise difference a - b."""
    return a - b


def negate(a: Vector3) -> Vector3:
    return -a


def scale_by(a: Vector3, scalar: float) -> Vector3:
    """Scale every component of a by scalar."""
    return a * scalar


def dot(a: Vector3, b: Vector3) -> float:
    return a.dot(b)


def cross(a: Vector3, b: Vector3) -> Vector3:
    return a.cross(b)


def length(a: Vector3) -> float:
    return a.length()


def length_squared(a: Vector3) -> float:
    return a.length_squared()


def normalize(a: Vector3) -> Vector3:
    """Unit vector in the direction of a.

    Raises:
        ZeroLengthVectorError: If a has zero length.
    """
    return a.normalize()
