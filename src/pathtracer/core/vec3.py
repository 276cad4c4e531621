"""Three-component vector type used for points, directions and colors.

Vec3 is an immutable value type: every operation returns a new vector.
The same type doubles as an RGB color, so it provides r/g/b aliases for
the x/y/z components and component-wise multiplication and division.

Example:
    >>> a = Vec3(1.0, 2.0, 3.0)
    >>> b = Vec3(0.5, 0.5, 0.5)
    >>> a + b
    Vec3(x=1.5, y=2.5, z=3.5)
    >>> 2.0 * a
    Vec3(x=2.0, y=4.0, z=6.0)
    >>> a.dot(b)
    3.0
"""

from __future__ import annotations

import math
from collections.abc import Iterator
from dataclasses import dataclass


@dataclass(frozen=True, slots=True)
class Vec3:
    """An immutable 3D vector of floats.

    Attributes:
        x: First component (red channel when used as a color).
        y: Second component (green channel when used as a color).
        z: Third component (blue channel when used as a color).
    """

    x: float
    y: float
    z: float

    # =========================================================================
    # Color aliases
    # =========================================================================

    @property
    def r(self) -> float:
        return self.x

    @property
    def g(self) -> float:
        return self.y

    @property
    def b(self) -> float:
        return self.z

    # =========================================================================
    # Arithmetic
    # =========================================================================

    def __add__(self, other: Vec3) -> Vec3:
        return Vec3(self.x + other.x, self.y + other.y, self.z + other.z)

    def __sub__(self, other: Vec3) -> Vec3:
        return Vec3(self.x - other.x, self.y - other.y, self.z - other.z)

    def __neg__(self) -> Vec3:
        return Vec3(-self.x, -self.y, -self.z)

    def __mul__(self, other: Vec3 | float) -> Vec3:
        """Multiply by a scalar, or component-wise by another vector."""
        if isinstance(other, Vec3):
            return Vec3(self.x * other.x, self.y * other.y, self.z * other.z)
        return Vec3(self.x * other, self.y * other, self.z * other)

    def __rmul__(self, scalar: float) -> Vec3:
        return Vec3(self.x * scalar, self.y * scalar, self.z * scalar)

    def __truediv__(self, other: Vec3 | float) -> Vec3:
        """Divide by a scalar, or component-wise by another vector.

        Division by zero follows IEEE semantics (inf/nan) rather than
        raising, so degenerate geometry degrades into non-finite pixel
        values instead of aborting a render.
        """
        if isinstance(other, Vec3):
            return Vec3(_div(self.x, other.x), _div(self.y, other.y), _div(self.z, other.z))
        return Vec3(_div(self.x, other), _div(self.y, other), _div(self.z, other))

    def __iter__(self) -> Iterator[float]:
        yield self.x
        yield self.y
        yield self.z

    # =========================================================================
    # Geometry
    # =========================================================================

    def dot(self, other: Vec3) -> float:
        """Compute the dot product with another vector."""
        return self.x * other.x + self.y * other.y + self.z * other.z

    def cross(self, other: Vec3) -> Vec3:
        """Compute the right-handed cross product self x other."""
        return Vec3(
            self.y * other.z - self.z * other.y,
            self.z * other.x - self.x * other.z,
            self.x * other.y - self.y * other.x,
        )

    def squared_length(self) -> float:
        """Squared Euclidean length (avoids the square root)."""
        return self.x * self.x + self.y * self.y + self.z * self.z

    def length(self) -> float:
        """Euclidean length."""
        return math.sqrt(self.squared_length())

    def normalized(self) -> Vec3:
        """Return a unit vector in the same direction.

        A zero-length vector yields non-finite components.
        """
        return self / self.length()

    @classmethod
    def from_sequence(cls, values: tuple[float, float, float] | list[float]) -> Vec3:
        """Build a vector from any 3-element sequence (tuple, list, array)."""
        x, y, z = values
        return cls(float(x), float(y), float(z))

    def to_tuple(self) -> tuple[float, float, float]:
        return (self.x, self.y, self.z)


def _div(numerator: float, denominator: float) -> float:
    if denominator == 0.0:
        if numerator == 0.0 or math.isnan(numerator):
            return math.nan
        return math.copysign(math.inf, numerator) * math.copysign(1.0, denominator)
    return numerator / denominator


# Frequently used constants
ZERO = Vec3(0.0, 0.0, 0.0)
ONE = Vec3(1.0, 1.0, 1.0)
