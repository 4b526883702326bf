"""Geometric value types: points, vectors, normals and surface coordinates.

Points, vectors and normals are kept as distinct types because affine
transformations act on them differently: translations move points but not
vectors, and normals transform with the inverse transpose.

Example:
    >>> a = Point(1.0, 2.0, 3.0)
    >>> b = Point(4.0, 6.0, 8.0)
    >>> (b - a).norm()
    7.0710678118654755
"""

from __future__ import annotations

import math
from dataclasses import dataclass

# Default tolerance for approximate comparisons
EPSILON = 1e-5


def are_close(x: float, y: float, epsilon: float = EPSILON) -> bool:
    """Return True if two floats differ by less than epsilon."""
    return abs(x - y) < epsilon


def _create_onb_from_z(x: float, y: float, z: float) -> tuple[Vec, Vec, Vec]:
    # Duff et al. 2017, "Building an Orthonormal Basis, Revisited"
    sign = 1.0 if z > 0.0 else -1.0
    a = -1.0 / (sign + z)
    b = x * y * a

    e1 = Vec(1.0 + sign * x * x * a, sign * b, -sign * x)
    e2 = Vec(b, sign + y * y * a, -y)
    return e1, e2, Vec(x, y, z)


@dataclass(frozen=True)
class Vec:
    """A direction or displacement in 3D space.

    Attributes:
        x: X component.
        y: Y component.
        z: Z component.
    """

    x: float = 0.0
    y: float = 0.0
    z: float = 0.0

    def __add__(self, other: Vec) -> Vec:
        return Vec(self.x + other.x, self.y + other.y, self.z + other.z)

    def __sub__(self, other: Vec) -> Vec:
        return Vec(self.x - other.x, self.y - other.y, self.z - other.z)

    def __mul__(self, scalar: float) -> Vec:
        return Vec(self.x * scalar, self.y * scalar, self.z * scalar)

    __rmul__ = __mul__

    def __truediv__(self, scalar: float) -> Vec:
        return Vec(self.x / scalar, self.y / scalar, self.z / scalar)

    def __neg__(self) -> Vec:
        return Vec(-self.x, -self.y, -self.z)

    def is_close(self, other: Vec, epsilon: float = EPSILON) -> bool:
        """Return True if every component is within epsilon of ``other``."""
        return (
            are_close(self.x, other.x, epsilon)
            and are_close(self.y, other.y, epsilon)
            and are_close(self.z, other.z, epsilon)
        )

    def dot(self, other: Vec | Normal) -> float:
        """Scalar product with a vector or normal."""
        return self.x * other.x + self.y * other.y + self.z * other.z

    def cross(self, other: Vec) -> Vec:
        """Vector product ``self × other``."""
        return Vec(
            self.y * other.z - self.z * other.y,
            self.z * other.x - self.x * other.z,
            self.x * other.y - self.y * other.x,
        )

    def squared_norm(self) -> float:
        return self.x * self.x + self.y * self.y + self.z * self.z

    def norm(self) -> float:
        return math.sqrt(self.squared_norm())

    def normalize(self) -> Vec:
        """Return a unit vector with the same direction.

        Raises:
            ValueError: If the vector has zero length.
        """
        length = self.norm()
        if length == 0.0:
            raise ValueError("Cannot normalize a zero-length vector")
        return Vec(self.x / length, self.y / length, self.z / length)

    def is_normalized(self, epsilon: float = EPSILON) -> bool:
        return are_close(self.squared_norm(), 1.0, epsilon)

    def to_normal(self) -> Normal:
        return Normal(self.x, self.y, self.z)

    def to_point(self) -> Point:
        return Point(self.x, self.y, self.z)

    def create_onb_from_z(self) -> tuple[Vec, Vec, Vec]:
        """Build an orthonormal basis whose third axis is this (unit) vector.

        Returns:
            Tuple (e1, e2, e3) with e3 equal to this vector.
        """
        return _create_onb_from_z(self.x, self.y, self.z)


@dataclass(frozen=True)
class Point:
    """A position in 3D space."""

    x: float = 0.0
    y: float = 0.0
    z: float = 0.0

    def __add__(self, other: Vec) -> Point:
        return Point(self.x + other.x, self.y + other.y, self.z + other.z)

    def __sub__(self, other: Point | Vec) -> Vec | Point:
        if isinstance(other, Point):
            return Vec(self.x - other.x, self.y - other.y, self.z - other.z)
        return Point(self.x - other.x, self.y - other.y, self.z - other.z)

    def __mul__(self, scalar: float) -> Point:
        return Point(self.x * scalar, self.y * scalar, self.z * scalar)

    def is_close(self, other: Point, epsilon: float = EPSILON) -> bool:
        return (
            are_close(self.x, other.x, epsilon)
            and are_close(self.y, other.y, epsilon)
            and are_close(self.z, other.z, epsilon)
        )

    def to_vec(self) -> Vec:
        return Vec(self.x, self.y, self.z)


@dataclass(frozen=True)
class Normal:
    """A surface normal.

    Normals are not guaranteed to be unit length; call ``normalize`` where
    that matters.
    """

    x: float = 0.0
    y: float = 0.0
    z: float = 1.0

    def __neg__(self) -> Normal:
        return Normal(-self.x, -self.y, -self.z)

    def __mul__(self, scalar: float) -> Normal:
        return Normal(self.x * scalar, self.y * scalar, self.z * scalar)

    __rmul__ = __mul__

    def is_close(self, other: Normal, epsilon: float = EPSILON) -> bool:
        return (
            are_close(self.x, other.x, epsilon)
            and are_close(self.y, other.y, epsilon)
            and are_close(self.z, other.z, epsilon)
        )

    def dot(self, other: Vec | Normal) -> float:
        return self.x * other.x + self.y * other.y + self.z * other.z

    def squared_norm(self) -> float:
        return self.x * self.x + self.y * self.y + self.z * self.z

    def norm(self) -> float:
        return math.sqrt(self.squared_norm())

    def normalize(self) -> Normal:
        length = self.norm()
        if length == 0.0:
            raise ValueError("Cannot normalize a zero-length normal")
        return Normal(self.x / length, self.y / length, self.z / length)

    def to_vec(self) -> Vec:
        return Vec(self.x, self.y, self.z)

    def create_onb_from_z(self) -> tuple[Vec, Vec, Vec]:
        """Build an orthonormal basis around this (unit) normal.

        Returns:
            Tuple (e1, e2, e3) with e3 equal to the normal.
        """
        return _create_onb_from_z(self.x, self.y, self.z)


@dataclass(frozen=True)
class Vec2D:
    """Surface coordinates (u, v), usually in [0, 1]."""

    u: float = 0.0
    v: float = 0.0

    def is_close(self, other: Vec2D, epsilon: float = EPSILON) -> bool:
        return are_close(self.u, other.u, epsilon) and are_close(
            self.v, other.v, epsilon
        )


VEC_X = Vec(1.0, 0.0, 0.0)
VEC_Y = Vec(0.0, 1.0, 0.0)
VEC_Z = Vec(0.0, 0.0, 1.0)
ORIGIN = Point(0.0, 0.0, 0.0)
