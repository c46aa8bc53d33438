"""Three-dimensional vectors and 3x3 matrices used throughout the renderer."""

from __future__ import annotations

import math
from dataclasses import dataclass

from minirt.errors import ErrorKind, MiniRTError


@dataclass(frozen=True)
class Vector:
    """An immutable 3D vector."""

    x: float = 0.0
    y: float = 0.0
    z: float = 0.0

    def __add__(self, other: Vector) -> Vector:
        if not isinstance(other, Vector):
            return NotImplemented
        return Vector(self.x + other.x, self.y + other.y, self.z + other.z)

    def __sub__(self, other: Vector) -> Vector:
        if not isinstance(other, Vector):
            return NotImplemented
        return Vector(self.x - other.x, self.y - other.y, self.z - other.z)

    def __mul__(self, k: float) -> Vector:
        if not isinstance(k, (int, float)):
            return NotImplemented
        return Vector(k * self.x, k * self.y, k * self.z)

    def __rmul__(self, k: float) -> Vector:
        return self.__mul__(k)

    def __neg__(self) -> Vector:
        return Vector(-self.x, -self.y, -self.z)

    def dot(self, other: Vector) -> float:
        """Scalar product."""
        return self.x * other.x + self.y * other.y + self.z * other.z

    def cross(self, other: Vector) -> Vector:
        """Vector product."""
        return Vector(
            self.y * other.z - self.z * other.y,
            -1.0 * (self.x * other.z - self.z * other.x),
            self.x * other.y - self.y * other.x,
        )

    def norm(self) -> float:
        """Euclidean length."""
        return math.sqrt(self.dot(self))

    def normalized(self) -> Vector:
        """Vector of unit length with the same direction.

        Raises ZeroDivisionError for the zero vector.
        """
        mod = self.norm()
        return Vector(self.x / mod, self.y / mod, self.z / mod)

    def is_zero(self) -> bool:
        """True when every component is exactly zero."""
        return not self.x and not self.y and not self.z


@dataclass(frozen=True)
class Matrix:
    """A 3x3 matrix stored as its three column vectors."""

    vx: Vector
    vy: Vector
    vz: Vector

    def apply(self, v: Vector) -> Vector:
        """Multiply the matrix by a column vector."""
        return v.x * self.vx + v.y * self.vy + v.z * self.vz

    def det(self) -> float:
        """Determinant."""
        vx, vy, vz = self.vx, self.vy, self.vz
        return (
            vx.x * vy.y * vz.z + vy.x * vz.y * vx.z + vx.y * vy.z * vz.x
        ) - (
            vx.z * vy.y * vz.x + vy.x * vx.y * vz.z + vz.y * vy.z * vx.x
        )

    def inverse(self) -> Matrix:
        """Inverse by cofactors; raises ZeroDivisionError when singular."""
        d = self.det()
        vx, vy, vz = self.vx, self.vy, self.vz
        return Matrix(
            Vector(
                (vy.y * vz.z - vy.z * vz.y) / d,
                -1 * (vx.y * vz.z - vx.z * vz.y) / d,
                (vx.y * vy.z - vx.z * vy.y) / d,
            ),
            Vector(
                -1 * (vy.x * vz.z - vy.z * vz.x) / d,
                (vx.x * vz.z - vx.z * vz.x) / d,
                -1 * (vx.x * vy.z - vx.z * vy.x) / d,
            ),
            Vector(
                (vy.x * vz.y - vy.y * vz.x) / d,
                -1 * (vx.x * vz.y - vx.y * vz.x) / d,
                (vx.x * vy.y - vx.y * vy.x) / d,
            ),
        )


def unit_axis(name: str) -> Vector:
    """Unit vector along 'x', 'y' or 'z'; the zero vector for any other name."""
    return {
        "x": Vector(1.0, 0.0, 0.0),
        "y": Vector(0.0, 1.0, 0.0),
        "z": Vector(0.0, 0.0, 1.0),
    }.get(name, Vector())


def horizontal_axis(n: Vector) -> Vector:
    """A horizontal vector perpendicular to the viewing direction ``n``."""
    if not n.x and not n.y:
        if n.z > 0:
            return Vector(-1.0, 0.0, 0.0)
        if n.z < 0:
            return Vector(1.0, 0.0, 0.0)
        raise MiniRTError(ErrorKind.BAD_SCENE)
    return Vector(n.y, -1.0 * n.x, 0.0)