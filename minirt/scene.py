"""Scene description: colours, cameras, lights and objects."""

from __future__ import annotations

import enum
from dataclasses import dataclass, field

from minirt.vector import Matrix, Vector, horizontal_axis


@dataclass(frozen=True)
class Rgb:
    """A colour with float channels, nominally in [0, 255]."""

    r: float = 0.0
    g: float = 0.0
    b: float = 0.0

    def __add__(self, other: Rgb) -> Rgb:
        """Mix two colours, saturating each channel at 255."""
        if not isinstance(other, Rgb):
            return NotImplemented
        return Rgb(self.r + other.r, self.g + other.g, self.b + other.b).clamped()

    def clamped(self) -> Rgb:
        """Channels above 255 cut to 255."""
        return Rgb(min(self.r, 255.0), min(self.g, 255.0), min(self.b, 255.0))

    def to_int(self) -> int:
        """Pack as 0xRRGGBB, truncating each channel."""
        return (int(self.r) << 16) + (int(self.g) << 8) + int(self.b)


@dataclass
class Ambient:
    intensity: float
    rgb: Rgb


@dataclass
class Camera:
    """A pinhole camera; ``fov`` is the tangent of half the field of view."""

    pos: Vector
    n: Vector
    fov: float

    def base(self) -> Matrix:
        """Orthonormal camera-to-world basis."""
        vx = horizontal_axis(self.n)
        vy = vx.cross(self.n)
        vz = -1 * self.n
        return Matrix(vx.normalized(), vy.normalized(), vz.normalized())

    def local_ray(self, width: int, height: int, px: float, py: float) -> Vector:
        """Ray through pixel (px, py) in camera coordinates."""
        sx = float(width)
        sy = float(height)
        return Vector(
            (2 * ((px + 0.5) / sx) - 1) * (sx / sy) * self.fov,
            (1 - 2 * ((py + 0.5) / sy)) * self.fov,
            -1.0,
        )


@dataclass
class Light:
    pos: Vector
    intensity: float
    rgb: Rgb
    parallel: Vector = field(default_factory=Vector)


@dataclass
class Sphere:
    center: Vector
    radius: float
    rgb: Rgb


@dataclass
class Plane:
    point: Vector
    n: Vector
    rgb: Rgb


@dataclass
class Square:
    center: Vector
    n: Vector
    side: float
    rgb: Rgb


@dataclass
class Cylinder:
    point: Vector
    n: Vector
    radius: float
    height: float
    rgb: Rgb


@dataclass
class Triangle:
    """A triangle with precomputed edges and the 2D system used to test inclusion.

    ``equation`` names the coordinate pair solved: 0 for (x, y), 1 for (y, z),
    2 for (x, z); ``det`` is that system's determinant.
    """

    a: Vector
    b: Vector
    c: Vector
    rgb: Rgb
    e0: Vector = field(init=False)
    e1: Vector = field(init=False)
    det: float = field(init=False)
    equation: int = field(init=False)

    def __post_init__(self) -> None:
        e0 = self.b - self.a
        e1 = self.c - self.a
        self.e0 = e0
        self.e1 = e1
        self.det = e0.x * e1.y - e0.y * e1.x
        self.equation = 0
        if not self.det:
            self.det = e0.y * e1.z - e1.y * e0.z
            self.equation = 1
        if not self.det:
            self.det = e0.x * e1.z - e0.z * e1.x
            self.equation = 2


class Option(enum.Enum):
    """Rendering options selected on the command line."""

    SAVE = enum.auto()
    NO_SPECULAR = enum.auto()
    AXIS = enum.auto()


@dataclass
class Scene:
    width: int
    height: int
    ambient: Ambient
    cameras: list[Camera] = field(default_factory=list)
    lights: list[Light] = field(default_factory=list)
    spheres: list[Sphere] = field(default_factory=list)
    planes: list[Plane] = field(default_factory=list)
    squares: list[Square] = field(default_factory=list)
    cylinders: list[Cylinder] = field(default_factory=list)
    triangles: list[Triangle] = field(default_factory=list)
    options: set[Option] = field(default_factory=set)

    def clear(self) -> None:
        """Drop every camera, light and object."""
        for items in (
            self.cameras,
            self.lights,
            self.spheres,
            self.planes,
            self.squares,
            self.triangles,
            self.cylinders,
        ):
            items.clear()