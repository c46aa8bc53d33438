"""Rendering a scene into an image, the axis overlay, and BMP output."""

from __future__ import annotations

import struct
from dataclasses import dataclass, field
from pathlib import Path

from minirt.errors import ErrorKind, MiniRTError
from minirt.geometry import (
    Ray,
    hit_cylinder,
    hit_plane,
    hit_sphere,
    hit_square,
    hit_triangle,
)
from minirt.scene import Camera, Option, Scene
from minirt.shading import surface_color
from minirt.vector import Matrix, Vector, unit_axis

# The axis overlay is drawn around this point, measured from the bottom-left.
AXIS_ORIGIN_X = 40
AXIS_MARGIN = 35
AXIS_LENGTH = 35
AXIS_COLORS = {"x": 0x00FF0000, "y": 0x0000FF00, "z": 0x000000FF}
CENTER_COLOR = 0x00FFFF00
_AXIS_EPS = 1e-4

BMP_HEADER_SIZE = 54
BMP_INFO_SIZE = 40


@dataclass
class Image:
    """A width x height grid of 0xRRGGBB pixels, all black at first.

    ``labels`` maps an axis name to where its label belongs on screen.
    """

    width: int
    height: int
    pixels: list[int] = field(init=False, repr=False)
    labels: dict[str, tuple[int, int]] = field(default_factory=dict)

    def __post_init__(self) -> None:
        self.pixels = [0] * (self.width * self.height)

    def _index(self, xy: tuple[int, int]) -> int:
        x, y = xy
        if not (0 <= x < self.width and 0 <= y < self.height):
            raise IndexError(f"pixel {xy} outside {self.width}x{self.height} image")
        return y * self.width + x

    def __getitem__(self, xy: tuple[int, int]) -> int:
        return self.pixels[self._index(xy)]

    def __setitem__(self, xy: tuple[int, int], color: int) -> None:
        self.pixels[self._index(xy)] = color


def _trace(scene: Scene, camera: Camera, base: Matrix, px: float, py: float) -> int:
    local = camera.local_ray(scene.width, scene.height, px, py)
    ray = Ray(direction=base.apply(local).normalized())
    color = 0
    kinds = (
        (hit_sphere, scene.spheres),
        (hit_plane, scene.planes),
        (hit_square, scene.squares),
        (hit_triangle, scene.triangles),
        (hit_cylinder, scene.cylinders),
    )
    for hit_object, items in kinds:
        for item in items:
            hit = hit_object(ray, camera.pos, item)
            if hit is not None:
                color = surface_color(scene, hit)
    return color


def trace_pixel(scene: Scene, camera_index: int, px: float, py: float) -> int:
    """Colour seen through pixel (px, py) of the given camera, 0 if nothing is hit."""
    camera = scene.cameras[camera_index]
    return _trace(scene, camera, camera.base(), px, py)


def render(scene: Scene, camera_index: int = 0) -> Image:
    """Render the scene through one camera.

    With no such camera the image stays black. The axis overlay is drawn when
    the scene carries ``Option.AXIS``.
    """
    image = Image(scene.width, scene.height)
    if not 0 <= camera_index < len(scene.cameras):
        return image
    camera = scene.cameras[camera_index]
    base = camera.base()
    for py in range(scene.height):
        for px in range(scene.width):
            image[px, py] = _trace(scene, camera, base, float(px), float(py))
    if Option.AXIS in scene.options:
        draw_reference(image, base)
    return image


def _plot(image: Image, x: float, y: float, color: int) -> None:
    ix, iy = int(x), int(y)
    if 0 <= ix < image.width and 0 <= iy < image.height:
        image[ix, iy] = color


def _draw_center(image: Image) -> None:
    cx, cy = AXIS_ORIGIN_X, image.height - AXIS_MARGIN
    for dx, dy in ((0, -1), (-1, 0), (0, 0), (1, 0), (0, 1)):
        _plot(image, cx + dx, cy + dy, CENTER_COLOR)


def draw_axis(image: Image, p: Vector, name: str) -> None:
    """Draw the screen projection ``p`` of a world axis from the overlay centre.

    ``name`` is 'x', 'y' or 'z' and chooses the colour; the label position is
    stored in ``image.labels``.
    """
    if name not in AXIS_COLORS:
        raise ValueError(f"unknown axis {name!r}")
    color = AXIS_COLORS[name]
    cx, cy = AXIS_ORIGIN_X, image.height - AXIS_MARGIN
    if p.is_zero():
        image.labels[name] = (cx, cy)
        _draw_center(image)
        return
    p = p.normalized()
    ax, ay = abs(p.x), abs(p.y)
    sx = -1 if p.x < 0 else 1
    sy = -1 if p.y < 0 else 1
    if ax > _AXIS_EPS and ay > _AXIS_EPS:
        step_x = (1 if ax < ay else ax / ay) * sx
        step_y = (1 if ay < ax else ay / ax) * sy
    else:
        step_x = (0 if ax < _AXIS_EPS else 1) * sx
        step_y = (0 if ay < _AXIS_EPS else 1) * sy
    len_x = AXIS_LENGTH * ax if step_x else 0.0
    len_y = AXIS_LENGTH * ay if step_y else 0.0
    x, y = float(cx), float(cy)
    while (cx - len_x < x < cx + len_x) or (cy - len_y < y < cy + len_y):
        for i in (-1, 0, 1):
            _plot(image, x + i, y, color)
            _plot(image, x, y + i, color)
            _plot(image, x + i, y + i, color)
        x += step_x
        y -= step_y
    image.labels[name] = (int(x + 2 * step_x), int(y - 2 * step_y))
    _draw_center(image)


def draw_reference(image: Image, base: Matrix) -> None:
    """Draw the world x, y and z axes as seen from a camera with basis ``base``."""
    base_inv = base.inverse()
    for name in ("x", "y", "z"):
        v = base.vz.cross(unit_axis(name))
        p = base_inv.apply(v.cross(base.vz))
        draw_axis(image, p, name)


def bmp_bytes(image: Image) -> bytes:
    """The image as an uncompressed 24-bit BMP file, rows stored bottom-up."""
    width, height = image.width, image.height
    padding = (4 - (width * 3) % 4) % 4
    filesize = BMP_HEADER_SIZE + (3 * width + padding) * height
    parts = [
        struct.pack("<2sI4xI", b"BM", filesize & 0xFFFFFFFF, BMP_HEADER_SIZE),
        struct.pack("<IiiHH24x", BMP_INFO_SIZE, width, height, 1, 24),
    ]
    pad = bytes(padding)
    for y in range(height - 1, -1, -1):
        row = image.pixels[y * width:(y + 1) * width]
        parts.append(b"".join((c & 0xFFFFFF).to_bytes(3, "little") for c in row))
        parts.append(pad)
    return b"".join(parts)


def write_bmp(image: Image, path: str | Path) -> None:
    """Write the image to ``path`` as a BMP file."""
    try:
        Path(path).write_bytes(bmp_bytes(image))
    except OSError as exc:
        raise MiniRTError(ErrorKind.BAD_PATH) from exc