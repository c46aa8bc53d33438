"""Reading scene descriptions in the ``.rt`` text format."""

from __future__ import annotations

import math
import re
from collections.abc import Callable, Iterable, Sequence
from pathlib import Path

from minirt.errors import ErrorKind, MiniRTError
from minirt.scene import (
    Ambient,
    Camera,
    Cylinder,
    Light,
    Plane,
    Rgb,
    Scene,
    Sphere,
    Square,
    Triangle,
)
from minirt.vector import Vector

DEFAULT_MAX_RESOLUTION = (1000, 1000)

# Identifiers in the order they are recognised at the start of a line.
_IDENTIFIERS = ("R", "A", "c", "l", "sp", "pl", "sq", "cy", "tr")

# Exact number of space-separated fields, identifier included.
_ARITY = {
    "R": 3,
    "A": 3,
    "c": 4,
    "l": 4,
    "sp": 4,
    "pl": 4,
    "sq": 5,
    "cy": 6,
    "tr": 5,
}

_LEADING_DIGITS = re.compile(r"\d*")


def _atoi(text: str) -> int:
    """Leading integer of ``text``: optional blanks, an optional sign, digits."""
    s = text.lstrip(" \t\n\v\f\r")
    sign = 1
    if s and s[0] in "+-":
        sign = -1 if s[0] == "-" else 1
        s = s[1:]
    digits = _LEADING_DIGITS.match(s).group()
    return sign * int(digits) if digits else 0


def _split(text: str, sep: str) -> list[str]:
    """Split on ``sep`` and drop empty pieces."""
    return [piece for piece in text.split(sep) if piece]


def parse_decimal(text: str) -> float:
    """Value of a decimal number such as ``12``, ``0.5`` or ``-0.25``.

    The fractional part is added to the integer part as written, so the sign
    only carries over to the fraction when the integer part is zero.
    """
    whole = _atoi(text)
    _, dot, tail = text.partition(".")
    if not dot:
        return float(whole)
    frac = _atoi(tail)
    if not whole and text.startswith("-"):
        frac = -frac
    return whole + frac * 10.0 ** -len(tail)


def check_digits(text: str | None, kind: str) -> None:
    """Check that a field holds only allowed characters.

    ``kind`` is ``'d'`` for digits only, ``'f'`` to also allow ``'.'`` and
    ``'F'`` to also allow ``'.'`` and ``'-'``.
    """
    if text is None:
        raise MiniRTError(ErrorKind.BAD_SCENE)
    allowed = {"f": ".", "F": ".-"}.get(kind, "")
    for ch in text:
        if not ("0" <= ch <= "9" or ch in allowed):
            raise MiniRTError(ErrorKind.BAD_SCENE)


def parse_uint(text: str) -> int:
    """An unsigned integer field."""
    check_digits(text, "d")
    return _atoi(text)


def parse_udouble(text: str) -> float:
    """An unsigned decimal field."""
    check_digits(text, "f")
    return parse_decimal(text)


def parse_coords(text: str) -> Vector:
    """Three comma-separated decimals, e.g. ``0,-1.5,3``."""
    commas = text.count(",")
    parts = _split(text, ",")
    for part in parts:
        check_digits(part, "F")
    if len(parts) != 3 or commas != 2:
        raise MiniRTError(ErrorKind.BAD_SCENE)
    x, y, z = (parse_decimal(part) for part in parts)
    return Vector(x, y, z)


def parse_rgb(text: str) -> Rgb:
    """Three comma-separated channels in [0, 255], e.g. ``255,128,0``."""
    parts = _split(text, ",")
    for part in parts:
        check_digits(part, "d")
    if len(parts) != 3:
        raise MiniRTError(ErrorKind.BAD_SCENE)
    r, g, b = (float(parse_uint(part)) for part in parts)
    if r > 255 or g > 255 or b > 255:
        raise MiniRTError(ErrorKind.BAD_RGB)
    return Rgb(r, g, b)


def _identifier(line: str) -> str | None:
    """Element identifier of a line, None for an empty line."""
    for ident in _IDENTIFIERS:
        if line.startswith(ident + " "):
            return ident
    if line:
        raise MiniRTError(ErrorKind.BAD_SCENE)
    return None


def _scene_lines(text: str) -> list[str]:
    """Lines of a scene; a final line without a newline is only read when alone."""
    parts = text.split("\n")
    return parts[:-1] if len(parts) > 1 else parts


def count_elements(lines: Iterable[str]) -> dict[str, int]:
    """Count each kind of element, checking there is one resolution and one ambient."""
    counts = dict.fromkeys(_IDENTIFIERS, 0)
    for line in lines:
        ident = _identifier(line)
        if ident is not None:
            counts[ident] += 1
    if counts["R"] != 1 or counts["A"] != 1:
        raise MiniRTError(ErrorKind.BAD_SCENE)
    return counts


def _intensity(text: str) -> float:
    value = parse_udouble(text)
    if value < 0 or value > 1:
        raise MiniRTError(ErrorKind.BAD_INTENSITY)
    return value


def _camera(fields: Sequence[str]) -> Camera:
    pos = parse_coords(fields[1])
    n = parse_coords(fields[2])
    fov_deg = parse_uint(fields[3])
    return Camera(pos=pos, n=n, fov=math.tan(fov_deg * math.pi / 360))


def _light(fields: Sequence[str]) -> Light:
    pos = parse_coords(fields[1])
    intensity = _intensity(fields[2])
    return Light(pos=pos, intensity=intensity, rgb=parse_rgb(fields[3]))


def _sphere(fields: Sequence[str]) -> Sphere:
    center = parse_coords(fields[1])
    radius = parse_udouble(fields[2]) / 2
    return Sphere(center=center, radius=radius, rgb=parse_rgb(fields[3]))


def _plane(fields: Sequence[str]) -> Plane:
    point = parse_coords(fields[1])
    n = parse_coords(fields[2])
    return Plane(point=point, n=n, rgb=parse_rgb(fields[3]))


def _square(fields: Sequence[str]) -> Square:
    center = parse_coords(fields[1])
    n = parse_coords(fields[2])
    side = parse_udouble(fields[3])
    return Square(center=center, n=n, side=side, rgb=parse_rgb(fields[4]))


def _cylinder(fields: Sequence[str]) -> Cylinder:
    point = parse_coords(fields[1])
    n = parse_coords(fields[2])
    radius = parse_udouble(fields[3]) / 2
    height = parse_udouble(fields[4])
    return Cylinder(
        point=point, n=n, radius=radius, height=height, rgb=parse_rgb(fields[5])
    )


def _triangle(fields: Sequence[str]) -> Triangle:
    a = parse_coords(fields[1])
    b = parse_coords(fields[2])
    c = parse_coords(fields[3])
    return Triangle(a=a, b=b, c=c, rgb=parse_rgb(fields[4]))


_ELEMENTS: dict[str, tuple[str, Callable[[Sequence[str]], object]]] = {
    "c": ("cameras", _camera),
    "l": ("lights", _light),
    "sp": ("spheres", _sphere),
    "pl": ("planes", _plane),
    "sq": ("squares", _square),
    "cy": ("cylinders", _cylinder),
    "tr": ("triangles", _triangle),
}


def parse_scene(
    text: str, max_resolution: tuple[int, int] | None = DEFAULT_MAX_RESOLUTION
) -> Scene:
    """Build a scene from the text of an ``.rt`` file.

    Elements of each kind are stored in reverse order of appearance, so the
    last camera in the file is camera 0. The resolution is cut to
    ``max_resolution`` (width, height) when given.
    """
    lines = _scene_lines(text)
    count_elements(lines)
    width = height = 0
    ambient: Ambient | None = None
    collected: dict[str, list] = {name: [] for name, _ in _ELEMENTS.values()}
    for line in lines:
        ident = _identifier(line)
        if ident is None:
            continue
        fields = _split(line, " ")
        if len(fields) != _ARITY[ident]:
            raise MiniRTError(ErrorKind.BAD_SCENE)
        if ident == "R":
            width = parse_uint(fields[1])
            height = parse_uint(fields[2])
            if max_resolution is not None:
                width = min(width, max_resolution[0])
                height = min(height, max_resolution[1])
        elif ident == "A":
            intensity = _intensity(fields[1])
            ambient = Ambient(intensity=intensity, rgb=parse_rgb(fields[2]))
        else:
            name, build = _ELEMENTS[ident]
            collected[name].append(build(fields))
    for items in collected.values():
        items.reverse()
    if ambient is None:
        raise MiniRTError(ErrorKind.BAD_SCENE)
    return Scene(width=width, height=height, ambient=ambient, **collected)


def load_scene(
    path: str | Path, max_resolution: tuple[int, int] | None = DEFAULT_MAX_RESOLUTION
) -> Scene:
    """Read and parse a scene file."""
    try:
        text = Path(path).read_text(encoding="utf-8", errors="replace")
    except OSError as exc:
        raise MiniRTError(ErrorKind.BAD_PATH) from exc
    return parse_scene(text, max_resolution)