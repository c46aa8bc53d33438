import math

import pytest

from minirt.errors import ErrorKind, MiniRTError
from minirt.parser import (
    check_digits,
    count_elements,
    load_scene,
    parse_coords,
    parse_decimal,
    parse_rgb,
    parse_scene,
    parse_udouble,
    parse_uint,
)
from minirt.scene import Rgb
from minirt.vector import Vector

SCENE = """R 800 600
A 0.2 255,255,255
c 0,0,0 0,0,-1 90
c 1,2,3 0,0,1 60
l 0,10,0 0.7 255,255,255
sp 0,0,-10 2 255,0,0
pl 0,-1,0 0,1,0 0,255,0
sq 0,0,-5 0,0,1 1.5 0,0,255
cy 1,0,-8 0,1,0 1 2 10,20,30
tr 0,0,-3 1,0,-3 0,1,-3 40,50,60
"""


def _kind(exc_info):
    return exc_info.value.kind


@pytest.mark.parametrize(
    "text, expected",
    [("3", 3.0), ("1.5", 1.5), ("-0.5", -0.5), ("10.25", 10.25), ("0", 0.0)],
)
def test_parse_decimal(text, expected):
    assert parse_decimal(text) == pytest.approx(expected)


def test_check_digits_accepts_allowed_characters():
    check_digits("123", "d")
    check_digits("1.5", "f")
    check_digits("-1.5", "F")
    assert parse_uint("42") == 42


@pytest.mark.parametrize(
    "text, kind", [("1.5", "d"), ("-1", "f"), ("1a", "F"), (None, "d")]
)
def test_check_digits_rejects(text, kind):
    with pytest.raises(MiniRTError) as exc_info:
        check_digits(text, kind)
    assert _kind(exc_info) is ErrorKind.BAD_SCENE


def test_parse_udouble_rejects_sign():
    with pytest.raises(MiniRTError):
        parse_udouble("-0.3")
    assert parse_udouble("0.25") == pytest.approx(0.25)


def test_parse_coords():
    assert parse_coords("1,-2,0.5") == Vector(1.0, -2.0, 0.5)


@pytest.mark.parametrize("text", ["1,2", "1,,2,3", "a,b,c", "1,2,3,4"])
def test_parse_coords_errors(text):
    with pytest.raises(MiniRTError) as exc_info:
        parse_coords(text)
    assert _kind(exc_info) is ErrorKind.BAD_SCENE


def test_parse_rgb():
    assert parse_rgb("255,0,10") == Rgb(255.0, 0.0, 10.0)


def test_parse_rgb_out_of_range():
    with pytest.raises(MiniRTError) as exc_info:
        parse_rgb("256,0,0")
    assert _kind(exc_info) is ErrorKind.BAD_RGB


@pytest.mark.parametrize("text", ["1,2", "-1,2,3", "1.5,2,3"])
def test_parse_rgb_bad_format(text):
    with pytest.raises(MiniRTError) as exc_info:
        parse_rgb(text)
    assert _kind(exc_info) is ErrorKind.BAD_SCENE


def test_count_elements():
    counts = count_elements(SCENE.split("\n"))
    assert counts["R"] == 1
    assert counts["A"] == 1
    assert counts["c"] == 2
    assert counts["sp"] == 1
    assert counts["tr"] == 1


@pytest.mark.parametrize(
    "lines",
    [
        ["A 0.2 255,255,255"],
        ["R 1 1", "R 1 1", "A 0.2 1,1,1"],
        ["R 1 1", "A 0.2 1,1,1", "xx 1"],
        ["R 1 1", "A 0.2 1,1,1", " sp 0,0,0 1 1,1,1"],
    ],
)
def test_count_elements_errors(lines):
    with pytest.raises(MiniRTError) as exc_info:
        count_elements(lines)
    assert _kind(exc_info) is ErrorKind.BAD_SCENE


def test_parse_scene_contents():
    scene = parse_scene(SCENE, (1920, 1080))
    assert (scene.width, scene.height) == (800, 600)
    assert scene.ambient.intensity == pytest.approx(0.2)
    assert len(scene.cameras) == 2
    # Elements are stored last-first.
    assert scene.cameras[0].pos == Vector(1.0, 2.0, 3.0)
    assert scene.cameras[1].fov == pytest.approx(math.tan(math.pi / 4))
    assert scene.spheres[0].radius == pytest.approx(1.0)
    assert scene.cylinders[0].radius == pytest.approx(0.5)
    assert scene.cylinders[0].height == pytest.approx(2.0)
    assert scene.squares[0].side == pytest.approx(1.5)
    assert scene.lights[0].parallel.is_zero()
    assert scene.triangles[0].e0 == Vector(1.0, 0.0, 0.0)
    assert scene.planes[0].rgb == Rgb(0.0, 255.0, 0.0)
    assert scene.options == set()


def test_parse_scene_clamps_resolution():
    scene = parse_scene("R 1920 1080\nA 0.1 1,1,1\n", (1000, 1000))
    assert (scene.width, scene.height) == (1000, 1000)


def test_parse_scene_ignores_unterminated_last_line():
    scene = parse_scene("R 10 10\nA 0.1 1,1,1\nsp 0,0,0 2 1,1,1", None)
    assert scene.spheres == []


def test_parse_scene_skips_blank_lines():
    scene = parse_scene("R 10 10\n\nA 0.1 1,1,1\n\nsp 0,0,0 2 1,1,1\n", None)
    assert len(scene.spheres) == 1


@pytest.mark.parametrize(
    "text, kind",
    [
        ("R 10 10\nA 1.5 1,1,1\n", ErrorKind.BAD_INTENSITY),
        ("R 10 10\nA 0.5 1,1,1\nl 0,0,0 2 1,1,1\n", ErrorKind.BAD_INTENSITY),
        ("R 10 10 10\nA 0.5 1,1,1\n", ErrorKind.BAD_SCENE),
        ("R 10 10\nA 0.5 1,1,1\nc 0,0,0 0,0,1\n", ErrorKind.BAD_SCENE),
        ("R 10 10\nA 0.5 1,1,1\nsp 0,0,0 1 300,1,1\n", ErrorKind.BAD_RGB),
        ("R 10 10\nA 0.5 1,1,1\ncy 0,0,0 0,1,0 1 1,1,1\n", ErrorKind.BAD_SCENE),
    ],
)
def test_parse_scene_errors(text, kind):
    with pytest.raises(MiniRTError) as exc_info:
        parse_scene(text, None)
    assert _kind(exc_info) is kind


def test_load_scene_from_file(tmp_path):
    path = tmp_path / "scene.rt"
    path.write_text(SCENE)
    scene = load_scene(path, (1920, 1080))
    assert len(scene.cameras) == 2
    assert scene.width == 800


def test_load_scene_missing_file(tmp_path):
    with pytest.raises(MiniRTError) as exc_info:
        load_scene(tmp_path / "missing.rt", None)
    assert _kind(exc_info) is ErrorKind.BAD_PATH