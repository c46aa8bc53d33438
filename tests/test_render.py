import struct

import pytest

from minirt.errors import MiniRTError
from minirt.render import (
    Image,
    bmp_bytes,
    draw_axis,
    draw_reference,
    render,
    trace_pixel,
    write_bmp,
)
from minirt.scene import Ambient, Camera, Option, Rgb, Scene, Sphere
from minirt.vector import Vector


def _scene(size=11, spheres=(), options=()):
    return Scene(
        width=size,
        height=size,
        ambient=Ambient(1.0, Rgb(255, 255, 255)),
        cameras=[Camera(pos=Vector(), n=Vector(0, 0, -1), fov=1.0)],
        spheres=list(spheres),
        options=set(options),
    )


def test_image_starts_black_and_roundtrips():
    image = Image(3, 2)
    assert image.pixels == [0] * 6
    image[2, 1] = 0x123456
    assert image[2, 1] == 0x123456
    assert image.pixels[5] == 0x123456


@pytest.mark.parametrize("xy", [(3, 0), (0, 2), (-1, 0)])
def test_image_out_of_range(xy):
    image = Image(3, 2)
    with pytest.raises(IndexError):
        image[xy]
    assert image.pixels == [0] * 6
    assert (image.width, image.height) == (3, 2)


def test_render_sphere_in_view():
    red = Rgb(255, 0, 0)
    image = render(_scene(spheres=[Sphere(Vector(0, 0, -10), 2.0, red)]))
    assert image[5, 5] == 0xFF0000
    assert image[0, 0] == 0


def test_nearer_sphere_wins():
    near = Sphere(Vector(0, 0, -5), 2.0, Rgb(0, 255, 0))
    far = Sphere(Vector(0, 0, -10), 2.0, Rgb(255, 0, 0))
    image = render(_scene(spheres=[near, far]))
    assert image[5, 5] == 0x00FF00


def test_trace_pixel_matches_render():
    scene = _scene(spheres=[Sphere(Vector(0, 0, -10), 4.0, Rgb(10, 20, 30))])
    image = render(scene)
    for xy in [(0, 0), (5, 5), (4, 6), (10, 10)]:
        assert trace_pixel(scene, 0, float(xy[0]), float(xy[1])) == image[xy]


def test_render_without_camera_is_black():
    scene = _scene()
    scene.cameras.clear()
    image = render(scene)
    assert (image.width, image.height) == (11, 11)
    assert set(image.pixels) == {0}


def test_render_with_axis_option_draws_center():
    image = render(_scene(size=100, options=[Option.AXIS]))
    assert image[40, 65] == 0xFFFF00
    assert set(image.labels) == {"x", "y", "z"}


def test_draw_axis_horizontal():
    image = Image(100, 100)
    draw_axis(image, Vector(1, 0, 0), "x")
    assert image[50, 65] == 0xFF0000
    assert image[40, 65] == 0xFFFF00
    lx, ly = image.labels["x"]
    assert ly == 65
    assert lx > 40


def test_draw_axis_vertical_goes_up():
    image = Image(100, 100)
    draw_axis(image, Vector(0, 1, 0), "y")
    assert image[40, 55] == 0x00FF00
    assert image[40, 75] == 0
    assert image.labels["y"][1] < 65


def test_draw_axis_unknown_name():
    with pytest.raises(ValueError):
        draw_axis(Image(100, 100), Vector(1, 0, 0), "w")


def test_draw_reference_for_straight_camera():
    image = Image(100, 100)
    base = Camera(pos=Vector(), n=Vector(0, 0, -1), fov=1.0).base()
    draw_reference(image, base)
    assert image[50, 65] == 0xFF0000
    assert image[40, 55] == 0x00FF00
    assert 0x0000FF not in image.pixels
    assert image.labels["z"] == (40, 65)


def test_bmp_headers():
    image = Image(5, 3)
    data = bmp_bytes(image)
    magic, filesize, offset = struct.unpack("<2sI4xI", data[:14])
    assert magic == b"BM"
    assert offset == 54
    assert filesize == len(data)
    size, width, height, planes, bpp = struct.unpack("<IiiHH", data[14:30])
    assert (size, width, height, planes, bpp) == (40, 5, 3, 1, 24)
    assert data[30:54] == bytes(24)


def test_bmp_pixel_bytes_and_padding():
    image = Image(1, 1)
    image[0, 0] = 0x112233
    assert bmp_bytes(image)[54:] == b"\x33\x22\x11\x00"


def test_bmp_rows_bottom_up():
    image = Image(1, 2)
    image[0, 0] = 0xFF0000
    image[0, 1] = 0x0000FF
    pixels = bmp_bytes(image)[54:]
    assert pixels[:3] == b"\xff\x00\x00"
    assert pixels[4:7] == b"\x00\x00\xff"


def test_row_length_is_multiple_of_four():
    for width in range(1, 9):
        data = bmp_bytes(Image(width, 2))
        assert (len(data) - 54) % 8 == 0


def test_write_bmp_roundtrip(tmp_path):
    image = Image(4, 4)
    image[1, 2] = 0xABCDEF
    target = tmp_path / "out.bmp"
    write_bmp(image, target)
    assert target.read_bytes() == bmp_bytes(image)


def test_write_bmp_bad_path(tmp_path):
    with pytest.raises(MiniRTError):
        write_bmp(Image(1, 1), tmp_path / "missing" / "out.bmp")