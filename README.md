# minirt

A small ray tracer. It reads a scene described in a plain-text `.rt` file
and renders spheres, planes, squares, triangles and capped cylinders lit
by an ambient light and any number of point lights, with diffuse and
specular shading and hard shadows. The result is shown in a window or
saved as a 24-bit BMP image.

It needs nothing beyond the standard library; the window uses `tkinter`.

## Installation

```
pip install .
```

## Usage

Render a scene in a window:

```
minirt scene.rt
```

Render camera 0 to `output_bmp/output.bmp` instead of opening a window:

```
minirt scene.rt --save
```

The output directory `output_bmp/` must already exist in the current
directory; otherwise the write fails and is reported as an error.

The scene path must end in `.rt` (its first `.rt` must be its end). The
only accepted flag is `--save`, given at most once; anything else is
reported as an error. Errors are printed to standard error and the
command exits with status 1. If `assets/welcome.txt` exists in the
current directory, it is printed at start-up.

### Window controls

| Key / action      | Effect                                        |
|-------------------|-----------------------------------------------|
| `W` / `S`         | move the camera up / down                     |
| `A` / `D`         | move the camera left / right                  |
| `Q` / `E`         | move the camera backward / forward            |
| Left / Right      | switch to the previous / next camera          |
| Mouse click       | point the camera at the clicked pixel         |
| `Esc`             | close the window                              |

Movement is one unit along the current camera's own axes, and every
change re-renders the whole scene.

## Scene files

Each non-empty line describes one element; fields are separated by
single or repeated spaces, and vectors and colours by commas. Exactly
one `R` and one `A` line are required. End the file with a newline: a
last line without one is ignored unless it is the only line.

```
R   width height
A   ratio r,g,b
c   x,y,z  nx,ny,nz  fov
l   x,y,z  ratio r,g,b
sp  x,y,z  diameter  r,g,b
pl  x,y,z  nx,ny,nz  r,g,b
sq  x,y,z  nx,ny,nz  side  r,g,b
cy  x,y,z  nx,ny,nz  diameter  height  r,g,b
tr  x,y,z  x,y,z  x,y,z  r,g,b
```

- Resolution, field of view (in degrees) and colour channels are
  unsigned integers; colour channels must not exceed 255.
- Ratios, diameters, sides and heights are unsigned decimals; light and
  ambient ratios must lie in `[0, 1]`.
- Coordinates and directions may be negative. The fractional part is
  added to the integer part as written, so `-0.5` is −0.5 but `-1.5`
  reads as −0.5 (−1 + 0.5).
- A resolution larger than 1000×1000 is reduced to it.
- Elements of each kind are numbered in reverse order of appearance:
  the last camera in the file is camera 0, the one `--save` renders.
- A camera must not look straight along a zero direction.

Example:

```
R 640 480
A 0.2 255,255,255
c 0,0,10 0,0,-1 70
l 5,5,5 0.7 255,255,255
sp 0,0,0 4 255,0,0
pl 0,-2,0 0,1,0 200,200,200
```

Shading note: every light adds the ambient term and, when not in
shadow, a diffuse and specular term whose intensity and colour are
those of light 0.

## Using it as a library

```python
from minirt.parser import load_scene
from minirt.render import render, write_bmp

scene = load_scene("scene.rt", (1000, 1000))
image = render(scene, 0)
write_bmp(image, "output.bmp")
```

- `minirt.parser`: `parse_scene(text, max_resolution)` and
  `load_scene(path, max_resolution)` build a `minirt.scene.Scene`; pass
  `None` as `max_resolution` to keep the resolution as written.
- `minirt.render`: `render(scene, camera_index)` returns an `Image`
  (indexed as `image[x, y]`, values `0xRRGGBB`); `trace_pixel` gives one
  pixel; `bmp_bytes` and `write_bmp` produce the BMP file.
- `minirt.scene.Option`: add `Option.NO_SPECULAR` to `scene.options` to
  turn off highlights, or `Option.AXIS` to draw a small world-axis
  overlay in the bottom-left corner. The command line sets neither.
- `minirt.scene.Light.parallel`: a non-zero vector makes the light shine
  along that direction; scene files never set it.
- `minirt.controls.Viewer`: the camera moves and switches used by the
  window, usable without one.

Malformed scenes and bad arguments raise `minirt.errors.MiniRTError`,
whose `kind` (an `ErrorKind`) tells what went wrong.

## Running the tests

```
pip install ".[test]"
pytest
```