"""Command-line entry point: render a scene to a window or to a BMP file."""

from __future__ import annotations

import sys
from collections.abc import Sequence
from pathlib import Path

from minirt.controls import Key, Viewer
from minirt.errors import ErrorKind, MiniRTError
from minirt.parser import load_scene
from minirt.render import AXIS_COLORS, Image, render, write_bmp
from minirt.scene import Option

WELCOME_PATH = Path("assets/welcome.txt")
BMP_OUTPUT = Path("output_bmp/output.bmp")
SCENE_SUFFIX = ".rt"


def parse_options(args: Sequence[str]) -> set[Option]:
    """Options given after the scene path; only ``--save`` is accepted, once."""
    options: set[Option] = set()
    for arg in args:
        if arg != "--save":
            raise MiniRTError(ErrorKind.BAD_FLAG)
        if Option.SAVE in options:
            raise MiniRTError(ErrorKind.DOUBLE_FLAG)
        options.add(Option.SAVE)
    return options


def check_scene_path(path: str) -> str:
    """Return ``path`` if its first ``.rt`` is the very end of it."""
    pos = path.find(SCENE_SUFFIX)
    if pos == -1 or pos + len(SCENE_SUFFIX) != len(path):
        raise MiniRTError(ErrorKind.BAD_PATH)
    return path


def _print_welcome() -> None:
    try:
        text = WELCOME_PATH.read_text(encoding="utf-8", errors="replace")
    except OSError:
        return
    print(text.rstrip("\n"))


def _rows(image: Image) -> str:
    rows = []
    for y in range(image.height):
        row = image.pixels[y * image.width:(y + 1) * image.width]
        rows.append("{" + " ".join(f"#{c & 0xFFFFFF:06x}" for c in row) + "}")
    return " ".join(rows)


def show_window(viewer: Viewer) -> None:
    """Open a window on the viewer and run until it is closed or Escape is pressed."""
    import tkinter as tk

    scene = viewer.scene
    root = tk.Tk()
    root.title("miniRT")
    canvas = tk.Canvas(root, width=scene.width, height=scene.height, highlightthickness=0)
    canvas.pack()
    photo = tk.PhotoImage(width=scene.width, height=scene.height)

    def draw(image: Image) -> None:
        canvas.delete("all")
        if image.width and image.height:
            photo.put(_rows(image))
        canvas.create_image(0, 0, image=photo, anchor="nw")
        for name, (x, y) in image.labels.items():
            canvas.create_text(
                x, y, text=name, fill=f"#{AXIS_COLORS[name]:06x}", anchor="nw"
            )

    def on_key(event: tk.Event) -> None:
        symbol = event.keysym.lower() if len(event.keysym) == 1 else event.keysym
        try:
            key = Key(symbol)
        except ValueError:
            return
        if not viewer.handle_key(key):
            root.destroy()
            return
        draw(viewer.image if viewer.image is not None else viewer.frame())

    def on_click(event: tk.Event) -> None:
        draw(viewer.point_camera(event.x, event.y))

    root.bind("<Key>", on_key)
    canvas.bind("<Button>", on_click)
    root.protocol("WM_DELETE_WINDOW", root.destroy)
    draw(viewer.frame())
    root.mainloop()


def main(argv: Sequence[str] | None = None) -> int:
    """Run the program; returns the exit status."""
    args = list(sys.argv[1:] if argv is None else argv)
    _print_welcome()
    try:
        if not args:
            raise MiniRTError(ErrorKind.BAD_PATH)
        path = check_scene_path(args[0])
        options = parse_options(args[1:])
        scene = load_scene(path)
        scene.options |= options
        if Option.SAVE in scene.options:
            print("converting scene to bmp...")
            write_bmp(render(scene, 0), BMP_OUTPUT)
            print("saved!")
        else:
            show_window(Viewer(scene))
    except MiniRTError as exc:
        print(str(exc), file=sys.stderr)
        return 1
    return 0


if __name__ == "__main__":
    sys.exit(main())