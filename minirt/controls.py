"""Interactive viewing: moving between cameras and moving them with keys and mouse."""

from __future__ import annotations

import enum
from dataclasses import dataclass

from minirt.render import Image, render
from minirt.scene import Scene
from minirt.vector import Vector


class Key(enum.Enum):
    """Keys the viewer reacts to, valued by their key symbol names."""

    ESC = "Escape"
    A = "a"
    W = "w"
    S = "s"
    D = "d"
    E = "e"
    Q = "q"
    ARROW_LEFT = "Left"
    ARROW_RIGHT = "Right"


# Camera-space step taken by each movement key.
_STEPS = {
    Key.A: Vector(-1.0, 0.0, 0.0),
    Key.D: Vector(1.0, 0.0, 0.0),
    Key.W: Vector(0.0, 1.0, 0.0),
    Key.S: Vector(0.0, -1.0, 0.0),
    Key.E: Vector(0.0, 0.0, -1.0),
    Key.Q: Vector(0.0, 0.0, 1.0),
}


@dataclass
class Viewer:
    """A scene seen through one of its cameras, with the last rendered frame."""

    scene: Scene
    camera_index: int = 0
    image: Image | None = None

    def frame(self) -> Image:
        """Render the scene through the current camera and keep the result."""
        self.image = render(self.scene, self.camera_index)
        return self.image

    def translate(self, key: Key) -> Image:
        """Move the current camera one unit along its own axes and re-render.

        Any key other than A, D, W, S or E moves the camera backwards.
        """
        step = _STEPS.get(key, _STEPS[Key.Q])
        camera = self.scene.cameras[self.camera_index]
        camera.pos = camera.base().apply(step) + camera.pos
        return self.frame()

    def change_camera(self, key: Key) -> Image:
        """Switch to the previous camera on the left arrow, else the next one."""
        count = len(self.scene.cameras)
        if count:
            delta = -1 if key is Key.ARROW_LEFT else 1
            self.camera_index = (self.camera_index + delta) % count
        return self.frame()

    def point_camera(self, u: int, v: int) -> Image:
        """Turn the current camera to look through pixel (u, v) and re-render."""
        camera = self.scene.cameras[self.camera_index]
        local = camera.local_ray(self.scene.width, self.scene.height, float(u), float(v))
        camera.n = camera.base().apply(local).normalized()
        return self.frame()

    def handle_key(self, key: Key) -> bool:
        """React to a key press; False means the viewer should close."""
        if key is Key.ESC:
            return False
        if key in _STEPS:
            self.translate(key)
        elif key in (Key.ARROW_LEFT, Key.ARROW_RIGHT):
            self.change_camera(key)
        return True