"""Error kinds reported while loading and rendering scenes."""

from __future__ import annotations

import enum


class ErrorKind(enum.Enum):
    """The kinds of failure the program reports."""

    BAD_PATH = enum.auto()
    MEM_ALLOC = enum.auto()
    BAD_RGB = enum.auto()
    BAD_FLAG = enum.auto()
    BAD_INTENSITY = enum.auto()
    DOUBLE_FLAG = enum.auto()
    BAD_SCENE = enum.auto()
    BAD_BONUS = enum.auto()
    BAD_TEXTURE = enum.auto()


_MESSAGES = {
    ErrorKind.BAD_PATH: "<<ERROR>> wrong scene path",
    ErrorKind.MEM_ALLOC: "<<ERROR>> wrong scene path",
    ErrorKind.BAD_RGB: "<<ERROR>> wrong RGB values, please check format",
    ErrorKind.BAD_FLAG: "<<ERROR>> wrong flag",
    ErrorKind.BAD_INTENSITY: "<<ERROR>> wrong light/ambient value, set it between [0, 1]",
    ErrorKind.DOUBLE_FLAG: "<<ERROR>> duplicated flag",
    ErrorKind.BAD_SCENE: "<<ERROR>> wrong scene, please check format",
    ErrorKind.BAD_BONUS: "<<ERROR>> wrong scene bonus, please check format",
    ErrorKind.BAD_TEXTURE: "<<ERROR>> wrong image texture path, please check scene",
}


def message_for(kind: ErrorKind) -> str:
    """The user-facing message for an error kind."""
    return _MESSAGES[kind]


class MiniRTError(Exception):
    """Raised for any scene, option or file error."""

    def __init__(self, kind: ErrorKind) -> None:
        super().__init__(message_for(kind))
        self.kind = kind