"""A small ray tracer for .rt scene files, rendering to a window or a BMP image."""

__version__ = "0.1.0"

__all__ = ["__version__"]