"""Grid raycasting maze explorer: .cub scene parsing, XPM textures, rendering and a pygame front end."""

__version__ = "0.1.0"
__all__ = ["__version__"]