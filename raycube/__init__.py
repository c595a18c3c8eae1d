"""Textured raycasting engine for .cub maps with doors, sprites and a minimap."""

__version__ = "0.1.0"