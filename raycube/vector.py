"""Plane vectors and RGB colours used by the map, the player and the renderer."""

from __future__ import annotations

import math
from dataclasses import dataclass


@dataclass
class Vec:
    """A mutable two-dimensional vector."""

    x: float = 0.0
    y: float = 0.0

    def rotated(self, angle: float) -> Vec:
        """Return this vector turned counter-clockwise by ``angle`` radians."""
        cos_a = math.cos(angle)
        sin_a = math.sin(angle)
        return Vec(self.x * cos_a - self.y * sin_a, self.x * sin_a + self.y * cos_a)


@dataclass(frozen=True)
class Color:
    """An RGB colour with one integer per channel."""

    red: int = 0
    green: int = 0
    blue: int = 0


def rgb_to_hex(color: Color) -> int:
    """Pack a colour into a 0xRRGGBB integer."""
    return color.blue | color.green << 8 | color.red << 16


def hex_to_rgb(value: int) -> Color:
    """Unpack a 0xRRGGBB integer into a colour; higher bits are ignored."""
    return Color((value >> 16) & 255, (value >> 8) & 255, value & 255)