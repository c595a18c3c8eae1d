"""Pixel buffers: the frame being drawn and the textures sampled into it."""

from __future__ import annotations

from dataclasses import dataclass, field

from raycube.vector import Color, Vec, rgb_to_hex

MINIMAP_CENTER = 140
MINIMAP_RADIUS_SQUARED = 10000
MINIMAP_LOW = 40
MINIMAP_HIGH = 240


@dataclass
class Texture:
    """An image stored as a flat list of 0xAARRGGBB integers."""

    width: int
    height: int
    pixels: list[int]

    def pixel(self, tx: int, ty: int) -> int:
        """Sample a texel; rows use the height as stride, so square images are expected."""
        return self.pixels[self.height * ty + tx]


@dataclass
class Canvas:
    """The frame buffer, row-major, one integer colour per pixel."""

    width: int
    height: int
    pixels: list[int] = field(default_factory=list)

    def __post_init__(self) -> None:
        size = self.width * self.height
        if not self.pixels:
            self.pixels = [0] * size
        elif len(self.pixels) != size:
            raise ValueError(f"expected {size} pixels, got {len(self.pixels)}")

    def put(self, x: float, y: float, color: int) -> None:
        """Set one pixel; points outside the canvas are ignored."""
        x, y = int(x), int(y)
        if 0 <= x < self.width and 0 <= y < self.height:
            self.pixels[y * self.width + x] = color

    def put_minimap(self, x: int, y: int, color: int) -> None:
        """Set a pixel only inside the round minimap area."""
        if (
            MINIMAP_LOW <= x < MINIMAP_HIGH
            and MINIMAP_LOW <= y < MINIMAP_HIGH
            and in_circle(x, y)
        ):
            self.put(x, y, color)

    def fill_background(self, ceiling: Color, floor: Color) -> None:
        """Paint the upper half with the ceiling and the lower half with the floor.

        The middle row is left as it was.
        """
        width = self.width
        half = self.height // 2
        self.pixels[: half * width] = [rgb_to_hex(ceiling)] * (half * width)
        rest = max(self.height - half - 1, 0)
        self.pixels[(half + 1) * width:] = [rgb_to_hex(floor)] * (rest * width)


def in_circle(x: int, y: int) -> bool:
    """True when the point lies in the minimap disc."""
    dx = x - MINIMAP_CENTER
    dy = y - MINIMAP_CENTER
    return dx * dx + dy * dy <= MINIMAP_RADIUS_SQUARED


def draw_line(canvas: Canvas, a: Vec, b: Vec, color: int) -> None:
    """Draw a straight line from ``a`` to ``b`` with Bresenham's algorithm."""
    canvas.put(a.x, a.y, color)
    dx = abs(int(b.x - a.x))
    dy = abs(int(b.y - a.y))
    step_x = -1 if b.x - a.x < 0 else 1
    step_y = -1 if b.y - a.y < 0 else 1
    x, y = int(a.x), int(a.y)
    if dx > dy:
        p = 2 * dy - dx
        for _ in range(dx):
            x += step_x
            if p < 0:
                p += 2 * dy
            else:
                y += step_y
                p += 2 * dy - 2 * dx
            canvas.put(x, y, color)
    else:
        p = 2 * dx - dy
        for _ in range(dy):
            y += step_y
            if p < 0:
                p += 2 * dx
            else:
                x += step_x
                p += 2 * dx - 2 * dy
            canvas.put(x, y, color)