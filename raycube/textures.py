"""Loading wall, door, sprite and screen images into textures."""

from __future__ import annotations

import os
from dataclasses import dataclass
from string import ascii_lowercase

import pygame

from raycube.canvas import Texture
from raycube.mapfile import CubConfig
from raycube.render import TRANSPARENT

SPRITE_DIR = "assets/sprite/"
SPRITE_FRAMES = 40
INTRO_IMAGE = "assets/ui/intro.xpm"
MENU_IMAGE = "assets/ui/controls.xpm"
MOVING_DOOR_IMAGE = "assets/nova/blue_door.xpm"
CLOSED_DOOR_IMAGE = "assets/nova/orange_door.xpm"


@dataclass
class TextureSet:
    """Every image the game draws with."""

    walls: list[Texture]
    doors: list[Texture]
    frames: list[Texture]
    intro: Texture | None = None
    menu: Texture | None = None

    @property
    def columns(self) -> list[Texture]:
        """The four wall faces followed by the moving and the closed door."""
        return [*self.walls, *self.doors]


def sprite_frame_names() -> list[str]:
    """Paths of the sprite animation frames, in playing order."""
    letters = ascii_lowercase[: SPRITE_FRAMES // 2]
    singles = [f"{SPRITE_DIR}{letter}.xpm" for letter in letters]
    doubles = [f"{SPRITE_DIR}{letter}{letter}.xpm" for letter in letters]
    return singles + doubles


def surface_to_texture(surface: pygame.Surface) -> Texture:
    """Copy a surface into a texture; see-through pixels become ``TRANSPARENT``."""
    width, height = surface.get_size()
    data = pygame.image.tobytes(surface, "RGBA")
    key = surface.get_colorkey()
    key_rgb = tuple(key[:3]) if key is not None else None
    pixels = []
    for red, green, blue, alpha in zip(data[0::4], data[1::4], data[2::4], data[3::4]):
        if alpha == 0 or (red, green, blue) == key_rgb:
            pixels.append(TRANSPARENT)
        else:
            pixels.append(red << 16 | green << 8 | blue)
    return Texture(width, height, pixels)


def load_texture(path: str | os.PathLike[str]) -> Texture:
    """Read an image file into a texture."""
    name = os.fspath(path)
    try:
        surface = pygame.image.load(name)
    except (pygame.error, OSError) as exc:
        raise ValueError(f"cannot load image {name}") from exc
    return surface_to_texture(surface)


def load_textures(config: CubConfig) -> TextureSet:
    """Load the scene's wall textures and the game's own doors, sprites and screens."""
    walls = []
    for path in config.textures:
        if path is None:
            raise ValueError("missing wall texture")
        walls.append(load_texture(path))
    intro = load_texture(INTRO_IMAGE)
    menu = load_texture(MENU_IMAGE)
    doors = [load_texture(MOVING_DOOR_IMAGE), load_texture(CLOSED_DOOR_IMAGE)]
    frames = [load_texture(name) for name in sprite_frame_names()]
    return TextureSet(walls=walls, doors=doors, frames=frames, intro=intro, menu=menu)