from pathlib import Path

import pygame
import pytest

from raycube.canvas import Texture
from raycube.mapfile import CubConfig
from raycube.render import TRANSPARENT
from raycube.textures import (
    CLOSED_DOOR_IMAGE,
    INTRO_IMAGE,
    MENU_IMAGE,
    MOVING_DOOR_IMAGE,
    TextureSet,
    load_texture,
    load_textures,
    sprite_frame_names,
    surface_to_texture,
)
from raycube.vector import Color, rgb_to_hex


def _write_xpm(path: Path, rgb: str) -> None:
    path.parent.mkdir(parents=True, exist_ok=True)
    path.write_text(
        "/* XPM */\n"
        "static char *img[] = {\n"
        '"2 2 1 1",\n'
        f'"a c #{rgb}",\n'
        '"aa",\n'
        '"aa"\n'
        "};\n"
    )


def test_sprite_frame_names_order():
    names = sprite_frame_names()
    assert len(names) == 40
    assert names[0] == "assets/sprite/a.xpm"
    assert names[20] == "assets/sprite/aa.xpm"
    assert len(set(names)) == 40


def test_surface_to_texture_colors_and_transparency():
    surface = pygame.Surface((2, 2), pygame.SRCALPHA)
    surface.set_at((0, 0), (255, 0, 0, 255))
    surface.set_at((1, 0), (0, 0, 255, 255))
    surface.set_at((0, 1), (0, 0, 0, 0))
    surface.set_at((1, 1), (10, 20, 30, 255))
    texture = surface_to_texture(surface)
    assert (texture.width, texture.height) == (2, 2)
    assert texture.pixels == [
        rgb_to_hex(Color(255, 0, 0)),
        rgb_to_hex(Color(0, 0, 255)),
        TRANSPARENT,
        rgb_to_hex(Color(10, 20, 30)),
    ]


def test_surface_to_texture_colorkey():
    surface = pygame.Surface((2, 1))
    surface.fill((5, 6, 7))
    surface.set_at((1, 0), (100, 110, 120))
    surface.set_colorkey((5, 6, 7))
    texture = surface_to_texture(surface)
    assert texture.pixels == [TRANSPARENT, rgb_to_hex(Color(100, 110, 120))]


def test_load_texture_reads_xpm(tmp_path):
    path = tmp_path / "wall.xpm"
    path.write_text(
        "/* XPM */\n"
        "static char *img[] = {\n"
        '"2 2 2 1",\n'
        '"r c #FF0000",\n'
        '"g c #00FF00",\n'
        '"rg",\n'
        '"gr"\n'
        "};\n"
    )
    texture = load_texture(path)
    red = rgb_to_hex(Color(255, 0, 0))
    green = rgb_to_hex(Color(0, 255, 0))
    assert texture.pixels == [red, green, green, red]


def test_load_texture_missing_file(tmp_path):
    with pytest.raises(ValueError):
        load_texture(tmp_path / "nothing.xpm")


def test_texture_set_columns_order():
    walls = [Texture(1, 1, [i]) for i in range(4)]
    doors = [Texture(1, 1, [10]), Texture(1, 1, [11])]
    textures = TextureSet(walls=walls, doors=doors, frames=[])
    assert [t.pixels[0] for t in textures.columns] == [0, 1, 2, 3, 10, 11]


def test_load_textures_full_set(tmp_path, monkeypatch):
    monkeypatch.chdir(tmp_path)
    wall_colors = ["110000", "002200", "000033", "440044"]
    for index, rgb in enumerate(wall_colors):
        _write_xpm(tmp_path / f"w{index}.xpm", rgb)
    _write_xpm(tmp_path / INTRO_IMAGE, "010203")
    _write_xpm(tmp_path / MENU_IMAGE, "040506")
    _write_xpm(tmp_path / MOVING_DOOR_IMAGE, "0000FF")
    _write_xpm(tmp_path / CLOSED_DOOR_IMAGE, "FF8000")
    for name in sprite_frame_names():
        _write_xpm(tmp_path / name, "808080")
    config = CubConfig(textures=[f"w{i}.xpm" for i in range(4)])
    textures = load_textures(config)
    assert [t.pixels[0] for t in textures.walls] == [int(c, 16) for c in wall_colors]
    assert textures.columns[4].pixels[0] == rgb_to_hex(Color(0, 0, 255))
    assert textures.columns[5].pixels[0] == rgb_to_hex(Color(255, 128, 0))
    assert len(textures.frames) == 40
    assert textures.intro.pixels[0] == rgb_to_hex(Color(1, 2, 3))


def test_load_textures_missing_wall_path():
    config = CubConfig(textures=[None, None, None, None])
    with pytest.raises(ValueError):
        load_textures(config)