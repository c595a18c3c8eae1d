"""Game state built from a parsed scene: grid, player, doors and sprites."""

from __future__ import annotations

import math
from copy import deepcopy
from dataclasses import dataclass, field
from enum import Enum

from raycube.mapfile import Cell, CubConfig
from raycube.vector import Color, Vec

DOOR_STEP = 0.02
DOOR_OPEN_TICKS = 100
DOOR_REACH = 2


class Pole(str, Enum):
    """The compass direction the player faces."""

    NORTH = "N"
    SOUTH = "S"
    EAST = "E"
    WEST = "W"


class Mode(Enum):
    """Which screen is shown."""

    INTRO = "intro"
    MENU = "menu"
    GAME = "game"


_POLE_ANGLE = {
    Pole.WEST: math.pi / 2,
    Pole.SOUTH: math.pi,
    Pole.EAST: -math.pi / 2,
}


@dataclass
class Door:
    """A sliding door on a grid cell."""

    x: int
    y: int
    timer: int = 0
    isopen: bool = False
    isopening: bool = False
    isclosing: bool = False
    progress: float = 0.0


@dataclass
class Sprite:
    """An animated object standing in the middle of a grid cell."""

    x: float
    y: float
    visible: bool = False
    distance: float = 0.0
    index: int = 0


@dataclass
class Player:
    """Position, view direction and camera plane of the player."""

    pos: Vec = field(default_factory=Vec)
    dir: Vec = field(default_factory=lambda: Vec(-1.0, 0.0))
    plan: Vec = field(default_factory=lambda: Vec(0.0, 0.66))
    pole: Pole = Pole.NORTH


@dataclass
class Keys:
    """Which controls are currently held down."""

    space: bool = False
    right: bool = False
    left: bool = False
    esc: bool = False
    q: bool = False
    w: bool = False
    d: bool = False
    s: bool = False
    a: bool = False


@dataclass
class World:
    """Everything that changes while the game runs."""

    grid: list[list[Cell]]
    width: int
    height: int
    floor: Color | None = None
    ceiling: Color | None = None
    texture_paths: list[str | None] = field(default_factory=list)
    player: Player = field(default_factory=Player)
    keys: Keys = field(default_factory=Keys)
    doors: list[Door] = field(default_factory=list)
    sprites: list[Sprite] = field(default_factory=list)
    mode: Mode = Mode.GAME
    button: int = 0
    frame: int = 0
    wall_width: int = 10

    @classmethod
    def from_config(cls, config: CubConfig) -> World:
        """Build the world, its doors, sprites and player from a parsed scene."""
        world = cls(
            grid=deepcopy(config.grid),
            width=config.width,
            height=config.height,
            floor=config.floor,
            ceiling=config.ceiling,
            texture_paths=list(config.textures),
        )
        for x, row in enumerate(world.grid):
            for y, cell in enumerate(row):
                if cell.value == "1":
                    cell.wall = True
                elif cell.value == "2":
                    world.doors.append(Door(x, y))
                elif cell.value == "3":
                    world.sprites.append(Sprite(x + 0.5, y + 0.5))
                elif cell.value in "NESW":
                    world.player.pole = Pole(cell.value)
                    world.player.pos = Vec(x + 0.5, y + 0.5)
        angle = _POLE_ANGLE.get(world.player.pole)
        if angle is not None:
            world.player.dir = world.player.dir.rotated(angle)
            world.player.plan = world.player.plan.rotated(angle)
        return world

    def _cell(self, x: int, y: int) -> Cell | None:
        if 0 <= x < self.height and 0 <= y < self.width:
            return self.grid[x][y]
        return None

    def is_wall(self, x: int, y: int) -> bool:
        cell = self._cell(x, y)
        return cell is not None and cell.wall

    def is_door(self, x: int, y: int) -> bool:
        cell = self._cell(x, y)
        return cell is not None and cell.door

    def is_visible(self, x: int, y: int) -> bool:
        """True when a ray reached this cell during the current frame."""
        cell = self._cell(x, y)
        return cell is not None and cell.visited

    def door_at(self, x: int, y: int) -> Door | None:
        return next((door for door in self.doors if door.x == x and door.y == y), None)

    def _open_door(self, x: int, y: int) -> None:
        for door in self.doors:
            if door.x == x and door.y == y and not door.isopen:
                if not door.isclosing and not door.isopening:
                    door.isopening = True

    def open_doors(self) -> None:
        """Start opening closed doors up to two cells ahead of the player."""
        px = int(self.player.pos.x)
        py = int(self.player.pos.y)
        step = {
            Pole.NORTH: (-1, 0),
            Pole.SOUTH: (1, 0),
            Pole.WEST: (0, -1),
            Pole.EAST: (0, 1),
        }[self.player.pole]
        for i in range(1, DOOR_REACH + 1):
            x, y = px + step[0] * i, py + step[1] * i
            if self.is_door(x, y):
                self._open_door(x, y)

    def _player_on(self, door: Door) -> bool:
        return (
            math.floor(self.player.pos.x) == door.x
            and math.floor(self.player.pos.y) == door.y
        )

    def update_doors(self) -> None:
        """Advance every door's opening, closing and auto-close timer by one tick."""
        for door in self.doors:
            if door.isopen and not self._player_on(door):
                door.timer += 1
                if door.timer == DOOR_OPEN_TICKS:
                    door.isclosing = True
                    door.isopen = False
                    door.timer = 0
            if door.isclosing and not self._player_on(door):
                if door.progress >= 0:
                    door.progress -= DOOR_STEP
                else:
                    door.progress = 0.0
                    door.isclosing = False
                    door.isopen = False
            if door.isopening:
                if door.progress <= 1:
                    door.progress += DOOR_STEP
                else:
                    door.progress = 1.0
                    door.isopening = False
                    door.isopen = True

    def reset_visibility(self) -> None:
        """Forget which cells were seen during the previous frame."""
        for row in self.grid:
            for cell in row:
                cell.visited = False