"""Keyboard and mouse handling: movement with wall sliding, turning and modes."""

from __future__ import annotations

import math
from dataclasses import dataclass
from enum import Enum

from raycube.vector import Vec
from raycube.world import Mode, Pole, World

MOVE_STEP = 0.1
WALL_MARGIN = 0.1
TURN_STEP = 0.0174533 * 2
DEFAULT_WIDTH = 1280
DEFAULT_HEIGHT = 720
LEFT_BUTTON = 1
WHEEL_UP = 4
WHEEL_DOWN = 5


class Key(Enum):
    """Keys the game reacts to."""

    SPACE = "space"
    RIGHT = "right"
    LEFT = "left"
    ESC = "esc"
    Q = "q"
    W = "w"
    D = "d"
    S = "s"
    A = "a"


_HELD_KEYS = {
    Key.SPACE: "space",
    Key.RIGHT: "right",
    Key.LEFT: "left",
    Key.W: "w",
    Key.D: "d",
    Key.S: "s",
    Key.A: "a",
}


def blocked(world: World, x: int, y: int) -> bool:
    """True when the player may not step into cell (x, y)."""
    if world.is_door(x, y):
        door = world.door_at(x, y)
        return door is not None and not door.isopen
    return world.is_wall(x, y)


def _slide_x(world: World, new_pos: Vec) -> None:
    pos = world.player.pos
    fx, fy = math.floor(pos.x), math.floor(pos.y)
    if new_pos.x < pos.x:
        if not blocked(world, fx - 1, fy) or new_pos.x >= fx + WALL_MARGIN:
            pos.x = new_pos.x
    elif not blocked(world, fx + 1, fy) or new_pos.x <= fx + 1 - WALL_MARGIN:
        pos.x = new_pos.x


def _slide_y(world: World, new_pos: Vec) -> None:
    pos = world.player.pos
    fx, fy = math.floor(pos.x), math.floor(pos.y)
    if new_pos.y < pos.y:
        if not blocked(world, fx, fy - 1) or new_pos.y >= fy + WALL_MARGIN:
            pos.y = new_pos.y
    elif not blocked(world, fx, fy + 1) or new_pos.y <= fy + 1 - WALL_MARGIN:
        pos.y = new_pos.y


def move_north(world: World, new_pos: Vec) -> None:
    pos = world.player.pos
    fx, fy = math.floor(pos.x), math.floor(pos.y)
    if not blocked(world, fx - 1, fy) or new_pos.x >= fx + WALL_MARGIN:
        pos.x = new_pos.x
    _slide_y(world, new_pos)


def move_south(world: World, new_pos: Vec) -> None:
    pos = world.player.pos
    fx, fy = math.floor(pos.x), math.floor(pos.y)
    if not blocked(world, fx + 1, fy) or new_pos.x <= fx + 1 - WALL_MARGIN:
        pos.x = new_pos.x
    _slide_y(world, new_pos)


def move_east(world: World, new_pos: Vec) -> None:
    pos = world.player.pos
    fx, fy = math.floor(pos.x), math.floor(pos.y)
    if not blocked(world, fx, fy + 1) or new_pos.y <= fy + 1 - WALL_MARGIN:
        pos.y = new_pos.y
    _slide_x(world, new_pos)


def move_west(world: World, new_pos: Vec) -> None:
    pos = world.player.pos
    fx, fy = math.floor(pos.x), math.floor(pos.y)
    if not blocked(world, fx, fy - 1) or new_pos.y >= fy + WALL_MARGIN:
        pos.y = new_pos.y
    _slide_x(world, new_pos)


def set_direction(world: World) -> None:
    """Set the player's pole from the dominant axis of the view direction."""
    direction = world.player.dir
    if abs(direction.x) < abs(direction.y):
        world.player.pole = Pole.WEST if direction.y < 0 else Pole.EAST
    else:
        world.player.pole = Pole.NORTH if direction.x < 0 else Pole.SOUTH


def move_player(world: World) -> None:
    """Take one step in the direction given by the movement keys."""
    keys = world.keys
    heading = world.player.dir
    if keys.w:
        heading = heading.rotated(0)
    elif keys.s:
        heading = heading.rotated(math.pi)
    elif keys.a:
        heading = heading.rotated(math.pi / 2)
    elif keys.d:
        heading = heading.rotated(-math.pi / 2)
    pos = world.player.pos
    new_pos = Vec(pos.x + heading.x * MOVE_STEP, pos.y + heading.y * MOVE_STEP)
    if abs(heading.x) > abs(heading.y):
        (move_north if heading.x < 0 else move_south)(world, new_pos)
    else:
        (move_east if heading.y > 0 else move_west)(world, new_pos)


def _turn(world: World, angle: float) -> None:
    world.player.dir = world.player.dir.rotated(angle)
    world.player.plan = world.player.plan.rotated(angle)


def rotate_player(world: World) -> None:
    """Turn the view by a fixed step according to the arrow keys."""
    if world.keys.right:
        _turn(world, -TURN_STEP)
    elif world.keys.left:
        _turn(world, TURN_STEP)
    set_direction(world)


def update_hooks(world: World) -> None:
    """Apply the held keys for one frame."""
    keys = world.keys
    if keys.w or keys.s or keys.d or keys.a:
        move_player(world)
    if keys.right or keys.left:
        rotate_player(world)
    if keys.space:
        world.open_doors()


def key_up(world: World, key: Key) -> None:
    attribute = _HELD_KEYS.get(key)
    if attribute is not None:
        setattr(world.keys, attribute, False)


def key_down(world: World, key: Key) -> None:
    """Handle a key press; Q leaves the game by raising ``SystemExit``."""
    if key is Key.Q:
        raise SystemExit(0)
    if key is Key.SPACE and world.mode is Mode.INTRO and world.button == 0:
        world.mode = Mode.GAME
        return
    if key is Key.ESC and world.button == 0:
        if world.mode is Mode.MENU:
            world.mode = Mode.GAME
        elif world.mode is Mode.GAME:
            world.mode = Mode.MENU
    if world.mode in (Mode.INTRO, Mode.MENU):
        return
    attribute = _HELD_KEYS.get(key)
    if attribute is not None:
        setattr(world.keys, attribute, True)


@dataclass
class Mouse:
    """Mouse state: dragging with the left button turns the view."""

    width: int = DEFAULT_WIDTH
    height: int = DEFAULT_HEIGHT
    old_x: int = 0

    def press(self, world: World, button: int, x: int, y: int) -> None:
        if world.mode in (Mode.INTRO, Mode.MENU):
            return
        if button == LEFT_BUTTON and 0 <= x < self.width and 0 <= y < self.height:
            world.button = 1
        elif button in (WHEEL_UP, WHEEL_DOWN):
            move_player(world)

    def release(self, world: World, button: int) -> None:
        if world.mode in (Mode.INTRO, Mode.MENU):
            return
        if button == LEFT_BUTTON:
            world.button = 0

    def move(self, world: World, x: int) -> None:
        if world.mode in (Mode.INTRO, Mode.MENU):
            return
        if world.button == 1:
            _turn(world, 2 * (x - self.old_x) / self.width)
            set_direction(world)
        self.old_x = x