"""Drawing a frame: textured wall columns, sprites and the minimap."""

from __future__ import annotations

import math
from collections.abc import Iterator, Sequence
from dataclasses import dataclass
from itertools import combinations

from raycube.canvas import MINIMAP_CENTER, MINIMAP_HIGH, MINIMAP_LOW, Canvas, Texture, draw_line
from raycube.raycast import Ray, cast_rays
from raycube.vector import Vec
from raycube.world import Sprite, World

WHITE = 0xFFFFFF
CYAN = 0x00FFFF
BACKGROUND = 0x1E1E1E
TRANSPARENT = 0xFF000000
DEGREE = math.pi / 180
FOV_RAYS = 60
RAY_LENGTH = 100
MOVING_DOOR = 4
CLOSED_DOOR = 5
_MIN_DISTANCE = 1e-9


@dataclass
class SpriteProjection:
    """Where a sprite lands on screen."""

    start_x: int
    end_x: int
    start_y: int
    end_y: int
    width: int
    height: int


def texture_index(ray: Ray) -> int:
    """Wall texture for the face a ray hit: 0 north, 1 east, 2 south, 3 west."""
    if not ray.side and ray.dir.x < 0:
        return 0
    if ray.side and ray.dir.y > 0:
        return 1
    if not ray.side and ray.dir.x > 0:
        return 2
    return 3


def door_texture_index(world: World, ray: Ray) -> int:
    """Texture for a door: the closed one while idle, the other while it moves."""
    door = world.door_at(ray.map_x, ray.map_y)
    if door is not None and not door.isopening and not door.isclosing:
        return CLOSED_DOOR
    return MOVING_DOOR


def render_column(canvas: Canvas, world: World, ray: Ray, textures: Sequence[Texture]) -> None:
    """Draw the wall slice for a cast ray and record its height on the ray.

    ``textures`` holds the four wall faces followed by the moving and closed door.
    """
    distance = ray.perp_distance if ray.perp_distance > 0 else _MIN_DISTANCE
    ray.height = int(canvas.height / distance)
    start = canvas.height // 2 - ray.height // 2
    end = canvas.height // 2 + ray.height // 2
    if world.is_door(ray.map_x, ray.map_y):
        texture = textures[door_texture_index(world, ray)]
    else:
        texture = textures[texture_index(ray)]
    tx = int(ray.tex_pos_x * texture.width)
    span = end - start
    for y in range(max(start, 0), min(end, canvas.height)):
        ty = int((y - start) / span * texture.height)
        canvas.put(ray.column, y, texture.pixel(tx, ty))


def render_walls(canvas: Canvas, world: World, textures: Sequence[Texture]) -> list[int]:
    """Draw every wall column and return the wall height of each column."""
    z_buffer = []
    for ray in cast_rays(world, canvas.width):
        render_column(canvas, world, ray, textures)
        z_buffer.append(ray.height)
    return z_buffer


def _put_block(canvas: Canvas, x: int, y: int, size: int, color: int) -> None:
    for w in range(x, x + size):
        for h in range(y, y + size):
            canvas.put_minimap(w, h, color)


def minimap(canvas: Canvas, world: World) -> None:
    """Draw the round minimap centred on the player with its field of view."""
    for x in range(MINIMAP_LOW, MINIMAP_HIGH):
        for y in range(MINIMAP_LOW, MINIMAP_HIGH):
            canvas.put_minimap(x, y, BACKGROUND)
    pos = world.player.pos
    size = world.wall_width
    for x in range(world.height):
        for y in range(world.width):
            wall = world.is_wall(x, y)
            if wall or world.is_door(x, y):
                _put_block(
                    canvas,
                    int((y - pos.y) * size + MINIMAP_CENTER),
                    int((x - pos.x) * size + MINIMAP_CENTER),
                    size,
                    WHITE if wall else CYAN,
                )
    start = Vec(MINIMAP_CENTER, MINIMAP_CENTER)
    heading = Vec(-world.player.dir.y, -world.player.dir.x).rotated(math.pi)
    heading = heading.rotated(-DEGREE * (FOV_RAYS // 2))
    for _ in range(FOV_RAYS):
        end = Vec(start.x + RAY_LENGTH * heading.x, start.y + RAY_LENGTH * heading.y)
        draw_line(canvas, start, end, CYAN)
        heading = heading.rotated(DEGREE)
    for i in range(MINIMAP_CENTER - 2, MINIMAP_CENTER + 2):
        for j in range(MINIMAP_CENTER - 2, MINIMAP_CENTER + 2):
            canvas.put_minimap(i, j, CYAN)


def sort_sprites(world: World) -> None:
    """Measure each sprite's squared distance and move farther positions forward.

    Only positions are exchanged; every sprite keeps the distance it was given.
    """
    pos = world.player.pos
    for sprite in world.sprites:
        sprite.distance = (sprite.x - pos.x) ** 2 + (sprite.y - pos.y) ** 2
    for first, second in combinations(world.sprites, 2):
        if second.distance > first.distance:
            first.x, second.x = second.x, first.x
            first.y, second.y = second.y, first.y


def project_sprite(world: World, sprite: Sprite, width: int, height: int) -> SpriteProjection | None:
    """Screen rectangle of a sprite, or None if it is unseen or behind the player."""
    if not world.is_visible(int(sprite.x), int(sprite.y)):
        return None
    player = world.player
    dx = sprite.x - player.pos.x
    dy = sprite.y - player.pos.y
    inv_det = 1.0 / (player.plan.x * player.dir.y - player.dir.x * player.plan.y)
    trans_x = inv_det * (player.dir.y * dx - player.dir.x * dy)
    trans_y = inv_det * (player.plan.x * dy - player.plan.y * dx)
    if trans_y <= 0:
        return None
    screen_x = int((width // 2) * (1 + trans_x / trans_y))
    size = abs(int(height / trans_y))
    return SpriteProjection(
        start_x=screen_x - size // 2,
        end_x=screen_x + size // 2,
        start_y=height // 2 - size // 2,
        end_y=height // 2 + size // 2,
        width=size,
        height=size,
    )


def _span(start: int, end: int, limit: int) -> Iterator[int]:
    value = start
    while value < end:
        if value < 0:
            value = 0
        elif value >= limit:
            return
        yield value
        value += 1


def _put_sprite(canvas: Canvas, proj: SpriteProjection, z_buffer: Sequence[int], texture: Texture) -> None:
    for x in _span(proj.start_x, proj.end_x, canvas.width):
        if proj.height <= z_buffer[x]:
            continue
        for y in _span(proj.start_y, proj.end_y, canvas.height):
            tx = int((x - proj.start_x) / (proj.end_x - proj.start_x) * texture.width)
            ty = int((y - proj.start_y) / (proj.end_y - proj.start_y) * texture.height)
            if 0 <= tx < texture.width and 0 <= ty < texture.height:
                color = texture.pixel(tx, ty)
                if color != TRANSPARENT:
                    canvas.put(x, y, color)


def put_sprites(canvas: Canvas, world: World, z_buffer: Sequence[int], frames: Sequence[Texture]) -> None:
    """Draw every visible sprite with the current animation frame."""
    sort_sprites(world)
    texture = frames[world.frame]
    for sprite in world.sprites:
        proj = project_sprite(world, sprite, canvas.width, canvas.height)
        if proj is not None:
            _put_sprite(canvas, proj, z_buffer, texture)