"""Casting one ray per screen column through the grid with a DDA walk."""

from __future__ import annotations

from dataclasses import dataclass, field

from raycube.vector import Vec
from raycube.world import World

NO_HIT = 0
WALL_HIT = 1
DOOR_HIT = 2
PARALLEL_DELTA = 1e3


@dataclass
class Ray:
    """One ray cast from the player for a screen column."""

    column: int = 0
    camera: float = 0.0
    dir: Vec = field(default_factory=Vec)
    delta_x: float = 0.0
    delta_y: float = 0.0
    map_x: int = 0
    map_y: int = 0
    x_step: int = 1
    y_step: int = 1
    initial_dx: float = 0.0
    initial_dy: float = 0.0
    side: int = 0
    perp_distance: float = 0.0
    tex_pos_x: float = 0.0
    height: int = 0


def _set_ray_data(world: World, ray: Ray) -> None:
    pos = world.player.pos
    if ray.side == 0:
        ray.perp_distance = ray.initial_dx - ray.delta_x
        tex = pos.y + ray.perp_distance * ray.dir.y
    else:
        ray.perp_distance = ray.initial_dy - ray.delta_y
        tex = pos.x + ray.perp_distance * ray.dir.x
    ray.tex_pos_x = tex - int(tex)


def _door_hit(world: World, ray: Ray) -> int:
    door = world.door_at(ray.map_x, ray.map_y)
    if door is None or door.isopen:
        return NO_HIT
    _set_ray_data(world, ray)
    if ray.tex_pos_x <= door.progress:
        return NO_HIT
    ray.tex_pos_x -= door.progress
    return DOOR_HIT


def _hit(world: World, ray: Ray) -> int:
    x, y = ray.map_x, ray.map_y
    if not (0 <= x < world.height and 0 <= y < world.width):
        # A ray that leaves the grid would never meet a wall; stop it at the edge.
        return WALL_HIT
    world.grid[x][y].visited = True
    if world.is_door(x, y):
        return _door_hit(world, ray)
    return WALL_HIT if world.is_wall(x, y) else NO_HIT


def dda(world: World, ray: Ray) -> None:
    """Step the ray cell by cell until it meets a wall or a closed part of a door."""
    while (result := _hit(world, ray)) == NO_HIT:
        if ray.initial_dx < ray.initial_dy:
            ray.initial_dx += ray.delta_x
            ray.map_x += ray.x_step
            ray.side = 0
        else:
            ray.initial_dy += ray.delta_y
            ray.map_y += ray.y_step
            ray.side = 1
    if result != DOOR_HIT:
        _set_ray_data(world, ray)


def _delta(component: float) -> float:
    return PARALLEL_DELTA if component == 0 else abs(1 / component)


def cast_ray(world: World, column: int, width: int) -> Ray:
    """Cast the ray for one screen column of a view ``width`` columns wide."""
    player = world.player
    camera = 2 * column / width - 1
    direction = Vec(
        player.dir.x + player.plan.x * camera,
        player.dir.y + player.plan.y * camera,
    )
    ray = Ray(
        column=column,
        camera=camera,
        dir=direction,
        delta_x=_delta(direction.x),
        delta_y=_delta(direction.y),
    )
    pos = player.pos
    ray.map_x = int(pos.x)
    ray.map_y = int(pos.y)
    if direction.x < 0:
        ray.x_step = -1
        ray.initial_dx = (pos.x - ray.map_x) * ray.delta_x
    else:
        ray.x_step = 1
        ray.initial_dx = (ray.map_x + 1 - pos.x) * ray.delta_x
    if direction.y < 0:
        ray.y_step = -1
        ray.initial_dy = (pos.y - ray.map_y) * ray.delta_y
    else:
        ray.y_step = 1
        ray.initial_dy = (ray.map_y + 1 - pos.y) * ray.delta_y
    dda(world, ray)
    return ray


def cast_rays(world: World, width: int) -> list[Ray]:
    """Cast one ray for every column of the view, left to right."""
    return [cast_ray(world, column, width) for column in range(width)]