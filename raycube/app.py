"""The game window: event handling, the frame loop and the command entry point."""

from __future__ import annotations

import sys
from array import array

import pygame

from raycube.canvas import Canvas, Texture
from raycube.controls import (
    DEFAULT_HEIGHT,
    DEFAULT_WIDTH,
    Key,
    Mouse,
    key_down,
    key_up,
    update_hooks,
)
from raycube.mapfile import MapError, load_cub
from raycube.render import minimap, put_sprites, render_walls
from raycube.textures import SPRITE_FRAMES, TextureSet, load_textures
from raycube.vector import Color
from raycube.world import Mode, World

TITLE = "raycube"
FPS = 60

_PYGAME_KEYS = {
    pygame.K_SPACE: Key.SPACE,
    pygame.K_RIGHT: Key.RIGHT,
    pygame.K_LEFT: Key.LEFT,
    pygame.K_ESCAPE: Key.ESC,
    pygame.K_q: Key.Q,
    pygame.K_w: Key.W,
    pygame.K_d: Key.D,
    pygame.K_s: Key.S,
    pygame.K_a: Key.A,
}


def _show(canvas: Canvas, texture: Texture | None) -> None:
    if texture is None:
        return
    rows = min(texture.height, canvas.height)
    cols = min(texture.width, canvas.width)
    for y in range(rows):
        start = y * canvas.width
        source = y * texture.width
        canvas.pixels[start:start + cols] = texture.pixels[source:source + cols]


def _canvas_bytes(canvas: Canvas) -> bytes:
    data = array("I", ((pixel & 0xFFFFFF) << 8 for pixel in canvas.pixels))
    if sys.byteorder == "little":
        data.byteswap()
    return data.tobytes()


class Game:
    """One running game: the world, its images and the frame being drawn."""

    def __init__(self, world: World, textures: TextureSet) -> None:
        self.world = world
        self.textures = textures
        self.canvas = Canvas(DEFAULT_WIDTH, DEFAULT_HEIGHT)
        self.mouse = Mouse(DEFAULT_WIDTH, DEFAULT_HEIGHT)

    def update(self) -> None:
        """Advance the game by one frame while it is being played."""
        world = self.world
        if world.mode is not Mode.GAME:
            return
        update_hooks(world)
        world.update_doors()
        world.frame = (world.frame + 1) % SPRITE_FRAMES

    def render(self) -> Canvas:
        """Draw the current screen into the canvas and return it."""
        canvas = self.canvas
        world = self.world
        if world.mode is Mode.INTRO:
            _show(canvas, self.textures.intro)
            return canvas
        if world.mode is Mode.MENU:
            _show(canvas, self.textures.menu)
            return canvas
        canvas.fill_background(world.ceiling or Color(), world.floor or Color())
        world.reset_visibility()
        z_buffer = render_walls(canvas, world, self.textures.columns)
        if world.sprites:
            put_sprites(canvas, world, z_buffer, self.textures.frames)
        minimap(canvas, world)
        return canvas

    def handle_event(self, event: pygame.event.Event) -> None:
        """React to one window event; closing the window raises ``SystemExit``."""
        world = self.world
        if event.type == pygame.QUIT:
            raise SystemExit(0)
        if event.type in (pygame.KEYDOWN, pygame.KEYUP):
            key = _PYGAME_KEYS.get(event.key)
            if key is None:
                return
            if event.type == pygame.KEYDOWN:
                key_down(world, key)
            else:
                key_up(world, key)
        elif event.type == pygame.MOUSEBUTTONDOWN:
            x, y = event.pos
            self.mouse.press(world, event.button, x, y)
        elif event.type == pygame.MOUSEBUTTONUP:
            self.mouse.release(world, event.button)
        elif event.type == pygame.MOUSEMOTION:
            self.mouse.move(world, event.pos[0])

    def run(self) -> None:
        """Open the window and play until it is closed or Q is pressed."""
        pygame.init()
        try:
            size = (self.canvas.width, self.canvas.height)
            screen = pygame.display.set_mode(size)
            pygame.display.set_caption(TITLE)
            clock = pygame.time.Clock()
            while True:
                for event in pygame.event.get():
                    self.handle_event(event)
                self.update()
                canvas = self.render()
                frame = pygame.image.frombuffer(
                    _canvas_bytes(canvas), (canvas.width, canvas.height), "RGBX"
                )
                screen.blit(frame, (0, 0))
                pygame.display.flip()
                clock.tick(FPS)
        except SystemExit:
            return
        finally:
            pygame.quit()


def _report(message: str) -> None:
    print(f"Error\n{message}", file=sys.stderr)


def main(argv: list[str] | None = None) -> int:
    """Load the scene named on the command line and play it."""
    args = sys.argv[1:] if argv is None else list(argv)
    if len(args) != 1:
        _report("bad number of arguments")
        return 1
    try:
        config = load_cub(args[0])
    except MapError as exc:
        _report(str(exc))
        return 1
    world = World.from_config(config)
    try:
        textures = load_textures(config)
    except ValueError as exc:
        _report(str(exc))
        return 1
    Game(world, textures).run()
    return 0