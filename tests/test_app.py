import pygame
import pytest

from raycube.app import Game, main
from raycube.canvas import Canvas, Texture
from raycube.mapfile import parse_cub
from raycube.textures import TextureSet
from raycube.world import Mode, World

SCENE = (
    "NO a.xpm\n"
    "SO b.xpm\n"
    "WE c.xpm\n"
    "EA d.xpm\n"
    "F 10,20,30\n"
    "C 40,50,60\n"
    "\n"
    "1111\n"
    "1N01\n"
    "1111\n"
)

WALL_COLORS = [0x110000, 0x002200, 0x000033, 0x440044]
INTRO_COLOR = 0x123456
MENU_COLOR = 0x654321


def _game() -> Game:
    world = World.from_config(parse_cub(SCENE))
    textures = TextureSet(
        walls=[Texture(1, 1, [color]) for color in WALL_COLORS],
        doors=[Texture(1, 1, [0x0000FF]), Texture(1, 1, [0xFF8000])],
        frames=[Texture(1, 1, [0x808080]) for _ in range(40)],
        intro=Texture(1, 1, [INTRO_COLOR]),
        menu=Texture(1, 1, [MENU_COLOR]),
    )
    game = Game(world, textures)
    game.canvas = Canvas(32, 24)
    return game


def test_main_requires_one_argument(capsys):
    assert main([]) == 1
    assert capsys.readouterr().err == "Error\nbad number of arguments\n"


def test_main_rejects_bad_extension(capsys):
    assert main(["scene.txt"]) == 1
    assert capsys.readouterr().err.startswith("Error\n")


def test_main_reports_missing_textures(tmp_path, monkeypatch, capsys):
    monkeypatch.chdir(tmp_path)
    (tmp_path / "scene.cub").write_text(SCENE)
    assert main(["scene.cub"]) == 1
    assert capsys.readouterr().err.startswith("Error\n")


def test_render_game_draws_north_wall_in_centre_column():
    game = _game()
    canvas = game.render()
    column = [canvas.pixels[y * canvas.width + 16] for y in range(canvas.height)]
    assert column == [WALL_COLORS[0]] * canvas.height


def test_render_intro_and_menu_show_their_images():
    game = _game()
    game.world.mode = Mode.INTRO
    assert game.render().pixels[0] == INTRO_COLOR
    game.world.mode = Mode.MENU
    assert game.render().pixels[0] == MENU_COLOR


def test_update_moves_player_forward():
    game = _game()
    start = game.world.player.pos.x
    game.world.keys.w = True
    game.update()
    assert game.world.player.pos.x < start


def test_update_wraps_animation_frame():
    game = _game()
    for _ in range(40):
        game.update()
    assert game.world.frame == 0
    game.update()
    assert game.world.frame == 1


def test_update_paused_in_menu():
    game = _game()
    game.world.mode = Mode.MENU
    game.world.keys.w = True
    start = game.world.player.pos.x
    game.update()
    assert game.world.player.pos.x == start
    assert game.world.frame == 0


def test_handle_key_events():
    game = _game()
    game.handle_event(pygame.event.Event(pygame.KEYDOWN, key=pygame.K_w))
    assert game.world.keys.w is True
    game.handle_event(pygame.event.Event(pygame.KEYUP, key=pygame.K_w))
    assert game.world.keys.w is False


def test_handle_escape_opens_menu():
    game = _game()
    game.handle_event(pygame.event.Event(pygame.KEYDOWN, key=pygame.K_ESCAPE))
    assert game.world.mode is Mode.MENU


def test_handle_quit_event_exits():
    game = _game()
    with pytest.raises(SystemExit):
        game.handle_event(pygame.event.Event(pygame.QUIT))


def test_handle_mouse_buttons():
    game = _game()
    game.handle_event(pygame.event.Event(pygame.MOUSEBUTTONDOWN, button=1, pos=(5, 5)))
    assert game.world.button == 1
    game.handle_event(pygame.event.Event(pygame.MOUSEBUTTONUP, button=1, pos=(5, 5)))
    assert game.world.button == 0


def test_handle_mouse_drag_turns_view():
    game = _game()
    before = (game.world.player.dir.x, game.world.player.dir.y)
    game.handle_event(pygame.event.Event(pygame.MOUSEBUTTONDOWN, button=1, pos=(0, 0)))
    game.handle_event(pygame.event.Event(pygame.MOUSEMOTION, pos=(300, 0)))
    after = (game.world.player.dir.x, game.world.player.dir.y)
    assert after != before
    assert abs(after[0] ** 2 + after[1] ** 2 - 1) < 1e-9