# raycube

A small first-person raycasting engine built on pygame. It reads a `.cub`
map file and draws a textured 3D view with sliding doors, animated
sprites and a circular minimap in a 1280×720 window.

## Installing

```
pip install .
```

## Running

```
raycube path/to/level.cub
```

The command takes exactly one argument, a file whose name ends in `.cub`.
If the argument count is wrong, the file cannot be read, the map is not
valid or an image cannot be loaded, a message starting with `Error` is
printed to standard error and the command exits with status 1.

## The .cub format

A file starts with six header lines, in any order, with blank lines
allowed between them:

```
NO ./textures/north.xpm
SO ./textures/south.xpm
WE ./textures/west.xpm
EA ./textures/east.xpm
F 220,100,0
C 225,30,0
```

`NO`, `SO`, `WE` and `EA` name the wall textures. `F` and `C` give the
floor and ceiling colours as three comma-separated numbers,
`red,green,blue`.

The map follows. It has between 3 and 100 rows made of these characters:

| char        | meaning                          |
|-------------|----------------------------------|
| `1`         | wall                             |
| `0`         | empty floor                      |
| `2`         | door                             |
| `3`         | animated sprite                  |
| `N S E W`   | player start, and facing         |
| space       | outside the map, treated as wall |

There must be exactly one player start. The map must be closed by walls,
the first and last rows may hold no doors or sprites, and no blank line
may appear inside the map. Short rows are padded with walls.

## Images

Besides the four wall textures named in the file, the game loads these
images, relative to the working directory:

- `assets/nova/blue_door.xpm` — a door while it slides
- `assets/nova/orange_door.xpm` — a door at rest
- `assets/sprite/a.xpm` … `assets/sprite/t.xpm`, then
  `assets/sprite/aa.xpm` … `assets/sprite/tt.xpm` — the 40 sprite frames
- `assets/ui/intro.xpm` and `assets/ui/controls.xpm` — the intro and
  controls screens

Images are read with `pygame.image.load`; fully transparent or
colour-keyed pixels are not drawn on sprites.

## Controls

| input              | action                            |
|--------------------|-----------------------------------|
| `W` `A` `S` `D`    | move                              |
| left / right arrow | turn                              |
| left mouse drag    | turn                              |
| mouse wheel        | step                              |
| space              | open a door up to two cells ahead |
| `Esc`              | show or hide the controls screen  |
| `Q`                | quit                              |

The player slides along walls and closed doors instead of stopping dead.
An open door closes by itself after 100 frames, but its timer does not
run while you stand in it.

## Using it as a library

```python
from raycube.mapfile import load_cub
from raycube.world import World

config = load_cub("level.cub")
world = World.from_config(config)
print(world.player.pos, world.player.pole)
```

- `raycube.mapfile.parse_cub` parses a scene from a string;
  `load_cub` also checks the `.cub` extension. Both raise
  `raycube.mapfile.MapError` when the scene is not valid.
- `raycube.world.World` holds the grid, player, doors and sprites, with
  `open_doors()` and `update_doors()` driving the doors.
- `raycube.controls` has the movement, turning and key handling
  (`key_down`, `key_up`, `update_hooks`, `Mouse`).
- `raycube.raycast.cast_rays(world, width)` casts one ray per screen
  column and returns the `Ray` objects.
- `raycube.canvas.Canvas` is a plain pixel buffer; `raycube.render`
  draws walls, sprites and the minimap into it.
- `raycube.textures.load_textures(config)` loads every image into a
  `TextureSet`.
- `raycube.app.Game(world, textures)` ties it together: `update()`
  advances one frame, `render()` returns the drawn `Canvas`, and `run()`
  opens the window.

## Limits

The window size is fixed at 1280×720. The game starts in play; the intro
screen is loaded but only shown if the world's mode is set to
`Mode.INTRO`. Colour values are not range-checked. There is no sound,
no saving and no level selection.