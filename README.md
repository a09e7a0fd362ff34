# cubraycast

A small first-person maze explorer rendered with grid raycasting. A level
is described by a `.cub` scene file that names the wall textures, the floor
and ceiling colours, and the map itself. The window is drawn with pygame.

## Installing

```
pip install .
```

Tests need the `test` extra:

```
pip install ".[test]"
pytest
```

## Running

```
cubraycast maps/level.cub
cubraycast --bonus maps/level.cub
```

Exactly one scene file ending in `.cub` must be given; otherwise an error
is printed and the command exits with status 255. A scene that cannot be
read or fails validation, or a texture that cannot be loaded, is reported
and the command exits with status 1.

`--bonus` turns on the extras: mouse look, a minimap with a north marker
in the top-left corner, and the gun sprite at the bottom of the screen,
which alternates with its firing image while F is held. With `--bonus`,
walls also block movement.

### Controls

| Key          | Action                          |
|--------------|---------------------------------|
| W / S        | move forward / backward         |
| A / D        | strafe left / right             |
| Left / Right | turn                            |
| Left Shift   | sprint while the gauge lasts    |
| F            | fire                            |
| Esc          | quit                            |

With `--bonus`, a mouse more than 100 pixels left or right of the window's
centre turns the view.

## Scene files

```
NO ./textures/north.xpm
SO ./textures/south.xpm
WE ./textures/west.xpm
EA ./textures/east.xpm

F 220,100,0
C 225,30,0

111111
100101
101001
1100N1
111111
```

- `NO`, `SO`, `WE`, `EA` give the four wall textures, each exactly once.
  The path is the first word after the identifier.
- `F` and `C` give the floor and ceiling colours as `R,G,B`, each 0–255,
  each exactly once.
- The map starts at the first line that contains a `1` and holds only map
  characters and spaces; every line after it belongs to the map. It uses
  `1` for walls, `0` for floor, spaces for empty space, and exactly one of
  `N`, `S`, `E`, `W` for the player's start and heading. Every floor cell
  and the player cell must be enclosed by walls.

## Textures

Textures are XPM images. Wall textures are read as their top-left 64×64
pixels. The gun images are always loaded from
`./textures/gun_final.xpm` and `./textures/gun_fire.xpm` (240×240), and
with `--bonus` the minimap marker from `./textures/north_mm.xpm` (16×16),
all relative to the working directory. XPM colours may be `#`-hex values,
`None` for transparency, or a few basic colour names (black, white, red,
green, blue, yellow, cyan, magenta, gray/grey).

## Using it from Python

```python
from cubraycast.scene import load_scene, MapError

try:
    scene = load_scene("maps/level.cub")
except MapError as err:
    print(err)
```

- `cubraycast.scene.parse_scene` does the same from a string and returns a
  `Scene`.
- `cubraycast.textures.load_xpm(path, size)` returns a `Texture`.
- `cubraycast.player.spawn_player(scene)` places a `Player` at the start
  cell.
- `cubraycast.raycaster.cast_rays` builds the wall layer, and
  `cubraycast.render.compose_frame` turns it into a `Frame`.
- `cubraycast.game.Game` ties these together: `tick()` advances one step
  and `render()` returns the current `Frame`, without opening a window.

## What it does not do

Only XPM textures are loaded; there are no sounds, enemies or other
sprites, and the gun is drawn but fire does not affect anything.