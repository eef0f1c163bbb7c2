# cubscape

cubscape is a first-person raycasting explorer. It reads a `.cub` scene
file. The file names four XPM wall textures, a floor colour, a ceiling
colour and a grid map closed by walls. cubscape then opens a 640x480
pygame window in which you can walk around the map.

## Installing

```
pip install .
```

To run the tests, install the test extra and run pytest:

```
pip install .[test]
pytest
```

## Running

```
cubscape path/to/scene.cub
```

The command takes exactly one argument. If it gets a different number of
arguments, or if the scene or one of its textures cannot be loaded, it
prints `Error` and a reason on standard error. It then exits with status 1.

### Controls

| Input              | Action                                   |
|--------------------|------------------------------------------|
| `W` / Up arrow     | move forward                             |
| `S` / Down arrow   | move backward                            |
| `A` / `D`          | strafe left / right                      |
| Left / Right arrow | turn the camera                          |
| Mouse near an edge | keep turning toward that edge            |
| Escape / close box | quit                                     |

Moving is blocked by walls. A minimap of the grid is drawn in the
top-left corner. On the minimap, walls take the floor colour (dark grey
if the floor is black), open floor is white, and the player's square
takes the ceiling colour.

## Scene files

A scene file must have the `.cub` extension and must not be empty. The
configuration lines may come in any order, and they all come before the
map:

```
NO ./textures/north.xpm
SO ./textures/south.xpm
WE ./textures/west.xpm
EA ./textures/east.xpm
F 220,100,0
C 225,30,0

111111
100101
1010N1
111111
```

* `NO`, `SO`, `WE` and `EA` each give the path of an existing, non-empty
  file with the `.xpm` extension. Each may appear only once.
* `F` and `C` give the floor and ceiling colours. Each is three
  comma-separated numbers from 0 to 255, optionally surrounded by spaces
  or tabs. Each may appear only once.
* The map is made of `1` (wall), `0` (floor), spaces, and exactly one of
  `N`, `S`, `E` or `W`. That letter marks the starting square and the
  direction the player faces.
* The map must be the last thing in the file and must not contain blank
  lines. Its floor must be closed in by walls. Before play, spaces are
  turned into walls, and short rows are padded with walls to the width of
  the longest row.

## Using it as a library

The loading, validation and rendering code runs without a window:

```python
from cubscape.config import load_scene
from cubscape.xpm import load_xpm
from cubscape.image import Image
from cubscape.raycast import Player, render_frame

scene = load_scene("maps/demo.cub")
textures = [load_xpm(p) for p in scene.config.texture_paths]
player = Player.from_start(scene.start)
frame = Image(640, 480)
render_frame(frame, scene.grid, player, textures,
             scene.config.floor, scene.config.ceiling)
pixels = frame.to_bytes()
```

Every error is a subclass of `ValueError`:

* `ConfigError` for problems with the path, textures or colours.
* `MapFileError` for a missing or malformed map section.
* `MapError` for an open map or the wrong number of players.
* `XpmError` for unreadable XPM data.

The modules:

* `cubscape.colornames`: `lookup_color` maps X11 colour names to RGB values.
* `cubscape.image`: the `Image` pixel buffer and `trgb` colour packing.
* `cubscape.xpm`: `parse_xpm` and `load_xpm` read XPM images.
* `cubscape.mapfile`: finds the map rows in a scene file.
* `cubscape.walls`: `parse_map` checks the walls and finds the player start.
* `cubscape.config`: `read_config`, `parse_color` and `load_scene`.
* `cubscape.raycast`: `Player` movement, `cast_ray`, `line_bounds` and
  `render_frame`.
* `cubscape.minimap`: `new_minimap` and `draw_minimap`.
* `cubscape.app`: the `Game` state and the `main` entry point.

## Limitations

* The XPM reader understands only the `c` colour key, `#hex` values and
  X11 colour names. Unknown names become black. `None` becomes
  0xFF000000; it is not drawn as transparent.
* There are no sprites, doors, sound or settings beyond those in the
  scene file. The window size is fixed.