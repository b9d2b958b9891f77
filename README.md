# terto3d

A small first-person raycasting explorer. It reads a `.cub` map file, checks
it, and lets you walk around a textured maze in a pygame window, with a
minimap below the 3D view, an animated interface overlay that plays when you
move, and a light overlay that steps through its frames once.

## Installing

```
pip install .
```

For running the tests:

```
pip install ".[test]"
pytest
```

## Running

```
terto3d <map-name>.cub
```

The map name is looked up under `maps/` in the current directory, so
`terto3d level1.cub` opens `maps/level1.cub`. The command takes exactly one
argument; with any other number it exits with status 1. Before the window
opens, a description of the parsed map (grid, texture paths, colours) is
printed. If the map is unusable an `Error: ...` message goes to standard
error and the exit status is 1.

Besides the wall textures named in the map, these image files are loaded
relative to the current directory:

- `textures/door0.png` to `textures/door3.png` (the first is used for doors),
- `textures/interface/frame0.png` to `textures/interface/frame3.png`
  (the interface animation),
- `textures/interface2/light1.png` to `textures/interface2/light20.png`
  (the light overlay).

## Map files

A map file has header lines followed by the map grid:

```
NO ./textures/north.png
SO ./textures/south.png
WE ./textures/west.png
EA ./textures/east.png
F 120,100,80
C 40,60,200

111111
100001
10N0D1
111111
```

- `NO`, `SO`, `WE`, `EA` give the wall textures for each face; the first
  definition of each wins.
- `F` and `C` give the floor and ceiling colours as `R,G,B`.
- In the grid, `1` is a wall, `0` is floor, `D` is a door and one of
  `N`, `S`, `E`, `W` marks where the player starts and which way they face.
  Rows are padded with spaces to the widest row.

A map is rejected when:

- a line outside the header holds a character other than `0 1 N S E W D`,
  a space or a carriage return;
- any of the four textures is missing, or its file does not start with the
  PNG signature;
- there is not exactly one start position;
- a flood fill from the start reaches a space or the edge of the grid, or
  covers fewer than 5 or 4000 or more cells.

## Controls

| Key     | Action                           |
|---------|----------------------------------|
| W / S   | walk forward / backward          |
| A / D   | step left / right                |
| Q / E   | turn left / right                |
| 1       | toggle wall collision on and off |
| 2       | restart the light animation      |
| Escape  | quit                             |

With wall collision off you can walk through walls, but not off the map.

## Using it as a library

Map handling and rendering work without a window:

```python
from terto3d.loader import load_map, format_map
from terto3d.validate import validate_map
from terto3d.player import spawn_player, walk

map_data = load_map("level1.cub", "maps")
print(format_map(map_data))
validate_map(map_data)

player = spawn_player(map_data)
walk(map_data, player, 1, 0.05, True)
print(player.x, player.y)
```

Problems with a map raise `terto3d.mapfile.MapError`.

- `terto3d.mapfile`: `parse_map`, `parse_header_line`, `parse_rgb` and the
  `MapData` dataclass.
- `terto3d.validate`: `prevalidate_map_file`, `validate_player_start`,
  `validate_walls`, `validate_colors_and_textures`, `validate_map`. The
  texture checks accept a `texture_loads` callable in place of the PNG
  signature test.
- `terto3d.player`: `Player`, `spawn_player`, `walk`, `strafe`,
  `update_player_position`, `is_inside_map` and `mouse_rotation`.
- `terto3d.raycast`: `cast_ray`, `texture_x`, `draw_column`, `render_frame`,
  a `Texture` of RGBA bytes, `WallTextures` and a plain `Frame` pixel buffer.
- `terto3d.minimap`: `draw_minimap` into a `Frame`.
- `terto3d.animation`: `UiAnimation` and `LightAnimation`, advanced one
  update at a time with `tick()`.
- `terto3d.game`: the `Game` state with `handle_key`, `toggle_solid_walls`
  and `update`, `load_texture` for image files, and `main`.

## What it does not do

- Doors are only drawn and block sight; they do not open.
- The window does not use the mouse: `mouse_rotation` exists as a function
  but the game loop does not call it.
- There are no enemies, items, sound or saved games.