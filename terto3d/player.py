"""The player: spawning on the map, moving, strafing and turning."""

from __future__ import annotations

import math
from dataclasses import dataclass

from .mapfile import MapData, MapError

WIDTH = 800
HEIGHT = 600
FOV = 260.0

MOVE_SPEED = 0.05
ROT_SPEED = 0.05

UI_ANIM_DELAY = 10

LIGHT_FRAME_COUNT = 20
LIGHT_ANIM_DELAY = 600

MINIMAP_SCALE = 6
MINIMAP_OFFSET_X = 10
MINIMAP_OFFSET_Y = HEIGHT + 10

MOUSE_SENSITIVITY = 0.0003
PLANE_LENGTH = 0.66
EDGE_MARGIN = 1.1

# Direction and camera plane for each spawn letter.
_SPAWN_VECTORS = {
    "N": (0.0, -1.0, PLANE_LENGTH, 0.0),
    "S": (0.0, 1.0, -PLANE_LENGTH, 0.0),
    "E": (1.0, 0.0, 0.0, PLANE_LENGTH),
    "W": (-1.0, 0.0, 0.0, -PLANE_LENGTH),
}


@dataclass
class Player:
    """Position, facing direction and camera plane of the player."""

    x: float = 0.0
    y: float = 0.0
    dir_x: float = 0.0
    dir_y: float = 0.0
    plane_x: float = 0.0
    plane_y: float = 0.0

    def rotate(self, angle: float) -> None:
        """Turn the direction and the camera plane by ``angle`` radians."""
        cos_a = math.cos(angle)
        sin_a = math.sin(angle)
        self.dir_x, self.dir_y = (
            self.dir_x * cos_a - self.dir_y * sin_a,
            self.dir_x * sin_a + self.dir_y * cos_a,
        )
        self.plane_x, self.plane_y = (
            self.plane_x * cos_a - self.plane_y * sin_a,
            self.plane_x * sin_a + self.plane_y * cos_a,
        )


def spawn_player(map_data: MapData) -> Player:
    """Create the player at the first start tile and turn that tile into floor."""
    for y, row in enumerate(map_data.grid):
        for x, char in enumerate(row):
            vectors = _SPAWN_VECTORS.get(char)
            if vectors is None:
                continue
            map_data.grid[y] = row[:x] + "0" + row[x + 1:]
            dir_x, dir_y, plane_x, plane_y = vectors
            return Player(x + 0.5, y + 0.5, dir_x, dir_y, plane_x, plane_y)
    raise MapError("map has no player start")


def _is_valid_cell(grid: list[str], x: int, y: int) -> bool:
    if not 0 <= y < len(grid) or not 0 <= x < len(grid[y]):
        return False
    return grid[y][x] != " "


def _is_core_tile_open(grid: list[str], x: int, y: int) -> bool:
    if not 0 <= y < len(grid) or not 0 <= x < len(grid[y]):
        return False
    return grid[y][x] == "0"


def _surroundings_valid(grid: list[str], mx: int, my: int, x: float, y: float) -> bool:
    if x < EDGE_MARGIN or y < EDGE_MARGIN or y > len(grid) - EDGE_MARGIN:
        return False
    if x > len(grid[my]) - EDGE_MARGIN:
        return False
    return all(
        _is_valid_cell(grid, mx + dx, my + dy)
        for dy in (-1, 0, 1)
        for dx in (-1, 0, 1)
    )


def is_inside_map(map_data: MapData, x: float, y: float) -> bool:
    """Tell whether ``(x, y)`` is on open floor or well inside the map."""
    map_x = int(x)
    map_y = int(y)
    if _is_core_tile_open(map_data.grid, map_x, map_y):
        return True
    return _surroundings_valid(map_data.grid, map_x, map_y, x, y)


def update_player_position(
    map_data: MapData,
    player: Player,
    next_x: float,
    next_y: float,
    solid_walls: bool = True,
) -> None:
    """Move the player toward ``(next_x, next_y)`` one axis at a time.

    With solid walls the vertical move is tried first and neither move may
    end on a wall; without them the player may pass through walls but not
    leave the map.
    """
    grid = map_data.grid
    if solid_walls:
        if (
            is_inside_map(map_data, player.x, next_y)
            and grid[int(next_y)][int(player.x)] != "1"
        ):
            player.y = next_y
        if (
            is_inside_map(map_data, next_x, player.y)
            and grid[int(player.y)][int(next_x)] != "1"
        ):
            player.x = next_x
    else:
        if is_inside_map(map_data, next_x, player.y):
            player.x = next_x
        if is_inside_map(map_data, player.x, next_y):
            player.y = next_y


def _check_direction(direction: int) -> None:
    if direction not in (1, -1):
        raise ValueError(f"direction must be 1 or -1, not {direction!r}")


def walk(
    map_data: MapData,
    player: Player,
    direction: int,
    speed: float = MOVE_SPEED,
    solid_walls: bool = True,
) -> None:
    """Step forward (``direction`` 1) or backward (-1) along the facing."""
    _check_direction(direction)
    next_x = player.x + player.dir_x * speed * direction
    next_y = player.y + player.dir_y * speed * direction
    update_player_position(map_data, player, next_x, next_y, solid_walls)


def strafe(
    map_data: MapData,
    player: Player,
    direction: int,
    speed: float = MOVE_SPEED,
    solid_walls: bool = True,
) -> None:
    """Step sideways: right for ``direction`` 1, left for -1."""
    _check_direction(direction)
    side_x = -player.dir_y * direction
    side_y = player.dir_x * direction
    next_x = player.x + side_x * speed
    next_y = player.y + side_y * speed
    update_player_position(map_data, player, next_x, next_y, solid_walls)


def mouse_rotation(player: Player, xpos: float) -> float:
    """Turn the player by the mouse's offset from the screen centre.

    Returns the angle turned, in radians.
    """
    delta_x = xpos - WIDTH // 2
    angle = delta_x * MOUSE_SENSITIVITY
    if delta_x != 0:
        player.rotate(angle)
    return angle