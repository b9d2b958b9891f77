"""The overhead map drawn below the 3D view."""

from __future__ import annotations

from .mapfile import MapData
from .player import MINIMAP_OFFSET_X, MINIMAP_OFFSET_Y, MINIMAP_SCALE, Player
from .raycast import Frame

WALL_COLOR = 0xFFFFFFFF
PLAYER_COLOR = 0xFFFFFFFF
DIRECTION_LENGTH = 5


def _put(frame: Frame, x: int, y: int, color: int) -> None:
    if 0 <= x < frame.width and 0 <= y < frame.height:
        frame.put_pixel(x, y, color)


def _draw_tile(frame: Frame, map_x: int, map_y: int, color: int) -> None:
    start_x = map_x * MINIMAP_SCALE + MINIMAP_OFFSET_X
    start_y = map_y * MINIMAP_SCALE + MINIMAP_OFFSET_Y
    for y in range(MINIMAP_SCALE):
        for x in range(MINIMAP_SCALE):
            _put(frame, start_x + x, start_y + y, color)


def _draw_player(frame: Frame, player: Player) -> None:
    px = int(player.x * MINIMAP_SCALE) + MINIMAP_OFFSET_X
    py = int(player.y * MINIMAP_SCALE) + MINIMAP_OFFSET_Y
    for dy in (-1, 0, 1):
        for dx in (-1, 0, 1):
            _put(frame, px + dx, py + dy, PLAYER_COLOR)
    tip_x = int(player.dir_x * DIRECTION_LENGTH)
    tip_y = int(player.dir_y * DIRECTION_LENGTH)
    _put(frame, px + tip_x, py + tip_y, PLAYER_COLOR)


def draw_minimap(frame: Frame, map_data: MapData, player: Player) -> None:
    """Draw walls, floor and the player's position and heading.

    Pixels that fall outside the frame are left out.
    """
    for map_y, row in enumerate(map_data.grid[: map_data.height]):
        for map_x, tile in enumerate(row[: map_data.width]):
            color = WALL_COLOR if tile == "1" else map_data.color_floor
            _draw_tile(frame, map_x, map_y, color)
    _draw_player(frame, player)