"""Ray casting: walls seen from the player's position, drawn into a frame."""

from __future__ import annotations

import math
from dataclasses import dataclass
from typing import Optional

from .mapfile import MapData
from .player import HEIGHT, WIDTH, Player

_INT_MAX = 2**31 - 1
_HIT_TILES = frozenset("1D")


@dataclass(frozen=True)
class Texture:
    """An RGBA image: four bytes per pixel, rows top to bottom."""

    width: int
    height: int
    pixels: bytes

    def __post_init__(self) -> None:
        if self.width <= 0 or self.height <= 0:
            raise ValueError("texture size must be positive")
        if len(self.pixels) != self.width * self.height * 4:
            raise ValueError(
                f"expected {self.width * self.height * 4} bytes of pixels, "
                f"got {len(self.pixels)}"
            )

    def pixel(self, x: int, y: int) -> int:
        """Return the pixel at ``(x, y)`` as a 32-bit RGBA value."""
        if not 0 <= x < self.width or not 0 <= y < self.height:
            raise IndexError(f"pixel ({x}, {y}) is outside the texture")
        offset = 4 * (y * self.width + x)
        return int.from_bytes(self.pixels[offset:offset + 4], "big")


class Frame:
    """A frame buffer of 32-bit RGBA pixels."""

    def __init__(self, width: int = WIDTH, height: int = HEIGHT) -> None:
        if width <= 0 or height <= 0:
            raise ValueError("frame size must be positive")
        self.width = width
        self.height = height
        self.pixels = [0] * (width * height)

    def _index(self, x: int, y: int) -> int:
        if not 0 <= x < self.width or not 0 <= y < self.height:
            raise IndexError(f"pixel ({x}, {y}) is outside the frame")
        return y * self.width + x

    def put_pixel(self, x: int, y: int, color: int) -> None:
        """Set the pixel at ``(x, y)``."""
        self.pixels[self._index(x, y)] = color & 0xFFFFFFFF

    def get_pixel(self, x: int, y: int) -> int:
        """Return the pixel at ``(x, y)``."""
        return self.pixels[self._index(x, y)]

    def fill_background(self, ceiling: int, floor: int) -> None:
        """Paint the upper half of the view with ``ceiling`` and the rest with ``floor``."""
        columns = min(WIDTH, self.width)
        for y in range(min(HEIGHT, self.height)):
            color = (ceiling if y < HEIGHT // 2 else floor) & 0xFFFFFFFF
            start = y * self.width
            self.pixels[start:start + columns] = [color] * columns


@dataclass
class Ray:
    """State of one ray from the camera, from direction to projected wall."""

    camera_x: float = 0.0
    ray_dir_x: float = 0.0
    ray_dir_y: float = 0.0
    map_x: int = 0
    map_y: int = 0
    side_dist_x: float = 0.0
    side_dist_y: float = 0.0
    delta_dist_x: float = 0.0
    delta_dist_y: float = 0.0
    step_x: int = 0
    step_y: int = 0
    hit: bool = False
    side: int = 0
    perp_wall_dist: float = 0.0
    line_height: int = 0
    draw_start: int = 0
    draw_end: int = 0
    tile: str = "0"


@dataclass
class WallTextures:
    """The textures for each wall face and for doors."""

    north: Optional[Texture] = None
    south: Optional[Texture] = None
    west: Optional[Texture] = None
    east: Optional[Texture] = None
    door: Optional[Texture] = None

    def select(self, tile: str, ray: Ray) -> Optional[Texture]:
        """Pick the texture for the wall face that ``ray`` hit."""
        if tile == "D":
            return self.door
        if ray.side == 0:
            return self.west if ray.ray_dir_x < 0 else self.east
        return self.north if ray.ray_dir_y < 0 else self.south


def _delta(direction: float) -> float:
    return math.inf if direction == 0 else abs(1 / direction)


def _init_steps(ray: Ray, player: Player) -> None:
    if ray.ray_dir_x < 0:
        ray.step_x = -1
        ray.side_dist_x = (player.x - ray.map_x) * ray.delta_dist_x
    else:
        ray.step_x = 1
        ray.side_dist_x = (ray.map_x + 1.0 - player.x) * ray.delta_dist_x
    if ray.ray_dir_y < 0:
        ray.step_y = -1
        ray.side_dist_y = (player.y - ray.map_y) * ray.delta_dist_y
    else:
        ray.step_y = 1
        ray.side_dist_y = (ray.map_y + 1.0 - player.y) * ray.delta_dist_y


def _perform_dda(ray: Ray, grid: list[str]) -> None:
    while not ray.hit:
        if ray.side_dist_x < ray.side_dist_y:
            ray.side_dist_x += ray.delta_dist_x
            ray.map_x += ray.step_x
            ray.side = 0
        else:
            ray.side_dist_y += ray.delta_dist_y
            ray.map_y += ray.step_y
            ray.side = 1
        inside = 0 <= ray.map_y < len(grid) and 0 <= ray.map_x < len(grid[ray.map_y])
        if not inside:
            # Leaving the grid counts as striking a wall.
            ray.tile = "1"
            ray.hit = True
            continue
        tile = grid[ray.map_y][ray.map_x]
        if tile in _HIT_TILES:
            ray.tile = tile
            ray.hit = True


def _project(ray: Ray, player: Player) -> None:
    if ray.side == 0:
        ray.perp_wall_dist = (
            ray.map_x - player.x + (1 - ray.step_x) / 2.0
        ) / ray.ray_dir_x
    else:
        ray.perp_wall_dist = (
            ray.map_y - player.y + (1 - ray.step_y) / 2.0
        ) / ray.ray_dir_y
    if ray.perp_wall_dist > 0:
        ray.line_height = int(HEIGHT / ray.perp_wall_dist)
    else:
        ray.line_height = _INT_MAX
    half = ray.line_height // 2
    ray.draw_start = max(HEIGHT // 2 - half, 0)
    ray.draw_end = min(half + HEIGHT // 2, HEIGHT - 1)


def cast_ray(map_data: MapData, player: Player, column: int) -> Ray:
    """Cast the ray for screen ``column`` and project the wall it hits."""
    camera_x = 2 * column / WIDTH - 1
    ray_dir_x = player.dir_x + player.plane_x * camera_x
    ray_dir_y = player.dir_y + player.plane_y * camera_x
    ray = Ray(
        camera_x=camera_x,
        ray_dir_x=ray_dir_x,
        ray_dir_y=ray_dir_y,
        map_x=int(player.x),
        map_y=int(player.y),
        delta_dist_x=_delta(ray_dir_x),
        delta_dist_y=_delta(ray_dir_y),
    )
    _init_steps(ray, player)
    _perform_dda(ray, map_data.grid)
    _project(ray, player)
    return ray


def texture_x(ray: Ray, player: Player, texture: Texture) -> int:
    """Return the texture column matching where ``ray`` struck the wall."""
    if ray.side == 0:
        wall_x = player.y + ray.perp_wall_dist * ray.ray_dir_y
    else:
        wall_x = player.x + ray.perp_wall_dist * ray.ray_dir_x
    wall_x -= math.floor(wall_x)
    tex_x = int(wall_x * texture.width)
    if ray.side == 0 and ray.ray_dir_x > 0:
        tex_x = texture.width - tex_x - 1
    if ray.side == 1 and ray.ray_dir_y < 0:
        tex_x = texture.width - tex_x - 1
    return tex_x


def draw_column(
    frame: Frame, ray: Ray, texture: Texture, column: int, tex_x: int
) -> None:
    """Draw texture column ``tex_x`` stretched over the wall slice of ``ray``."""
    if not 0 <= tex_x < texture.width or ray.line_height <= 0:
        return
    tex_step = texture.height / ray.line_height
    tex_pos = (ray.draw_start - HEIGHT // 2 + ray.line_height // 2) * tex_step
    for y in range(ray.draw_start, ray.draw_end):
        tex_y = int(tex_pos)
        if 0 <= tex_y < texture.height:
            frame.put_pixel(column, y, texture.pixel(tex_x, tex_y))
        tex_pos += tex_step


def render_frame(
    frame: Frame, map_data: MapData, player: Player, textures: WallTextures
) -> None:
    """Paint the background and every wall column of the view."""
    frame.fill_background(map_data.color_ceiling, map_data.color_floor)
    for column in range(WIDTH):
        ray = cast_ray(map_data, player, column)
        texture = textures.select(ray.tile, ray)
        if texture is None:
            continue
        draw_column(frame, ray, texture, column, texture_x(ray, player, texture))