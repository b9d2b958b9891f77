"""The game: state, key handling, per-frame update and the window loop."""

from __future__ import annotations

import enum
import os
import sys
from array import array
from typing import Optional, Sequence, Union

import pygame

from .animation import LIGHT_FRAME_PATHS, UI_FRAME_PATHS, LightAnimation, UiAnimation
from .loader import format_map, load_map
from .mapfile import MapData, MapError
from .minimap import draw_minimap
from .player import (
    HEIGHT,
    MINIMAP_SCALE,
    MOVE_SPEED,
    ROT_SPEED,
    WIDTH,
    Player,
    spawn_player,
    strafe,
    walk,
)
from .raycast import Frame, Texture, WallTextures, render_frame
from .validate import validate_map

WINDOW_TITLE = "Terto3D"
DOOR_TEXTURE_PATHS = tuple(f"./textures/door{i}.png" for i in range(4))
FRAMES_PER_SECOND = 60
KEY_REPEAT_DELAY_MS = 300
KEY_REPEAT_INTERVAL_MS = 30


class Key(enum.Enum):
    """Keys the game reacts to; OTHER stands for any other key."""

    ESCAPE = "escape"
    W = "w"
    S = "s"
    A = "a"
    D = "d"
    Q = "q"
    E = "e"
    ONE = "1"
    TWO = "2"
    OTHER = "other"


class KeyAction(enum.Enum):
    PRESS = "press"
    RELEASE = "release"
    REPEAT = "repeat"


_PYGAME_KEYS = {
    pygame.K_ESCAPE: Key.ESCAPE,
    pygame.K_w: Key.W,
    pygame.K_s: Key.S,
    pygame.K_a: Key.A,
    pygame.K_d: Key.D,
    pygame.K_q: Key.Q,
    pygame.K_e: Key.E,
    pygame.K_1: Key.ONE,
    pygame.K_2: Key.TWO,
}


class Game:
    """Everything one running game holds."""

    def __init__(
        self,
        map_data: MapData,
        player: Player,
        textures: Optional[WallTextures] = None,
        ui: Optional[UiAnimation] = None,
        light: Optional[LightAnimation] = None,
    ) -> None:
        self.map_data = map_data
        self.player = player
        self.textures = textures if textures is not None else WallTextures()
        self.ui = ui
        self.light = light
        self.solid_walls = True
        self.running = True
        self.move_speed = MOVE_SPEED
        minimap_height = map_data.height * MINIMAP_SCALE + 10
        self.frame = Frame(WIDTH, HEIGHT + minimap_height)

    def handle_key(self, key: Key, action: KeyAction) -> None:
        """React to a key event: quit, move, turn, strafe or toggle."""
        if key is Key.ESCAPE and action is KeyAction.PRESS:
            self.running = False
            return
        if action not in (KeyAction.PRESS, KeyAction.REPEAT):
            return
        if key is Key.W:
            walk(self.map_data, self.player, 1, self.move_speed, self.solid_walls)
        elif key is Key.S:
            walk(self.map_data, self.player, -1, self.move_speed, self.solid_walls)
        if key is Key.E:
            self.player.rotate(ROT_SPEED)
        elif key is Key.Q:
            self.player.rotate(-ROT_SPEED)
        if key is Key.D:
            strafe(self.map_data, self.player, 1, self.move_speed, self.solid_walls)
        elif key is Key.A:
            strafe(self.map_data, self.player, -1, self.move_speed, self.solid_walls)
        if self.ui is not None:
            self.ui.start()
        if action is KeyAction.PRESS:
            if key is Key.ONE:
                self.toggle_solid_walls()
            elif key is Key.TWO and self.light is not None:
                self.light.restart()

    def toggle_solid_walls(self) -> bool:
        """Switch wall collision on or off and return the new setting."""
        self.solid_walls = not self.solid_walls
        state = "activated" if self.solid_walls else "deactivated"
        print(f"Solid wall: {state}.")
        return self.solid_walls

    def update(self) -> None:
        """Render the view, advance the animations and draw the minimap."""
        render_frame(self.frame, self.map_data, self.player, self.textures)
        if self.ui is not None:
            self.ui.tick()
        if self.light is not None:
            self.light.tick()
        draw_minimap(self.frame, self.map_data, self.player)


def _load_surface(path: Union[str, os.PathLike]) -> "pygame.Surface":
    try:
        return pygame.image.load(os.fspath(path))
    except (pygame.error, OSError) as exc:
        raise MapError(f"can't load image {os.fspath(path)}: {exc}") from exc


def load_texture(path: Union[str, os.PathLike]) -> Texture:
    """Load an image file as an RGBA :class:`Texture`."""
    surface = _load_surface(path)
    width, height = surface.get_size()
    return Texture(width, height, pygame.image.tobytes(surface, "RGBA"))


def _load_wall_textures(map_data: MapData) -> WallTextures:
    doors = [load_texture(path) for path in DOOR_TEXTURE_PATHS]
    return WallTextures(
        north=load_texture(map_data.texture_no),
        south=load_texture(map_data.texture_so),
        west=load_texture(map_data.texture_we),
        east=load_texture(map_data.texture_ea),
        door=doors[0],
    )


def _present(screen: "pygame.Surface", game: Game) -> None:
    data = array("I", game.frame.pixels)
    if sys.byteorder == "little":
        data.byteswap()
    view = pygame.image.frombuffer(
        data.tobytes(), (game.frame.width, game.frame.height), "RGBA"
    )
    screen.blit(view, (0, 0))
    if game.light is not None:
        screen.blit(game.light.frame, (0, 0))
    if game.ui is not None:
        overlay = game.ui.frame
        screen.blit(
            overlay,
            ((WIDTH - overlay.get_width()) // 2, HEIGHT - overlay.get_height()),
        )


def _run(map_data: MapData, player: Player) -> int:
    game = Game(map_data, player)
    screen = pygame.display.set_mode((game.frame.width, game.frame.height))
    pygame.display.set_caption(WINDOW_TITLE)
    game.textures = _load_wall_textures(map_data)
    game.ui = UiAnimation([_load_surface(path) for path in UI_FRAME_PATHS])
    game.light = LightAnimation([_load_surface(path) for path in LIGHT_FRAME_PATHS])
    pygame.key.set_repeat(KEY_REPEAT_DELAY_MS, KEY_REPEAT_INTERVAL_MS)
    clock = pygame.time.Clock()
    held: set[int] = set()
    while game.running:
        for event in pygame.event.get():
            if event.type == pygame.QUIT:
                game.running = False
            elif event.type == pygame.KEYDOWN:
                action = KeyAction.REPEAT if event.key in held else KeyAction.PRESS
                held.add(event.key)
                game.handle_key(_PYGAME_KEYS.get(event.key, Key.OTHER), action)
            elif event.type == pygame.KEYUP:
                held.discard(event.key)
                game.handle_key(
                    _PYGAME_KEYS.get(event.key, Key.OTHER), KeyAction.RELEASE
                )
        if not game.running:
            break
        game.update()
        _present(screen, game)
        pygame.display.flip()
        clock.tick(FRAMES_PER_SECOND)
    return 0


def main(argv: Optional[Sequence[str]] = None) -> int:
    """Load the named map from ``maps/`` and play it in a window."""
    args = list(sys.argv[1:] if argv is None else argv)
    if len(args) != 1:
        return 1
    try:
        map_data = load_map(args[0])
        print(format_map(map_data), end="")
        validate_map(map_data)
        player = spawn_player(map_data)
    except MapError as exc:
        print(f"Error: {exc}", file=sys.stderr)
        return 1
    pygame.init()
    try:
        return _run(map_data, player)
    except MapError as exc:
        print(f"Error: {exc}", file=sys.stderr)
        return 1
    finally:
        pygame.quit()