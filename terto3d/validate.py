"""Checks that a parsed map is complete, closed and playable."""

from __future__ import annotations

import io
import os
from typing import Callable, Iterator, Optional, Sequence, Union

from .mapfile import MapData, MapError

FLOOD_LIMIT = 4000
MIN_FLOOD_CELLS = 5

_HEADER_PREFIXES = ("NO ", "SO ", "WE ", "EA ", "F ", "C ")
_MAP_CHARS = frozenset("01NSEWD ")
_PLAYER_CHARS = frozenset("NSEW")
_WALKABLE = frozenset("0NSEWD")
_PNG_SIGNATURE = b"\x89PNG\r\n\x1a\n"

TextureCheck = Callable[[str], bool]


def _file_lines(path: Union[str, os.PathLike]) -> Iterator[str]:
    try:
        with open(path, "rb") as handle:
            data = handle.read()
    except OSError as exc:
        raise MapError(f"cannot open map file {os.fspath(path)!r}: {exc}") from exc
    yield from io.StringIO(data.decode("latin-1"), newline="\n")


def _is_header_line(line: str) -> bool:
    return line.startswith(_HEADER_PREFIXES) or line.startswith("\n")


def _check_map_line(line: str) -> None:
    for position, char in enumerate(line.split("\n", 1)[0]):
        if char == "\r":
            continue
        if char not in _MAP_CHARS:
            raise MapError(
                f"invalid character {char!r} (ascii {ord(char)}) "
                f"at position {position}"
            )


def prevalidate_map_file(path: Union[str, os.PathLike]) -> None:
    """Reject a map file holding characters that cannot appear in a map.

    Header lines (textures, colours) and empty lines are skipped; carriage
    returns are ignored.
    """
    for line in _file_lines(path):
        if not _is_header_line(line):
            _check_map_line(line)


def validate_player_start(grid: Sequence[str]) -> tuple[int, int]:
    """Return the ``(x, y)`` of the single player start in ``grid``."""
    starts = [
        (x, y)
        for y, row in enumerate(grid)
        for x, char in enumerate(row)
        if char in _PLAYER_CHARS
    ]
    if len(starts) != 1:
        raise MapError(f"expected exactly one player start, found {len(starts)}")
    return starts[-1]


def validate_walls(grid: Sequence[str], start_x: int, start_y: int) -> None:
    """Flood fill from the start and fail if the area is open or too big.

    Every step, walls included, counts toward a limit of 4000 visits; the
    fill also has to make at least five visits.
    """
    cells = [list(row) for row in grid]
    visits = 0
    leaked = False
    pending = [(start_x, start_y)]
    while pending:
        x, y = pending.pop()
        if not 0 <= y < len(cells) or not 0 <= x < len(cells[y]):
            leaked = True
            break
        if visits >= FLOOD_LIMIT:
            break
        visits += 1
        char = cells[y][x]
        if char in ("1", "V"):
            continue
        if char not in _WALKABLE:
            leaked = True
            break
        cells[y][x] = "V"
        # Pushed in reverse so the right neighbour is explored first.
        pending.extend(((x, y - 1), (x, y + 1), (x - 1, y), (x + 1, y)))
    if leaked or visits < MIN_FLOOD_CELLS or visits >= FLOOD_LIMIT:
        raise MapError("map is not valid")


def validate_rgb_format(color: int, label: str) -> None:
    """Fail unless ``color`` is an RGBA value with full alpha."""
    alpha = color & 0xFF
    if alpha != 0xFF:
        raise MapError(f"{label} alpha not valid: {alpha:02X}")
    channels = ((color >> 24) & 0xFF, (color >> 16) & 0xFF, (color >> 8) & 0xFF)
    if any(not 0 <= value <= 255 for value in channels):
        raise MapError(f"{label} color out of range: {channels}")


def _png_readable(path: str) -> bool:
    try:
        with open(path, "rb") as handle:
            return handle.read(len(_PNG_SIGNATURE)) == _PNG_SIGNATURE
    except OSError:
        return False


def validate_colors_and_textures(
    map_data: MapData, texture_loads: Optional[TextureCheck] = None
) -> None:
    """Check that all four textures load and both colours are valid.

    ``texture_loads`` tells whether a texture path can be loaded; by default
    the file has to exist and start with the PNG signature.
    """
    check = texture_loads or _png_readable
    paths = (
        map_data.texture_no,
        map_data.texture_so,
        map_data.texture_we,
        map_data.texture_ea,
    )
    if any(path is None for path in paths):
        raise MapError("not enough textures")
    for path in paths:
        if not check(path):
            raise MapError(f"can't load texture: {path}")
    validate_rgb_format(map_data.color_floor, "floor")
    validate_rgb_format(map_data.color_ceiling, "ceiling")


def validate_map(
    map_data: MapData, texture_loads: Optional[TextureCheck] = None
) -> tuple[int, int]:
    """Run every check on a parsed map and return the player start."""
    validate_colors_and_textures(map_data, texture_loads)
    start_x, start_y = validate_player_start(map_data.grid)
    validate_walls(map_data.grid, start_x, start_y)
    return start_x, start_y