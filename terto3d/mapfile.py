"""Reading ``.cub`` map files into a :class:`MapData`."""

from __future__ import annotations

import io
import os
from dataclasses import dataclass, field
from typing import Iterator, Optional, Union

from .textparse import atoi, split_fields, trim

UNSET_COLOR = 0xFFFFFFFF
MAX_MAP_LINES = 1023

_TEXTURE_FIELDS = {
    "NO ": "texture_no",
    "SO ": "texture_so",
    "WE ": "texture_we",
    "EA ": "texture_ea",
}
_COLOR_FIELDS = {
    "F ": "color_floor",
    "C ": "color_ceiling",
}
_GRID_CHARS = frozenset("01NSEWD ")
_MAP_LINE_STARTS = frozenset("10NSEW")


class MapError(Exception):
    """Raised when a map file cannot be read or is not usable."""


@dataclass
class MapData:
    """Textures, colours and the tile grid of one map."""

    texture_no: Optional[str] = None
    texture_so: Optional[str] = None
    texture_we: Optional[str] = None
    texture_ea: Optional[str] = None
    color_floor: int = UNSET_COLOR
    color_ceiling: int = UNSET_COLOR
    grid: list[str] = field(default_factory=list)
    width: int = 0
    height: int = 0

    def tile(self, x: int, y: int) -> str:
        """Return the tile character at column ``x`` of row ``y``."""
        if not 0 <= y < len(self.grid) or not 0 <= x < len(self.grid[y]):
            raise IndexError(f"tile ({x}, {y}) is outside the map")
        return self.grid[y][x]


def parse_rgb(text: str) -> int:
    """Turn ``"R,G,B"`` into a 32-bit RGBA value with full alpha.

    Fewer than three fields give 0.
    """
    fields = split_fields(text, ",")
    if len(fields) < 3:
        return 0
    red, green, blue = (atoi(part) for part in fields[:3])
    return ((red << 24) | (green << 16) | (blue << 8) | 0xFF) & 0xFFFFFFFF


def parse_header_line(map_data: MapData, line: str) -> bool:
    """Store a texture or colour definition found in ``line``.

    Returns True when the line set a field that was still unset.
    """
    line = line.lstrip(" \t")
    for prefix, attribute in _TEXTURE_FIELDS.items():
        if line.startswith(prefix):
            if getattr(map_data, attribute) is not None:
                return False
            setattr(map_data, attribute, trim(line[len(prefix):], " \t\n\r"))
            return True
    for prefix, attribute in _COLOR_FIELDS.items():
        if line.startswith(prefix) and getattr(map_data, attribute) == UNSET_COLOR:
            setattr(map_data, attribute, parse_rgb(line[len(prefix):]))
            return True
    return False


def _read_lines(path: Union[str, os.PathLike]) -> Iterator[str]:
    """Yield the lines of a file, each keeping its trailing newline."""
    try:
        with open(path, "rb") as handle:
            data = handle.read()
    except OSError as exc:
        raise MapError(f"cannot open map file {os.fspath(path)!r}: {exc}") from exc
    yield from io.StringIO(data.decode("latin-1"), newline="\n")


def _is_map_line(line: str) -> bool:
    stripped = line.lstrip(" \t")
    return stripped[:1] in _MAP_LINE_STARTS


def _sanitize_row(row: str, width: int) -> str:
    cleaned = "".join(c if c in _GRID_CHARS else " " for c in row[:width])
    return cleaned.ljust(width)


def parse_map(path: Union[str, os.PathLike]) -> MapData:
    """Read a map file: header definitions first, then grid rows.

    Every grid row is padded with spaces to the widest row, and unknown
    characters become spaces.
    """
    map_data = MapData()
    rows: list[str] = []
    width = 0
    for line in _read_lines(path):
        if parse_header_line(map_data, line) or not _is_map_line(line):
            continue
        if len(rows) >= MAX_MAP_LINES:
            raise MapError(f"map has more than {MAX_MAP_LINES} rows")
        width = max(width, len(line))
        rows.append(line[:-1] if line.endswith("\n") else line)
    map_data.grid = [_sanitize_row(row, width) for row in rows]
    map_data.height = len(rows)
    map_data.width = width
    return map_data