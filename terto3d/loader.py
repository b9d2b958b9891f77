"""Locating, checking and describing map files."""

from __future__ import annotations

import os
from typing import Union

from .mapfile import MapData, MapError, parse_map
from .validate import prevalidate_map_file

DEFAULT_MAP_DIR = "maps"
MAP_EXTENSION = ".cub"


def resolve_map_path(
    name: str, base_dir: Union[str, os.PathLike] = DEFAULT_MAP_DIR
) -> str:
    """Return the path of map ``name`` inside ``base_dir``.

    The name must end in ``.cub`` and the file must be readable.
    """
    path = os.path.join(os.fspath(base_dir), name)
    if len(path) < 5 or not path.endswith(MAP_EXTENSION):
        raise MapError(f"map does not have extension {MAP_EXTENSION}: {path}")
    try:
        with open(path, "rb"):
            pass
    except OSError as exc:
        raise MapError(f"cannot open the map {path!r}: {exc}") from exc
    return path


def load_map(
    name: str, base_dir: Union[str, os.PathLike] = DEFAULT_MAP_DIR
) -> MapData:
    """Find, pre-check and parse a map by name."""
    path = resolve_map_path(name, base_dir)
    prevalidate_map_file(path)
    return parse_map(path)


def _text(value) -> str:
    return "(null)" if value is None else str(value)


def format_map(map_data: MapData) -> str:
    """Describe a map: its grid, texture paths and colours."""
    parts = [f"\nMap ({map_data.width} x {map_data.height}):\n"]
    parts.extend(f"{row}\n" for row in map_data.grid[: map_data.height])
    parts.append("\n--- Textures ---\n")
    parts.append(f"NO: {_text(map_data.texture_no)}\n")
    parts.append(f"SO: {_text(map_data.texture_so)}\n")
    parts.append(f"WE: {_text(map_data.texture_we)}\n")
    parts.append(f"EA: {_text(map_data.texture_ea)}\n")
    parts.append("\n--- Colors ---\n")
    parts.append(f"Floor:  0x{map_data.color_floor:08X}\n")
    parts.append(f"Ceiling: 0x{map_data.color_ceiling:08X}\n\n")
    return "".join(parts)