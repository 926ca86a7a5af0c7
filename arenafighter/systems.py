"""Level maps, sprite sheets and the systems registry."""

from __future__ import annotations

import csv
import os
import re
from dataclasses import dataclass, field
from enum import IntEnum
from typing import Any, Iterable, Mapping, Union

import pygame

from .components import LEVEL_H, LEVEL_W, TILE_SIZE, SpriteID

PathLike = Union[str, "os.PathLike[str]"]

# Column and row of each tile inside the sprite sheet.
_SPRITE_CELLS: dict[SpriteID, tuple[int, int]] = {
    SpriteID.DEFAULT: (10, 7),
    SpriteID.LIGHT_ROCK: (9, 0),
    SpriteID.CRACKED_EARTH_1: (6, 1),
    SpriteID.CRACKED_EARTH_2: (7, 1),
    SpriteID.CRACKED_EARTH_WEEDS_1: (8, 1),
    SpriteID.CRACKED_EARTH_WEEDS_2: (9, 1),
    SpriteID.LIGHT_GRASS: (0, 2),
    SpriteID.DARK_GRASS: (7, 3),
    SpriteID.WATER_LIGHT_1: (0, 10),
    SpriteID.ROCK_WALL_1: (6, 5),
    SpriteID.ROCK_PEAK_1: (9, 5),
}

_INTEGER = re.compile(r"[+-]?[0-9]+")


class SystemID(IntEnum):
    """Identifiers of the game systems."""

    SPRITE_LOADER = 0


@dataclass
class SystemsManager:
    """Keeps the list of active systems."""

    systems_index: list[SystemID] = field(default_factory=list)


def _blank_map() -> list[list[SpriteID]]:
    return [[SpriteID.DEFAULT] * LEVEL_H for _ in range(LEVEL_W)]


@dataclass
class Level:
    """A fixed-size grid of tiles."""

    width: int = LEVEL_W
    height: int = LEVEL_H
    tile_size: int = TILE_SIZE
    map: list[list[SpriteID]] = field(default_factory=_blank_map)

    def size(self) -> tuple[int, int]:
        """Return the level's width and height in tiles."""
        return self.width, self.height


class SpriteSheet:
    """Images for each sprite id."""

    def __init__(self, tiles: Mapping[SpriteID, Iterable[Any]] | None = None) -> None:
        self._tiles: dict[SpriteID, tuple[Any, ...]] = {
            SpriteID(sprite_id): tuple(images)
            for sprite_id, images in (tiles or {}).items()
        }

    def images(self, sprite_id: SpriteID) -> tuple[Any, ...]:
        """Return the images of a sprite id, empty if it has none."""
        return self._tiles.get(sprite_id, ())

    def __contains__(self, sprite_id: object) -> bool:
        return sprite_id in self._tiles

    def __len__(self) -> int:
        return len(self._tiles)


def load_sprite_sheet(path: PathLike, tile_size: int = TILE_SIZE) -> SpriteSheet:
    """Load a sprite sheet image and cut out the known tiles."""
    if tile_size <= 0:
        raise ValueError(f"tile size must be positive, got {tile_size}")
    sheet = pygame.image.load(os.fspath(path))
    bounds = sheet.get_rect()
    tiles: dict[SpriteID, list[Any]] = {}
    for sprite_id, (column, row) in _SPRITE_CELLS.items():
        cell = pygame.Rect(column * tile_size, row * tile_size, tile_size, tile_size)
        if not bounds.contains(cell):
            raise ValueError(
                f"sprite sheet of size {bounds.size} has no tile at column {column}, row {row}"
            )
        tiles.setdefault(sprite_id, []).append(sheet.subsurface(cell))
    return SpriteSheet(tiles)


def _parse_tile(cell: str) -> SpriteID:
    if not _INTEGER.fullmatch(cell):
        return SpriteID.DEFAULT
    try:
        return SpriteID(int(cell))
    except ValueError:
        return SpriteID.DEFAULT


def load_map(path: PathLike) -> Level:
    """Read a square CSV tile map and centre it in a new level."""
    with open(path, newline="", encoding="utf-8") as handle:
        rows = [row for row in csv.reader(handle) if row]
    if not rows:
        raise ValueError(f"map {os.fspath(path)!r} is empty")
    columns = len(rows[0])
    if any(len(row) != columns for row in rows):
        raise ValueError("wrong number of fields in map row")
    if len(rows) != columns:
        raise ValueError(f"map must be square, got {len(rows)} rows of {columns}")
    if columns > LEVEL_W or len(rows) > LEVEL_H:
        raise ValueError(f"map of size {columns} does not fit into {LEVEL_W}x{LEVEL_H}")

    level = Level()
    row_offset = (LEVEL_W - columns) // 2
    column_offset = (LEVEL_H - len(rows)) // 2
    for x, row in enumerate(rows):
        for y, cell in enumerate(row):
            level.map[x + row_offset][y + column_offset] = _parse_tile(cell)
    return level