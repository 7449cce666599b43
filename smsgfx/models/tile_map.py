#!/usr/bin/env python3
"""
Tile map models
A tile map arranges references to tile set tiles into a screen layout
"""

import math
from dataclasses import dataclass, replace
from typing import List, Optional, Sequence

from ..constants import MAX_TILE_MAP_INDEX, PALETTE_INDEXES
from ..exceptions import OutOfRangeError, ValidationError
from .base_model import ItemListModel, generate_id
from .tile_grid_provider import TileGridProvider, TileProviderInfo
from .tile_set import TileSet


@dataclass
class TileMapTile:
    """One name table entry"""
    tile_index: int = 0
    palette: int = 0
    priority: bool = False
    horizontal_flip: bool = False
    vertical_flip: bool = False

    def __post_init__(self):
        if not 0 <= self.tile_index <= MAX_TILE_MAP_INDEX:
            raise ValidationError(f"Tile index must be between 0 and {MAX_TILE_MAP_INDEX}, got {self.tile_index}")
        if self.palette not in PALETTE_INDEXES:
            raise ValidationError(f"Palette must be 0 or 1, got {self.palette!r}")


class TileMap(TileGridProvider):
    """Grid of tile references with a fixed column count"""

    def __init__(self, columns: int = 32, rows: int = 0, tile_map_id: Optional[str] = None,
                 title: Optional[str] = None, vram_offset: int = 0, optimise: bool = False,
                 tiles: Optional[Sequence[TileMapTile]] = None):
        if columns < 1:
            raise ValidationError(f"Column count must be positive, got {columns}")
        self.tile_map_id = tile_map_id or generate_id()
        self.title = title
        self.vram_offset = vram_offset
        self.optimise = optimise
        self._columns = columns
        if tiles is not None:
            self._tiles = [replace(tile) for tile in tiles]
        else:
            self._tiles = [TileMapTile() for _ in range(columns * rows)]

    def __eq__(self, other):
        if not isinstance(other, TileMap):
            return NotImplemented
        return (self.tile_map_id, self.title, self.vram_offset, self.optimise, self._columns, self._tiles) == \
               (other.tile_map_id, other.title, other.vram_offset, other.optimise, other._columns, other._tiles)

    def __repr__(self):
        return f"TileMap(id={self.tile_map_id!r}, columns={self._columns}, rows={self.row_count})"

    @classmethod
    def from_tile_set(cls, tile_set: TileSet, palette: int = 0, vram_offset: int = 0,
                      title: Optional[str] = None) -> 'TileMap':
        """
        Lay out every tile of a tile set in order, one cell per tile.

        The map has the tile set's width in columns. Each cell points at
        its tile's position plus vram_offset and uses the given palette.

        Raises:
            ValidationError: If palette is not 0 or 1, vram_offset is
                negative, or a cell's tile index would pass 511
        """
        if palette not in PALETTE_INDEXES:
            raise ValidationError(f"Palette must be 0 or 1, got {palette!r}")
        if vram_offset < 0:
            raise ValidationError(f"VRAM offset must not be negative, got {vram_offset}")
        tiles = [TileMapTile(tile_index=index + vram_offset, palette=palette)
                 for index in range(tile_set.tile_count)]
        return cls(tile_set.tile_width, title=title, vram_offset=vram_offset, tiles=tiles)

    @property
    def tile_count(self) -> int:
        return len(self._tiles)

    @property
    def column_count(self) -> int:
        return self._columns

    @property
    def row_count(self) -> int:
        return math.ceil(len(self._tiles) / self._columns)

    @property
    def tiles(self) -> List[TileMapTile]:
        return list(self._tiles)

    def get_tile(self, index: int) -> TileMapTile:
        self._check_index(index)
        return self._tiles[index]

    def set_tile(self, index: int, tile: TileMapTile):
        self._check_index(index)
        self._tiles[index] = tile

    def get_tile_by_row_and_column(self, row: int, column: int) -> TileMapTile:
        if column < 0 or column >= self._columns:
            raise OutOfRangeError(f"Column {column} is out of range")
        return self.get_tile(row * self._columns + column)

    def get_tile_map_row(self, row: int) -> List[TileMapTile]:
        if row < 0 or row >= self.row_count:
            raise OutOfRangeError(f"Row {row} is out of range")
        start = row * self._columns
        return self._tiles[start:start + self._columns]

    def get_tile_info_by_index(self, tile_index: int) -> Optional[TileProviderInfo]:
        if tile_index < 0:
            raise OutOfRangeError(f"Tile index {tile_index} is out of range")
        if tile_index >= len(self._tiles):
            return None
        tile = self._tiles[tile_index]
        row, column = divmod(tile_index, self._columns)
        return TileProviderInfo(tile_index=tile.tile_index, row=row, column=column,
                                palette=tile.palette, horizontal_flip=tile.horizontal_flip,
                                vertical_flip=tile.vertical_flip, priority=tile.priority)

    def copy(self) -> 'TileMap':
        return TileMap(self._columns, tile_map_id=self.tile_map_id, title=self.title,
                       vram_offset=self.vram_offset, optimise=self.optimise, tiles=self._tiles)

    def _check_index(self, index: int):
        if index < 0 or index >= len(self._tiles):
            raise OutOfRangeError(f"Tile map index {index} is out of range")


class TileMapList(ItemListModel):
    """Observable list of tile maps, addressable by id"""

    item_type = TileMap
    item_name = 'tile map'

    def get_tile_maps(self) -> List[TileMap]:
        return self.get_all()

    def add_tile_map(self, tile_map: TileMap) -> int:
        if self.get_tile_map_by_id(tile_map.tile_map_id) is not None:
            raise ValidationError(f"Tile map id {tile_map.tile_map_id!r} is already in the list")
        return self.add(tile_map)

    def get_tile_map_by_id(self, tile_map_id: str) -> Optional[TileMap]:
        for tile_map in self._items:
            if tile_map.tile_map_id == tile_map_id:
                return tile_map
        return None

    def remove_by_id(self, tile_map_id: str) -> TileMap:
        for i, tile_map in enumerate(self._items):
            if tile_map.tile_map_id == tile_map_id:
                return self.remove_at(i)
        raise OutOfRangeError(f"No tile map with id {tile_map_id!r}")
