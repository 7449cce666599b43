#!/usr/bin/env python3
"""
Tile grid capability interface

Anything that lays tiles out on a grid (a tile set, a tile map) implements
TileGridProvider so callers can query it without caring which it is.
"""

from abc import ABC, abstractmethod
from dataclasses import dataclass
from typing import List, Optional

from ..constants import TILE_HEIGHT, TILE_WIDTH
from ..exceptions import OutOfRangeError


@dataclass(frozen=True)
class TileProviderInfo:
    """Where a grid cell points"""
    tile_index: int
    row: int
    column: int
    palette: Optional[int] = None
    horizontal_flip: bool = False
    vertical_flip: bool = False
    priority: bool = False


class TileGridProvider(ABC):
    """Grid of tiles addressed by index, row/column or pixel"""

    @property
    @abstractmethod
    def tile_count(self) -> int:
        pass

    @property
    @abstractmethod
    def column_count(self) -> int:
        pass

    @property
    @abstractmethod
    def row_count(self) -> int:
        pass

    @abstractmethod
    def get_tile_info_by_index(self, tile_index: int) -> Optional[TileProviderInfo]:
        """Info for the cell at a linear position, None past the last tile"""

    def get_tile_info_by_row_and_column(self, row: int, column: int) -> Optional[TileProviderInfo]:
        if row < 0 or row >= self.row_count or column < 0 or column >= self.column_count:
            raise OutOfRangeError(f"Cell ({row}, {column}) is outside the grid")
        return self.get_tile_info_by_index(row * self.column_count + column)

    def get_tile_info_by_pixel(self, x: int, y: int) -> Optional[TileProviderInfo]:
        return self.get_tile_info_by_row_and_column(y // TILE_HEIGHT, x // TILE_WIDTH)

    def get_tile_id_indexes(self, tile_index: int) -> List[int]:
        """Grid positions whose cell shows the given tile"""
        matches = []
        for position in range(self.tile_count):
            info = self.get_tile_info_by_index(position)
            if info is not None and info.tile_index == tile_index:
                matches.append(position)
        return matches

    @property
    def width_px(self) -> int:
        return self.column_count * TILE_WIDTH

    @property
    def height_px(self) -> int:
        return self.row_count * TILE_HEIGHT
