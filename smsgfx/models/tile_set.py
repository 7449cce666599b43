#!/usr/bin/env python3
"""
Tile set model
Ordered tiles laid out on a grid of tile_width columns
"""

import math
from typing import List, Optional, Sequence

import numpy as np

from ..constants import (
    DEFAULT_TILE_WIDTH,
    MAX_COLOUR_INDEX,
    PIXELS_PER_TILE,
    TILE_HEIGHT,
    TILE_WIDTH,
)
from ..exceptions import OutOfRangeError, ValidationError
from ..tile_utils import encode_planar_tiles, split_planar_tiles
from .base_model import ItemListModel
from .tile import Tile
from .tile_grid_provider import TileGridProvider, TileProviderInfo


class TileSet(TileGridProvider):
    """
    Ordered collection of tiles with 2-D pixel addressing.

    Pixel (x, y) lives in tile (y // 8) * tile_width + x // 8 at byte
    (y % 8) * 8 + x % 8. Geometry is recomputed by every method that
    changes the tile count or the width.
    """

    def __init__(self, tile_width: int = DEFAULT_TILE_WIDTH, tiles: Optional[Sequence[Tile]] = None):
        _check_width(tile_width)
        self._tile_width = tile_width
        self._tiles: List[Tile] = []
        self._tile_height = 0
        self._total_pixels = 0
        for tile in tiles or []:
            self._tiles.append(self._claim(tile))
        self._recalculate()

    def __len__(self):
        return len(self._tiles)

    def __iter__(self):
        return iter(list(self._tiles))

    def __eq__(self, other):
        if not isinstance(other, TileSet):
            return NotImplemented
        return self._tile_width == other._tile_width and self._tiles == other._tiles

    def __repr__(self):
        return f"TileSet(tile_width={self._tile_width}, tile_count={len(self._tiles)})"

    # Geometry

    @property
    def tile_width(self) -> int:
        return self._tile_width

    @tile_width.setter
    def tile_width(self, value: int):
        _check_width(value)
        self._tile_width = value
        self._recalculate()

    @property
    def tile_height(self) -> int:
        return self._tile_height

    @property
    def total_pixels(self) -> int:
        return self._total_pixels

    @property
    def tile_count(self) -> int:
        return len(self._tiles)

    @property
    def column_count(self) -> int:
        return self._tile_width

    @column_count.setter
    def column_count(self, value: int):
        self.tile_width = value

    @property
    def row_count(self) -> int:
        return self._tile_height

    def _recalculate(self):
        self._tile_height = math.ceil(len(self._tiles) / self._tile_width)
        self._total_pixels = self.width_px * self.height_px

    def _claim(self, tile: Tile) -> Tile:
        if not isinstance(tile, Tile):
            raise ValidationError(f"Expected Tile, got {type(tile).__name__}")
        if tile._owner is self:
            raise ValidationError("Tile already belongs to this tile set")
        if tile._owner is not None:
            raise ValidationError("Tile belongs to another tile set, add a copy instead")
        tile._owner = self
        return tile

    @staticmethod
    def _release(tile: Tile) -> Tile:
        tile._owner = None
        return tile

    # Structure

    def get_tile(self, index: int) -> Tile:
        self._check_tile_index(index)
        return self._tiles[index]

    def get_tiles(self) -> List[Tile]:
        return list(self._tiles)

    def get_tile_index(self, tile: Tile) -> Optional[int]:
        for i, existing in enumerate(self._tiles):
            if existing is tile:
                return i
        return None

    def add_tile(self, tile: Tile) -> int:
        self._tiles.append(self._claim(tile))
        self._recalculate()
        return len(self._tiles) - 1

    def add_tiles(self, tiles: Sequence[Tile]):
        for tile in tiles:
            self._tiles.append(self._claim(tile))
        self._recalculate()

    def insert_tile_at(self, tile: Tile, index: int):
        if index < 0 or index > len(self._tiles):
            raise OutOfRangeError(f"Insert index {index} is out of range")
        self._tiles.insert(index, self._claim(tile))
        self._recalculate()

    def remove_tile(self, index: int) -> Tile:
        self._check_tile_index(index)
        tile = self._release(self._tiles.pop(index))
        self._recalculate()
        return tile

    def set_tile(self, index: int, tile: Tile):
        self._check_tile_index(index)
        if self._tiles[index] is not tile:
            self._claim(tile)
            self._release(self._tiles[index])
            self._tiles[index] = tile

    def clear(self):
        for tile in self._tiles:
            self._release(tile)
        self._tiles = []
        self._recalculate()

    def fill_from_array(self, source: Sequence[int], index: int = 0, length: Optional[int] = None):
        """
        Append tiles read from consecutive 64 byte chunks of source.

        Args:
            source: Pixel values, one byte per pixel
            index: First element of source to read
            length: Number of elements to read, defaults to the rest of source
        """
        if index < 0 or (len(source) > 0 and index >= len(source)):
            raise OutOfRangeError(f"Index {index} is out of range for a source of length {len(source)}")
        end = len(source) if length is None else min(len(source), index + length)
        for offset in range(index, end, PIXELS_PER_TILE):
            chunk = source[offset:min(offset + PIXELS_PER_TILE, end)]
            self._tiles.append(self._claim(Tile(chunk)))
        self._recalculate()

    @classmethod
    def from_array(cls, source: Sequence[int], tile_width: int = DEFAULT_TILE_WIDTH) -> 'TileSet':
        tile_set = cls(tile_width)
        if len(source) > 0:
            tile_set.fill_from_array(source)
        return tile_set

    @classmethod
    def parse_planar_format(cls, data: Sequence[int], tile_width: int = DEFAULT_TILE_WIDTH) -> 'TileSet':
        """Create a tile set from a planar stream, 32 bytes per tile"""
        tile_set = cls(tile_width)
        tile_set.add_tiles([Tile.parse_planar_format(group) for group in split_planar_tiles(data)])
        return tile_set

    def to_planar_format(self) -> bytes:
        return encode_planar_tiles(tile.read_all() for tile in self._tiles)

    # Pixel addressing

    def get_tile_index_by_coordinate(self, x: int, y: int) -> Optional[int]:
        """Tile index under a pixel, None when the cell has no tile"""
        self._check_coordinate(x, y)
        tile_index = (y // TILE_HEIGHT) * self._tile_width + (x // TILE_WIDTH)
        return tile_index if tile_index < len(self._tiles) else None

    def get_tile_by_coordinate(self, x: int, y: int) -> Optional[Tile]:
        tile_index = self.get_tile_index_by_coordinate(x, y)
        return None if tile_index is None else self._tiles[tile_index]

    def get_pixel_at(self, x: int, y: int) -> Optional[int]:
        """
        Read the palette index at a pixel.

        Returns:
            Palette index, or None when the pixel falls in the empty part
            of a partially filled last row
        """
        tile = self.get_tile_by_coordinate(x, y)
        if tile is None:
            return None
        return tile.read_at((y % TILE_HEIGHT) * TILE_WIDTH + (x % TILE_WIDTH))

    def set_pixel_at(self, x: int, y: int, colour_index: int) -> bool:
        """
        Write the palette index at a pixel.

        Returns:
            True if the value was updated, otherwise False

        Raises:
            ValidationError: If colour_index is outside 0-15
            OutOfRangeError: If the pixel is outside the grid
        """
        if colour_index < 0 or colour_index > MAX_COLOUR_INDEX:
            raise ValidationError(f"Palette index must be between 0 and {MAX_COLOUR_INDEX}, got {colour_index}")
        tile = self.get_tile_by_coordinate(x, y)
        if tile is None:
            return False
        return tile.set_value_at((y % TILE_HEIGHT) * TILE_WIDTH + (x % TILE_WIDTH), colour_index)

    def read_pixels(self) -> np.ndarray:
        """
        All pixels as a (height_px, width_px) array.

        Cells past the last tile read as 0.
        """
        pixels = np.zeros((self.height_px, self.width_px), dtype=np.uint8)
        for index, tile in enumerate(self._tiles):
            row, column = divmod(index, self._tile_width)
            y, x = row * TILE_HEIGHT, column * TILE_WIDTH
            pixels[y:y + TILE_HEIGHT, x:x + TILE_WIDTH] = tile.read_all().reshape(TILE_HEIGHT, TILE_WIDTH)
        return pixels

    def replace_colour_index(self, source_index: int, target_index: int) -> int:
        return sum(tile.replace_colour_index(source_index, target_index) for tile in self._tiles)

    def swap_colour_index(self, first_index: int, second_index: int) -> int:
        return sum(tile.swap_colour_index(first_index, second_index) for tile in self._tiles)

    def copy(self) -> 'TileSet':
        return TileSet(self._tile_width, [tile.copy() for tile in self._tiles])

    # TileGridProvider

    def get_tile_info_by_index(self, tile_index: int) -> Optional[TileProviderInfo]:
        if tile_index < 0:
            raise OutOfRangeError(f"Tile index {tile_index} is out of range")
        if tile_index >= len(self._tiles):
            return None
        row, column = divmod(tile_index, self._tile_width)
        return TileProviderInfo(tile_index=tile_index, row=row, column=column)

    # Validation

    def _check_tile_index(self, index: int):
        if index < 0 or index >= len(self._tiles):
            raise OutOfRangeError(f"Tile index {index} is out of range (0-{len(self._tiles) - 1})")

    def _check_coordinate(self, x: int, y: int):
        if x < 0 or x >= self.width_px or y < 0 or y >= self.height_px:
            raise OutOfRangeError(
                f"Pixel ({x}, {y}) is outside the tile set ({self.width_px}x{self.height_px})")


class TileSetList(ItemListModel):
    """Observable list of tile sets"""

    item_type = TileSet
    item_name = 'tile set'

    def get_tile_set(self, index: int) -> TileSet:
        return self.get_at(index)

    def get_tile_sets(self) -> List[TileSet]:
        return self.get_all()

    def add_tile_set(self, tile_set: TileSet) -> int:
        return self.add(tile_set)


def _check_width(value: int):
    if not isinstance(value, int) or value < 1:
        raise ValidationError(f"Tile width must be a positive integer, got {value!r}")
