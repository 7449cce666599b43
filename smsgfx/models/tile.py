#!/usr/bin/env python3
"""
Tile model
An 8x8 block of palette indexes stored as 64 bytes
"""

from typing import Optional, Sequence

import numpy as np

from ..constants import MAX_PIXEL_VALUE, PIXELS_PER_TILE, TILE_HEIGHT, TILE_WIDTH
from ..exceptions import FormatError, OutOfRangeError, ValidationError
from ..tile_utils import bytes_to_hex, decode_planar_tile, encode_planar_tile, hex_to_bytes


class Tile:
    """
    A single 8x8 tile.

    Pixels are addressed either by linear index (0-63) or by x, y
    coordinate (0-7). Values are raw bytes; palette indexes use 0-15.
    """

    def __init__(self, data: Optional[Sequence[int]] = None):
        self._data = np.zeros(PIXELS_PER_TILE, dtype=np.uint8)
        # Tile set holding this tile, a tile belongs to at most one
        self._owner = None
        if data is not None:
            self.fill_from_array(data)

    def __eq__(self, other):
        if not isinstance(other, Tile):
            return NotImplemented
        return bool(np.array_equal(self._data, other._data))

    def __repr__(self):
        return f"Tile({self.to_hex_string()!r})"

    def __len__(self):
        return PIXELS_PER_TILE

    @property
    def data(self) -> np.ndarray:
        """Read-only view over the pixel buffer"""
        view = self._data.view()
        view.flags.writeable = False
        return view

    def fill_from_array(self, source: Sequence[int], index: int = 0,
                        length: int = PIXELS_PER_TILE):
        """
        Replace the tile contents from a source sequence.

        The buffer is cleared first, so a short read leaves the trailing
        pixels at 0.

        Args:
            source: Byte values to read from
            index: First element of source to read
            length: Maximum number of values to copy (0-64)

        Raises:
            ValidationError: If source is empty or holds a value outside 0-255
            OutOfRangeError: If index or length is out of range
        """
        if source is None or len(source) == 0:
            raise ValidationError("Source array must not be empty")
        if index < 0 or index >= len(source):
            raise OutOfRangeError(f"Index {index} is out of range for a source of length {len(source)}")
        if length < 0 or length > PIXELS_PER_TILE:
            raise OutOfRangeError(f"Length must be between 0 and {PIXELS_PER_TILE}, got {length}")

        values = [int(v) for v in source[index:index + length]]
        for value in values:
            _check_value(value)

        self._data[:] = 0
        self._data[:len(values)] = values

    def read_at(self, index: int) -> int:
        """Read the byte at a linear index (0-63)"""
        _check_index(index)
        return int(self._data[index])

    def set_value_at(self, index: int, value: int) -> bool:
        """
        Write the byte at a linear index.

        Returns:
            True when the stored value changed
        """
        _check_index(index)
        _check_value(value)
        if self._data[index] == value:
            return False
        self._data[index] = value
        return True

    def read_at_coord(self, x: int, y: int) -> int:
        _check_coord(x, y)
        return self.read_at(y * TILE_WIDTH + x)

    def set_value_at_coord(self, x: int, y: int, value: int) -> bool:
        _check_coord(x, y)
        return self.set_value_at(y * TILE_WIDTH + x, value)

    def read_all(self) -> np.ndarray:
        """Copy of all 64 values"""
        return self._data.copy()

    def read_from(self, start: int, end: int) -> np.ndarray:
        """Copy of the values in [start, end)"""
        if start < 0 or end > PIXELS_PER_TILE or start > end:
            raise OutOfRangeError(f"Range {start}:{end} is outside the tile")
        return self._data[start:end].copy()

    def set_data(self, data: Sequence[int]):
        """Replace all 64 values at once"""
        if len(data) != PIXELS_PER_TILE:
            raise ValidationError(f"Expected {PIXELS_PER_TILE} values, got {len(data)}")
        self.fill_from_array(data)

    def clear(self):
        self._data[:] = 0

    def copy(self) -> 'Tile':
        tile = Tile()
        tile._data[:] = self._data
        return tile

    def replace_colour_index(self, source_index: int, target_index: int) -> int:
        """
        Replace every occurrence of one palette index with another.

        Returns:
            Number of pixels changed
        """
        _check_value(source_index)
        _check_value(target_index)
        if source_index == target_index:
            return 0
        mask = self._data == source_index
        self._data[mask] = target_index
        return int(mask.sum())

    def swap_colour_index(self, first_index: int, second_index: int) -> int:
        """
        Exchange two palette indexes.

        Returns:
            Number of pixels changed
        """
        _check_value(first_index)
        _check_value(second_index)
        if first_index == second_index:
            return 0
        first = self._data == first_index
        second = self._data == second_index
        self._data[first] = second_index
        self._data[second] = first_index
        return int(first.sum() + second.sum())

    def to_hex_string(self) -> str:
        """Two lowercase hex characters per pixel, 128 characters total"""
        return bytes_to_hex(self._data.tolist())

    @classmethod
    def from_hex(cls, hex_string: str) -> 'Tile':
        """
        Create a tile from a string made by to_hex_string.

        Raises:
            FormatError: If the string is not valid hex or holds more than
                64 pixels
        """
        data = hex_to_bytes(hex_string)
        if len(data) > PIXELS_PER_TILE:
            raise FormatError(f"Tile hex holds {len(data)} pixels, at most {PIXELS_PER_TILE} allowed")
        tile = cls()
        if data:
            tile.fill_from_array(data)
        return tile

    @classmethod
    def parse_planar_format(cls, data: Sequence[int]) -> 'Tile':
        """Create a tile from 32 bytes of planar data"""
        return cls(decode_planar_tile(data))

    def to_planar_format(self) -> bytes:
        """Encode the tile as 32 bytes of planar data"""
        return encode_planar_tile(self._data.tolist())


def _check_index(index: int):
    if index < 0 or index >= PIXELS_PER_TILE:
        raise OutOfRangeError(f"Tile index must be between 0 and {PIXELS_PER_TILE - 1}, got {index}")


def _check_coord(x: int, y: int):
    if x < 0 or x >= TILE_WIDTH or y < 0 or y >= TILE_HEIGHT:
        raise OutOfRangeError(f"Tile coordinate ({x}, {y}) is outside 0-7")


def _check_value(value: int):
    if value < 0 or value > MAX_PIXEL_VALUE:
        raise ValidationError(f"Value must be between 0 and {MAX_PIXEL_VALUE}, got {value}")
