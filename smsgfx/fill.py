#!/usr/bin/env python3
"""
Scanline flood fill over a tile set's pixel grid
"""

from typing import List, Tuple

from .constants import MAX_COLOUR_INDEX
from .exceptions import OutOfRangeError, ValidationError
from .logging_config import get_logger
from .models.tile_set import TileSet

logger = get_logger(__name__)


class FloodFill:
    """
    4-connected span fill.

    Each seed is grown left and right into a horizontal run, then the rows
    above and below the run are scanned and one seed is pushed per
    matching run found there.
    """

    def __init__(self, tile_set: TileSet):
        self.tile_set = tile_set
        self.width = 0
        self.height = 0
        self._origin_colour = None

    def fill(self, x: int, y: int, colour_index: int) -> List[Tuple[int, int]]:
        """
        Flood fill from a pixel.

        Args:
            x, y: Origin pixel
            colour_index: Palette index to fill with (0-15)

        Returns:
            List of changed pixels

        Raises:
            OutOfRangeError: If the origin is outside the grid
            ValidationError: If colour_index is outside 0-15
        """
        # The tile set may have been resized since construction
        self.width = self.tile_set.width_px
        self.height = self.tile_set.height_px
        if x < 0 or x >= self.width or y < 0 or y >= self.height:
            raise OutOfRangeError(f"Invalid origin coordinates ({x}, {y})")
        if colour_index < 0 or colour_index > MAX_COLOUR_INDEX:
            raise ValidationError(f"Palette index must be between 0 and {MAX_COLOUR_INDEX}, got {colour_index}")

        self._origin_colour = self.tile_set.get_pixel_at(x, y)
        if self._origin_colour is None or self._origin_colour == colour_index:
            return []

        changed = []
        seeds = [(x, y)]
        while seeds:
            seed_x, seed_y = seeds.pop()

            left_x = seed_x
            while self._inside(left_x - 1, seed_y):
                left_x -= 1
                self._set(left_x, seed_y, colour_index, changed)

            right_x = seed_x - 1
            while self._inside(right_x + 1, seed_y):
                right_x += 1
                self._set(right_x, seed_y, colour_index, changed)

            self._scan(left_x, right_x, seed_y + 1, seeds)
            self._scan(left_x, right_x, seed_y - 1, seeds)

        logger.debug(f"Filled {len(changed)} pixels from ({x}, {y}) with colour {colour_index}")
        return changed

    def _scan(self, left_x: int, right_x: int, y: int, seeds: list):
        added = False
        for x in range(left_x, right_x + 1):
            if not self._inside(x, y):
                added = False
            elif not added:
                seeds.append((x, y))
                added = True

    def _inside(self, x: int, y: int) -> bool:
        if x < 0 or x >= self.width or y < 0 or y >= self.height:
            return False
        return self.tile_set.get_pixel_at(x, y) == self._origin_colour

    def _set(self, x: int, y: int, colour_index: int, changed: list):
        self.tile_set.set_pixel_at(x, y, colour_index)
        changed.append((x, y))


def fill_tile_set(tile_set: TileSet, x: int, y: int, colour_index: int) -> List[Tuple[int, int]]:
    """Flood fill a tile set in place, returning the changed pixels"""
    return FloodFill(tile_set).fill(x, y, colour_index)
