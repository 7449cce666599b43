#!/usr/bin/env python3
"""
Brush painting on a tile set's pixel grid

A brush of size n covers an n by n square starting n // 2 pixels up and to
the left of the pointer. Brushes larger than 3 drop the corner pixels of
the first and last rows so the stroke looks round.
"""

from typing import Callable, List, Optional, Tuple

from .constants import MAX_BRUSH_SIZE, MAX_COLOUR_INDEX, MIN_BRUSH_SIZE
from .exceptions import ValidationError
from .logging_config import get_logger
from .models.tile_set import TileSet

logger = get_logger(__name__)


def brush_pixels(x: int, y: int, brush_size: int) -> List[Tuple[int, int]]:
    """
    Pixels covered by a brush centred on (x, y), row by row.

    Raises:
        ValidationError: If brush_size is outside 1-100
    """
    _check_brush_size(brush_size)
    start_x = x - brush_size // 2
    start_y = y - brush_size // 2
    end_x = x + (brush_size + 1) // 2
    end_y = y + (brush_size + 1) // 2

    pixels = []
    for pixel_y in range(start_y, end_y):
        left_x, right_x = start_x, end_x
        if brush_size > 3 and pixel_y in (start_y, end_y - 1):
            left_x, right_x = start_x + 1, end_x - 1
        for pixel_x in range(left_x, right_x):
            pixels.append((pixel_x, pixel_y))
    return pixels


def draw_on_tile_set(tile_set: TileSet, x: int, y: int, colour_index: int,
                     brush_size: int = 1, affect_adjacent_tiles: bool = True) -> List[int]:
    """
    Paint a brush stroke onto a tile set.

    Args:
        tile_set: Tile set to draw onto
        x, y: Pointer pixel, the brush is centred here
        colour_index: Palette index to paint (0-15)
        brush_size: Brush width in pixels (1-100)
        affect_adjacent_tiles: When False only the tile under the pointer
            is painted

    Returns:
        Indexes of tiles whose pixels changed, in the order first touched.
        Empty when the pointer is over an empty cell of the last row.

    Raises:
        OutOfRangeError: If the pointer is outside the grid
        ValidationError: If colour_index or brush_size is out of range
    """
    _check_colour(colour_index)
    return _paint(tile_set, x, y, brush_size, affect_adjacent_tiles,
                  lambda current: colour_index)


def replace_colour_on_tile_set(tile_set: TileSet, x: int, y: int, source_index: int,
                               replacement_index: int, brush_size: int = 1,
                               affect_adjacent_tiles: bool = True) -> List[int]:
    """
    Paint only over pixels of one colour.

    Pixels under the brush holding source_index become replacement_index,
    everything else is left alone. Arguments and result are as for
    draw_on_tile_set.
    """
    _check_colour(source_index)
    _check_colour(replacement_index)
    return _paint(tile_set, x, y, brush_size, affect_adjacent_tiles,
                  lambda current: replacement_index if current == source_index else None)


def _paint(tile_set: TileSet, x: int, y: int, brush_size: int, affect_adjacent_tiles: bool,
           new_colour: Callable[[int], Optional[int]]) -> List[int]:
    _check_brush_size(brush_size)
    origin_tile = tile_set.get_tile_index_by_coordinate(x, y)
    if origin_tile is None:
        return []

    width, height = tile_set.width_px, tile_set.height_px
    affected = []
    for pixel_x, pixel_y in brush_pixels(x, y, brush_size):
        if pixel_x < 0 or pixel_x >= width or pixel_y < 0 or pixel_y >= height:
            continue
        tile_index = tile_set.get_tile_index_by_coordinate(pixel_x, pixel_y)
        if tile_index is None:
            continue
        if tile_index != origin_tile and not affect_adjacent_tiles:
            continue
        colour = new_colour(tile_set.get_pixel_at(pixel_x, pixel_y))
        if colour is None:
            continue
        if tile_set.set_pixel_at(pixel_x, pixel_y, colour) and tile_index not in affected:
            affected.append(tile_index)

    logger.debug(f"Brush {brush_size} at ({x}, {y}) changed tiles {affected}")
    return affected


def _check_brush_size(brush_size: int):
    if brush_size < MIN_BRUSH_SIZE or brush_size > MAX_BRUSH_SIZE:
        raise ValidationError(
            f"Brush size must be between {MIN_BRUSH_SIZE} and {MAX_BRUSH_SIZE} px, got {brush_size}")


def _check_colour(colour_index: int):
    if colour_index < 0 or colour_index > MAX_COLOUR_INDEX:
        raise ValidationError(f"Palette index must be between 0 and {MAX_COLOUR_INDEX}, got {colour_index}")
