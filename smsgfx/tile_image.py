#!/usr/bin/env python3
"""
Indexed image export and import for tile sets and tile maps
"""

from typing import List, Optional, Sequence

import numpy as np
from PIL import Image

from .constants import COLOURS_PER_PALETTE, MAX_COLOUR_INDEX, TILE_HEIGHT, TILE_WIDTH
from .exceptions import FormatError, ValidationError
from .logging_config import get_logger
from .models.palette import Palette, PaletteColour, PaletteList
from .models.tile import Tile
from .models.tile_map import TileMap
from .models.tile_set import TileSet

logger = get_logger(__name__)


def grayscale_palette() -> List[int]:
    """Flat RGB list, index i maps to gray i * 17"""
    palette = []
    for i in range(COLOURS_PER_PALETTE):
        value = i * 17
        palette.extend([value, value, value])
    return palette


def palette_to_rgb_list(palette: Optional[Palette]) -> List[int]:
    """Flat 48 value RGB list, unset colours are black"""
    if palette is None:
        return grayscale_palette()
    result = []
    for colour in palette.colours:
        if colour is None:
            result.extend([0, 0, 0])
        else:
            result.extend([colour.r, colour.g, colour.b])
    return result


def _indexed_image(pixels: np.ndarray, rgb_palette: Sequence[int]) -> Image.Image:
    height, width = pixels.shape
    img = Image.frombytes('P', (width, height), np.ascontiguousarray(pixels, dtype=np.uint8).tobytes())
    full_palette = list(rgb_palette) + [0] * (768 - len(rgb_palette))
    img.putpalette(full_palette)
    return img


def render_tile_set(tile_set: TileSet, palette: Optional[Palette] = None) -> Image.Image:
    """
    Render a tile set as a 'P' mode image.

    Args:
        tile_set: Tile set to render
        palette: Colours for indexes 0-15, grayscale when omitted

    Returns:
        PIL image of width_px x height_px
    """
    if tile_set.tile_count == 0:
        raise ValidationError("Tile set has no tiles to render")
    return _indexed_image(tile_set.read_pixels(), palette_to_rgb_list(palette))


def render_tile_map(tile_map: TileMap, tile_set: TileSet,
                    palette_list: Optional[PaletteList] = None) -> Image.Image:
    """
    Render a tile map using the tiles of a tile set.

    Cells using palette 1 are drawn with indexes 16-31 so both palettes
    fit in one image palette. Cells that point past the end of the tile
    set are left blank.
    """
    if tile_map.tile_count == 0:
        raise ValidationError("Tile map has no cells to render")
    pixels = np.zeros((tile_map.height_px, tile_map.width_px), dtype=np.uint8)
    for position in range(tile_map.tile_count):
        info = tile_map.get_tile_info_by_index(position)
        if info.tile_index >= tile_set.tile_count:
            continue
        block = tile_set.get_tile(info.tile_index).read_all().reshape(TILE_HEIGHT, TILE_WIDTH)
        if info.horizontal_flip:
            block = block[:, ::-1]
        if info.vertical_flip:
            block = block[::-1, :]
        y, x = info.row * TILE_HEIGHT, info.column * TILE_WIDTH
        pixels[y:y + TILE_HEIGHT, x:x + TILE_WIDTH] = (block & MAX_COLOUR_INDEX) + \
            (COLOURS_PER_PALETTE if info.palette == 1 else 0)

    rgb = []
    for index in range(2):
        palette = palette_list.get_palette(index) if palette_list and index < len(palette_list) else None
        rgb.extend(palette_to_rgb_list(palette))
    return _indexed_image(pixels, rgb)


def _indexed_pixels(image: Image.Image) -> np.ndarray:
    if image.mode != 'P':
        raise FormatError(f"Image must be indexed ('P' mode), got {image.mode!r}")
    width, height = image.size
    if width == 0 or height == 0 or width % TILE_WIDTH or height % TILE_HEIGHT:
        raise FormatError(f"Image size {width}x{height} is not a whole number of 8x8 tiles")
    pixels = np.array(image, dtype=np.uint8)
    if pixels.max() > MAX_COLOUR_INDEX:
        raise FormatError(f"Image uses palette index {int(pixels.max())}, only 0-15 are allowed")
    return pixels


def import_tile_set(image: Image.Image, tile_width: Optional[int] = None) -> TileSet:
    """
    Cut an indexed image into tiles, left to right then top to bottom.

    Args:
        image: 'P' mode image whose size is a multiple of 8
        tile_width: Tiles per row of the result, defaults to the image width

    Raises:
        FormatError: If the image is not indexed, not tile aligned or uses
                     indexes above 15
    """
    pixels = _indexed_pixels(image)
    rows, columns = pixels.shape[0] // TILE_HEIGHT, pixels.shape[1] // TILE_WIDTH
    tiles = []
    for row in range(rows):
        for column in range(columns):
            block = pixels[row * TILE_HEIGHT:(row + 1) * TILE_HEIGHT,
                           column * TILE_WIDTH:(column + 1) * TILE_WIDTH]
            tiles.append(Tile(block.flatten()))
    logger.debug(f"Imported {len(tiles)} tiles from a {image.size[0]}x{image.size[1]} image")
    return TileSet(tile_width or columns, tiles)


def import_palette(image: Image.Image, system: str, index: int = 0) -> Palette:
    """Quantize the first 16 colours of an indexed image's palette"""
    if image.mode != 'P':
        raise FormatError(f"Image must be indexed ('P' mode), got {image.mode!r}")
    rgb = image.getpalette() or []
    palette = Palette(system, index)
    for i in range(min(COLOURS_PER_PALETTE, len(rgb) // 3)):
        r, g, b = rgb[i * 3:i * 3 + 3]
        palette.set_colour(i, PaletteColour.from_rgb(system, i, r, g, b))
    return palette
