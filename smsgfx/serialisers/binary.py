#!/usr/bin/env python3
"""
Binary serialisers for VRAM data

Tile sets are written as planar data, 32 bytes per tile. Tile maps are
written as name table words, little endian:

    bits 0-8   tile index
    bit 9      horizontal flip
    bit 10     vertical flip
    bit 11     palette 1
    bit 12     priority
"""

import struct
from typing import List, Sequence

from ..constants import (
    DEFAULT_TILE_WIDTH,
    TILE_MAP_HFLIP_BIT,
    TILE_MAP_INDEX_MASK,
    TILE_MAP_PALETTE_BIT,
    TILE_MAP_PRIORITY_BIT,
    TILE_MAP_VFLIP_BIT,
)
from ..exceptions import FormatError
from ..models.tile_map import TileMap, TileMapTile
from ..models.tile_set import TileSet


class TileSetBinarySerialiser:

    @staticmethod
    def serialise(tile_set: TileSet) -> bytes:
        return tile_set.to_planar_format()

    @staticmethod
    def deserialise(data: Sequence[int], tile_width: int = DEFAULT_TILE_WIDTH) -> TileSet:
        return TileSet.parse_planar_format(data, tile_width)


class TileMapBinarySerialiser:

    @staticmethod
    def encode_tile(tile: TileMapTile) -> int:
        word = tile.tile_index & TILE_MAP_INDEX_MASK
        if tile.horizontal_flip:
            word |= TILE_MAP_HFLIP_BIT
        if tile.vertical_flip:
            word |= TILE_MAP_VFLIP_BIT
        if tile.palette == 1:
            word |= TILE_MAP_PALETTE_BIT
        if tile.priority:
            word |= TILE_MAP_PRIORITY_BIT
        return word

    @staticmethod
    def decode_tile(word: int) -> TileMapTile:
        return TileMapTile(
            tile_index=word & TILE_MAP_INDEX_MASK,
            palette=1 if word & TILE_MAP_PALETTE_BIT else 0,
            priority=bool(word & TILE_MAP_PRIORITY_BIT),
            horizontal_flip=bool(word & TILE_MAP_HFLIP_BIT),
            vertical_flip=bool(word & TILE_MAP_VFLIP_BIT),
        )

    @staticmethod
    def serialise_words(tile_map: TileMap) -> List[int]:
        return [TileMapBinarySerialiser.encode_tile(tile) for tile in tile_map.tiles]

    @staticmethod
    def serialise(tile_map: TileMap) -> bytes:
        words = TileMapBinarySerialiser.serialise_words(tile_map)
        return struct.pack(f'<{len(words)}H', *words)

    @staticmethod
    def deserialise(data: bytes, columns: int) -> TileMap:
        if len(data) % 2 != 0:
            raise FormatError(f"Tile map data must be a whole number of words, got {len(data)} bytes")
        words = struct.unpack(f'<{len(data) // 2}H', data)
        return TileMap(columns, tiles=[TileMapBinarySerialiser.decode_tile(word) for word in words])
