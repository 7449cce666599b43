#!/usr/bin/env python3
"""
Tile set JSON serialisers

A tile set is stored as {columnCount, tilesAsHex}, one 128 character hex
string per tile.
"""

from typing import Optional

from ..exceptions import FormatError
from ..models.tile import Tile
from ..models.tile_set import TileSet, TileSetList
from .common import list_items, parse_json, require_dict, to_json


class TileSetJsonSerialiser:

    @staticmethod
    def serialise(tile_set: TileSet) -> str:
        return to_json(TileSetJsonSerialiser.to_serialisable(tile_set))

    @staticmethod
    def deserialise(json_string: str) -> TileSet:
        return TileSetJsonSerialiser.from_serialisable(parse_json(json_string, 'tile set'))

    @staticmethod
    def to_serialisable(tile_set: TileSet) -> dict:
        return {
            'columnCount': tile_set.column_count,
            'tilesAsHex': [tile.to_hex_string() for tile in tile_set],
        }

    @staticmethod
    def from_serialisable(serialisable: dict) -> TileSet:
        serialisable = require_dict(serialisable, 'tile set')
        column_count = serialisable.get('columnCount', serialisable.get('tileWidth'))
        if not isinstance(column_count, int):
            raise FormatError(f"Tile set column count is missing or invalid: {column_count!r}")
        tiles_as_hex = serialisable.get('tilesAsHex') or []
        if not isinstance(tiles_as_hex, list):
            raise FormatError("Tile set tilesAsHex must be an array")
        return TileSet(column_count, [Tile.from_hex(tile_hex) for tile_hex in tiles_as_hex])


class TileSetListJsonSerialiser:

    @staticmethod
    def serialise(tile_set_list: TileSetList) -> str:
        return to_json(TileSetListJsonSerialiser.to_serialisable(tile_set_list))

    @staticmethod
    def deserialise(json_string: str) -> TileSetList:
        return TileSetListJsonSerialiser.from_serialisable(parse_json(json_string, 'tile set list'))

    @staticmethod
    def to_serialisable(tile_set_list: TileSetList) -> list:
        return [TileSetJsonSerialiser.to_serialisable(tile_set) for tile_set in tile_set_list]

    @staticmethod
    def from_serialisable(serialisable: Optional[list]) -> TileSetList:
        return TileSetList([TileSetJsonSerialiser.from_serialisable(item)
                            for item in list_items(serialisable, 'tile set')])
