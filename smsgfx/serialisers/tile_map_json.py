#!/usr/bin/env python3
"""
Tile map JSON serialisers
"""

from typing import Optional

from ..exceptions import FormatError
from ..models.tile_map import TileMap, TileMapList, TileMapTile
from .common import int_field, list_items, parse_json, require_dict, to_json


class TileMapTileJsonSerialiser:

    @staticmethod
    def to_serialisable(tile: TileMapTile) -> dict:
        return {
            'tileIndex': tile.tile_index,
            'palette': tile.palette,
            'priority': tile.priority,
            'horizontalFlip': tile.horizontal_flip,
            'verticalFlip': tile.vertical_flip,
        }

    @staticmethod
    def from_serialisable(serialisable: dict) -> TileMapTile:
        serialisable = require_dict(serialisable, 'tile map tile')
        return TileMapTile(
            tile_index=int_field(serialisable, 'tileIndex', 0, 'tile map tile'),
            palette=int_field(serialisable, 'palette', 0, 'tile map tile'),
            priority=bool(serialisable.get('priority', False)),
            horizontal_flip=bool(serialisable.get('horizontalFlip', False)),
            vertical_flip=bool(serialisable.get('verticalFlip', False)),
        )


class TileMapJsonSerialiser:

    @staticmethod
    def serialise(tile_map: TileMap) -> str:
        return to_json(TileMapJsonSerialiser.to_serialisable(tile_map))

    @staticmethod
    def deserialise(json_string: str) -> TileMap:
        return TileMapJsonSerialiser.from_serialisable(parse_json(json_string, 'tile map'))

    @staticmethod
    def to_serialisable(tile_map: TileMap) -> dict:
        return {
            'tileMapId': tile_map.tile_map_id,
            'title': tile_map.title,
            'vramOffset': tile_map.vram_offset,
            'columns': tile_map.column_count,
            'rows': tile_map.row_count,
            'optimise': tile_map.optimise,
            'tiles': [TileMapTileJsonSerialiser.to_serialisable(tile) for tile in tile_map.tiles],
        }

    @staticmethod
    def from_serialisable(serialisable: dict) -> TileMap:
        serialisable = require_dict(serialisable, 'tile map')
        columns = serialisable.get('columns')
        if not isinstance(columns, int) or columns < 1:
            raise FormatError(f"Tile map column count is missing or invalid: {columns!r}")
        tiles = serialisable.get('tiles') or []
        if not isinstance(tiles, list):
            raise FormatError("Tile map tiles must be an array")
        return TileMap(
            columns,
            tile_map_id=serialisable.get('tileMapId'),
            title=serialisable.get('title'),
            vram_offset=int_field(serialisable, 'vramOffset', 0, 'tile map'),
            optimise=bool(serialisable.get('optimise', False)),
            tiles=[TileMapTileJsonSerialiser.from_serialisable(tile) for tile in tiles],
        )


class TileMapListJsonSerialiser:

    @staticmethod
    def serialise(tile_map_list: TileMapList) -> str:
        return to_json(TileMapListJsonSerialiser.to_serialisable(tile_map_list))

    @staticmethod
    def deserialise(json_string: str) -> TileMapList:
        return TileMapListJsonSerialiser.from_serialisable(parse_json(json_string, 'tile map list'))

    @staticmethod
    def to_serialisable(tile_map_list: TileMapList) -> list:
        return [TileMapJsonSerialiser.to_serialisable(tile_map) for tile_map in tile_map_list]

    @staticmethod
    def from_serialisable(serialisable: Optional[list]) -> TileMapList:
        return TileMapList([TileMapJsonSerialiser.from_serialisable(item)
                            for item in list_items(serialisable, 'tile map')])
