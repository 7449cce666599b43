"""
Data models for tiles, palettes, tile maps and projects
"""

from .palette import Palette, PaletteColour, PaletteList
from .project import Project, ProjectEntry, ProjectEntryList
from .tile import Tile
from .tile_grid_provider import TileGridProvider, TileProviderInfo
from .tile_map import TileMap, TileMapList, TileMapTile
from .tile_set import TileSet, TileSetList

__all__ = [
    'Palette',
    'PaletteColour',
    'PaletteList',
    'Project',
    'ProjectEntry',
    'ProjectEntryList',
    'Tile',
    'TileGridProvider',
    'TileProviderInfo',
    'TileMap',
    'TileMapList',
    'TileMapTile',
    'TileSet',
    'TileSetList',
]
