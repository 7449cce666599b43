"""
Serialisers between the models and their persisted forms
"""

from .assembly import AssemblySerialiser
from .binary import TileMapBinarySerialiser, TileSetBinarySerialiser
from .palette_json import PaletteJsonSerialiser, PaletteListJsonSerialiser
from .project_json import (
    ProjectEntryJsonSerialiser,
    ProjectEntryListJsonSerialiser,
    ProjectJsonSerialiser,
    migrate_project_payload,
)
from .tile_map_json import TileMapJsonSerialiser, TileMapListJsonSerialiser, TileMapTileJsonSerialiser
from .tile_set_json import TileSetJsonSerialiser, TileSetListJsonSerialiser
from .ui_state_json import PersistentUIStateJsonSerialiser

__all__ = [
    'AssemblySerialiser',
    'PaletteJsonSerialiser',
    'PaletteListJsonSerialiser',
    'PersistentUIStateJsonSerialiser',
    'ProjectEntryJsonSerialiser',
    'ProjectEntryListJsonSerialiser',
    'ProjectJsonSerialiser',
    'TileMapBinarySerialiser',
    'TileMapJsonSerialiser',
    'TileMapListJsonSerialiser',
    'TileMapTileJsonSerialiser',
    'TileSetBinarySerialiser',
    'TileSetJsonSerialiser',
    'TileSetListJsonSerialiser',
    'migrate_project_payload',
]
