#!/usr/bin/env python3
"""
Persistent UI state JSON serialiser
"""

from ..exceptions import ValidationError
from ..logging_config import get_logger
from ..models.ui_state import PersistentUIState
from .common import parse_json, require_dict, to_json

logger = get_logger(__name__)

# Stored key -> model property
FIELD_NAMES = {
    'lastProjectId': 'last_project_id',
    'selectedTileMapId': 'selected_tile_map_id',
    'importPaletteAssemblyCode': 'import_palette_assembly_code',
    'importPaletteSystem': 'import_palette_system',
    'importTileAssemblyCode': 'import_tile_assembly_code',
    'importTileReplace': 'import_tile_replace',
    'paletteIndex': 'palette_index',
    'scale': 'scale',
    'displayNativeColour': 'display_native_colour',
    'showTileGrid': 'show_tile_grid',
    'showPixelGrid': 'show_pixel_grid',
    'documentationVisibleOnStartup': 'documentation_visible_on_startup',
    'welcomeVisibleOnStartup': 'welcome_visible_on_startup',
    'theme': 'theme',
}


class PersistentUIStateJsonSerialiser:

    @staticmethod
    def serialise(state: PersistentUIState) -> str:
        return to_json(PersistentUIStateJsonSerialiser.to_serialisable(state))

    @staticmethod
    def deserialise(json_string: str) -> PersistentUIState:
        return PersistentUIStateJsonSerialiser.from_serialisable(parse_json(json_string, 'UI state'))

    @staticmethod
    def to_serialisable(state: PersistentUIState) -> dict:
        return {key: getattr(state, name) for key, name in FIELD_NAMES.items()}

    @staticmethod
    def from_serialisable(serialisable: dict) -> PersistentUIState:
        """Unknown keys are ignored; invalid values keep their defaults"""
        serialisable = require_dict(serialisable, 'UI state')
        state = PersistentUIState()
        for key, name in FIELD_NAMES.items():
            if key not in serialisable:
                continue
            try:
                setattr(state, name, serialisable[key])
            except ValidationError as e:
                logger.warning(f"Ignoring stored UI state value for {key}: {e}")
        return state
