#!/usr/bin/env python3
"""
Persistent UI state
Editor preferences that survive between sessions. The editor front end
listens to the change signals; nothing here renders.
"""

from PyQt6.QtCore import pyqtSignal

from ..constants import (
    DEFAULT_SCALE,
    MAX_SCALE,
    MIN_SCALE,
    PALETTE_INDEXES,
    PALETTE_SYSTEMS,
    SYSTEM_GAME_GEAR,
    THEMES,
)
from ..exceptions import ValidationError
from .base_model import BaseModel, ObservableProperty


def _scale(value):
    if isinstance(value, bool) or not isinstance(value, int) or not MIN_SCALE <= value <= MAX_SCALE:
        raise ValidationError(f"Scale must be between {MIN_SCALE} and {MAX_SCALE}, got {value!r}")
    return value


def _palette_system(value):
    if value not in PALETTE_SYSTEMS:
        raise ValidationError(f"Unknown palette system: {value!r}")
    return value


def _palette_index(value):
    if value not in PALETTE_INDEXES:
        raise ValidationError(f"Palette index must be 0 or 1, got {value!r}")
    return value


def _theme(value):
    if value not in THEMES:
        raise ValidationError(f"Unknown theme: {value!r}")
    return value


class PersistentUIState(BaseModel):
    """Observable editor preferences"""

    # Signals
    last_project_id_changed = pyqtSignal(object)
    selected_tile_map_id_changed = pyqtSignal(object)
    import_palette_assembly_code_changed = pyqtSignal(str)
    import_palette_system_changed = pyqtSignal(str)
    import_tile_assembly_code_changed = pyqtSignal(str)
    import_tile_replace_changed = pyqtSignal(bool)
    palette_index_changed = pyqtSignal(int)
    scale_changed = pyqtSignal(int)
    display_native_colour_changed = pyqtSignal(bool)
    show_tile_grid_changed = pyqtSignal(bool)
    show_pixel_grid_changed = pyqtSignal(bool)
    documentation_visible_on_startup_changed = pyqtSignal(bool)
    welcome_visible_on_startup_changed = pyqtSignal(bool)
    theme_changed = pyqtSignal(str)

    # Observable properties
    last_project_id = ObservableProperty(None)
    selected_tile_map_id = ObservableProperty(None)
    import_palette_assembly_code = ObservableProperty("")
    import_palette_system = ObservableProperty(SYSTEM_GAME_GEAR, _palette_system)
    import_tile_assembly_code = ObservableProperty("")
    import_tile_replace = ObservableProperty(False, bool)
    palette_index = ObservableProperty(0, _palette_index)
    scale = ObservableProperty(DEFAULT_SCALE, _scale)
    display_native_colour = ObservableProperty(True, bool)
    show_tile_grid = ObservableProperty(True, bool)
    show_pixel_grid = ObservableProperty(True, bool)
    documentation_visible_on_startup = ObservableProperty(False, bool)
    welcome_visible_on_startup = ObservableProperty(True, bool)
    theme = ObservableProperty('system', _theme)
