#!/usr/bin/env python3
"""
Process-wide configuration

AppConfig is built once at startup (from the settings file and the
environment) and handed to the objects that need it. It is read-only
after construction.
"""

import os
from dataclasses import dataclass, replace
from pathlib import Path
from typing import Optional

from .constants import (
    DEFAULT_TILE_WIDTH,
    DEFAULT_UNDO_STEPS,
    MAX_UNDO_STEPS,
    PALETTE_SYSTEMS,
    SYSTEM_GAME_GEAR,
)
from .exceptions import ValidationError
from .settings_manager import SettingsManager

DEBUG_ENV_VAR = "SMSGFX_DEBUG"
DATA_DIR_ENV_VAR = "SMSGFX_DATA_DIR"


@dataclass(frozen=True)
class AppConfig:
    """Immutable runtime configuration"""
    data_dir: Path
    undo_step_count: int = DEFAULT_UNDO_STEPS
    default_palette_system: str = SYSTEM_GAME_GEAR
    default_tile_width: int = DEFAULT_TILE_WIDTH
    log_level: str = "INFO"
    log_file: Optional[str] = None
    cache_buster: str = ""

    def __post_init__(self):
        if not 0 <= self.undo_step_count <= MAX_UNDO_STEPS:
            raise ValidationError(
                f"Undo step count must be between 0 and {MAX_UNDO_STEPS}, got {self.undo_step_count}")
        if self.default_palette_system not in PALETTE_SYSTEMS:
            raise ValidationError(f"Unknown palette system: {self.default_palette_system!r}")
        if self.default_tile_width < 1:
            raise ValidationError(f"Tile width must be positive, got {self.default_tile_width}")

    def with_overrides(self, **changes) -> "AppConfig":
        return replace(self, **changes)


def default_data_dir() -> Path:
    return Path(os.path.expanduser("~")) / ".smsgfx" / "projects"


def load_config(settings: Optional[SettingsManager] = None) -> AppConfig:
    """
    Build the application configuration.

    Args:
        settings: Settings source, a default SettingsManager is created when omitted

    Returns:
        AppConfig instance
    """
    if settings is None:
        settings = SettingsManager()

    data_dir = os.environ.get(DATA_DIR_ENV_VAR) or settings.get("data_dir") or default_data_dir()
    log_level = settings.get("log_level", "INFO")
    if os.environ.get(DEBUG_ENV_VAR):
        log_level = "DEBUG"

    return AppConfig(
        data_dir=Path(data_dir),
        undo_step_count=int(settings.get("undo.step_count", DEFAULT_UNDO_STEPS)),
        default_palette_system=settings.get("defaults.palette_system", SYSTEM_GAME_GEAR),
        default_tile_width=int(settings.get("defaults.tile_width", DEFAULT_TILE_WIDTH)),
        log_level=log_level,
        log_file=settings.get("log_file") or None,
        cache_buster=str(settings.get("cache_buster", "")),
    )
