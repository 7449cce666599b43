"""
Settings manager for smsgfx
Handles saving and loading user preferences
"""

import json
import os
from pathlib import Path
from typing import Any, Optional

from .constants import DEFAULT_TILE_WIDTH, DEFAULT_UNDO_STEPS, SYSTEM_GAME_GEAR
from .logging_config import get_logger

logger = get_logger(__name__)


class SettingsManager:
    """Manages application settings with persistence"""

    def __init__(self, app_name="smsgfx", settings_file: Optional[Path] = None):
        self.app_name = app_name
        self.settings_file = Path(settings_file) if settings_file else self._get_settings_path()
        self.settings = self._load_settings()

    def _get_settings_path(self) -> Path:
        """Get the appropriate settings directory for the platform"""
        if os.name == "nt":  # Windows
            base = Path(os.environ.get("APPDATA", os.path.expanduser("~")))
            settings_dir = base / self.app_name
        else:  # Linux/Mac
            base = Path(os.path.expanduser("~"))
            settings_dir = base / f".{self.app_name}"
        return settings_dir / "settings.json"

    def _load_settings(self) -> dict[str, Any]:
        """Load settings from file, merged over the defaults"""
        settings = self._get_default_settings()
        if self.settings_file.exists():
            try:
                with open(self.settings_file) as f:
                    stored = json.load(f)
            except (OSError, json.JSONDecodeError) as e:
                logger.warning(f"Ignoring unreadable settings file {self.settings_file}: {e}")
                return settings
            if isinstance(stored, dict):
                _merge(settings, stored)
        return settings

    def _get_default_settings(self) -> dict[str, Any]:
        """Get default settings"""
        return {
            "data_dir": "",
            "log_level": "INFO",
            "log_file": "",
            "undo": {"step_count": DEFAULT_UNDO_STEPS},
            "defaults": {
                "palette_system": SYSTEM_GAME_GEAR,
                "tile_width": DEFAULT_TILE_WIDTH,
            },
            "cache_buster": "",
        }

    def save_settings(self):
        """Save current settings to file"""
        try:
            self.settings_file.parent.mkdir(parents=True, exist_ok=True)
            with open(self.settings_file, "w") as f:
                json.dump(self.settings, f, indent=2)
        except OSError as e:
            logger.warning(f"Could not save settings to {self.settings_file}: {e}")

    def get(self, key: str, default: Any = None) -> Any:
        """Get a setting value using a dotted key"""
        keys = key.split(".")
        value = self.settings
        for k in keys:
            if isinstance(value, dict) and k in value:
                value = value[k]
            else:
                return default
        return value

    def set(self, key: str, value: Any):
        """Set a setting value using a dotted key"""
        keys = key.split(".")
        target = self.settings
        for k in keys[:-1]:
            if k not in target:
                target[k] = {}
            target = target[k]
        target[keys[-1]] = value
        self.save_settings()


def _merge(base: dict, overrides: dict):
    for key, value in overrides.items():
        if isinstance(value, dict) and isinstance(base.get(key), dict):
            _merge(base[key], value)
        else:
            base[key] = value
