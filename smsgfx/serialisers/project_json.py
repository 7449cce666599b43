#!/usr/bin/env python3
"""
Project JSON serialisers and payload migration

Payload (version 2):
    {id, version, title, systemType, dateLastModified, tileSet,
     tileMapList, paletteList}

dateLastModified is milliseconds since the epoch. Older payloads are
upgraded by migrate_project_payload before any model is built.
"""

import copy
from datetime import datetime, timedelta, timezone
from typing import Callable, Dict, Optional

from ..constants import DEFAULT_PROJECT_TITLE, PROJECT_VERSION
from ..exceptions import FormatError
from ..logging_config import get_logger
from ..models.project import Project, ProjectEntry, ProjectEntryList, normalise_system_type, utc_now
from .common import list_items, parse_json, require_dict, to_json
from .palette_json import PaletteListJsonSerialiser
from .tile_map_json import TileMapListJsonSerialiser
from .tile_set_json import TileSetJsonSerialiser

logger = get_logger(__name__)


def _migrate_v1_to_v2(payload: dict) -> dict:
    """Version 1 stored the tile set width as tileWidth"""
    tile_set = payload.get('tileSet')
    if isinstance(tile_set, dict) and 'tileWidth' in tile_set:
        width = tile_set.pop('tileWidth')
        tile_set.setdefault('columnCount', width)
    payload['version'] = 2
    return payload


# Keyed by the version each step upgrades from
MIGRATIONS: Dict[int, Callable[[dict], dict]] = {
    1: _migrate_v1_to_v2,
}


def migrate_project_payload(payload: dict) -> dict:
    """
    Upgrade a serialised project to the current version.

    A payload without a version is treated as version 1. Each step only
    runs when the payload is at that step's source version, so running
    this on an up to date payload returns an equal copy.

    Raises:
        FormatError: If the payload is from a newer, unknown version
    """
    payload = copy.deepcopy(require_dict(payload, 'project'))
    version = payload.get('version', 1)
    if not isinstance(version, int) or version < 1:
        raise FormatError(f"Invalid project version: {version!r}")
    if version > PROJECT_VERSION:
        raise FormatError(f"Project version {version} is newer than supported version {PROJECT_VERSION}")
    while version < PROJECT_VERSION:
        logger.debug(f"Migrating project payload from version {version}")
        payload = MIGRATIONS[version](payload)
        version = payload['version']
    payload['version'] = version
    return payload


EPOCH = datetime(1970, 1, 1, tzinfo=timezone.utc)


def to_epoch_millis(value: datetime) -> int:
    if value.tzinfo is None:
        value = value.replace(tzinfo=timezone.utc)
    return (value - EPOCH) // timedelta(milliseconds=1)


def from_epoch_millis(value) -> datetime:
    if value is None:
        return utc_now()
    try:
        return EPOCH + timedelta(milliseconds=int(value))
    except (TypeError, ValueError, OverflowError) as e:
        raise FormatError(f"Invalid dateLastModified: {value!r}") from e


class ProjectJsonSerialiser:
    """Converts projects to and from the versioned JSON payload"""

    @staticmethod
    def serialise(project: Project, indent: bool = False) -> str:
        return to_json(ProjectJsonSerialiser.to_serialisable(project), indent)

    @staticmethod
    def deserialise(json_string: str) -> Project:
        return ProjectJsonSerialiser.from_serialisable(parse_json(json_string, 'project'))

    @staticmethod
    def to_serialisable(project: Project) -> dict:
        return {
            'id': project.id,
            'version': PROJECT_VERSION,
            'title': project.title,
            'systemType': project.system_type,
            'dateLastModified': to_epoch_millis(project.date_last_modified),
            'tileSet': TileSetJsonSerialiser.to_serialisable(project.tile_set),
            'tileMapList': TileMapListJsonSerialiser.to_serialisable(project.tile_map_list),
            'paletteList': PaletteListJsonSerialiser.to_serialisable(project.palette_list),
        }

    @staticmethod
    def from_serialisable(serialisable: dict) -> Project:
        payload = migrate_project_payload(serialisable)
        if 'tileSet' not in payload:
            raise FormatError("Project has no tile set")
        return Project(
            project_id=payload.get('id'),
            title=payload.get('title'),
            system_type=payload.get('systemType'),
            tile_set=TileSetJsonSerialiser.from_serialisable(payload['tileSet']),
            palette_list=PaletteListJsonSerialiser.from_serialisable(payload.get('paletteList')),
            tile_map_list=TileMapListJsonSerialiser.from_serialisable(payload.get('tileMapList')),
            date_last_modified=from_epoch_millis(payload.get('dateLastModified')),
        )


class ProjectEntryJsonSerialiser:

    @staticmethod
    def to_serialisable(entry: ProjectEntry) -> dict:
        return {
            'id': entry.id,
            'title': entry.title,
            'systemType': entry.system_type,
            'dateLastModified': to_epoch_millis(entry.date_last_modified),
        }

    @staticmethod
    def from_serialisable(serialisable: dict) -> ProjectEntry:
        serialisable = require_dict(serialisable, 'project entry')
        if not serialisable.get('id'):
            raise FormatError("Project entry has no id")
        return ProjectEntry(
            id=serialisable['id'],
            title=serialisable.get('title') or DEFAULT_PROJECT_TITLE,
            system_type=normalise_system_type(serialisable.get('systemType')),
            date_last_modified=from_epoch_millis(serialisable.get('dateLastModified')),
        )


class ProjectEntryListJsonSerialiser:

    @staticmethod
    def serialise(entry_list: ProjectEntryList) -> str:
        return to_json(ProjectEntryListJsonSerialiser.to_serialisable(entry_list))

    @staticmethod
    def deserialise(json_string: str) -> ProjectEntryList:
        return ProjectEntryListJsonSerialiser.from_serialisable(parse_json(json_string, 'project entry list'))

    @staticmethod
    def to_serialisable(entry_list: ProjectEntryList) -> list:
        return [ProjectEntryJsonSerialiser.to_serialisable(entry) for entry in entry_list]

    @staticmethod
    def from_serialisable(serialisable: Optional[list]) -> ProjectEntryList:
        return ProjectEntryList([ProjectEntryJsonSerialiser.from_serialisable(item)
                                 for item in list_items(serialisable, 'project entry')])
