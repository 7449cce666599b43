#!/usr/bin/env python3
"""
Project model
The unit of persistence: one tile set, one palette list, one tile map list
"""

from dataclasses import dataclass, field
from datetime import datetime, timezone
from typing import List, Optional

from ..constants import (
    DEFAULT_PROJECT_TITLE,
    DEFAULT_TILE_COUNT,
    DEFAULT_TILE_WIDTH,
    PALETTE_SYSTEMS,
    SYSTEM_MASTER_SYSTEM,
    SYSTEM_TYPE_SMSGG,
    SYSTEM_TYPES,
)
from ..exceptions import OutOfRangeError, ValidationError
from .base_model import ItemListModel, generate_id
from .palette import PaletteList, create_standard_palette
from .tile import Tile
from .tile_map import TileMapList
from .tile_set import TileSet


def utc_now() -> datetime:
    """Current time truncated to whole milliseconds"""
    now = datetime.now(timezone.utc)
    return now.replace(microsecond=now.microsecond // 1000 * 1000)


def normalise_system_type(value: Optional[str]) -> str:
    """Unknown or missing system types fall back to 'smsgg'"""
    if isinstance(value, str) and value.lower() in SYSTEM_TYPES:
        return value.lower()
    return SYSTEM_TYPE_SMSGG


class Project:
    """Aggregate root for a tile graphics project"""

    def __init__(self, project_id: Optional[str] = None, title: Optional[str] = None,
                 system_type: Optional[str] = None, tile_set: Optional[TileSet] = None,
                 palette_list: Optional[PaletteList] = None,
                 tile_map_list: Optional[TileMapList] = None,
                 date_last_modified: Optional[datetime] = None):
        self.id = project_id or generate_id()
        self.title = title or DEFAULT_PROJECT_TITLE
        self.system_type = system_type
        self.tile_set = tile_set if tile_set is not None else TileSet()
        self.palette_list = palette_list if palette_list is not None else PaletteList()
        self.tile_map_list = tile_map_list if tile_map_list is not None else TileMapList()
        self.date_last_modified = date_last_modified or utc_now()

    def __repr__(self):
        return f"Project(id={self.id!r}, title={self.title!r}, system_type={self.system_type!r})"

    @property
    def system_type(self) -> str:
        return self._system_type

    @system_type.setter
    def system_type(self, value: Optional[str]):
        self._system_type = normalise_system_type(value)

    @property
    def tile_set(self) -> TileSet:
        return self._tile_set

    @tile_set.setter
    def tile_set(self, value: TileSet):
        if not isinstance(value, TileSet):
            raise ValidationError(f"Invalid tile set: {type(value).__name__}")
        self._tile_set = value

    @property
    def palette_list(self) -> PaletteList:
        return self._palette_list

    @palette_list.setter
    def palette_list(self, value: PaletteList):
        if not isinstance(value, PaletteList):
            raise ValidationError(f"Invalid palette list: {type(value).__name__}")
        self._palette_list = value

    @property
    def tile_map_list(self) -> TileMapList:
        return self._tile_map_list

    @tile_map_list.setter
    def tile_map_list(self, value: TileMapList):
        if not isinstance(value, TileMapList):
            raise ValidationError(f"Invalid tile map list: {type(value).__name__}")
        self._tile_map_list = value

    def touch(self):
        """Refresh the last modified time"""
        self.date_last_modified = utc_now()

    def to_entry(self) -> 'ProjectEntry':
        return ProjectEntry(self.id, self.title, self.system_type, self.date_last_modified)


def create_project(title: Optional[str] = None, system_type: str = SYSTEM_TYPE_SMSGG,
                   palette_system: str = SYSTEM_MASTER_SYSTEM,
                   tile_width: int = DEFAULT_TILE_WIDTH,
                   tile_count: int = DEFAULT_TILE_COUNT) -> Project:
    """
    Create a new project with blank tiles and the standard palette.

    Args:
        title: Project title, defaults to 'New project'
        system_type: 'smsgg', 'gb' or 'nes'
        palette_system: 'ms' or 'gg' for the starting palette
        tile_width: Tiles per row of the tile set
        tile_count: Number of blank tiles to start with
    """
    if palette_system not in PALETTE_SYSTEMS:
        raise ValidationError(f"Unknown palette system: {palette_system!r}")
    if tile_count < 0:
        raise ValidationError(f"Tile count must not be negative, got {tile_count}")
    tile_set = TileSet(tile_width, [Tile() for _ in range(tile_count)])
    palette_list = PaletteList([create_standard_palette(palette_system)])
    return Project(title=title, system_type=system_type, tile_set=tile_set,
                   palette_list=palette_list)


@dataclass
class ProjectEntry:
    """Summary of a stored project"""
    id: str
    title: str = DEFAULT_PROJECT_TITLE
    system_type: str = SYSTEM_TYPE_SMSGG
    date_last_modified: datetime = field(default_factory=utc_now)


class ProjectEntryList(ItemListModel):
    """Observable list of project entries, addressable by id"""

    item_type = ProjectEntry
    item_name = 'project entry'

    def get_entries(self) -> List[ProjectEntry]:
        return self.get_all()

    def get_by_id(self, project_id: str) -> Optional[ProjectEntry]:
        for entry in self._items:
            if entry.id == project_id:
                return entry
        return None

    def add_or_replace(self, entry: ProjectEntry):
        for i, existing in enumerate(self._items):
            if existing.id == entry.id:
                self.set_at(i, entry)
                return
        self.add(entry)

    def remove_by_id(self, project_id: str) -> ProjectEntry:
        for i, entry in enumerate(self._items):
            if entry.id == project_id:
                return self.remove_at(i)
        raise OutOfRangeError(f"No project entry with id {project_id!r}")
