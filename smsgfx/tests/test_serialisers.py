#!/usr/bin/env python3
"""
Unit tests for the JSON and binary serialisers
Includes project payload versioning
"""

import json
from datetime import datetime, timezone

import pytest

from smsgfx.constants import PROJECT_VERSION
from smsgfx.exceptions import FormatError, ValidationError
from smsgfx.models.palette import Palette, PaletteList
from smsgfx.models.project import ProjectEntry, ProjectEntryList
from smsgfx.models.tile import Tile
from smsgfx.models.tile_map import TileMap, TileMapTile
from smsgfx.models.tile_set import TileSet, TileSetList
from smsgfx.models.ui_state import PersistentUIState
from smsgfx.serialisers import (
    PaletteJsonSerialiser,
    PaletteListJsonSerialiser,
    PersistentUIStateJsonSerialiser,
    ProjectEntryListJsonSerialiser,
    ProjectJsonSerialiser,
    TileMapBinarySerialiser,
    TileMapJsonSerialiser,
    TileSetBinarySerialiser,
    TileSetJsonSerialiser,
    TileSetListJsonSerialiser,
    migrate_project_payload,
)


def _v1_payload():
    return {
        'version': 1,
        'title': 'Legacy',
        'tileSet': {'tileWidth': 3, 'tilesAsHex': [Tile([1] * 64).to_hex_string()]},
        'paletteList': [],
    }


class TestProjectJsonSerialiser:
    """Test project round trips"""

    def test_payload_fields(self, sample_project):
        """The payload carries the current version and metadata"""
        payload = ProjectJsonSerialiser.to_serialisable(sample_project)
        assert payload['id'] == 'abcdef0123456789'
        assert payload['version'] == PROJECT_VERSION == 2
        assert payload['title'] == 'Sample'
        assert payload['systemType'] == 'smsgg'
        assert isinstance(payload['dateLastModified'], int)
        assert payload['tileSet']['columnCount'] == 2
        assert len(payload['tileSet']['tilesAsHex']) == 3
        assert len(payload['paletteList']) == 2
        assert len(payload['tileMapList']) == 1

    def test_round_trip(self, sample_project):
        """from_serialisable(to_serialisable(p)) is equivalent to p"""
        restored = ProjectJsonSerialiser.from_serialisable(
            ProjectJsonSerialiser.to_serialisable(sample_project))
        assert restored.id == sample_project.id
        assert restored.title == sample_project.title
        assert restored.system_type == sample_project.system_type
        assert restored.date_last_modified == sample_project.date_last_modified
        assert restored.tile_set == sample_project.tile_set
        assert restored.palette_list.get_palettes() == sample_project.palette_list.get_palettes()
        assert restored.tile_map_list.get_tile_maps() == sample_project.tile_map_list.get_tile_maps()

    def test_string_round_trip(self, sample_project):
        """serialise and deserialise go through JSON text"""
        text = ProjectJsonSerialiser.serialise(sample_project, indent=True)
        assert json.loads(text)['title'] == 'Sample'
        assert ProjectJsonSerialiser.deserialise(text).tile_set == sample_project.tile_set

    def test_missing_optional_fields(self):
        """Missing lists default to empty and a missing id is generated"""
        project = ProjectJsonSerialiser.from_serialisable({
            'version': 2,
            'tileSet': {'columnCount': 1, 'tilesAsHex': []},
        })
        assert len(project.id) == 16
        assert len(project.palette_list) == 0
        assert len(project.tile_map_list) == 0
        assert project.title == 'New project'
        assert project.system_type == 'smsgg'

    def test_unknown_system_type_falls_back(self):
        """Unknown system types become smsgg"""
        project = ProjectJsonSerialiser.from_serialisable({
            'version': 2, 'systemType': 'amiga',
            'tileSet': {'columnCount': 1, 'tilesAsHex': []},
        })
        assert project.system_type == 'smsgg'

    def test_date_is_epoch_millis(self, sample_project):
        """dateLastModified is milliseconds since the epoch"""
        sample_project.date_last_modified = datetime(2024, 1, 2, 3, 4, 5, 6000, tzinfo=timezone.utc)
        payload = ProjectJsonSerialiser.to_serialisable(sample_project)
        assert payload['dateLastModified'] == 1704164645006

    def test_missing_tile_set(self):
        """A project without a tile set is invalid"""
        with pytest.raises(FormatError):
            ProjectJsonSerialiser.from_serialisable({'version': 2})

    @pytest.mark.parametrize("text", ["", "{not json", None])
    def test_invalid_json(self, text):
        """Bad input raises a format error"""
        with pytest.raises(FormatError):
            ProjectJsonSerialiser.deserialise(text)


class TestProjectMigration:
    """Test version upgrades"""

    def test_v1_to_v2(self):
        """tileWidth is renamed to columnCount"""
        migrated = migrate_project_payload(_v1_payload())
        assert migrated['version'] == 2
        assert migrated['tileSet']['columnCount'] == 3
        assert 'tileWidth' not in migrated['tileSet']

    def test_migration_does_not_modify_input(self):
        """The caller's payload is left untouched"""
        payload = _v1_payload()
        migrate_project_payload(payload)
        assert payload['tileSet']['tileWidth'] == 3

    def test_migration_is_idempotent(self):
        """Migrating a current payload changes nothing"""
        once = migrate_project_payload(_v1_payload())
        assert migrate_project_payload(once) == once

    def test_current_version_untouched(self):
        """A v2 payload keeps fields even if they look legacy"""
        payload = {'version': 2, 'tileSet': {'columnCount': 4, 'tileWidth': 9, 'tilesAsHex': []}}
        assert migrate_project_payload(payload)['tileSet']['tileWidth'] == 9

    def test_missing_version_is_v1(self):
        """Unversioned payloads are treated as version 1"""
        payload = _v1_payload()
        del payload['version']
        assert migrate_project_payload(payload)['tileSet']['columnCount'] == 3

    def test_newer_version_rejected(self):
        """Payloads from a newer format are refused"""
        with pytest.raises(FormatError, match="newer"):
            migrate_project_payload({'version': PROJECT_VERSION + 1})

    def test_v1_project_loads(self):
        """A v1 payload loads into a project"""
        project = ProjectJsonSerialiser.from_serialisable(_v1_payload())
        assert project.tile_set.tile_width == 3
        assert project.tile_set.get_pixel_at(0, 0) == 1


class TestListSerialisers:
    """Test list formats"""

    def test_palette_list_is_array_of_objects(self, ms_palette):
        """Palette lists serialise to an array of objects"""
        data = PaletteListJsonSerialiser.to_serialisable(PaletteList([ms_palette]))
        assert isinstance(data, list)
        assert data[0]['system'] == 'ms'
        assert data[0]['colours'][1] == {'r': 255, 'g': 0, 'b': 0, 'nativeColour': '03'}
        assert data[0]['colours'][5] is None

    def test_palette_list_accepts_encoded_strings(self, ms_palette):
        """Arrays of JSON encoded palettes are also accepted"""
        legacy = json.dumps([PaletteJsonSerialiser.serialise(ms_palette)])
        palettes = PaletteListJsonSerialiser.deserialise(legacy)
        assert palettes.get_palette(0) == ms_palette

    def test_palette_from_rgb_only(self):
        """Colours without a native value are quantized from r, g, b"""
        palette = PaletteJsonSerialiser.from_serialisable({
            'system': 'gg', 'index': 1, 'colours': [{'r': 255, 'g': 255, 'b': 0}],
        })
        assert palette.index == 1
        assert palette.get_colour(0).native_colour == '00ff'

    def test_palette_bad_colour(self):
        """Colours missing channels are rejected"""
        with pytest.raises(FormatError):
            PaletteJsonSerialiser.from_serialisable({'system': 'ms', 'colours': [{'r': 1}]})

    def test_tile_set_list_both_forms(self):
        """Tile set lists read objects and encoded strings"""
        tile_sets = TileSetList([TileSet(1, [Tile([2] * 64)])])
        as_objects = TileSetListJsonSerialiser.serialise(tile_sets)
        as_strings = json.dumps([TileSetJsonSerialiser.serialise(t) for t in tile_sets])
        first = TileSetListJsonSerialiser.deserialise(as_objects).get_tile_set(0)
        second = TileSetListJsonSerialiser.deserialise(as_strings).get_tile_set(0)
        assert first == second == tile_sets.get_tile_set(0)

    def test_list_must_be_array(self):
        """A list payload that is not an array is rejected"""
        with pytest.raises(FormatError):
            PaletteListJsonSerialiser.from_serialisable({'system': 'ms'})

    def test_tile_map_round_trip(self, sample_project):
        """Tile maps keep their id and cells"""
        tile_map = sample_project.tile_map_list.get_at(0)
        restored = TileMapJsonSerialiser.deserialise(TileMapJsonSerialiser.serialise(tile_map))
        assert restored == tile_map
        assert restored.tile_map_id == 'map00000000000001'

    @pytest.mark.parametrize("cell", [
        {'tileIndex': None}, {'tileIndex': 'x'}, {'tileIndex': [1]},
        {'palette': 'x'}, {'tileIndex': True},
    ])
    def test_tile_map_bad_cell_fields(self, cell):
        """Non integer cell fields are format errors"""
        with pytest.raises(FormatError, match="must be an integer"):
            TileMapJsonSerialiser.from_serialisable({'columns': 1, 'tiles': [cell]})

    def test_tile_map_bad_vram_offset(self):
        """A non integer VRAM offset is a format error"""
        with pytest.raises(FormatError, match="vramOffset"):
            TileMapJsonSerialiser.from_serialisable({'columns': 1, 'vramOffset': 'abc'})

    def test_tile_map_missing_cell_fields_default(self):
        """Absent cell fields fall back to zero"""
        tile_map = TileMapJsonSerialiser.from_serialisable({'columns': 1, 'tiles': [{}]})
        assert tile_map.get_tile(0) == TileMapTile()

    def test_project_entries(self):
        """Project entries keep their metadata"""
        when = datetime(2023, 5, 1, tzinfo=timezone.utc)
        entries = ProjectEntryList([ProjectEntry('aaaa', 'One', 'nes', when)])
        restored = ProjectEntryListJsonSerialiser.deserialise(ProjectEntryListJsonSerialiser.serialise(entries))
        assert restored.get_by_id('aaaa') == entries.get_by_id('aaaa')

    def test_tile_set_json_rejects_bad_width(self):
        """A tile set needs a column count"""
        with pytest.raises(FormatError):
            TileSetJsonSerialiser.from_serialisable({'tilesAsHex': []})


class TestUIStateSerialiser:
    """Test persistent UI state storage"""

    def test_round_trip(self):
        """Stored values come back"""
        state = PersistentUIState()
        state.scale = 4
        state.theme = 'dark'
        state.last_project_id = 'abc'
        restored = PersistentUIStateJsonSerialiser.deserialise(PersistentUIStateJsonSerialiser.serialise(state))
        assert restored.scale == 4
        assert restored.theme == 'dark'
        assert restored.last_project_id == 'abc'

    def test_invalid_values_keep_defaults(self):
        """Bad stored values fall back to the defaults"""
        restored = PersistentUIStateJsonSerialiser.from_serialisable({'scale': 0, 'theme': 'neon', 'unknown': 1})
        assert restored.scale == 10
        assert restored.theme == 'system'

    def test_uses_camel_case_keys(self):
        """Keys match the stored format"""
        data = PersistentUIStateJsonSerialiser.to_serialisable(PersistentUIState())
        assert data['importPaletteSystem'] == 'gg'
        assert data['showTileGrid'] is True


class TestBinarySerialisers:
    """Test VRAM formats"""

    def test_tile_map_word_bits(self):
        """Each attribute sets its bit"""
        encode = TileMapBinarySerialiser.encode_tile
        assert encode(TileMapTile(0x1FF)) == 0x01FF
        assert encode(TileMapTile(0, horizontal_flip=True)) == 0x0200
        assert encode(TileMapTile(0, vertical_flip=True)) == 0x0400
        assert encode(TileMapTile(0, palette=1)) == 0x0800
        assert encode(TileMapTile(0, priority=True)) == 0x1000

    def test_tile_map_bytes_little_endian(self):
        """Words are written low byte first"""
        tile_map = TileMap(2, tiles=[TileMapTile(1), TileMapTile(2, palette=1)])
        data = TileMapBinarySerialiser.serialise(tile_map)
        assert data == b'\x01\x00\x02\x08'
        restored = TileMapBinarySerialiser.deserialise(data, 2)
        assert restored.tiles == tile_map.tiles

    def test_tile_map_odd_length(self):
        """Half words are rejected"""
        with pytest.raises(FormatError):
            TileMapBinarySerialiser.deserialise(b'\x00', 1)

    def test_tile_set_planar(self):
        """Tile sets are written as 32 bytes per tile"""
        tile_set = TileSet(1, [Tile([15] * 64)])
        data = TileSetBinarySerialiser.serialise(tile_set)
        assert data == b'\xff' * 32
        assert TileSetBinarySerialiser.deserialise(data, 1) == tile_set

    def test_palette_system_required(self):
        """A palette payload needs a valid system"""
        with pytest.raises(ValidationError):
            PaletteJsonSerialiser.from_serialisable({'colours': []})
        assert Palette('ms') == PaletteJsonSerialiser.from_serialisable({'system': 'ms'})
