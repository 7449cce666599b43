"""
Shared pytest fixtures for smsgfx tests
"""

import os
import tempfile
from pathlib import Path

# Headless Qt for qtbot, set before any QApplication exists
os.environ.setdefault("QT_QPA_PLATFORM", "offscreen")
os.environ.setdefault("QT_LOGGING_RULES", "*.debug=false")

import pytest

from smsgfx.config import AppConfig
from smsgfx.models.palette import Palette, PaletteList, create_standard_palette
from smsgfx.models.project import Project
from smsgfx.models.tile import Tile
from smsgfx.models.tile_map import TileMap, TileMapList, TileMapTile
from smsgfx.models.tile_set import TileSet


@pytest.fixture
def temp_dir():
    """Create a temporary directory for test files"""
    with tempfile.TemporaryDirectory() as tmpdir:
        yield Path(tmpdir)


@pytest.fixture
def app_config(temp_dir):
    """Configuration pointing at a temporary data directory"""
    return AppConfig(data_dir=temp_dir / "projects", undo_step_count=5)


@pytest.fixture
def sequential_tile():
    """Tile whose pixels are 0-15 repeating"""
    return Tile([i % 16 for i in range(64)])


@pytest.fixture
def blank_tile_set():
    """4 tiles wide, 2 tiles high, all zero"""
    return TileSet(4, [Tile() for _ in range(8)])


@pytest.fixture
def ms_palette():
    """Master System palette with a handful of colours"""
    palette = Palette('ms', 0, 'Test')
    palette.load_master_system_palette([0x00, 0x03, 0x0C, 0x30, 0x3F])
    return palette


@pytest.fixture
def sample_project(sequential_tile, ms_palette):
    """Small project with a tile set, two palettes and a tile map"""
    tile_set = TileSet(2, [sequential_tile, Tile([5] * 64), Tile()])
    palette_list = PaletteList([ms_palette, create_standard_palette('ms', 1)])
    tile_map = TileMap(2, tile_map_id='map00000000000001', title='Screen', tiles=[
        TileMapTile(0), TileMapTile(1, palette=1), TileMapTile(2, horizontal_flip=True), TileMapTile(1, priority=True),
    ])
    return Project(project_id='abcdef0123456789', title='Sample', system_type='smsgg',
                   tile_set=tile_set, palette_list=palette_list,
                   tile_map_list=TileMapList([tile_map]))
