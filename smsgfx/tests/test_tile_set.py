#!/usr/bin/env python3
"""
Unit tests for the TileSet model
Tests geometry, pixel addressing and structural changes
"""

from unittest.mock import Mock

import numpy as np
import pytest

from smsgfx.exceptions import OutOfRangeError, ValidationError
from smsgfx.models.tile import Tile
from smsgfx.models.tile_grid_provider import TileGridProvider
from smsgfx.models.tile_set import TileSet, TileSetList


class TestTileSetGeometry:
    """Test derived geometry"""

    def test_empty_tile_set(self):
        """An empty tile set has no rows"""
        tile_set = TileSet(4)
        assert tile_set.tile_count == 0
        assert tile_set.tile_height == 0
        assert tile_set.total_pixels == 0

    def test_height_rounds_up(self):
        """A partial last row still counts as a row"""
        tile_set = TileSet(4, [Tile() for _ in range(9)])
        assert tile_set.tile_height == 3
        assert tile_set.row_count == 3
        assert tile_set.width_px == 32
        assert tile_set.height_px == 24
        assert tile_set.total_pixels == 32 * 24

    def test_geometry_follows_add_and_remove(self, blank_tile_set):
        """Structural changes recompute the height"""
        assert blank_tile_set.tile_height == 2
        blank_tile_set.add_tile(Tile())
        assert blank_tile_set.tile_height == 3
        blank_tile_set.remove_tile(0)
        assert blank_tile_set.tile_height == 2
        blank_tile_set.insert_tile_at(Tile(), 0)
        assert blank_tile_set.tile_height == 3
        blank_tile_set.clear()
        assert blank_tile_set.tile_height == 0

    def test_geometry_follows_width(self, blank_tile_set):
        """Changing the width recomputes the height"""
        blank_tile_set.tile_width = 8
        assert blank_tile_set.tile_height == 1
        blank_tile_set.column_count = 3
        assert blank_tile_set.tile_width == 3
        assert blank_tile_set.tile_height == 3

    @pytest.mark.parametrize("width", [0, -1])
    def test_invalid_width(self, width):
        """Test that the width must be positive"""
        with pytest.raises(ValidationError):
            TileSet(width)

    def test_is_a_tile_grid_provider(self, blank_tile_set):
        """TileSet implements the grid interface"""
        assert isinstance(blank_tile_set, TileGridProvider)
        info = blank_tile_set.get_tile_info_by_pixel(9, 8)
        assert (info.tile_index, info.row, info.column) == (5, 1, 1)
        assert blank_tile_set.get_tile_id_indexes(3) == [3]


class TestTileSetPixels:
    """Test pixel addressing"""

    def test_pixel_round_trip(self, blank_tile_set):
        """Every pixel written can be read back"""
        for y in range(blank_tile_set.height_px):
            for x in range(blank_tile_set.width_px):
                blank_tile_set.set_pixel_at(x, y, (x + y) % 16)
        for y in range(blank_tile_set.height_px):
            for x in range(blank_tile_set.width_px):
                assert blank_tile_set.get_pixel_at(x, y) == (x + y) % 16

    def test_pixel_maps_to_tile_and_byte(self, blank_tile_set):
        """Pixel (x, y) lives in tile (y//8)*width + x//8 at byte (y%8)*8 + x%8"""
        blank_tile_set.set_pixel_at(13, 10, 7)
        tile = blank_tile_set.get_tile(1 * 4 + 1)
        assert tile.read_at(2 * 8 + 5) == 7

    @pytest.mark.parametrize("colour", [-1, 16])
    def test_set_pixel_rejects_colour(self, blank_tile_set, colour):
        """Test that palette indexes are 0-15"""
        with pytest.raises(ValidationError):
            blank_tile_set.set_pixel_at(0, 0, colour)

    @pytest.mark.parametrize("x,y", [(32, 0), (0, 16), (-1, 0)])
    def test_pixel_outside_grid(self, blank_tile_set, x, y):
        """Test that coordinates outside the grid raise"""
        with pytest.raises(OutOfRangeError):
            blank_tile_set.get_pixel_at(x, y)

    def test_ragged_last_row(self):
        """Cells past the last tile read as None and ignore writes"""
        tile_set = TileSet(2, [Tile(), Tile(), Tile()])
        assert tile_set.get_pixel_at(12, 12) is None
        assert tile_set.set_pixel_at(12, 12, 3) is False
        assert tile_set.get_tile_index_by_coordinate(12, 12) is None
        assert tile_set.get_tile_index_by_coordinate(4, 12) == 2

    def test_read_pixels(self):
        """Test the 2-D pixel array"""
        tile_set = TileSet(2, [Tile([1] * 64), Tile([2] * 64), Tile([3] * 64)])
        pixels = tile_set.read_pixels()
        assert pixels.shape == (16, 16)
        assert pixels[0, 0] == 1
        assert pixels[0, 8] == 2
        assert pixels[8, 0] == 3
        assert pixels[8, 8] == 0

    def test_replace_and_swap_colours(self):
        """Colour changes apply to every tile"""
        tile_set = TileSet(2, [Tile([1] * 64), Tile([2] * 64)])
        assert tile_set.swap_colour_index(1, 2) == 128
        assert tile_set.get_pixel_at(0, 0) == 2
        assert tile_set.replace_colour_index(2, 5) == 64
        assert tile_set.get_pixel_at(0, 0) == 5


class TestTileSetStructure:
    """Test structural operations"""

    def test_fill_from_array_chunks(self):
        """Each 64 values become one tile"""
        tile_set = TileSet(2)
        tile_set.fill_from_array([1] * 64 + [2] * 64 + [3] * 10)
        assert tile_set.tile_count == 3
        assert tile_set.get_tile(1).read_at(0) == 2
        assert tile_set.get_tile(2).read_at(9) == 3
        assert tile_set.get_tile(2).read_at(10) == 0
        assert tile_set.tile_height == 2

    def test_parse_planar_format(self):
        """Each 32 byte group becomes one tile in stream order"""
        tile_set = TileSet.parse_planar_format(bytes(32) + b"\xff" * 32, tile_width=1)
        assert tile_set.tile_count == 2
        assert np.all(tile_set.get_tile(0).read_all() == 0)
        assert np.all(tile_set.get_tile(1).read_all() == 15)
        assert tile_set.to_planar_format() == bytes(32) + b"\xff" * 32

    @pytest.mark.parametrize("index", [-1, 8])
    def test_get_and_remove_out_of_range(self, blank_tile_set, index):
        """Test that bad tile indexes raise"""
        with pytest.raises(OutOfRangeError):
            blank_tile_set.get_tile(index)
        with pytest.raises(OutOfRangeError):
            blank_tile_set.remove_tile(index)

    def test_insert_out_of_range(self, blank_tile_set):
        """Test inserting past the end"""
        with pytest.raises(OutOfRangeError):
            blank_tile_set.insert_tile_at(Tile(), 9)

    def test_insert_at_end(self, blank_tile_set):
        """Inserting at the length appends"""
        tile = Tile([4] * 64)
        blank_tile_set.insert_tile_at(tile, 8)
        assert blank_tile_set.get_tile(8) is tile

    def test_tile_cannot_be_added_twice(self, blank_tile_set):
        """A tile belongs to one position only"""
        with pytest.raises(ValidationError):
            blank_tile_set.add_tile(blank_tile_set.get_tile(0))

    def test_tile_cannot_be_shared(self):
        """A tile owned by one tile set is refused by another"""
        tile = Tile()
        first = TileSet(1, [tile])
        second = TileSet(1)
        with pytest.raises(ValidationError, match="another tile set"):
            second.add_tile(tile)
        with pytest.raises(ValidationError, match="another tile set"):
            TileSet(1, [tile])
        second.add_tile(tile.copy())
        second.set_pixel_at(0, 0, 9)
        assert first.get_pixel_at(0, 0) == 0

    def test_released_tiles_can_move(self, blank_tile_set):
        """Removed or replaced tiles may join another tile set"""
        other = TileSet(1)
        removed = blank_tile_set.remove_tile(0)
        other.add_tile(removed)
        replaced = blank_tile_set.get_tile(0)
        blank_tile_set.set_tile(0, Tile([1] * 64))
        other.add_tile(replaced)
        assert other.tile_count == 2

    def test_clear_releases_tiles(self, blank_tile_set):
        """Cleared tiles no longer belong to the tile set"""
        tiles = blank_tile_set.get_tiles()
        blank_tile_set.clear()
        assert TileSet(4, tiles).tile_count == 8

    def test_set_tile_rejects_foreign_tile(self, blank_tile_set):
        """set_tile keeps the old tile when the new one is owned elsewhere"""
        foreign = TileSet(1, [Tile([2] * 64)]).get_tile(0)
        original = blank_tile_set.get_tile(0)
        with pytest.raises(ValidationError):
            blank_tile_set.set_tile(0, foreign)
        assert blank_tile_set.get_tile(0) is original

    def test_get_tile_index(self, blank_tile_set):
        """Test looking up a tile's position"""
        tile = blank_tile_set.get_tile(3)
        assert blank_tile_set.get_tile_index(tile) == 3
        assert blank_tile_set.get_tile_index(Tile()) is None


class TestTileSetList:
    """Test the observable tile set list"""

    def test_changes_emit_signal(self):
        """Every structural change is announced"""
        tile_sets = TileSetList()
        handler = Mock()
        tile_sets.list_changed.connect(handler)

        tile_sets.add_tile_set(TileSet(1))
        tile_sets.insert_at(0, TileSet(2))
        tile_sets.remove_at(1)
        tile_sets.clear()

        actions = [call.args for call in handler.call_args_list]
        assert actions == [('add', 0), ('insert', 0), ('remove', 1), ('clear', -1)]

    def test_rejects_other_types(self):
        """Only tile sets may be added"""
        with pytest.raises(ValidationError):
            TileSetList().add("not a tile set")
