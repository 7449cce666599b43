#!/usr/bin/env python3
"""
Unit tests for brush painting and colour replacement
"""

import numpy as np
import pytest

from smsgfx.exceptions import OutOfRangeError, ValidationError
from smsgfx.models.tile import Tile
from smsgfx.models.tile_set import TileSet
from smsgfx.paint import brush_pixels, draw_on_tile_set, replace_colour_on_tile_set


class TestBrushPixels:
    """Test the brush footprint"""

    def test_single_pixel(self):
        """Size 1 covers the pointer only"""
        assert brush_pixels(5, 5, 1) == [(5, 5)]

    def test_even_size_extends_up_and_left(self):
        """Size 2 covers the pointer and the pixels before it"""
        assert brush_pixels(5, 5, 2) == [(4, 4), (5, 4), (4, 5), (5, 5)]

    def test_size_three_is_square(self):
        """Small brushes keep their corners"""
        pixels = brush_pixels(5, 5, 3)
        assert len(pixels) == 9
        assert (4, 4) in pixels
        assert (6, 6) in pixels

    @pytest.mark.parametrize("size,count", [(4, 12), (5, 21)])
    def test_large_brushes_drop_corners(self, size, count):
        """First and last rows lose one pixel at each end"""
        pixels = brush_pixels(5, 5, size)
        start = 5 - size // 2
        end = 5 + (size + 1) // 2 - 1
        assert len(pixels) == count
        for corner in [(start, start), (end, start), (start, end), (end, end)]:
            assert corner not in pixels
        assert (start, 5) in pixels

    @pytest.mark.parametrize("size", [0, 101])
    def test_invalid_size(self, size):
        """Brush sizes are 1-100"""
        with pytest.raises(ValidationError, match="Brush size"):
            brush_pixels(0, 0, size)


class TestDrawOnTileSet:
    """Test painting with a brush"""

    def test_single_pixel_reports_tile(self, blank_tile_set):
        """A changed pixel reports its tile"""
        assert draw_on_tile_set(blank_tile_set, 9, 1, 3) == [1]
        assert blank_tile_set.get_pixel_at(9, 1) == 3

    def test_unchanged_pixel_reports_nothing(self, blank_tile_set):
        """Painting the existing colour affects no tiles"""
        assert draw_on_tile_set(blank_tile_set, 9, 1, 0) == []

    def test_brush_crosses_tile_corner(self, blank_tile_set):
        """Affected tiles are listed once each, in the order first touched"""
        assert draw_on_tile_set(blank_tile_set, 8, 8, 6, brush_size=3) == [0, 1, 4, 5]
        assert blank_tile_set.get_pixel_at(7, 7) == 6
        assert blank_tile_set.get_pixel_at(9, 9) == 6
        assert blank_tile_set.get_pixel_at(10, 10) == 0

    def test_brush_limited_to_origin_tile(self, blank_tile_set):
        """Neighbouring tiles are left alone when asked"""
        affected = draw_on_tile_set(blank_tile_set, 8, 8, 6, brush_size=3, affect_adjacent_tiles=False)
        assert affected == [5]
        assert blank_tile_set.get_pixel_at(7, 7) == 0
        assert blank_tile_set.get_pixel_at(9, 9) == 6
        assert np.count_nonzero(blank_tile_set.read_pixels()) == 4

    def test_brush_clipped_at_edges(self, blank_tile_set):
        """Brush pixels past the grid are skipped"""
        assert draw_on_tile_set(blank_tile_set, 0, 0, 2, brush_size=5) == [0]
        assert np.count_nonzero(blank_tile_set.read_pixels()) == 8
        assert draw_on_tile_set(blank_tile_set, 31, 15, 2, brush_size=5) == [7]

    def test_brush_skips_missing_tiles(self):
        """Empty cells of the last row are not painted"""
        tile_set = TileSet(2, [Tile(), Tile(), Tile()])
        assert draw_on_tile_set(tile_set, 8, 7, 4, brush_size=3) == [0, 1, 2]
        assert tile_set.get_pixel_at(8, 8) is None

    def test_origin_in_missing_tile(self):
        """A pointer over an empty cell paints nothing"""
        tile_set = TileSet(2, [Tile(), Tile(), Tile()])
        assert draw_on_tile_set(tile_set, 12, 12, 4, brush_size=5) == []
        assert tile_set.get_pixel_at(7, 7) == 0

    def test_origin_outside_grid(self, blank_tile_set):
        """Test that the pointer must be on the grid"""
        with pytest.raises(OutOfRangeError):
            draw_on_tile_set(blank_tile_set, 32, 0, 1)

    def test_invalid_arguments_change_nothing(self, blank_tile_set):
        """Bad colours and brush sizes raise before painting"""
        with pytest.raises(ValidationError):
            draw_on_tile_set(blank_tile_set, 8, 8, 16, brush_size=3)
        with pytest.raises(ValidationError, match="Brush size"):
            draw_on_tile_set(blank_tile_set, 8, 8, 1, brush_size=101)
        assert np.count_nonzero(blank_tile_set.read_pixels()) == 0


class TestReplaceColourOnTileSet:
    """Test painting over a single colour"""

    def test_only_source_colour_changes(self):
        """Pixels of other colours survive the stroke"""
        tile_set = TileSet(1, [Tile([1] * 64)])
        tile_set.set_pixel_at(0, 0, 2)
        assert replace_colour_on_tile_set(tile_set, 1, 1, 1, 7, brush_size=3) == [0]
        assert tile_set.get_pixel_at(0, 0) == 2
        assert tile_set.get_pixel_at(2, 2) == 7
        assert tile_set.get_pixel_at(3, 3) == 1

    def test_missing_source_colour(self, blank_tile_set):
        """Nothing changes when the source colour is absent"""
        assert replace_colour_on_tile_set(blank_tile_set, 8, 8, 4, 9, brush_size=3) == []

    def test_single_pixel(self, blank_tile_set):
        """Size 1 replaces the pointer pixel when it matches"""
        assert replace_colour_on_tile_set(blank_tile_set, 20, 12, 0, 5) == [6]
        assert replace_colour_on_tile_set(blank_tile_set, 20, 12, 0, 5) == []

    def test_limited_to_origin_tile(self, blank_tile_set):
        """Neighbouring tiles are left alone when asked"""
        affected = replace_colour_on_tile_set(blank_tile_set, 8, 8, 0, 3, brush_size=4,
                                              affect_adjacent_tiles=False)
        assert affected == [5]
        assert blank_tile_set.get_pixel_at(7, 8) == 0

    @pytest.mark.parametrize("source,replacement", [(-1, 0), (0, 16)])
    def test_invalid_colours(self, blank_tile_set, source, replacement):
        """Test that both colours must be 0-15"""
        with pytest.raises(ValidationError):
            replace_colour_on_tile_set(blank_tile_set, 0, 0, source, replacement)
