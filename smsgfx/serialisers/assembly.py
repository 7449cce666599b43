#!/usr/bin/env python3
"""
WLA-DX assembly export for Master System / Game Gear projects
"""

from typing import Iterable, List, Optional

from ..constants import BYTES_PER_PLANAR_TILE, SYSTEM_GAME_GEAR
from ..models.palette import PaletteList
from ..models.project import Project
from ..models.tile_map import TileMap
from ..models.tile_set import TileSet
from .binary import TileMapBinarySerialiser

HEADER = '; SEGA MASTER SYSTEM AND SEGA GAME GEAR ASSEMBLY FOR WLA-DX'
LINE_END = '\r\n'

SYSTEM_NAMES = {
    'ms': 'Sega Master System',
    'gg': 'Sega Game Gear',
}


class AssemblySerialiser:
    """Writes palettes, tiles and tile maps as WLA-DX data directives"""

    @staticmethod
    def serialise(project: Project, export_palettes: bool = True, export_tile_set: bool = True,
                  export_tile_maps: bool = True, tile_map_ids: Optional[Iterable[str]] = None) -> str:
        """
        Export a project.

        Args:
            project: Project to export
            export_palettes: Include the palette section
            export_tile_set: Include the tile section
            export_tile_maps: Include the tile map section
            tile_map_ids: Tile maps to include, all of them when None

        Returns:
            Assembly source with CRLF line endings
        """
        sections = [HEADER, '']
        if export_palettes:
            sections.extend([AssemblySerialiser.export_palettes(project.palette_list), ''])
        if export_tile_set:
            sections.extend([AssemblySerialiser.export_tile_set(project.tile_set), ''])
        if export_tile_maps:
            if tile_map_ids is None:
                tile_maps = project.tile_map_list.get_tile_maps()
            else:
                tile_maps = [tile_map for tile_map in
                             (project.tile_map_list.get_tile_map_by_id(i) for i in tile_map_ids)
                             if tile_map is not None]
            sections.extend([AssemblySerialiser.export_tile_maps(tile_maps), ''])
        return LINE_END.join(sections)

    @staticmethod
    def export_palettes(palette_list: PaletteList) -> str:
        lines = ['; PALETTES']
        for number, palette in enumerate(palette_list):
            title = f' - {palette.title}' if palette.title else ''
            lines.append(f'; Palette {number:02d} - {SYSTEM_NAMES[palette.system]}{title}')
            if palette.system == SYSTEM_GAME_GEAR:
                values = [f'${value:04X}' for value in palette.native_values()]
                lines.append(' '.join(['.dw'] + values))
            else:
                values = [f'${value:02X}' for value in palette.native_values()]
                lines.append(' '.join(['.db'] + values))
        return LINE_END.join(lines)

    @staticmethod
    def export_tile_set(tile_set: TileSet) -> str:
        lines = ['; TILES']
        encoded = tile_set.to_planar_format()
        for index in range(len(tile_set)):
            lines.append(f'; Tile index ${index:03x}')
            start = index * BYTES_PER_PLANAR_TILE
            tile_bytes = encoded[start:start + BYTES_PER_PLANAR_TILE]
            values = [f'${value:02X}' for value in tile_bytes]
            lines.append(' '.join(['.db'] + values))
        return LINE_END.join(lines)

    @staticmethod
    def export_tile_maps(tile_maps: List[TileMap]) -> str:
        lines = ['; TILE MAPS']
        for number, tile_map in enumerate(tile_maps):
            lines.append(f'; Tile map {number:02d} - {tile_map.title or "(Not named)"}')
            for row in range(tile_map.row_count):
                words = [TileMapBinarySerialiser.encode_tile(tile) for tile in tile_map.get_tile_map_row(row)]
                lines.append(' '.join(['.dw'] + [f'${word:04X}' for word in words]))
        return LINE_END.join(lines)
