#!/usr/bin/env python3
"""
Command line interface for smsgfx projects
"""

import argparse
import sys
from pathlib import Path
from typing import List, Optional

from PIL import Image

from .assembly_utility import AssemblyUtility
from .config import AppConfig, load_config
from .constants import PALETTE_SYSTEMS, SYSTEM_GAME_GEAR, SYSTEM_TYPES
from .exceptions import SmsGfxError, format_error_message
from .fill import fill_tile_set
from .logging_config import setup_logging
from .models.palette import Palette, PaletteList
from .models.project import create_project
from .models.tile_map import TileMap
from .models.tile_set import TileSet
from .paint import draw_on_tile_set, replace_colour_on_tile_set
from .project_store import ProjectStore, open_store
from .serialisers.assembly import AssemblySerialiser
from .tile_image import import_tile_set, render_tile_set


def _build_parser() -> argparse.ArgumentParser:
    parser = argparse.ArgumentParser(prog='smsgfx', description='Sega Master System / Game Gear tile tools')
    parser.add_argument('--data-dir', help='Project storage directory')
    parser.add_argument('--log-level', help='Log level (DEBUG, INFO, WARNING, ERROR)')
    commands = parser.add_subparsers(dest='command', required=True)

    new = commands.add_parser('new', help='Create a project')
    new.add_argument('--title')
    new.add_argument('--system-type', choices=SYSTEM_TYPES, default=SYSTEM_TYPES[0])
    new.add_argument('--palette-system', choices=PALETTE_SYSTEMS)
    new.add_argument('--tiles', type=int, default=64, help='Number of blank tiles')

    commands.add_parser('list', help='List stored projects')

    info = commands.add_parser('info', help='Show a project summary')
    info.add_argument('project_id')

    import_tiles = commands.add_parser('import-tiles', help='Import planar tiles from WLA-DX source')
    import_tiles.add_argument('project_id')
    import_tiles.add_argument('source', type=Path)
    import_tiles.add_argument('--replace', action='store_true', help='Replace the existing tiles')

    import_palette = commands.add_parser('import-palette', help='Import a palette from WLA-DX source')
    import_palette.add_argument('project_id')
    import_palette.add_argument('source', type=Path)
    import_palette.add_argument('--system', choices=PALETTE_SYSTEMS)
    import_palette.add_argument('--replace', action='store_true', help='Replace the existing palettes')

    import_image = commands.add_parser('import-image', help='Import tiles from an indexed PNG')
    import_image.add_argument('project_id')
    import_image.add_argument('image', type=Path)
    import_image.add_argument('--replace', action='store_true', help='Replace the existing tiles')

    export = commands.add_parser('export-asm', help='Export WLA-DX source')
    export.add_argument('project_id')
    export.add_argument('-o', '--output', type=Path, help='Output file (defaults to stdout)')

    render = commands.add_parser('render', help='Render the tile set to an indexed PNG')
    render.add_argument('project_id')
    render.add_argument('output', type=Path)
    render.add_argument('--palette', type=int, default=0, help='Palette list index')

    fill = commands.add_parser('fill', help='Flood fill the tile set')
    fill.add_argument('project_id')
    fill.add_argument('x', type=int)
    fill.add_argument('y', type=int)
    fill.add_argument('colour', type=int)

    draw = commands.add_parser('draw', help='Paint a brush stroke onto the tile set')
    draw.add_argument('project_id')
    draw.add_argument('x', type=int)
    draw.add_argument('y', type=int)
    draw.add_argument('colour', type=int)
    draw.add_argument('--brush', type=int, default=1, help='Brush size in pixels')
    draw.add_argument('--replace', type=int, metavar='SOURCE', help='Only paint over this colour')
    draw.add_argument('--single-tile', action='store_true', help='Leave neighbouring tiles untouched')

    map_tiles = commands.add_parser('map-tiles', help='Add a tile map covering the whole tile set')
    map_tiles.add_argument('project_id')
    map_tiles.add_argument('--title')
    map_tiles.add_argument('--palette', type=int, default=0, choices=(0, 1))
    map_tiles.add_argument('--vram-offset', type=int, default=0)

    return parser


def _cmd_new(args, config: AppConfig, store: ProjectStore) -> int:
    project = create_project(args.title, args.system_type,
                             args.palette_system or config.default_palette_system,
                             config.default_tile_width, args.tiles)
    store.save_project(project)
    print(project.id)
    return 0


def _cmd_list(args, config: AppConfig, store: ProjectStore) -> int:
    for entry in store.list_projects():
        print(f"{entry.id}  {entry.system_type:5}  {entry.date_last_modified:%Y-%m-%d %H:%M}  {entry.title}")
    return 0


def _cmd_info(args, config: AppConfig, store: ProjectStore) -> int:
    project = store.load_project(args.project_id)
    tile_set = project.tile_set
    print(f"Title:       {project.title}")
    print(f"System:      {project.system_type}")
    print(f"Tiles:       {tile_set.tile_count} ({tile_set.column_count}x{tile_set.row_count})")
    print(f"Palettes:    {len(project.palette_list)}")
    print(f"Tile maps:   {len(project.tile_map_list)}")
    return 0


def _cmd_import_tiles(args, config: AppConfig, store: ProjectStore) -> int:
    project = store.load_project(args.project_id)
    data = AssemblyUtility.read_as_uint8_array(args.source.read_text())
    imported = TileSet.parse_planar_format(data.tolist(), project.tile_set.tile_width)
    if args.replace:
        project.tile_set.clear()
    project.tile_set.add_tiles([tile.copy() for tile in imported])
    store.save_project(project)
    print(f"Imported {imported.tile_count} tiles")
    return 0


def _cmd_import_palette(args, config: AppConfig, store: ProjectStore) -> int:
    project = store.load_project(args.project_id)
    system = args.system or config.default_palette_system
    source = args.source.read_text()
    if system == SYSTEM_GAME_GEAR:
        values = AssemblyUtility.read_as_uint16_array(source)
    else:
        values = AssemblyUtility.read_as_uint8_array(source)
    palette = Palette(system)
    palette.load_native_palette(values.tolist())
    if args.replace:
        project.palette_list = PaletteList([palette])
    else:
        project.palette_list.add_palette(palette)
    store.save_project(project)
    print(f"Imported {min(len(values), 16)} colours")
    return 0


def _cmd_import_image(args, config: AppConfig, store: ProjectStore) -> int:
    project = store.load_project(args.project_id)
    with Image.open(args.image) as image:
        imported = import_tile_set(image, project.tile_set.tile_width)
    if args.replace:
        project.tile_set.clear()
    project.tile_set.add_tiles([tile.copy() for tile in imported])
    store.save_project(project)
    print(f"Imported {imported.tile_count} tiles")
    return 0


def _cmd_export_asm(args, config: AppConfig, store: ProjectStore) -> int:
    project = store.load_project(args.project_id)
    source = AssemblySerialiser.serialise(project)
    if args.output:
        args.output.write_text(source, newline='')
    else:
        sys.stdout.write(source)
    return 0


def _cmd_render(args, config: AppConfig, store: ProjectStore) -> int:
    project = store.load_project(args.project_id)
    palette = None
    if len(project.palette_list) > 0:
        palette = project.palette_list.get_palette(args.palette)
    render_tile_set(project.tile_set, palette).save(args.output, 'PNG')
    return 0


def _cmd_fill(args, config: AppConfig, store: ProjectStore) -> int:
    project = store.load_project(args.project_id)
    changed = fill_tile_set(project.tile_set, args.x, args.y, args.colour)
    if changed:
        store.save_project(project)
    print(f"Changed {len(changed)} pixels")
    return 0


def _cmd_draw(args, config: AppConfig, store: ProjectStore) -> int:
    project = store.load_project(args.project_id)
    affect_adjacent_tiles = not args.single_tile
    if args.replace is None:
        affected = draw_on_tile_set(project.tile_set, args.x, args.y, args.colour,
                                    args.brush, affect_adjacent_tiles)
    else:
        affected = replace_colour_on_tile_set(project.tile_set, args.x, args.y, args.replace, args.colour,
                                              args.brush, affect_adjacent_tiles)
    if affected:
        store.save_project(project)
    print(f"Changed tiles: {', '.join(str(index) for index in affected) or 'none'}")
    return 0


def _cmd_map_tiles(args, config: AppConfig, store: ProjectStore) -> int:
    project = store.load_project(args.project_id)
    tile_map = TileMap.from_tile_set(project.tile_set, args.palette, args.vram_offset, args.title)
    project.tile_map_list.add_tile_map(tile_map)
    store.save_project(project)
    print(tile_map.tile_map_id)
    return 0


COMMANDS = {
    'new': _cmd_new,
    'list': _cmd_list,
    'info': _cmd_info,
    'import-tiles': _cmd_import_tiles,
    'import-palette': _cmd_import_palette,
    'import-image': _cmd_import_image,
    'export-asm': _cmd_export_asm,
    'render': _cmd_render,
    'fill': _cmd_fill,
    'draw': _cmd_draw,
    'map-tiles': _cmd_map_tiles,
}


def main(argv: Optional[List[str]] = None, config: Optional[AppConfig] = None) -> int:
    args = _build_parser().parse_args(argv)

    config = config or load_config()
    if args.data_dir:
        config = config.with_overrides(data_dir=Path(args.data_dir))
    if args.log_level:
        config = config.with_overrides(log_level=args.log_level)
    setup_logging(config.log_level, config.log_file)

    store = open_store(config)
    try:
        return COMMANDS[args.command](args, config, store)
    except (SmsGfxError, OSError) as e:
        print(f"Error: {format_error_message(args.command, e)}", file=sys.stderr)
        return 1


if __name__ == "__main__":
    sys.exit(main())
