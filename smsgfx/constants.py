#!/usr/bin/env python3
"""
Constants for the SMS/GG tile engine
All magic numbers and hardware specifications in one place
"""

# Tile specifications
TILE_WIDTH = 8  # pixels
TILE_HEIGHT = 8  # pixels
PIXELS_PER_TILE = 64  # 8x8
BYTES_PER_PLANAR_ROW = 4  # one byte per bit plane
BYTES_PER_PLANAR_TILE = 32  # 4 bits per pixel, 8x8 pixels
MAX_PIXEL_VALUE = 255  # a tile stores raw bytes
MAX_COLOUR_INDEX = 15  # 4bpp palette index

# Palette specifications
COLOURS_PER_PALETTE = 16
SYSTEM_MASTER_SYSTEM = 'ms'
SYSTEM_GAME_GEAR = 'gg'
PALETTE_SYSTEMS = (SYSTEM_MASTER_SYSTEM, SYSTEM_GAME_GEAR)
PALETTE_INDEXES = (0, 1)

# Master System colour: --BBGGRR
MS_CHANNEL_MASK = 0x03
MS_RED_SHIFT = 0
MS_GREEN_SHIFT = 2
MS_BLUE_SHIFT = 4
MS_CHANNEL_MAX = 3

# Game Gear colour: ----BBBBGGGGRRRR
GG_CHANNEL_MASK = 0x0F
GG_RED_SHIFT = 0
GG_GREEN_SHIFT = 4
GG_BLUE_SHIFT = 8
GG_CHANNEL_MAX = 15

RGB888_MAX_VALUE = 255

# Default palette shown for a new project (in hex)
STANDARD_COLOURS = (
    '#000000', '#000000', '#00AA00', '#00FF00',
    '#000055', '#0000FF', '#550000', '#00FFFF',
    '#AA0000', '#FF0000', '#555500', '#FFFF00',
    '#005500', '#FF00FF', '#555555', '#FFFFFF',
)

# Tile map name table entry bits
TILE_MAP_INDEX_MASK = 0x01FF  # bits 0-8
TILE_MAP_HFLIP_BIT = 0x0200
TILE_MAP_VFLIP_BIT = 0x0400
TILE_MAP_PALETTE_BIT = 0x0800
TILE_MAP_PRIORITY_BIT = 0x1000
MAX_TILE_MAP_INDEX = 511

# Tile set defaults
DEFAULT_TILE_WIDTH = 8  # tiles per row
DEFAULT_TILE_COUNT = 64

# Brush sizes in pixels
MIN_BRUSH_SIZE = 1
MAX_BRUSH_SIZE = 100

# Undo history
DEFAULT_UNDO_STEPS = 20
MAX_UNDO_STEPS = 100

# Projects
PROJECT_VERSION = 2
DEFAULT_PROJECT_TITLE = 'New project'
SYSTEM_TYPE_SMSGG = 'smsgg'
SYSTEM_TYPE_GB = 'gb'
SYSTEM_TYPE_NES = 'nes'
SYSTEM_TYPES = (SYSTEM_TYPE_SMSGG, SYSTEM_TYPE_GB, SYSTEM_TYPE_NES)
PROJECT_ID_LENGTH = 16

# UI state defaults
DEFAULT_SCALE = 10
MIN_SCALE = 1
MAX_SCALE = 50
THEMES = ('system', 'light', 'dark')
