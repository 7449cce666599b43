#!/usr/bin/env python3
"""
SMS/GG palette utilities
Conversions between native hardware colours and RGB888
"""

from typing import Tuple

from .constants import (
    GG_BLUE_SHIFT,
    GG_CHANNEL_MASK,
    GG_CHANNEL_MAX,
    GG_GREEN_SHIFT,
    GG_RED_SHIFT,
    MS_BLUE_SHIFT,
    MS_CHANNEL_MASK,
    MS_CHANNEL_MAX,
    MS_GREEN_SHIFT,
    MS_RED_SHIFT,
    RGB888_MAX_VALUE,
    SYSTEM_GAME_GEAR,
    SYSTEM_MASTER_SYSTEM,
)
from .exceptions import FormatError, ValidationError


def _expand(raw: int, channel_max: int) -> int:
    return int(RGB888_MAX_VALUE / channel_max * raw + 0.5)


def _quantize(channel: int, channel_max: int) -> int:
    return int(channel_max / RGB888_MAX_VALUE * channel + 0.5)


def ms_to_rgb888(native: int) -> Tuple[int, int, int]:
    """
    Convert a Master System colour byte to RGB888.

    Args:
        native: Colour byte, --BBGGRR

    Returns:
        Tuple of (r, g, b) values in 0-255 range
    """
    r = (native >> MS_RED_SHIFT) & MS_CHANNEL_MASK
    g = (native >> MS_GREEN_SHIFT) & MS_CHANNEL_MASK
    b = (native >> MS_BLUE_SHIFT) & MS_CHANNEL_MASK
    return (_expand(r, MS_CHANNEL_MAX), _expand(g, MS_CHANNEL_MAX), _expand(b, MS_CHANNEL_MAX))


def gg_to_rgb888(native: int) -> Tuple[int, int, int]:
    """
    Convert a Game Gear colour word to RGB888.

    Args:
        native: Colour word, ----BBBBGGGGRRRR

    Returns:
        Tuple of (r, g, b) values in 0-255 range
    """
    r = (native >> GG_RED_SHIFT) & GG_CHANNEL_MASK
    g = (native >> GG_GREEN_SHIFT) & GG_CHANNEL_MASK
    b = (native >> GG_BLUE_SHIFT) & GG_CHANNEL_MASK
    return (_expand(r, GG_CHANNEL_MAX), _expand(g, GG_CHANNEL_MAX), _expand(b, GG_CHANNEL_MAX))


def rgb888_to_ms(r: int, g: int, b: int) -> int:
    """Nearest Master System colour byte for an RGB888 colour"""
    return (_quantize(r, MS_CHANNEL_MAX) << MS_RED_SHIFT) | \
           (_quantize(g, MS_CHANNEL_MAX) << MS_GREEN_SHIFT) | \
           (_quantize(b, MS_CHANNEL_MAX) << MS_BLUE_SHIFT)


def rgb888_to_gg(r: int, g: int, b: int) -> int:
    """Nearest Game Gear colour word for an RGB888 colour"""
    return (_quantize(r, GG_CHANNEL_MAX) << GG_RED_SHIFT) | \
           (_quantize(g, GG_CHANNEL_MAX) << GG_GREEN_SHIFT) | \
           (_quantize(b, GG_CHANNEL_MAX) << GG_BLUE_SHIFT)


def native_to_rgb888(system: str, native: int) -> Tuple[int, int, int]:
    if system == SYSTEM_MASTER_SYSTEM:
        return ms_to_rgb888(native)
    if system == SYSTEM_GAME_GEAR:
        return gg_to_rgb888(native)
    raise ValidationError(f"Unknown palette system: {system!r}")


def encode_native_colour(system: str, r: int, g: int, b: int) -> int:
    """
    Quantize an RGB888 colour to the nearest native colour of a system.

    Args:
        system: 'ms' or 'gg'
        r, g, b: Channel values in 0-255 range

    Returns:
        Native colour value
    """
    for channel in (r, g, b):
        if not 0 <= channel <= RGB888_MAX_VALUE:
            raise ValidationError(f"Colour channel must be between 0 and 255, got {channel}")
    if system == SYSTEM_MASTER_SYSTEM:
        return rgb888_to_ms(r, g, b)
    if system == SYSTEM_GAME_GEAR:
        return rgb888_to_gg(r, g, b)
    raise ValidationError(f"Unknown palette system: {system!r}")


def format_native_colour(system: str, native: int) -> str:
    """Native colour as lowercase hex, 2 digits for ms and 4 for gg"""
    if system == SYSTEM_MASTER_SYSTEM:
        return f'{native & 0xFF:02x}'
    return f'{native & 0xFFFF:04x}'


def rgb_to_hex(r: int, g: int, b: int) -> str:
    """Return a '#rrggbb' string"""
    return f'#{r:02x}{g:02x}{b:02x}'


def hex_to_rgb(hex_colour: str) -> Tuple[int, int, int]:
    """
    Parse '#rrggbb' (or 'rrggbb') into channels.

    Raises:
        FormatError: If the value is not a 6 digit hex colour
    """
    value = hex_colour[1:] if hex_colour.startswith('#') else hex_colour
    if len(value) != 6:
        raise FormatError(f"Invalid hex colour: {hex_colour!r}")
    try:
        return (int(value[0:2], 16), int(value[2:4], 16), int(value[4:6], 16))
    except ValueError as e:
        raise FormatError(f"Invalid hex colour: {hex_colour!r}") from e
