#!/usr/bin/env python3
"""
Palette JSON serialisers
"""

from typing import Optional

from ..exceptions import FormatError
from ..models.palette import Palette, PaletteColour, PaletteList
from .common import list_items, parse_json, require_dict, to_json


class PaletteJsonSerialiser:
    """Converts palettes to and from plain JSON data"""

    @staticmethod
    def serialise(palette: Palette) -> str:
        return to_json(PaletteJsonSerialiser.to_serialisable(palette))

    @staticmethod
    def deserialise(json_string: str) -> Palette:
        return PaletteJsonSerialiser.from_serialisable(parse_json(json_string, 'palette'))

    @staticmethod
    def to_serialisable(palette: Palette) -> dict:
        return {
            'title': palette.title,
            'system': palette.system,
            'index': palette.index,
            'colours': [_colour_to_serialisable(colour) for colour in palette.colours],
        }

    @staticmethod
    def from_serialisable(serialisable: dict) -> Palette:
        serialisable = require_dict(serialisable, 'palette')
        palette = Palette(serialisable.get('system'), serialisable.get('index', 0),
                          serialisable.get('title'))
        for index, colour in enumerate(serialisable.get('colours') or []):
            if colour is None:
                continue
            palette.set_colour(index, _colour_from_serialisable(palette.system, index, colour))
        return palette


class PaletteListJsonSerialiser:
    """Converts palette lists to and from an array of palette objects"""

    @staticmethod
    def serialise(palette_list: PaletteList) -> str:
        return to_json(PaletteListJsonSerialiser.to_serialisable(palette_list))

    @staticmethod
    def deserialise(json_string: str) -> PaletteList:
        return PaletteListJsonSerialiser.from_serialisable(parse_json(json_string, 'palette list'))

    @staticmethod
    def to_serialisable(palette_list: PaletteList) -> list:
        return [PaletteJsonSerialiser.to_serialisable(palette) for palette in palette_list]

    @staticmethod
    def from_serialisable(serialisable: Optional[list]) -> PaletteList:
        return PaletteList([PaletteJsonSerialiser.from_serialisable(item)
                            for item in list_items(serialisable, 'palette')])


def _colour_to_serialisable(colour: Optional[PaletteColour]) -> Optional[dict]:
    if colour is None:
        return None
    return {'r': colour.r, 'g': colour.g, 'b': colour.b, 'nativeColour': colour.native_colour}


def _colour_from_serialisable(system: str, index: int, colour: dict) -> PaletteColour:
    if not isinstance(colour, dict):
        raise FormatError(f"Serialised colour {index} must be an object")
    native = colour.get('nativeColour')
    if native is not None:
        try:
            return PaletteColour.from_native(system, index, int(str(native), 16))
        except ValueError as e:
            raise FormatError(f"Invalid native colour {native!r}") from e
    try:
        return PaletteColour.from_rgb(system, index, int(colour['r']), int(colour['g']), int(colour['b']))
    except (KeyError, TypeError) as e:
        raise FormatError(f"Serialised colour {index} needs r, g and b") from e
