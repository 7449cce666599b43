#!/usr/bin/env python3
"""
Palette models
16 colour tables quantized to Master System or Game Gear hardware colours
"""

from dataclasses import dataclass, replace
from typing import List, Optional, Sequence, Union

from ..constants import (
    COLOURS_PER_PALETTE,
    PALETTE_INDEXES,
    PALETTE_SYSTEMS,
    STANDARD_COLOURS,
    SYSTEM_GAME_GEAR,
    SYSTEM_MASTER_SYSTEM,
)
from ..exceptions import OutOfRangeError, ValidationError
from ..logging_config import get_logger
from ..palette_utils import (
    encode_native_colour,
    format_native_colour,
    hex_to_rgb,
    native_to_rgb888,
    rgb_to_hex,
)
from .base_model import ItemListModel

logger = get_logger(__name__)


@dataclass(frozen=True)
class PaletteColour:
    """A decoded hardware colour"""
    index: int
    native_colour: str  # lowercase hex of the raw hardware value
    r: int
    g: int
    b: int
    hex: str  # '#rrggbb'

    @property
    def native_value(self) -> int:
        return int(self.native_colour, 16)

    @classmethod
    def from_native(cls, system: str, index: int, native: int) -> 'PaletteColour':
        r, g, b = native_to_rgb888(system, native)
        return cls(index=index, native_colour=format_native_colour(system, native),
                   r=r, g=g, b=b, hex=rgb_to_hex(r, g, b))

    @classmethod
    def from_rgb(cls, system: str, index: int, r: int, g: int, b: int) -> 'PaletteColour':
        """Nearest hardware colour to an RGB888 value"""
        return cls.from_native(system, index, encode_native_colour(system, r, g, b))

    @classmethod
    def from_hex(cls, system: str, index: int, hex_colour: str) -> 'PaletteColour':
        return cls.from_rgb(system, index, *hex_to_rgb(hex_colour))


class Palette:
    """
    16 entry colour table.

    The system ('ms' or 'gg') is fixed for the life of the palette and
    decides how native colours expand to RGB. Unset slots hold None.
    """

    def __init__(self, system: str, index: int = 0, title: Optional[str] = None):
        self._system = _validate_system(system)
        self._index = _validate_index(index)
        self.title = title
        self._colours: List[Optional[PaletteColour]] = [None] * COLOURS_PER_PALETTE

    def __eq__(self, other):
        if not isinstance(other, Palette):
            return NotImplemented
        return (self._system, self._index, self.title, self._colours) == \
               (other._system, other._index, other.title, other._colours)

    def __repr__(self):
        return f"Palette(system={self._system!r}, index={self._index}, title={self.title!r})"

    @property
    def system(self) -> str:
        return self._system

    @system.setter
    def system(self, value: str):
        value = _validate_system(value)
        if value != self._system:
            raise ValidationError(f"Palette system is fixed as {self._system!r}")

    @property
    def index(self) -> int:
        return self._index

    @index.setter
    def index(self, value: int):
        self._index = _validate_index(value)

    @property
    def colours(self) -> List[Optional[PaletteColour]]:
        return list(self._colours)

    def get_colour(self, index: int) -> Optional[PaletteColour]:
        _check_colour_index(index)
        return self._colours[index]

    def set_colour(self, index: int, colour: Optional[PaletteColour]):
        _check_colour_index(index)
        if colour is not None and colour.index != index:
            colour = replace(colour, index=index)
        self._colours[index] = colour

    def set_native_colour(self, index: int, native: int):
        self.set_colour(index, PaletteColour.from_native(self._system, index, native))

    def set_rgb_colour(self, index: int, r: int, g: int, b: int):
        self.set_colour(index, PaletteColour.from_rgb(self._system, index, r, g, b))

    def load_master_system_palette(self, values: Sequence[int]):
        """Decode Master System colour bytes into the palette"""
        self._require_system(SYSTEM_MASTER_SYSTEM)
        self._load(values)

    def load_game_gear_palette(self, values: Sequence[int]):
        """Decode Game Gear colour words into the palette"""
        self._require_system(SYSTEM_GAME_GEAR)
        self._load(values)

    def load_native_palette(self, values: Sequence[int]):
        """Decode native colours using this palette's system"""
        self._load(values)

    def native_values(self) -> List[int]:
        """Raw hardware values, unset slots read as 0"""
        return [colour.native_value if colour else 0 for colour in self._colours]

    def copy(self) -> 'Palette':
        palette = Palette(self._system, self._index, self.title)
        palette._colours = list(self._colours)
        return palette

    def _require_system(self, system: str):
        if self._system != system:
            raise ValidationError(f"Cannot load {system!r} colours into a {self._system!r} palette")

    def _load(self, values: Sequence[int]):
        if len(values) > COLOURS_PER_PALETTE:
            logger.debug(f"Ignoring {len(values) - COLOURS_PER_PALETTE} colours past the first 16")
        colours: List[Optional[PaletteColour]] = [None] * COLOURS_PER_PALETTE
        for i, native in enumerate(list(values)[:COLOURS_PER_PALETTE]):
            colours[i] = PaletteColour.from_native(self._system, i, int(native))
        self._colours = colours


class PaletteList(ItemListModel):
    """Observable list of palettes"""

    item_type = Palette
    item_name = 'palette'

    def get_palette(self, index: int) -> Palette:
        return self.get_at(index)

    def get_palettes(self) -> List[Palette]:
        return self.get_all()

    def add_palette(self, palette: Union[Palette, Sequence[Palette]]):
        if isinstance(palette, Palette):
            self.add(palette)
        else:
            for item in palette:
                self.add(item)

    def set_palette(self, index: int, palette: Palette):
        self.set_at(index, palette)


def create_standard_palette(system: str = SYSTEM_MASTER_SYSTEM, index: int = 0,
                            title: Optional[str] = None) -> Palette:
    """The default palette given to new projects"""
    palette = Palette(system, index, title)
    for i, hex_colour in enumerate(STANDARD_COLOURS):
        palette.set_colour(i, PaletteColour.from_hex(system, i, hex_colour))
    return palette


def _validate_system(value: str) -> str:
    if not isinstance(value, str) or value.lower() not in PALETTE_SYSTEMS:
        raise ValidationError(f'System must be either "ms" or "gg", got {value!r}')
    return value.lower()


def _validate_index(value: int) -> int:
    if isinstance(value, bool) or value not in PALETTE_INDEXES:
        raise ValidationError(f'Palette index must be 0 or 1, got {value!r}')
    return value


def _check_colour_index(index: int):
    if index < 0 or index >= COLOURS_PER_PALETTE:
        raise OutOfRangeError(f"Colour index must be between 0 and {COLOURS_PER_PALETTE - 1}, got {index}")
