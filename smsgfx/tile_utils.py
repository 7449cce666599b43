#!/usr/bin/env python3
"""
SMS/GG tile encoding/decoding utilities

The hardware stores a 4bpp tile as 8 rows of 4 bytes. Byte n of a row is
bit plane n, and bit 7 of every plane belongs to the leftmost pixel.
"""

import re
from typing import Iterable, List, Sequence

from .constants import (
    BYTES_PER_PLANAR_ROW,
    BYTES_PER_PLANAR_TILE,
    PIXELS_PER_TILE,
    TILE_HEIGHT,
    TILE_WIDTH,
)
from .exceptions import FormatError, ValidationError

_HEX_PATTERN = re.compile(r'[0-9a-fA-F]*')


def decode_planar_tile(data: Sequence[int], offset: int = 0) -> List[int]:
    """
    Decode a single 8x8 planar tile.

    Args:
        data: Raw tile data bytes
        offset: Starting offset in the data

    Returns:
        List of 64 pixel values (0-15)

    Raises:
        IndexError: If offset + BYTES_PER_PLANAR_TILE exceeds data length
    """
    if offset < 0 or offset + BYTES_PER_PLANAR_TILE > len(data):
        raise IndexError(f"Tile data out of bounds at offset {offset}")

    pixels = []
    for y in range(TILE_HEIGHT):
        row_offset = offset + y * BYTES_PER_PLANAR_ROW
        bp0, bp1, bp2, bp3 = data[row_offset:row_offset + BYTES_PER_PLANAR_ROW]
        for x in range(TILE_WIDTH):
            bit = 7 - x
            pixel = ((bp0 >> bit) & 1) | \
                    (((bp1 >> bit) & 1) << 1) | \
                    (((bp2 >> bit) & 1) << 2) | \
                    (((bp3 >> bit) & 1) << 3)
            pixels.append(pixel)
    return pixels


def encode_planar_tile(tile_pixels: Sequence[int]) -> bytes:
    """
    Encode an 8x8 tile to planar format.

    Args:
        tile_pixels: 64 pixel values, only the low 4 bits are kept

    Returns:
        32 bytes of encoded tile data

    Raises:
        ValidationError: If tile_pixels doesn't contain exactly 64 values
    """
    if len(tile_pixels) != PIXELS_PER_TILE:
        raise ValidationError(f"Expected {PIXELS_PER_TILE} pixels, got {len(tile_pixels)}")

    output = bytearray(BYTES_PER_PLANAR_TILE)
    for y in range(TILE_HEIGHT):
        row_offset = y * BYTES_PER_PLANAR_ROW
        for x in range(TILE_WIDTH):
            pixel = int(tile_pixels[y * TILE_WIDTH + x]) & 0x0F
            for plane in range(BYTES_PER_PLANAR_ROW):
                output[row_offset + plane] |= ((pixel >> plane) & 1) << (7 - x)
    return bytes(output)


def split_planar_tiles(data: Sequence[int]) -> List[bytes]:
    """
    Split a planar stream into 32 byte groups, one per tile.

    A short trailing group is padded with zero bytes.
    """
    groups = []
    for offset in range(0, len(data), BYTES_PER_PLANAR_TILE):
        chunk = bytes(data[offset:offset + BYTES_PER_PLANAR_TILE])
        groups.append(chunk.ljust(BYTES_PER_PLANAR_TILE, b'\x00'))
    return groups


def decode_planar_tiles(data: Sequence[int]) -> List[List[int]]:
    """Decode every tile in a planar stream, in stream order"""
    return [decode_planar_tile(group) for group in split_planar_tiles(data)]


def encode_planar_tiles(tiles: Iterable[Sequence[int]]) -> bytes:
    """
    Encode multiple tiles to planar format.

    Args:
        tiles: Iterable of tiles (each tile is a sequence of 64 pixels)

    Returns:
        Encoded tile data
    """
    output = bytearray()
    for tile in tiles:
        output.extend(encode_planar_tile(tile))
    return bytes(output)


def bytes_to_hex(data: Iterable[int]) -> str:
    """Two lowercase hex characters per byte"""
    return ''.join(f'{value & 0xFF:02x}' for value in data)


def hex_to_bytes(hex_string: str) -> bytes:
    """
    Decode a hex string produced by bytes_to_hex.

    Raises:
        FormatError: If the string has an odd length or non hex characters
    """
    if len(hex_string) % 2 != 0:
        raise FormatError(f"Hex string must have an even length, got {len(hex_string)}")
    if not _HEX_PATTERN.fullmatch(hex_string):
        raise FormatError("Hex string contains non hexadecimal characters")
    return bytes.fromhex(hex_string)
