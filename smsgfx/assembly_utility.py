#!/usr/bin/env python3
"""
WLA-DX assembly data reader

Reads .db/.dw/.dl/.dd directive lines into byte and word arrays. Values
may be written as $hex, %binary or plain decimal. Other lines, and tokens
that are none of those, are skipped.
"""

import re
from typing import List, Optional

import numpy as np

from .logging_config import get_logger

logger = get_logger(__name__)

_DIRECTIVE_PATTERN = re.compile(r'^\s*\.d([blwd])\s+(.*)$')
_TOKEN_SPLIT_PATTERN = re.compile(r'[,\s]+')
_DECIMAL_PATTERN = re.compile(r'^\d+$')
_HEX_PATTERN = re.compile(r'^[0-9a-f]+$')
_BINARY_PATTERN = re.compile(r'^[01]+$')

# Hex characters per element for each directive
DIRECTIVE_WIDTHS = {
    'b': 2,  # .db byte
    'w': 4,  # .dw word
    'l': 6,  # .dl 24 bit long
    'd': 8,  # .dd double word
}


def _directive_lines(content: str):
    """Yield (width, tokens) for each directive line"""
    for line in content.strip().lower().replace('\r', '').split('\n'):
        line = line.split(';', 1)[0]
        match = _DIRECTIVE_PATTERN.match(line)
        if not match:
            continue
        tokens = [token for token in _TOKEN_SPLIT_PATTERN.split(match.group(2)) if token]
        yield DIRECTIVE_WIDTHS[match.group(1)], tokens


def parse_token(token: str) -> Optional[int]:
    """
    Parse one numeric token.

    Returns:
        The value, or None when the token is not a number
    """
    token = token.strip().lower()
    if token.startswith('$'):
        digits = token[1:]
        return int(digits, 16) if _HEX_PATTERN.match(digits) else None
    if token.startswith('%'):
        digits = token[1:]
        return int(digits, 2) if _BINARY_PATTERN.match(digits) else None
    if _DECIMAL_PATTERN.match(token):
        return int(token)
    return None


class AssemblyUtility:
    """Static readers for WLA-DX data directives"""

    @staticmethod
    def read_to_hex_string(content: str) -> str:
        """
        Concatenate every value as lowercase hex.

        Each value is left padded with zeros to a multiple of its
        directive width, so '.db $f' gives '0f' and '.dw $f' gives '000f'.
        """
        hex_string = []
        for width, tokens in _directive_lines(content):
            for token in tokens:
                value = parse_token(token)
                if value is None:
                    continue
                value_hex = format(value, 'x')
                padding = -len(value_hex) % width
                hex_string.append('0' * padding + value_hex)
        return ''.join(hex_string)

    @staticmethod
    def read_as_uint8_array(content: str) -> np.ndarray:
        return _slice_hex(AssemblyUtility.read_to_hex_string(content), 2, np.uint8)

    @staticmethod
    def read_as_uint16_array(content: str) -> np.ndarray:
        return _slice_hex(AssemblyUtility.read_to_hex_string(content), 4, np.uint16)

    @staticmethod
    def read_as_uint32_array(content: str) -> np.ndarray:
        return _slice_hex(AssemblyUtility.read_to_hex_string(content), 8, np.uint32)

    @staticmethod
    def read_as_array(content: str) -> List[int]:
        """Every value as a plain number, regardless of directive width"""
        result = []
        for _, tokens in _directive_lines(content):
            for token in tokens:
                value = parse_token(token)
                if value is not None:
                    result.append(value)
        return result


def _slice_hex(hex_string: str, chars: int, dtype) -> np.ndarray:
    count = len(hex_string) // chars
    if count * chars != len(hex_string):
        logger.debug(f"Dropping {len(hex_string) - count * chars} trailing hex characters")
    return np.array([int(hex_string[i * chars:(i + 1) * chars], 16) for i in range(count)],
                    dtype=dtype)
