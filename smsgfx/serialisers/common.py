#!/usr/bin/env python3
"""
Shared JSON helpers for the serialisers
"""

import json
from typing import Any, List

from ..exceptions import FormatError


def parse_json(json_string: str, what: str) -> Any:
    """
    Parse a JSON string.

    Raises:
        FormatError: If the value is not a non-empty string of valid JSON
    """
    if not json_string or not isinstance(json_string, str):
        raise FormatError(f"{what.capitalize()} to deserialise must be passed as a JSON string")
    try:
        return json.loads(json_string)
    except json.JSONDecodeError as e:
        raise FormatError(f"Invalid {what} JSON: {e}") from e


def to_json(value: Any, indent: bool = False) -> str:
    return json.dumps(value, indent=1 if indent else None)


def list_items(serialisable: Any, what: str) -> List[dict]:
    """
    Items of a serialised list.

    Lists are written as arrays of objects. Older saves hold arrays of
    JSON encoded strings, one per item; both are accepted.
    """
    if serialisable is None:
        return []
    if not isinstance(serialisable, list):
        raise FormatError(f"Serialised {what} list must be an array")
    items = []
    for item in serialisable:
        if isinstance(item, str):
            item = parse_json(item, what)
        if not isinstance(item, dict):
            raise FormatError(f"Serialised {what} must be an object")
        items.append(item)
    return items


def require_dict(serialisable: Any, what: str) -> dict:
    if not isinstance(serialisable, dict):
        raise FormatError(f"Serialised {what} must be an object")
    return serialisable


def int_field(serialisable: dict, key: str, default: int, what: str) -> int:
    """
    Read an integer field, raising FormatError for values int() rejects.
    """
    value = serialisable.get(key, default)
    if isinstance(value, bool):
        raise FormatError(f"Serialised {what} {key} must be an integer, got {value!r}")
    try:
        return int(value)
    except (TypeError, ValueError, OverflowError) as e:
        raise FormatError(f"Serialised {what} {key} must be an integer, got {value!r}") from e
