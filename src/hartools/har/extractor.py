"""
Field extraction from decoded HAR entries.

Key requirements:
- Missing keys and null values render as empty text
- Strings pass through verbatim
- Numbers render only when non-negative and finite, never in exponent form
- Booleans, arrays and objects render as empty text
- Header lookup is case-insensitive and the first match wins
"""

from decimal import Decimal
from enum import Enum, auto
from typing import Any
import math


class JsonKind(Enum):
    ABSENT = auto()
    NULL = auto()
    TEXT = auto()
    INTEGER = auto()
    REAL = auto()
    BOOLEAN = auto()
    ARRAY = auto()
    OBJECT = auto()


def json_kind(node: dict, key: str) -> JsonKind:
    """Classify the value stored under `key` in a decoded JSON object."""
    if key not in node:
        return JsonKind.ABSENT

    value = node[key]
    if value is None:
        return JsonKind.NULL
    # bool is a subclass of int, so it has to be checked first
    if isinstance(value, bool):
        return JsonKind.BOOLEAN
    if isinstance(value, int):
        return JsonKind.INTEGER
    if isinstance(value, float):
        return JsonKind.REAL
    if isinstance(value, str):
        return JsonKind.TEXT
    if isinstance(value, list):
        return JsonKind.ARRAY
    return JsonKind.OBJECT


def extract_scalar(node: dict, key: str) -> str:
    """
    Return the value under `key` as text, or an empty string.

    Args:
        node: Decoded JSON object
        key: Field name

    Returns:
        The string value verbatim, the decimal text of a non-negative
        finite number, or "" for anything else (missing, null, negative,
        NaN, infinity, boolean, array, object).
    """
    kind = json_kind(node, key)

    if kind is JsonKind.TEXT:
        return node[key]
    if kind is JsonKind.INTEGER:
        value = node[key]
        return str(value) if value >= 0 else ''
    if kind is JsonKind.REAL:
        value = node[key]
        if not math.isfinite(value) or value < 0:
            return ''
        # shortest round-trip digits, positional: 1e16 -> 10000000000000000
        return format(Decimal(repr(value)), 'f')
    return ''


def extract_from_named_list(items: list[Any], name: str) -> str:
    """
    Look up `name` in a list of {name, value} pairs, such as HTTP headers.

    The comparison ignores case and only the first matching pair is used.
    """
    wanted = name.lower()

    for item in items:
        if not isinstance(item, dict):
            continue
        item_name = item.get('name')
        if isinstance(item_name, str) and item_name.lower() == wanted:
            return extract_scalar(item, 'value')

    return ''
