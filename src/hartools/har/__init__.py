"""HAR reading and field extraction."""

from .extractor import JsonKind, json_kind, extract_scalar, extract_from_named_list
from .reader import read_har_text, parse_har_text, load_har

__all__ = [
    'JsonKind',
    'json_kind',
    'extract_scalar',
    'extract_from_named_list',
    'read_har_text',
    'parse_har_text',
    'load_har',
]
