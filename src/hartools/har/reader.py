"""
Read HAR files from disk.

Key requirements:
- Decode the whole file in the requested charset before parsing
- Report unreadable or undecodable input separately from malformed JSON
- Tolerate a leading byte order mark
"""

from pathlib import Path
import codecs
import json
import logging

from ..errors import HarFormatError, HarReadError

logger = logging.getLogger(__name__)

DEFAULT_CHARSET = 'utf-8'


def read_har_text(path: Path, charset: str = DEFAULT_CHARSET) -> str:
    """Read a HAR file and return its text decoded in `charset`."""
    path = Path(path)

    try:
        codecs.lookup(charset)
    except LookupError:
        raise HarReadError(f"Unsupported charset: {charset}")

    try:
        raw = path.read_bytes()
    except OSError as e:
        raise HarReadError(f"Cannot read {path}: {e.strerror or e}") from e

    try:
        text = raw.decode(charset)
    except UnicodeDecodeError as e:
        raise HarReadError(f"Cannot decode {path} as {charset}: {e.reason} at byte {e.start}") from e

    logger.debug("Read %d bytes from %s (%s)", len(raw), path, charset)

    return text.removeprefix('\ufeff')


def parse_har_text(text: str) -> dict:
    """Parse HAR text into a dictionary."""
    try:
        data = json.loads(text)
    except json.JSONDecodeError as e:
        raise HarFormatError(f"Invalid JSON at line {e.lineno}, column {e.colno}: {e.msg}") from e
    except (ValueError, RecursionError) as e:
        # Oversized integer literals and runaway nesting
        raise HarFormatError(f"Invalid JSON: {e}") from e

    if not isinstance(data, dict):
        raise HarFormatError("HAR document must be a JSON object")

    return data


def load_har(path: Path, charset: str = DEFAULT_CHARSET) -> dict:
    """Read and parse a HAR file."""
    return parse_har_text(read_har_text(path, charset))
