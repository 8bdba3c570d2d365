"""
Exceptions raised while reading and converting HAR files.

Field-level problems (wrong value type, negative numbers) are never errors:
the extractor renders them as empty text. Only input that cannot be read or
that lacks the structure every entry needs is raised.
"""


class HarToolsError(Exception):
    """Base class for hartools errors."""
    pass


class HarReadError(HarToolsError):
    """Raised when the input cannot be opened or decoded in its charset."""
    pass


class HarFormatError(HarToolsError):
    """Raised when the document is not valid JSON or lacks required structure."""
    pass
