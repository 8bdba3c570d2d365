"""
Conversion settings.

Defaults can be set through the environment:
    HARTOOLS_CHARSET       input encoding (default utf-8)
    HARTOOLS_DELIMITER     single output delimiter character (default TAB)
    HARTOOLS_LINE_ENDING   row terminator (default: platform line ending)

Escape sequences such as \\t, \\n and \\r\\n are accepted in the delimiter
and line ending variables.
"""

from dataclasses import dataclass, field
import os

DEFAULT_DELIMITER = '\t'

LINE_ENDINGS = {
    'platform': os.linesep,
    'lf': '\n',
    'crlf': '\r\n',
}


def unescape(value: str) -> str:
    """Turn backslash escapes typed on a command line into characters."""
    # Non-ASCII characters pass through unchanged; only backslash escapes are decoded
    return value.encode('latin-1', 'backslashreplace').decode('unicode_escape')


@dataclass
class ConverterConfig:
    """Settings for one HAR to CSV conversion."""
    charset: str = 'utf-8'
    delimiter: str = DEFAULT_DELIMITER
    line_ending: str = field(default_factory=lambda: os.linesep)

    def __post_init__(self):
        if len(self.delimiter) != 1:
            raise ValueError(f"Delimiter must be a single character, got {self.delimiter!r}")
        if not self.line_ending:
            raise ValueError("Line ending must not be empty")

    @classmethod
    def from_env(cls, environ: dict | None = None) -> 'ConverterConfig':
        """Build a config from HARTOOLS_* environment variables."""
        if environ is None:
            environ = os.environ

        kwargs = {}
        if environ.get('HARTOOLS_CHARSET'):
            kwargs['charset'] = environ['HARTOOLS_CHARSET']
        if environ.get('HARTOOLS_DELIMITER'):
            kwargs['delimiter'] = unescape(environ['HARTOOLS_DELIMITER'])
        if environ.get('HARTOOLS_LINE_ENDING'):
            line_ending = environ['HARTOOLS_LINE_ENDING']
            kwargs['line_ending'] = LINE_ENDINGS.get(line_ending.lower()) or unescape(line_ending)

        return cls(**kwargs)

    def with_overrides(self, charset: str | None = None, delimiter: str | None = None,
                       line_ending: str | None = None) -> 'ConverterConfig':
        """Return a copy with the given non-None values replaced."""
        return ConverterConfig(
            charset=charset or self.charset,
            delimiter=delimiter if delimiter is not None else self.delimiter,
            line_ending=line_ending or self.line_ending,
        )
