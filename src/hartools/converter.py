"""
Convert HAR entries to delimited text and collect timing statistics.

Key requirements:
- Fixed 17-column layout, identical for the header and every row
- Missing or invalid values become empty fields, never missing columns
- Entries without request, response, response.content or timings abort
- Rows are separated by the line ending, with none after the last row
- Statistics for time, timing phases and content size are reported
  after all rows, separately from the CSV text
"""

from dataclasses import dataclass, field
from pathlib import Path
from typing import TextIO
import logging
import sys

from .config import ConverterConfig
from .errors import HarFormatError
from .har.extractor import extract_scalar, extract_from_named_list
from .har.reader import load_har
from .stats.aggregator import StatisticsAggregator, TrackedField

logger = logging.getLogger(__name__)

TIMING_NAMES = ('wait', 'receive', 'blocked', 'send', 'dns', 'connect', 'ssl')

TIME_FIELD = TrackedField('entry', 'time')
SIZE_FIELD = TrackedField('content', 'size', scale=1000, unit='kB')
TIMING_FIELDS = tuple(TrackedField('timings', name) for name in TIMING_NAMES)

# Order in which statistics are reported
TRACKED_FIELDS = (TIME_FIELD, *TIMING_FIELDS, SIZE_FIELD)

REQUIRED_SECTIONS = ('request', 'response', 'timings')


@dataclass(frozen=True)
class Column:
    """One output column and where its value comes from."""
    header: str
    section: str  # entry, request, response, content, timings, headers
    key: str
    tracked: TrackedField | None = None


COLUMNS = (
    Column('url', 'request', 'url'),
    Column('method', 'request', 'method'),
    Column('startedDateTime', 'entry', 'startedDateTime'),
    Column('time', 'entry', 'time', TIME_FIELD),
    Column('Response status', 'response', 'status'),
    Column('Response content mimeType', 'content', 'mimeType'),
    Column('Response content size', 'content', 'size', SIZE_FIELD),
    Column('Response headersSize', 'response', 'headersSize'),
    Column('Response bodySize', 'response', 'bodySize'),
    Column('Referer', 'headers', 'Referer'),
    *(Column(f'Timing {f.name}', 'timings', f.name, f) for f in TIMING_FIELDS),
)


@dataclass
class ConversionResult:
    """Output of one conversion run."""
    csv_text: str
    row_count: int
    aggregator: StatisticsAggregator
    reports: list[str] = field(default_factory=list)


class HarConverter:
    """Flatten the entries of a parsed HAR document into delimited rows."""

    def __init__(self, har: dict, config: ConverterConfig | None = None):
        self.har = har
        self.config = config or ConverterConfig()

    @classmethod
    def from_file(cls, path: Path, config: ConverterConfig | None = None) -> 'HarConverter':
        """Read and parse a HAR file using the configured charset."""
        config = config or ConverterConfig()
        return cls(load_har(Path(path), config.charset), config)

    @property
    def delimiter(self) -> str:
        return self.config.delimiter

    def entries(self) -> list:
        """Return log.entries, checking that it exists and is a list."""
        log = self.har.get('log')
        if not isinstance(log, dict):
            raise HarFormatError("Missing 'log' object")

        entries = log.get('entries')
        if not isinstance(entries, list):
            raise HarFormatError("Missing 'log.entries' array")

        return entries

    def header_row(self) -> str:
        return self.delimiter.join(column.header for column in COLUMNS)

    def entry_to_row(self, entry: dict, aggregator: StatisticsAggregator, index: int = 0) -> str:
        """Build one row, feeding tracked numeric fields into the aggregator."""
        sections = self._sections(entry, index)

        values = []
        for column in COLUMNS:
            if column.section == 'headers':
                value = extract_from_named_list(sections['headers'], column.key)
            else:
                value = extract_scalar(sections[column.section], column.key)

            if column.tracked is not None:
                try:
                    aggregator.observe(column.tracked, value)
                except ValueError as e:
                    raise HarFormatError(
                        f"Entry {index} has an invalid '{column.key}': {e}"
                    ) from e

            values.append(value)

        return self.delimiter.join(values)

    def convert(self) -> ConversionResult:
        """Convert every entry; statistics are computed but not printed."""
        entries = self.entries()
        logger.info("Converting %d entries", len(entries))

        aggregator = StatisticsAggregator()
        rows = [self.header_row()]
        for index, entry in enumerate(entries):
            rows.append(self.entry_to_row(entry, aggregator, index))

        reports = [aggregator.report(f) for f in TRACKED_FIELDS]

        return ConversionResult(
            csv_text=self.config.line_ending.join(rows),
            row_count=len(entries),
            aggregator=aggregator,
            reports=reports,
        )

    def entries_to_csv(self, report_stream: TextIO | None = None) -> str:
        """Return the CSV text and write the statistics report to `report_stream` (stderr by default)."""
        result = self.convert()

        stream = report_stream if report_stream is not None else sys.stderr
        for report in result.reports:
            print(report, file=stream)

        return result.csv_text

    def _sections(self, entry: dict, index: int) -> dict:
        if not isinstance(entry, dict):
            raise HarFormatError(f"Entry {index} is not an object")

        for name in REQUIRED_SECTIONS:
            if not isinstance(entry.get(name), dict):
                raise HarFormatError(f"Entry {index} is missing '{name}'")

        content = entry['response'].get('content')
        if not isinstance(content, dict):
            raise HarFormatError(f"Entry {index} is missing 'response.content'")

        headers = entry['request'].get('headers')
        if not isinstance(headers, list):
            headers = []

        return {
            'entry': entry,
            'request': entry['request'],
            'response': entry['response'],
            'content': content,
            'timings': entry['timings'],
            'headers': headers,
        }
