"""
hartools - Convert HAR captures to delimited text with timing statistics.

Usage:
    from hartools import HarConverter, ConverterConfig

    converter = HarConverter.from_file(Path("capture.har"), ConverterConfig(delimiter=","))
    result = converter.convert()
    print(result.csv_text)
"""

__version__ = "0.1.0"

# Public API exports
from .config import ConverterConfig
from .converter import (
    HarConverter,
    ConversionResult,
    COLUMNS,
    TRACKED_FIELDS,
)
from .har.extractor import extract_scalar, extract_from_named_list
from .stats.aggregator import StatisticsAggregator, TrackedField, FieldSummary
from .stats.sample_set import SampleSet
from .errors import HarToolsError, HarReadError, HarFormatError

__all__ = [
    # Version
    "__version__",
    # Conversion
    "HarConverter",
    "ConverterConfig",
    "ConversionResult",
    "COLUMNS",
    "TRACKED_FIELDS",
    # Extraction
    "extract_scalar",
    "extract_from_named_list",
    # Statistics
    "StatisticsAggregator",
    "TrackedField",
    "FieldSummary",
    "SampleSet",
    # Exceptions
    "HarToolsError",
    "HarReadError",
    "HarFormatError",
]
