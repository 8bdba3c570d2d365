"""
Tests for HAR to delimited text conversion.
"""

import io
from pathlib import Path

import pytest

from hartools.config import ConverterConfig
from hartools.converter import HarConverter, COLUMNS, TRACKED_FIELDS, TIME_FIELD, SIZE_FIELD
from hartools.errors import HarFormatError
from hartools.stats.aggregator import TrackedField

FIXTURES = Path(__file__).parent / "fixtures"
HAR_FILE = FIXTURES / "sample.har"

HEADER = [
    "url", "method", "startedDateTime", "time",
    "Response status", "Response content mimeType", "Response content size",
    "Response headersSize", "Response bodySize", "Referer",
    "Timing wait", "Timing receive", "Timing blocked", "Timing send",
    "Timing dns", "Timing connect", "Timing ssl",
]

LF = ConverterConfig(line_ending="\n")


def make_entry(**overrides):
    """Build a minimal valid HAR entry."""
    entry = {
        "startedDateTime": "2024-03-01T10:00:00.000Z",
        "time": 50,
        "request": {"method": "GET", "url": "https://example.com/", "headers": []},
        "response": {"status": 200, "headersSize": 100, "bodySize": 200,
                     "content": {"size": 200, "mimeType": "text/plain"}},
        "timings": {"wait": 40, "receive": 10},
    }
    entry.update(overrides)
    return entry


def make_har(*entries):
    return {"log": {"entries": list(entries)}}


@pytest.fixture
def sample_result():
    """Convert the sample HAR file."""
    converter = HarConverter.from_file(HAR_FILE, LF)
    return converter.convert()


def test_header_row():
    converter = HarConverter(make_har(), LF)

    assert converter.header_row().split("\t") == HEADER
    assert len(COLUMNS) == 17


def test_empty_entries_produce_header_only():
    """Test that an empty log yields the header with no trailing terminator."""
    result = HarConverter(make_har(), LF).convert()

    assert result.csv_text == "\t".join(HEADER)
    assert result.row_count == 0
    assert len(result.reports) == len(TRACKED_FIELDS)
    assert all("not found" in report.lower() for report in result.reports)


def test_sample_rows(sample_result):
    rows = sample_result.csv_text.split("\n")

    assert len(rows) == 4
    assert sample_result.row_count == 3
    assert not sample_result.csv_text.endswith("\n")

    assert rows[1].split("\t") == [
        "https://example.com/", "GET", "2024-03-01T10:00:00.000Z", "120.5",
        "200", "text/html", "5120", "312", "5120", "",
        "80", "8.5", "1.5", "0.5", "10", "20", "12",
    ]
    assert rows[2].split("\t") == [
        "https://example.com/app.js", "GET", "2024-03-01T10:00:00.200Z", "40",
        "200", "application/javascript", "3000", "", "2048", "https://example.com/",
        "30", "9.25", "0.5", "0.25", "", "", "",
    ]
    assert rows[3].split("\t") == [
        "https://example.com/api", "POST", "2024-03-01T10:00:00.400Z", "",
        "0", "x-unknown", "", "", "", "https://example.com/",
        "", "", "", "0", "", "", "",
    ]


def test_every_row_has_all_columns(sample_result):
    for row in sample_result.csv_text.split("\n"):
        assert len(row.split("\t")) == 17


def test_sample_statistics(sample_result):
    """Test that sample counts follow present values, not row counts."""
    aggregator = sample_result.aggregator

    counts = {f.name: aggregator.summarize(f).count for f in TRACKED_FIELDS}
    assert counts == {
        "time": 2, "wait": 2, "receive": 2, "blocked": 2, "send": 3,
        "dns": 1, "connect": 1, "ssl": 1, "size": 2,
    }

    assert aggregator.summarize(SIZE_FIELD).max == pytest.approx(5.12)


def test_report_order(sample_result):
    names = [report.split(" : ")[0].removeprefix("Statistics -> ") for report in sample_result.reports]

    assert names == ["time", "wait", "receive", "blocked", "send", "dns", "connect", "ssl", "size"]


def test_negative_and_missing_values():
    """Test negative timings and missing content size render as empty fields."""
    entry = make_entry(timings={"dns": -1, "connect": 12.5})
    del entry["response"]["content"]["size"]

    result = HarConverter(make_har(entry), LF).convert()
    row = dict(zip(HEADER, result.csv_text.split("\n")[1].split("\t")))

    assert row["Timing dns"] == ""
    assert row["Timing connect"] == "12.5"
    assert row["Response content size"] == ""
    assert result.aggregator.samples(TrackedField("timings", "dns")) is None
    assert result.aggregator.samples(TrackedField("timings", "connect")).values == [12.5]
    assert result.aggregator.samples(SIZE_FIELD) is None


def test_time_statistics_scenario():
    har = make_har(make_entry(time=100), make_entry(time=300))

    summary = HarConverter(har, LF).convert().aggregator.summarize(TIME_FIELD)

    assert summary.count == 2
    assert summary.min == 100
    assert summary.max == 300
    assert summary.mean == 200
    assert summary.median == 200


def test_referer_first_match_wins():
    entry = make_entry()
    entry["request"]["headers"] = [
        {"name": "referer", "value": "http://a"},
        {"name": "Referer", "value": "http://b"},
    ]

    result = HarConverter(make_har(entry), LF).convert()
    row = dict(zip(HEADER, result.csv_text.split("\n")[1].split("\t")))

    assert row["Referer"] == "http://a"


def test_missing_headers_list_is_empty_referer():
    entry = make_entry()
    del entry["request"]["headers"]

    result = HarConverter(make_har(entry), LF).convert()

    assert result.csv_text.split("\n")[1].split("\t")[9] == ""


def test_custom_delimiter_and_line_ending():
    config = ConverterConfig(delimiter=",", line_ending="\r\n")
    result = HarConverter(make_har(make_entry(), make_entry()), config).convert()

    rows = result.csv_text.split("\r\n")
    assert len(rows) == 3
    assert rows[0] == ",".join(HEADER)
    assert all(len(row.split(",")) == 17 for row in rows)


def test_conversion_is_repeatable():
    """Test that statistics do not carry over between runs."""
    converter = HarConverter.from_file(HAR_FILE, LF)

    first = converter.convert()
    second = converter.convert()

    assert first.csv_text == second.csv_text
    assert first.reports == second.reports
    assert first.aggregator is not second.aggregator


def test_entries_to_csv_writes_reports_to_stream():
    stream = io.StringIO()
    converter = HarConverter(make_har(make_entry(time=100), make_entry(time=300)), LF)

    csv_text = converter.entries_to_csv(report_stream=stream)

    assert csv_text == converter.convert().csv_text
    report = stream.getvalue()
    assert "Statistics -> time : #2" in report
    assert "Statistics -> dns : # NOT Found" in report
    assert "Statistics -> time" not in csv_text


@pytest.mark.parametrize("section", ["request", "response", "timings"])
def test_missing_required_section(section):
    entry = make_entry()
    del entry[section]

    with pytest.raises(HarFormatError, match=section):
        HarConverter(make_har(entry), LF).convert()


def test_missing_response_content():
    entry = make_entry()
    del entry["response"]["content"]

    with pytest.raises(HarFormatError, match="response.content"):
        HarConverter(make_har(entry), LF).convert()


def test_required_section_of_wrong_type():
    entry = make_entry(timings=[1, 2, 3])

    with pytest.raises(HarFormatError, match="timings"):
        HarConverter(make_har(entry), LF).convert()


@pytest.mark.parametrize("har", [
    {},
    {"log": []},
    {"log": {}},
    {"log": {"entries": {}}},
])
def test_missing_entries(har):
    with pytest.raises(HarFormatError):
        HarConverter(har, LF).convert()


def test_entry_not_an_object():
    with pytest.raises(HarFormatError, match="Entry 1"):
        HarConverter(make_har(make_entry(), "oops"), LF).convert()


def test_non_numeric_tracked_value_is_fatal():
    with pytest.raises(HarFormatError, match="time"):
        HarConverter(make_har(make_entry(time="slow")), LF).convert()


@pytest.mark.parametrize("value, message", [
    ("-5", "negative"),
    ("NaN", "not a finite number"),
])
def test_invalid_tracked_text_is_fatal(value, message):
    """Test that numeric-looking text which cannot be a sample names the actual problem."""
    with pytest.raises(HarFormatError, match=message):
        HarConverter(make_har(make_entry(time=value)), LF).convert()
