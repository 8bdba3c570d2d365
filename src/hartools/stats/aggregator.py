"""
Per-field statistics accumulated while HAR entries are converted.

Key requirements:
- One sample set per tracked field, created on the first observed value
- Fields are keyed by (context, name) so same-named fields never merge
- Empty text is not a sample
- Reports are scaled (e.g. bytes to kB) and rounded to two decimals
"""

from dataclasses import dataclass
import logging
import math

from .sample_set import SampleSet

logger = logging.getLogger(__name__)


@dataclass(frozen=True)
class TrackedField:
    """A numeric field whose values are collected for statistics."""
    context: str  # "entry", "timings", "content"
    name: str
    scale: float = 1.0
    unit: str = "ms"

    @property
    def key(self) -> tuple[str, str]:
        return (self.context, self.name)


@dataclass
class FieldSummary:
    """Descriptive statistics for one field, already divided by its scale."""
    name: str
    count: int
    min: float
    mean: float
    std: float
    median: float
    p90: float
    p99: float
    max: float


class StatisticsAggregator:
    """Collect samples per field during one conversion run."""

    def __init__(self):
        self._samples: dict[tuple[str, str], SampleSet] = {}

    def observe(self, field: TrackedField, text: str) -> None:
        """
        Record the extracted text of a field.

        Empty text means the value was absent and is skipped. Any other
        text must be a finite, non-negative number; a ValueError is raised
        otherwise.
        """
        if not text:
            return

        try:
            value = float(text)
        except ValueError:
            raise ValueError(f"not a number: {text!r}") from None
        if not math.isfinite(value):
            raise ValueError(f"not a finite number: {text!r}")
        if value < 0:
            raise ValueError(f"negative value: {text!r}")

        sample_set = self._samples.get(field.key)
        if sample_set is None:
            sample_set = SampleSet()
            self._samples[field.key] = sample_set
        sample_set.add(value)

    def samples(self, field: TrackedField) -> SampleSet | None:
        return self._samples.get(field.key)

    def summarize(self, field: TrackedField, scale: float | None = None) -> FieldSummary | None:
        """Compute the summary for a field, or None if it was never observed."""
        sample_set = self._samples.get(field.key)
        if sample_set is None:
            return None

        if scale is None:
            scale = field.scale

        return FieldSummary(
            name=field.name,
            count=sample_set.count,
            min=sample_set.min() / scale,
            mean=sample_set.mean() / scale,
            std=sample_set.std() / scale,
            median=sample_set.median() / scale,
            p90=sample_set.percentile(90) / scale,
            p99=sample_set.percentile(99) / scale,
            max=sample_set.max() / scale,
        )

    def report(self, field: TrackedField, scale: float | None = None) -> str:
        """Format the statistics block for a field."""
        summary = self.summarize(field, scale)
        if summary is None:
            logger.debug("No samples for %s.%s", field.context, field.name)
            return f"Statistics -> {field.name} : # NOT Found"

        return (
            f"Statistics -> {summary.name} : #{summary.count}\n"
            f" Min    = {summary.min:.2f}\n"
            f" Mean   = {summary.mean:.2f}\n"
            f" STD    = {summary.std:.2f}\n"
            f" Median = {summary.median:.2f}\n"
            f" 90%    = {summary.p90:.2f}\n"
            f" 99%    = {summary.p99:.2f}\n"
            f" Max    = {summary.max:.2f}"
        )
