"""
Descriptive statistics over an append-only set of samples.

Key requirements:
- Keep samples in arrival order, compute everything on demand
- Sample standard deviation (n - 1 denominator)
- Percentiles interpolated linearly between order statistics
"""

import math
import statistics


class SampleSet:
    """An unbounded, append-only collection of non-negative samples."""

    def __init__(self):
        self._values: list[float] = []

    def add(self, value: float) -> None:
        if value < 0:
            raise ValueError(f"Negative sample: {value}")
        self._values.append(value)

    def __len__(self) -> int:
        return len(self._values)

    @property
    def count(self) -> int:
        return len(self._values)

    @property
    def values(self) -> list[float]:
        return list(self._values)

    def min(self) -> float:
        self._require_samples()
        return min(self._values)

    def max(self) -> float:
        self._require_samples()
        return max(self._values)

    def mean(self) -> float:
        self._require_samples()
        return statistics.fmean(self._values)

    def std(self) -> float:
        """Sample standard deviation; 0.0 when there is a single sample."""
        self._require_samples()
        if len(self._values) == 1:
            return 0.0
        return statistics.stdev(self._values)

    def percentile(self, p: float) -> float:
        """
        Estimate the p-th percentile (0 < p <= 100).

        The rank is p/100 * (n + 1). Ranks below 1 give the minimum,
        ranks at or above n give the maximum, anything in between is
        interpolated between the two neighbouring order statistics.
        """
        if not 0 < p <= 100:
            raise ValueError(f"Percentile out of range: {p}")
        self._require_samples()

        ordered = sorted(self._values)
        n = len(ordered)
        pos = p * (n + 1) / 100

        if pos < 1:
            return ordered[0]
        if pos >= n:
            return ordered[-1]

        lower = ordered[int(pos) - 1]
        upper = ordered[int(pos)]
        return lower + (pos - math.floor(pos)) * (upper - lower)

    def median(self) -> float:
        return self.percentile(50)

    def _require_samples(self) -> None:
        if not self._values:
            raise ValueError("No samples recorded")
