"""Streaming statistics for converted HAR fields."""

from .sample_set import SampleSet
from .aggregator import StatisticsAggregator, TrackedField, FieldSummary

__all__ = ['SampleSet', 'StatisticsAggregator', 'TrackedField', 'FieldSummary']
