"""
Domain Services Package

Pure functions and single-use objects implementing the time-series
decoding, aggregation and layout rules.
"""

from .chart_layout import ChartGeometry, ChartLayout, LinearScale, Margin
from .dense_decoder import decode
from .series_aggregator import AggregatorState, SeriesAggregator, compute_extents

__all__ = [
    "decode",
    "AggregatorState",
    "SeriesAggregator",
    "compute_extents",
    "ChartLayout",
    "ChartGeometry",
    "LinearScale",
    "Margin",
]
