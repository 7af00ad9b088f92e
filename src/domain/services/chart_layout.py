"""
Domain Service - Chart Layout

Encodes finalized chart data into screen coordinates for a line chart.

Coordinates are relative to the plot area, i.e. the chart size minus its
margins: x grows from 0 to ``plot_width`` with time and y goes from
``plot_height`` (lowest value) to 0 (highest value). Null samples break a
line into separate segments, a line is never drawn across a gap.
"""

from __future__ import annotations

from dataclasses import dataclass
from typing import List, Optional, Sequence, Tuple

from src.domain.entities.time_series import ChartData, Extent, Number, Point, Series

ScreenPoint = Tuple[float, float]


@dataclass(frozen=True, slots=True)
class Margin:
    top: int = 40
    right: int = 20
    bottom: int = 40
    left: int = 70


class LinearScale:
    """Linear mapping from a data extent onto a screen range."""

    def __init__(self, domain: Extent, range_start: float, range_end: float):
        self.domain = domain
        self.range_start = float(range_start)
        self.range_end = float(range_end)

    def __call__(self, value: Number) -> float:
        span = self.domain.span
        if span == 0:
            # Single distinct value: centre it instead of dividing by zero
            return (self.range_start + self.range_end) / 2
        ratio = (value - self.domain.min) / span
        return self.range_start + ratio * (self.range_end - self.range_start)


@dataclass(frozen=True, slots=True)
class SeriesGeometry:
    name: str
    segments: Tuple[Tuple[ScreenPoint, ...], ...]
    time_extent: Optional[Extent]
    value_extent: Optional[Extent]


@dataclass(frozen=True, slots=True)
class ChartGeometry:
    width: int
    height: int
    margin: Margin
    plot_width: int
    plot_height: int
    shared_axes: bool
    series: Tuple[SeriesGeometry, ...]


def split_at_gaps(points: Sequence[Point]) -> List[List[Point]]:
    """Split points into runs of consecutive non-null values."""
    runs: List[List[Point]] = []
    current: List[Point] = []
    for point in points:
        if point.value is None:
            if current:
                runs.append(current)
                current = []
            continue
        current.append(point)
    if current:
        runs.append(current)
    return runs


class ChartLayout:
    """Lays out one or more series on shared or per-series axes."""

    def __init__(self, width: int, height: int, margin: Optional[Margin] = None):
        self.margin = margin or Margin()
        self.width = width
        self.height = height
        self.plot_width = width - self.margin.left - self.margin.right
        self.plot_height = height - self.margin.top - self.margin.bottom

        if self.plot_width <= 0 or self.plot_height <= 0:
            raise ValueError(
                f"Chart of {width}x{height} leaves no room for the plot area "
                f"inside its margins"
            )

    def build(self, chart: ChartData, shared_axes: bool = True) -> ChartGeometry:
        """
        Compute the line geometry of every series in ``chart``.

        With ``shared_axes`` all series are scaled against the extents of the
        whole chart, otherwise each series gets its own scales.
        """
        geometries = []
        for series in chart.series:
            if shared_axes:
                time_extent, value_extent = chart.time_extent, chart.value_extent
            else:
                time_extent, value_extent = (
                    series.time_extent(),
                    series.value_extent(),
                )
            geometries.append(self._series_geometry(series, time_extent, value_extent))

        return ChartGeometry(
            width=self.width,
            height=self.height,
            margin=self.margin,
            plot_width=self.plot_width,
            plot_height=self.plot_height,
            shared_axes=shared_axes,
            series=tuple(geometries),
        )

    def _series_geometry(
        self,
        series: Series,
        time_extent: Optional[Extent],
        value_extent: Optional[Extent],
    ) -> SeriesGeometry:
        segments: Tuple[Tuple[ScreenPoint, ...], ...] = ()
        if time_extent is not None and value_extent is not None:
            x_scale = LinearScale(time_extent, 0, self.plot_width)
            y_scale = LinearScale(value_extent, self.plot_height, 0)
            segments = tuple(
                tuple((x_scale(point.time), y_scale(point.value)) for point in run)
                for run in split_at_gaps(series.points)
            )

        return SeriesGeometry(
            name=series.name,
            segments=segments,
            time_extent=time_extent,
            value_extent=value_extent,
        )
