"""Domain entities for dense time series and their decoded form."""

from __future__ import annotations

import math
from collections.abc import Mapping, Sequence
from dataclasses import dataclass, field
from enum import Enum
from typing import Any, Iterable, Optional, Tuple, Union

from src.domain.entities.errors import MalformedPayloadError

Number = Union[int, float]


class Granularity(str, Enum):
    """Sampling granularity accepted by the time-series API."""

    HOUR = "hour"
    DAY = "day"
    WEEK = "week"


def is_numeric(value: Any) -> bool:
    """Return True for finite int/float values, excluding booleans."""
    if not isinstance(value, (int, float)) or isinstance(value, bool):
        return False
    return isinstance(value, int) or math.isfinite(value)


def is_value_sequence(value: Any) -> bool:
    """Return True when value is a list-like sequence of samples."""
    return isinstance(value, Sequence) and not isinstance(
        value, (str, bytes, bytearray)
    )


def _require_int(raw: Mapping[str, Any], name: str) -> int:
    if name not in raw or raw[name] is None:
        raise MalformedPayloadError(f"missing '{name}'", {"field": name})
    value = raw[name]
    if isinstance(value, float) and value.is_integer():
        value = int(value)
    if not isinstance(value, int) or isinstance(value, bool):
        raise MalformedPayloadError(
            f"'{name}' must be an integer number of seconds",
            {"field": name, "value": value},
        )
    return value


@dataclass(frozen=True, slots=True)
class DensePayload:
    """
    Compact time series as returned by the API.

    Only ``start_time``, ``period`` and ``data`` drive decoding; ``end_time``
    is informational and is never reconciled against ``len(data)``.
    """

    start_time: int
    end_time: int
    period: int
    data: Tuple[Optional[Number], ...]

    @classmethod
    def from_mapping(cls, raw: Any) -> "DensePayload":
        """Build a payload from the raw JSON ``response`` object."""
        if not isinstance(raw, Mapping):
            raise MalformedPayloadError(
                "response must be an object", {"type": type(raw).__name__}
            )

        data = raw.get("data")
        if not is_value_sequence(data):
            raise MalformedPayloadError(
                "'data' must be an array of values",
                {"type": type(data).__name__},
            )

        return cls(
            start_time=_require_int(raw, "start_time"),
            end_time=_require_int(raw, "end_time"),
            period=_require_int(raw, "period"),
            data=tuple(data),
        )


@dataclass(frozen=True, slots=True)
class Point:
    """A single decoded sample; ``time`` is in milliseconds since epoch."""

    time: int
    value: Optional[Number]


@dataclass(frozen=True, slots=True)
class Extent:
    """Closed interval covered by a dimension of one or more series."""

    min: Number
    max: Number

    @property
    def span(self) -> Number:
        return self.max - self.min

    @classmethod
    def of(cls, values: Iterable[Optional[Number]]) -> Optional["Extent"]:
        """Extent of the non-null values, or None when there are none."""
        present = [value for value in values if value is not None]
        if not present:
            return None
        return cls(min=min(present), max=max(present))

    @classmethod
    def union(cls, extents: Iterable[Optional["Extent"]]) -> Optional["Extent"]:
        present = [extent for extent in extents if extent is not None]
        if not present:
            return None
        return cls(
            min=min(extent.min for extent in present),
            max=max(extent.max for extent in present),
        )


@dataclass(frozen=True, slots=True)
class Series:
    """Decoded points of one requested endpoint."""

    name: str
    points: Tuple[Point, ...] = field(default_factory=tuple)

    def time_extent(self) -> Optional[Extent]:
        return Extent.of(point.time for point in self.points)

    def value_extent(self) -> Optional[Extent]:
        return Extent.of(point.value for point in self.points)


@dataclass(frozen=True, slots=True)
class ChartData:
    """Finalized result of an aggregation, ready for rendering."""

    series: Tuple[Series, ...]
    time_extent: Optional[Extent]
    value_extent: Optional[Extent]
    failed: Tuple[str, ...] = ()

    @property
    def names(self) -> Tuple[str, ...]:
        return tuple(series.name for series in self.series)
