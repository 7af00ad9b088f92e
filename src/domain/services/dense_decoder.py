"""
Domain Service - Dense Decoder

The time-series API returns series in a *dense* format: a start time, an
end time, the sampling period and a flat array of values. Timestamps are not
transmitted per sample, they are reconstructed from the array index:

    time[i] = start_time * 1000 + i * period * 1000

API times are UNIX seconds, decoded points carry milliseconds.
"""

from __future__ import annotations

from typing import List

from src.domain.entities.errors import MalformedPayloadError
from src.domain.entities.time_series import (
    DensePayload,
    Point,
    is_numeric,
    is_value_sequence,
)

MILLISECONDS_PER_SECOND = 1000


def decode(payload: DensePayload) -> List[Point]:
    """
    Convert a dense payload into explicit timestamped points.

    Gaps (``None`` entries) are kept as points with a ``None`` value so the
    index to timestamp mapping stays intact. ``end_time`` is not consulted:
    exactly ``len(payload.data)`` points are produced.

    Args:
        payload: Dense payload as returned by the API

    Returns:
        Points in ascending time order

    Raises:
        MalformedPayloadError: When the period is not positive, the data is
            not an array or a sample is neither numeric nor null
    """
    if payload.period is None or payload.period <= 0:
        raise MalformedPayloadError(
            "'period' must be a positive number of seconds",
            {"period": payload.period},
        )
    if not is_value_sequence(payload.data):
        raise MalformedPayloadError(
            "'data' must be an array of values",
            {"type": type(payload.data).__name__},
        )

    start = payload.start_time * MILLISECONDS_PER_SECOND
    step = payload.period * MILLISECONDS_PER_SECOND

    points: List[Point] = []
    for index, value in enumerate(payload.data):
        if value is not None and not is_numeric(value):
            raise MalformedPayloadError(
                f"sample {index} is not numeric",
                {"index": index, "value": value},
            )
        points.append(Point(time=start + index * step, value=value))

    return points
