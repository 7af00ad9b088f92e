"""
Domain Service - Series Aggregator

Collects decoded series from requests that complete in arbitrary order and
finalizes them into the order in which the caller declared the keys.

An aggregator is single use. It moves through the following states:

    PENDING -> COLLECTING -> SETTLED -> FINALIZED

The join is an "all settle" barrier: ``outstanding`` starts at the number of
keys and is decremented for every success *or* failure. When it reaches zero
the collected series are sorted by canonical index, extents are computed and
every waiter is released. All mutation is expected to happen on the event
loop thread, so no locking is involved.
"""

from __future__ import annotations

import asyncio
from enum import Enum
from typing import Dict, Iterable, List, Optional, Sequence, Tuple

from src.domain.entities.errors import (
    AggregatorStateError,
    DuplicateKeyError,
    NoDataAvailableError,
)
from src.domain.entities.time_series import ChartData, Extent, Point, Series


class AggregatorState(str, Enum):
    PENDING = "pending"
    COLLECTING = "collecting"
    SETTLED = "settled"
    FINALIZED = "finalized"


def compute_extents(
    series: Iterable[Series],
) -> Tuple[Optional[Extent], Optional[Extent]]:
    """
    Compute the shared time and value extents of a set of series.

    Null values are gaps, not zeros, and are left out of the value extent.

    Returns:
        Tuple of (time_extent, value_extent); either is None when there is
        nothing to measure
    """
    series = list(series)
    time_extent = Extent.union(item.time_extent() for item in series)
    value_extent = Extent.union(item.value_extent() for item in series)
    return time_extent, value_extent


class SeriesAggregator:
    """Owns the result set of one render cycle."""

    def __init__(self, keys: Sequence[str]):
        """
        Args:
            keys: Canonical key order, usually the declared endpoint order

        Raises:
            DuplicateKeyError: When a key is declared twice
        """
        self._order: Dict[str, int] = {}
        for index, key in enumerate(keys):
            if key in self._order:
                raise DuplicateKeyError(key)
            self._order[key] = index

        self._collected: List[Series] = []
        self._failed: Dict[str, str] = {}
        self._settled_keys: set[str] = set()
        self._outstanding = len(self._order)
        self._state = AggregatorState.PENDING
        self._result: Optional[ChartData] = None
        self._event = asyncio.Event()

        if self._outstanding == 0:
            self._finalize()

    @property
    def keys(self) -> Tuple[str, ...]:
        return tuple(self._order)

    @property
    def state(self) -> AggregatorState:
        return self._state

    @property
    def outstanding(self) -> int:
        return self._outstanding

    @property
    def failures(self) -> Dict[str, str]:
        return dict(self._failed)

    def settle_success(self, key: str, points: Iterable[Point]) -> None:
        """Record the decoded points of a request that completed successfully."""
        self._check_can_settle(key)
        self._collected.append(Series(name=key, points=tuple(points)))
        self._settle(key)

    def settle_failure(self, key: str, reason: str = "") -> None:
        """Record a request that failed; the key will be absent from the result."""
        self._check_can_settle(key)
        self._failed[key] = reason
        self._settle(key)

    async def wait(self) -> ChartData:
        """
        Wait until every request has settled and return the finalized data.

        Raises:
            NoDataAvailableError: When no request succeeded
        """
        await self._event.wait()
        return self.result()

    def result(self) -> ChartData:
        """
        Return the finalized data without waiting.

        Raises:
            AggregatorStateError: When requests are still outstanding
            NoDataAvailableError: When no request succeeded
        """
        if self._state is not AggregatorState.FINALIZED or self._result is None:
            raise AggregatorStateError(
                "Aggregation has not settled yet",
                {"outstanding": self._outstanding, "state": self._state.value},
            )
        if not self._result.series:
            raise NoDataAvailableError(self._result.failed)
        return self._result

    def _check_can_settle(self, key: str) -> None:
        if self._state in (AggregatorState.SETTLED, AggregatorState.FINALIZED):
            raise AggregatorStateError(
                f"Cannot settle {key}: aggregation already finalized",
                {"key": key},
            )
        if key not in self._order:
            raise AggregatorStateError(f"Unknown series key: {key}", {"key": key})
        if key in self._settled_keys:
            raise AggregatorStateError(f"Series {key} already settled", {"key": key})

    def _settle(self, key: str) -> None:
        self._settled_keys.add(key)
        self._outstanding -= 1
        self._state = AggregatorState.COLLECTING
        if self._outstanding == 0:
            self._finalize()

    def _finalize(self) -> None:
        self._state = AggregatorState.SETTLED

        # keys are unique, so the sort has no ties
        ordered = tuple(sorted(self._collected, key=lambda s: self._order[s.name]))
        failed = tuple(sorted(self._failed, key=self._order.__getitem__))
        time_extent, value_extent = compute_extents(ordered)

        self._result = ChartData(
            series=ordered,
            time_extent=time_extent,
            value_extent=value_extent,
            failed=failed,
        )
        self._collected = []
        self._state = AggregatorState.FINALIZED
        self._event.set()
