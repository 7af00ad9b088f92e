from __future__ import annotations

import asyncio
import random

import pytest

from src.domain.entities.errors import (
    AggregatorStateError,
    DuplicateKeyError,
    NoDataAvailableError,
)
from src.domain.entities.time_series import Extent, Point, Series
from src.domain.services.dense_decoder import decode
from src.domain.services.series_aggregator import (
    AggregatorState,
    SeriesAggregator,
    compute_extents,
)
from tests.conftest import dense

ENDPOINTS = ["/fans/total", "/fans/facebook", "/fans/twitter", "/fans/youtube"]


def test_fans_scenario_orders_by_declaration_not_arrival() -> None:
    aggregator = SeriesAggregator(["/fans/total", "/fans/facebook"])

    aggregator.settle_success("/fans/facebook", decode(dense([10, 20, 30])))
    assert aggregator.state is AggregatorState.COLLECTING
    aggregator.settle_success("/fans/total", decode(dense([100, 200])))

    chart = aggregator.result()

    assert aggregator.state is AggregatorState.FINALIZED
    assert chart.names == ("/fans/total", "/fans/facebook")
    assert chart.series[0].points == (
        Point(time=0, value=100),
        Point(time=604800000, value=200),
    )
    assert chart.series[1].points == (
        Point(time=0, value=10),
        Point(time=604800000, value=20),
        Point(time=1209600000, value=30),
    )
    assert chart.time_extent == Extent(min=0, max=1209600000)
    assert chart.value_extent == Extent(min=10, max=200)


def test_order_is_invariant_under_completion_order() -> None:
    rng = random.Random(1234)
    payloads = {key: decode(dense([i, i + 1])) for i, key in enumerate(ENDPOINTS)}

    for _ in range(100):
        arrival = list(ENDPOINTS)
        rng.shuffle(arrival)
        aggregator = SeriesAggregator(ENDPOINTS)
        for key in arrival:
            aggregator.settle_success(key, payloads[key])

        assert aggregator.result().names == tuple(ENDPOINTS)


def test_failed_request_is_absent_and_others_unaffected() -> None:
    aggregator = SeriesAggregator(ENDPOINTS)
    aggregator.settle_success("/fans/youtube", decode(dense([4])))
    aggregator.settle_failure("/fans/facebook", "HTTP error 500")
    aggregator.settle_success("/fans/total", decode(dense([1, 2])))
    aggregator.settle_failure("/fans/twitter", "API reported failure")

    chart = aggregator.result()

    assert chart.names == ("/fans/total", "/fans/youtube")
    assert chart.failed == ("/fans/facebook", "/fans/twitter")
    assert chart.series[0].points == tuple(decode(dense([1, 2])))
    assert aggregator.failures["/fans/facebook"] == "HTTP error 500"


def test_all_failures_raise_no_data_available() -> None:
    aggregator = SeriesAggregator(["/a", "/b"])
    aggregator.settle_failure("/a")
    aggregator.settle_failure("/b")

    assert aggregator.state is AggregatorState.FINALIZED
    with pytest.raises(NoDataAvailableError) as exc:
        aggregator.result()
    assert exc.value.keys == ("/a", "/b")


def test_empty_key_list_settles_immediately_without_data() -> None:
    aggregator = SeriesAggregator([])

    assert aggregator.state is AggregatorState.FINALIZED
    with pytest.raises(NoDataAvailableError):
        aggregator.result()


def test_result_before_settle_raises() -> None:
    aggregator = SeriesAggregator(["/a", "/b"])
    assert aggregator.state is AggregatorState.PENDING
    aggregator.settle_success("/a", [])

    assert aggregator.outstanding == 1
    with pytest.raises(AggregatorStateError):
        aggregator.result()


def test_duplicate_canonical_keys_are_rejected() -> None:
    with pytest.raises(DuplicateKeyError):
        SeriesAggregator(["/a", "/b", "/a"])


def test_settling_unknown_or_repeated_key_raises() -> None:
    aggregator = SeriesAggregator(["/a", "/b"])

    with pytest.raises(AggregatorStateError):
        aggregator.settle_success("/c", [])

    aggregator.settle_success("/a", [])
    with pytest.raises(AggregatorStateError):
        aggregator.settle_failure("/a")


def test_finalized_aggregator_is_immutable() -> None:
    aggregator = SeriesAggregator(["/a"])
    aggregator.settle_success("/a", decode(dense([1])))
    chart = aggregator.result()

    with pytest.raises(AggregatorStateError):
        aggregator.settle_success("/a", decode(dense([2])))
    assert aggregator.result() is chart


def test_value_extent_excludes_nulls() -> None:
    series = [Series(name="/a", points=tuple(decode(dense([1, None, 5]))))]

    time_extent, value_extent = compute_extents(series)

    assert value_extent == Extent(min=1, max=5)
    assert time_extent == Extent(min=0, max=2 * 604800000)


def test_value_extent_is_none_when_every_value_is_null() -> None:
    aggregator = SeriesAggregator(["/a"])
    aggregator.settle_success("/a", decode(dense([None, None])))

    chart = aggregator.result()

    assert chart.value_extent is None
    assert chart.time_extent == Extent(min=0, max=604800000)


def test_compute_extents_of_nothing() -> None:
    assert compute_extents([]) == (None, None)


@pytest.mark.asyncio
async def test_wait_returns_once_every_request_settles() -> None:
    aggregator = SeriesAggregator(["/slow", "/fast", "/broken"])

    async def complete(key: str, delay: float) -> None:
        await asyncio.sleep(delay)
        if key == "/broken":
            aggregator.settle_failure(key, "boom")
        else:
            aggregator.settle_success(key, decode(dense([delay])))

    tasks = [
        asyncio.create_task(complete("/slow", 0.03)),
        asyncio.create_task(complete("/fast", 0.0)),
        asyncio.create_task(complete("/broken", 0.01)),
    ]

    chart = await asyncio.wait_for(aggregator.wait(), timeout=1)
    await asyncio.gather(*tasks)

    assert chart.names == ("/slow", "/fast")
    assert chart.failed == ("/broken",)


@pytest.mark.asyncio
async def test_wait_raises_when_all_requests_fail() -> None:
    aggregator = SeriesAggregator(["/a"])

    async def fail() -> None:
        await asyncio.sleep(0)
        aggregator.settle_failure("/a", "boom")

    task = asyncio.create_task(fail())
    with pytest.raises(NoDataAvailableError):
        await asyncio.wait_for(aggregator.wait(), timeout=1)
    await task
