from __future__ import annotations

import sys
from pathlib import Path
from typing import Any, Dict, List, Optional

import pytest

from src.domain.entities.errors import RequestFailedError
from src.domain.entities.time_series import DensePayload, Granularity
from src.domain.gateways.timeseries_gateway import ITimeseriesGateway

ROOT = Path(__file__).resolve().parents[1]
if str(ROOT) not in sys.path:
    sys.path.insert(0, str(ROOT))

WEEK = 604800


def dense(data: List[Any], start_time: int = 0, period: int = WEEK) -> DensePayload:
    return DensePayload(
        start_time=start_time,
        end_time=start_time + max(len(data) - 1, 0) * period,
        period=period,
        data=tuple(data),
    )


class FakeTimeseriesGateway(ITimeseriesGateway):
    """Gateway returning canned payloads, failing for keys mapped to None."""

    def __init__(self, payloads: Dict[str, Optional[DensePayload]]) -> None:
        self.payloads = payloads
        self.calls: List[tuple[str, Optional[Granularity]]] = []

    async def fetch_dense(
        self, endpoint: str, granularity: Optional[Granularity] = None
    ) -> DensePayload:
        self.calls.append((endpoint, granularity))
        payload = self.payloads.get(endpoint)
        if payload is None:
            raise RequestFailedError(endpoint, "API reported failure")
        return payload


@pytest.fixture()
def fans_payloads() -> Dict[str, Optional[DensePayload]]:
    return {
        "/fans/total": DensePayload(
            start_time=0, end_time=1209600, period=WEEK, data=(100, 200)
        ),
        "/fans/facebook": DensePayload(
            start_time=0, end_time=1209600, period=WEEK, data=(10, 20, 30)
        ),
    }


@pytest.fixture()
def fake_gateway(fans_payloads) -> FakeTimeseriesGateway:
    return FakeTimeseriesGateway(fans_payloads)
