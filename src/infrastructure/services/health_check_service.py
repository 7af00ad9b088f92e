"""Infrastructure implementation for upstream health checks."""

from __future__ import annotations

from time import perf_counter
from typing import Iterable

import httpx

from src.domain.entities.health import DependencyStatus, ServiceStatus, SystemHealth
from src.domain.ports.health_check import IHealthCheckService


class HealthCheckService(IHealthCheckService):
    """Probe the time-series API the charts are fetched from."""

    def __init__(self, api_url: str, *, http_timeout: float = 5.0) -> None:
        self._api_url = api_url
        self._http_timeout = http_timeout

    async def evaluate(self) -> SystemHealth:
        dependencies = [await self._check_api()]
        return SystemHealth(
            status=self._aggregate_status(dependencies), dependencies=dependencies
        )

    def _aggregate_status(self, statuses: Iterable[DependencyStatus]) -> ServiceStatus:
        values = {status.status for status in statuses}
        for candidate in (
            ServiceStatus.DOWN,
            ServiceStatus.DEGRADED,
            ServiceStatus.UNKNOWN,
        ):
            if candidate in values:
                return candidate
        return ServiceStatus.UP

    async def _check_api(self) -> DependencyStatus:
        if not self._api_url:
            return DependencyStatus(
                name="semetric_api",
                status=ServiceStatus.UNKNOWN,
                message="Time-series API URL not configured.",
            )

        start = perf_counter()
        try:
            async with httpx.AsyncClient(timeout=self._http_timeout) as client:
                response = await client.get(self._api_url)
        except (httpx.RequestError, httpx.InvalidURL) as exc:
            return DependencyStatus(
                name="semetric_api",
                status=ServiceStatus.DOWN,
                message=f"HTTP request failed: {exc}",
                url=self._api_url,
                latency_ms=(perf_counter() - start) * 1000,
            )

        status_code = response.status_code
        if status_code >= 500:
            status = ServiceStatus.DOWN
        elif status_code >= 400:
            # The API root may reject unauthenticated calls while being reachable
            status = ServiceStatus.DEGRADED
        else:
            status = ServiceStatus.UP

        return DependencyStatus(
            name="semetric_api",
            status=status,
            message=f"HTTP {status_code}",
            url=self._api_url,
            status_code=status_code,
            latency_ms=(perf_counter() - start) * 1000,
        )
