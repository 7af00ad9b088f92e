"""Domain port for probing upstream availability."""

from __future__ import annotations

from typing import Protocol

from src.domain.entities.health import SystemHealth


class IHealthCheckService(Protocol):
    async def evaluate(self) -> SystemHealth:
        """Probe the upstream API and summarize its availability."""
        ...
