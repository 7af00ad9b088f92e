"""DTOs for system health and application info responses."""

from __future__ import annotations

from datetime import datetime
from typing import Any, Dict, List, Optional

from pydantic import BaseModel, Field

from src.domain.entities.health import (
    ApplicationInfo,
    DependencyStatus,
    ServiceStatus,
    SystemHealth,
)


class DependencyStatusDTO(BaseModel):
    """Serializable representation of an upstream probe."""

    name: str = Field(description="Dependency identifier")
    status: ServiceStatus = Field(description="Status of the dependency")
    message: Optional[str] = Field(default=None, description="Probe outcome")
    url: Optional[str] = Field(default=None, description="Probed URL")
    status_code: Optional[int] = Field(default=None, description="HTTP status code")
    latency_ms: Optional[float] = Field(
        default=None, description="Latency in milliseconds"
    )
    checked_at: datetime = Field(description="Timestamp of the probe")

    @classmethod
    def from_domain(cls, status: DependencyStatus) -> "DependencyStatusDTO":
        return cls(
            name=status.name,
            status=status.status,
            message=status.message,
            url=status.url,
            status_code=status.status_code,
            latency_ms=status.latency_ms,
            checked_at=status.checked_at,
        )


class SystemHealthDTO(BaseModel):
    """DTO representing the /health response payload."""

    status: ServiceStatus = Field(description="Overall system status")
    dependencies: List[DependencyStatusDTO] = Field(default_factory=list)

    @classmethod
    def from_domain(cls, health: SystemHealth) -> "SystemHealthDTO":
        return cls(
            status=health.status,
            dependencies=[
                DependencyStatusDTO.from_domain(dep) for dep in health.dependencies
            ],
        )

    model_config = {
        "json_schema_extra": {
            "example": {
                "status": "up",
                "dependencies": [
                    {
                        "name": "semetric_api",
                        "status": "up",
                        "message": "HTTP 200",
                        "url": "http://api.semetric.com",
                        "status_code": 200,
                        "latency_ms": 42.1,
                        "checked_at": "2024-09-09T12:00:00Z",
                    }
                ],
            }
        }
    }


class ApplicationInfoDTO(BaseModel):
    """DTO representing metadata returned by /info."""

    name: str
    description: str
    version: str
    environment: str
    git_commit: str
    build_time: str
    started_at: datetime
    uptime_seconds: float
    status: ServiceStatus
    dependencies: List[DependencyStatusDTO] = Field(default_factory=list)
    upstream: Dict[str, Any] = Field(
        default_factory=dict,
        description="Time-series API settings, without credentials",
    )

    @classmethod
    def from_domain(cls, info: ApplicationInfo) -> "ApplicationInfoDTO":
        return cls(
            name=info.name,
            description=info.description,
            version=info.version,
            environment=info.environment,
            git_commit=info.git_commit,
            build_time=info.build_time,
            started_at=info.started_at,
            uptime_seconds=info.uptime_seconds,
            status=info.status,
            dependencies=[
                DependencyStatusDTO.from_domain(dep) for dep in info.dependencies
            ],
            upstream=info.upstream,
        )
