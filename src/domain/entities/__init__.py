"""
Domain Entities Package

This package contains the core domain entities and business logic.
"""

from .errors import (
    AggregatorStateError,
    DomainError,
    DuplicateKeyError,
    MalformedPayloadError,
    NoDataAvailableError,
    RequestFailedError,
)
from .health import ApplicationInfo, DependencyStatus, ServiceStatus, SystemHealth
from .time_series import ChartData, DensePayload, Extent, Granularity, Point, Series

__all__ = [
    "ChartData",
    "DensePayload",
    "Extent",
    "Granularity",
    "Point",
    "Series",
    "SystemHealth",
    "DependencyStatus",
    "ServiceStatus",
    "ApplicationInfo",
    "DomainError",
    "MalformedPayloadError",
    "RequestFailedError",
    "NoDataAvailableError",
    "AggregatorStateError",
    "DuplicateKeyError",
]
