"""
DTOs Package - Application Layer

This package contains Data Transfer Objects (DTOs) used for data exchange
between the application layer and the presentation layer.
"""

from .chart_dto import (
    ChartDataDTO,
    ChartGeometryDTO,
    ExtentDTO,
    MarginDTO,
    PointDTO,
    SeriesDTO,
    SeriesGeometryDTO,
)
from .health_dto import ApplicationInfoDTO, DependencyStatusDTO, SystemHealthDTO

__all__ = [
    "PointDTO",
    "ExtentDTO",
    "SeriesDTO",
    "ChartDataDTO",
    "MarginDTO",
    "SeriesGeometryDTO",
    "ChartGeometryDTO",
    "SystemHealthDTO",
    "DependencyStatusDTO",
    "ApplicationInfoDTO",
]
