"""
Chart DTOs - Application Layer

This module defines Data Transfer Objects (DTOs) for decoded series,
their extents and their screen-space geometry. These DTOs are used to
transfer data between the application layer and the presentation layer.
"""

from __future__ import annotations

from typing import List, Optional, Tuple, Union

from pydantic import BaseModel, Field

from src.domain.entities.time_series import ChartData, Extent, Point, Series
from src.domain.services.chart_layout import (
    ChartGeometry,
    Margin,
    SeriesGeometry,
)

Number = Union[int, float]


class PointDTO(BaseModel):
    """DTO for a single decoded sample."""

    time: int = Field(description="Milliseconds since epoch")
    value: Optional[Number] = Field(
        default=None, description="Sample value, null for a gap"
    )

    @classmethod
    def from_domain(cls, point: Point) -> "PointDTO":
        return cls(time=point.time, value=point.value)


class ExtentDTO(BaseModel):
    """DTO for the bounds of a dimension."""

    min: Number
    max: Number

    @classmethod
    def from_domain(cls, extent: Optional[Extent]) -> Optional["ExtentDTO"]:
        if extent is None:
            return None
        return cls(min=extent.min, max=extent.max)


class SeriesDTO(BaseModel):
    """DTO for a decoded series."""

    name: str = Field(description="Endpoint the series was fetched from")
    points: List[PointDTO] = Field(default_factory=list)

    @classmethod
    def from_domain(cls, series: Series) -> "SeriesDTO":
        return cls(
            name=series.name,
            points=[PointDTO.from_domain(point) for point in series.points],
        )


class ChartDataDTO(BaseModel):
    """DTO for the finalized series of a chart and their shared extents."""

    series: List[SeriesDTO] = Field(
        description="Series in the order the endpoints were requested"
    )
    time_extent: Optional[ExtentDTO] = Field(
        default=None, description="Shared time domain in milliseconds"
    )
    value_extent: Optional[ExtentDTO] = Field(
        default=None, description="Shared value domain, gaps excluded"
    )
    failed: List[str] = Field(
        default_factory=list,
        description="Endpoints whose request failed and are left out",
    )

    @classmethod
    def from_domain(cls, chart: ChartData) -> "ChartDataDTO":
        return cls(
            series=[SeriesDTO.from_domain(series) for series in chart.series],
            time_extent=ExtentDTO.from_domain(chart.time_extent),
            value_extent=ExtentDTO.from_domain(chart.value_extent),
            failed=list(chart.failed),
        )

    model_config = {
        "json_schema_extra": {
            "example": {
                "series": [
                    {
                        "name": "/fans/total",
                        "points": [
                            {"time": 0, "value": 100},
                            {"time": 604800000, "value": 200},
                        ],
                    }
                ],
                "time_extent": {"min": 0, "max": 604800000},
                "value_extent": {"min": 100, "max": 200},
                "failed": ["/fans/youtube"],
            }
        }
    }


class MarginDTO(BaseModel):
    top: int
    right: int
    bottom: int
    left: int

    @classmethod
    def from_domain(cls, margin: Margin) -> "MarginDTO":
        return cls(
            top=margin.top, right=margin.right, bottom=margin.bottom, left=margin.left
        )


class SeriesGeometryDTO(BaseModel):
    """DTO for the line of one series in plot-area coordinates."""

    name: str
    segments: List[List[Tuple[float, float]]] = Field(
        default_factory=list,
        description="Polylines of (x, y) points; gaps split the line",
    )
    time_extent: Optional[ExtentDTO] = None
    value_extent: Optional[ExtentDTO] = None

    @classmethod
    def from_domain(cls, geometry: SeriesGeometry) -> "SeriesGeometryDTO":
        return cls(
            name=geometry.name,
            segments=[list(segment) for segment in geometry.segments],
            time_extent=ExtentDTO.from_domain(geometry.time_extent),
            value_extent=ExtentDTO.from_domain(geometry.value_extent),
        )


class ChartGeometryDTO(BaseModel):
    """DTO for a laid out line chart."""

    width: int
    height: int
    margin: MarginDTO
    plot_width: int
    plot_height: int
    shared_axes: bool
    series: List[SeriesGeometryDTO]
    failed: List[str] = Field(default_factory=list)

    @classmethod
    def from_domain(
        cls, geometry: ChartGeometry, failed: Tuple[str, ...] = ()
    ) -> "ChartGeometryDTO":
        return cls(
            width=geometry.width,
            height=geometry.height,
            margin=MarginDTO.from_domain(geometry.margin),
            plot_width=geometry.plot_width,
            plot_height=geometry.plot_height,
            shared_axes=geometry.shared_axes,
            series=[SeriesGeometryDTO.from_domain(item) for item in geometry.series],
            failed=list(failed),
        )
