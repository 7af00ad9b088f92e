"""
Chart Use Cases - Application Layer

This module defines the use cases that fetch several dense series
concurrently, decode them and aggregate them into chart data, optionally
laid out into screen coordinates.
"""

import asyncio
from typing import Optional, Sequence

from src.application.dtos.chart_dto import ChartDataDTO, ChartGeometryDTO
from src.domain.entities.errors import DomainError, NoDataAvailableError
from src.domain.entities.time_series import ChartData, Granularity
from src.domain.gateways.timeseries_gateway import ITimeseriesGateway
from src.domain.services.chart_layout import ChartLayout
from src.domain.services.dense_decoder import decode
from src.domain.services.series_aggregator import SeriesAggregator
from src.shared import get_logger

logger = get_logger(__name__)


class GetChartDataUseCase:
    """Use case for fetching and aggregating the series of one chart."""

    def __init__(
        self,
        timeseries_gateway: ITimeseriesGateway,
        default_endpoints: Sequence[str] = (),
        default_granularity: Granularity = Granularity.WEEK,
    ):
        """
        Initialize the use case with its dependencies.

        Args:
            timeseries_gateway: Gateway used to fetch dense series
            default_endpoints: Endpoints charted when the caller names none
            default_granularity: Granularity used when the caller names none
        """
        self.timeseries_gateway = timeseries_gateway
        self.default_endpoints = tuple(default_endpoints)
        self.default_granularity = Granularity(default_granularity)

    async def collect(
        self,
        endpoints: Optional[Sequence[str]] = None,
        granularity: Optional[Granularity] = None,
    ) -> ChartData:
        """
        Fetch every endpoint concurrently and wait for all of them to settle.

        Requests that fail are left out of the result; the remaining series
        keep the order in which the endpoints were given.

        Raises:
            DuplicateKeyError: When an endpoint is listed twice
            NoDataAvailableError: When every request failed
        """
        keys = list(endpoints) if endpoints else list(self.default_endpoints)
        granularity = Granularity(granularity or self.default_granularity)

        aggregator = SeriesAggregator(keys)

        logger.info(
            "charts.collect.started",
            endpoints=keys,
            granularity=granularity.value,
        )

        tasks = [
            asyncio.create_task(self._fetch_into(aggregator, key, granularity))
            for key in keys
        ]

        try:
            chart = await aggregator.wait()
        except NoDataAvailableError:
            logger.warning(
                "charts.collect.no_data",
                endpoints=keys,
                failures=aggregator.failures,
            )
            raise
        finally:
            await asyncio.gather(*tasks)

        logger.info(
            "charts.collect.completed",
            series=list(chart.names),
            failed=list(chart.failed),
        )
        return chart

    async def execute(
        self,
        endpoints: Optional[Sequence[str]] = None,
        granularity: Optional[Granularity] = None,
    ) -> ChartDataDTO:
        chart = await self.collect(endpoints, granularity)
        return ChartDataDTO.from_domain(chart)

    async def _fetch_into(
        self,
        aggregator: SeriesAggregator,
        key: str,
        granularity: Granularity,
    ) -> None:
        try:
            payload = await self.timeseries_gateway.fetch_dense(key, granularity)
            points = decode(payload)
        except DomainError as e:
            logger.warning(
                "charts.request.failed",
                endpoint=key,
                error=e.message,
                details=e.details,
            )
            aggregator.settle_failure(key, e.message)
            return
        except Exception as e:
            # Unexpected errors still settle, otherwise the join never completes
            logger.error(
                "charts.request.unexpected_error",
                endpoint=key,
                error=str(e),
                exc_info=e,
            )
            aggregator.settle_failure(key, str(e))
            return

        logger.debug("charts.request.decoded", endpoint=key, points=len(points))
        aggregator.settle_success(key, points)


class GetChartLayoutUseCase:
    """Use case for laying out chart data into screen coordinates."""

    def __init__(
        self,
        chart_data_use_case: GetChartDataUseCase,
        default_width: int = 960,
        default_height: int = 500,
        default_shared_axes: bool = True,
    ):
        self.chart_data_use_case = chart_data_use_case
        self.default_width = default_width
        self.default_height = default_height
        self.default_shared_axes = default_shared_axes

    async def execute(
        self,
        endpoints: Optional[Sequence[str]] = None,
        granularity: Optional[Granularity] = None,
        width: Optional[int] = None,
        height: Optional[int] = None,
        shared_axes: Optional[bool] = None,
    ) -> ChartGeometryDTO:
        """
        Fetch the chart data and compute the line geometry of every series.

        Raises:
            ValueError: When the chart size leaves no plot area
            NoDataAvailableError: When every request failed
        """
        layout = ChartLayout(
            width=width or self.default_width,
            height=height or self.default_height,
        )
        shared = self.default_shared_axes if shared_axes is None else shared_axes

        chart = await self.chart_data_use_case.collect(endpoints, granularity)
        geometry = layout.build(chart, shared_axes=shared)

        logger.info(
            "charts.layout.built",
            series=len(geometry.series),
            width=geometry.width,
            height=geometry.height,
            shared_axes=shared,
        )
        return ChartGeometryDTO.from_domain(geometry, chart.failed)
