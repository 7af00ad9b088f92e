"""
Charts Router - Presentation Layer

This module defines the FastAPI router for chart data endpoints.
"""

from typing import List, Optional

from dependency_injector.wiring import Provide, inject
from fastapi import APIRouter, Depends, HTTPException, Query, status

from src.application.dtos.chart_dto import ChartDataDTO, ChartGeometryDTO
from src.application.use_cases.chart_use_cases import (
    GetChartDataUseCase,
    GetChartLayoutUseCase,
)
from src.domain.entities.errors import NoDataAvailableError
from src.domain.entities.time_series import Granularity
from src.shared import get_logger

logger = get_logger(__name__)

router = APIRouter(prefix="/charts", tags=["Charts"])


def _no_data(endpoints: Optional[List[str]], error: NoDataAvailableError):
    logger.warning("charts.no_data", endpoints=endpoints, failed=list(error.keys))
    return HTTPException(
        status_code=status.HTTP_502_BAD_GATEWAY,
        detail=error.message,
    )


@router.get("/data", response_model=ChartDataDTO)
@inject
async def get_chart_data(
    endpoint: Optional[List[str]] = Query(
        default=None,
        description="Endpoints to chart, in legend order (e.g. /fans/total)",
    ),
    granularity: Optional[Granularity] = Query(
        default=None, description="Sampling granularity"
    ),
    get_chart_data_use_case: GetChartDataUseCase = Depends(
        Provide["get_chart_data_use_case"]
    ),
) -> ChartDataDTO:
    """
    Fetch, decode and aggregate the requested series.

    Series are returned in the order the endpoints were given, whatever
    the order the upstream requests completed in. Failed endpoints are
    listed in ``failed`` and left out of ``series``.

    Raises:
        HTTPException: 502 when no endpoint returned data, 422 when an
            endpoint is repeated
    """
    logger.info("charts.data.requested", endpoints=endpoint, granularity=granularity)

    try:
        return await get_chart_data_use_case.execute(endpoint, granularity)

    except NoDataAvailableError as e:
        raise _no_data(endpoint, e) from e

    except ValueError as e:
        raise HTTPException(
            status_code=status.HTTP_422_UNPROCESSABLE_ENTITY, detail=str(e)
        ) from e

    except Exception as e:
        logger.error(
            "charts.data.failed", endpoints=endpoint, error=str(e), exc_info=e
        )
        raise HTTPException(
            status_code=status.HTTP_500_INTERNAL_SERVER_ERROR,
            detail=f"Failed to build chart data: {str(e)}",
        )


@router.get("/layout", response_model=ChartGeometryDTO)
@inject
async def get_chart_layout(
    endpoint: Optional[List[str]] = Query(
        default=None, description="Endpoints to chart, in legend order"
    ),
    granularity: Optional[Granularity] = Query(
        default=None, description="Sampling granularity"
    ),
    width: Optional[int] = Query(default=None, gt=0, description="Chart width"),
    height: Optional[int] = Query(default=None, gt=0, description="Chart height"),
    shared_axes: Optional[bool] = Query(
        default=None, description="Scale all series against shared extents"
    ),
    get_chart_layout_use_case: GetChartLayoutUseCase = Depends(
        Provide["get_chart_layout_use_case"]
    ),
) -> ChartGeometryDTO:
    """
    Lay out the requested series as lines in plot-area coordinates.

    Gaps in a series split its line into several segments.
    """
    logger.info(
        "charts.layout.requested",
        endpoints=endpoint,
        width=width,
        height=height,
        shared_axes=shared_axes,
    )

    try:
        return await get_chart_layout_use_case.execute(
            endpoints=endpoint,
            granularity=granularity,
            width=width,
            height=height,
            shared_axes=shared_axes,
        )

    except NoDataAvailableError as e:
        raise _no_data(endpoint, e) from e

    except ValueError as e:
        raise HTTPException(
            status_code=status.HTTP_422_UNPROCESSABLE_ENTITY, detail=str(e)
        ) from e

    except Exception as e:
        logger.error(
            "charts.layout.failed", endpoints=endpoint, error=str(e), exc_info=e
        )
        raise HTTPException(
            status_code=status.HTTP_500_INTERNAL_SERVER_ERROR,
            detail=f"Failed to lay out chart: {str(e)}",
        )
