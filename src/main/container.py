"""
Dependency container injection module - Main Layer

This module implements the dependency injection container
to simplify the management and lifecycle of dependencies
in the application.
"""

from contextlib import asynccontextmanager

from dependency_injector import containers, providers

from src.application.models import SystemInfo
from src.application.use_cases.chart_use_cases import (
    GetChartDataUseCase,
    GetChartLayoutUseCase,
)
from src.application.use_cases.health_use_cases import (
    GetApplicationInfoUseCase,
    GetHealthStatusUseCase,
)
from src.infrastructure.gateways.semetric_gateway import SemetricTimeseriesGateway
from src.infrastructure.services.health_check_service import HealthCheckService
from src.shared import get_logger

from .config import AppSettings

logger = get_logger(__name__)


class AppContainer(containers.DeclarativeContainer):
    """Composition Root using dependecy-injector."""

    wiring_config = containers.WiringConfiguration(packages=["..presentation"])

    # Settings
    config = providers.Configuration()

    # Gateways
    timeseries_gateway = providers.Singleton(
        SemetricTimeseriesGateway,
        base_url=config.semetric.base_url,
        artist_id=config.semetric.artist_id,
        token=config.semetric.token,
        granularity=config.semetric.granularity,
        timeout=config.semetric.timeout,
    )

    # Infrastructure services
    health_check_service = providers.Singleton(
        HealthCheckService,
        api_url=config.semetric.base_url,
    )

    system_info = providers.Singleton(
        SystemInfo,
        title=config.ge.title,
        description=config.ge.description,
        version=config.ge.version,
        environment=providers.Callable(
            lambda env: env.value if hasattr(env, "value") else str(env),
            config.environment,
        ),
        git_commit=config.ge.git_commit,
        build_time=config.ge.build_time,
        api_url=config.semetric.base_url,
        artist_id=config.semetric.artist_id,
        granularity=providers.Callable(
            lambda value: value.value if hasattr(value, "value") else str(value),
            config.semetric.granularity,
        ),
    )

    # Application (use cases)
    get_chart_data_use_case = providers.Factory(
        GetChartDataUseCase,
        timeseries_gateway=timeseries_gateway,
        default_endpoints=config.semetric.endpoints,
        default_granularity=config.semetric.granularity,
    )

    get_chart_layout_use_case = providers.Factory(
        GetChartLayoutUseCase,
        chart_data_use_case=get_chart_data_use_case,
        default_width=config.chart.width,
        default_height=config.chart.height,
        default_shared_axes=config.chart.shared_axes,
    )

    get_health_status_use_case = providers.Factory(
        GetHealthStatusUseCase,
        health_check_service=health_check_service,
    )

    get_application_info_use_case = providers.Factory(
        GetApplicationInfoUseCase,
        health_check_service=health_check_service,
        system_info=system_info,
    )


# -------------------------
# Global Container Instance
# -------------------------
_app_container: AppContainer | None = None


def init_container(settings: AppSettings) -> AppContainer:
    """Initialize global container with application settings."""

    global _app_container

    container = AppContainer()
    container.config.from_pydantic(settings)
    _app_container = container
    return container


def get_container() -> AppContainer:
    """Get the initialized global container."""

    if _app_container is None:
        raise RuntimeError("Container has not been initialized yet")

    return _app_container


@asynccontextmanager
async def app_lifespan():
    """
    Centralized lifecycle management for the container.

    Gateways open an HTTP client per request, so there is no connection
    pool to warm up; the gateway is resolved eagerly so that configuration
    errors surface at startup instead of on the first chart request.
    """
    container = get_container()

    container.timeseries_gateway()
    logger.info(
        "container.resources.initialized",
        api_url=container.config.semetric.base_url(),
        artist_id=container.config.semetric.artist_id(),
    )

    try:
        yield container
    finally:
        logger.info("container.resources.shutdown")
