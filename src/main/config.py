"""
Application Settings - Main Layer

Use Pydantic Settings for configuration management.
This module handles configuration settings provided using
environment variables, .env files and default values.
"""

from typing import List, Optional

from pydantic import AliasChoices, Field
from pydantic_settings import BaseSettings, SettingsConfigDict

from src.domain.entities.time_series import Granularity
from src.shared import DEFAULT_ENDPOINTS, EnumEnvironment, EnumLogLevel
from src.shared.env import load_secret_file_variables  # noqa: F401


class ServiceSettings(BaseSettings):
    """Service metadata and HTTP server settings."""

    title: str = Field(default="Semetric Charts", description="Service title")
    description: str = Field(
        default="Decodes dense artist time series and lays them out "
        "as line charts",
        description="Service description",
    )
    version: str = Field(default="1.0.0", description="Service version")
    git_commit: str = Field(
        default="unknown",
        description="Git commit hash",
        validation_alias=AliasChoices("GE_GIT_COMMIT", "GIT_COMMIT"),
    )
    build_time: str = Field(
        default="unknown",
        description="Build timestamp",
        validation_alias=AliasChoices("GE_BUILD_TIME", "BUILD_TIME"),
    )
    host: str = Field(default="0.0.0.0", description="Host to bind the server")
    port: int = Field(default=8000, description="Port to bind the server")
    reload: bool = Field(
        default=False, description="Enable auto-reload for development"
    )

    model_config = SettingsConfigDict(
        env_prefix="GE_", case_sensitive=False, extra="ignore"
    )


class SemetricSettings(BaseSettings):
    """Time-series API settings."""

    base_url: str = Field(
        default="http://api.semetric.com", description="Time-series API base URL"
    )
    artist_id: str = Field(
        default="fe66302b0aee49cfbd7d248403036def",
        description="Artist identifier in any supported ID space",
    )
    token: str = Field(
        default="",
        description="API token, also read from SEMETRIC_TOKEN_FILE",
        repr=False,
    )
    granularity: Granularity = Field(
        default=Granularity.WEEK, description="Default sampling granularity"
    )
    timeout: float = Field(default=30.0, description="Request timeout in seconds")
    endpoints: List[str] = Field(
        default_factory=lambda: list(DEFAULT_ENDPOINTS),
        description="Endpoints charted when a request names none",
    )

    model_config = SettingsConfigDict(
        env_prefix="SEMETRIC_", case_sensitive=False, extra="ignore"
    )


class ChartSettings(BaseSettings):
    """Default chart geometry."""

    width: int = Field(default=960, gt=0, description="Chart width in pixels")
    height: int = Field(default=500, gt=0, description="Chart height in pixels")
    shared_axes: bool = Field(
        default=True, description="Scale all series against shared extents"
    )

    model_config = SettingsConfigDict(
        env_prefix="CHART_", case_sensitive=False, extra="ignore"
    )


class LoggingSettings(BaseSettings):
    """Logging configuration settings."""

    level: EnumLogLevel = Field(default=EnumLogLevel.INFO, description="Logging level")
    file_path: Optional[str] = Field(
        default=None, description="Log file path (if None, logs to console)"
    )

    model_config = SettingsConfigDict(
        env_prefix="LOG_", case_sensitive=False, extra="ignore"
    )


class AppSettings(BaseSettings):
    """Main application settings, aggregating all sub-settings."""

    environment: EnumEnvironment = Field(
        default=EnumEnvironment.DEVELOPMENT, description="Application environment"
    )

    ge: ServiceSettings = Field(default_factory=ServiceSettings)
    semetric: SemetricSettings = Field(default_factory=SemetricSettings)
    chart: ChartSettings = Field(default_factory=ChartSettings)
    logging: LoggingSettings = Field(default_factory=LoggingSettings)

    model_config = SettingsConfigDict(
        env_file=".env",
        env_file_encoding="utf-8",
        case_sensitive=False,
        env_nested_delimiter="__",
        extra="ignore",
    )


def get_settings() -> AppSettings:
    """
    Get application settings instance Factory.

    Used to be mocked in tests, allowing different settings based on enviroment.
    """
    return AppSettings()


settings = get_settings()
