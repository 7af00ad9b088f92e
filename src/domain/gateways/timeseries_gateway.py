"""
Domain Gateway - Time Series

This module defines the gateway interface for fetching dense time series
from the remote metrics API.
"""

from abc import ABC, abstractmethod
from typing import Optional

from src.domain.entities.time_series import DensePayload, Granularity


class ITimeseriesGateway(ABC):
    """Interface for the dense time-series gateway."""

    @abstractmethod
    async def fetch_dense(
        self,
        endpoint: str,
        granularity: Optional[Granularity] = None,
    ) -> DensePayload:
        """
        Fetch one dense time series.

        Args:
            endpoint: Dataset path relative to the artist (e.g. "/fans/total")
            granularity: Sampling granularity; the gateway default when None

        Returns:
            The dense payload carried by a successful response

        Raises:
            RequestFailedError: When the transport fails or the API reports
                an unsuccessful response
            MalformedPayloadError: When the response payload is invalid
        """
        pass
