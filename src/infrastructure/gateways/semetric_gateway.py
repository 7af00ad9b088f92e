"""
Infrastructure Gateway - Semetric Time Series Implementation

This module implements the time-series gateway on top of the Semetric
artist API, which returns every dataset in the dense format wrapped in a
``{"success": bool, "response": {...}}`` envelope.
"""

from typing import Any, Dict, Optional
from urllib.parse import quote

import httpx
import structlog

from src.domain.entities.errors import DomainError, RequestFailedError
from src.domain.entities.time_series import DensePayload, Granularity
from src.domain.gateways.timeseries_gateway import ITimeseriesGateway

logger = structlog.get_logger(__name__)


class SemetricTimeseriesGateway(ITimeseriesGateway):
    """Implementation of the time-series gateway using an HTTP client."""

    def __init__(
        self,
        base_url: str,
        artist_id: str,
        token: str = "",
        granularity: Granularity = Granularity.WEEK,
        timeout: float = 30.0,
    ):
        """
        Initialize the Semetric gateway.

        Args:
            base_url: Base URL of the API (e.g. "http://api.semetric.com")
            artist_id: Artist identifier, any supported ID space works
                (e.g. "lastfm:rihanna")
            token: API token sent as a query parameter
            granularity: Default sampling granularity
            timeout: Request timeout in seconds
        """
        self.base_url = base_url.rstrip("/")
        self.artist_id = artist_id
        self.token = token
        self.granularity = Granularity(granularity)
        self.timeout = timeout

    def build_url(self, endpoint: str) -> str:
        path = endpoint if endpoint.startswith("/") else f"/{endpoint}"
        artist = quote(self.artist_id, safe=":")
        return f"{self.base_url}/artist/{artist}{path}"

    async def fetch_dense(
        self,
        endpoint: str,
        granularity: Optional[Granularity] = None,
    ) -> DensePayload:
        """Fetch a dense series for the configured artist."""

        url = self.build_url(endpoint)
        granularity = Granularity(granularity or self.granularity)
        params = {"granularity": granularity.value}

        logger.info(
            "semetric.fetch.started",
            url=url,
            endpoint=endpoint,
            params=params,
        )

        # Token is kept out of the logged params
        query = dict(params)
        if self.token:
            query["token"] = self.token

        try:
            async with httpx.AsyncClient(timeout=self.timeout) as client:
                response = await client.get(url, params=query)
                response.raise_for_status()

                body = response.json()
                return self._parse_envelope(body, endpoint)

        except DomainError:
            raise

        except httpx.HTTPStatusError as e:
            logger.error(
                "semetric.fetch.http_error",
                status_code=e.response.status_code,
                response_text=e.response.text,
                url=url,
            )
            raise RequestFailedError(
                endpoint,
                f"HTTP error {e.response.status_code}",
                {"status_code": e.response.status_code},
            ) from e

        except httpx.RequestError as e:
            logger.error("semetric.fetch.request_error", error=str(e), url=url)
            raise RequestFailedError(endpoint, f"request failed: {e}") from e

        except ValueError as e:
            logger.error("semetric.fetch.invalid_json", error=str(e), url=url)
            raise RequestFailedError(endpoint, "response is not valid JSON") from e

    def _parse_envelope(self, body: Any, endpoint: str) -> DensePayload:
        """Unwrap the success envelope and build the dense payload."""

        if not isinstance(body, dict):
            raise RequestFailedError(endpoint, "response body is not an object")

        if body.get("success") is not True:
            details: Dict[str, Any] = {
                key: value for key, value in body.items() if key != "response"
            }
            logger.warning(
                "semetric.fetch.unsuccessful",
                endpoint=endpoint,
                details=details,
            )
            raise RequestFailedError(endpoint, "API reported failure", details)

        payload = body.get("response")
        if payload is None:
            raise RequestFailedError(endpoint, "successful response without data")

        dense = DensePayload.from_mapping(payload)
        logger.info(
            "semetric.fetch.completed",
            endpoint=endpoint,
            samples=len(dense.data),
            period=dense.period,
        )
        return dense
