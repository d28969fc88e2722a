"""Outbound HTTP fetch for the external proxy route."""

from __future__ import annotations

import httpx
from pydantic import JsonValue
from training_service_libs.logging_utils import create_service_logger

from services.training_demo_service.exceptions import (
    ExternalParseError,
    ExternalTransportError,
)
from services.training_demo_service.json_utils import reject_non_json_constant

logger = create_service_logger("training_demo.external_fetcher")


class HttpxExternalFetcher:
    """Fetches caller-supplied URLs with a shared httpx client.

    The URL is used as given: no allow-list, no scheme check, no timeout.
    """

    def __init__(self, http_client: httpx.AsyncClient) -> None:
        """Initialize with shared HTTP client.

        Args:
            http_client: Shared httpx AsyncClient instance
        """
        self._client = http_client

    async def fetch_json(self, url: str) -> JsonValue:
        """Fetch ``url`` and parse the body as JSON.

        Raises:
            ExternalTransportError: On transport failures or an unusable URL
            ExternalParseError: When the body is not strict JSON
        """
        logger.debug("Fetching external URL", url=url)

        try:
            response = await self._client.get(url)
        except (httpx.HTTPError, httpx.InvalidURL) as e:
            message = str(e) or f"{type(e).__name__} while fetching {url}"
            logger.warning("External fetch failed", url=url, error=message)
            raise ExternalTransportError(message) from e

        try:
            data: JsonValue = response.json(parse_constant=reject_non_json_constant)
        except (ValueError, RecursionError) as e:
            logger.warning(
                "External response is not JSON",
                url=url,
                status_code=response.status_code,
            )
            raise ExternalParseError() from e

        logger.info("Fetched external URL", url=url, status_code=response.status_code)
        return data
