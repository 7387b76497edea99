"""Custom Search JSON API client with async patterns."""

import logging
from typing import Any

import httpx

from mediafetch.config import Settings
from mediafetch.exceptions import ConfigurationError, UpstreamFetchFailed

logger = logging.getLogger(__name__)

_REDACTED_PARAMS = {"key"}


def _loggable(params: dict[str, str]) -> dict[str, str]:
    return {k: ("***" if k in _REDACTED_PARAMS else v) for k, v in params.items()}


def _error_message(response: httpx.Response) -> str:
    """Pull ``error.message`` out of a provider error body if there is one."""
    try:
        payload = response.json()
    except ValueError:
        return "Failed to fetch from search API"
    if isinstance(payload, dict):
        error = payload.get("error")
        if isinstance(error, dict) and error.get("message"):
            return str(error["message"])
    return "Failed to fetch from search API"


class SearchClient:
    """Async client for the Custom Search JSON API."""

    def __init__(
        self,
        settings: Settings,
        transport: httpx.AsyncBaseTransport | None = None,
    ):
        self.settings = settings
        self.base_url = settings.search_base_url
        self._transport = transport

    def _headers(self) -> dict[str, str]:
        return {
            "Accept": "application/json",
            "User-Agent": self.settings.user_agent,
        }

    def _client(self) -> httpx.AsyncClient:
        return httpx.AsyncClient(
            timeout=self.settings.http_timeout,
            headers=self._headers(),
            follow_redirects=True,
            transport=self._transport,
        )

    async def fetch_page(self, params: dict[str, str]) -> list[dict[str, Any]]:
        """
        Fetch one page of results.

        Args:
            params: Full query parameters including ``num`` and ``start``

        Returns:
            The raw ``items`` list (empty when the provider has no more)

        Raises:
            ConfigurationError: When credentials are missing
            UpstreamFetchFailed: On non-success status, network error or a
                malformed payload
        """
        if not self.settings.search_configured:
            raise ConfigurationError(
                "GOOGLE_API_KEY and SEARCH_ENGINE_ID must be configured to search"
            )

        logger.info("Search API request: %s", _loggable(params))

        async with self._client() as client:
            try:
                response = await client.get(self.base_url, params=params)
            except httpx.RequestError as e:
                logger.error("Network error connecting to search API: %s", e)
                raise UpstreamFetchFailed(f"Network error connecting to search API: {e}") from e

        logger.debug("Search API response: %s", response.status_code)

        if not response.is_success:
            message = _error_message(response)
            logger.error(
                "Search API error %s: params=%s message=%s",
                response.status_code,
                _loggable(params),
                message,
            )
            raise UpstreamFetchFailed(
                message,
                upstream_status=response.status_code,
                response_text=response.text[:1000],
            )

        try:
            data = response.json()
        except ValueError as e:
            raise UpstreamFetchFailed(
                "Malformed response from search API",
                upstream_status=response.status_code,
                response_text=response.text[:1000],
            ) from e

        if not isinstance(data, dict):
            raise UpstreamFetchFailed("Malformed response from search API", response.status_code)

        items = data.get("items")
        if items is None:
            return []
        if not isinstance(items, list):
            raise UpstreamFetchFailed("Malformed response from search API", response.status_code)
        return [item for item in items if isinstance(item, dict)]

    async def is_image_url(self, url: str) -> bool:
        """HEAD ``url`` and report whether it answers with an image type."""
        async with self._client() as client:
            try:
                response = await client.head(url)
            except httpx.HTTPError as e:
                logger.warning("Error verifying image URL %s: %s", url, e)
                return False
        content_type = response.headers.get("content-type", "")
        return content_type.lower().startswith("image/")
