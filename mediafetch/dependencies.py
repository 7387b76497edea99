"""FastAPI dependencies."""

import httpx
from fastapi import Depends

from mediafetch.config import Settings, get_settings
from mediafetch.download.relay import DownloadRelay
from mediafetch.search.aggregator import SearchAggregator, SearchService
from mediafetch.search.client import SearchClient
from mediafetch.search.normalize import ResultNormalizer


def get_http_transport() -> httpx.AsyncBaseTransport | None:
    """Outbound transport; None means httpx's default network transport."""
    return None


def get_search_service(
    settings: Settings = Depends(get_settings),
    transport: httpx.AsyncBaseTransport | None = Depends(get_http_transport),
) -> SearchService:
    """Get a search service wired to the configured provider."""
    client = SearchClient(settings, transport=transport)
    return SearchService(
        aggregator=SearchAggregator(client, settings),
        normalizer=ResultNormalizer(settings.placeholder_thumbnail),
    )


def get_download_relay(
    settings: Settings = Depends(get_settings),
    transport: httpx.AsyncBaseTransport | None = Depends(get_http_transport),
) -> DownloadRelay:
    """Get a download relay instance via dependency injection."""
    return DownloadRelay(settings, transport=transport)
