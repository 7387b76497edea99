"""Tests for the search provider client."""

import httpx
import pytest

from mediafetch.config import Settings
from mediafetch.exceptions import ConfigurationError, UpstreamFetchFailed
from mediafetch.search.client import SearchClient

PAGE = {"key": "test-key", "cx": "test-cx", "q": "cats", "num": "10", "start": "1"}


def make_client(settings, handler):
    requests = []

    def recording(request: httpx.Request) -> httpx.Response:
        requests.append(request)
        return handler(request)

    return SearchClient(settings, transport=httpx.MockTransport(recording)), requests


@pytest.mark.asyncio
async def test_fetch_page_returns_items(settings):
    items = [{"title": "A", "link": "https://a.example"}, {"title": "B", "link": "https://b.example"}]
    client, requests = make_client(settings, lambda r: httpx.Response(200, json={"items": items}))

    result = await client.fetch_page(PAGE)

    assert result == items
    sent = requests[0]
    assert sent.url.host == "search.example"
    assert sent.url.params["num"] == "10"
    assert sent.url.params["start"] == "1"
    assert sent.url.params["key"] == "test-key"
    assert sent.headers["accept"] == "application/json"


@pytest.mark.asyncio
async def test_fetch_page_without_items_is_empty(settings):
    client, _ = make_client(settings, lambda r: httpx.Response(200, json={"kind": "customsearch#search"}))
    assert await client.fetch_page(PAGE) == []


@pytest.mark.asyncio
async def test_fetch_page_skips_non_dict_items(settings):
    client, _ = make_client(settings, lambda r: httpx.Response(200, json={"items": [{"title": "A"}, "junk"]}))
    assert await client.fetch_page(PAGE) == [{"title": "A"}]


@pytest.mark.asyncio
async def test_error_status_uses_provider_message(settings):
    body = {"error": {"code": 403, "message": "Daily Limit Exceeded"}}
    client, _ = make_client(settings, lambda r: httpx.Response(403, json=body))

    with pytest.raises(UpstreamFetchFailed) as exc_info:
        await client.fetch_page(PAGE)

    assert exc_info.value.message == "Daily Limit Exceeded"
    assert exc_info.value.upstream_status == 403
    assert exc_info.value.status_code == 500


@pytest.mark.asyncio
async def test_error_status_without_json_body(settings):
    client, _ = make_client(settings, lambda r: httpx.Response(502, text="Bad gateway"))

    with pytest.raises(UpstreamFetchFailed) as exc_info:
        await client.fetch_page(PAGE)

    assert exc_info.value.message == "Failed to fetch from search API"


@pytest.mark.asyncio
@pytest.mark.parametrize(
    "response",
    [
        httpx.Response(200, text="<html>not json</html>"),
        httpx.Response(200, json=["items"]),
        httpx.Response(200, json={"items": {"title": "A"}}),
    ],
)
async def test_malformed_payload_fails(settings, response):
    client, _ = make_client(settings, lambda r: response)

    with pytest.raises(UpstreamFetchFailed) as exc_info:
        await client.fetch_page(PAGE)

    assert "Malformed" in exc_info.value.message


@pytest.mark.asyncio
async def test_network_error_becomes_upstream_failure(settings):
    def handler(request):
        raise httpx.ConnectError("connection refused", request=request)

    client, _ = make_client(settings, handler)

    with pytest.raises(UpstreamFetchFailed) as exc_info:
        await client.fetch_page(PAGE)

    assert "Network error" in exc_info.value.message


@pytest.mark.asyncio
async def test_missing_credentials_fail_before_any_request():
    settings = Settings(_env_file=None, google_api_key="", search_engine_id="")
    client, requests = make_client(settings, lambda r: httpx.Response(200, json={}))

    with pytest.raises(ConfigurationError):
        await client.fetch_page(PAGE)

    assert requests == []


@pytest.mark.asyncio
async def test_is_image_url_checks_content_type(settings):
    def handler(request):
        assert request.method == "HEAD"
        if request.url.path.endswith(".jpg"):
            return httpx.Response(200, headers={"content-type": "image/jpeg"})
        return httpx.Response(200, headers={"content-type": "text/html"})

    client, _ = make_client(settings, handler)

    assert await client.is_image_url("https://img.example/cat.jpg") is True
    assert await client.is_image_url("https://img.example/page") is False


@pytest.mark.asyncio
async def test_is_image_url_false_on_network_error(settings):
    def handler(request):
        raise httpx.ConnectTimeout("timed out", request=request)

    client, _ = make_client(settings, handler)

    assert await client.is_image_url("https://img.example/cat.jpg") is False
