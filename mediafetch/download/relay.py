"""Relay a remote file or video stream to the caller."""

from __future__ import annotations

import asyncio
import logging
import re
from dataclasses import dataclass
from typing import AsyncIterator
from urllib.parse import unquote, urlparse

import httpx

from mediafetch.config import Settings
from mediafetch.download.video import (
    VIDEO_CONTENT_TYPE,
    InfoExtractor,
    choose_format,
    extract_info,
    is_video_host,
    video_filename,
)
from mediafetch.exceptions import UpstreamFetchFailed

logger = logging.getLogger(__name__)

DEFAULT_CONTENT_TYPE = "application/octet-stream"
DEFAULT_FILENAME = "download"

_HEADER_UNSAFE_RE = re.compile(r'[\\/*?:"<>|\r\n]')


@dataclass
class RelayedDownload:
    """An upstream response that answered successfully and is ready to relay."""

    filename: str
    content_type: str
    body: AsyncIterator[bytes]

    @property
    def content_disposition(self) -> str:
        return f'attachment; filename="{self.filename}"'


def filename_from_url(url: str) -> str:
    """Last non-empty path segment of ``url``, made safe for a header."""
    try:
        path = urlparse(url).path
    except ValueError:
        return DEFAULT_FILENAME
    segments = [segment for segment in path.split("/") if segment]
    if not segments:
        return DEFAULT_FILENAME
    name = _HEADER_UNSAFE_RE.sub("", unquote(segments[-1])).strip()
    # Content-Disposition is latin-1 on the wire
    name = name.encode("ascii", "ignore").decode("ascii").strip()
    return name or DEFAULT_FILENAME


def _has_body(response: httpx.Response) -> bool:
    if response.status_code == 204:
        return False
    return response.headers.get("content-length") != "0"


class DownloadRelay:
    """Resolves a URL to a byte stream: yt-dlp for video hosts, GET otherwise."""

    def __init__(
        self,
        settings: Settings,
        transport: httpx.AsyncBaseTransport | None = None,
        extractor: InfoExtractor | None = None,
    ):
        self.settings = settings
        self._transport = transport
        self._extractor = extractor or extract_info

    async def open(self, url: str) -> RelayedDownload:
        """
        Open the upstream for ``url``.

        Every failure surfaces here, before any byte reaches the caller.

        Raises:
            UpstreamFetchFailed: The host or extractor failed
            NoPlayableFormat: A video host had no combined audio+video format
        """
        if is_video_host(url):
            return await self._open_video(url)
        return await self._open_file(url)

    async def _open_video(self, url: str) -> RelayedDownload:
        logger.info("Extracting video stream for %s", url)
        info = await asyncio.to_thread(self._extractor, url)
        fmt = choose_format(info, url)
        logger.info(
            "Selected format %s (%sp) for %s",
            fmt.get("format_id"),
            fmt.get("height") or "?",
            url,
        )

        headers = fmt.get("http_headers") or {}
        body = await self._stream(fmt["url"], headers=headers)
        return RelayedDownload(
            filename=video_filename(info.get("title")),
            content_type=VIDEO_CONTENT_TYPE,
            body=body,
        )

    async def _open_file(self, url: str) -> RelayedDownload:
        logger.info("Fetching direct file %s", url)
        client = self._client()
        try:
            response = await client.send(client.build_request("GET", url), stream=True)
        except (httpx.HTTPError, httpx.InvalidURL) as e:
            await client.aclose()
            raise UpstreamFetchFailed(f"Failed to fetch file: {e}") from e

        content_type = response.headers.get("content-type") or DEFAULT_CONTENT_TYPE
        await self._ensure_ok(client, response)
        return RelayedDownload(
            filename=filename_from_url(url),
            content_type=content_type,
            body=self._relay(client, response),
        )

    async def _stream(self, url: str, headers: dict[str, str]) -> AsyncIterator[bytes]:
        client = self._client()
        try:
            response = await client.send(
                client.build_request("GET", url, headers=headers), stream=True
            )
        except (httpx.HTTPError, httpx.InvalidURL) as e:
            await client.aclose()
            raise UpstreamFetchFailed(f"Failed to open video stream: {e}") from e
        await self._ensure_ok(client, response)
        return self._relay(client, response)

    async def _ensure_ok(self, client: httpx.AsyncClient, response: httpx.Response) -> None:
        if response.is_success and _has_body(response):
            return
        status = response.status_code
        await response.aclose()
        await client.aclose()
        if not response.is_success:
            logger.error("Upstream returned %s for %s", status, response.request.url)
            raise UpstreamFetchFailed("Failed to fetch file", upstream_status=status)
        raise UpstreamFetchFailed("No response body available", upstream_status=status)

    async def _relay(
        self, client: httpx.AsyncClient, response: httpx.Response
    ) -> AsyncIterator[bytes]:
        try:
            async for chunk in response.aiter_bytes(self.settings.download_chunk_size):
                yield chunk
        finally:
            await response.aclose()
            await client.aclose()

    def _client(self) -> httpx.AsyncClient:
        return httpx.AsyncClient(
            timeout=self.settings.http_timeout,
            headers={"User-Agent": self.settings.user_agent},
            follow_redirects=True,
            transport=self._transport,
        )
