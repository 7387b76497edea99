"""Video-host stream extraction backed by yt-dlp."""

from __future__ import annotations

import logging
import re
from typing import Any, Callable
from urllib.parse import urlparse

import yt_dlp

from mediafetch.exceptions import NoPlayableFormat, UpstreamFetchFailed
from mediafetch.search.normalize import is_youtube_host

logger = logging.getLogger(__name__)

VIDEO_CONTENT_TYPE = "video/mp4"
VIDEO_EXTENSION = "mp4"

InfoExtractor = Callable[[str], dict[str, Any]]

_TITLE_UNSAFE_RE = re.compile(r"[^a-z0-9]", re.IGNORECASE)

YDL_OPTIONS: dict[str, Any] = {
    "quiet": True,
    "no_warnings": True,
    "skip_download": True,
    "noplaylist": True,
}


def is_video_host(url: str) -> bool:
    """True when ``url`` points at a host that needs stream extraction."""
    try:
        return is_youtube_host(urlparse(url).hostname)
    except ValueError:
        return False


def extract_info(url: str) -> dict[str, Any]:
    """Fetch stream metadata for ``url``. Blocking; run it in a thread."""
    try:
        with yt_dlp.YoutubeDL(YDL_OPTIONS) as ydl:
            info = ydl.extract_info(url, download=False)
            info = ydl.sanitize_info(info)
    except yt_dlp.utils.DownloadError as e:
        raise UpstreamFetchFailed(f"Could not read video metadata: {e}") from e
    if not isinstance(info, dict):
        raise UpstreamFetchFailed("Could not read video metadata")
    return info


def _has_track(fmt: dict[str, Any], key: str) -> bool:
    codec = fmt.get(key)
    return bool(codec) and codec != "none"


def combined_formats(formats: list[dict[str, Any]]) -> list[dict[str, Any]]:
    """Formats that carry both audio and video and can be fetched directly."""
    return [
        fmt
        for fmt in formats
        if isinstance(fmt, dict)
        and fmt.get("url")
        and _has_track(fmt, "vcodec")
        and _has_track(fmt, "acodec")
    ]


def _rank(fmt: dict[str, Any]) -> tuple[int, float, bool]:
    return (
        int(fmt.get("height") or 0),
        float(fmt.get("tbr") or 0.0),
        fmt.get("ext") == VIDEO_EXTENSION,
    )


def choose_format(info: dict[str, Any], url: str) -> dict[str, Any]:
    """Pick the highest-quality combined format or raise NoPlayableFormat."""
    candidates = combined_formats(info.get("formats") or [])
    if not candidates:
        logger.warning("No combined audio+video format for %s", url)
        raise NoPlayableFormat(url)
    return max(candidates, key=_rank)


def video_filename(title: str | None) -> str:
    safe_title = _TITLE_UNSAFE_RE.sub("_", title or "") or "video"
    return f"{safe_title}.{VIDEO_EXTENSION}"
