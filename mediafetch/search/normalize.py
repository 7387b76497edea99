"""Normalize classified search items to the client-facing record."""

import re
from urllib.parse import parse_qs, urlparse

from mediafetch.models import NormalizedResult
from mediafetch.search.items import ImageItem, RawItem, VideoItem

YOUTUBE_HOSTS = ("youtube.com", "youtu.be", "youtube-nocookie.com")
YOUTUBE_THUMBNAIL_URL = "https://img.youtube.com/vi/{video_id}/hqdefault.jpg"

_VIDEO_ID_RE = re.compile(r"^[A-Za-z0-9_-]{11}$")
_PATH_PREFIXES = ("embed", "shorts", "v", "live", "e")


def first_non_empty(*vals: str | None) -> str | None:
    for v in vals:
        if v and str(v).strip():
            return v
    return None


def is_youtube_host(hostname: str | None) -> bool:
    """True for the YouTube domains and any of their subdomains."""
    if not hostname:
        return False
    host = hostname.lower().rstrip(".")
    return any(host == domain or host.endswith(f".{domain}") for domain in YOUTUBE_HOSTS)


def extract_youtube_id(url: str | None) -> str | None:
    """
    Extract the 11-character video id from a YouTube URL.

    Handles ``watch?v=``, ``youtu.be/<id>`` and ``/embed|shorts|v|live/<id>``.
    Returns None for anything else.
    """
    if not url:
        return None
    try:
        parsed = urlparse(url.strip())
    except ValueError:
        return None
    if not is_youtube_host(parsed.hostname):
        return None

    segments = [segment for segment in parsed.path.split("/") if segment]
    candidate: str | None = None

    if parsed.hostname and parsed.hostname.lower().rstrip(".").endswith("youtu.be"):
        candidate = segments[0] if segments else None
    elif segments and segments[0] == "watch":
        candidate = parse_qs(parsed.query).get("v", [None])[0]
    elif len(segments) >= 2 and segments[0] in _PATH_PREFIXES:
        candidate = segments[1]

    if candidate and _VIDEO_ID_RE.match(candidate):
        return candidate
    return None


class ResultNormalizer:
    """Maps image and video items onto NormalizedResult."""

    def __init__(self, placeholder: str = "/placeholder.png"):
        if not placeholder:
            raise ValueError("placeholder thumbnail must be non-empty")
        self.placeholder = placeholder

    def derived_thumbnail(self, link: str) -> str | None:
        """Thumbnail URL built from a YouTube link's video id, if it has one."""
        video_id = extract_youtube_id(link)
        return YOUTUBE_THUMBNAIL_URL.format(video_id=video_id) if video_id else None

    def video_thumbnail(self, item: VideoItem) -> str:
        return (
            first_non_empty(
                item.video_thumbnail,
                item.content_thumbnail,
                item.content_image,
                self.derived_thumbnail(item.link),
            )
            or self.placeholder
        )

    def image_thumbnail(self, item: ImageItem) -> str:
        # Bare YouTube hits carry no videoobject but still get a real thumbnail
        return (
            first_non_empty(
                item.content_image,
                item.content_thumbnail,
                item.image_thumbnail,
                self.derived_thumbnail(item.link),
            )
            or self.placeholder
        )

    def normalize(self, item: RawItem) -> NormalizedResult:
        """Normalize one item. Total: never raises on missing fields."""
        source_link = item.context_link or item.link

        if isinstance(item, VideoItem):
            return NormalizedResult(
                title=item.title or "Untitled",
                link=item.link,
                thumbnail_url=self.video_thumbnail(item),
                source_link=source_link,
                download_link=item.link,
                is_image=False,
            )

        return NormalizedResult(
            title=item.title or "Untitled",
            link=item.link,
            thumbnail_url=self.image_thumbnail(item),
            source_link=source_link,
            download_link=item.content_image or item.link,
            is_image=True,
        )

    def normalize_all(self, items: list[RawItem]) -> list[NormalizedResult]:
        return [self.normalize(item) for item in items]
