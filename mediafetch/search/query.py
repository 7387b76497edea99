"""Build outbound search parameters from a user request."""

from dataclasses import dataclass, field
from typing import Any, Literal

from mediafetch.config import Settings
from mediafetch.exceptions import InvalidMediaType, InvalidParameter, MissingParameter
from mediafetch.models import MediaType, SearchRequest

# Custom Search JSON API limits
MAX_PAGE_SIZE = 10
MAX_RESULT_POSITION = 100

IMAGE_EXCLUDED_DOMAINS = ("youtube.com", "i.ytimg.com")
VIDEO_FILE_TYPES = "mp4,avi,mov,wmv"

SourceKind = Literal["images", "videos"]


@dataclass(frozen=True)
class ParamSet:
    """Parameters for one source (images or videos) without paging."""

    kind: SourceKind
    params: dict[str, str] = field(default_factory=dict)

    def page(self, start: int, remaining: int) -> dict[str, str]:
        """Parameters for a single page starting at ``start``."""
        return {
            **self.params,
            "num": str(page_size(remaining, start)),
            "start": str(start),
        }


def page_size(remaining: int, start: int = 1) -> int:
    """Items to ask for at ``start``; 0 once ``start`` is past the provider window.

    The provider only serves positions 1..MAX_RESULT_POSITION, so a page
    never reaches beyond the last one.
    """
    window = MAX_RESULT_POSITION - start + 1
    return max(0, min(MAX_PAGE_SIZE, remaining, window))


def next_start(start: int, requested: int) -> int | None:
    """Offset of the following page, or None once past the provider window."""
    following = start + requested
    if following > MAX_RESULT_POSITION:
        return None
    return following


def parse_media_type(value: Any) -> MediaType:
    """Return the MediaType for ``value`` or raise InvalidMediaType."""
    if isinstance(value, MediaType):
        return value
    try:
        return MediaType(value)
    except ValueError:
        raise InvalidMediaType(value) from None


def build_search_request(
    query: str | None,
    search_type: Any,
    count: int | None,
    start: int | None = None,
) -> SearchRequest:
    """Validate raw request fields into a SearchRequest."""
    media_type = parse_media_type(search_type)

    q = (query or "").strip()
    if not q:
        raise MissingParameter("query")
    if count is None:
        raise MissingParameter("count")
    if count < 1:
        raise InvalidParameter("count", "count must be a positive integer")

    start_value = 1 if start is None else start
    if start_value < 1:
        raise InvalidParameter("start", "start must be a positive integer")

    return SearchRequest(query=q, media_type=media_type, desired_count=count, start=start_value)


def _image_query(query: str) -> str:
    negated = " ".join(f"-site:{domain}" for domain in IMAGE_EXCLUDED_DOMAINS)
    return f"{query} {negated}"


def build_param_sets(request: SearchRequest, settings: Settings) -> list[ParamSet]:
    """
    Translate a request into one parameter set per source.

    Args:
        request: Validated search request
        settings: Provides the API key and engine id

    Returns:
        ``[images]``, ``[videos]`` or ``[images, videos]`` parameter sets
    """
    base = {
        "key": settings.google_api_key,
        "cx": settings.search_engine_id,
    }

    image_params = ParamSet(
        kind="images",
        params={**base, "q": _image_query(request.query), "searchType": "image"},
    )
    video_params = ParamSet(
        kind="videos",
        params={
            **base,
            "q": request.query,
            "fileType": VIDEO_FILE_TYPES,
            "hq": "videos",
            "type": "video",
        },
    )

    if request.media_type is MediaType.IMAGES:
        return [image_params]
    if request.media_type is MediaType.VIDEOS:
        return [video_params]
    return [image_params, video_params]
