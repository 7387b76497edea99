"""Tagged raw search items.

The provider returns one loosely-shaped record for every hit. ``classify_item``
turns it into either an ``ImageItem`` or a ``VideoItem`` once, so nothing
downstream has to inspect optional fields again.
"""

from typing import Annotated, Any, Literal, Union

from pydantic import BaseModel, ConfigDict, Field


class _RawItem(BaseModel):
    model_config = ConfigDict(frozen=True)

    title: str = ""
    link: str = ""
    context_link: str = ""
    content_image: str = ""
    content_thumbnail: str = ""


class ImageItem(_RawItem):
    """A hit without video metadata."""

    kind: Literal["image"] = "image"
    image_thumbnail: str = ""


class VideoItem(_RawItem):
    """A hit carrying ``pagemap.videoobject`` metadata."""

    kind: Literal["video"] = "video"
    video_thumbnail: str = ""


RawItem = Annotated[Union[ImageItem, VideoItem], Field(discriminator="kind")]


def _text(value: Any) -> str:
    if value is None:
        return ""
    if isinstance(value, str):
        return value.strip()
    if isinstance(value, (int, float)):
        return str(value)
    return ""


def _first_entry(pagemap: dict[str, Any], key: str) -> dict[str, Any]:
    """Return the first dict in ``pagemap[key]``, or an empty dict."""
    entries = pagemap.get(key)
    if isinstance(entries, dict):
        return entries
    if isinstance(entries, list):
        for entry in entries:
            if isinstance(entry, dict):
                return entry
    return {}


def _as_dict(value: Any) -> dict[str, Any]:
    return value if isinstance(value, dict) else {}


def is_video_record(record: dict[str, Any]) -> bool:
    """True when the record carries at least one video-object entry."""
    entries = _as_dict(record.get("pagemap")).get("videoobject")
    if isinstance(entries, dict):
        return True
    return isinstance(entries, list) and any(isinstance(entry, dict) for entry in entries)


def classify_item(record: Any) -> RawItem:
    """Classify a provider record into an image or video item.

    Never raises: anything that is not a usable string becomes ``""``.
    """
    record = _as_dict(record)
    pagemap = _as_dict(record.get("pagemap"))
    image_meta = _as_dict(record.get("image"))

    common = {
        "title": _text(record.get("title")),
        "link": _text(record.get("link")),
        "context_link": _text(image_meta.get("contextLink")),
        "content_image": _text(_first_entry(pagemap, "cse_image").get("src")),
        "content_thumbnail": _text(_first_entry(pagemap, "cse_thumbnail").get("src")),
    }

    if is_video_record(record):
        video = _first_entry(pagemap, "videoobject")
        return VideoItem(video_thumbnail=_text(video.get("thumbnailurl")), **common)
    return ImageItem(image_thumbnail=_text(image_meta.get("thumbnailLink")), **common)
