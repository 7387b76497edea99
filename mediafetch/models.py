"""Pydantic models for request and response payloads."""

from enum import Enum
from typing import Any

from pydantic import BaseModel, ConfigDict, Field


class MediaType(str, Enum):
    """Kind of media a search asks for."""

    IMAGES = "images"
    VIDEOS = "videos"
    BOTH = "both"


class SearchBody(BaseModel):
    """Raw ``POST /api/search`` body.

    Fields are loose on purpose; the query builder validates them so that a
    bad ``searchType`` is a 400 rather than a schema error.
    """

    query: str | None = Field(default=None, description="Search query string")
    searchType: Any = Field(default=None, description="images, videos or both")
    count: int | None = Field(default=None, description="Number of results wanted")
    start: int | None = Field(default=None, description="1-based start offset")


class SearchRequest(BaseModel):
    """A validated search submission."""

    model_config = ConfigDict(frozen=True)

    query: str = Field(min_length=1)
    media_type: MediaType
    desired_count: int = Field(gt=0)
    start: int = Field(default=1, ge=1)


class NormalizedResult(BaseModel):
    """Uniform result record returned to clients."""

    model_config = ConfigDict(frozen=True, populate_by_name=True)

    title: str
    link: str
    thumbnail_url: str = Field(alias="thumbnailUrl", min_length=1)
    source_link: str = Field(alias="sourceLink")
    download_link: str = Field(alias="downloadLink")
    is_image: bool = Field(alias="isImage")


class SearchResponse(BaseModel):
    """Search response data."""

    items: list[NormalizedResult] = Field(default_factory=list)


class ErrorResponse(BaseModel):
    """Error payload shared by every endpoint."""

    error: str
