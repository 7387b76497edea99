"""Download relay endpoint."""

import logging

from fastapi import APIRouter, Depends, Query
from fastapi.responses import JSONResponse, StreamingResponse

from mediafetch.dependencies import get_download_relay
from mediafetch.download.relay import DownloadRelay
from mediafetch.download.video import is_video_host
from mediafetch.exceptions import MediaFetchError, MissingParameter
from mediafetch.models import ErrorResponse

logger = logging.getLogger(__name__)

router = APIRouter(prefix="/api", tags=["download"])

_ERRORS = {400: {"model": ErrorResponse}, 500: {"model": ErrorResponse}}


@router.get("/download", response_class=StreamingResponse, responses=_ERRORS)
async def download(
    url: str | None = Query(default=None, description="Absolute URL of the file or video page"),
    relay: DownloadRelay = Depends(get_download_relay),
):
    """Stream a direct file or the best combined stream of a video page."""
    if not url or not url.strip():
        raise MissingParameter("url", "URL is required")
    url = url.strip()

    try:
        relayed = await relay.open(url)
    except MediaFetchError as e:
        logger.error(
            "Download error for %s: %s",
            url,
            e.message,
            extra={"url": url, "video_host": is_video_host(url)},
        )
        raise
    except Exception as e:
        logger.exception("Download error for %s: %s", url, e)
        return JSONResponse({"error": str(e) or "Failed to download file"}, status_code=500)

    return StreamingResponse(
        relayed.body,
        media_type=relayed.content_type,
        headers={"Content-Disposition": relayed.content_disposition},
    )
