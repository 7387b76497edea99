"""Search endpoint."""

import logging

from fastapi import APIRouter, Depends
from fastapi.responses import JSONResponse

from mediafetch.dependencies import get_search_service
from mediafetch.exceptions import MediaFetchError
from mediafetch.models import ErrorResponse, SearchBody, SearchResponse
from mediafetch.search.aggregator import SearchService
from mediafetch.search.query import build_search_request

logger = logging.getLogger(__name__)

router = APIRouter(prefix="/api", tags=["search"])

_ERRORS = {400: {"model": ErrorResponse}, 500: {"model": ErrorResponse}}


@router.post("/search", response_model=SearchResponse, responses=_ERRORS)
async def search(body: SearchBody, service: SearchService = Depends(get_search_service)):
    """Search images, videos or both and return normalized results."""
    request = build_search_request(body.query, body.searchType, body.count, body.start)
    try:
        items = await service.search(request)
    except MediaFetchError:
        raise
    except Exception as e:
        logger.exception("Search error: %s", e)
        return JSONResponse({"error": str(e) or "Failed to perform search"}, status_code=500)
    return SearchResponse(items=items)
