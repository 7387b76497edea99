"""FastAPI application for the media search and download relay."""

import logging
from contextlib import asynccontextmanager

from fastapi import FastAPI, Request
from fastapi.exceptions import RequestValidationError
from fastapi.responses import JSONResponse

from mediafetch.config import get_settings
from mediafetch.exceptions import MediaFetchError
from mediafetch.middleware.request_logging import RequestLoggingMiddleware
from mediafetch.routers import download, search
from mediafetch.utils.logging import setup_logging

logger = logging.getLogger(__name__)

settings = get_settings()


@asynccontextmanager
async def lifespan(app: FastAPI):
    setup_logging(
        level=settings.log_level,
        json_format=settings.log_json,
        log_file=settings.log_file,
    )
    # Validate API keys at startup
    logger.info("Validating API configuration...")
    if not settings.search_configured:
        logger.error("GOOGLE_API_KEY / SEARCH_ENGINE_ID are not configured; /api/search will fail")
    else:
        logger.info("Search API credentials configured")
    yield


app = FastAPI(
    title=settings.app_title,
    version=settings.app_version,
    description="Image and video search with a download relay",
    debug=settings.debug,
    lifespan=lifespan,
)

app.add_middleware(RequestLoggingMiddleware)


@app.exception_handler(MediaFetchError)
async def media_fetch_error_handler(request: Request, exc: MediaFetchError) -> JSONResponse:
    """Render every application error as ``{"error": message}``."""
    if exc.status_code >= 500:
        logger.error("%s: %s", type(exc).__name__, exc.message)
    else:
        logger.info("Rejected request: %s", exc.message)
    return JSONResponse({"error": exc.message}, status_code=exc.status_code)


@app.exception_handler(RequestValidationError)
async def validation_error_handler(request: Request, exc: RequestValidationError) -> JSONResponse:
    """Render malformed request fields as a 400 ``{"error": message}``."""
    errors = exc.errors()
    if not errors:
        return JSONResponse({"error": "Invalid request"}, status_code=400)
    first = errors[0]
    field = ".".join(str(part) for part in first.get("loc", ()) if part not in ("body", "query"))
    message = f"{field}: {first.get('msg', 'invalid value')}" if field else first.get("msg", "Invalid request")
    logger.info("Rejected request: %s", message)
    return JSONResponse({"error": message}, status_code=400)


@app.get("/health")
async def health_check():
    """Health check endpoint."""
    return {
        "status": "ok",
        "service": "mediafetch",
        "version": settings.app_version,
        "api_configured": settings.search_configured,
    }


app.include_router(search.router)
app.include_router(download.router)
