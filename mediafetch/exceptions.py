"""Custom exceptions for the Media Fetcher application.

Every error carries the HTTP status it maps to, so the API layer can turn any
of them into a single ``{"error": message}`` payload.
"""


class MediaFetchError(Exception):
    """Base exception for Media Fetcher."""

    status_code: int = 500

    def __init__(self, message: str):
        self.message = message
        super().__init__(message)


class BadRequestError(MediaFetchError):
    """The caller sent something we cannot act on."""

    status_code = 400


class InvalidMediaType(BadRequestError):
    """Raised when the media type is not images, videos or both."""

    def __init__(self, value: object):
        self.value = value
        super().__init__("Invalid searchType")


class MissingParameter(BadRequestError):
    """Raised when a required request field is absent or blank."""

    def __init__(self, name: str, message: str | None = None):
        self.name = name
        super().__init__(message or f"{name} is required")


class InvalidParameter(BadRequestError):
    """Raised when a request field is present but out of range."""

    def __init__(self, name: str, message: str):
        self.name = name
        super().__init__(message)


class UpstreamFetchFailed(MediaFetchError):
    """Raised when the search provider or a file host fails us."""

    def __init__(self, message: str, upstream_status: int | None = None, response_text: str = ""):
        self.upstream_status = upstream_status
        self.response_text = response_text
        super().__init__(message)


class NoPlayableFormat(MediaFetchError):
    """Raised when a video host offers no format with both audio and video."""

    def __init__(self, url: str):
        self.url = url
        super().__init__("No suitable video format found with both video and audio")


class ConfigurationError(MediaFetchError):
    """Exception raised for configuration errors."""
