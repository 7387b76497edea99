"""Application configuration using Pydantic Settings."""

from functools import lru_cache

from pydantic import Field
from pydantic_settings import BaseSettings, SettingsConfigDict


class Settings(BaseSettings):
    """Application settings loaded from environment variables."""

    model_config = SettingsConfigDict(
        env_file=".env",
        env_file_encoding="utf-8",
        case_sensitive=False,
        extra="ignore",
        frozen=True,
    )

    # Search provider (Google Programmable Search)
    google_api_key: str = Field(default="", description="Custom Search JSON API key")
    search_engine_id: str = Field(default="", description="Programmable Search engine id (cx)")
    search_base_url: str = Field(
        default="https://www.googleapis.com/customsearch/v1",
        description="Custom Search JSON API endpoint",
    )
    verify_image_links: bool = Field(
        default=False, description="HEAD-check image links and drop non-image responses"
    )

    # Outbound HTTP
    http_timeout: float | None = Field(
        default=None, description="Outbound request timeout in seconds (None disables it)"
    )
    user_agent: str = Field(default="MediaFetcher/1.0", description="Outbound User-Agent")
    download_chunk_size: int = Field(default=64 * 1024, ge=1024, description="Relay chunk size")

    # Results
    placeholder_thumbnail: str = Field(
        default="/placeholder.png", description="Thumbnail used when none can be resolved"
    )

    # Application Configuration
    app_title: str = Field(default="Media Fetcher", description="Application title")
    app_version: str = Field(default="1.0.0", description="Application version")
    debug: bool = Field(default=False, description="Debug mode")
    host: str = Field(default="127.0.0.1", description="Bind address for the dev server")
    port: int = Field(default=8000, description="Bind port for the dev server")

    # Logging Configuration
    log_level: str = Field(default="INFO", description="Log level (DEBUG, INFO, WARNING, ERROR)")
    log_json: bool = Field(default=True, description="Use JSON log format")
    log_file: str | None = Field(default=None, description="Optional log file path")

    @property
    def search_configured(self) -> bool:
        return bool(self.google_api_key and self.search_engine_id)


@lru_cache
def get_settings() -> Settings:
    """Get cached settings instance."""
    return Settings()
