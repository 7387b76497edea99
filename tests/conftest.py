"""Shared fixtures."""

import pytest

from mediafetch.config import Settings


@pytest.fixture
def settings() -> Settings:
    """Settings with test credentials and no .env lookup."""
    return Settings(
        _env_file=None,
        google_api_key="test-key",
        search_engine_id="test-cx",
        search_base_url="https://search.example/customsearch/v1",
    )
