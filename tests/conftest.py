"""
Pytest configuration and fixtures for the trend analysis tests.
"""

import json
from datetime import datetime, timezone
from types import SimpleNamespace
from unittest.mock import AsyncMock, MagicMock

import httpx
import pytest

from web3trends.config import Settings
from web3trends.models import Article, Classification


@pytest.fixture
def settings():
    """Settings with mock keys, isolated from any local .env file."""
    return Settings(
        _env_file=None,
        GNEWS_API_KEY="test-gnews-key",
        GEMINI_API_KEY="test-gemini-key",
        TWELVE_DATA_API_KEY="test-twelve-key",
        READER_PROXY_BASE="https://reader.test",
        GNEWS_SEARCH_URL="https://news.test/api/v4/search",
        TWELVE_DATA_URL="https://market.test/time_series",
    )


def make_article(index: int, description: str = "") -> Article:
    return Article(
        title=f"Headline {index}",
        description=description or f"Short description {index}",
        url=f"https://example.com/articles/{index}",
        published_at=datetime(2025, 9, 10, 12, index, tzinfo=timezone.utc),
        source_name="Example News",
        source_domain="example.com",
    )


def make_classification(**overrides) -> Classification:
    return Classification(**overrides)


def fake_genai_client(text=None, error=None):
    """Stand-in for genai.Client whose generate_content returns ``text`` or raises ``error``."""
    client = MagicMock()
    client.aio.models.generate_content = AsyncMock(
        return_value=SimpleNamespace(text=text), side_effect=error
    )
    return client


def fenced(payload: dict, tag: str = "json") -> str:
    return f"Here is the analysis:\n```{tag}\n{json.dumps(payload)}\n```\n"


class RecordingTransport(httpx.MockTransport):
    """MockTransport that keeps every request it served."""

    def __init__(self, handler):
        self.requests = []

        def _record(request):
            self.requests.append(request)
            return handler(request)

        super().__init__(_record)
