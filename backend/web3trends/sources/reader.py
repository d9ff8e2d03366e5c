"""
Full-text article fetcher backed by a readability proxy.
"""
from __future__ import annotations

import logging
from typing import Optional

import httpx

from web3trends.config import Settings
from web3trends.sources.common import build_client

logger = logging.getLogger(__name__)


class ReaderProxyFetcher:
    """Fetches a plain-text rendering of a page through ``{proxy}/{url}``."""

    def __init__(self, settings: Settings, transport: Optional[httpx.AsyncBaseTransport] = None):
        self.proxy_base = settings.READER_PROXY_BASE.rstrip("/")
        self.timeout = settings.CONTENT_TIMEOUT_SECONDS
        self._transport = transport

    async def fetch_full_content(self, url: Optional[str]) -> str:
        """
        Retrieve the full text of an article.

        Args:
            url: Article URL; None or empty skips the request

        Returns:
            Extracted text, or "" on any failure
        """
        if not url:
            return ""

        try:
            async with build_client(self.timeout, self._transport) as client:
                response = await client.get(f"{self.proxy_base}/{url}")
        except httpx.HTTPError as e:
            logger.warning("Reader proxy failed for %s: %s", url, e)
            return ""

        if not response.is_success:
            logger.warning("Reader proxy returned %s for %s", response.status_code, url)
            return ""

        return response.text
