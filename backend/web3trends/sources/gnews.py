"""
GNews search fetcher.
"""
from __future__ import annotations

import logging
from typing import List, Optional

import httpx

from web3trends.config import Settings
from web3trends.models import Article, JsonDict
from web3trends.sources.common import (
    build_client,
    clean_text,
    deduplicate_articles,
    extract_domain_from_url,
    parse_utc_datetime,
)

logger = logging.getLogger(__name__)


class ArticleSourceError(Exception):
    """The news provider could not supply articles for a topic."""


class UpstreamError(ArticleSourceError):
    """Transport failure or non-success HTTP status from the provider."""


class NoArticlesFound(ArticleSourceError):
    """The provider answered successfully but returned no articles."""


def parse_article(entry: JsonDict) -> Optional[Article]:
    """
    Convert one GNews article entry into an Article.

    Args:
        entry: Raw article dict from the provider

    Returns:
        Article, or None if the entry has no title or URL

    Raises:
        TypeError: if publishedAt is present but not a string
    """
    title = clean_text(entry.get("title"))
    url = clean_text(entry.get("url"))
    if not title or not url:
        return None

    published_at = entry.get("publishedAt")
    if published_at is not None and not isinstance(published_at, str):
        raise TypeError(f"publishedAt must be a string, got {type(published_at).__name__}")

    source = entry.get("source") or {}
    return Article(
        title=title,
        description=clean_text(entry.get("description")),
        url=url,
        published_at=parse_utc_datetime(published_at),
        source_name=clean_text(source.get("name")) if isinstance(source, dict) else "",
        source_domain=extract_domain_from_url(url),
    )


class GNewsFetcher:
    """Fetches candidate news articles for a topic query from GNews."""

    LANGUAGE = "en"

    def __init__(self, settings: Settings, transport: Optional[httpx.AsyncBaseTransport] = None):
        self.search_url = settings.GNEWS_SEARCH_URL
        self.api_key = settings.GNEWS_API_KEY
        self.timeout = settings.ARTICLE_TIMEOUT_SECONDS
        self._transport = transport

    async def search(self, topic: str) -> List[Article]:
        """
        Query the provider for a topic.

        Args:
            topic: Search query; encoded by the HTTP client

        Returns:
            Articles in provider order, duplicate URLs removed

        Raises:
            UpstreamError: on transport failure or a non-success status
            NoArticlesFound: when the response carries no articles
        """
        params = {"q": topic, "lang": self.LANGUAGE, "apikey": self.api_key}

        try:
            async with build_client(self.timeout, self._transport) as client:
                response = await client.get(self.search_url, params=params)
        except httpx.HTTPError as e:
            raise UpstreamError(f"GNews request failed: {e}") from e

        if not response.is_success:
            raise UpstreamError(f"GNews API error: {response.status_code}")

        try:
            data = response.json()
        except ValueError as e:
            raise UpstreamError("GNews returned a non-JSON body") from e

        entries = data.get("articles") if isinstance(data, dict) else None
        if not entries:
            raise NoArticlesFound("No articles found for this topic via GNews.")

        articles: List[Article] = []
        for entry in entries:
            if not isinstance(entry, dict):
                continue
            try:
                article = parse_article(entry)
            except (ValueError, TypeError, AttributeError) as e:
                # Skip malformed entries
                logger.warning("Skipping malformed GNews entry %r: %s", entry.get("url"), e)
                continue
            if article is not None:
                articles.append(article)

        if not articles:
            raise NoArticlesFound("No usable articles found for this topic via GNews.")

        return deduplicate_articles(articles)

    async def fetch(self, topic: str) -> List[Article]:
        """Like ``search`` but returns an empty list instead of raising."""
        try:
            return await self.search(topic)
        except ArticleSourceError as e:
            logger.warning("Failed to fetch news for %r: %s", topic, e)
            return []
