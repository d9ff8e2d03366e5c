"""
Common utilities for the upstream fetchers.
"""
from __future__ import annotations

import logging
from datetime import datetime, timezone
from typing import Iterable, List, Optional
from urllib.parse import urlparse

import httpx
import tldextract
from dateutil import parser as dateparser

from web3trends.config import HTTP_HEADERS
from web3trends.models import Article

logger = logging.getLogger(__name__)

# Bundled public suffix snapshot only; never fetch the list over the network.
_extract = tldextract.TLDExtract(suffix_list_urls=())


def build_client(
    timeout: float,
    transport: Optional[httpx.AsyncBaseTransport] = None,
) -> httpx.AsyncClient:
    """
    Create an HTTP client with the shared headers and an explicit timeout.

    Args:
        timeout: Total timeout in seconds
        transport: Optional transport override (used by tests)

    Returns:
        Configured httpx.AsyncClient, to be used as an async context manager
    """
    return httpx.AsyncClient(headers=HTTP_HEADERS, timeout=timeout, transport=transport)


def parse_utc_datetime(date_string: Optional[str]) -> datetime:
    """
    Parse a date string and convert to UTC datetime.

    Args:
        date_string: Date string in various formats, or None

    Returns:
        UTC datetime object, or current UTC time if input is None/empty/unparseable
    """
    if not date_string:
        return datetime.now(timezone.utc)

    try:
        parsed_date = dateparser.parse(date_string)
    except (ValueError, TypeError, OverflowError):
        logger.debug("Unparseable publish date %r, using now", date_string)
        return datetime.now(timezone.utc)

    if parsed_date.tzinfo:
        return parsed_date.astimezone(timezone.utc)
    return parsed_date.replace(tzinfo=timezone.utc)


def clean_text(text: Optional[str]) -> str:
    """Strip surrounding whitespace; None becomes an empty string."""
    if not text:
        return ""
    return str(text).strip()


def extract_domain_from_url(url: str) -> str:
    """
    Extract the registered domain from a URL.

    Args:
        url: Full URL string

    Returns:
        Normalized domain name in lowercase, or "" for an empty URL
    """
    if not url:
        return ""
    extracted = _extract(url)
    if extracted.domain and extracted.suffix:
        return f"{extracted.domain}.{extracted.suffix}".lower()
    return urlparse(url).netloc.lower()


def deduplicate_articles(articles: Iterable[Article]) -> List[Article]:
    """
    Drop articles whose URL was already seen, keeping provider order.

    Args:
        articles: Iterable of Article objects

    Returns:
        List of Article objects with unique URLs
    """
    seen_urls: set[str] = set()
    unique: List[Article] = []

    for article in articles:
        if article.url in seen_urls:
            continue
        seen_urls.add(article.url)
        unique.append(article)

    return unique
