"""
Shared utility functions for the trend analysis service.
"""
from __future__ import annotations

from datetime import datetime, timezone

from web3trends.config import TOPIC_PRESETS


def now_utc() -> datetime:
    """
    Get current UTC datetime with timezone information.

    Returns:
        Current UTC datetime
    """
    return datetime.now(timezone.utc)


def clamp_score(value: int, low: int = 0, high: int = 100) -> int:
    """
    Clamp an integer score to the range [low, high].

    Args:
        value: Input score
        low: Lower bound
        high: Upper bound

    Returns:
        Value clamped to [low, high]
    """
    return max(low, min(high, value))


def resolve_topic(topic: str) -> str:
    """
    Turn a topic into the search query sent to the news provider.

    Args:
        topic: A preset label (e.g. "DeFi Trends") or a raw query

    Returns:
        The preset's query, or the stripped topic itself

    Raises:
        ValueError: if the topic is empty or blank
    """
    topic = (topic or "").strip()
    if not topic:
        raise ValueError("topic must not be empty")
    return TOPIC_PRESETS.get(topic, topic)
