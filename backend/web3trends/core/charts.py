"""
Chart-ready summaries of an analysis batch.
"""
from __future__ import annotations

from typing import Dict, Iterable

from web3trends.core.saturation import HIGH_THRESHOLD, LOW_THRESHOLD
from web3trends.models import Classification

SATURATION_COLORS = {
    "Low": "#4CAF50",
    "Medium": "#FFC107",
    "High": "#F44336",
}


def sentiment_distribution(classifications: Iterable[Classification]) -> Dict[str, int]:
    """Count articles per overall sentiment, in first-seen order."""
    counts: Dict[str, int] = {}
    for classification in classifications:
        key = classification.overall_sentiment
        counts[key] = counts.get(key, 0) + 1
    return counts


def saturation_color(score: int) -> str:
    if score < LOW_THRESHOLD:
        return SATURATION_COLORS["Low"]
    if score < HIGH_THRESHOLD:
        return SATURATION_COLORS["Medium"]
    return SATURATION_COLORS["High"]
