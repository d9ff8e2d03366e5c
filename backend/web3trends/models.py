"""
File: web3trends/models.py
Internal data structures passed between the fetchers, the classifier and the pipeline.
"""

from __future__ import annotations

from dataclasses import dataclass, field
from datetime import datetime
from typing import Any, Dict, List, Optional


JsonDict = Dict[str, Any]

SECTORS = ("DeFi", "NFTs/Gaming", "Infrastructure")


@dataclass(frozen=True)
class Article:
    """A news article as returned by the search provider. Never mutated."""

    title: str
    description: str
    url: str
    published_at: datetime
    source_name: str = ""
    source_domain: str = ""


@dataclass(frozen=True)
class Classification:
    """Seven-field judgment for a single article.

    Attribute names are snake_case; ``WIRE_NAMES`` maps them to the keys the
    model is asked to produce and the API returns.
    """

    overall_sentiment: str = "Neutral"
    token_price_impact: str = "Neutral"
    developer_activity: str = "Medium"
    adoption_potential: str = "Medium"
    security_concerns: str = "Not Detected"
    regulatory_news: str = "Neutral"
    sector: str = "General"

    WIRE_NAMES = {
        "overall_sentiment": "Overall_Sentiment",
        "token_price_impact": "Token_Price_Impact",
        "developer_activity": "Developer_Activity",
        "adoption_potential": "Adoption_Potential",
        "security_concerns": "Security_Concerns",
        "regulatory_news": "Regulatory_News",
        "sector": "Sector",
    }

    @classmethod
    def from_payload(cls, payload: JsonDict) -> "Classification":
        """Build from a model payload keyed by wire names.

        Raises:
            ValueError: if a field is missing or is not a non-empty string
        """
        if not isinstance(payload, dict):
            raise ValueError(f"expected a JSON object, got {type(payload).__name__}")

        values = {}
        for attr, wire in cls.WIRE_NAMES.items():
            value = payload.get(wire)
            if not isinstance(value, str) or not value.strip():
                raise ValueError(f"missing or invalid field {wire!r}")
            values[attr] = value.strip()
        return cls(**values)

    def to_payload(self) -> Dict[str, str]:
        return {wire: getattr(self, attr) for attr, wire in self.WIRE_NAMES.items()}


DEFAULT_CLASSIFICATION = Classification()


@dataclass(frozen=True)
class ClassificationResult:
    """Outcome of classifying one article: parsed from the model, or defaulted."""

    classification: Classification
    defaulted: bool = False
    reason: Optional[str] = None

    @classmethod
    def parsed(cls, classification: Classification) -> "ClassificationResult":
        return cls(classification=classification)

    @classmethod
    def fallback(cls, reason: str) -> "ClassificationResult":
        return cls(classification=DEFAULT_CLASSIFICATION, defaulted=True, reason=reason)


@dataclass(frozen=True)
class SectorScore:
    sector: str  # one of SECTORS
    score: int  # [0, 100]
    level: str  # "Low" | "Medium" | "High"


@dataclass(frozen=True)
class PricePoint:
    date: str  # ISO date, e.g. "2025-09-06"
    close: str  # decimal string as sent by the provider


@dataclass
class AnalysisBatch:
    """Complete result of one pipeline run for one topic.

    ``results``, ``articles`` and ``display_titles`` are index-aligned.
    """

    run_id: int
    topic: str
    as_of: datetime
    articles: List[Article] = field(default_factory=list)
    results: List[ClassificationResult] = field(default_factory=list)
    display_titles: List[str] = field(default_factory=list)
    sector_scores: List[SectorScore] = field(default_factory=list)
    price_series: List[PricePoint] = field(default_factory=list)
    errors: List[str] = field(default_factory=list)

    @property
    def classifications(self) -> List[Classification]:
        return [result.classification for result in self.results]


__all__ = [
    "AnalysisBatch",
    "Article",
    "Classification",
    "ClassificationResult",
    "DEFAULT_CLASSIFICATION",
    "JsonDict",
    "PricePoint",
    "SECTORS",
    "SectorScore",
]
