"""
Job market saturation scoring per Web3 sector.

Each classified article nudges one sector away from a neutral baseline of 50.
Signals of a healthy, growing sector (busy developers, strong adoption) pull
the score down; risk signals (security incidents, hostile regulation,
negative sentiment, idle developers) push it up. Higher means a more
crowded or riskier job market.
"""
from __future__ import annotations

from typing import Dict, Iterable, List

from web3trends.models import SECTORS, Classification, SectorScore
from web3trends.utils import clamp_score

BASELINE_SCORE = 50
LOW_THRESHOLD = 35
HIGH_THRESHOLD = 65


def calculate_adjustment(classification: Classification) -> int:
    """
    Sum the independent score adjustments for one classification.

    Args:
        classification: A single article classification

    Returns:
        Signed adjustment to apply to the article's sector
    """
    adjustment = 0

    if classification.developer_activity == "High":
        adjustment -= 15
    elif classification.developer_activity == "Low":
        adjustment += 10

    if classification.adoption_potential == "High":
        adjustment -= 10
    if classification.security_concerns == "Detected":
        adjustment += 15
    if classification.regulatory_news == "Unfavorable":
        adjustment += 10
    if classification.overall_sentiment == "Negative":
        adjustment += 5

    return adjustment


def route_sector(sector_label: str) -> str:
    """
    Map a free-form sector label onto one of the scored sectors.

    "DeFi" is checked first, then "NFT"/"Gaming"; anything else counts
    toward Infrastructure.
    """
    label = sector_label or ""
    if "DeFi" in label:
        return "DeFi"
    if "NFT" in label or "Gaming" in label:
        return "NFTs/Gaming"
    return "Infrastructure"


def saturation_level(score: int) -> str:
    """Qualitative level for a clamped score."""
    if score < LOW_THRESHOLD:
        return "Low"
    if score < HIGH_THRESHOLD:
        return "Medium"
    return "High"


def score_saturation(classifications: Iterable[Classification]) -> List[SectorScore]:
    """
    Aggregate a batch of classifications into per-sector saturation scores.

    Args:
        classifications: Classifications for every article in the batch

    Returns:
        Three SectorScore entries in the order DeFi, NFTs/Gaming, Infrastructure
    """
    totals: Dict[str, int] = {sector: BASELINE_SCORE for sector in SECTORS}

    for classification in classifications:
        totals[route_sector(classification.sector)] += calculate_adjustment(classification)

    scores: List[SectorScore] = []
    for sector in SECTORS:
        final_score = clamp_score(totals[sector])
        scores.append(SectorScore(sector=sector, score=final_score, level=saturation_level(final_score)))

    return scores
