"""
Unit tests for the job saturation scorer and chart summaries.
"""

import pytest

from conftest import make_classification
from web3trends.core.charts import saturation_color, sentiment_distribution
from web3trends.core.saturation import (
    calculate_adjustment,
    route_sector,
    saturation_level,
    score_saturation,
)
from web3trends.models import SectorScore


def as_tuples(scores):
    return [(s.sector, s.score, s.level) for s in scores]


class TestScoreSaturation:
    def test_empty_batch_is_baseline(self):
        assert score_saturation([]) == [
            SectorScore("DeFi", 50, "Medium"),
            SectorScore("NFTs/Gaming", 50, "Medium"),
            SectorScore("Infrastructure", 50, "Medium"),
        ]

    def test_gaming_platform_net_zero(self):
        classification = make_classification(
            sector="Gaming Platform",
            developer_activity="High",
            security_concerns="Detected",
        )

        assert as_tuples(score_saturation([classification])) == [
            ("DeFi", 50, "Medium"),
            ("NFTs/Gaming", 50, "Medium"),
            ("Infrastructure", 50, "Medium"),
        ]

    def test_defi_lending_risk_signals(self):
        classification = make_classification(
            developer_activity="Low",
            adoption_potential="Medium",
            security_concerns="Not Detected",
            regulatory_news="Unfavorable",
            overall_sentiment="Negative",
            sector="DeFi Lending",
        )

        assert as_tuples(score_saturation([classification])) == [
            ("DeFi", 75, "High"),
            ("NFTs/Gaming", 50, "Medium"),
            ("Infrastructure", 50, "Medium"),
        ]

    def test_scores_clamped_to_range(self):
        risky = make_classification(
            developer_activity="Low",
            security_concerns="Detected",
            regulatory_news="Unfavorable",
            overall_sentiment="Negative",
            sector="Layer 1",
        )
        healthy = make_classification(developer_activity="High", adoption_potential="High", sector="NFT")

        scores = {s.sector: s for s in score_saturation([risky] * 5 + [healthy] * 5)}

        assert scores["Infrastructure"].score == 100
        assert scores["Infrastructure"].level == "High"
        assert scores["NFTs/Gaming"].score == 0
        assert scores["NFTs/Gaming"].level == "Low"

    def test_always_three_sectors_in_fixed_order(self):
        batch = [make_classification(sector=label) for label in ("NFT", "DeFi", "General", "Gaming")]
        scores = score_saturation(batch)

        assert [s.sector for s in scores] == ["DeFi", "NFTs/Gaming", "Infrastructure"]
        assert all(0 <= s.score <= 100 for s in scores)

    def test_adjustments_are_order_independent(self):
        a = make_classification(developer_activity="High", sector="DeFi")
        b = make_classification(security_concerns="Detected", sector="DeFi")

        assert score_saturation([a, b]) == score_saturation([b, a])

    def test_default_classification_leaves_baseline(self):
        scores = score_saturation([make_classification()])

        assert [s.score for s in scores] == [50, 50, 50]


class TestRouting:
    @pytest.mark.parametrize(
        "label,expected",
        [
            ("DeFi", "DeFi"),
            ("DeFi Lending", "DeFi"),
            ("DeFi NFT marketplace", "DeFi"),
            ("NFT", "NFTs/Gaming"),
            ("Web3 Gaming", "NFTs/Gaming"),
            ("Layer 1", "Infrastructure"),
            ("General", "Infrastructure"),
            ("", "Infrastructure"),
            ("defi", "Infrastructure"),
        ],
    )
    def test_route_sector(self, label, expected):
        assert route_sector(label) == expected

    def test_adjustment_sums_all_rules(self):
        classification = make_classification(
            developer_activity="High",
            adoption_potential="High",
            security_concerns="Detected",
            regulatory_news="Unfavorable",
            overall_sentiment="Negative",
        )

        assert calculate_adjustment(classification) == -15 - 10 + 15 + 10 + 5


class TestLevels:
    @pytest.mark.parametrize(
        "score,level",
        [(0, "Low"), (34, "Low"), (35, "Medium"), (64, "Medium"), (65, "High"), (100, "High")],
    )
    def test_thresholds(self, score, level):
        assert saturation_level(score) == level

    def test_colors_follow_levels(self):
        assert saturation_color(34) == "#4CAF50"
        assert saturation_color(35) == "#FFC107"
        assert saturation_color(65) == "#F44336"


def test_sentiment_distribution_counts():
    batch = [
        make_classification(overall_sentiment="Positive"),
        make_classification(overall_sentiment="Neutral"),
        make_classification(overall_sentiment="Positive"),
    ]

    assert sentiment_distribution(batch) == {"Positive": 2, "Neutral": 1}
    assert sentiment_distribution([]) == {}
