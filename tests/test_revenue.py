from __future__ import annotations

import pandas as pd

from creator_insights.analytics.revenue import (
    monetization_diversity,
    monetization_stack,
    revenue_tier_breakdown,
)
from creator_insights.io.schema import normalize_creators
from creator_insights.ordinals import REVENUE_TIERS


def _creators() -> pd.DataFrame:
    return normalize_creators(
        pd.DataFrame(
            {
                "channel_id": ["a", "b", "c", "d", "e"],
                "title": ["Alpha", "Beta", "Gamma", "Delta", "Epsilon"],
                "subscribers": [1000, 0, 50, 20, 10],
                "est_revenue_range": ["$1-5K/mo", "$1-5K/mo", "$50K+/mo", "mystery", None],
                "monetization": [
                    ["Sponsorships", "Merch"],
                    "Merch",
                    '["Merch", "Courses", "Sponsorships"]',
                    ["Merch"],
                    ["Courses"],
                ],
            }
        )
    )


def test_revenue_tier_breakdown_is_dense() -> None:
    table = revenue_tier_breakdown(_creators())

    assert table["tier"].tolist() == REVENUE_TIERS
    assert table["creators"].tolist() == [0, 2, 0, 0, 1]


def test_monetization_stack_counts_recognized_tiers_only() -> None:
    table = monetization_stack(_creators())

    assert table["method"].tolist() == ["Merch", "Sponsorships", "Courses"]
    merch = table.iloc[0]
    assert merch["total"] == 3
    assert merch["$1-5K/mo"] == 2
    assert merch["$50K+/mo"] == 1
    assert merch["<$1K/mo"] == 0
    assert table.iloc[2]["total"] == 1


def test_monetization_stack_empty_without_methods() -> None:
    creators = normalize_creators(
        pd.DataFrame({"channel_id": ["a"], "est_revenue_range": ["$1-5K/mo"]})
    )

    table = monetization_stack(creators)

    assert table.empty
    assert "total" in table.columns


def test_monetization_diversity_floors_subscribers() -> None:
    table = monetization_diversity(_creators())

    assert table["channel_id"].tolist() == ["a", "b", "c"]
    assert table["monetization_count"].tolist() == [2, 1, 3]
    assert table["revenue_ordinal"].tolist() == [2, 2, 5]
    assert table["subscribers"].tolist() == [1000.0, 1.0, 50.0]


def test_missing_monetization_values_add_no_methods() -> None:
    creators = normalize_creators(
        pd.DataFrame(
            {
                "channel_id": ["a", "b", "c"],
                "est_revenue_range": ["$1-5K/mo", "$1-5K/mo", "<$1K/mo"],
                "monetization": [["Ads", "Merch"], pd.NA, None],
            }
        )
    )

    stack = monetization_stack(creators)
    diversity = monetization_diversity(creators)

    assert stack["method"].tolist() == ["Ads", "Merch"]
    assert stack["total"].tolist() == [1, 1]
    assert diversity["channel_id"].tolist() == ["a"]
