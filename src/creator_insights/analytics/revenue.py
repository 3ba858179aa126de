from __future__ import annotations

import pandas as pd

from creator_insights.numeric import to_num_series
from creator_insights.ordinals import REVENUE_TIERS, is_revenue_tier, revenue_to_ordinal


def revenue_tier_breakdown(creators: pd.DataFrame) -> pd.DataFrame:
    """Creator count per revenue tier, every tier present."""
    tiers = creators["est_revenue_range"]
    counts = tiers[tiers.map(is_revenue_tier).astype(bool)].value_counts()
    counts = counts.reindex(REVENUE_TIERS, fill_value=0)
    return pd.DataFrame({"tier": REVENUE_TIERS, "creators": counts.astype(int).tolist()})


def monetization_stack(creators: pd.DataFrame) -> pd.DataFrame:
    """Creators per monetization method split by revenue tier, most common method first.

    Only creators with a recognized tier and at least one method count.
    """
    columns = ["method", "total", *REVENUE_TIERS]
    exploded = pd.DataFrame(
        {
            "method": creators["monetization"],
            "tier": creators["est_revenue_range"],
        }
    )
    exploded = exploded[exploded["tier"].map(is_revenue_tier).astype(bool)].explode("method")
    exploded = exploded.dropna(subset=["method"]).reset_index(drop=True)
    if exploded.empty:
        return pd.DataFrame(columns=columns)

    stack = pd.crosstab(exploded["method"], exploded["tier"]).reindex(
        columns=REVENUE_TIERS, fill_value=0
    )
    stack["total"] = stack.sum(axis=1)
    stack = stack.rename_axis(index="method", columns=None).reset_index()
    # Methods keep first-seen order among equal totals.
    first_seen = {method: index for index, method in enumerate(exploded["method"].drop_duplicates())}
    stack["_first_seen"] = stack["method"].map(first_seen)
    stack = stack.sort_values(["total", "_first_seen"], ascending=[False, True], kind="stable")
    return stack[columns].reset_index(drop=True)


def monetization_diversity(creators: pd.DataFrame) -> pd.DataFrame:
    """Number of monetization methods against revenue tier ordinal."""
    columns = ["name", "channel_id", "monetization_count", "revenue_ordinal", "subscribers"]
    diversity = pd.DataFrame(
        {
            "name": creators["title"].astype(str),
            "channel_id": creators["channel_id"].astype(str),
            "monetization_count": creators["monetization"].map(len).astype(int),
            "revenue_ordinal": creators["est_revenue_range"].map(revenue_to_ordinal).astype(int),
            "subscribers": to_num_series(creators["subscribers"]).clip(lower=1.0),
        },
        index=creators.index,
    )
    diversity = diversity[(diversity["monetization_count"] > 0) & (diversity["revenue_ordinal"] > 0)]
    return diversity[columns].reset_index(drop=True)
