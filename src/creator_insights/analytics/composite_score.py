from __future__ import annotations

import pandas as pd

from creator_insights.analytics.percentile import percentile_ranks
from creator_insights.analytics.video_stats import VideoStats, engagement_lookup
from creator_insights.config import ScoreWeightsConfig
from creator_insights.numeric import round_half_up, to_num_series

SCORE_COLUMNS = [
    "name",
    "channel_id",
    "subscriber_pct",
    "engagement_pct",
    "views_to_sub_pct",
    "volume_pct",
    "total",
]


def score_components(
    creators: pd.DataFrame,
    video_stats: dict[str, VideoStats],
) -> pd.DataFrame:
    """Raw percentile ranks (0-100) of each creator against the whole population."""
    return pd.DataFrame(
        {
            "subscriber_rank": percentile_ranks(to_num_series(creators["subscribers"])),
            "engagement_rank": percentile_ranks(
                engagement_lookup(video_stats, creators["channel_id"]).fillna(0.0)
            ),
            "views_to_sub_rank": percentile_ranks(to_num_series(creators["views_to_sub_ratio"])),
            "volume_rank": percentile_ranks(to_num_series(creators["video_count"])),
        },
        index=creators.index,
    )


def build_score_rows(
    creators: pd.DataFrame,
    video_stats: dict[str, VideoStats],
    weights: ScoreWeightsConfig | None = None,
) -> pd.DataFrame:
    """Rank creators by a weighted blend of four percentile ranks.

    Each weighted component and the total are rounded to one decimal; the
    total is the rounded sum of the unrounded components. Ties keep input
    order.
    """
    if creators.empty:
        return pd.DataFrame(columns=SCORE_COLUMNS)

    weights = weights or ScoreWeightsConfig()
    ranks = score_components(creators, video_stats)
    weighted = pd.DataFrame(
        {
            "subscriber_pct": ranks["subscriber_rank"] * weights.subscribers,
            "engagement_pct": ranks["engagement_rank"] * weights.engagement,
            "views_to_sub_pct": ranks["views_to_sub_rank"] * weights.views_to_sub_ratio,
            "volume_pct": ranks["volume_rank"] * weights.volume,
        },
        index=creators.index,
    )
    total = weighted.sum(axis=1)

    scored = pd.DataFrame(
        {
            "name": creators["title"].astype(str),
            "channel_id": creators["channel_id"].astype(str),
        },
        index=creators.index,
    )
    for column in weighted.columns:
        scored[column] = weighted[column].map(lambda value: round_half_up(float(value), 1))
    scored["total"] = total.map(lambda value: round_half_up(float(value), 1))

    return scored.sort_values("total", ascending=False, kind="stable").reset_index(drop=True)
