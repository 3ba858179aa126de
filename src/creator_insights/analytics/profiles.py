from __future__ import annotations

from collections.abc import Sequence

import pandas as pd

from creator_insights.analytics.percentile import percentile_ranks
from creator_insights.analytics.video_stats import VideoStats, engagement_lookup
from creator_insights.numeric import to_num_series
from creator_insights.ordinals import revenue_tier_score, upload_consistency

# Column name -> display label, in radar order.
RADAR_AXES = {
    "subscribers_pct": "Subscribers%",
    "engagement_pct": "Engagement%",
    "views_to_sub_pct": "Views-to-Sub%",
    "upload_consistency": "Upload Consistency",
    "volume_pct": "Volume%",
    "revenue_tier": "Revenue Tier",
}
DEFAULT_THREAT_LEVEL = "Low"
DEFAULT_COMPARISON_SIZE = 3


def radar_profiles(
    creators: pd.DataFrame,
    video_stats: dict[str, VideoStats],
) -> pd.DataFrame:
    """Six 0-100 axes per creator, each ranked against every loaded creator."""
    columns = ["name", "channel_id", *RADAR_AXES]
    if creators.empty:
        return pd.DataFrame(columns=columns)

    channel_ids = creators["channel_id"].astype(str)
    volumes = pd.Series(
        [
            video_stats[channel_id].video_count if channel_id in video_stats else 0
            for channel_id in channel_ids
        ],
        index=creators.index,
        dtype=float,
    )
    profiles = pd.DataFrame(
        {
            "name": creators["title"].astype(str),
            "channel_id": channel_ids,
            "subscribers_pct": percentile_ranks(to_num_series(creators["subscribers"])),
            "engagement_pct": percentile_ranks(
                engagement_lookup(video_stats, creators["channel_id"]).fillna(0.0)
            ),
            "views_to_sub_pct": percentile_ranks(to_num_series(creators["views_to_sub_ratio"])),
            "upload_consistency": creators["upload_frequency"].map(upload_consistency),
            "volume_pct": percentile_ranks(volumes),
            "revenue_tier": creators["est_revenue_range"].map(revenue_tier_score),
        },
        index=creators.index,
    )
    return profiles[columns].reset_index(drop=True)


def radar_comparison(
    profiles: pd.DataFrame,
    channel_ids: Sequence[str] | None = None,
) -> pd.DataFrame:
    """One row per axis with a value column per selected creator.

    Defaults to the first three creators when no selection is given.
    """
    if channel_ids is None:
        channel_ids = profiles["channel_id"].head(DEFAULT_COMPARISON_SIZE).tolist()
    by_id = profiles.drop_duplicates("channel_id").set_index("channel_id")
    selected = [channel_id for channel_id in channel_ids if channel_id in by_id.index]
    rows = []
    for column, label in RADAR_AXES.items():
        row: dict[str, object] = {"axis": label}
        for channel_id in selected:
            row[channel_id] = by_id.at[channel_id, column]
        rows.append(row)
    return pd.DataFrame(rows)


def threat_matrix(
    creators: pd.DataFrame,
    video_stats: dict[str, VideoStats],
) -> pd.DataFrame:
    columns = ["name", "channel_id", "subscribers", "engagement", "total_views", "threat"]
    if creators.empty:
        return pd.DataFrame(columns=columns)
    matrix = pd.DataFrame(
        {
            "name": creators["title"].astype(str),
            "channel_id": creators["channel_id"].astype(str),
            "subscribers": to_num_series(creators["subscribers"]),
            "engagement": engagement_lookup(video_stats, creators["channel_id"]).fillna(0.0),
            "total_views": to_num_series(creators["total_views"]),
            "threat": creators["competitive_threat"].map(
                lambda value: value if isinstance(value, str) else DEFAULT_THREAT_LEVEL
            ),
        },
        index=creators.index,
    )
    matrix = matrix[matrix["subscribers"] > 0]
    return matrix[columns].reset_index(drop=True)
