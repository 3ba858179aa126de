from __future__ import annotations

from typing import Literal

import pandas as pd

from creator_insights.analytics.histogram import duration_minutes
from creator_insights.analytics.video_stats import VideoStats, is_short_video
from creator_insights.numeric import round_half_up, to_num_series

DurationFilter = Literal["All", "Short", "Full"]
DURATION_FILTERS = ("All", "Short", "Full")
UNKNOWN_CREATOR_NAME = "Unknown"
DEFAULT_NICHE = "Other"


def avg_views_split(
    creators: pd.DataFrame,
    video_stats: dict[str, VideoStats],
) -> pd.DataFrame:
    """Short vs full-length average views per creator, largest first."""
    rows = []
    for channel_id, title in zip(creators["channel_id"].astype(str), creators["title"].astype(str)):
        stats = video_stats.get(channel_id)
        avg_short = (stats.avg_views_short if stats else None) or 0.0
        avg_full = (stats.avg_views_full if stats else None) or 0.0
        peak = max(avg_short, avg_full)
        if peak <= 0:
            continue
        rows.append(
            {
                "name": title,
                "channel_id": channel_id,
                "avg_views_short": avg_short,
                "avg_views_full": avg_full,
                "_peak": peak,
            }
        )
    columns = ["name", "channel_id", "avg_views_short", "avg_views_full"]
    if not rows:
        return pd.DataFrame(columns=columns)
    frame = pd.DataFrame(rows).sort_values("_peak", ascending=False, kind="stable")
    return frame[columns].reset_index(drop=True)


def content_mix_points(creators: pd.DataFrame, videos: pd.DataFrame) -> pd.DataFrame:
    """Share of Shorts in each creator's catalogue against their total views."""
    columns = ["name", "channel_id", "short_ratio", "total_views", "subscribers"]
    if creators.empty or videos.empty:
        return pd.DataFrame(columns=columns)

    counts = (
        pd.DataFrame(
            {
                "channel_id": videos["channel_id"].astype(str),
                "is_short": is_short_video(videos["duration_type"]).astype(int),
            }
        )
        .groupby("channel_id", sort=False)["is_short"]
        .agg(["count", "sum"])
    )
    points = pd.DataFrame(
        {
            "name": creators["title"].astype(str),
            "channel_id": creators["channel_id"].astype(str),
            "total_views": to_num_series(creators["total_views"]),
            "subscribers": to_num_series(creators["subscribers"]).clip(lower=1.0),
        }
    )
    points = points.join(counts, on="channel_id", how="inner")
    points = points[(points["count"] > 0) & (points["total_views"] > 0)].copy()
    points["short_ratio"] = [
        int(round_half_up(shorts / total * 100.0))
        for shorts, total in zip(points["sum"], points["count"])
    ]
    return points[columns].reset_index(drop=True)


def duration_view_points(
    creators: pd.DataFrame,
    videos: pd.DataFrame,
    duration_filter: DurationFilter = "All",
) -> pd.DataFrame:
    """Individual videos as (duration in minutes, views) points."""
    if duration_filter not in DURATION_FILTERS:
        raise ValueError(
            f"Unknown duration filter {duration_filter!r}; expected one of {DURATION_FILTERS}"
        )
    columns = ["name", "channel_id", "duration", "views", "duration_type"]
    if videos.empty:
        return pd.DataFrame(columns=columns)

    shorts = is_short_video(videos["duration_type"])
    if duration_filter == "Short":
        videos = videos[shorts]
    elif duration_filter == "Full":
        videos = videos[~shorts]

    titles = dict(zip(creators["channel_id"].astype(str), creators["title"].astype(str)))
    channel_ids = videos["channel_id"].astype(str)
    points = pd.DataFrame(
        {
            "name": channel_ids.map(lambda channel_id: titles.get(channel_id, UNKNOWN_CREATOR_NAME)),
            "channel_id": channel_ids,
            "duration": duration_minutes(videos).map(lambda value: round_half_up(float(value), 2)),
            "views": to_num_series(videos["views"]),
            "duration_type": videos["duration_type"].map(
                lambda value: value if isinstance(value, str) and value else "Full"
            ),
        }
    )
    points = points[(points["views"] > 0) & (points["duration"] > 0)]
    return points[columns].reset_index(drop=True)


def video_length_points(creators: pd.DataFrame) -> pd.DataFrame:
    """Creators' typical video length against their average views per video."""
    columns = ["name", "channel_id", "length", "avg_views", "subscribers", "niche"]
    if creators.empty:
        return pd.DataFrame(columns=columns)
    points = pd.DataFrame(
        {
            "name": creators["title"].astype(str),
            "channel_id": creators["channel_id"].astype(str),
            "length": to_num_series(creators["typical_video_length"]),
            "avg_views": to_num_series(creators["avg_views_per_video"]),
            "subscribers": to_num_series(creators["subscribers"]).clip(lower=1.0),
            "niche": creators["top_content_type"].map(
                lambda value: value if isinstance(value, str) else DEFAULT_NICHE
            ),
        }
    )
    points = points[(points["length"] > 0) & (points["avg_views"] > 0)]
    return points[columns].reset_index(drop=True)
