from __future__ import annotations

from collections.abc import Iterable, Sequence
from dataclasses import asdict, dataclass

import numpy as np
import pandas as pd

from creator_insights.analytics.cadence import DEFAULT_FLOOR_LABEL, classify_partition
from creator_insights.config import DEFAULT_CADENCE_THRESHOLDS
from creator_insights.io.schema import SHORT_DURATION_TYPE
from creator_insights.numeric import mean_or_none, to_num_series

VIDEO_STATS_COLUMNS = [
    "channel_id",
    "video_count",
    "avg_views_short",
    "avg_views_full",
    "avg_engagement",
    "avg_likes_pct",
    "avg_comments_pct",
    "freq_short",
    "freq_full",
    "avg_duration_short",
    "avg_duration_full",
]


@dataclass(frozen=True)
class VideoStats:
    video_count: int
    avg_views_short: float | None
    avg_views_full: float | None
    avg_engagement: float | None
    avg_likes_pct: float | None
    avg_comments_pct: float | None
    freq_short: str | None
    freq_full: str | None
    avg_duration_short: float | None
    avg_duration_full: float | None


def _share_pct(numerator: pd.Series, views: pd.Series) -> float | None:
    total_views = float(views.sum())
    if total_views <= 0:
        return None
    return float(numerator.sum()) / total_views * 100.0


def is_short_video(duration_types: pd.Series) -> pd.Series:
    return duration_types.map(
        lambda value: isinstance(value, str) and value == SHORT_DURATION_TYPE
    ).astype(bool)


def prepare_video_metrics(videos: pd.DataFrame) -> pd.DataFrame:
    """Numeric view of video rows with the short/full split and per-video engagement."""
    metrics = pd.DataFrame(
        {
            "channel_id": videos["channel_id"].astype(str),
            "views": to_num_series(videos["views"]),
            "likes": to_num_series(videos["likes"]),
            "comments": to_num_series(videos["comments"]),
            "duration": to_num_series(videos["duration"]),
            "is_short": is_short_video(videos["duration_type"]),
            "published_date": videos["published_date"],
        },
        index=videos.index,
    )
    has_views = metrics["views"] > 0
    metrics["engagement"] = np.nan
    metrics.loc[has_views, "engagement"] = (
        (metrics.loc[has_views, "likes"] + metrics.loc[has_views, "comments"])
        / metrics.loc[has_views, "views"]
        * 100.0
    )
    return metrics


def _summarize_group(
    group: pd.DataFrame,
    thresholds: Sequence[tuple[float, str]],
    floor_label: str,
) -> VideoStats:
    shorts = group[group["is_short"]]
    fulls = group[~group["is_short"]]
    return VideoStats(
        video_count=int(len(group)),
        avg_views_short=mean_or_none(shorts["views"]),
        avg_views_full=mean_or_none(fulls["views"]),
        avg_engagement=mean_or_none(group["engagement"].dropna()),
        avg_likes_pct=_share_pct(group["likes"], group["views"]),
        avg_comments_pct=_share_pct(group["comments"], group["views"]),
        freq_short=classify_partition(shorts["published_date"], thresholds, floor_label),
        freq_full=classify_partition(fulls["published_date"], thresholds, floor_label),
        avg_duration_short=mean_or_none(shorts["duration"]),
        avg_duration_full=mean_or_none(fulls["duration"]),
    )


def build_video_stats(
    videos: pd.DataFrame,
    creator_ids: Iterable[str] | None = None,
    thresholds: Sequence[tuple[float, str]] = DEFAULT_CADENCE_THRESHOLDS,
    floor_label: str = DEFAULT_FLOOR_LABEL,
) -> dict[str, VideoStats]:
    """Aggregate video rows into one ``VideoStats`` per creator.

    When ``creator_ids`` is given, videos whose channel is not in it are
    ignored rather than reported.
    """
    if videos.empty:
        return {}

    metrics = prepare_video_metrics(videos)
    if creator_ids is not None:
        known = set(creator_ids)
        metrics = metrics[metrics["channel_id"].isin(known)]

    return {
        str(channel_id): _summarize_group(group, thresholds, floor_label)
        for channel_id, group in metrics.groupby("channel_id", sort=True)
    }


def video_stats_frame(stats: dict[str, VideoStats]) -> pd.DataFrame:
    if not stats:
        return pd.DataFrame(columns=VIDEO_STATS_COLUMNS)
    rows = [{"channel_id": channel_id, **asdict(item)} for channel_id, item in stats.items()]
    return pd.DataFrame(rows, columns=VIDEO_STATS_COLUMNS)


def engagement_lookup(stats: dict[str, VideoStats], channel_ids: pd.Series) -> pd.Series:
    """Average engagement per creator row, NaN where a creator has no engagement data."""
    values = [
        stats[channel_id].avg_engagement
        if channel_id in stats and stats[channel_id].avg_engagement is not None
        else np.nan
        for channel_id in channel_ids.astype(str)
    ]
    return pd.Series(values, index=channel_ids.index, dtype=float)
