from __future__ import annotations

import logging
from collections.abc import Callable
from typing import Any

import pandas as pd

from creator_insights.analytics.video_stats import is_short_video
from creator_insights.io.schema import DashboardStats
from creator_insights.numeric import round_half_up, to_num_series

LOGGER = logging.getLogger(__name__)

DEFAULT_TOP_N = 20


def _is_present(value: Any) -> bool:
    if isinstance(value, str):
        return bool(value.strip())
    if pd.api.types.is_list_like(value):
        return len(value) > 0
    if value is None or pd.isna(value):
        return False
    return bool(value)


def has_transcript(values: pd.Series) -> pd.Series:
    """Presence flag per video: text, ``True`` or a non-zero number counts, blanks do not."""
    return values.map(_is_present).astype(bool)


def _pct(part: float, whole: float) -> int:
    if whole <= 0:
        return 0
    return int(round_half_up(part / whole * 100.0))


def build_overview(
    videos: pd.DataFrame,
    stats: DashboardStats | None = None,
    total_videos: int | None = None,
) -> dict[str, Any]:
    """Headline totals across all videos.

    Every figure prefers the precomputed ``stats`` value and is derived from
    the raw rows only when that value is missing. ``total_videos`` is the
    source-reported row count when it differs from the rows loaded.
    """
    stats = stats or DashboardStats()
    loaded_count = int(total_videos) if total_videos is not None else int(len(videos))
    shorts = is_short_video(videos["duration_type"])
    sources: dict[str, str] = {}

    def _pick(name: str, precomputed: float | None, derive: Callable[[], float]) -> float:
        if precomputed is not None:
            sources[name] = "precomputed"
            return precomputed
        sources[name] = "derived"
        return derive()

    views = to_num_series(videos["views"])
    likes = to_num_series(videos["likes"])
    comments = to_num_series(videos["comments"])
    durations = to_num_series(videos["duration"])

    total_views = _pick("total_views", stats.total_views, lambda: float(views.sum()))
    total_likes = _pick("total_likes", stats.total_likes, lambda: float(likes.sum()))
    total_comments = _pick("total_comments", stats.total_comments, lambda: float(comments.sum()))
    total_duration = _pick("total_duration", stats.total_duration, lambda: float(durations.sum()))
    short_count = int(_pick("short_count", stats.short_count, lambda: int(shorts.sum())))
    full_count = int(_pick("full_count", stats.full_count, lambda: loaded_count - short_count))
    with_transcript = int(
        _pick(
            "with_transcript",
            stats.with_transcript,
            lambda: int(has_transcript(videos["transcript"]).sum()),
        )
    )
    video_count = int(_pick("total_videos", stats.total_videos, lambda: loaded_count))

    derived = sorted(name for name, source in sources.items() if source == "derived")
    if derived:
        LOGGER.info("Overview totals derived from video rows: %s", ", ".join(derived))

    return {
        "total_views": total_views,
        "total_likes": total_likes,
        "total_comments": total_comments,
        "total_duration": total_duration,
        "short_count": short_count,
        "full_count": full_count,
        "with_transcript": with_transcript,
        "total_videos": video_count,
        "transcript_pct": _pct(with_transcript, video_count),
        "short_pct": _pct(short_count, video_count),
        "sources": sources,
    }


def _per_creator_totals(videos: pd.DataFrame) -> pd.DataFrame:
    metrics = pd.DataFrame(
        {
            "channel_id": videos["channel_id"].astype(str),
            "videos": 1,
            "views": to_num_series(videos["views"]),
            "likes": to_num_series(videos["likes"]),
            "comments": to_num_series(videos["comments"]),
            "duration": to_num_series(videos["duration"]),
            "short": is_short_video(videos["duration_type"]).astype(int),
            "with_transcript": has_transcript(videos["transcript"]).astype(int),
        }
    )
    metrics["full"] = 1 - metrics["short"]
    return metrics.groupby("channel_id", sort=False).sum()


def _top(frame: pd.DataFrame, column: str, top_n: int) -> pd.DataFrame:
    ranked = frame.sort_values(column, ascending=False, kind="stable")
    return ranked.head(top_n).reset_index(drop=True)


def creator_leaderboards(
    creators: pd.DataFrame,
    videos: pd.DataFrame,
    top_n: int = DEFAULT_TOP_N,
) -> dict[str, pd.DataFrame]:
    """Per-creator top lists computed from raw video rows."""
    totals = _per_creator_totals(videos).reindex(creators["channel_id"].astype(str)).fillna(0)
    totals.index = creators.index
    base = pd.DataFrame({"name": creators["title"].astype(str)}, index=creators.index)

    engagement = [
        round_half_up((likes + comments) / views * 100.0, 1) if views > 0 else 0.0
        for likes, comments, views in zip(totals["likes"], totals["comments"], totals["views"])
    ]
    coverage = [
        _pct(with_transcript, total)
        for with_transcript, total in zip(totals["with_transcript"], totals["videos"])
    ]

    return {
        "videos_per_creator": _top(base.assign(videos=totals["videos"].astype(int)), "videos", top_n),
        "views_per_creator": _top(base.assign(views=totals["views"]), "views", top_n),
        "engagement_per_creator": _top(base.assign(engagement=engagement), "engagement", top_n),
        "likes_per_creator": _top(base.assign(likes=totals["likes"]), "likes", top_n),
        "comments_per_creator": _top(base.assign(comments=totals["comments"]), "comments", top_n),
        "short_full_per_creator": _top(
            base.assign(
                short=totals["short"].astype(int),
                full=totals["full"].astype(int),
                total=(totals["short"] + totals["full"]).astype(int),
            ),
            "total",
            top_n,
        ),
        "duration_per_creator": _top(
            base.assign(duration=[int(round_half_up(float(value))) for value in totals["duration"]]),
            "duration",
            top_n,
        ),
        "transcript_coverage": _top(
            base.assign(
                coverage=coverage,
                with_transcript=totals["with_transcript"].astype(int),
                total=totals["videos"].astype(int),
            ),
            "coverage",
            top_n,
        ),
    }
