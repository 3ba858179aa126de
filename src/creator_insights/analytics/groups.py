from __future__ import annotations

from collections.abc import Sequence

import pandas as pd

from creator_insights.analytics.video_stats import VideoStats, engagement_lookup
from creator_insights.numeric import round_half_up, to_num_series
from creator_insights.ordinals import CADENCE_ORDER, REVENUE_TIERS


def _group_keys(values: pd.Series) -> pd.Series:
    def _clean(value: object) -> object:
        if not isinstance(value, str):
            return pd.NA
        stripped = value.strip()
        return stripped if stripped else pd.NA

    return values.map(_clean)


def normalize_groups(
    frame: pd.DataFrame,
    key: str,
    metrics: Sequence[str],
    order: Sequence[str] | None = None,
    sort_by: str | None = None,
) -> pd.DataFrame:
    """Average each metric per group and scale it against the best group.

    ``frame`` must carry ``key`` plus one numeric column per metric; NaN
    metric values are left out of that group's mean. With ``order`` the
    result has exactly one row per declared category, in that order.
    Without it rows are sorted by ``sort_by`` (default: first metric),
    highest first.
    """
    columns = [key, "n_creators"]
    columns += [f"raw_{metric}" for metric in metrics]
    columns += [f"norm_{metric}" for metric in metrics]

    working = frame[[key, *metrics]].copy()
    working[key] = _group_keys(working[key])
    working = working.dropna(subset=[key])
    if order is not None:
        working = working[working[key].isin(list(order))]

    grouped = working.groupby(key, sort=False)
    summary = grouped[list(metrics)].mean()
    summary.insert(0, "n_creators", grouped.size())
    if order is not None:
        summary = summary.reindex(list(order))
        summary["n_creators"] = summary["n_creators"].fillna(0)
    summary = summary.fillna(0.0)
    summary["n_creators"] = summary["n_creators"].astype(int)

    for metric in metrics:
        raw = summary[metric].astype(float)
        peak = float(raw.max()) if not raw.empty else 0.0
        summary[f"raw_{metric}"] = raw
        if peak > 0:
            summary[f"norm_{metric}"] = (raw / peak * 100.0).map(
                lambda value: round_half_up(float(value), 1)
            )
        else:
            summary[f"norm_{metric}"] = 0.0

    result = summary.rename_axis(key).reset_index()
    if order is None and not result.empty:
        primary = f"raw_{sort_by or metrics[0]}"
        result = result.sort_values(primary, ascending=False, kind="stable")
    return result[columns].reset_index(drop=True)


def _creator_metrics(
    creators: pd.DataFrame,
    video_stats: dict[str, VideoStats] | None = None,
) -> pd.DataFrame:
    metrics = pd.DataFrame(
        {
            "upload_frequency": creators["upload_frequency"],
            "top_content_type": creators["top_content_type"],
            "est_revenue_range": creators["est_revenue_range"],
            "subscribers": to_num_series(creators["subscribers"]),
            "avg_views_per_video": to_num_series(creators["avg_views_per_video"]),
            "views_to_sub_ratio": to_num_series(creators["views_to_sub_ratio"]),
            "video_count": to_num_series(creators["video_count"]),
        },
        index=creators.index,
    )
    metrics["engagement"] = engagement_lookup(video_stats or {}, creators["channel_id"])
    return metrics


def cadence_performance(creators: pd.DataFrame) -> pd.DataFrame:
    return normalize_groups(
        _creator_metrics(creators),
        key="upload_frequency",
        metrics=["subscribers", "avg_views_per_video"],
        order=CADENCE_ORDER,
    )


def niche_performance(
    creators: pd.DataFrame,
    video_stats: dict[str, VideoStats],
) -> pd.DataFrame:
    return normalize_groups(
        _creator_metrics(creators, video_stats),
        key="top_content_type",
        metrics=["subscribers", "engagement", "views_to_sub_ratio"],
    )


def revenue_tier_metrics(
    creators: pd.DataFrame,
    video_stats: dict[str, VideoStats],
) -> pd.DataFrame:
    return normalize_groups(
        _creator_metrics(creators, video_stats),
        key="est_revenue_range",
        metrics=["subscribers", "engagement", "video_count"],
        order=REVENUE_TIERS,
    )


def content_type_engagement(
    creators: pd.DataFrame,
    video_stats: dict[str, VideoStats],
) -> pd.DataFrame:
    """Mean creator engagement per niche, for niches with any engagement data."""
    metrics = _creator_metrics(creators, video_stats)
    metrics["top_content_type"] = _group_keys(metrics["top_content_type"])
    metrics = metrics.dropna(subset=["top_content_type", "engagement"])
    if metrics.empty:
        return pd.DataFrame(columns=["top_content_type", "avg_engagement"])

    result = (
        metrics.groupby("top_content_type", sort=False)["engagement"]
        .mean()
        .rename("avg_engagement")
        .reset_index()
    )
    result["avg_engagement"] = result["avg_engagement"].map(
        lambda value: round_half_up(float(value), 2)
    )
    return result.sort_values("avg_engagement", ascending=False, kind="stable").reset_index(
        drop=True
    )
