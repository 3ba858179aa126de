from __future__ import annotations

import json
import math
from dataclasses import dataclass
from typing import Any

import pandas as pd

CREATOR_COLUMNS = [
    "channel_id",
    "title",
    "subscribers",
    "total_views",
    "video_count",
    "views_to_sub_ratio",
    "avg_views_per_video",
    "upload_frequency",
    "top_content_type",
    "est_revenue_range",
    "monetization",
    "competitive_threat",
    "status",
    "typical_video_length",
]

VIDEO_COLUMNS = [
    "channel_id",
    "views",
    "likes",
    "comments",
    "duration",
    "duration_type",
    "transcript",
    "summary",
    "published_date",
]

# GraphQL responses use camelCase; SQL rows already use the canonical names.
CREATOR_ALIASES = {
    "channelId": "channel_id",
    "totalViews": "total_views",
    "videoCount": "video_count",
    "viewsToSubRatio": "views_to_sub_ratio",
    "avgViewsPerVideo": "avg_views_per_video",
    "uploadFrequency": "upload_frequency",
    "topContentType": "top_content_type",
    "niche": "top_content_type",
    "estRevenueRange": "est_revenue_range",
    "competitiveThreat": "competitive_threat",
    "typicalVideoLength": "typical_video_length",
}

VIDEO_ALIASES = {
    "channelId": "channel_id",
    "durationType": "duration_type",
    "publishedDate": "published_date",
    "published_at": "published_date",
    "publishedAt": "published_date",
}

SHORT_DURATION_TYPE = "Short"


@dataclass(frozen=True)
class DashboardStats:
    """Precomputed totals supplied by the data source, each one optional."""

    total_views: float | None = None
    total_likes: float | None = None
    total_comments: float | None = None
    total_duration: float | None = None
    short_count: int | None = None
    full_count: int | None = None
    with_transcript: int | None = None
    total_videos: int | None = None

    @classmethod
    def from_mapping(cls, data: dict[str, Any]) -> "DashboardStats":
        values: dict[str, Any] = {}
        for field_name in cls.__dataclass_fields__:
            raw = data.get(field_name)
            if raw is None:
                values[field_name] = None
                continue
            try:
                number = float(raw)
            except (TypeError, ValueError):
                values[field_name] = None
                continue
            if not math.isfinite(number):
                values[field_name] = None
                continue
            if field_name in {"short_count", "full_count", "with_transcript", "total_videos"}:
                values[field_name] = int(number)
            else:
                values[field_name] = number
        return cls(**values)


def _rename_aliases(df: pd.DataFrame, aliases: dict[str, str]) -> pd.DataFrame:
    rename_map = {
        source: target
        for source, target in aliases.items()
        if source in df.columns and target not in df.columns
    }
    return df.rename(columns=rename_map)


def _is_missing(value: Any) -> bool:
    return value is None or (pd.api.types.is_scalar(value) and bool(pd.isna(value)))


def _coerce_methods(value: Any) -> list[str]:
    if isinstance(value, str):
        text = value.strip()
        if not text:
            return []
        if text.startswith("["):
            try:
                parsed = json.loads(text)
            except json.JSONDecodeError:
                parsed = None
            if isinstance(parsed, list):
                return [str(item).strip() for item in parsed if not _is_missing(item) and str(item).strip()]
        return [part.strip() for part in text.split(",") if part.strip()]
    if pd.api.types.is_list_like(value):
        items = [item for item in value if not _is_missing(item)]
        return [str(item).strip() for item in items if str(item).strip()]
    if _is_missing(value):
        return []
    return [str(value).strip()]


def _blank_to_na(values: pd.Series) -> pd.Series:
    return values.map(
        lambda item: pd.NA
        if item is None
        or (isinstance(item, float) and pd.isna(item))
        or (isinstance(item, str) and not item.strip())
        else item
    )


def normalize_creators(df: pd.DataFrame) -> pd.DataFrame:
    """Rename creator wire columns to canonical names and fill optional ones."""
    renamed = _rename_aliases(df, CREATOR_ALIASES)
    if "channel_id" not in renamed.columns:
        raise ValueError("Creator rows missing required column: channel_id")

    normalized = renamed.copy()
    for column in CREATOR_COLUMNS:
        if column not in normalized.columns:
            normalized[column] = pd.NA
    normalized = normalized.loc[:, CREATOR_COLUMNS]
    normalized = normalized[normalized["channel_id"].notna()].reset_index(drop=True)
    normalized["channel_id"] = normalized["channel_id"].astype(str)
    normalized["title"] = normalized["title"].where(
        normalized["title"].notna(), normalized["channel_id"]
    )
    for column in (
        "upload_frequency",
        "top_content_type",
        "est_revenue_range",
        "competitive_threat",
        "status",
    ):
        normalized[column] = _blank_to_na(normalized[column].astype(object))
    normalized["monetization"] = normalized["monetization"].map(_coerce_methods)
    return normalized


def normalize_videos(df: pd.DataFrame) -> pd.DataFrame:
    """Rename video wire columns to canonical names and parse publish dates."""
    renamed = _rename_aliases(df, VIDEO_ALIASES)
    if "channel_id" not in renamed.columns:
        raise ValueError("Video rows missing required column: channel_id")

    normalized = renamed.copy()
    for column in VIDEO_COLUMNS:
        if column not in normalized.columns:
            normalized[column] = pd.NA
    normalized = normalized.loc[:, VIDEO_COLUMNS]
    normalized = normalized[normalized["channel_id"].notna()].reset_index(drop=True)
    normalized["channel_id"] = normalized["channel_id"].astype(str)
    normalized["published_date"] = pd.to_datetime(
        normalized["published_date"], errors="coerce", utc=True, format="mixed"
    )
    return normalized


def empty_creators() -> pd.DataFrame:
    return normalize_creators(pd.DataFrame(columns=["channel_id"]))


def empty_videos() -> pd.DataFrame:
    return normalize_videos(pd.DataFrame(columns=["channel_id"]))
