from __future__ import annotations

from collections.abc import Sequence
from datetime import datetime

import pandas as pd

from creator_insights.config import DEFAULT_CADENCE_THRESHOLDS, CadenceConfig

SECONDS_PER_DAY = 86_400.0
DEFAULT_FLOOR_LABEL = "Monthly"


def thresholds_from_config(config: CadenceConfig) -> list[tuple[float, str]]:
    return [(threshold.min_per_week, threshold.label) for threshold in config.thresholds]


def _is_missing(value: object) -> bool:
    return value is None or bool(pd.isna(value))


def uploads_per_week(
    count: int,
    min_date: datetime | pd.Timestamp | None,
    max_date: datetime | pd.Timestamp | None,
) -> float | None:
    """Average uploads per week across the publish-date span, or None without a span."""
    if count < 2 or _is_missing(min_date) or _is_missing(max_date):
        return None
    days = (pd.Timestamp(max_date) - pd.Timestamp(min_date)).total_seconds() / SECONDS_PER_DAY
    if days <= 0:
        return None
    return (count / days) * 7.0


def classify_cadence(
    count: int,
    min_date: datetime | pd.Timestamp | None,
    max_date: datetime | pd.Timestamp | None,
    thresholds: Sequence[tuple[float, str]] = DEFAULT_CADENCE_THRESHOLDS,
    floor_label: str = DEFAULT_FLOOR_LABEL,
) -> str | None:
    """Label an upload cadence; None means there is not enough data to tell."""
    per_week = uploads_per_week(count, min_date, max_date)
    if per_week is None:
        return None
    for min_per_week, label in thresholds:
        if per_week >= min_per_week:
            return label
    return floor_label


def classify_partition(
    published: pd.Series,
    thresholds: Sequence[tuple[float, str]] = DEFAULT_CADENCE_THRESHOLDS,
    floor_label: str = DEFAULT_FLOOR_LABEL,
) -> str | None:
    # Count covers the whole partition; the span only uses rows with a date.
    dated = published.dropna()
    if dated.empty:
        return None
    return classify_cadence(
        count=int(len(published)),
        min_date=dated.min(),
        max_date=dated.max(),
        thresholds=thresholds,
        floor_label=floor_label,
    )
