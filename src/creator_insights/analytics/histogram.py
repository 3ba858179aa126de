from __future__ import annotations

import logging
from collections.abc import Iterable, Mapping, Sequence

import numpy as np
import pandas as pd

from creator_insights.analytics.video_stats import is_short_video
from creator_insights.numeric import round_half_up, to_num_series
from creator_insights.snapshot import Snapshot

LOGGER = logging.getLogger(__name__)

HISTOGRAM_COLUMNS = ["bucket", "bucket_label", "count"]
DEFAULT_FIRST_BUCKET = 1
DEFAULT_LAST_BUCKET = 21
SECONDS_PER_MINUTE = 60.0


def _bucket_label(key: object, is_last: bool, overflow_label: bool) -> str:
    label = str(key)
    return f"{label}+" if is_last and overflow_label else label


def densify_histogram(
    entries: Mapping[object, float] | pd.DataFrame | Iterable[tuple[object, float]],
    keys: Sequence[object],
    overflow_label: bool = True,
) -> pd.DataFrame:
    """Expand sparse ``(bucket, count)`` entries to one row per declared key.

    Missing keys get a count of 0 and keys outside ``keys`` are dropped. The
    last key is labelled ``"<key>+"`` when ``overflow_label`` is set.
    """
    if isinstance(entries, pd.DataFrame):
        pairs = zip(entries["bucket"].tolist(), to_num_series(entries["count"]).tolist())
    elif isinstance(entries, Mapping):
        pairs = entries.items()
    else:
        pairs = entries

    counts: dict[object, float] = {}
    declared = set(keys)
    for key, count in pairs:
        if key not in declared:
            continue
        counts[key] = counts.get(key, 0.0) + float(count)

    last_index = len(keys) - 1
    rows = [
        {
            "bucket": key,
            "bucket_label": _bucket_label(key, index == last_index, overflow_label),
            "count": int(counts.get(key, 0)),
        }
        for index, key in enumerate(keys)
    ]
    return pd.DataFrame(rows, columns=HISTOGRAM_COLUMNS)


def duration_minutes(videos: pd.DataFrame) -> pd.Series:
    """Video durations in minutes; Short durations are stored in seconds."""
    durations = to_num_series(videos["duration"])
    shorts = is_short_video(videos["duration_type"])
    return durations.where(~shorts, durations / SECONDS_PER_MINUTE)


def bucket_video_durations(
    videos: pd.DataFrame,
    first_bucket: int = DEFAULT_FIRST_BUCKET,
    last_bucket: int = DEFAULT_LAST_BUCKET,
) -> dict[int, int]:
    minutes = duration_minutes(videos)
    minutes = minutes[minutes > 0]
    if minutes.empty:
        return {}
    buckets = np.clip(np.ceil(minutes.to_numpy(dtype=float)), first_bucket, last_bucket).astype(int)
    values, counts = np.unique(buckets, return_counts=True)
    return {int(value): int(count) for value, count in zip(values, counts)}


def duration_histogram(
    snapshot: Snapshot,
    first_bucket: int = DEFAULT_FIRST_BUCKET,
    last_bucket: int = DEFAULT_LAST_BUCKET,
) -> pd.DataFrame:
    """Videos per duration minute, preferring the precomputed histogram."""
    keys = list(range(first_bucket, last_bucket + 1))
    precomputed = snapshot.duration_histogram
    # An empty precomputed result means every bucket is 0.
    if precomputed is not None:
        LOGGER.info("Duration histogram: using %d precomputed rows", len(precomputed))
        entries = precomputed.assign(bucket=to_num_series(precomputed["bucket"]).astype(int))
        return densify_histogram(entries, keys)

    LOGGER.info("Duration histogram: deriving from %d video rows", len(snapshot.videos))
    return densify_histogram(
        bucket_video_durations(snapshot.videos, first_bucket, last_bucket),
        keys,
    )


def histogram_trend(rows: pd.DataFrame, order: int = 3) -> pd.DataFrame:
    """Add a polynomial ``trend`` column fitted over bucket position."""
    trended = rows.copy()
    counts = to_num_series(trended["count"]).to_numpy(dtype=float)
    if len(counts) < 2:
        trended["trend"] = counts
        return trended

    positions = np.arange(len(counts), dtype=float)
    degree = min(order, len(counts) - 1)
    coefficients = np.polyfit(positions, counts, deg=degree)
    fitted = np.polyval(coefficients, positions)
    trended["trend"] = [max(0.0, round_half_up(float(value), 1)) for value in fitted]
    return trended
