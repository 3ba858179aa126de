from __future__ import annotations

import pandas as pd
import pytest

from creator_insights.analytics.histogram import (
    HISTOGRAM_COLUMNS,
    bucket_video_durations,
    densify_histogram,
    duration_histogram,
    duration_minutes,
    histogram_trend,
)
from creator_insights.io.schema import normalize_videos
from creator_insights.snapshot import Snapshot


def _videos() -> pd.DataFrame:
    return normalize_videos(
        pd.DataFrame(
            {
                "channel_id": ["c1"] * 6,
                "duration": [45, 0.5, 3.2, 30, 90, None],
                "duration_type": ["Short", "Full", "Full", "Full", "Full", "Full"],
            }
        )
    )


def test_densify_fills_every_declared_key() -> None:
    table = densify_histogram({2: 5, 4: 1, 99: 7}, keys=list(range(1, 6)))

    assert list(table.columns) == HISTOGRAM_COLUMNS
    assert table["bucket"].tolist() == [1, 2, 3, 4, 5]
    assert table["count"].tolist() == [0, 5, 0, 1, 0]
    assert table["bucket_label"].tolist() == ["1", "2", "3", "4", "5+"]


def test_densify_without_overflow_label_and_with_frame_input() -> None:
    entries = pd.DataFrame({"bucket": ["a", "c", "c"], "count": [1, "2", 3]})

    table = densify_histogram(entries, keys=["a", "b", "c"], overflow_label=False)

    assert table["count"].tolist() == [1, 0, 5]
    assert table["bucket_label"].tolist() == ["a", "b", "c"]


def test_densify_with_no_entries_is_all_zero() -> None:
    table = densify_histogram([], keys=list(range(1, 22)))

    assert len(table) == 21
    assert table["count"].sum() == 0
    assert table["bucket_label"].iloc[-1] == "21+"


def test_short_durations_convert_from_seconds() -> None:
    minutes = duration_minutes(_videos())

    assert minutes.iloc[0] == pytest.approx(0.75)
    assert minutes.iloc[3] == pytest.approx(30.0)


def test_bucket_video_durations_ceils_and_clips() -> None:
    buckets = bucket_video_durations(_videos(), first_bucket=1, last_bucket=21)

    # 0.75 and 0.5 -> 1, 3.2 -> 4, 30 and 90 -> 21; missing duration is skipped.
    assert buckets == {1: 2, 4: 1, 21: 2}


def test_duration_histogram_prefers_precomputed_rows() -> None:
    precomputed = pd.DataFrame({"bucket": [1, 3, 25], "count": [7, "2", 9]})
    snapshot = Snapshot.from_frames(
        pd.DataFrame({"channel_id": ["c1"]}),
        _videos(),
        duration_histogram=precomputed,
    )

    table = duration_histogram(snapshot)

    assert len(table) == 21
    assert table["count"].iloc[0] == 7
    assert table["count"].iloc[2] == 2
    assert table["count"].sum() == 9


def test_empty_precomputed_histogram_is_all_zero() -> None:
    snapshot = Snapshot.from_frames(
        pd.DataFrame({"channel_id": ["c1"]}),
        _videos(),
        duration_histogram=pd.DataFrame({"bucket": [], "count": []}),
    )

    table = duration_histogram(snapshot, first_bucket=1, last_bucket=5)

    assert table["count"].tolist() == [0, 0, 0, 0, 0]


def test_duration_histogram_derives_from_videos_without_precomputed_rows() -> None:
    snapshot = Snapshot.from_frames(pd.DataFrame({"channel_id": ["c1"]}), _videos())

    table = duration_histogram(snapshot, first_bucket=1, last_bucket=5)

    assert table["count"].tolist() == [2, 0, 0, 1, 2]
    assert table["bucket_label"].iloc[-1] == "5+"


def test_histogram_trend_fits_and_clips() -> None:
    rows = densify_histogram({1: 1, 2: 4, 3: 9, 4: 16, 5: 25}, keys=[1, 2, 3, 4, 5])

    trended = histogram_trend(rows, order=3)

    assert trended["trend"].tolist() == pytest.approx([1.0, 4.0, 9.0, 16.0, 25.0])
    assert "count" in trended.columns

    falling = densify_histogram({1: 10, 2: 0, 3: 0}, keys=[1, 2, 3])
    assert (histogram_trend(falling, order=1)["trend"] >= 0).all()


def test_histogram_trend_with_single_row_copies_counts() -> None:
    rows = densify_histogram({1: 3}, keys=[1])

    assert histogram_trend(rows)["trend"].tolist() == [3.0]
