from __future__ import annotations

import pandas as pd
import pytest

from creator_insights.analytics.content_mix import (
    avg_views_split,
    content_mix_points,
    duration_view_points,
    video_length_points,
)
from creator_insights.analytics.video_stats import build_video_stats
from creator_insights.io.schema import normalize_creators, normalize_videos


def _creators() -> pd.DataFrame:
    return normalize_creators(
        pd.DataFrame(
            {
                "channel_id": ["a", "b", "c"],
                "title": ["Alpha", "Beta", "Gamma"],
                "total_views": [5_000, 0, 900],
                "subscribers": [100, 10, 0],
                "typical_video_length": [12, None, 4],
                "avg_views_per_video": [250, 10, 0],
                "top_content_type": ["Gaming", None, "Music"],
            }
        )
    )


def _videos() -> pd.DataFrame:
    return normalize_videos(
        pd.DataFrame(
            {
                "channel_id": ["a", "a", "a", "b", "zz"],
                "views": [100, 300, 200, 0, 40],
                "duration": [30, 12.346, 0, 5, 2],
                "duration_type": ["Short", "Full", "Full", "Short", "Full"],
            }
        )
    )


def test_avg_views_split_drops_creators_without_views() -> None:
    table = avg_views_split(_creators(), build_video_stats(_videos()))

    assert table["name"].tolist() == ["Alpha"]
    assert table["avg_views_short"].tolist() == [100.0]
    assert table["avg_views_full"].tolist() == [250.0]


def test_content_mix_points_short_share() -> None:
    table = content_mix_points(_creators(), _videos())

    # Beta has no total views and Gamma has no videos.
    assert table["channel_id"].tolist() == ["a"]
    assert table["short_ratio"].tolist() == [33]
    assert table["subscribers"].tolist() == [100.0]


def test_duration_view_points_converts_short_seconds() -> None:
    table = duration_view_points(_creators(), _videos())

    assert table["duration"].tolist() == [0.5, 12.35, 2.0]
    assert table["name"].tolist() == ["Alpha", "Alpha", "Unknown"]


@pytest.mark.parametrize(
    ("duration_filter", "expected"),
    [("Short", ["Short"]), ("Full", ["Full", "Full"])],
)
def test_duration_view_points_filter(duration_filter: str, expected: list[str]) -> None:
    table = duration_view_points(_creators(), _videos(), duration_filter)

    assert table["duration_type"].tolist() == expected


def test_duration_view_points_rejects_unknown_filter() -> None:
    with pytest.raises(ValueError, match="duration filter"):
        duration_view_points(_creators(), _videos(), "Medium")  # type: ignore[arg-type]


def test_video_length_points() -> None:
    table = video_length_points(_creators())

    assert table["channel_id"].tolist() == ["a"]
    assert table["niche"].tolist() == ["Gaming"]
