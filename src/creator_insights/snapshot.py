from __future__ import annotations

from dataclasses import dataclass, field
from hashlib import sha256

import pandas as pd

from creator_insights.io.schema import (
    DashboardStats,
    empty_creators,
    empty_videos,
    normalize_creators,
    normalize_videos,
)


@dataclass(frozen=True)
class Snapshot:
    """One load of creator and video rows plus any precomputed aggregates.

    Every derived table is rebuilt from a snapshot; nothing carries over
    between snapshots.
    """

    creators: pd.DataFrame = field(default_factory=empty_creators)
    videos: pd.DataFrame = field(default_factory=empty_videos)
    dashboard_stats: DashboardStats | None = None
    duration_histogram: pd.DataFrame | None = None

    @classmethod
    def from_frames(
        cls,
        creators: pd.DataFrame,
        videos: pd.DataFrame,
        *,
        dashboard_stats: DashboardStats | None = None,
        duration_histogram: pd.DataFrame | None = None,
    ) -> "Snapshot":
        return cls(
            creators=normalize_creators(creators),
            videos=normalize_videos(videos),
            dashboard_stats=dashboard_stats,
            duration_histogram=duration_histogram,
        )

    @property
    def creator_ids(self) -> set[str]:
        return set(self.creators["channel_id"].tolist())

    def fingerprint(self) -> str:
        hasher = sha256()
        for frame in (self.creators, self.videos, self.duration_histogram):
            if frame is None or frame.empty:
                hasher.update(b"-")
                continue
            hashable = frame.astype(str)
            hasher.update(pd.util.hash_pandas_object(hashable, index=False).values.tobytes())
        hasher.update(repr(self.dashboard_stats).encode("utf-8"))
        return hasher.hexdigest()
