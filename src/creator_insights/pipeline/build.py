from __future__ import annotations

import logging
from dataclasses import dataclass, field
from pathlib import Path
from typing import Any

import pandas as pd

from creator_insights import __version__
from creator_insights.analytics.cadence import thresholds_from_config
from creator_insights.analytics.composite_score import build_score_rows
from creator_insights.analytics.content_mix import (
    avg_views_split,
    content_mix_points,
    duration_view_points,
    video_length_points,
)
from creator_insights.analytics.groups import (
    cadence_performance,
    content_type_engagement,
    niche_performance,
    revenue_tier_metrics,
)
from creator_insights.analytics.histogram import duration_histogram, histogram_trend
from creator_insights.analytics.overview import build_overview, creator_leaderboards
from creator_insights.analytics.profiles import radar_comparison, radar_profiles, threat_matrix
from creator_insights.analytics.regression import build_regression_line, subscriber_view_points
from creator_insights.analytics.revenue import (
    monetization_diversity,
    monetization_stack,
    revenue_tier_breakdown,
)
from creator_insights.analytics.video_stats import VideoStats, build_video_stats, video_stats_frame
from creator_insights.config import AppConfig
from creator_insights.io.read import load_snapshot
from creator_insights.io.write import write_summary, write_tables
from creator_insights.paths import build_output_paths
from creator_insights.snapshot import Snapshot

LOGGER = logging.getLogger(__name__)


@dataclass
class DashboardBuild:
    """Every derived table for one snapshot, plus the run summary."""

    fingerprint: str
    video_stats: dict[str, VideoStats]
    tables: dict[str, pd.DataFrame]
    overview: dict[str, Any]
    table_paths: dict[str, Path] = field(default_factory=dict)

    def summary(self) -> dict[str, Any]:
        return {
            "version": __version__,
            "snapshot_fingerprint": self.fingerprint,
            "overview": self.overview,
            "tables": {name: int(len(table)) for name, table in self.tables.items()},
            "table_paths": {name: str(path) for name, path in self.table_paths.items()},
        }


def compute_video_stats(snapshot: Snapshot, config: AppConfig) -> dict[str, VideoStats]:
    return build_video_stats(
        snapshot.videos,
        creator_ids=snapshot.creator_ids,
        thresholds=thresholds_from_config(config.cadence),
        floor_label=config.cadence.floor_label,
    )


def build_dashboard_tables(snapshot: Snapshot, config: AppConfig) -> DashboardBuild:
    """Recompute every dashboard table from ``snapshot``; no I/O."""
    creators = snapshot.creators
    videos = snapshot.videos
    LOGGER.info(
        "Building dashboard tables for %d creators and %d videos",
        len(creators),
        len(videos),
    )

    video_stats = compute_video_stats(snapshot, config)
    histogram = duration_histogram(
        snapshot,
        first_bucket=config.histogram.first_bucket,
        last_bucket=config.histogram.last_bucket,
    )

    profiles = radar_profiles(creators, video_stats)
    tables: dict[str, pd.DataFrame] = {
        "video_stats": video_stats_frame(video_stats),
        "score_rows": build_score_rows(creators, video_stats, weights=config.score.weights),
        "regression_line": build_regression_line(
            creators,
            steps=config.regression.steps,
            min_prediction=config.regression.min_prediction,
        ),
        "subscriber_view_points": subscriber_view_points(creators),
        "cadence_performance": cadence_performance(creators),
        "niche_performance": niche_performance(creators, video_stats),
        "revenue_tier_metrics": revenue_tier_metrics(creators, video_stats),
        "content_type_engagement": content_type_engagement(creators, video_stats),
        "duration_histogram": histogram_trend(histogram, order=config.histogram.trend_order),
        "avg_views_split": avg_views_split(creators, video_stats),
        "content_mix_points": content_mix_points(creators, videos),
        "duration_view_points": duration_view_points(creators, videos),
        "video_length_points": video_length_points(creators),
        "revenue_tier_breakdown": revenue_tier_breakdown(creators),
        "monetization_stack": monetization_stack(creators),
        "monetization_diversity": monetization_diversity(creators),
        "radar_profiles": profiles,
        "radar_comparison": radar_comparison(profiles),
        "threat_matrix": threat_matrix(creators, video_stats),
    }
    for name, table in creator_leaderboards(
        creators, videos, top_n=config.leaderboards.top_n
    ).items():
        tables[f"leaderboard_{name}"] = table

    return DashboardBuild(
        fingerprint=snapshot.fingerprint(),
        video_stats=video_stats,
        tables=tables,
        overview=build_overview(videos, snapshot.dashboard_stats),
    )


def write_dashboard(build: DashboardBuild, out_dir: Path, config: AppConfig) -> Path:
    paths = build_output_paths(out_dir)
    build.table_paths = write_tables(build.tables, paths.tables, fmt=config.outputs.tables_format)
    summary_path = write_summary(build.summary(), paths.summary_file)
    LOGGER.info("Wrote %d tables to %s", len(build.table_paths), paths.tables)
    return summary_path


def run_build(
    config: AppConfig,
    out_dir: Path,
    *,
    creators_path: Path | None = None,
    videos_path: Path | None = None,
    stats_path: Path | None = None,
    histogram_path: Path | None = None,
) -> DashboardBuild:
    snapshot = load_snapshot(
        config,
        creators_path=creators_path,
        videos_path=videos_path,
        stats_path=stats_path,
        histogram_path=histogram_path,
    )
    build = build_dashboard_tables(snapshot, config)
    summary_path = write_dashboard(build, out_dir=out_dir, config=config)
    LOGGER.info("Summary written to %s", summary_path)
    return build
