from __future__ import annotations

from datetime import datetime
from pathlib import Path

import typer

from creator_insights.analytics.cadence import classify_cadence, thresholds_from_config
from creator_insights.analytics.composite_score import build_score_rows
from creator_insights.config import DEFAULT_CONFIG_PATH, AppConfig, load_config
from creator_insights.io.read import load_snapshot
from creator_insights.logging import configure_logging
from creator_insights.paths import build_output_paths
from creator_insights.pipeline.build import compute_video_stats, run_build
from creator_insights.snapshot import Snapshot

app = typer.Typer(no_args_is_help=True, add_completion=False)

DATE_FORMATS = ["%Y-%m-%d", "%Y-%m-%dT%H:%M:%S", "%Y-%m-%d %H:%M:%S"]


def _load_app_config(config_path: Path) -> AppConfig:
    return load_config(config_path)


def _require_files_for_files_mode(
    creators: Path | None,
    videos: Path | None,
    cfg: AppConfig,
) -> None:
    if cfg.input.mode == "files" and (creators is None or videos is None):
        raise typer.BadParameter(
            "Missing --creators/--videos. Required when input.mode='files'. "
            "Set input.mode='postgres' and configure input.db_url to read from Postgres."
        )


def _load_snapshot(
    cfg: AppConfig,
    creators: Path | None,
    videos: Path | None,
    stats: Path | None = None,
    duration_histogram: Path | None = None,
) -> Snapshot:
    _require_files_for_files_mode(creators, videos, cfg)
    try:
        return load_snapshot(
            cfg,
            creators_path=creators,
            videos_path=videos,
            stats_path=stats,
            histogram_path=duration_histogram,
        )
    except ValueError as exc:
        raise typer.BadParameter(str(exc)) from exc


@app.command()
def build(
    creators: Path | None = typer.Option(None, exists=True, readable=True, resolve_path=True),
    videos: Path | None = typer.Option(None, exists=True, readable=True, resolve_path=True),
    stats: Path | None = typer.Option(
        None,
        exists=True,
        readable=True,
        resolve_path=True,
        help="Optional precomputed dashboard totals (JSON object or single-row list).",
    ),
    duration_histogram: Path | None = typer.Option(
        None,
        exists=True,
        readable=True,
        resolve_path=True,
        help="Optional precomputed duration histogram (minute_bucket, video_count rows).",
    ),
    out: Path = typer.Option(Path("out"), resolve_path=True),
    config: Path = typer.Option(DEFAULT_CONFIG_PATH, exists=True, readable=True, resolve_path=True),
) -> None:
    """Compute every dashboard table and write them with a run summary."""
    configure_logging()
    cfg = _load_app_config(config)
    _require_files_for_files_mode(creators, videos, cfg)
    paths = build_output_paths(out, create=False)
    try:
        result = run_build(
            cfg,
            paths.root,
            creators_path=creators,
            videos_path=videos,
            stats_path=stats,
            histogram_path=duration_histogram,
        )
    except ValueError as exc:
        raise typer.BadParameter(str(exc)) from exc
    typer.echo("Build complete")
    typer.echo(f"- snapshot_fingerprint: {result.fingerprint}")
    typer.echo(f"- tables: {len(result.tables)}")
    typer.echo(f"- output_dir: {paths.tables}")


@app.command()
def rank(
    creators: Path | None = typer.Option(None, exists=True, readable=True, resolve_path=True),
    videos: Path | None = typer.Option(None, exists=True, readable=True, resolve_path=True),
    config: Path = typer.Option(DEFAULT_CONFIG_PATH, exists=True, readable=True, resolve_path=True),
    top: int = typer.Option(10, min=1, help="Number of creators to print."),
) -> None:
    """Print the composite-score ranking."""
    configure_logging()
    cfg = _load_app_config(config)
    snapshot = _load_snapshot(cfg, creators, videos)
    video_stats = compute_video_stats(snapshot, cfg)
    scores = build_score_rows(snapshot.creators, video_stats, weights=cfg.score.weights)
    if scores.empty:
        typer.echo("No creators to rank")
        return
    for position, row in enumerate(scores.head(top).itertuples(index=False), start=1):
        typer.echo(f"{position}. {row.name} ({row.channel_id}): {row.total:.1f}")


@app.command()
def cadence(
    count: int = typer.Option(..., min=0, help="Number of uploads in the window."),
    first: datetime = typer.Option(..., formats=DATE_FORMATS, help="Earliest publish date."),
    last: datetime = typer.Option(..., formats=DATE_FORMATS, help="Latest publish date."),
    config: Path = typer.Option(DEFAULT_CONFIG_PATH, exists=True, readable=True, resolve_path=True),
) -> None:
    """Classify one upload cadence."""
    configure_logging()
    cfg = _load_app_config(config)
    label = classify_cadence(
        count,
        first,
        last,
        thresholds=thresholds_from_config(cfg.cadence),
        floor_label=cfg.cadence.floor_label,
    )
    typer.echo(label if label is not None else "insufficient data")


if __name__ == "__main__":
    app()
