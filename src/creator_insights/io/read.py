from __future__ import annotations

import json
import logging
from pathlib import Path
from typing import Any

import pandas as pd

from creator_insights.config import AppConfig
from creator_insights.io.postgres import load_snapshot_from_postgres
from creator_insights.io.schema import DashboardStats
from creator_insights.snapshot import Snapshot

LOGGER = logging.getLogger(__name__)

HISTOGRAM_BUCKET_COLUMNS = ("minute_bucket", "bucket")
HISTOGRAM_COUNT_COLUMNS = ("video_count", "count")


def extract_nodes(payload: Any) -> list[dict[str, Any]]:
    """Flatten a GraphQL connection (``{"edges": [{"node": ...}]}``) into rows.

    Plain lists of rows pass through, and a response wrapped in ``data`` or a
    single collection key is unwrapped first.
    """
    if isinstance(payload, list):
        return [dict(row) for row in payload]
    if not isinstance(payload, dict):
        raise ValueError(f"Unsupported row payload type: {type(payload).__name__}")
    if "edges" in payload:
        return [dict(edge.get("node") or {}) for edge in payload.get("edges") or []]
    if "data" in payload:
        return extract_nodes(payload["data"])
    collections = [value for value in payload.values() if isinstance(value, (dict, list))]
    if len(collections) == 1:
        return extract_nodes(collections[0])
    raise ValueError("JSON payload is neither a row list nor a single GraphQL connection")


def load_table(path: Path) -> pd.DataFrame:
    if path.suffix == ".parquet":
        return pd.read_parquet(path)
    if path.suffix == ".csv":
        # utf-8-sig strips a leading BOM from the header.
        return pd.read_csv(path, encoding="utf-8-sig")
    if path.suffix == ".json":
        payload = json.loads(path.read_text(encoding="utf-8"))
        return pd.DataFrame(extract_nodes(payload))
    raise ValueError(f"Unsupported table file type: {path.suffix}")


def load_dashboard_stats(path: Path | None) -> DashboardStats | None:
    if path is None:
        return None
    payload = json.loads(path.read_text(encoding="utf-8"))
    if isinstance(payload, list):
        if not payload:
            return None
        payload = payload[0]
    if not isinstance(payload, dict):
        raise ValueError(f"Dashboard stats must be a JSON object: {path}")
    return DashboardStats.from_mapping(payload)


def normalize_histogram_rows(rows: pd.DataFrame) -> pd.DataFrame:
    """Rename precomputed histogram rows onto ``bucket``/``count``."""
    bucket_column = next((c for c in HISTOGRAM_BUCKET_COLUMNS if c in rows.columns), None)
    count_column = next((c for c in HISTOGRAM_COUNT_COLUMNS if c in rows.columns), None)
    if bucket_column is None or count_column is None:
        raise ValueError(
            "Histogram rows need a bucket column "
            f"({', '.join(HISTOGRAM_BUCKET_COLUMNS)}) and a count column "
            f"({', '.join(HISTOGRAM_COUNT_COLUMNS)})"
        )
    return rows.rename(columns={bucket_column: "bucket", count_column: "count"}).loc[
        :, ["bucket", "count"]
    ]


def load_histogram(path: Path | None) -> pd.DataFrame | None:
    if path is None:
        return None
    return normalize_histogram_rows(load_table(path))


def load_snapshot(
    config: AppConfig,
    creators_path: Path | None = None,
    videos_path: Path | None = None,
    stats_path: Path | None = None,
    histogram_path: Path | None = None,
) -> Snapshot:
    """Load a snapshot from files or PostgreSQL, depending on ``input.mode``."""
    if config.input.mode == "postgres":
        if not config.input.db_url:
            raise ValueError("input.db_url must be set when input.mode is 'postgres'")
        return load_snapshot_from_postgres(
            db_url=config.input.db_url,
            schema=config.input.db_schema,
            creators_table=config.input.creators_table,
            videos_table=config.input.videos_table,
            stats_function=config.input.stats_function,
            histogram_function=config.input.histogram_function,
        )

    if creators_path is None or videos_path is None:
        raise ValueError("creators_path and videos_path are required when input.mode is 'files'")

    creators = load_table(creators_path)
    videos = load_table(videos_path)
    LOGGER.info("Loaded %d creator rows and %d video rows", len(creators), len(videos))
    return Snapshot.from_frames(
        creators,
        videos,
        dashboard_stats=load_dashboard_stats(stats_path),
        duration_histogram=load_histogram(histogram_path),
    )
