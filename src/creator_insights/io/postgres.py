from __future__ import annotations

import logging

import pandas as pd

from creator_insights.io.schema import CREATOR_COLUMNS, VIDEO_COLUMNS, DashboardStats
from creator_insights.snapshot import Snapshot

LOGGER = logging.getLogger(__name__)

DASHBOARD_STATS_COLUMNS = [
    "total_views",
    "total_likes",
    "total_comments",
    "total_duration",
    "short_count",
    "full_count",
    "with_transcript",
    "total_videos",
]
HISTOGRAM_COLUMNS = ["minute_bucket", "video_count"]


def _load_psycopg():
    try:
        import psycopg
        from psycopg import sql
    except ImportError as exc:  # pragma: no cover
        raise RuntimeError(
            "psycopg is required for PostgreSQL operations. "
            "Install with: pip install 'psycopg[binary]'"
        ) from exc
    return psycopg, sql


def _select_columns(sql, columns: list[str]):
    return sql.SQL(", ").join(sql.Identifier(column) for column in columns)


def _fetch_table(conn, sql, schema: str, table_name: str, columns: list[str]) -> pd.DataFrame:
    query = sql.SQL("SELECT {columns} FROM {table_name}").format(
        columns=_select_columns(sql, columns),
        table_name=sql.Identifier(schema, table_name),
    )
    with conn.cursor() as cursor:
        cursor.execute(query)
        rows = cursor.fetchall()
    return pd.DataFrame(rows, columns=columns)


def _fetch_function_rows(
    conn,
    psycopg,
    sql,
    schema: str,
    function_name: str,
    columns: list[str],
) -> pd.DataFrame | None:
    """Read rows from a set-returning aggregate function.

    A failing function only disables the precomputed path; callers fall back
    to deriving the same statistic from raw rows.
    """
    query = sql.SQL("SELECT {columns} FROM {function_name}()").format(
        columns=_select_columns(sql, columns),
        function_name=sql.Identifier(schema, function_name),
    )
    try:
        with conn.cursor() as cursor:
            cursor.execute(query)
            rows = cursor.fetchall()
    except psycopg.Error:
        LOGGER.warning("Aggregate function %s.%s failed", schema, function_name, exc_info=True)
        conn.rollback()
        return None
    return pd.DataFrame(rows, columns=columns)


def load_snapshot_from_postgres(
    db_url: str,
    schema: str = "research",
    creators_table: str = "youtube_creators",
    videos_table: str = "youtube_videos",
    stats_function: str | None = "get_youtube_dashboard_stats",
    histogram_function: str | None = "get_video_duration_histogram",
) -> Snapshot:
    psycopg, sql = _load_psycopg()
    with psycopg.connect(db_url) as conn:
        creators = _fetch_table(conn, sql, schema, creators_table, CREATOR_COLUMNS)
        videos = _fetch_table(conn, sql, schema, videos_table, VIDEO_COLUMNS)

        dashboard_stats: DashboardStats | None = None
        if stats_function:
            stats_rows = _fetch_function_rows(
                conn, psycopg, sql, schema, stats_function, DASHBOARD_STATS_COLUMNS
            )
            if stats_rows is not None and not stats_rows.empty:
                dashboard_stats = DashboardStats.from_mapping(stats_rows.iloc[0].to_dict())

        duration_histogram: pd.DataFrame | None = None
        if histogram_function:
            histogram_rows = _fetch_function_rows(
                conn, psycopg, sql, schema, histogram_function, HISTOGRAM_COLUMNS
            )
            if histogram_rows is not None:
                duration_histogram = histogram_rows.rename(
                    columns={"minute_bucket": "bucket", "video_count": "count"}
                )

    LOGGER.info(
        "Loaded %d creator rows and %d video rows from %s",
        len(creators),
        len(videos),
        schema,
    )
    return Snapshot.from_frames(
        creators,
        videos,
        dashboard_stats=dashboard_stats,
        duration_histogram=duration_histogram,
    )
