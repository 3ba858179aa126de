from __future__ import annotations

import json
from pathlib import Path
from typing import Any, Mapping

import pandas as pd


def _csv_ready(df: pd.DataFrame) -> pd.DataFrame:
    list_columns = [
        column
        for column in df.columns
        if df[column].map(lambda item: isinstance(item, (list, tuple))).any()
    ]
    if not list_columns:
        return df
    flattened = df.copy()
    for column in list_columns:
        flattened[column] = flattened[column].map(
            lambda item: ",".join(str(part) for part in item)
            if isinstance(item, (list, tuple))
            else item
        )
    return flattened


def write_table(df: pd.DataFrame, path: Path, fmt: str = "parquet") -> Path:
    path.parent.mkdir(parents=True, exist_ok=True)
    if fmt == "parquet":
        df.to_parquet(path, index=False)
        return path
    if fmt == "csv":
        _csv_ready(df).to_csv(path, index=False)
        return path
    raise ValueError(f"Unsupported table format: {fmt}")


def write_tables(
    tables: Mapping[str, pd.DataFrame],
    directory: Path,
    fmt: str = "parquet",
) -> dict[str, Path]:
    extension = "parquet" if fmt == "parquet" else "csv"
    return {
        name: write_table(table, directory / f"{name}.{extension}", fmt=fmt)
        for name, table in tables.items()
    }


def write_summary(data: dict[str, Any], path: Path) -> Path:
    path.parent.mkdir(parents=True, exist_ok=True)
    path.write_text(json.dumps(data, indent=2, sort_keys=True, default=str), encoding="utf-8")
    return path
