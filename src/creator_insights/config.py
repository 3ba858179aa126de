from __future__ import annotations

import math
import os
from pathlib import Path
from typing import Literal

import yaml
from pydantic import BaseModel, ConfigDict, Field, model_validator

DEFAULT_CADENCE_THRESHOLDS = [
    (5.0, "Daily"),
    (3.0, "3-4x/wk"),
    (1.5, "2x/wk"),
    (0.8, "Weekly"),
    (0.4, "Bi-Weekly"),
]


class CadenceThreshold(BaseModel):
    min_per_week: float = Field(gt=0.0)
    label: str


class CadenceConfig(BaseModel):
    thresholds: list[CadenceThreshold] = Field(
        default_factory=lambda: [
            CadenceThreshold(min_per_week=value, label=label)
            for value, label in DEFAULT_CADENCE_THRESHOLDS
        ]
    )
    floor_label: str = "Monthly"

    @model_validator(mode="after")
    def _thresholds_descending(self) -> "CadenceConfig":
        values = [threshold.min_per_week for threshold in self.thresholds]
        if values != sorted(values, reverse=True):
            raise ValueError("cadence.thresholds must be ordered by descending min_per_week")
        return self


class ScoreWeightsConfig(BaseModel):
    subscribers: float = Field(default=0.30, ge=0.0, le=1.0)
    engagement: float = Field(default=0.30, ge=0.0, le=1.0)
    views_to_sub_ratio: float = Field(default=0.20, ge=0.0, le=1.0)
    volume: float = Field(default=0.20, ge=0.0, le=1.0)

    @model_validator(mode="after")
    def _weights_sum_to_one(self) -> "ScoreWeightsConfig":
        total = self.subscribers + self.engagement + self.views_to_sub_ratio + self.volume
        if not math.isclose(total, 1.0, abs_tol=1e-9):
            raise ValueError(f"score.weights must sum to 1.0 (got {total:.6f})")
        return self


class ScoreConfig(BaseModel):
    weights: ScoreWeightsConfig = Field(default_factory=ScoreWeightsConfig)


class RegressionConfig(BaseModel):
    steps: int = Field(default=50, ge=1)
    min_prediction: float = Field(default=1.0, ge=0.0)


class HistogramConfig(BaseModel):
    first_bucket: int = Field(default=1, ge=0)
    last_bucket: int = Field(default=21, ge=1)
    trend_order: int = Field(default=3, ge=1, le=6)

    @model_validator(mode="after")
    def _range_is_ordered(self) -> "HistogramConfig":
        if self.last_bucket < self.first_bucket:
            raise ValueError("histogram.last_bucket must be >= histogram.first_bucket")
        return self


class LeaderboardsConfig(BaseModel):
    top_n: int = Field(default=20, ge=1)


class InputConfig(BaseModel):
    mode: Literal["files", "postgres"] = "files"
    db_url: str | None = None
    db_schema: str = "research"
    creators_table: str = "youtube_creators"
    videos_table: str = "youtube_videos"
    stats_function: str | None = "get_youtube_dashboard_stats"
    histogram_function: str | None = "get_video_duration_histogram"


class OutputsConfig(BaseModel):
    tables_format: Literal["parquet", "csv"] = "parquet"


class AppConfig(BaseModel):
    model_config = ConfigDict(extra="forbid")

    input: InputConfig = Field(default_factory=InputConfig)
    cadence: CadenceConfig = Field(default_factory=CadenceConfig)
    score: ScoreConfig = Field(default_factory=ScoreConfig)
    regression: RegressionConfig = Field(default_factory=RegressionConfig)
    histogram: HistogramConfig = Field(default_factory=HistogramConfig)
    leaderboards: LeaderboardsConfig = Field(default_factory=LeaderboardsConfig)
    outputs: OutputsConfig = Field(default_factory=OutputsConfig)


DEFAULT_CONFIG_PATH = Path("configs/default.yaml")


def load_config(path: Path) -> AppConfig:
    with path.open("r", encoding="utf-8") as handle:
        data = yaml.safe_load(handle) or {}

    config = AppConfig.model_validate(data)
    config.input.db_url = (
        config.input.db_url
        or os.getenv("CREATOR_INSIGHTS_DB_URL")
        or os.getenv("DATABASE_URL")
    )
    return config
