from __future__ import annotations

from pathlib import Path

import pytest
import yaml
from pydantic import ValidationError

from creator_insights.config import AppConfig, load_config

DEFAULT_CONFIG = Path(__file__).resolve().parents[1] / "configs" / "default.yaml"


def test_default_config_matches_model_defaults(monkeypatch) -> None:
    monkeypatch.delenv("CREATOR_INSIGHTS_DB_URL", raising=False)
    monkeypatch.delenv("DATABASE_URL", raising=False)

    cfg = load_config(DEFAULT_CONFIG)
    defaults = AppConfig()

    assert cfg.cadence == defaults.cadence
    assert cfg.score == defaults.score
    assert cfg.regression.steps == 50
    assert cfg.histogram.last_bucket == 21
    assert cfg.leaderboards.top_n == 20
    assert cfg.input.mode == "files"
    assert cfg.input.db_url is None


def test_load_config_uses_env_db_url_for_input(monkeypatch, tmp_path: Path) -> None:
    config_path = tmp_path / "config.yaml"
    config_path.write_text(yaml.safe_dump({"input": {"mode": "postgres"}}), encoding="utf-8")
    monkeypatch.delenv("CREATOR_INSIGHTS_DB_URL", raising=False)
    monkeypatch.setenv("DATABASE_URL", "postgresql://fallback/db")

    assert load_config(config_path).input.db_url == "postgresql://fallback/db"

    monkeypatch.setenv("CREATOR_INSIGHTS_DB_URL", "postgresql://primary/db")
    assert load_config(config_path).input.db_url == "postgresql://primary/db"


def test_explicit_db_url_wins_over_env(monkeypatch, tmp_path: Path) -> None:
    config_path = tmp_path / "config.yaml"
    config_path.write_text(
        yaml.safe_dump({"input": {"mode": "postgres", "db_url": "postgresql://config/db"}}),
        encoding="utf-8",
    )
    monkeypatch.setenv("CREATOR_INSIGHTS_DB_URL", "postgresql://primary/db")

    assert load_config(config_path).input.db_url == "postgresql://config/db"


def test_empty_file_gives_defaults(tmp_path: Path) -> None:
    config_path = tmp_path / "config.yaml"
    config_path.write_text("", encoding="utf-8")

    assert load_config(config_path).outputs.tables_format == "parquet"


@pytest.mark.parametrize(
    "data",
    [
        {"unknown_section": {}},
        {"score": {"weights": {"subscribers": 0.9}}},
        {"cadence": {"thresholds": [{"min_per_week": 1, "label": "A"}, {"min_per_week": 2, "label": "B"}]}},
        {"cadence": {"thresholds": [{"min_per_week": 0, "label": "A"}]}},
        {"histogram": {"first_bucket": 5, "last_bucket": 2}},
        {"outputs": {"tables_format": "xlsx"}},
        {"input": {"mode": "graphql"}},
    ],
)
def test_invalid_config_is_rejected(data: dict) -> None:
    with pytest.raises(ValidationError):
        AppConfig.model_validate(data)
