from __future__ import annotations

import numpy as np
import pandas as pd
import pytest

from creator_insights.analytics.regression import (
    REGRESSION_COLUMNS,
    build_regression_line,
    fit_power_law,
    subscriber_view_points,
)
from creator_insights.io.schema import normalize_creators


def _creators(total_views: list[object], subscribers: list[object]) -> pd.DataFrame:
    return normalize_creators(
        pd.DataFrame(
            {
                "channel_id": [f"c{index}" for index in range(len(total_views))],
                "total_views": total_views,
                "subscribers": subscribers,
            }
        )
    )


def test_fit_recovers_exact_power_law() -> None:
    x = np.array([10.0, 100.0, 1_000.0, 10_000.0])
    y = 3.0 * x**0.5

    fit = fit_power_law(x, y)

    assert fit is not None
    assert fit.coefficient == pytest.approx(3.0)
    assert fit.exponent == pytest.approx(0.5)
    assert fit.r_squared == pytest.approx(1.0)
    assert fit.n_points == 4


def test_fit_ignores_non_positive_pairs() -> None:
    fit = fit_power_law(np.array([0.0, -1.0, 10.0]), np.array([5.0, 5.0, 5.0]))

    assert fit is None


def test_identical_x_values_fall_back_to_geometric_mean() -> None:
    fit = fit_power_law(np.array([50.0, 50.0]), np.array([4.0, 16.0]))

    assert fit is not None
    assert fit.exponent == 0.0
    assert fit.coefficient == pytest.approx(8.0)


def test_single_point_gives_empty_line() -> None:
    line = build_regression_line(_creators([1_000], [10]))

    assert line.empty
    assert list(line.columns) == REGRESSION_COLUMNS


def test_line_spans_observed_range_in_log_space() -> None:
    creators = _creators([100, 1_000, 10_000, 0, "bad"], [10, 100, 1_000, 50, 5])

    line = build_regression_line(creators)

    assert len(line) == 51
    assert line["total_views"].iloc[0] == pytest.approx(100.0)
    assert line["total_views"].iloc[-1] == pytest.approx(10_000.0)
    assert line["total_views"].iloc[25] == pytest.approx(1_000.0)
    assert line["subscribers"].iloc[-1] == pytest.approx(1_000.0)
    ratios = line["total_views"].iloc[1:].to_numpy() / line["total_views"].iloc[:-1].to_numpy()
    assert np.allclose(ratios, ratios[0])


def test_predictions_are_floored() -> None:
    # Subscribers shrink as views grow, so the tail of the line falls below 1.
    creators = _creators([10, 1_000_000], [5, 0.001])
    points = subscriber_view_points(creators)
    assert len(points) == 2

    line = build_regression_line(creators, steps=10, min_prediction=1.0)

    assert len(line) == 11
    assert (line["subscribers"] >= 1.0).all()
    assert line["subscribers"].iloc[-1] == pytest.approx(1.0)


def test_subscriber_view_points_keeps_positive_pairs() -> None:
    creators = _creators([100, 0, 300], [10, 20, None])

    points = subscriber_view_points(creators)

    assert points["channel_id"].tolist() == ["c0"]
    assert points["name"].tolist() == ["c0"]
