from __future__ import annotations

import math
from dataclasses import dataclass

import numpy as np
import pandas as pd
from scipy.stats import linregress

from creator_insights.numeric import to_num_series

REGRESSION_COLUMNS = ["total_views", "subscribers"]
POINT_COLUMNS = ["name", "channel_id", "total_views", "subscribers"]
DEFAULT_STEPS = 50


@dataclass(frozen=True)
class PowerLawFit:
    """``y = coefficient * x ** exponent``."""

    coefficient: float
    exponent: float
    r_squared: float | None
    n_points: int

    def predict(self, x: np.ndarray | float) -> np.ndarray:
        return self.coefficient * np.power(np.asarray(x, dtype=float), self.exponent)


def fit_power_law(x: np.ndarray, y: np.ndarray) -> PowerLawFit | None:
    """Least-squares fit of ``ln y`` on ``ln x``; needs two or more positive pairs."""
    x = np.asarray(x, dtype=float)
    y = np.asarray(y, dtype=float)
    valid = np.isfinite(x) & np.isfinite(y) & (x > 0) & (y > 0)
    x, y = x[valid], y[valid]
    if x.size < 2:
        return None

    log_x = np.log(x)
    log_y = np.log(y)
    if np.allclose(log_x, log_x[0]):
        # Degenerate x range: the least-squares power law is flat at the geometric mean.
        return PowerLawFit(
            coefficient=float(math.exp(log_y.mean())),
            exponent=0.0,
            r_squared=None,
            n_points=int(x.size),
        )

    result = linregress(log_x, log_y)
    return PowerLawFit(
        coefficient=float(math.exp(result.intercept)),
        exponent=float(result.slope),
        r_squared=float(result.rvalue**2),
        n_points=int(x.size),
    )


def subscriber_view_points(creators: pd.DataFrame) -> pd.DataFrame:
    """Creators with positive total views and subscribers, as scatter points."""
    if creators.empty:
        return pd.DataFrame(columns=POINT_COLUMNS)
    points = pd.DataFrame(
        {
            "name": creators["title"].astype(str),
            "channel_id": creators["channel_id"].astype(str),
            "total_views": to_num_series(creators["total_views"]),
            "subscribers": to_num_series(creators["subscribers"]),
        }
    )
    points = points[(points["total_views"] > 0) & (points["subscribers"] > 0)]
    return points.reset_index(drop=True)


def sample_power_law(
    fit: PowerLawFit,
    min_x: float,
    max_x: float,
    steps: int = DEFAULT_STEPS,
    min_prediction: float = 1.0,
) -> pd.DataFrame:
    """``steps + 1`` points evenly spaced in log10 space between ``min_x`` and ``max_x``."""
    x_values = np.logspace(math.log10(min_x), math.log10(max_x), num=steps + 1)
    predicted = np.maximum(fit.predict(x_values), min_prediction)
    return pd.DataFrame({"total_views": x_values, "subscribers": predicted})


def build_regression_line(
    creators: pd.DataFrame,
    steps: int = DEFAULT_STEPS,
    min_prediction: float = 1.0,
) -> pd.DataFrame:
    """Power-law overlay of subscribers against total views for plotting."""
    points = subscriber_view_points(creators)
    fit = fit_power_law(points["total_views"].to_numpy(), points["subscribers"].to_numpy())
    if fit is None:
        return pd.DataFrame(columns=REGRESSION_COLUMNS)
    return sample_power_law(
        fit,
        min_x=float(points["total_views"].min()),
        max_x=float(points["total_views"].max()),
        steps=steps,
        min_prediction=min_prediction,
    )
