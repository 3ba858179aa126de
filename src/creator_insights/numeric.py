from __future__ import annotations

import math
from typing import Any

import numpy as np
import pandas as pd


def to_num(value: Any) -> float:
    """Coerce a wire value to a finite float, falling back to 0."""
    if value is None:
        return 0.0
    if isinstance(value, bool):
        return float(value)
    if isinstance(value, str):
        value = value.strip()
        if not value:
            return 0.0
    try:
        number = float(value)
    except (TypeError, ValueError):
        return 0.0
    if not math.isfinite(number):
        return 0.0
    return number


def to_num_series(values: pd.Series | np.ndarray | list[Any]) -> pd.Series:
    """Vectorized ``to_num``: non-numeric, missing and infinite values become 0."""
    if not isinstance(values, pd.Series):
        values = pd.Series(list(values), dtype=object)
    if values.dtype == object:
        values = values.map(lambda item: item.strip() if isinstance(item, str) else item)
    numeric = pd.to_numeric(values, errors="coerce").astype(float)
    return numeric.where(np.isfinite(numeric), 0.0).fillna(0.0)


def round_half_up(value: float, digits: int = 0) -> float:
    # Dashboard figures round .5 upward, unlike Python's banker's rounding.
    scale = 10.0**digits
    return math.floor(value * scale + 0.5) / scale


def mean_or_none(values: pd.Series) -> float | None:
    if values.empty:
        return None
    return float(values.mean())
