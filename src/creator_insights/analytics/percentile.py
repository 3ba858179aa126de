from __future__ import annotations

from bisect import bisect_left
from collections.abc import Sequence

import numpy as np
import pandas as pd

from creator_insights.numeric import round_half_up


def percentile(value: float, population: Sequence[float] | np.ndarray | pd.Series) -> int:
    """Rank-based percentile (0-100) of ``value`` within ``population``.

    The rank is the number of population members strictly below ``value``, so
    ties share a rank and the population maximum never reaches 100. No
    interpolation.
    """
    ordered = sorted(float(item) for item in population)
    if not ordered:
        return 0
    rank = bisect_left(ordered, float(value))
    return int(round_half_up(rank / len(ordered) * 100.0))


def percentile_ranks(values: pd.Series) -> pd.Series:
    """Percentile of every member of ``values`` against the whole series."""
    if values.empty:
        return pd.Series([], index=values.index, dtype=int)
    ordered = np.sort(values.to_numpy(dtype=float))
    ranks = np.searchsorted(ordered, values.to_numpy(dtype=float), side="left")
    scaled = ranks / float(len(ordered)) * 100.0
    return pd.Series(np.floor(scaled + 0.5).astype(int), index=values.index)
