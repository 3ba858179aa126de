from __future__ import annotations

import numpy as np
import pandas as pd
import pytest

from creator_insights.numeric import (
    mean_or_none,
    round_half_up,
    to_num,
    to_num_series,
)


@pytest.mark.parametrize(
    ("value", "expected"),
    [
        (None, 0.0),
        (float("nan"), 0.0),
        (float("inf"), 0.0),
        ("", 0.0),
        ("  ", 0.0),
        ("abc", 0.0),
        ("12.5", 12.5),
        (" 42 ", 42.0),
        (7, 7.0),
        (np.int64(3), 3.0),
        (True, 1.0),
        ([1, 2], 0.0),
    ],
)
def test_to_num_never_raises(value: object, expected: float) -> None:
    assert to_num(value) == expected


def test_to_num_series_matches_scalar_rules() -> None:
    values = pd.Series(["10", None, "oops", 2.5, float("inf"), " 3 "], dtype=object)

    result = to_num_series(values)

    assert result.tolist() == [10.0, 0.0, 0.0, 2.5, 0.0, 3.0]
    assert result.dtype == float


def test_to_num_series_accepts_plain_lists() -> None:
    assert to_num_series([1, "2", None]).tolist() == [1.0, 2.0, 0.0]


@pytest.mark.parametrize(
    ("value", "digits", "expected"),
    [
        (2.5, 0, 3.0),
        (3.5, 0, 4.0),
        (-2.5, 0, -2.0),
        (0.25, 1, 0.3),
        (12.34, 1, 12.3),
        (66.666, 2, 66.67),
    ],
)
def test_round_half_up(value: float, digits: int, expected: float) -> None:
    assert round_half_up(value, digits) == pytest.approx(expected)


def test_mean_or_none() -> None:
    assert mean_or_none(pd.Series([], dtype=float)) is None
    assert mean_or_none(pd.Series([1.0, 2.0, 6.0])) == pytest.approx(3.0)
