from __future__ import annotations

REVENUE_TIERS = [
    "<$1K/mo",
    "$1-5K/mo",
    "$5-10K/mo",
    "$10-50k/mo",
    "$50K+/mo",
]
UNKNOWN_REVENUE_LABEL = "Unknown"

# Creator-level upload frequency labels, most frequent first.
CADENCE_ORDER = [
    "Daily",
    "3-4x/week",
    "Weekly",
    "Bi-Weekly",
    "Monthly",
    "Irregular",
]

_REVENUE_TO_ORDINAL = {tier: index for index, tier in enumerate(REVENUE_TIERS, start=1)}
_ORDINAL_TO_REVENUE = {index: tier for tier, index in _REVENUE_TO_ORDINAL.items()}
_CADENCE_TO_SCORE = {
    label: len(CADENCE_ORDER) - index for index, label in enumerate(CADENCE_ORDER)
}
MAX_CADENCE_SCORE = len(CADENCE_ORDER)
MAX_REVENUE_ORDINAL = len(REVENUE_TIERS)


def is_revenue_tier(value: object) -> bool:
    return isinstance(value, str) and value in _REVENUE_TO_ORDINAL


def revenue_to_ordinal(tier: object) -> int:
    """Map a revenue tier label to 1..5; anything else maps to 0."""
    if not isinstance(tier, str):
        return 0
    return _REVENUE_TO_ORDINAL.get(tier, 0)


def ordinal_to_revenue(ordinal: object) -> str:
    try:
        key = int(ordinal)  # type: ignore[arg-type]
    except (TypeError, ValueError):
        return UNKNOWN_REVENUE_LABEL
    return _ORDINAL_TO_REVENUE.get(key, UNKNOWN_REVENUE_LABEL)


def frequency_to_score(frequency: object) -> int:
    """Map an upload frequency label to 1..6 (higher is more frequent); unknown is 0."""
    if not isinstance(frequency, str):
        return 0
    return _CADENCE_TO_SCORE.get(frequency, 0)


def upload_consistency(frequency: object) -> float:
    return frequency_to_score(frequency) / MAX_CADENCE_SCORE * 100.0


def revenue_tier_score(tier: object) -> float:
    return revenue_to_ordinal(tier) / MAX_REVENUE_ORDINAL * 100.0
