# src/pricing/modal.py
"""
Payment-mode (modal) factors and rate-table period conversion.

Internal convention: a modal factor map is always re-based so that
monthly == 1. A dataset may write factors relative to the annual premium
({"annual": 1, "monthly": 0.09}) or relative to the monthly premium
({"annual": 11.11, "monthly": 1}); both describe the same ratios and
normalise to the same map.

Conversion contract: convert_to_monthly(amount, period, factors) takes an
amount expressed per `period` and returns the equivalent monthly amount.
"""

from __future__ import annotations

from typing import Any, Dict, Mapping, Optional

from src.pricing.config import ANNUAL, MONTHLY
from src.pricing.dataset import finite_number


# Fallback when a product leaves no positive "annual" factor
MONTHS_PER_YEAR = 12.0


def _positive(value: Any) -> Optional[float]:
    number = finite_number(value)
    if number is None or number <= 0:
        return None
    return number


def merge_modal_factors(
    defaults: Mapping[str, Any],
    overrides: Optional[Mapping[str, Any]],
) -> Dict[str, Any]:
    """Start from defaults, overlay overrides; override wins on key collision."""
    merged = dict(defaults)
    if isinstance(overrides, Mapping):
        merged.update(overrides)
    return merged


def normalize_modal_factors(factors: Mapping[str, Any]) -> Dict[str, float]:
    """
    Re-base a modal factor map on monthly == 1.

    Every entry is divided by the map's monthly value (1 when that is missing
    or not a positive finite number); entries that are not positive finite
    numbers are dropped. Monthly is pinned to exactly 1.0 afterwards.
    """
    divisor = _positive(factors.get(MONTHLY)) or 1.0

    normalized: Dict[str, float] = {}
    for name, raw in factors.items():
        value = _positive(raw)
        if value is None:
            continue
        rebased = _positive(value / divisor)
        if rebased is not None:
            normalized[str(name)] = rebased

    normalized[MONTHLY] = 1.0
    return normalized


def resolve_modal_factor(factors: Mapping[str, float], modality: str) -> float:
    if modality not in factors:
        raise ValueError(
            f'Unsupported payment modality "{modality}". '
            f"Expected one of: {', '.join(sorted(factors))}"
        )
    return factors[modality]


def convert_to_monthly(amount: float, period: str, factors: Mapping[str, float]) -> float:
    """
    Convert an amount per `period` into a monthly amount.

    - monthly: unchanged
    - annual: divided by the annual factor (12 if absent or not positive)
    - any other period with a factor: amount * (monthly / period factor)
    - unknown periods: unchanged
    """
    if period == MONTHLY:
        return amount

    if period == ANNUAL:
        annual = _positive(factors.get(ANNUAL)) or MONTHS_PER_YEAR
        return amount / annual

    period_factor = _positive(factors.get(period))
    if period_factor is not None:
        monthly = _positive(factors.get(MONTHLY)) or 1.0
        return amount * (monthly / period_factor)

    return amount
