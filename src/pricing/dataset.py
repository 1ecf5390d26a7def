# src/pricing/dataset.py
"""
Underwriting dataset model.

The raw dataset is a JSON-shaped mapping:

  {
    "metadata": {"currency": "USD", "currency_symbol": "$",
                 "base_coverage_unit": 1000, "rate_table_period": "monthly",
                 "modal_factors": {...}},
    "carriers": [{"name": ..., "products": [{...}, ...]}, ...]
  }

Carriers and products stay plain mappings; this module only derives the
metadata block and a few typed accessors the engine relies on.
"""

from __future__ import annotations

from dataclasses import dataclass, field
from numbers import Real
from typing import Any, Dict, Mapping, Optional

import numpy as np

from src.pricing.config import ANNUAL, DEFAULTS, MONTHLY
from src.pricing.normalize import normalize_modality


def finite_number(value: Any) -> Optional[float]:
    """Return value as float if it is a real, finite number (bools excluded)."""
    if isinstance(value, bool) or not isinstance(value, Real):
        return None
    try:
        number = float(value)
    except OverflowError:
        # ints beyond float range, e.g. 10**400 from JSON
        return None
    if not np.isfinite(number):
        return None
    return number


def resolve_rate_table_period(source: Mapping[str, Any]) -> Optional[str]:
    """
    Read the rate-table period declared on a metadata block or a product.

    Accepts an explicit `rate_table_period` string, or the boolean flag
    `monthly_rates` (true -> monthly, false -> annual). Returns None when
    neither is declared.
    """
    period = source.get("rate_table_period")
    if isinstance(period, str) and period.strip():
        return normalize_modality(period)

    flag = source.get("monthly_rates")
    if isinstance(flag, bool):
        return MONTHLY if flag else ANNUAL
    return None


@dataclass(frozen=True)
class DatasetMetadata:
    currency: str = DEFAULTS.currency
    currency_symbol: str = DEFAULTS.currency_symbol
    base_coverage_unit: float = DEFAULTS.base_coverage_unit
    rate_table_period: str = DEFAULTS.rate_table_period
    modal_factors: Dict[str, Any] = field(default_factory=dict)


def build_metadata(raw: Optional[Mapping[str, Any]]) -> DatasetMetadata:
    """Derive dataset metadata, falling back to QuoteDefaults for empty fields."""
    meta: Mapping[str, Any] = raw if isinstance(raw, Mapping) else {}

    # Dataset-level modal factors sit between engine defaults and product overrides
    modal_factors = dict(DEFAULTS.modal_factors)
    if isinstance(meta.get("modal_factors"), Mapping):
        modal_factors.update(meta["modal_factors"])

    return DatasetMetadata(
        currency=meta.get("currency") or DEFAULTS.currency,
        currency_symbol=meta.get("currency_symbol") or DEFAULTS.currency_symbol,
        base_coverage_unit=meta.get("base_coverage_unit") or DEFAULTS.base_coverage_unit,
        rate_table_period=resolve_rate_table_period(meta) or DEFAULTS.rate_table_period,
        modal_factors=modal_factors,
    )
