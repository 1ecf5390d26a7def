# src/pricing/config.py
"""
Quote engine defaults.

Values applied when the underwriting dataset (or a single product) does not
declare its own:
- currency / currency_symbol / base_coverage_unit: dataset metadata fallbacks
- rate_table_period: unit period of rate_table values ("monthly" or "annual")
- modal_factors: payment-mode factors; only their ratios matter, every map is
  re-based so that monthly == 1 before use (see src.pricing.modal)
- modality / button_text / link_url: request fallbacks
"""

from __future__ import annotations

from dataclasses import dataclass, field
from typing import Dict


MONTHLY = "monthly"
ANNUAL = "annual"

SUPPORTED_GENDERS = ("male", "female")


def _default_modal_factors() -> Dict[str, float]:
    # Expressed relative to the annual premium; re-based on monthly at use.
    return {
        "annual": 1.0,
        "semi_annual": 0.52,
        "quarterly": 0.265,
        "monthly": 0.09,
    }


@dataclass(frozen=True)
class QuoteDefaults:
    currency: str = "USD"
    currency_symbol: str = "$"

    # Per-unit rates are quoted against this coverage denomination
    base_coverage_unit: float = 1000

    rate_table_period: str = MONTHLY
    modal_factors: Dict[str, float] = field(default_factory=_default_modal_factors)

    modality: str = MONTHLY
    button_text: str = "Book now"
    link_url: str = "#"

    # Nicotine multiplier when the product has no "true" entry
    nicotine_fallback: float = 1.5


DEFAULTS = QuoteDefaults()
