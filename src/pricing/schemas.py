# src/pricing/schemas.py
from __future__ import annotations

import copy
from dataclasses import dataclass, field
from typing import Any, Dict, Optional


@dataclass(frozen=True)
class PreparedRequest:
    """Validated and normalised quote request."""

    age: float
    coverage_amount: float
    gender: str
    state: str
    health_class: str
    nicotine_use: bool
    modality: str
    product_type: Optional[str] = None
    term_years: Optional[int] = None
    link_url: str = "#"
    button_text: str = "Book now"


@dataclass(frozen=True)
class Quote:
    carrier: str
    product: str
    product_type: str
    term_years: Optional[int]
    coverage_amount: float
    premium: float
    currency: str
    currency_symbol: str
    modality: str
    link_url: str
    button_text: str
    breakdown: Dict[str, Any] = field(default_factory=dict)

    def to_dict(self) -> Dict[str, Any]:
        return {
            "carrier": self.carrier,
            "product": self.product,
            "product_type": self.product_type,
            "term_years": self.term_years,
            "coverage_amount": self.coverage_amount,
            "premium": self.premium,
            "currency": self.currency,
            "currency_symbol": self.currency_symbol,
            "modality": self.modality,
            "link_url": self.link_url,
            "button_text": self.button_text,
            "breakdown": copy.deepcopy(self.breakdown),
        }
