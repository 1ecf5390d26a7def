# src/quoting/service.py
"""
Quote service used by the API and Lambda handler.

Single source of truth:
- dataset source -> QuoteCalculator (cached per process)
- request dict -> calculate_quotes -> JSON-ready dict
"""

from __future__ import annotations

import logging
from typing import Any, Dict, List, Mapping, Optional

from src.data.load import load_underwriting_data
from src.pricing.quote import QuoteCalculator
from src.pricing.schemas import Quote
from src.utils.config import get_data_source_config

logger = logging.getLogger(__name__)


# In-process cache (useful for FastAPI startup + AWS Lambda warm invocations)
_CACHED_CALCULATOR: Optional[QuoteCalculator] = None


def get_calculator(source: Any = None, force_reload: bool = False) -> QuoteCalculator:
    """
    Load the underwriting dataset once and cache the calculator built on it.

    source defaults to QUOTE_DATA_SOURCE (see src.utils.config).
    """
    global _CACHED_CALCULATOR
    if force_reload or _CACHED_CALCULATOR is None:
        src = source if source is not None else get_data_source_config().source
        _CACHED_CALCULATOR = QuoteCalculator(load_underwriting_data(src))
        logger.info("Quote calculator ready with %d carriers", len(_CACHED_CALCULATOR.carriers))
    return _CACHED_CALCULATOR


def calculate(
    request: Mapping[str, Any],
    *,
    calculator: Optional[QuoteCalculator] = None,
) -> List[Quote]:
    calc = calculator or get_calculator()
    return calc.calculate_quotes(request)


def quote_from_request_dict(
    request: Mapping[str, Any],
    *,
    calculator: Optional[QuoteCalculator] = None,
) -> Dict[str, Any]:
    """
    Convenience: returns a JSON-ready dict with the sorted quotes.
    """
    calc = calculator or get_calculator()
    quotes = calc.calculate_quotes(request)
    return {
        "currency": calc.metadata.currency,
        "currency_symbol": calc.metadata.currency_symbol,
        "count": len(quotes),
        "quotes": [q.to_dict() for q in quotes],
    }
