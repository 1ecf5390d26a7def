# src/pricing/quote.py
"""
Quote engine.

Given a client request and an underwriting dataset, produce one quote per
eligible (carrier, product) pair, sorted ascending by premium.

Per product:
  period premium = rate per unit * coverage units
                   * health * nicotine * state * product factor
  monthly        = period premium and annual policy fee, both converted to a
                   monthly amount through the product's modal factors
  premium        = monthly * modal factor, rounded half away from zero

Input/shape problems (bad request, malformed rate_table, unsupported gender or
modality) raise. Products that are simply not eligible (filters, state
exclusion, no age band, non-positive coverage units) are skipped.
"""

from __future__ import annotations

import copy
import logging
from collections.abc import Mapping
from decimal import ROUND_HALF_UP, Decimal
from operator import attrgetter
from typing import Any, Dict, List, Optional, Union

import numpy as np

from src.pricing.config import ANNUAL, DEFAULTS, MONTHLY
from src.pricing.dataset import build_metadata, finite_number, resolve_rate_table_period
from src.pricing.modal import (
    convert_to_monthly,
    merge_modal_factors,
    normalize_modal_factors,
    resolve_modal_factor,
)
from src.pricing.normalize import (
    normalize_gender,
    normalize_health_class,
    normalize_key,
    normalize_modality,
    normalize_state,
)
from src.pricing.schemas import PreparedRequest, Quote

logger = logging.getLogger(__name__)


_BOOL_MAP = {
    "true": True,
    "false": False,
    "yes": True,
    "no": False,
    "y": True,
    "n": False,
    "1": True,
    "0": False,
    "": False,
}


def round_premium(value: float, places: int = 2) -> float:
    """Round half away from zero on the decimal representation of value."""
    quantum = Decimal(1).scaleb(-places)
    return float(Decimal(repr(float(value))).quantize(quantum, rounding=ROUND_HALF_UP))


def _require_finite(name: str, value: Any) -> float:
    if value is None or isinstance(value, bool):
        raise TypeError(f"{name} must be a finite number.")
    try:
        number = float(value)
    except (TypeError, ValueError, OverflowError):
        raise TypeError(f"{name} must be a finite number.") from None
    if not np.isfinite(number):
        raise TypeError(f"{name} must be a finite number.")
    return number


def _to_bool(name: str, value: Any) -> bool:
    if value is None:
        return False
    if isinstance(value, str):
        key = value.strip().lower()
        if key not in _BOOL_MAP:
            raise ValueError(f"{name} must be a boolean, got '{value}'.")
        return _BOOL_MAP[key]
    return bool(value)


def _term(value: Any, allow_text: bool = True) -> Optional[Union[int, float]]:
    number = finite_number(value)
    if number is None and allow_text and isinstance(value, str) and value.strip():
        try:
            number = float(value)
        except ValueError:
            return None
        if not np.isfinite(number):
            return None
    if number is None:
        return None
    return int(number) if number.is_integer() else number


def prepare_request(request: Any) -> PreparedRequest:
    """
    Validate a raw request mapping and derive the normalised fields.

    Raises before any product is looked at, so a bad request never yields a
    partial quote list.
    """
    if not isinstance(request, Mapping):
        raise TypeError("A request mapping is required to calculate quotes.")

    age = _require_finite("age", request.get("age"))
    coverage_amount = _require_finite("coverage_amount", request.get("coverage_amount"))
    if coverage_amount <= 0:
        raise ValueError("coverage_amount must be greater than zero.")

    gender = normalize_gender(request.get("gender"))

    product_type = request.get("product_type")
    return PreparedRequest(
        age=age,
        coverage_amount=coverage_amount,
        gender=gender,
        state=normalize_state(request.get("state")),
        health_class=normalize_health_class(request.get("health_class") or "standard"),
        nicotine_use=_to_bool("nicotine_use", request.get("nicotine_use")),
        modality=normalize_modality(request.get("modality") or DEFAULTS.modality),
        product_type=normalize_key(product_type) if product_type else None,
        term_years=_term(request.get("term_years")),
        link_url=request.get("link_url") or DEFAULTS.link_url,
        button_text=request.get("button_text") or DEFAULTS.button_text,
    )


def state_adjustment(product: Mapping[str, Any], state: str) -> float:
    """0 when the state is excluded, else the listed state factor (default 1)."""
    exclusions = product.get("state_exclusions") or ()
    if isinstance(exclusions, str):
        exclusions = (exclusions,)
    if state in {normalize_state(code) for code in exclusions}:
        return 0.0

    factors = product.get("state_factors")
    if isinstance(factors, Mapping):
        for code, value in factors.items():
            if normalize_state(code) == state:
                factor = finite_number(value)
                return factor if factor is not None else 1.0
    return 1.0


def find_rate_band(rate_table: Any, age: float) -> Optional[Mapping[str, Any]]:
    """First band (in table order) whose inclusive [min_age, max_age] holds age."""
    if not isinstance(rate_table, (list, tuple)):
        raise TypeError("Product rate_table must be a list of age bands.")

    for band in rate_table:
        if not isinstance(band, Mapping):
            raise TypeError("Each rate_table entry must be a mapping.")
        min_age = finite_number(band.get("min_age"))
        max_age = finite_number(band.get("max_age"))
        lower = min_age if min_age is not None else 0.0
        upper = max_age if max_age is not None else np.inf
        if lower <= age <= upper:
            return band
    return None


def gender_rate(rate_band: Mapping[str, Any], gender: str) -> float:
    rates = rate_band.get("rates")
    if not isinstance(rates, Mapping) or gender not in rates:
        raise ValueError(f'No rate available for gender "{gender}" within the selected band.')
    rate = finite_number(rates[gender])
    if rate is None:
        raise ValueError(f'Rate for gender "{gender}" must be a finite number.')
    return rate


def resolve_factor(factors: Any, key: str, default: float = 1.0) -> float:
    """
    Look up a multiplier by normalised key, then by the raw key.

    Misses (and non-numeric entries) fall back to `default`; never raises.
    """
    if not isinstance(factors, Mapping):
        return default
    for candidate in (normalize_health_class(key), key):
        if candidate in factors:
            value = finite_number(factors[candidate])
            return value if value is not None else default
    return default


class QuoteCalculator:
    """Quote engine bound to one underwriting dataset."""

    def __init__(self, underwriting_data: Mapping[str, Any]) -> None:
        if not isinstance(underwriting_data, Mapping):
            raise TypeError("underwriting_data must be a mapping.")

        self.metadata = build_metadata(underwriting_data.get("metadata"))

        # Shallow copy: callers may mutate their list without affecting us
        carriers = underwriting_data.get("carriers")
        self.carriers: List[Any] = list(carriers) if isinstance(carriers, list) else []

    def list_carriers(self) -> List[str]:
        return [c.get("name") for c in self.carriers if isinstance(c, Mapping)]

    def calculate_quotes(self, request: Mapping[str, Any]) -> List[Quote]:
        req = prepare_request(request)

        quotes: List[Quote] = []
        for carrier in self.carriers:
            if not isinstance(carrier, Mapping):
                continue
            carrier_name = carrier.get("name") or "Unnamed Carrier"
            products = carrier.get("products")
            if not isinstance(products, list):
                continue

            for product in products:
                if not isinstance(product, Mapping):
                    continue
                quote = self._quote_product(carrier_name, product, req)
                if quote is not None:
                    quotes.append(quote)

        # sorted() is stable: equal premiums keep carrier/product order
        return sorted(quotes, key=attrgetter("premium"))

    def _quote_product(
        self,
        carrier_name: str,
        product: Mapping[str, Any],
        req: PreparedRequest,
    ) -> Optional[Quote]:
        product_name = product.get("name") or carrier_name
        product_type = normalize_key(
            product.get("type") or product.get("product_type") or product.get("name") or ""
        )
        term_years = _term(product.get("term_years"), allow_text=False)

        if req.product_type and product_type != req.product_type:
            return None
        if req.term_years is not None and term_years != req.term_years:
            return None

        state_factor = state_adjustment(product, req.state)
        if state_factor == 0:
            logger.debug("Skipping %s/%s: state %s excluded", carrier_name, product_name, req.state)
            return None

        rate_table = product.get("rate_table")
        rate_band = find_rate_band(rate_table if rate_table is not None else [], req.age)
        if rate_band is None:
            logger.debug("Skipping %s/%s: no rate band for age %s", carrier_name, product_name, req.age)
            return None
        base_rate_per_unit = gender_rate(rate_band, req.gender)

        base_coverage_unit = product.get("base_coverage_unit") or self.metadata.base_coverage_unit
        unit = finite_number(base_coverage_unit)
        coverage_units = req.coverage_amount / unit if unit else float("nan")
        if not np.isfinite(coverage_units) or coverage_units <= 0:
            logger.debug("Skipping %s/%s: invalid coverage units", carrier_name, product_name)
            return None

        health_factor = resolve_factor(product.get("health_factors"), req.health_class, 1.0)
        nicotine_factor = resolve_factor(
            product.get("nicotine_factors"),
            "true" if req.nicotine_use else "false",
            DEFAULTS.nicotine_fallback if req.nicotine_use else 1.0,
        )
        product_factor = finite_number(product.get("product_factor"))
        if product_factor is None:
            product_factor = 1.0

        period_premium = (
            base_rate_per_unit
            * coverage_units
            * health_factor
            * nicotine_factor
            * state_factor
            * product_factor
        )

        policy_fee_annual = finite_number(product.get("policy_fee_annual"))
        if policy_fee_annual is None:
            policy_fee_annual = 0.0

        modal_factors = normalize_modal_factors(
            merge_modal_factors(self.metadata.modal_factors, product.get("modal_factors"))
        )
        modal_factor = resolve_modal_factor(modal_factors, req.modality)

        rate_table_period = (
            resolve_rate_table_period(product) or self.metadata.rate_table_period or MONTHLY
        )

        monthly_before_fees = convert_to_monthly(period_premium, rate_table_period, modal_factors)
        monthly_policy_fee = convert_to_monthly(policy_fee_annual, ANNUAL, modal_factors)
        monthly_after_fees = monthly_before_fees + monthly_policy_fee
        modal_premium = monthly_after_fees * modal_factor

        if not np.isfinite(modal_premium) or modal_premium < 0:
            logger.debug("Skipping %s/%s: premium %s out of range", carrier_name, product_name, modal_premium)
            return None

        breakdown: Dict[str, Any] = {
            "base_rate_per_unit": base_rate_per_unit,
            "base_coverage_unit": unit,
            "coverage_amount": req.coverage_amount,
            "coverage_units": coverage_units,
            "age": req.age,
            "gender": req.gender,
            "state": req.state,
            "rate_band": copy.deepcopy(dict(rate_band)),
            "health_class": req.health_class,
            "nicotine_use": req.nicotine_use,
            "applied_factors": {
                "health": health_factor,
                "nicotine": nicotine_factor,
                "state": state_factor,
                "product": product_factor,
            },
            "rate_table_period": rate_table_period,
            "period_premium_before_fees": period_premium,
            "policy_fee_annual": policy_fee_annual,
            "monthly_policy_fee": monthly_policy_fee,
            "monthly_premium_before_fees": monthly_before_fees,
            "monthly_premium_after_fees": monthly_after_fees,
            "modality": req.modality,
            "modal_factor": modal_factor,
            "modal_factors": dict(modal_factors),
            "modal_premium": modal_premium,
        }

        return Quote(
            carrier=carrier_name,
            product=product_name,
            product_type=product_type,
            term_years=term_years,
            coverage_amount=req.coverage_amount,
            premium=round_premium(modal_premium),
            currency=self.metadata.currency,
            currency_symbol=self.metadata.currency_symbol,
            modality=req.modality,
            link_url=req.link_url,
            button_text=req.button_text,
            breakdown=breakdown,
        )
