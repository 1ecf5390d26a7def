# src/pricing/normalize.py
"""
Canonical lookup keys for free-form request and dataset strings.

Only gender is validated here; every other helper is total and never raises.
"""

from __future__ import annotations

import re
from typing import Any

from src.pricing.config import DEFAULTS, SUPPORTED_GENDERS


HEALTH_CLASS_ALIASES = {
    "preferred plus": "preferred_plus",
    "preferred+": "preferred_plus",
    "preferred plus non-tobacco": "preferred_plus",
    "preferred plus nontobacco": "preferred_plus",
    "preferred": "preferred",
    "standard plus": "standard_plus",
    "standard+": "standard_plus",
    "standard": "standard",
    "table a": "table_a",
    "table b": "table_b",
}

MODALITY_ALIASES = {
    "semiannual": "semi_annual",
    "semi_annually": "semi_annual",
    "annually": "annual",
    "yearly": "annual",
}

_WHITESPACE = re.compile(r"\s+")
_NOT_HEALTH_CHAR = re.compile(r"[^a-z+ ]")


def normalize_key(value: Any) -> str:
    """Trim, lowercase and collapse internal whitespace runs to one space."""
    text = str(value or "").strip().lower()
    return _WHITESPACE.sub(" ", text)


def normalize_health_class(value: Any) -> str:
    """
    Map a health class label to its lookup key.

    "Preferred Plus", "preferred+" and "preferred_plus" all give
    "preferred_plus"; unknown labels become a snake_case key ("Table C" ->
    "table_c").
    """
    key = normalize_key(str(value or "").replace("_", " "))
    key = _NOT_HEALTH_CHAR.sub("", key)
    key = _WHITESPACE.sub(" ", key).strip()
    alias = HEALTH_CLASS_ALIASES.get(key)
    if alias is not None:
        return alias
    return key.replace(" ", "_")


def normalize_state(value: Any) -> str:
    return str(value or "").strip().upper()


def normalize_gender(value: Any) -> str:
    gender = normalize_key(value)
    if gender not in SUPPORTED_GENDERS:
        raise ValueError(
            f'Unsupported gender "{value}". Expected: {", ".join(SUPPORTED_GENDERS)}'
        )
    return gender


def normalize_modality(value: Any) -> str:
    key = normalize_key(value).replace("-", "_").replace(" ", "_")
    if not key:
        return DEFAULTS.modality
    return MODALITY_ALIASES.get(key, key)
