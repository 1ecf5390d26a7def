"""
Test configuration for the carrier quote engine.

Ensures the project root is on sys.path so tests can import `src.*` modules,
and provides small underwriting datasets.
"""
import copy
import json
import os
import sys

import pytest

PROJECT_ROOT = os.path.dirname(os.path.dirname(os.path.abspath(__file__)))
if PROJECT_ROOT not in sys.path:
    sys.path.insert(0, PROJECT_ROOT)

FIXTURES_DIR = os.path.join(os.path.dirname(os.path.abspath(__file__)), "fixtures")
REGRESSION_DATASET = os.path.join(FIXTURES_DIR, "regression_dataset.json")


_UNDERWRITING_DATA = {
    "metadata": {"currency": "USD", "currency_symbol": "$", "base_coverage_unit": 1000},
    "carriers": [
        {
            "name": "Alpha",
            "products": [
                {
                    "name": "Alpha Term 20",
                    "type": "term",
                    "term_years": 20,
                    "rate_table": [
                        {"min_age": 30, "max_age": 39, "rates": {"male": 0.10, "female": 0.08}},
                        {"min_age": 35, "max_age": 50, "rates": {"male": 0.50, "female": 0.40}},
                    ],
                    "state_factors": {"NY": 1.2},
                    "state_exclusions": ["MT"],
                    "health_factors": {"preferred_plus": 0.8, "standard": 1.0},
                    "nicotine_factors": {"true": 2.0, "false": 1.0},
                },
                {
                    "name": "Alpha Term 10",
                    "type": "term",
                    "term_years": 10,
                    "rate_table": [
                        {"min_age": 18, "max_age": 60, "rates": {"male": 0.05, "female": 0.04}},
                    ],
                },
            ],
        },
        {
            "name": "Beta",
            "products": [
                {
                    "name": "Beta Term 20",
                    "type": "term",
                    "term_years": 20,
                    "rate_table": [
                        {"min_age": 18, "max_age": 60, "rates": {"male": 0.10, "female": 0.08}},
                    ],
                },
                {
                    "name": "Beta Whole",
                    "type": "whole",
                    "rate_table": [
                        {"rates": {"male": 1.0, "female": 0.9}},
                    ],
                },
            ],
        },
    ],
}


@pytest.fixture
def underwriting_data():
    return copy.deepcopy(_UNDERWRITING_DATA)


@pytest.fixture
def regression_data():
    with open(REGRESSION_DATASET, "r", encoding="utf-8") as f:
        return json.load(f)


@pytest.fixture
def base_request():
    return {
        "age": 36,
        "gender": "male",
        "state": "TX",
        "coverage_amount": 100000,
        "health_class": "standard",
        "nicotine_use": False,
        "modality": "monthly",
    }


@pytest.fixture
def regression_request():
    return {
        "age": 78,
        "gender": "male",
        "state": "TX",
        "coverage_amount": 10000,
        "product_type": "fe",
        "health_class": "standard",
        "nicotine_use": False,
        "modality": "monthly",
    }


@pytest.fixture
def make_dataset():
    """Wrap products in a one-carrier dataset."""

    def _make(*products, metadata=None):
        return {
            "metadata": metadata or {},
            "carriers": [{"name": "Solo", "products": list(products)}],
        }

    return _make
