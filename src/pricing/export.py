# src/pricing/export.py
"""
Tabular view of a quote list.

One row per quote, breakdown fields flattened with a "breakdown." prefix
(nested maps become dotted columns, e.g. breakdown.applied_factors.health).
Row order is the quote order.
"""

from __future__ import annotations

from typing import Sequence

import pandas as pd

from src.pricing.schemas import Quote


SUMMARY_COLUMNS = [
    "carrier",
    "product",
    "product_type",
    "term_years",
    "coverage_amount",
    "premium",
    "currency",
    "modality",
]


def quotes_to_frame(quotes: Sequence[Quote], include_breakdown: bool = True) -> pd.DataFrame:
    if not quotes:
        return pd.DataFrame(columns=SUMMARY_COLUMNS)

    records = [q.to_dict() for q in quotes]
    if not include_breakdown:
        for r in records:
            r.pop("breakdown", None)
        return pd.DataFrame.from_records(records)

    # rate_band.rates / modal_factors vary per product; json_normalize unions them
    df = pd.json_normalize(records, sep=".")
    return df
