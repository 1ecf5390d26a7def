# src/scripts/run_quote.py
"""
Quote a client profile against the carrier underwriting dataset.

Usage:
  python -m src.scripts.run_quote --age 78 --gender male --state TX \
    --coverage 10000 --product fe --health standard

Optional:
  python -m src.scripts.run_quote --data data/carrier_underwriting.json \
    --modality quarterly --out reports/quotes.csv

Exit codes:
  0  quotes printed (or no quotes matched the criteria)
  1  usage error, unreadable dataset or invalid request
"""

from __future__ import annotations

import argparse
import logging
import sys
from pathlib import Path
from typing import List, NoReturn, Optional

from src.data.load import load_underwriting_data
from src.pricing.export import quotes_to_frame
from src.pricing.quote import QuoteCalculator
from src.utils.config import get_paths
from src.utils.io import write_df
from src.utils.log import setup_logging

logger = logging.getLogger(__name__)


class UsageError(Exception):
    pass


class _QuoteArgumentParser(argparse.ArgumentParser):
    # Route argparse failures through main() so they exit 1 with usage help
    def error(self, message: str) -> NoReturn:
        raise UsageError(message)


def _parse_bool(value: str) -> bool:
    if value == "true":
        return True
    if value == "false":
        return False
    raise argparse.ArgumentTypeError(f"Invalid boolean value: {value}")


def _parse_term(value: str) -> Optional[int]:
    # "any" drops the term filter (needed for products without a term, e.g. fe)
    if value.strip().lower() in {"any", "none"}:
        return None
    try:
        return int(value)
    except ValueError:
        raise argparse.ArgumentTypeError(f"Invalid term value: {value}") from None


def build_parser() -> argparse.ArgumentParser:
    p = _QuoteArgumentParser(description="Quote a client profile against carrier underwriting data.")
    p.add_argument(
        "--data",
        type=str,
        default=None,
        help="Path/URL of underwriting JSON. Default: data/carrier_underwriting.json",
    )
    p.add_argument("--age", type=int, default=35, help="Client age (35)")
    p.add_argument("--gender", type=str, default="male", help="Client gender: male | female (male)")
    p.add_argument("--state", type=str, default="TX", help="Two-letter state code (TX)")
    p.add_argument("--coverage", type=int, default=250000, help="Coverage amount in dollars (250000)")
    p.add_argument("--term", type=_parse_term, default=20, help="Term length in years, or 'any' (20)")
    p.add_argument("--product", type=str, default="term", help="Product type: term | whole | iul | fe (term)")
    p.add_argument("--health", type=str, default="preferred plus", help="Health class (preferred plus)")
    p.add_argument("--nicotine", type=_parse_bool, default=False, help="Nicotine use flag: true | false (false)")
    p.add_argument(
        "--modality",
        type=str,
        default="monthly",
        help="Payment mode: monthly | annual | quarterly | semiannual (monthly)",
    )
    p.add_argument("--button", type=str, default="Book now", help="CTA button label (Book now)")
    p.add_argument("--link", type=str, default="https://example.com/book", help="CTA destination URL")
    p.add_argument("--out", type=str, default=None, help="Also write the quote table to .csv/.parquet")
    p.add_argument("--log-level", type=str, default="WARNING", help="Logging level (WARNING)")
    return p


def _resolve_data_source(data: Optional[str]) -> str:
    if data is None:
        path = get_paths().default_dataset
    elif data.startswith(("http://", "https://", "s3://")):
        return data
    else:
        path = Path(data).resolve()

    if not path.exists():
        raise FileNotFoundError(f"Cannot find underwriting file at {path}")
    return str(path)


def run(argv: Optional[List[str]] = None) -> int:
    parser = build_parser()
    try:
        args = parser.parse_args(argv)
        setup_logging(args.log_level)

        underwriting_data = load_underwriting_data(_resolve_data_source(args.data))
        calculator = QuoteCalculator(underwriting_data)

        quote_request = {
            "age": args.age,
            "gender": args.gender.lower(),
            "state": args.state.upper(),
            "coverage_amount": args.coverage,
            "term_years": args.term,
            "product_type": args.product.lower(),
            "health_class": args.health.lower(),
            "nicotine_use": args.nicotine,
            "modality": args.modality.lower(),
            "button_text": args.button,
            "link_url": args.link,
        }

        quotes = calculator.calculate_quotes(quote_request)
        if not quotes:
            print("No quotes available for the supplied criteria.")
            return 0

        print("Quotes:\n")
        for q in quotes:
            print(f"{q.carrier} ({q.product}) - {q.premium:.2f}/{q.modality} - {q.button_text}")
            print(f"  Link: {q.link_url}")

        if args.out:
            write_df(quotes_to_frame(quotes), args.out)
            print(f"\n[OK] Quote table saved: {args.out}")
    except Exception as e:
        logger.debug("Quote run failed", exc_info=True)
        print(str(e), file=sys.stderr)
        parser.print_usage(sys.stderr)
        return 1
    return 0


def main() -> None:
    sys.exit(run())


if __name__ == "__main__":
    main()
