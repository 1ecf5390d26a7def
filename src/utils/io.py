from __future__ import annotations

import json
from pathlib import Path
from typing import Any, Union

import httpx
import pandas as pd


def ensure_dir(path: Path) -> None:
    path.mkdir(parents=True, exist_ok=True)


def read_json(path: Union[str, Path]) -> Any:
    path = Path(path)
    if not path.exists():
        raise FileNotFoundError(f"File not found: {path}")

    with path.open("r", encoding="utf-8") as f:
        try:
            return json.load(f)
        except json.JSONDecodeError as e:
            raise ValueError(f"Invalid JSON in {path}: {e}") from e


def fetch_json(url: str, timeout: float = 10.0) -> Any:
    """GET a JSON document. Non-2xx responses raise RuntimeError."""
    try:
        response = httpx.get(url, headers={"Accept": "application/json"}, timeout=timeout)
    except httpx.HTTPError as e:
        raise RuntimeError(f"Unable to load underwriting data: {e}") from e

    if not response.is_success:
        raise RuntimeError(
            f"Unable to load underwriting data: {response.status_code} {response.reason_phrase}"
        )
    try:
        return response.json()
    except ValueError as e:
        raise ValueError(f"Invalid JSON from {url}: {e}") from e


def write_df(df: pd.DataFrame, path: Union[str, Path]) -> None:
    path = Path(path)
    ensure_dir(path.parent)

    suf = path.suffix.lower()
    if suf == ".csv":
        df.to_csv(path, index=False)
        return
    if suf == ".parquet":
        df.to_parquet(path, index=False)
        return
    raise ValueError(f"Unsupported dataframe format: {suf}")
