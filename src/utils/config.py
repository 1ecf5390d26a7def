# src/utils/config.py
from __future__ import annotations

import os
from dataclasses import dataclass
from pathlib import Path
from typing import Optional


def _env(key: str, default: Optional[str] = None) -> Optional[str]:
    v = os.getenv(key)
    return v if v is not None and v != "" else default


@dataclass(frozen=True)
class ProjectPaths:
    root: Path
    data_dir: Path
    default_dataset: Path


def get_project_root() -> Path:
    """
    Resolve repo root robustly.
    Assumes this file lives at: <root>/src/utils/config.py
    """
    return Path(__file__).resolve().parents[2]


def get_paths() -> ProjectPaths:
    root = get_project_root()
    data_dir = root / "data"
    return ProjectPaths(
        root=root,
        data_dir=data_dir,
        default_dataset=data_dir / "carrier_underwriting.json",
    )


@dataclass(frozen=True)
class DataSourceConfig:
    source: str
    local_path: str
    aws_region: Optional[str]
    timeout: float
    log_level: str


def get_data_source_config() -> DataSourceConfig:
    """
    Where the underwriting dataset comes from, via environment variables.

    Env:
      QUOTE_DATA_SOURCE  (default: <root>/data/carrier_underwriting.json)
                         local path, http(s):// URL or s3://bucket/key
      DATA_LOCAL_PATH    (default: /tmp/carrier_underwriting.json) cache for s3 downloads
      AWS_REGION / AWS_DEFAULT_REGION (optional)
      QUOTE_DATA_TIMEOUT (default: 10) seconds for http(s) fetches
      LOG_LEVEL          (default: INFO)
    """
    timeout_raw = _env("QUOTE_DATA_TIMEOUT", "10") or "10"
    try:
        timeout = float(timeout_raw)
    except ValueError as e:
        raise ValueError(f"QUOTE_DATA_TIMEOUT must be a number, got: {timeout_raw}") from e

    return DataSourceConfig(
        source=_env("QUOTE_DATA_SOURCE", str(get_paths().default_dataset))
        or str(get_paths().default_dataset),
        local_path=_env("DATA_LOCAL_PATH", "/tmp/carrier_underwriting.json")
        or "/tmp/carrier_underwriting.json",
        aws_region=_env("AWS_REGION") or _env("AWS_DEFAULT_REGION"),
        timeout=timeout,
        log_level=(_env("LOG_LEVEL", "INFO") or "INFO").upper(),
    )
