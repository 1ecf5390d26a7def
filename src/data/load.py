# src/data/load.py
"""
Load the carrier underwriting dataset.

Accepted sources:
- an already-parsed mapping (returned as-is)
- a local JSON file path (str or PathLike)
- an http(s):// URL (fetched with httpx)
- an s3://bucket/key URI (downloaded once to DATA_LOCAL_PATH, then read)

Failures surface as one descriptive exception; there is no retry logic.
"""

from __future__ import annotations

import logging
import os
from collections.abc import Mapping
from typing import Any, Optional

from src.utils.config import get_data_source_config
from src.utils.data_store import ensure_dataset_downloaded
from src.utils.io import fetch_json, read_json

logger = logging.getLogger(__name__)


def load_underwriting_data(source: Any, *, timeout: Optional[float] = None) -> Any:
    if isinstance(source, Mapping):
        return source

    if not source:
        raise TypeError("A source is required to load underwriting data.")

    if not isinstance(source, (str, os.PathLike)):
        raise TypeError("source must be either a mapping or a string path/URL.")

    location = os.fspath(source)
    cfg = get_data_source_config()

    if location.startswith(("http://", "https://")):
        logger.info("Fetching underwriting data from %s", location)
        return fetch_json(location, timeout=timeout if timeout is not None else cfg.timeout)

    if location.startswith("s3://"):
        logger.info("Loading underwriting data from %s", location)
        location = ensure_dataset_downloaded(
            data_s3_uri=location,
            local_path=cfg.local_path,
            aws_region=cfg.aws_region,
        )

    logger.info("Reading underwriting data from %s", location)
    return read_json(location)
