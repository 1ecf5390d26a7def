# src/utils/data_store.py
from __future__ import annotations

import logging
from pathlib import Path
from typing import Optional, Tuple
from urllib.parse import urlparse

import boto3

logger = logging.getLogger(__name__)


def parse_s3_uri(uri: str) -> Tuple[str, str]:
    """Split s3://bucket/some/key.json into (bucket, key)."""
    parsed = urlparse(uri)
    if parsed.scheme != "s3":
        raise ValueError(f"Dataset URI must be s3://..., got: {uri}")
    bucket, key = parsed.netloc, parsed.path.lstrip("/")
    if not bucket or not key:
        raise ValueError(f"Dataset URI must name a bucket and key, got: {uri}")
    return bucket, key


def ensure_dataset_downloaded(*, data_s3_uri: str, local_path: str, aws_region: Optional[str] = None) -> str:
    """
    Return a local copy of the underwriting dataset stored at data_s3_uri.

    A non-empty file already at local_path is reused. Otherwise the object is
    fetched into a sibling ".part" file and renamed into place, so an
    interrupted download never leaves a truncated dataset behind.
    """
    bucket, key = parse_s3_uri(data_s3_uri)

    target = Path(local_path)
    if target.is_file() and target.stat().st_size > 0:
        logger.debug("Using cached dataset %s", target)
        return str(target)

    target.parent.mkdir(parents=True, exist_ok=True)
    partial = target.with_name(target.name + ".part")

    client = boto3.client("s3", region_name=aws_region) if aws_region else boto3.client("s3")
    logger.info("Downloading s3://%s/%s to %s", bucket, key, target)
    client.download_file(bucket, key, str(partial))
    partial.replace(target)
    return str(target)
