# src/api/lambda_handler.py
"""
AWS Lambda handler for FastAPI using Mangum (ASGI adapter).

How it works:
- API Gateway invokes Lambda
- Mangum translates the event into an ASGI request
- FastAPI handles routing (/health, /carriers, /quote, /quote/html)
- Response is returned back to API Gateway

Dataset loading:
- We trigger get_calculator() at import time (cold start) so the dataset is ready.
- QUOTE_DATA_SOURCE may point at s3://bucket/key; the file is cached at
  DATA_LOCAL_PATH (default /tmp/carrier_underwriting.json).
"""

from __future__ import annotations

import os

from mangum import Mangum

from src.api.app import app
from src.quoting.service import get_calculator
from src.utils.log import setup_logging


# Warm up / pre-load dataset at cold start for lower first-request latency.
_PRELOAD_DATA = os.getenv("PRELOAD_DATA", "true").lower() in {"1", "true", "yes"}

setup_logging()

if _PRELOAD_DATA:
    # Ensure Lambda has permission to s3:GetObject for an s3:// QUOTE_DATA_SOURCE.
    get_calculator()


# Mangum handler
handler = Mangum(app)
