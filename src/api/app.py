# src/api/app.py
"""
FastAPI service for the carrier quote engine (thin API wrapper).

Endpoints:
- GET  /health      -> status + number of carriers loaded
- GET  /carriers    -> carrier names in dataset order
- POST /quote       -> sorted quotes with breakdowns
- POST /quote/html  -> the same quotes rendered as an HTML list

The API layer stays thin:
- validates input shape
- calls src.quoting.service
"""

from __future__ import annotations

from typing import Any, Dict, List, Optional, Union

from fastapi import FastAPI, HTTPException
from fastapi.responses import HTMLResponse
from pydantic import BaseModel, Field

from src.quoting.service import calculate, get_calculator, quote_from_request_dict
from src.render.quote_list import render_quote_list, to_html
from src.utils.log import setup_logging


app = FastAPI(title="Carrier Quote Engine", version="0.1.0")


# Load the dataset once at startup (better than module import-time for tests/reload)
@app.on_event("startup")
def _startup() -> None:
    setup_logging()
    get_calculator()  # caches the calculator


# -----------------------------
# Schemas
# -----------------------------
class QuoteRequest(BaseModel):
    age: float
    coverage_amount: float
    gender: str
    state: str = ""
    health_class: Optional[str] = None
    nicotine_use: Union[bool, str] = False
    modality: Optional[str] = None

    # Optional filters
    product_type: Optional[str] = None
    term_years: Optional[int] = None

    # Presentation passthrough
    link_url: Optional[str] = None
    button_text: Optional[str] = None


class QuoteListResponse(BaseModel):
    currency: str
    currency_symbol: str
    count: int
    quotes: List[Dict[str, Any]] = Field(default_factory=list)


# -----------------------------
# Routes
# -----------------------------
@app.get("/health")
def health() -> Dict[str, Any]:
    calc = get_calculator()
    return {"status": "ok", "carriers": len(calc.carriers)}


@app.get("/carriers")
def carriers() -> Dict[str, List[str]]:
    return {"carriers": get_calculator().list_carriers()}


@app.post("/quote", response_model=QuoteListResponse)
def quote(req: QuoteRequest) -> QuoteListResponse:
    try:
        out = quote_from_request_dict(req.model_dump())
    except (TypeError, ValueError) as e:
        raise HTTPException(status_code=400, detail=str(e)) from e
    return QuoteListResponse(**out)


@app.post("/quote/html", response_class=HTMLResponse)
def quote_html(req: QuoteRequest) -> HTMLResponse:
    try:
        quotes = calculate(req.model_dump())
    except (TypeError, ValueError) as e:
        raise HTTPException(status_code=400, detail=str(e)) from e
    items = render_quote_list(quotes, [])
    return HTMLResponse(content=to_html(items))
