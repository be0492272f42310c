from __future__ import annotations

import datetime as dt

from fastapi import APIRouter, Depends, HTTPException, Query

from fintrack.api.deps import get_document_store
from fintrack.api.schemas.prices import DailyPricesOut, PriceRunResult, SymbolPriceOut
from fintrack.job import run
from fintrack.repositories.document_store import DocumentStore
from fintrack.settings import get_settings


router = APIRouter(prefix="/prices", tags=["prices"])


@router.get("/latest", response_model=DailyPricesOut)
def latest_prices(store: DocumentStore = Depends(get_document_store)):
    doc = store.latest_daily_prices()
    if doc is None:
        raise HTTPException(status_code=404, detail="no daily prices yet")
    return doc


@router.get("/{day}", response_model=DailyPricesOut)
def prices_for_day(day: dt.date, store: DocumentStore = Depends(get_document_store)):
    doc = store.get_daily_prices(day)
    if doc is None:
        raise HTTPException(status_code=404, detail=f"no prices for {day.isoformat()}")
    return doc


@router.get("/{day}/{symbol}", response_model=SymbolPriceOut)
def price_for_symbol(day: dt.date, symbol: str, store: DocumentStore = Depends(get_document_store)):
    doc = store.get_daily_prices(day)
    quote = (doc or {}).get("prices", {}).get(symbol)
    if quote is None:
        raise HTTPException(status_code=404, detail=f"no price for {symbol} on {day.isoformat()}")
    return SymbolPriceOut(symbol=symbol, date=day, **quote)


@router.post("/run", response_model=PriceRunResult)
def run_daily(
    day: dt.date | None = Query(default=None, description="YYYY-MM-DD, default: today (local)"),
    with_indices: bool = Query(default=True),
    store: DocumentStore = Depends(get_document_store),
):
    res = run(get_settings(), store=store, day=day, with_indices=with_indices)
    return PriceRunResult(
        day=res.day,
        total=res.total,
        fetched=res.fetched,
        failed=res.failed,
        prices_saved=res.prices_saved,
        indices_saved=res.indices_saved,
    )
