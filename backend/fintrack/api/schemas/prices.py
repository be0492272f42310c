from __future__ import annotations

import datetime as dt

from pydantic import BaseModel, Field


class QuoteOut(BaseModel):
    price: str
    currency: str
    name: str
    fetchedAt: dt.datetime


class DailyPricesOut(BaseModel):
    date: dt.date
    prices: dict[str, QuoteOut]
    fetchedSymbols: int = Field(ge=0)
    totalSymbols: int = Field(ge=0)
    updatedAt: dt.datetime | None = None


class SymbolPriceOut(QuoteOut):
    symbol: str
    date: dt.date


class PriceRunResult(BaseModel):
    day: dt.date
    total: int = Field(ge=0)
    fetched: int = Field(ge=0)
    failed: list[str]
    prices_saved: bool
    indices_saved: int = Field(ge=0)
