"""
Yahoo Finance market data via yfinance.

Everything yfinance-specific (Ticker.info, Ticker.history and the pandas frame
it returns) stays in the two default callables below; the provider itself only
sees plain dicts and (timestamp, close) pairs, so tests can swap them out.
"""
from __future__ import annotations

import datetime as dt
import logging
import math
from decimal import Decimal, InvalidOperation
from typing import Any, Callable, Iterable

import yfinance as yf

from fintrack.domain.quote import DEFAULT_CURRENCY, PriceQuote, utc_now


log = logging.getLogger(__name__)

QuoteFn = Callable[[str], dict[str, Any] | None]
# (symbol, start, end) -> [(timestamp, close), ...]
HistoryFn = Callable[[str, dt.datetime, dt.datetime], Iterable[tuple[Any, Any]]]


def _yf_quote(symbol: str) -> dict[str, Any] | None:
    return yf.Ticker(symbol).info


def _yf_history(symbol: str, start: dt.datetime, end: dt.datetime) -> list[tuple[Any, Any]]:
    # yfinance: `end` exclusif, +1 jour pour garder la séance du jour
    frame = yf.Ticker(symbol).history(start=start, end=end + dt.timedelta(days=1), interval="1d", auto_adjust=False)
    if frame is None or frame.empty or "Close" not in frame:
        return []
    return list(frame["Close"].items())


def _to_decimal(value: Any) -> Decimal | None:
    if value is None or isinstance(value, bool):
        return None
    if isinstance(value, float) and (math.isnan(value) or math.isinf(value)):
        return None
    try:
        d = Decimal(str(value))
    except InvalidOperation:
        return None
    return d if d.is_finite() else None


def _to_day(value: Any) -> str | None:
    if value is None:
        return None
    # pandas.Timestamp est une sous-classe de datetime
    if isinstance(value, dt.datetime):
        return value.date().isoformat()
    if isinstance(value, dt.date):
        return value.isoformat()
    if isinstance(value, str) and value.strip():
        try:
            return dt.date.fromisoformat(value.strip()[:10]).isoformat()
        except ValueError:
            return None
    return None


class YahooMarketDataProvider:
    SOURCE = "yahoo"

    def __init__(self, *, quote_fn: QuoteFn | None = None, history_fn: HistoryFn | None = None) -> None:
        self._quote_fn = quote_fn or _yf_quote
        self._history_fn = history_fn or _yf_history

    def __call__(self, symbol: str) -> PriceQuote | None:
        return self.quote(symbol)

    def quote(self, symbol: str) -> PriceQuote | None:
        """Single quote lookup. Never retries; any failure returns None."""
        try:
            info = self._quote_fn(symbol)
        except Exception as e:
            log.warning("Yahoo failed for %s: %s", symbol, e)
            return None

        if not isinstance(info, dict):
            return None

        price = _to_decimal(info.get("regularMarketPrice"))
        if price is None:
            log.info("Yahoo returned no regularMarketPrice for %s", symbol)
            return None

        currency = info.get("currency") or DEFAULT_CURRENCY
        name = info.get("shortName") or info.get("longName") or symbol

        try:
            return PriceQuote(
                symbol=symbol,
                price=price,
                currency=str(currency),
                name=str(name).strip() or symbol,
                fetched_at=utc_now(),
                source=self.SOURCE,
            )
        except ValueError as e:
            log.warning("Yahoo returned an unusable quote for %s: %s", symbol, e)
            return None

    def history(self, symbol: str, *, days: int = 365, now: dt.datetime | None = None) -> dict[str, Decimal] | None:
        """
        Daily closes over the trailing `days`, keyed by ISO date.
        Datapoints without a date or a close are skipped.
        """
        end = now or utc_now()
        start = end - dt.timedelta(days=days)
        try:
            rows = list(self._history_fn(symbol, start, end))
        except Exception as e:
            log.warning("Failed to fetch history for %s: %s", symbol, e)
            return None

        out: dict[str, Decimal] = {}
        for stamp, close in rows:
            day = _to_day(stamp)
            price = _to_decimal(close)
            if day is None or price is None:
                continue
            out[day] = price
        return out
