from __future__ import annotations

import datetime as dt
import re
from dataclasses import dataclass
from decimal import Decimal


LOCAL_CURRENCY = "ILS"
DEFAULT_CURRENCY = "USD"

_CURRENCY_RE = re.compile(r"^[A-Za-z]{3}$")


@dataclass(frozen=True, slots=True)
class PriceQuote:
    symbol: str
    price: Decimal
    currency: str              # code à 3 lettres, ex: "USD", "ILS", "GBp"
    name: str
    fetched_at: dt.datetime    # UTC timestamp
    source: str

    def __post_init__(self) -> None:
        if not self.symbol or not self.symbol.strip():
            raise ValueError("price_quote.symbol must be non-empty")
        if not isinstance(self.price, Decimal):
            raise ValueError("price_quote.price must be a Decimal")
        if not self.price.is_finite():
            raise ValueError("price_quote.price must be finite")
        if not isinstance(self.currency, str) or not _CURRENCY_RE.match(self.currency):
            raise ValueError("price_quote.currency must be a 3-letter code")
        if not isinstance(self.name, str) or not self.name.strip():
            raise ValueError("price_quote.name must be non-empty")
        if not isinstance(self.fetched_at, dt.datetime):
            raise ValueError("price_quote.fetched_at must be a datetime")
        if self.fetched_at.tzinfo is None:
            raise ValueError("price_quote.fetched_at must be timezone-aware (UTC)")
        if not self.source or not self.source.strip():
            raise ValueError("price_quote.source must be non-empty")

    def to_record(self) -> dict:
        return {
            "price": str(self.price),
            "currency": self.currency,
            "name": self.name,
            "fetchedAt": self.fetched_at.isoformat(),
        }


def utc_now() -> dt.datetime:
    return dt.datetime.now(dt.timezone.utc)
