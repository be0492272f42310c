from __future__ import annotations

import datetime as dt
from dataclasses import dataclass, field
from decimal import Decimal

from fintrack.domain.quote import PriceQuote


DAILY_PRICES_COLLECTION = "dailyPrices"
INDEX_HISTORY_COLLECTION = "indexHistory"
INDEX_HISTORY_DOC_ID = "latest"


@dataclass(frozen=True, slots=True)
class BenchmarkIndex:
    symbol: str
    name: str


BENCHMARK_INDICES: tuple[BenchmarkIndex, ...] = (
    BenchmarkIndex(symbol="ACWI", name="MSCI ACWI"),
    BenchmarkIndex(symbol="SPY", name="S&P 500"),
    BenchmarkIndex(symbol="QQQ", name="NASDAQ"),
    BenchmarkIndex(symbol="^TA125.TA", name="TA-125"),
)


@dataclass
class DailyPriceDocument:
    """
    Snapshot of one run for one calendar day.
    Written as a whole; a rerun for the same day replaces it.
    """
    date: dt.date
    total_symbols: int
    prices: dict[str, PriceQuote] = field(default_factory=dict)

    def __post_init__(self) -> None:
        if not isinstance(self.date, dt.date):
            raise ValueError("daily_prices.date must be a date")
        if self.total_symbols < 0:
            raise ValueError("daily_prices.total_symbols must be >= 0")

    @property
    def doc_id(self) -> str:
        return self.date.isoformat()

    @property
    def fetched_symbols(self) -> int:
        return len(self.prices)

    def to_record(self) -> dict:
        return {
            "date": self.doc_id,
            "prices": {symbol: q.to_record() for symbol, q in self.prices.items()},
            "fetchedSymbols": self.fetched_symbols,
            "totalSymbols": self.total_symbols,
        }


@dataclass
class IndexSeries:
    symbol: str
    name: str
    history: dict[str, Decimal]

    def to_record(self) -> dict:
        return {
            "name": self.name,
            "history": {day: str(price) for day, price in sorted(self.history.items())},
        }


@dataclass
class IndexHistoryDocument:
    indices: dict[str, IndexSeries] = field(default_factory=dict)

    def to_record(self) -> dict:
        return {"indices": {symbol: s.to_record() for symbol, s in self.indices.items()}}
