import datetime as dt
from decimal import Decimal

import pytest
from sqlalchemy import create_engine
from sqlalchemy.orm import sessionmaker
from sqlalchemy.pool import StaticPool

from fintrack.domain.quote import PriceQuote
from fintrack.domain.snapshot import DailyPriceDocument, IndexHistoryDocument, IndexSeries
from fintrack.repositories.sql_document_store import SqlDocumentStore


@pytest.fixture
def store():
    engine = create_engine("sqlite://", connect_args={"check_same_thread": False}, poolclass=StaticPool)
    return SqlDocumentStore(session_factory=sessionmaker(bind=engine, autoflush=False, future=True))


def _doc(day: dt.date, *symbols: str) -> DailyPriceDocument:
    doc = DailyPriceDocument(date=day, total_symbols=len(symbols) + 1)
    for s in symbols:
        doc.prices[s] = PriceQuote(
            symbol=s,
            price=Decimal("42"),
            currency="USD",
            name=s,
            fetched_at=dt.datetime(2026, 3, 2, tzinfo=dt.timezone.utc),
            source="yahoo",
        )
    return doc


def test_portfolios_and_users(store):
    store.put_portfolio("u2", {"holdings": [{"symbol": "MSFT"}]})
    store.put_portfolio("u1", {"holdings": [{"symbol": "AAPL"}]})
    store.put_portfolio("u1", {"holdings": [{"symbol": "NVDA"}]})

    assert store.list_user_ids() == ["u1", "u2"]
    assert store.get_portfolio("u1") == {"holdings": [{"symbol": "NVDA"}]}
    assert store.get_portfolio("nobody") is None


def test_daily_prices_full_replace(store):
    day = dt.date(2026, 3, 2)
    store.set_daily_prices(_doc(day, "AAPL", "MSFT"))
    store.set_daily_prices(_doc(day, "NVDA"))

    rec = store.get_daily_prices(day)

    assert set(rec["prices"]) == {"NVDA"}
    assert rec["totalSymbols"] == 2
    assert rec["updatedAt"]


def test_latest_daily_prices(store):
    assert store.latest_daily_prices() is None

    store.set_daily_prices(_doc(dt.date(2026, 2, 27), "A"))
    store.set_daily_prices(_doc(dt.date(2026, 3, 2), "B"))

    assert store.latest_daily_prices()["date"] == "2026-03-02"


def test_index_history(store):
    doc = IndexHistoryDocument()
    doc.indices["^TA125.TA"] = IndexSeries(symbol="^TA125.TA", name="TA-125", history={"2026-03-02": Decimal("2450.3")})

    store.set_index_history(doc)

    rec = store.get_index_history()
    assert rec["indices"]["^TA125.TA"]["history"] == {"2026-03-02": "2450.3"}
    assert "updatedAt" in rec
