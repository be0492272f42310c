from __future__ import annotations

import datetime as dt
import logging
from dataclasses import dataclass, field
from typing import Sequence

from fintrack.domain.snapshot import (
    BENCHMARK_INDICES,
    BenchmarkIndex,
    DailyPriceDocument,
    IndexHistoryDocument,
    IndexSeries,
)
from fintrack.providers.yahoo_provider import YahooMarketDataProvider
from fintrack.repositories.document_store import DocumentStore
from fintrack.services.pacing import Pacer
from fintrack.services.resolver import PriceResolver
from fintrack.services.symbol_collector import collect_symbols_from_store


log = logging.getLogger(__name__)


@dataclass
class DailyRunResult:
    day: dt.date
    total: int
    fetched: int
    failed: list[str] = field(default_factory=list)
    prices_saved: bool = False
    indices_saved: int = 0


def resolve_prices(
    symbols: Sequence[str],
    *,
    resolver: PriceResolver,
    pacer: Pacer,
    day: dt.date,
) -> tuple[DailyPriceDocument, list[str]]:
    document = DailyPriceDocument(date=day, total_symbols=len(symbols))
    failed: list[str] = []

    for symbol, quote in pacer.run(symbols, resolver.resolve):
        if quote is None:
            log.warning("%s: failed to fetch", symbol)
            failed.append(symbol)
            continue
        document.prices[symbol] = quote
        log.info("%s: %s %s (%s)", symbol, quote.price, quote.currency, quote.source)

    return document, failed


def fetch_index_history(
    provider: YahooMarketDataProvider,
    *,
    indices: Sequence[BenchmarkIndex] = BENCHMARK_INDICES,
    pacer: Pacer,
    days: int = 365,
    now: dt.datetime | None = None,
) -> IndexHistoryDocument:
    document = IndexHistoryDocument()

    def _fetch(index: BenchmarkIndex) -> dict | None:
        log.info("Fetching %s (%s)...", index.name, index.symbol)
        return provider.history(index.symbol, days=days, now=now)

    for index, history in pacer.run(indices, _fetch):
        if not history:
            log.warning("%s: failed to fetch history", index.name)
            continue
        document.indices[index.symbol] = IndexSeries(symbol=index.symbol, name=index.name, history=history)
        log.info("%s: %d days", index.name, len(history))

    return document


def run_daily_fetch(
    *,
    store: DocumentStore,
    resolver: PriceResolver,
    market_data: YahooMarketDataProvider,
    pacer: Pacer,
    day: dt.date | None = None,
    indices: Sequence[BenchmarkIndex] = BENCHMARK_INDICES,
    history_days: int = 365,
) -> DailyRunResult:
    """
    One full run: collect, resolve, persist. Store errors propagate;
    per-symbol and per-index failures only show up in the result and the log.
    """
    # jour calendaire local, pas UTC
    if day is None:
        day = dt.date.today()
    log.info("Starting daily price fetch for %s", day.isoformat())

    symbols = collect_symbols_from_store(store)
    log.info("Found %d unique symbols", len(symbols))

    document, failed = resolve_prices(symbols, resolver=resolver, pacer=pacer, day=day)
    result = DailyRunResult(day=day, total=len(symbols), fetched=document.fetched_symbols, failed=failed)

    if document.prices:
        store.set_daily_prices(document)
        result.prices_saved = True
        log.info("Saved %d prices for %s", document.fetched_symbols, document.doc_id)
    else:
        log.warning("No prices fetched")

    if indices:
        history = fetch_index_history(market_data, indices=indices, pacer=pacer, days=history_days)
        if history.indices:
            store.set_index_history(history)
            result.indices_saved = len(history.indices)
            log.info("Saved index history for %d indices", len(history.indices))

    return result
