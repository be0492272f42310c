from __future__ import annotations

import argparse
import datetime as dt
import logging

from fintrack.domain.snapshot import BENCHMARK_INDICES
from fintrack.providers.http import UrllibTransport
from fintrack.providers.yahoo_provider import YahooMarketDataProvider
from fintrack.repositories.document_store import DocumentStore
from fintrack.repositories.json_document_store import JsonDocumentStore
from fintrack.repositories.sql_document_store import SqlDocumentStore
from fintrack.services.daily_prices_service import DailyRunResult, run_daily_fetch
from fintrack.services.local_market import build_local_market_chain
from fintrack.services.pacing import Pacer
from fintrack.services.resolver import PriceResolver
from fintrack.settings import Settings, get_settings


log = logging.getLogger(__name__)


def build_store(settings: Settings) -> DocumentStore:
    # If FINTRACK_DATABASE_URL is set -> SQL store, otherwise JSON files
    if settings.database_url:
        return SqlDocumentStore()
    return JsonDocumentStore(root=settings.data_dir)


def build_resolver(settings: Settings, market_data: YahooMarketDataProvider) -> PriceResolver:
    transport = UrllibTransport(timeout_sec=settings.http_timeout_sec)
    local_chain = build_local_market_chain(fetch_text=transport.get_text, fetch_json=transport.get_json)
    return PriceResolver(local_chain=local_chain, market_data=market_data)


def run(
    settings: Settings,
    *,
    store: DocumentStore | None = None,
    market_data: YahooMarketDataProvider | None = None,
    day: dt.date | None = None,
    delay_sec: float | None = None,
    with_indices: bool = True,
) -> DailyRunResult:
    store = store if store is not None else build_store(settings)
    market_data = market_data or YahooMarketDataProvider()
    pacer = Pacer(delay_sec=settings.request_delay_sec if delay_sec is None else delay_sec)

    return run_daily_fetch(
        store=store,
        resolver=build_resolver(settings, market_data),
        market_data=market_data,
        pacer=pacer,
        day=day,
        indices=BENCHMARK_INDICES if with_indices else (),
        history_days=settings.history_days,
    )


def _parse_args(argv: list[str] | None) -> argparse.Namespace:
    parser = argparse.ArgumentParser(prog="fintrack-fetch-prices", description="Fetch daily prices for all portfolios.")
    parser.add_argument("--date", type=dt.date.fromisoformat, default=None, help="YYYY-MM-DD, default: today (local)")
    parser.add_argument("--no-indices", action="store_true", help="skip the benchmark index history")
    parser.add_argument("--delay", type=float, default=None, help="pause between requests, in seconds")
    return parser.parse_args(argv)


def main(argv: list[str] | None = None, *, store: DocumentStore | None = None) -> int:
    args = _parse_args(argv)
    logging.basicConfig(format="%(asctime)s %(levelname)s %(name)s: %(message)s")

    try:
        settings = get_settings()
        logging.getLogger().setLevel(getattr(logging, settings.log_level, logging.INFO))
        res = run(
            settings,
            store=store,
            day=args.date,
            delay_sec=args.delay,
            with_indices=not args.no_indices,
        )
    except Exception:
        log.exception("daily price fetch failed")
        return 1

    log.info(
        "Done: %d/%d symbols fetched, %d indices saved",
        res.fetched,
        res.total,
        res.indices_saved,
    )
    return 0
