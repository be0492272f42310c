import datetime as dt

from fintrack import job
from fintrack.providers.yahoo_provider import YahooMarketDataProvider
from fintrack.repositories.in_memory_document_store import InMemoryDocumentStore
from fintrack.repositories.json_document_store import JsonDocumentStore
from fintrack.settings import get_settings


def test_settings_defaults(monkeypatch, tmp_path):
    monkeypatch.setenv("FINTRACK_DATA_DIR", str(tmp_path / "data"))
    for var in ("FINTRACK_DATABASE_URL", "FINTRACK_REQUEST_DELAY_SEC", "FINTRACK_HISTORY_DAYS", "FINTRACK_LOG_LEVEL"):
        monkeypatch.delenv(var, raising=False)

    s = get_settings()

    assert s.data_dir == tmp_path / "data"
    assert s.data_dir.is_dir()
    assert s.database_url is None
    assert s.request_delay_sec == 0.5
    assert s.history_days == 365
    assert s.log_level == "INFO"


def test_json_store_selected_without_database_url(monkeypatch, tmp_path):
    monkeypatch.setenv("FINTRACK_DATA_DIR", str(tmp_path))
    monkeypatch.delenv("FINTRACK_DATABASE_URL", raising=False)

    assert isinstance(job.build_store(get_settings()), JsonDocumentStore)


def test_run_uses_injected_market_data(monkeypatch, tmp_path):
    monkeypatch.setenv("FINTRACK_DATA_DIR", str(tmp_path))
    store = InMemoryDocumentStore(users={"u1": {"holdings": [{"symbol": "MSFT"}]}})
    market = YahooMarketDataProvider(
        quote_fn=lambda s: {"regularMarketPrice": 415.1, "shortName": "Microsoft"} if s == "MSFT" else None,
        history_fn=lambda s, start, end: [],
    )

    res = job.run(get_settings(), store=store, market_data=market, day=dt.date(2026, 3, 2), delay_sec=0)

    assert res.fetched == 1
    assert store.get_daily_prices(dt.date(2026, 3, 2))["prices"]["MSFT"]["name"] == "Microsoft"
    assert res.indices_saved == 0


def test_main_exits_zero_with_nothing_to_fetch(monkeypatch, tmp_path):
    monkeypatch.setenv("FINTRACK_DATA_DIR", str(tmp_path))
    monkeypatch.delenv("FINTRACK_DATABASE_URL", raising=False)

    assert job.main(["--date", "2026-03-02", "--no-indices", "--delay", "0"], store=InMemoryDocumentStore()) == 0


def test_main_exits_one_when_store_unreadable(monkeypatch, tmp_path):
    monkeypatch.setenv("FINTRACK_DATA_DIR", str(tmp_path))

    class _Broken(InMemoryDocumentStore):
        def list_user_ids(self):
            raise PermissionError("missing or insufficient permissions")

    assert job.main(["--no-indices", "--delay", "0"], store=_Broken()) == 1


def test_main_exits_one_on_bad_configuration(monkeypatch, tmp_path):
    monkeypatch.setenv("FINTRACK_DATA_DIR", str(tmp_path))
    monkeypatch.setenv("FINTRACK_REQUEST_DELAY_SEC", "half a second")

    assert job.main(["--no-indices"], store=InMemoryDocumentStore()) == 1
