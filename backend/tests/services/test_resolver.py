import datetime as dt
from decimal import Decimal

from fintrack.domain.quote import PriceQuote
from fintrack.services.resolver import PriceResolver, first_success


def _q(symbol: str, source: str = "stub") -> PriceQuote:
    return PriceQuote(
        symbol=symbol,
        price=Decimal("1"),
        currency="USD",
        name=symbol,
        fetched_at=dt.datetime(2026, 1, 1, tzinfo=dt.timezone.utc),
        source=source,
    )


class _Stub:
    def __init__(self, succeed_for=(), raise_for=()) -> None:
        self.calls: list[str] = []
        self._ok = set(succeed_for)
        self._raise = set(raise_for)

    def __call__(self, symbol: str):
        self.calls.append(symbol)
        if symbol in self._raise:
            raise RuntimeError(f"boom {symbol}")
        return _q(symbol) if symbol in self._ok else None


def test_local_identifier_goes_to_local_chain_only():
    local, market = _Stub(succeed_for={"1234567"}), _Stub()

    q = PriceResolver(local_chain=local, market_data=market).resolve("1234567")

    assert q.symbol == "1234567"
    assert local.calls == ["1234567"]
    assert market.calls == []


def test_qualified_symbol_has_no_suffix_retry():
    local, market = _Stub(), _Stub()

    assert PriceResolver(local_chain=local, market_data=market).resolve("AAPL.L") is None
    assert market.calls == ["AAPL.L"]
    assert local.calls == []


def test_bare_symbol_retries_suffixes_until_success():
    market = _Stub(succeed_for={"AAPL.DE"})

    q = PriceResolver(local_chain=_Stub(), market_data=market).resolve("AAPL")

    assert q.symbol == "AAPL.DE"
    assert market.calls == ["AAPL", "AAPL.L", "AAPL.DE"]


def test_bare_symbol_success_first_try():
    market = _Stub(succeed_for={"AAPL"})
    PriceResolver(local_chain=_Stub(), market_data=market).resolve("AAPL")
    assert market.calls == ["AAPL"]


def test_bare_symbol_all_suffixes_fail():
    market = _Stub()
    assert PriceResolver(local_chain=_Stub(), market_data=market).resolve("NOPE") is None
    assert market.calls == ["NOPE", "NOPE.L", "NOPE.DE", "NOPE.TA"]


def test_provider_exception_is_folded_into_unresolved():
    market = _Stub(succeed_for={"VOD.L"}, raise_for={"VOD"})

    q = PriceResolver(local_chain=_Stub(), market_data=market).resolve("VOD")

    assert q.symbol == "VOD.L"
    assert market.calls == ["VOD", "VOD.L"]


def test_local_chain_exception_never_reaches_caller():
    local = _Stub(raise_for={"1234567"})
    assert PriceResolver(local_chain=local, market_data=_Stub()).resolve("1234567") is None


def test_first_success_stops_at_first_quote():
    a, b, c = _Stub(), _Stub(succeed_for={"X"}), _Stub(succeed_for={"X"})

    q = first_success([a, b, c])("X")

    assert q is not None
    assert (a.calls, b.calls, c.calls) == (["X"], ["X"], [])


def test_first_success_empty_chain():
    assert first_success([])("X") is None
