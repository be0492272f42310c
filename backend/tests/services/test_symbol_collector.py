from fintrack.repositories.in_memory_document_store import InMemoryDocumentStore
from fintrack.services.symbol_collector import collect_symbols, collect_symbols_from_store


def test_holdings_and_bonds_collected_in_first_seen_order():
    docs = [
        {
            "holdings": [{"symbol": "AAPL"}, {"symbol": "VOO"}],
            "bonds": [{"symbol": "TLT", "securityNumber": "1135912"}],
        },
        {"holdings": [{"symbol": "MSFT"}]},
    ]

    assert collect_symbols(docs) == ["AAPL", "VOO", "TLT", "1135912", "MSFT"]


def test_duplicates_across_and_within_users_kept_once():
    docs = [
        {"holdings": [{"symbol": "AAPL"}, {"symbol": "AAPL"}], "bonds": [{"securityNumber": "1135912"}]},
        {"holdings": [{"symbol": "AAPL"}], "bonds": [{"symbol": "1135912", "securityNumber": "1135912"}]},
    ]

    out = collect_symbols(docs)

    assert out == ["AAPL", "1135912"]
    assert len(out) == len(set(out))


def test_size_bounded_by_holdings_plus_twice_bonds():
    docs = [
        {"holdings": [{"symbol": "A"}, {"symbol": "B"}], "bonds": [{"symbol": "C", "securityNumber": "1"}]},
        {"holdings": [{"symbol": "D"}], "bonds": [{"symbol": "E", "securityNumber": "2"}, {"securityNumber": "3"}]},
    ]
    holdings = sum(len(d["holdings"]) for d in docs)
    bonds = sum(len(d["bonds"]) for d in docs)

    assert len(collect_symbols(docs)) <= holdings + 2 * bonds


def test_numeric_security_number_becomes_string():
    assert collect_symbols([{"bonds": [{"securityNumber": 1135912}]}]) == ["1135912"]


def test_malformed_documents_and_entries_skipped():
    docs = [
        None,
        "not a document",
        {"holdings": "AAPL"},
        {"holdings": [None, "AAPL", {"qty": 3}, {"symbol": ""}, {"symbol": "  "}, {"symbol": "MSFT"}]},
        {"bonds": [{"symbol": None, "securityNumber": True}, {"securityNumber": "1135912"}]},
    ]

    assert collect_symbols(docs) == ["MSFT", "1135912"]


def test_collect_from_store_reads_every_user():
    store = InMemoryDocumentStore(
        users={
            "u1": {"holdings": [{"symbol": "AAPL"}]},
            "u2": None,
            "u3": {"bonds": [{"securityNumber": "1135912"}]},
        }
    )

    assert collect_symbols_from_store(store) == ["AAPL", "1135912"]


def test_identifiers_kept_verbatim():
    docs = [{"holdings": [{"symbol": "AAPL "}, {"symbol": "AAPL"}], "bonds": [{"symbol": "\t"}]}]

    assert collect_symbols(docs) == ["AAPL ", "AAPL"]
