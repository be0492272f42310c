from __future__ import annotations

import logging
from typing import Any, Iterable

from fintrack.repositories.document_store import DocumentStore


log = logging.getLogger(__name__)


def _as_identifier(value: Any) -> str | None:
    # Firestore peut stocker un numéro de valeur comme entier
    if isinstance(value, bool):
        return None
    if isinstance(value, int):
        return str(value)
    # pas de strip: la clé reste le symbole tel quel dans le portefeuille
    if isinstance(value, str) and value.strip():
        return value
    return None


def _entries(doc: dict, key: str) -> list[dict]:
    items = doc.get(key)
    if not isinstance(items, list):
        return []
    return [x for x in items if isinstance(x, dict)]


def collect_symbols(portfolios: Iterable[dict | None]) -> list[str]:
    """
    Distinct identifiers referenced by holdings and bonds, in first-seen order.
    A bond contributes its symbol and its security number separately.
    Missing or malformed documents and entries are skipped.
    """
    seen: dict[str, None] = {}

    for doc in portfolios:
        if not isinstance(doc, dict):
            continue

        for holding in _entries(doc, "holdings"):
            ident = _as_identifier(holding.get("symbol"))
            if ident is not None:
                seen.setdefault(ident, None)

        for bond in _entries(doc, "bonds"):
            for key in ("symbol", "securityNumber"):
                ident = _as_identifier(bond.get(key))
                if ident is not None:
                    seen.setdefault(ident, None)

    return list(seen)


def collect_symbols_from_store(store: DocumentStore) -> list[str]:
    user_ids = store.list_user_ids()
    log.info("Found %d user references", len(user_ids))

    def _portfolios() -> Iterable[dict | None]:
        for uid in user_ids:
            doc = store.get_portfolio(uid)
            if doc is None:
                log.debug("no portfolio document for user %s", uid)
            yield doc

    return collect_symbols(_portfolios())
