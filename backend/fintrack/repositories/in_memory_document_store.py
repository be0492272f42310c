from __future__ import annotations

import copy
import datetime as dt
from dataclasses import dataclass, field

from fintrack.domain.quote import utc_now
from fintrack.domain.snapshot import DailyPriceDocument, IndexHistoryDocument
from fintrack.repositories.document_store import DocumentStore


@dataclass
class InMemoryDocumentStore(DocumentStore):
    """
    Store en mémoire.
    - Déterministe
    - Facile à tester
    """
    users: dict[str, dict | None] = field(default_factory=dict)
    daily_prices: dict[str, dict] = field(default_factory=dict)
    index_history: dict | None = None
    writes: int = 0

    def list_user_ids(self) -> list[str]:
        return list(self.users)

    def get_portfolio(self, user_id: str) -> dict | None:
        doc = self.users.get(user_id)
        return copy.deepcopy(doc) if doc is not None else None

    def put_portfolio(self, user_id: str, doc: dict) -> None:
        self.users[user_id] = copy.deepcopy(doc)

    def set_daily_prices(self, document: DailyPriceDocument) -> None:
        rec = document.to_record()
        rec["updatedAt"] = utc_now().isoformat()
        self.daily_prices[document.doc_id] = rec
        self.writes += 1

    def get_daily_prices(self, day: dt.date) -> dict | None:
        rec = self.daily_prices.get(day.isoformat())
        return copy.deepcopy(rec) if rec is not None else None

    def latest_daily_prices(self) -> dict | None:
        if not self.daily_prices:
            return None
        return copy.deepcopy(self.daily_prices[max(self.daily_prices)])

    def set_index_history(self, document: IndexHistoryDocument) -> None:
        rec = document.to_record()
        rec["updatedAt"] = utc_now().isoformat()
        self.index_history = rec
        self.writes += 1

    def get_index_history(self) -> dict | None:
        return copy.deepcopy(self.index_history)
