from __future__ import annotations

import datetime as dt
from abc import ABC, abstractmethod

from fintrack.domain.snapshot import DailyPriceDocument, IndexHistoryDocument


USERS_COLLECTION = "users"
PORTFOLIO_DOC_ID = "data"


def portfolio_collection(user_id: str) -> str:
    return f"{USERS_COLLECTION}/{user_id}/portfolio"


class DocumentStore(ABC):
    """
    Subset of a document database the price job needs.
    Writes replace the whole document and stamp `updatedAt` at write time.
    """

    @abstractmethod
    def list_user_ids(self) -> list[str]: ...

    @abstractmethod
    def get_portfolio(self, user_id: str) -> dict | None: ...

    @abstractmethod
    def put_portfolio(self, user_id: str, doc: dict) -> None: ...

    @abstractmethod
    def set_daily_prices(self, document: DailyPriceDocument) -> None: ...

    @abstractmethod
    def get_daily_prices(self, day: dt.date) -> dict | None: ...

    @abstractmethod
    def latest_daily_prices(self) -> dict | None: ...

    @abstractmethod
    def set_index_history(self, document: IndexHistoryDocument) -> None: ...

    @abstractmethod
    def get_index_history(self) -> dict | None: ...
