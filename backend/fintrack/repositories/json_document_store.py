from __future__ import annotations

import datetime as dt
import json
import logging
from pathlib import Path

from fintrack.domain.quote import utc_now
from fintrack.domain.snapshot import (
    DAILY_PRICES_COLLECTION,
    INDEX_HISTORY_COLLECTION,
    INDEX_HISTORY_DOC_ID,
    DailyPriceDocument,
    IndexHistoryDocument,
)
from fintrack.repositories.document_store import (
    PORTFOLIO_DOC_ID,
    USERS_COLLECTION,
    DocumentStore,
    portfolio_collection,
)


log = logging.getLogger(__name__)


class JsonDocumentStore(DocumentStore):
    """
    One JSON file per document, laid out like the Firestore paths:

        <root>/users/<uid>/portfolio/data.json
        <root>/dailyPrices/<YYYY-MM-DD>.json
        <root>/indexHistory/latest.json
    """

    def __init__(self, *, root: Path) -> None:
        self._root = root

    def list_user_ids(self) -> list[str]:
        users_dir = self._root / USERS_COLLECTION
        if not users_dir.exists():
            return []
        return sorted(p.name for p in users_dir.iterdir() if p.is_dir())

    def get_portfolio(self, user_id: str) -> dict | None:
        # un portefeuille illisible est ignoré, pas fatal
        path = self._doc_path(portfolio_collection(user_id), PORTFOLIO_DOC_ID)
        try:
            return self._read(path)
        except ValueError as e:
            log.warning("skipping unreadable portfolio for user %s: %s", user_id, e)
            return None

    def put_portfolio(self, user_id: str, doc: dict) -> None:
        self._write(self._doc_path(portfolio_collection(user_id), PORTFOLIO_DOC_ID), doc)

    def set_daily_prices(self, document: DailyPriceDocument) -> None:
        rec = document.to_record()
        rec["updatedAt"] = utc_now().isoformat()
        self._write(self._doc_path(DAILY_PRICES_COLLECTION, document.doc_id), rec)

    def get_daily_prices(self, day: dt.date) -> dict | None:
        return self._read(self._doc_path(DAILY_PRICES_COLLECTION, day.isoformat()))

    def latest_daily_prices(self) -> dict | None:
        folder = self._root / DAILY_PRICES_COLLECTION
        if not folder.exists():
            return None
        days = sorted(p.stem for p in folder.glob("*.json"))
        if not days:
            return None
        return self._read(folder / f"{days[-1]}.json")

    def set_index_history(self, document: IndexHistoryDocument) -> None:
        rec = document.to_record()
        rec["updatedAt"] = utc_now().isoformat()
        self._write(self._doc_path(INDEX_HISTORY_COLLECTION, INDEX_HISTORY_DOC_ID), rec)

    def get_index_history(self) -> dict | None:
        return self._read(self._doc_path(INDEX_HISTORY_COLLECTION, INDEX_HISTORY_DOC_ID))

    # ---------- internals ----------
    def _doc_path(self, collection: str, doc_id: str) -> Path:
        if not doc_id or "/" in doc_id or doc_id in (".", ".."):
            raise ValueError(f"invalid document id {doc_id!r}")
        return self._root / collection / f"{doc_id}.json"

    @staticmethod
    def _read(path: Path) -> dict | None:
        if not path.exists():
            return None
        raw = path.read_text(encoding="utf-8")
        try:
            payload = json.loads(raw)
        except json.JSONDecodeError as e:
            raise ValueError(f"{path}: invalid JSON ({e})") from e
        if not isinstance(payload, dict):
            raise ValueError(f"{path}: root must be an object")
        return payload

    @staticmethod
    def _write(path: Path, payload: dict) -> None:
        path.parent.mkdir(parents=True, exist_ok=True)
        tmp = path.with_suffix(path.suffix + ".tmp")
        tmp.write_text(json.dumps(payload, ensure_ascii=False, indent=2) + "\n", encoding="utf-8")
        tmp.replace(path)
