from __future__ import annotations

import datetime as dt

from sqlalchemy import JSON, DateTime, String, func, select
from sqlalchemy.orm import Mapped, Session, mapped_column, sessionmaker

from fintrack.db import get_session_factory, init_db
from fintrack.db_base import Base
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


class DocumentRow(Base):
    __tablename__ = "documents"

    collection: Mapped[str] = mapped_column(String(256), primary_key=True)
    doc_id: Mapped[str] = mapped_column(String(128), primary_key=True)
    payload: Mapped[dict] = mapped_column(JSON, nullable=False)
    updated_at: Mapped[dt.datetime] = mapped_column(
        DateTime(timezone=True),
        server_default=func.now(),
        onupdate=func.now(),
        nullable=False,
    )


class SqlDocumentStore(DocumentStore):
    """Documents as JSON payloads keyed by (collection, doc_id); the DB stamps updated_at."""

    def __init__(self, *, session_factory: sessionmaker[Session] | None = None) -> None:
        if session_factory is None:
            session_factory = get_session_factory()
        self._session_factory = session_factory
        # ensure tables exist (V1 simple)
        init_db(session_factory.kw.get("bind"))

    def list_user_ids(self) -> list[str]:
        stmt = (
            select(DocumentRow.doc_id)
            .where(DocumentRow.collection == USERS_COLLECTION)
            .order_by(DocumentRow.doc_id)
        )
        with self._session_factory() as s:
            return list(s.execute(stmt).scalars().all())

    def get_portfolio(self, user_id: str) -> dict | None:
        return self._get(portfolio_collection(user_id), PORTFOLIO_DOC_ID, with_timestamp=False)

    def put_portfolio(self, user_id: str, doc: dict) -> None:
        with self._session_factory() as s:
            self._upsert(s, USERS_COLLECTION, user_id, {"id": user_id})
            self._upsert(s, portfolio_collection(user_id), PORTFOLIO_DOC_ID, doc)
            s.commit()

    def set_daily_prices(self, document: DailyPriceDocument) -> None:
        with self._session_factory() as s:
            self._upsert(s, DAILY_PRICES_COLLECTION, document.doc_id, document.to_record())
            s.commit()

    def get_daily_prices(self, day: dt.date) -> dict | None:
        return self._get(DAILY_PRICES_COLLECTION, day.isoformat())

    def latest_daily_prices(self) -> dict | None:
        stmt = (
            select(DocumentRow)
            .where(DocumentRow.collection == DAILY_PRICES_COLLECTION)
            .order_by(DocumentRow.doc_id.desc())
            .limit(1)
        )
        with self._session_factory() as s:
            row = s.execute(stmt).scalars().first()
            return None if row is None else self._to_payload(row)

    def set_index_history(self, document: IndexHistoryDocument) -> None:
        with self._session_factory() as s:
            self._upsert(s, INDEX_HISTORY_COLLECTION, INDEX_HISTORY_DOC_ID, document.to_record())
            s.commit()

    def get_index_history(self) -> dict | None:
        return self._get(INDEX_HISTORY_COLLECTION, INDEX_HISTORY_DOC_ID)

    # -------- internals --------
    def _get(self, collection: str, doc_id: str, *, with_timestamp: bool = True) -> dict | None:
        with self._session_factory() as s:
            row = s.get(DocumentRow, (collection, doc_id))
            if row is None:
                return None
            return self._to_payload(row) if with_timestamp else dict(row.payload)

    @staticmethod
    def _upsert(s: Session, collection: str, doc_id: str, payload: dict) -> None:
        row = s.get(DocumentRow, (collection, doc_id))
        if row is None:
            s.add(DocumentRow(collection=collection, doc_id=doc_id, payload=payload))
        else:
            # full replace, no merge
            row.payload = payload
            row.updated_at = func.now()

    @staticmethod
    def _to_payload(row: DocumentRow) -> dict:
        out = dict(row.payload)
        if row.updated_at is not None:
            out["updatedAt"] = row.updated_at.isoformat()
        return out
