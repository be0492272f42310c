from __future__ import annotations

from functools import lru_cache

from fintrack.job import build_store
from fintrack.repositories.document_store import DocumentStore
from fintrack.settings import get_settings


@lru_cache
def get_document_store() -> DocumentStore:
    # FINTRACK_DATABASE_URL set -> SQL store (Postgres/SQLite), sinon fichiers JSON
    return build_store(get_settings())
