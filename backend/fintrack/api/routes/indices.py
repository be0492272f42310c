from __future__ import annotations

from fastapi import APIRouter, Depends, HTTPException

from fintrack.api.deps import get_document_store
from fintrack.api.schemas.indices import IndexHistoryOut
from fintrack.repositories.document_store import DocumentStore


router = APIRouter(prefix="/indices", tags=["indices"])


@router.get("", response_model=IndexHistoryOut)
def index_history(store: DocumentStore = Depends(get_document_store)):
    doc = store.get_index_history()
    if doc is None:
        raise HTTPException(status_code=404, detail="no index history yet")
    return doc
