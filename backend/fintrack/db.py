from __future__ import annotations

from functools import lru_cache

from sqlalchemy import create_engine
from sqlalchemy.engine import Engine, make_url
from sqlalchemy.orm import Session, sessionmaker

from fintrack.settings import get_settings


def get_database_url() -> str:
    """FINTRACK_DATABASE_URL, or a SQLite file next to the JSON documents."""
    settings = get_settings()
    if settings.database_url:
        return settings.database_url
    return f"sqlite:///{(settings.data_dir / 'fintrack.db').as_posix()}"


def make_engine(url: str) -> Engine:
    # the API and the job may share one SQLite connection across threads
    is_sqlite = make_url(url).get_backend_name() == "sqlite"
    return create_engine(url, connect_args={"check_same_thread": False} if is_sqlite else {})


@lru_cache
def get_session_factory() -> sessionmaker[Session]:
    return sessionmaker(bind=make_engine(get_database_url()), autoflush=False, expire_on_commit=False)


def init_db(engine: Engine) -> None:
    # import here to avoid circular imports
    from fintrack.repositories.sql_document_store import DocumentRow  # noqa: F401
    from fintrack.db_base import Base

    Base.metadata.create_all(engine)
