"""Engine/session helpers for the SQL backend."""
from __future__ import annotations

from contextlib import contextmanager
from functools import lru_cache
from typing import Iterator

from sqlalchemy import create_engine, event
from sqlalchemy.orm import declarative_base, sessionmaker, Session

from lease_api.core.config import get_settings

Base = declarative_base()


def _use_immediate_transactions(engine) -> None:
    """Make every SQLite transaction take the write lock when it begins.

    pysqlite defers BEGIN until the first write and SQLite ignores FOR UPDATE,
    so without this two check-then-write transactions can both pass their checks.
    """

    @event.listens_for(engine, "connect")
    def _disable_driver_begin(dbapi_connection, connection_record):
        dbapi_connection.isolation_level = None

    @event.listens_for(engine, "begin")
    def _begin_immediate(conn):
        conn.exec_driver_sql("BEGIN IMMEDIATE")


@lru_cache
def get_engine():
    settings = get_settings()
    url = (settings.database_url or "").strip()
    if not url:
        raise RuntimeError("DATABASE_URL must be configured to use the SQL backend.")
    engine = create_engine(url, future=True, pool_pre_ping=True)
    if engine.dialect.name == "sqlite":
        _use_immediate_transactions(engine)
    return engine


@lru_cache
def _get_sessionmaker():
    # expire_on_commit=False keeps detached entities readable by the serializers
    return sessionmaker(bind=get_engine(), autoflush=False, autocommit=False, expire_on_commit=False, future=True)


@contextmanager
def get_session() -> Iterator[Session]:
    session: Session = _get_sessionmaker()()
    try:
        yield session
    finally:
        session.close()


@contextmanager
def transaction() -> Iterator[Session]:
    """Run the block as one unit at the configured isolation level.

    Commits when the block finishes, rolls back on any exception and re-raises.
    """
    settings = get_settings()
    with get_session() as session:
        session.connection(execution_options={"isolation_level": settings.db_isolation_level})
        try:
            yield session
            session.commit()
        except Exception:
            session.rollback()
            raise
