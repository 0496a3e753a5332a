"""SQLAlchemy engine/session helpers for the ledger store.

Usage
-----
from lineup.db.client import init_schema, make_engine, make_session_factory, session_scope

engine = make_engine("sqlite:///calendar.db")
init_schema(engine)
factory = make_session_factory(engine)

with session_scope(factory) as s:
    s.execute(...)

Nothing here is cached at module level: the caller owns the engine and passes
the session factory explicitly to whatever needs database access.
"""

from __future__ import annotations

from collections.abc import Iterator
from contextlib import contextmanager

from sqlalchemy import create_engine, event
from sqlalchemy.engine import Engine
from sqlalchemy.exc import SQLAlchemyError
from sqlalchemy.orm import Session, sessionmaker

from ..errors import SchemaInitError
from .models import Base

DEFAULT_DATABASE_URL = "sqlite:///calendar.db"


def _install_sqlite_pragmas(engine: Engine) -> None:
    """Enforce FKs and make every SQLite transaction take the write lock up front.

    pysqlite's own transaction handling defers ``BEGIN`` until the first DML
    statement, which leaves a read-then-insert sequence open to a concurrent
    writer. Disabling it and emitting ``BEGIN IMMEDIATE`` ourselves makes the
    month existence check and the insert that follows one serializable unit.
    """

    @event.listens_for(engine, "connect")
    def _on_connect(dbapi_conn, _record) -> None:
        dbapi_conn.isolation_level = None
        cursor = dbapi_conn.cursor()
        try:
            cursor.execute("PRAGMA foreign_keys = ON")
        finally:
            cursor.close()

    @event.listens_for(engine, "begin")
    def _on_begin(conn) -> None:
        conn.exec_driver_sql("BEGIN IMMEDIATE")


def make_engine(database_url: str | None = None, *, echo: bool = False) -> Engine:
    """Create an engine for ``database_url`` (defaults to ``calendar.db`` in the CWD)."""

    url = database_url or DEFAULT_DATABASE_URL
    engine = create_engine(url, echo=echo)
    if engine.dialect.name == "sqlite":
        _install_sqlite_pragmas(engine)
    return engine


def init_schema(engine: Engine) -> None:
    """Create the ``month``, ``entries`` and ``statics`` tables when absent.

    Safe to call on every startup. There is no migration path: an existing
    table is left exactly as it is.
    """

    try:
        Base.metadata.create_all(bind=engine, checkfirst=True)
    except SQLAlchemyError as e:
        raise SchemaInitError(f"couldn't initialize store at {engine.url}: {e}") from e


def make_session_factory(engine: Engine) -> sessionmaker[Session]:
    """Return a session factory bound to ``engine``.

    Objects stay usable after commit so fetched rows can be handed to the
    formatter once the session is closed.
    """

    return sessionmaker(bind=engine, expire_on_commit=False, class_=Session)


@contextmanager
def session_scope(factory: sessionmaker[Session]) -> Iterator[Session]:
    """Provide a transactional scope around a series of operations."""

    session = factory()
    try:
        yield session
        session.commit()
    except Exception:
        session.rollback()
        raise
    finally:
        session.close()


__all__ = [
    "DEFAULT_DATABASE_URL",
    "init_schema",
    "make_engine",
    "make_session_factory",
    "session_scope",
]
