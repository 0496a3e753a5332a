"""Ledger store: months, entries and static templates.

All reads and writes go through :class:`LedgerStore`, which owns one engine
and hands out short transactional sessions. Callers receive detached ORM rows
(``expire_on_commit=False``) that remain readable after the session closes.

Month bootstrap
---------------
A month bucket is created lazily the first time an entry is added to it. In
the same transaction every static template that exists at that instant is
copied into the new month as an entry. This happens once per ``(month,
year)``; statics added later never reach months that already exist, and
deleting a static never touches entries copied from it.
"""

from __future__ import annotations

from collections.abc import Callable, Iterator
from contextlib import contextmanager
from typing import TypeVar

from sqlalchemy import delete, select
from sqlalchemy.engine import Engine
from sqlalchemy.exc import SQLAlchemyError
from sqlalchemy.orm import Session, contains_eager, sessionmaker

from .db.client import init_schema, make_engine, make_session_factory, session_scope
from .db.models import Entry, Month, Static
from .errors import LedgerError, SchemaInitError, StoreQueryError, StoreWriteError
from .logging_setup import get_logger

logger = get_logger("lineup.ledger")

_T = TypeVar("_T")


def _validate_period(month: int, year: int) -> None:
    if not 1 <= month <= 12:
        raise ValueError(f"month must be in 1..12, got {month}")
    if year < 1:
        raise ValueError(f"year must be positive, got {year}")


def resolve_month(session: Session, month: int, year: int) -> Month:
    """Return the ``(month, year)`` bucket, creating and seeding it if absent.

    Runs inside the caller's transaction: the existence check, the month
    insert and the seeded entries are committed (or rolled back) together.
    """

    _validate_period(month, year)

    existing = (
        session.execute(
            select(Month).where(Month.month == month, Month.year == year).order_by(Month.id)
        )
        .scalars()
        .first()
    )
    if existing is not None:
        return existing

    row = Month(month=month, year=year)
    session.add(row)
    session.flush()  # assigns row.id

    statics = session.execute(select(Static).order_by(Static.id)).scalars().all()
    for stat in statics:
        session.add(Entry(name=stat.name, amount=stat.amount, month_id=row.id))
    session.flush()

    logger.info(
        "Created month %02d/%d (id=%d) seeded with %d static entries",
        month,
        year,
        row.id,
        len(statics),
    )
    return row


class LedgerStore:
    """Handle over the ledger database, passed explicitly to every caller."""

    def __init__(self, engine: Engine, factory: sessionmaker[Session] | None = None) -> None:
        self.engine = engine
        self._factory = factory or make_session_factory(engine)

    @classmethod
    def open(cls, database_url: str | None = None) -> LedgerStore:
        """Create the engine, make sure the schema exists and return a store.

        Raises :class:`~lineup.errors.SchemaInitError` when the store file or
        tables cannot be created.
        """

        engine = make_engine(database_url)
        try:
            init_schema(engine)
        except SchemaInitError:
            engine.dispose()
            raise
        logger.debug("Opened ledger store at %s", engine.url)
        return cls(engine)

    def close(self) -> None:
        self.engine.dispose()

    def __enter__(self) -> LedgerStore:
        return self

    def __exit__(self, *exc_info: object) -> None:
        self.close()

    # ---- internals ---------------------------------------------------------

    @contextmanager
    def _scope(self, error: type[LedgerError], action: str) -> Iterator[Session]:
        try:
            with session_scope(self._factory) as session:
                yield session
        except SQLAlchemyError as e:
            raise error(f"couldn't {action}: {e}") from e

    def _read(self, action: str, fn: Callable[[Session], list[_T]]) -> list[_T]:
        with self._scope(StoreQueryError, action) as session:
            return fn(session)

    # ---- months ------------------------------------------------------------

    def resolve_month(self, month: int, year: int) -> Month:
        """Return (creating and seeding when needed) the ``(month, year)`` bucket."""

        with self._scope(StoreWriteError, "resolve month") as session:
            return resolve_month(session, month, year)

    # ---- entries -----------------------------------------------------------

    def add_entry(self, name: str, amount: int, month: int, year: int) -> Entry:
        """Add an entry to ``(month, year)``, bootstrapping the month first.

        Month creation, seeding and the new entry share one transaction.
        """

        with self._scope(StoreWriteError, "insert into: entries") as session:
            bucket = resolve_month(session, month, year)
            entry = Entry(name=name, amount=amount, month=bucket)
            session.add(entry)
            session.flush()
            logger.debug(
                "Inserted entry id=%d %r amount=%d into month id=%d",
                entry.id,
                name,
                amount,
                bucket.id,
            )
            return entry

    def list_entries(self, month: int, year: int) -> list[Entry]:
        """Return the entries of ``(month, year)`` ordered by id; ``[]`` if the month is unknown."""

        stmt = (
            select(Entry)
            .join(Entry.month)
            .where(Month.month == month, Month.year == year)
            .options(contains_eager(Entry.month))
            .order_by(Entry.id)
        )
        return self._read("read entries", lambda s: list(s.execute(stmt).scalars().all()))

    # ---- statics -----------------------------------------------------------

    def add_static(self, name: str, amount: int) -> Static:
        """Add a static template. Existing months are not modified."""

        with self._scope(StoreWriteError, "insert into: statics") as session:
            row = Static(name=name, amount=amount)
            session.add(row)
            session.flush()
            logger.debug("Inserted static id=%d %r amount=%d", row.id, name, amount)
            return row

    def delete_static(self, static_id: int) -> bool:
        """Delete the static with ``static_id``; return whether a row was removed.

        Entries already seeded from it stay where they are.
        """

        with self._scope(StoreWriteError, "delete from: statics") as session:
            result = session.execute(delete(Static).where(Static.id == static_id))
            removed = bool(result.rowcount)
        if removed:
            logger.debug("Deleted static id=%d", static_id)
        else:
            logger.warning("No static with id=%d to delete", static_id)
        return removed

    def list_statics(self) -> list[Static]:
        return self._read(
            "read statics",
            lambda s: list(s.execute(select(Static).order_by(Static.id)).scalars().all()),
        )


__all__ = ["LedgerStore", "resolve_month"]
