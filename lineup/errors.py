"""Exception types raised by the ledger store.

Every storage failure is surfaced to the caller as one of these; nothing is
recovered internally. The CLI owns the single top-level handler that reports
the message and exits non-zero.
"""

from __future__ import annotations


class LedgerError(Exception):
    """Base class for all ledger store failures."""


class SchemaInitError(LedgerError):
    """The store file or its tables could not be created/opened."""


class StoreQueryError(LedgerError):
    """A read against the store failed."""


class StoreWriteError(LedgerError):
    """A write against the store failed (constraint violation, I/O error)."""


__all__ = [
    "LedgerError",
    "SchemaInitError",
    "StoreQueryError",
    "StoreWriteError",
]
