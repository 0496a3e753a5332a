"""db: storage layer of the ledger (SQLAlchemy over an embedded SQLite file).

Public exports
--------------
- ``Base`` and ``metadata`` for schema creation
- ORM models ``Month``, ``Entry`` and ``Static`` from ``lineup.db.models``
- Engine/session helpers in ``lineup.db.client``
"""

from __future__ import annotations

from .models import Base, Entry, Month, Static, is_expense

metadata = Base.metadata

__all__ = [
    "Base",
    "metadata",
    "Entry",
    "Month",
    "Static",
    "is_expense",
]
