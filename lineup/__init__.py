"""Public interface for the ``lineup`` budgeting ledger.

Symbol re-exports only; the store lives in ``lineup.ledger`` and the console
interface in ``lineup.cli``.
"""

from .db.models import Entry, Month, Static, is_expense
from .errors import LedgerError, SchemaInitError, StoreQueryError, StoreWriteError
from .ledger import LedgerStore, resolve_month

__all__ = [
    # Store
    "LedgerStore",
    "resolve_month",
    # Models
    "Month",
    "Entry",
    "Static",
    "is_expense",
    # Errors
    "LedgerError",
    "SchemaInitError",
    "StoreQueryError",
    "StoreWriteError",
]
