from __future__ import annotations

from sqlalchemy import Boolean, ForeignKey, Integer, Text, UniqueConstraint
from sqlalchemy.orm import DeclarativeBase, Mapped, mapped_column, relationship, validates


class Base(DeclarativeBase):
    pass


def is_expense(amount: int) -> bool:
    """Return True when ``amount`` is an expense (strictly negative)."""

    return amount < 0


# ---------------------------
# Buckets: month
# ---------------------------


class Month(Base):
    __tablename__ = "month"

    id: Mapped[int] = mapped_column(Integer, primary_key=True, autoincrement=True)
    month: Mapped[int] = mapped_column(Integer, nullable=False)
    year: Mapped[int] = mapped_column(Integer, nullable=False)

    # One bucket per calendar month; lookups key on the full (month, year) pair.
    __table_args__ = (UniqueConstraint("month", "year", name="uq_month_month_year"),)

    def __repr__(self) -> str:  # pragma: no cover - trivial repr
        return f"Month(id={self.id!r}, month={self.month!r}, year={self.year!r})"


# ---------------------------
# Ledger lines: entries
# ---------------------------


class Entry(Base):
    __tablename__ = "entries"

    id: Mapped[int] = mapped_column(Integer, primary_key=True, autoincrement=True)
    name: Mapped[str] = mapped_column(Text, nullable=False)
    amount: Mapped[int] = mapped_column(Integer, nullable=False)
    # Derived from ``amount`` by the validator below; never assigned directly.
    is_expense: Mapped[bool] = mapped_column(Boolean, nullable=False)
    month_id: Mapped[int] = mapped_column(Integer, ForeignKey("month.id"), nullable=False)

    month: Mapped[Month] = relationship()

    @validates("amount")
    def _derive_expense_flag(self, _key: str, amount: int) -> int:
        self.is_expense = is_expense(amount)
        return amount

    def __repr__(self) -> str:  # pragma: no cover - trivial repr
        return f"Entry(id={self.id!r}, name={self.name!r}, amount={self.amount!r})"


# ---------------------------
# Templates: statics
# ---------------------------


class Static(Base):
    __tablename__ = "statics"

    id: Mapped[int] = mapped_column(Integer, primary_key=True, autoincrement=True)
    name: Mapped[str] = mapped_column(Text, nullable=False)
    amount: Mapped[int] = mapped_column(Integer, nullable=False)
    is_expense: Mapped[bool] = mapped_column(Boolean, nullable=False)

    @validates("amount")
    def _derive_expense_flag(self, _key: str, amount: int) -> int:
        self.is_expense = is_expense(amount)
        return amount

    def __repr__(self) -> str:  # pragma: no cover - trivial repr
        return f"Static(id={self.id!r}, name={self.name!r}, amount={self.amount!r})"


__all__ = [
    "Base",
    "Entry",
    "Month",
    "Static",
    "is_expense",
]
