from __future__ import annotations

from pathlib import Path

import pytest

from lineup.db.models import Entry, Static, is_expense
from lineup.errors import SchemaInitError, StoreWriteError
from lineup.ledger import LedgerStore
from tests.helpers.db import count_rows, fail_inserts_into


@pytest.mark.parametrize(
    ("amount", "expected"),
    [(-1, True), (-1000, True), (0, False), (1, False), (2000, False)],
)
def test_is_expense_follows_sign_of_amount(amount: int, expected: bool) -> None:
    assert is_expense(amount) is expected
    assert Entry(name="x", amount=amount).is_expense is expected
    assert Static(name="x", amount=amount).is_expense is expected


def test_add_entry_persists_expense_flag(store: LedgerStore) -> None:
    store.add_entry("Salary", 2000, 5, 2024)
    store.add_entry("Groceries", -120, 5, 2024)
    store.add_entry("Gift card", 0, 5, 2024)

    entries = store.list_entries(5, 2024)
    assert [(e.name, e.amount, e.is_expense) for e in entries] == [
        ("Salary", 2000, False),
        ("Groceries", -120, True),
        ("Gift card", 0, False),
    ]


def test_list_entries_carries_month_and_is_readable_after_close(store: LedgerStore) -> None:
    store.add_entry("Coffee", -4, 11, 2025)

    (entry,) = store.list_entries(11, 2025)
    assert entry.month.month == 11
    assert entry.month.year == 2025
    assert entry.month_id == entry.month.id


def test_list_entries_for_unknown_month_is_empty_and_creates_nothing(
    store: LedgerStore, db_url: str
) -> None:
    assert store.list_entries(1, 2030) == []
    assert count_rows(db_url, "month") == 0


def test_same_month_number_in_different_years_is_kept_apart(store: LedgerStore) -> None:
    store.add_entry("Old rent", -900, 3, 2023)
    store.add_entry("New rent", -1000, 3, 2024)

    assert [e.name for e in store.list_entries(3, 2023)] == ["Old rent"]
    assert [e.name for e in store.list_entries(3, 2024)] == ["New rent"]


def test_statics_are_listed_by_id(store: LedgerStore) -> None:
    a = store.add_static("Rent", -1000)
    b = store.add_static("Salary", 2500)

    statics = store.list_statics()
    assert [s.id for s in statics] == [a.id, b.id]
    assert [(s.name, s.amount, s.is_expense) for s in statics] == [
        ("Rent", -1000, True),
        ("Salary", 2500, False),
    ]


def test_delete_static_removes_only_that_row(store: LedgerStore) -> None:
    keep = store.add_static("Rent", -1000)
    drop = store.add_static("Gym", -50)

    assert store.delete_static(drop.id) is True
    assert [s.id for s in store.list_statics()] == [keep.id]


def test_delete_unknown_static_reports_false(store: LedgerStore) -> None:
    assert store.delete_static(424242) is False


def test_add_entry_rejects_out_of_range_period(store: LedgerStore, db_url: str) -> None:
    with pytest.raises(ValueError):
        store.add_entry("Bad", 1, 13, 2024)
    with pytest.raises(ValueError):
        store.add_entry("Bad", 1, 0, 2024)
    with pytest.raises(ValueError):
        store.add_entry("Bad", 1, 1, 0)
    assert count_rows(db_url, "month") == 0


def test_write_failure_is_reported_as_store_write_error(store: LedgerStore, db_url: str) -> None:
    fail_inserts_into(db_url, "statics", "disk full")

    with pytest.raises(StoreWriteError, match="disk full"):
        store.add_static("Rent", -1000)
    assert store.list_statics() == []


def test_open_is_idempotent_and_keeps_existing_rows(db_url: str) -> None:
    with LedgerStore.open(db_url) as first:
        first.add_static("Rent", -1000)

    with LedgerStore.open(db_url) as second:
        assert [s.name for s in second.list_statics()] == ["Rent"]


def test_open_creates_store_file(tmp_path: Path) -> None:
    db_file = tmp_path / "fresh.db"
    with LedgerStore.open(f"sqlite:///{db_file}") as s:
        assert s.list_statics() == []
    assert db_file.is_file()


def test_open_in_missing_directory_raises_schema_init_error(tmp_path: Path) -> None:
    with pytest.raises(SchemaInitError):
        LedgerStore.open(f"sqlite:///{tmp_path / 'missing' / 'ledger.db'}")
