"""Pytest configuration for test isolation.

The CLI defaults to ``calendar.db`` in the working directory and reads
``LINEUP_DATABASE_URL`` / ``LINEUP_LOG_LEVEL`` from the environment (or a
local ``.env``). An autouse fixture moves every test into its own temporary
directory and clears those variables so no test touches a real ledger.
"""

from __future__ import annotations

from collections.abc import Iterator
from pathlib import Path

import pytest

from lineup.ledger import LedgerStore
from tests.helpers.db import bootstrap_sqlite_db


@pytest.fixture(autouse=True)
def _isolate_workdir(tmp_path: Path, monkeypatch: pytest.MonkeyPatch) -> None:
    monkeypatch.chdir(tmp_path)
    monkeypatch.delenv("LINEUP_DATABASE_URL", raising=False)
    monkeypatch.delenv("LINEUP_LOG_LEVEL", raising=False)


@pytest.fixture
def db_url(tmp_path: Path) -> str:
    return bootstrap_sqlite_db(tmp_path / "ledger.db")


@pytest.fixture
def store(db_url: str) -> Iterator[LedgerStore]:
    with LedgerStore.open(db_url) as s:
        yield s
