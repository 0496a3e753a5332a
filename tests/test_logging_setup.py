from __future__ import annotations

import io
import logging

import pytest

from lineup.logging_setup import _parse_level, configure_logging, get_logger


@pytest.mark.parametrize(
    ("raw", "expected"),
    [
        ("debug", logging.DEBUG),
        (" INFO ", logging.INFO),
        ("10", 10),
        (logging.ERROR, logging.ERROR),
    ],
)
def test_parse_level_accepts_names_and_numbers(raw, expected) -> None:
    assert _parse_level(raw) == expected


def test_parse_level_falls_back_to_env_then_warning(monkeypatch: pytest.MonkeyPatch) -> None:
    assert _parse_level(None) == logging.WARNING
    monkeypatch.setenv("LINEUP_LOG_LEVEL", "debug")
    assert _parse_level(None) == logging.DEBUG


def test_parse_level_rejects_unknown_names() -> None:
    with pytest.raises(ValueError):
        _parse_level("chatty")


def test_get_logger_returns_package_child() -> None:
    log = get_logger("lineup.ledger")
    assert log.name == "lineup.ledger"
    assert logging.getLogger("lineup").handlers


def test_reconfiguring_switches_stream_and_level() -> None:
    first, second = io.StringIO(), io.StringIO()
    log = get_logger("lineup.ledger")
    try:
        configure_logging("WARNING", stream=first)
        configure_logging("DEBUG", stream=second)
        log.debug("inserted static id=%d", 7)

        assert first.getvalue() == ""
        assert "lineup.ledger DEBUG inserted static id=7" in second.getvalue()
    finally:
        configure_logging("WARNING")
