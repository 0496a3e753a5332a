"""CLI for the ``lineup`` budgeting ledger.

Typer-based console interface. One command runs per process:

- ``add entry <name> <amount> [month] [year]``
- ``add static <name> <amount>``
- ``show [month] [year]``
- ``show-statics``
- ``delete-static <id>``

A month or year of ``0`` (the default) means the current UTC calendar month or
year; each is defaulted independently. Amounts are signed integers in minor
currency units and may be passed as plain negative numbers (``-1000``).

The store location comes from ``--database-url`` / ``LINEUP_DATABASE_URL`` and
defaults to ``calendar.db`` in the working directory. ``main`` loads a local
``.env`` before parsing so both variables can live there.
"""

from __future__ import annotations

import sys
from collections.abc import Iterator
from contextlib import contextmanager
from datetime import UTC, date, datetime
from pathlib import Path
from typing import Annotated

import typer
from dotenv import load_dotenv

from .db.client import DEFAULT_DATABASE_URL
from .errors import LedgerError
from .formatting import echo, render_month, render_notice, render_statics
from .ledger import LedgerStore
from .logging_setup import configure_logging, get_logger

logger = get_logger("lineup.cli")

# Lets "-1000" through as a positional amount instead of an unknown short option.
_SIGNED_ARGS = {"ignore_unknown_options": True}


# ---- Small module-level helpers ---------------------------------------------


def resolve_period(month: int, year: int, *, today: date | None = None) -> tuple[int, int]:
    """Replace a zero ``month``/``year`` with the current calendar value.

    >>> resolve_period(0, 2024, today=date(2025, 7, 1))
    (7, 2024)
    """

    now = today or datetime.now(UTC).date()
    return (month or now.month, year or now.year)


@contextmanager
def _report_ledger_errors() -> Iterator[None]:
    """Turn any store failure into ``Error: ...`` on stderr and exit status 1."""

    try:
        yield
    except LedgerError as e:
        logger.debug("command aborted", exc_info=True)
        typer.echo(f"Error: {e}", err=True)
        raise typer.Exit(1) from e


def _store(ctx: typer.Context) -> LedgerStore:
    store = ctx.find_object(LedgerStore)
    if store is None:  # pragma: no cover - root callback always sets it
        raise RuntimeError("ledger store not initialized")
    return store


# ---- Typer-based console interface ------------------------------------------


app = typer.Typer(
    no_args_is_help=True,
    add_completion=False,
    help="Monthly budgeting ledger: entries per month plus recurring static entries.",
)
add_app = typer.Typer(
    no_args_is_help=True,
    help="Add an entry to a month or a static entry copied into every new month.",
)
app.add_typer(add_app, name="add")

MonthArg = Annotated[
    int, typer.Argument(min=0, max=12, help="Month number 1-12; 0 means the current month.")
]
YearArg = Annotated[int, typer.Argument(min=0, help="Year; 0 means the current year.")]
NameArg = Annotated[str, typer.Argument(help="Label shown in the month view.")]
AmountArg = Annotated[int, typer.Argument(help="Signed amount; negative values are expenses.")]


@app.callback()
def _root(
    ctx: typer.Context,
    *,
    database_url: str = typer.Option(
        DEFAULT_DATABASE_URL,
        "--database-url",
        envvar="LINEUP_DATABASE_URL",
        help="SQLAlchemy URL of the ledger store.",
    ),
    log_level: str | None = typer.Option(
        None,
        "--log-level",
        envvar="LINEUP_LOG_LEVEL",
        help="Diagnostic log level on stderr (default WARNING).",
    ),
) -> None:
    """Root command: configure logging and open the store for the subcommand."""

    try:
        configure_logging(log_level)
    except ValueError as e:
        raise typer.BadParameter(str(e), param_hint="--log-level") from e

    with _report_ledger_errors():
        store = LedgerStore.open(database_url)
    ctx.obj = store
    ctx.call_on_close(store.close)


@add_app.command("entry", context_settings=_SIGNED_ARGS)
def add_entry_cmd(
    ctx: typer.Context,
    name: NameArg,
    amount: AmountArg,
    month: MonthArg = 0,
    year: YearArg = 0,
) -> None:
    """Add an entry; the first entry of a month also copies in every static."""

    month, year = resolve_period(month, year)
    with _report_ledger_errors():
        _store(ctx).add_entry(name, amount, month, year)
    echo(render_notice(f"Added new Entry: {name}"))


@add_app.command("static", context_settings=_SIGNED_ARGS)
def add_static_cmd(ctx: typer.Context, name: NameArg, amount: AmountArg) -> None:
    """Add a static entry; it is copied into months created from now on."""

    with _report_ledger_errors():
        _store(ctx).add_static(name, amount)
    echo(render_notice(f"Added new Static: {name}"))


@app.command("show")
def show_cmd(ctx: typer.Context, month: MonthArg = 0, year: YearArg = 0) -> None:
    """Print the entries of a month and their signed total."""

    month, year = resolve_period(month, year)
    with _report_ledger_errors():
        entries = _store(ctx).list_entries(month, year)
    echo(render_month(entries))


@app.command("show-statics")
def show_statics_cmd(ctx: typer.Context) -> None:
    """Print all static entries with the ids ``delete-static`` expects."""

    with _report_ledger_errors():
        statics = _store(ctx).list_statics()
    echo(render_statics(statics))


@app.command("delete-static")
def delete_static_cmd(
    ctx: typer.Context,
    static_id: Annotated[int, typer.Argument(metavar="ID", min=1, help="Id from show-statics.")],
) -> None:
    """Delete a static entry; months that already hold a copy keep it."""

    with _report_ledger_errors():
        removed = _store(ctx).delete_static(static_id)
    if removed:
        echo(render_notice(f"Deleted static value with id = {static_id}."))
    else:
        echo(render_notice(f"No static value with id = {static_id}."))


def main(argv: list[str] | None = None) -> None:
    """Console entrypoint: load ``.env`` from the CWD, then run the Typer app."""

    load_dotenv(dotenv_path=Path.cwd() / ".env", override=False)
    app(args=sys.argv[1:] if argv is None else argv, prog_name="lineup")


if __name__ == "__main__":  # pragma: no cover - `python -m lineup.cli`
    main()
