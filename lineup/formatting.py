"""Terminal rendering for month and static views (prompt_toolkit formatted text).

Renderers are pure: they turn already-fetched rows into a list of
``(style, text)`` fragments and never touch the store. :func:`echo` is the only
function that writes, via ``print_formatted_text``; when stdout is not a
terminal prompt_toolkit drops the colors and emits plain text.

Layout
------
Each row is indented by six spaces, the label is cut/padded to exactly 25
display columns and the amount is right-aligned in 10 columns. The month view
ends with a 35-dash rule and the signed total right-aligned in 30 columns after
the ``Summe`` label, so the total lines up with the amount column. Amounts
below zero use the ``negative`` style (red), everything else ``positive``
(green).
"""

from __future__ import annotations

import sys
from collections.abc import Iterable, Sequence
from typing import Protocol

from prompt_toolkit import print_formatted_text
from prompt_toolkit.formatted_text import FormattedText
from prompt_toolkit.styles import Style
from prompt_toolkit.utils import get_cwidth

INDENT = " " * 6
LABEL_WIDTH = 25
AMOUNT_WIDTH = 10
ID_WIDTH = 5
TOTAL_WIDTH = 30
RULE_WIDTH = LABEL_WIDTH + AMOUNT_WIDTH
TOTAL_LABEL = "Summe"
TAG = "[LineUp]"

STYLE = Style.from_dict(
    {
        "tag": "ansired",
        "negative": "ansired",
        "positive": "ansigreen",
    }
)


class LedgerLine(Protocol):
    name: str
    amount: int


class NumberedLine(LedgerLine, Protocol):
    id: int


def fit(text: str, width: int) -> str:
    """Cut or pad ``text`` to exactly ``width`` display columns."""

    out: list[str] = []
    used = 0
    for ch in text:
        w = get_cwidth(ch)
        if used + w > width:
            break
        out.append(ch)
        used += w
    return "".join(out) + " " * (width - used)


def sign_style(amount: int) -> str:
    return "class:negative" if amount < 0 else "class:positive"


def total(rows: Iterable[LedgerLine]) -> int:
    return sum(r.amount for r in rows)


def _header() -> list[tuple[str, str]]:
    return [("", "\n"), ("class:tag", TAG), ("", "\n\n")]


def render_month(entries: Sequence[LedgerLine]) -> FormattedText:
    """Render the month view: one row per entry, a rule and the signed total."""

    frags = _header()
    for e in entries:
        frags.append(("", INDENT + fit(e.name, LABEL_WIDTH)))
        frags.append((sign_style(e.amount), f"{e.amount:>{AMOUNT_WIDTH}}"))
        frags.append(("", "\n"))

    s = total(entries)
    frags.append(("", INDENT + "-" * RULE_WIDTH + "\n"))
    frags.append(("", INDENT + TOTAL_LABEL))
    frags.append((sign_style(s), f"{s:>{TOTAL_WIDTH}}"))
    frags.append(("", "\n"))
    return FormattedText(frags)


def render_statics(statics: Sequence[NumberedLine]) -> FormattedText:
    """Render static templates with their ids (the handle ``delete-static`` takes)."""

    frags = _header()
    for st in statics:
        frags.append(("", INDENT + fit(str(st.id), ID_WIDTH) + fit(st.name, LABEL_WIDTH)))
        frags.append((sign_style(st.amount), f"{st.amount:>{AMOUNT_WIDTH}}"))
        frags.append(("", "\n"))
    frags.append(("", "\n"))
    return FormattedText(frags)


def render_notice(message: str) -> FormattedText:
    """``[LineUp] <message>`` surrounded by blank lines."""

    return FormattedText([("", "\n"), ("class:tag", TAG), ("", f" {message}\n")])


def echo(text: FormattedText) -> None:
    # Resolve stdout per call; the default app session caches its output.
    print_formatted_text(text, style=STYLE, file=sys.stdout)


__all__ = [
    "STYLE",
    "echo",
    "fit",
    "render_month",
    "render_notice",
    "render_statics",
    "sign_style",
    "total",
]
