"""Statement extraction: parsed sheets and pasted text to transactions."""

from __future__ import annotations

import re
from collections.abc import Iterable

from .classifier import classify
from .models import NO_DATE, RawRow, Transaction

_FREE_TEXT_AMOUNT_RE = re.compile(r"\$?(\d+\.?\d*)")


def _is_empty_row(row: RawRow | None) -> bool:
    if not row:
        return True
    return all(cell is None or (isinstance(cell, str) and not cell.strip()) for cell in row)


def extract(sheet_rows: Iterable[RawRow]) -> list[Transaction]:
    """Classify every data row of a sheet, preserving row order.

    The first row is always treated as a header and skipped. Rows the
    classifier cannot resolve (totals, disclaimers, blanks) are dropped.
    """

    transactions: list[Transaction] = []
    for i, row in enumerate(sheet_rows):
        if i == 0 or _is_empty_row(row):
            continue
        tx = classify(row)
        if tx is not None:
            transactions.append(tx)
    return transactions


def parse_free_text(text: str) -> list[Transaction]:
    """Parse pasted lines such as ``"DUNKIN $6.50"``.

    The first number on a line is the amount and whatever remains is the
    merchant. Lines without a number, without a merchant, or with a zero
    amount are skipped. Free text carries no dates.
    """

    transactions: list[Transaction] = []
    for line in text.split("\n"):
        if not line.strip():
            continue
        m = _FREE_TEXT_AMOUNT_RE.search(line)
        if m is None:
            continue
        amount = float(m.group(1))
        merchant = (line[: m.start()] + line[m.end() :]).strip()
        if merchant and amount > 0:
            transactions.append(
                Transaction(date=NO_DATE, merchant=merchant, description=merchant, amount=amount)
            )
    return transactions


__all__ = ["extract", "parse_free_text"]
