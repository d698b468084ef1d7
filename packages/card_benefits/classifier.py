"""Heuristic row classifier for schema-less statement rows.

Statement exports differ by issuer (``Date, Description, Amount``;
``Transaction Date, Post Date, Description, Category, Type, Amount``;
``Date, Description, Category, Debit, Credit``; ...). Rather than keeping
per-issuer adapters, :func:`classify` looks at value shapes and column
positions to recover a date, a merchant and an amount from a single row.

Rules
-----
- Date: the first of the leading five cells that looks like a date. Further
  date-like cells in that window are remembered so they are never read as
  amounts.
- Merchant: the first of the leading four non-date cells that is non-empty,
  not number-like and longer than three characters.
- Amount: two passes over the non-date cells. The first pass only accepts
  values that look like money and prefers ones with cents or above 31 (so a
  day or month number is not mistaken for an amount); the second pass takes
  any non-zero number below 100000.

Rows without a merchant or with a zero amount yield ``None``.
"""

from __future__ import annotations

import math
import re

from .models import NO_DATE, CellValue, RawRow, Transaction

DATE_SCAN_CELLS = 5
MERCHANT_SCAN_CELLS = 4
MIN_MERCHANT_LENGTH = 4

# Excel stores dates as day serials; 40000 is early 2009.
EXCEL_SERIAL_FLOOR = 40000
MAX_AMOUNT = 100000
MIN_AMOUNT = 0.01
# Values at or below this are ambiguous with day/month numbers.
DAY_OF_MONTH_MAX = 31

_DATE_PATTERNS = (
    re.compile(r"^\d{1,2}/\d{1,2}/\d{2,4}$"),  # MM/DD/YYYY, M/D/YY
    re.compile(r"^\d{4}-\d{2}-\d{2}$"),  # YYYY-MM-DD
    re.compile(r"^\d{2}-\d{2}-\d{4}$"),  # DD-MM-YYYY
    re.compile(r"^[A-Z][a-z]{2}\s+\d{1,2}$"),  # Jan 15
)

_CURRENCY_NOISE_RE = re.compile(r"[$,\s()]")
_NUMBER_NOISE_RE = re.compile(r"[$,\s]")
# Leading number only; trailing text such as "CR" or "-ELEVEN" is ignored.
_LEADING_NUMBER_RE = re.compile(r"[+-]?(?:\d+\.?\d*|\.\d+)")
_CENTS_RE = re.compile(r"^\d+\.\d{2}$")


def _cell_text(cell: CellValue) -> str:
    if cell is None:
        return ""
    if isinstance(cell, float) and math.isnan(cell):
        return ""
    return str(cell).strip()


def is_date_like(text: str) -> bool:
    return any(p.match(text) for p in _DATE_PATTERNS)


def _leading_number(text: str) -> str | None:
    m = _LEADING_NUMBER_RE.match(_NUMBER_NOISE_RE.sub("", text))
    return m.group() if m else None


def parse_number(text: str) -> float | None:
    """Read the number that ``text`` starts with, after dropping ``$``, commas
    and spaces.

    Only plain decimal notation is read, so ``"12.50 CR"`` is 12.5,
    ``"7-ELEVEN"`` is 7 and ``"1e3"`` is 1. Returns ``None`` when ``text``
    does not start with a digit, sign or decimal point followed by a digit.
    """

    number = _leading_number(text)
    if number is None:
        return None
    value = float(number)
    return value if math.isfinite(value) else None


def is_number_like(text: str) -> bool:
    return parse_number(text) is not None


def _is_numeric(cell: CellValue) -> bool:
    # bool is an int subclass but never an amount.
    return isinstance(cell, int | float) and not isinstance(cell, bool)


def _find_dates(row: RawRow) -> tuple[str | None, set[int]]:
    date: str | None = None
    columns: set[int] = set()
    for i in range(min(DATE_SCAN_CELLS, len(row))):
        text = _cell_text(row[i])
        if text and is_date_like(text):
            columns.add(i)
            if date is None:
                date = text
    return date, columns


def _find_merchant(row: RawRow, date_columns: set[int]) -> str | None:
    for i in range(min(MERCHANT_SCAN_CELLS, len(row))):
        if i in date_columns:
            continue
        text = _cell_text(row[i])
        if text and not is_number_like(text) and len(text) >= MIN_MERCHANT_LENGTH:
            return text
    return None


def _money_candidate(cell: CellValue) -> tuple[float, bool] | None:
    """Return ``(magnitude, has_decimals)`` when ``cell`` looks like money."""

    if _is_numeric(cell):
        value = abs(float(cell))
        if math.isnan(value) or value >= EXCEL_SERIAL_FLOOR or value < MIN_AMOUNT:
            return None
        fractional = value % 1 != 0
        if fractional or 1 <= value <= MAX_AMOUNT:
            return value, fractional
        return None

    if isinstance(cell, str):
        raw = cell.strip()
        cleaned = _CURRENCY_NOISE_RE.sub("", raw)
        if not ("$" in raw or "." in raw or _CENTS_RE.match(cleaned)):
            return None
        number = _leading_number(cleaned)
        if number is None:
            return None
        value = float(number)
        if value == 0 or not math.isfinite(value):
            return None
        return abs(value), "." in number

    return None


def _any_number(cell: CellValue) -> float | None:
    if _is_numeric(cell):
        value = abs(float(cell))
        return None if math.isnan(value) else value
    if isinstance(cell, str):
        value = parse_number(_CURRENCY_NOISE_RE.sub("", cell))
        return abs(value) if value is not None else None
    return None


def _find_amount(row: RawRow, date_columns: set[int]) -> float:
    for i, cell in enumerate(row):
        if i in date_columns:
            continue
        candidate = _money_candidate(cell)
        if candidate is None:
            continue
        value, has_decimals = candidate
        if has_decimals or value > DAY_OF_MONTH_MAX:
            return value

    for i, cell in enumerate(row):
        if i in date_columns:
            continue
        value = _any_number(cell)
        if value is not None and 0 < value < MAX_AMOUNT:
            return value

    return 0.0


def classify(row: RawRow) -> Transaction | None:
    """Recover a :class:`Transaction` from one raw row, or ``None``."""

    date, date_columns = _find_dates(row)
    merchant = _find_merchant(row, date_columns)
    if merchant is None:
        return None

    amount = _find_amount(row, date_columns)
    if amount == 0:
        return None

    return Transaction(
        date=date or NO_DATE,
        merchant=merchant,
        description=merchant,
        amount=amount,
    )


__all__ = ["classify", "is_date_like", "is_number_like", "parse_number"]
