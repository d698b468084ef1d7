"""Decode uploaded statement bytes into raw rows.

Only the first sheet of a workbook is read. No header detection or schema
validation happens here; rows keep the source column layout and are handed to
:func:`card_benefits.extract.extract` as-is.

Spreadsheets (``.xlsx``/``.xlsm``/``.xls``, or any payload with a ZIP
signature) go through :func:`pandas.read_excel`; everything else is treated
as delimited text and parsed with the stdlib :mod:`csv` reader.
"""

from __future__ import annotations

import csv
import io
import numbers
from datetime import date, datetime
from pathlib import PurePath
from typing import Any

from ..models import CellValue, RawRow

EXCEL_SUFFIXES = frozenset({".xlsx", ".xlsm", ".xls"})
_ZIP_MAGIC = b"PK\x03\x04"
_OLE_MAGIC = b"\xd0\xcf\x11\xe0"
_TEXT_ENCODINGS = ("utf-8-sig", "cp1252")


class StatementDecodeError(ValueError):
    """Raised when a statement file cannot be turned into rows."""


def _is_workbook(file_name: str, data: bytes) -> bool:
    if PurePath(file_name).suffix.lower() in EXCEL_SUFFIXES:
        return True
    return data.startswith(_ZIP_MAGIC) or data.startswith(_OLE_MAGIC)


def _normalize_cell(value: Any) -> CellValue:
    # NaN and NaT are the only values unequal to themselves.
    if value is None or value != value:
        return None
    if isinstance(value, bool):
        return str(value).upper()
    if isinstance(value, datetime | date):
        return value.strftime("%Y-%m-%d")
    if isinstance(value, numbers.Integral):
        return int(value)
    if isinstance(value, numbers.Real):
        return float(value)
    if isinstance(value, str):
        return value if value.strip() else None
    text = str(value)
    return text if text.strip() else None


def _read_workbook(data: bytes) -> list[RawRow]:
    import pandas as pd

    try:
        frame = pd.read_excel(io.BytesIO(data), sheet_name=0, header=None, dtype=object)
    except Exception as e:
        raise StatementDecodeError(f"unreadable workbook: {e}") from e

    rows: list[RawRow] = []
    for values in frame.itertuples(index=False, name=None):
        row = [_normalize_cell(v) for v in values]
        # pandas pads ragged rows to the sheet width; trailing blanks carry no data.
        while row and row[-1] is None:
            row.pop()
        rows.append(row)
    return rows


def _decode_text(data: bytes) -> str:
    for encoding in _TEXT_ENCODINGS:
        try:
            return data.decode(encoding)
        except UnicodeDecodeError:
            continue
    # latin-1 maps every byte; it cannot fail.
    return data.decode("latin-1")


def _read_delimited(data: bytes) -> list[RawRow]:
    text = _decode_text(data)
    if "\x00" in text:
        raise StatementDecodeError("binary content is not a delimited text statement")
    try:
        reader = csv.reader(io.StringIO(text, newline=""))
        return [[cell if cell.strip() else None for cell in record] for record in reader]
    except csv.Error as e:
        raise StatementDecodeError(f"malformed delimited text: {e}") from e


def decode_rows(file_name: str, data: bytes) -> list[RawRow]:
    """Return the rows of the first sheet of ``data``.

    Raises
    ------
    StatementDecodeError
        When the content is neither a readable workbook nor decodable text.
    """

    if _is_workbook(file_name, data):
        return _read_workbook(data)
    return _read_delimited(data)


__all__ = ["EXCEL_SUFFIXES", "StatementDecodeError", "decode_rows"]
