"""Multi-source aggregation of statement files and pasted text.

Files are processed strictly one after another: each file's bytes are awaited
and decoded before the next file starts, so progress callbacks fire in a
deterministic, monotonically increasing order. A file that fails to read or
decode is reported through an ``error`` progress event and a log entry and
contributes no transactions; the remaining files are still processed.

Cancellation is not supported. Once started, :func:`aggregate` runs every
file to completion.
"""

from __future__ import annotations

import asyncio
from collections.abc import Sequence
from dataclasses import dataclass
from os import PathLike
from pathlib import Path
from typing import Protocol

from .extract import extract, parse_free_text
from .ingest.readers import decode_rows
from .logging_setup import get_logger
from .models import (
    FileProcessingProgress,
    ProgressCallback,
    ProgressStatus,
    Transaction,
)

_logger = get_logger("card_benefits.aggregate")


class StatementFile(Protocol):
    """An uploaded statement: a display name and its raw bytes."""

    @property
    def name(self) -> str: ...

    async def read(self) -> bytes: ...


@dataclass(frozen=True, slots=True)
class PathStatementFile:
    """A statement on the local filesystem; bytes are read off the event loop."""

    path: Path

    @classmethod
    def of(cls, path: str | PathLike[str]) -> PathStatementFile:
        return cls(Path(path))

    @property
    def name(self) -> str:
        return self.path.name

    async def read(self) -> bytes:
        return await asyncio.to_thread(self.path.read_bytes)


@dataclass(frozen=True, slots=True)
class MemoryStatementFile:
    """A statement whose bytes are already in memory (e.g., an HTTP upload)."""

    name: str
    data: bytes

    async def read(self) -> bytes:
        return self.data


async def parse_statement_file(file: StatementFile) -> list[Transaction]:
    """Read, decode and extract a single statement file.

    Errors from reading or decoding propagate to the caller.
    """

    data = await file.read()
    rows = await asyncio.to_thread(decode_rows, file.name, data)
    return extract(rows)


async def aggregate(
    files: Sequence[StatementFile],
    on_progress: ProgressCallback | None = None,
    *,
    text: str | None = None,
) -> list[Transaction]:
    """Extract transactions from pasted ``text`` and every file, in order.

    Transactions parsed from ``text`` come first, followed by each file's
    transactions in input order. Per file, ``on_progress`` receives a
    ``processing`` event and then either ``complete`` or ``error``. Failures
    are never raised to the caller.
    """

    transactions: list[Transaction] = []
    if text and text.strip():
        transactions.extend(parse_free_text(text))
        _logger.info("aggregate:text_parsed num_transactions=%d", len(transactions))

    total = len(files)

    def _emit(index: int, file_name: str, status: ProgressStatus) -> None:
        if on_progress is not None:
            on_progress(
                FileProcessingProgress(
                    current_file=index,
                    total_files=total,
                    file_name=file_name,
                    status=status,
                )
            )

    for index, file in enumerate(files, start=1):
        _emit(index, file.name, ProgressStatus.PROCESSING)
        try:
            file_transactions = await parse_statement_file(file)
        except Exception as e:  # noqa: BLE001
            _logger.error(
                "aggregate:file_failed file=%s index=%d/%d error=%s: %s",
                file.name,
                index,
                total,
                e.__class__.__name__,
                e,
            )
            _emit(index, file.name, ProgressStatus.ERROR)
            continue

        transactions.extend(file_transactions)
        _logger.info(
            "aggregate:file_done file=%s index=%d/%d num_transactions=%d",
            file.name,
            index,
            total,
            len(file_transactions),
        )
        _emit(index, file.name, ProgressStatus.COMPLETE)

    return transactions


__all__ = [
    "MemoryStatementFile",
    "PathStatementFile",
    "StatementFile",
    "aggregate",
    "parse_statement_file",
]
