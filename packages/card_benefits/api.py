"""Public API and pipeline orchestration for ``card_benefits``.

A single analysis run composes the pipeline stages::

    text/files -> aggregate (extract via classify) -> annualize -> match -> summarize

Each run starts from freshly initialized benefits; nothing is carried over
between runs.
"""

from __future__ import annotations

import asyncio
from collections.abc import Sequence
from dataclasses import dataclass
from os import PathLike

from .aggregate import PathStatementFile, StatementFile, aggregate
from .catalog import initialize_benefits
from .logging_setup import get_logger
from .matching import match
from .models import Benefit, CreditCard, ProgressCallback
from .periods import annualize
from .summary import UtilizationSummary, summarize

_logger = get_logger("card_benefits.api")


@dataclass(frozen=True, slots=True)
class AnalysisResult:
    """Outcome of one analysis run.

    ``benefits`` is the finalized utilization list handed to report
    renderers; it is not mutated after the run completes.
    """

    card: CreditCard
    benefits: list[Benefit]
    transaction_count: int
    summary: UtilizationSummary


async def analyze(
    card: CreditCard,
    *,
    files: Sequence[StatementFile] = (),
    text: str | None = None,
    on_progress: ProgressCallback | None = None,
) -> AnalysisResult:
    """Run the full pipeline for ``card`` over pasted ``text`` and ``files``.

    Raises ``ValueError`` when there is neither text nor any file to analyze.
    File-level failures do not raise; they are reported via ``on_progress``.
    """

    has_text = bool(text and text.strip())
    if not has_text and not files:
        raise ValueError("nothing to analyze: provide statement files or pasted text")

    transactions = await aggregate(files, on_progress, text=text if has_text else None)
    benefits = match(transactions, annualize(initialize_benefits(card)))
    summary = summarize(benefits, card)

    _logger.info(
        "analyze:done card=%s num_transactions=%d matched=%d captured=%.2f",
        card.id,
        len(transactions),
        sum(len(b.transactions) for b in benefits),
        summary.total_captured,
    )
    return AnalysisResult(
        card=card,
        benefits=benefits,
        transaction_count=len(transactions),
        summary=summary,
    )


def analyze_paths(
    card: CreditCard,
    paths: Sequence[str | PathLike[str]] = (),
    *,
    text: str | None = None,
    on_progress: ProgressCallback | None = None,
) -> AnalysisResult:
    """Synchronous wrapper around :func:`analyze` for files on disk."""

    files = [PathStatementFile.of(p) for p in paths]
    return asyncio.run(analyze(card, files=files, text=text, on_progress=on_progress))


__all__ = ["AnalysisResult", "analyze", "analyze_paths"]
