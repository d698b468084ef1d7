"""Aggregate utilization figures: captured value versus the annual fee."""

from __future__ import annotations

from collections.abc import Sequence
from dataclasses import dataclass

from .models import Benefit, CreditCard


@dataclass(frozen=True, slots=True)
class UtilizationSummary:
    total_available: float
    total_captured: float
    annual_fee: float
    net_value: float
    utilization_rate: float
    """Captured over available, as a percentage (0 when nothing is available)."""


def utilization_percent(benefit: Benefit) -> float:
    """Share of ``benefit`` used, as a percentage capped at 100."""

    if benefit.total_amount <= 0:
        return 0.0
    return min(benefit.used_amount / benefit.total_amount * 100.0, 100.0)


def summarize(benefits: Sequence[Benefit], card: CreditCard) -> UtilizationSummary:
    available = sum(b.total_amount for b in benefits)
    captured = sum(b.used_amount for b in benefits)
    return UtilizationSummary(
        total_available=available,
        total_captured=captured,
        annual_fee=card.annual_fee,
        net_value=captured - card.annual_fee,
        utilization_rate=(captured / available * 100.0) if available > 0 else 0.0,
    )


__all__ = ["UtilizationSummary", "summarize", "utilization_percent"]
