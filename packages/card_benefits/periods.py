"""Annualization of benefit caps by reset period."""

from __future__ import annotations

from collections.abc import Iterable

from .models import Benefit, ResetPeriod

PERIODS_PER_YEAR: dict[ResetPeriod, int] = {
    ResetPeriod.MONTHLY: 12,
    ResetPeriod.SEMI_ANNUALLY: 2,
    ResetPeriod.ANNUALLY: 1,
}


def _fmt_money(value: float) -> str:
    return f"{value:g}" if value == int(value) else f"{value:.2f}"


def annualize(benefits: Iterable[Benefit]) -> list[Benefit]:
    """Rescale each benefit's cap to a yearly total.

    Monthly caps are multiplied by 12 and semi-annual caps by 2; annual
    benefits are returned unchanged. Rescaled benefits get a description
    suffix such as ``"(Annual total: 12 × $10)"``. ``period_amount`` keeps the
    nominal per-period cap.

    Must run once on freshly initialized benefits; a benefit that already
    carries usage raises ``ValueError``.
    """

    out: list[Benefit] = []
    for benefit in benefits:
        if benefit.used_amount or benefit.transactions:
            raise ValueError(f"benefit {benefit.id!r} already has usage; annualize before matching")
        if benefit.total_amount != benefit.period_amount:
            raise ValueError(f"benefit {benefit.id!r} is already annualized")

        periods = PERIODS_PER_YEAR[benefit.reset_period]
        annual = benefit.fresh()
        if periods > 1:
            annual.total_amount = benefit.period_amount * periods
            annual.description = (
                f"{benefit.description} "
                f"(Annual total: {periods} × ${_fmt_money(benefit.period_amount)})"
            )
        out.append(annual)
    return out


__all__ = ["PERIODS_PER_YEAR", "annualize"]
