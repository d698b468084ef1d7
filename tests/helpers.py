"""Small builders shared by tests."""

from __future__ import annotations

from card_benefits.models import Benefit, BenefitDefinition, ResetPeriod, Transaction


def make_benefit(
    benefit_id: str,
    total: float,
    *,
    period: ResetPeriod = ResetPeriod.ANNUALLY,
    keywords: tuple[str, ...] | None = None,
    description: str = "",
) -> Benefit:
    definition = BenefitDefinition(
        id=benefit_id,
        name=benefit_id.title(),
        total_amount=total,
        reset_period=period,
        description=description,
        merchant_keywords=keywords if keywords is not None else (benefit_id,),
    )
    return Benefit.from_definition(definition)


def tx(merchant: str, amount: float, *, date: str = "03/15/2024", description: str | None = None):
    return Transaction(
        date=date,
        merchant=merchant,
        description=description if description is not None else merchant,
        amount=amount,
    )
