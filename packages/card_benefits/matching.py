"""Benefit matching and capped credit allocation.

Each transaction is assigned to at most one benefit: the first benefit in
catalog order with a keyword that appears in the transaction's merchant or
description. Overlapping keyword sets are resolved by that order alone, not by
specificity (e.g., ``"uber"`` in a travel benefit listed before an Uber benefit
wins).

Allocation per matched transaction:

1. Credits/refunds (detected by keyword) count at their full amount; charges
   are capped per transaction (``resy``: 50, otherwise the benefit's nominal
   per-period amount).
2. The credited amount is further capped by the headroom left under the
   benefit's total.
3. The transaction is always appended to the benefit's log with its original
   amount, even when it adds nothing.

Earlier transactions in input order are therefore credited first once a cap
is approached.
"""

from __future__ import annotations

from collections.abc import Iterable, Sequence

from .models import Benefit, BenefitTransaction, Transaction

CREDIT_KEYWORDS: tuple[str, ...] = (
    "credit",
    "adjustment",
    "reimbursement",
    "refund",
    "rebate",
    "payment",
    "credit adjustment",
)

# Resy credits are issued as two $50 credits per year.
FIXED_PER_TRANSACTION_CAPS: dict[str, float] = {"resy": 50.0}


def _transaction_text(tx: Transaction) -> tuple[str, str]:
    return tx.merchant.lower(), tx.description.lower()


def matches_benefit(tx: Transaction, benefit: Benefit) -> bool:
    merchant, description = _transaction_text(tx)
    return any(
        kw.lower() in merchant or kw.lower() in description for kw in benefit.merchant_keywords
    )


def is_credit_transaction(tx: Transaction) -> bool:
    """Return ``True`` when the text reads like money returned, not spent."""

    text = f"{tx.merchant} {tx.description}".lower()
    return any(kw in text for kw in CREDIT_KEYWORDS)


def per_transaction_cap(benefit: Benefit) -> float:
    """Maximum credit a single charge can contribute to ``benefit``."""

    fixed = FIXED_PER_TRANSACTION_CAPS.get(benefit.id)
    if fixed is not None:
        return fixed
    return benefit.period_amount


def _find_benefit(tx: Transaction, benefits: Sequence[Benefit]) -> Benefit | None:
    for benefit in benefits:
        if matches_benefit(tx, benefit):
            return benefit
    return None


def _allocate(benefit: Benefit, tx: Transaction) -> None:
    if is_credit_transaction(tx):
        credited = tx.amount
    else:
        credited = min(tx.amount, per_transaction_cap(benefit))

    remaining = benefit.total_amount - benefit.used_amount
    amount_to_add = max(0.0, min(credited, remaining))

    benefit.transactions.append(
        BenefitTransaction(date=tx.date, merchant=tx.merchant, amount=tx.amount)
    )
    if amount_to_add > 0:
        benefit.used_amount = min(benefit.used_amount + amount_to_add, benefit.total_amount)


def match(transactions: Iterable[Transaction], benefits: Sequence[Benefit]) -> list[Benefit]:
    """Assign transactions to benefits and compute capped usage.

    Pure with respect to its inputs: ``benefits`` are copied into fresh,
    zeroed instances (same order) before allocation and returned.
    Transactions that match no benefit are dropped.
    """

    working = [b.fresh() for b in benefits]
    for tx in transactions:
        benefit = _find_benefit(tx, working)
        if benefit is not None:
            _allocate(benefit, tx)
    return working


__all__ = [
    "CREDIT_KEYWORDS",
    "is_credit_transaction",
    "match",
    "matches_benefit",
    "per_transaction_cap",
]
