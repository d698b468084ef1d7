"""Data models and type aliases for ``card_benefits``.

Statement exports have no reliable schema, so raw rows are kept as opaque
sequences of dynamically typed cells. Everything downstream of the row
classifier works with the small, fixed :class:`Transaction` shape.

Catalog data (cards and their benefit definitions) is validated with
pydantic because it arrives as external JSON configuration. Working
:class:`Benefit` instances are plain dataclasses: they are created fresh for
every matching run and mutated only by the allocator.
"""

from __future__ import annotations

from collections.abc import Callable, Sequence
from dataclasses import dataclass, field
from enum import StrEnum

from pydantic import BaseModel, ConfigDict, Field, field_validator
from pydantic.alias_generators import to_camel

# ---------------------------------------------------------------------------
# Raw tabular input
# ---------------------------------------------------------------------------

# A single spreadsheet cell: Number (int/float), Text (str) or Empty (None).
# Readers normalize anything else (dates, booleans, NaN) into one of these.
type CellValue = float | int | str | None

type RawRow = Sequence[CellValue]
"""One row as produced by a spreadsheet reader, in source column order."""


# ---------------------------------------------------------------------------
# Transactions
# ---------------------------------------------------------------------------

NO_DATE = "N/A"


@dataclass(frozen=True, slots=True)
class Transaction:
    """A transaction recovered from a statement row or a free-text line.

    ``date`` is the raw, unvalidated date text (``"N/A"`` when none was
    found). ``amount`` is always non-negative; the sign in the source is
    discarded.
    """

    date: str
    merchant: str
    description: str
    amount: float


@dataclass(frozen=True, slots=True)
class BenefitTransaction:
    """Entry in a benefit's transaction log (original, uncapped amount)."""

    date: str
    merchant: str
    amount: float


# ---------------------------------------------------------------------------
# Catalog
# ---------------------------------------------------------------------------


class ResetPeriod(StrEnum):
    MONTHLY = "monthly"
    ANNUALLY = "annually"
    SEMI_ANNUALLY = "semi-annually"


class _CatalogModel(BaseModel):
    # Catalog JSON uses camelCase keys; Python code uses snake_case.
    model_config = ConfigDict(
        frozen=True,
        extra="forbid",
        str_strip_whitespace=True,
        alias_generator=to_camel,
        populate_by_name=True,
    )


class BenefitDefinition(_CatalogModel):
    """Static definition of a recurring statement credit."""

    id: str
    name: str
    total_amount: float = Field(ge=0)
    reset_period: ResetPeriod
    description: str = ""
    merchant_keywords: tuple[str, ...] = ()

    @field_validator("merchant_keywords")
    @classmethod
    def _normalize_keywords(cls, v: tuple[str, ...]) -> tuple[str, ...]:
        # An empty keyword would match every transaction.
        return tuple(k.strip().lower() for k in v if k.strip())


class CardTheme(_CatalogModel):
    """Presentation colors for a card, handed to renderers as plain data."""

    primary: str
    secondary: str
    name: str
    display_name: str


class CreditCard(_CatalogModel):
    id: str
    name: str
    display_name: str
    issuer: str
    annual_fee: float = Field(ge=0)
    theme: CardTheme
    benefits: tuple[BenefitDefinition, ...] = ()


# ---------------------------------------------------------------------------
# Working benefit state
# ---------------------------------------------------------------------------


@dataclass(slots=True)
class Benefit:
    """A benefit definition plus the running state of one allocation pass.

    Attributes
    ----------
    total_amount:
        The ceiling ``used_amount`` is allocated against. After
        annualization this is the yearly total.
    period_amount:
        The nominal per-reset-period cap from the catalog. It is not
        rescaled by annualization and serves as the per-transaction credit
        cap for charges.
    used_amount:
        Credit captured so far; always within ``[0, total_amount]``.
    transactions:
        Every transaction matched to this benefit, in input order, with its
        original amount (including ones that added nothing once the cap was
        reached).
    """

    id: str
    name: str
    total_amount: float
    reset_period: ResetPeriod
    description: str
    merchant_keywords: tuple[str, ...]
    period_amount: float
    used_amount: float = 0.0
    transactions: list[BenefitTransaction] = field(default_factory=list)

    @classmethod
    def from_definition(cls, definition: BenefitDefinition) -> Benefit:
        return cls(
            id=definition.id,
            name=definition.name,
            total_amount=definition.total_amount,
            reset_period=definition.reset_period,
            description=definition.description,
            merchant_keywords=definition.merchant_keywords,
            period_amount=definition.total_amount,
        )

    def fresh(self) -> Benefit:
        """Return a copy with no usage and an empty transaction log."""

        return Benefit(
            id=self.id,
            name=self.name,
            total_amount=self.total_amount,
            reset_period=self.reset_period,
            description=self.description,
            merchant_keywords=self.merchant_keywords,
            period_amount=self.period_amount,
        )

    def to_dict(self) -> dict[str, object]:
        """JSON-friendly view in the catalog's camelCase shape."""

        return {
            "id": self.id,
            "name": self.name,
            "totalAmount": self.total_amount,
            "periodAmount": self.period_amount,
            "usedAmount": self.used_amount,
            "resetPeriod": str(self.reset_period),
            "description": self.description,
            "merchantKeywords": list(self.merchant_keywords),
            "transactions": [
                {"date": t.date, "merchant": t.merchant, "amount": t.amount}
                for t in self.transactions
            ],
        }


# ---------------------------------------------------------------------------
# Progress reporting
# ---------------------------------------------------------------------------


class ProgressStatus(StrEnum):
    PROCESSING = "processing"
    COMPLETE = "complete"
    ERROR = "error"


@dataclass(frozen=True, slots=True)
class FileProcessingProgress:
    """Progress event emitted by the aggregator (``current_file`` is 1-based)."""

    current_file: int
    total_files: int
    file_name: str
    status: ProgressStatus


type ProgressCallback = Callable[[FileProcessingProgress], None]


__all__ = [
    "NO_DATE",
    "Benefit",
    "BenefitDefinition",
    "BenefitTransaction",
    "CardTheme",
    "CellValue",
    "CreditCard",
    "FileProcessingProgress",
    "ProgressCallback",
    "ProgressStatus",
    "RawRow",
    "ResetPeriod",
    "Transaction",
]
