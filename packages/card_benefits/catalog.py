"""Benefit catalog loading.

The catalog is configuration data: a JSON object mapping card identifiers to
card definitions (issuer, annual fee, theme and an ordered benefit list). The
order of ``benefits`` is significant because matching is first-match-wins.

Resolution order for the catalog file:

1. An explicit ``path`` argument.
2. The ``CARD_BENEFITS_CATALOG`` environment variable.
3. The bundled ``data/cards.json``.
"""

from __future__ import annotations

import os
from os import PathLike
from pathlib import Path

from pydantic import TypeAdapter, ValidationError

from .logging_setup import get_logger
from .models import Benefit, CreditCard

CATALOG_ENV = "CARD_BENEFITS_CATALOG"
DEFAULT_CATALOG_PATH = Path(__file__).resolve().parent / "data" / "cards.json"

_CATALOG_ADAPTER: TypeAdapter[dict[str, CreditCard]] = TypeAdapter(dict[str, CreditCard])

_logger = get_logger("card_benefits.catalog")


class CatalogError(ValueError):
    """Raised when a catalog file is missing or does not validate."""


def _resolve_path(path: str | PathLike[str] | None) -> Path:
    if path is not None:
        return Path(path)
    env_val = os.getenv(CATALOG_ENV)
    if env_val and env_val.strip():
        return Path(env_val.strip())
    return DEFAULT_CATALOG_PATH


def load_catalog(path: str | PathLike[str] | None = None) -> dict[str, CreditCard]:
    """Load and validate a card catalog.

    Raises
    ------
    CatalogError
        When the file cannot be read, fails validation, or a card's ``id``
        differs from its key.
    """

    p = _resolve_path(path)
    try:
        raw = p.read_bytes()
    except OSError as e:
        raise CatalogError(f"cannot read catalog {p}: {e}") from e

    try:
        catalog = _CATALOG_ADAPTER.validate_json(raw)
    except ValidationError as e:
        raise CatalogError(f"invalid catalog {p}: {e}") from e

    for key, card in catalog.items():
        if card.id != key:
            raise CatalogError(f"catalog key {key!r} does not match card id {card.id!r}")

    _logger.debug("catalog:loaded path=%s num_cards=%d", p, len(catalog))
    return catalog


def get_card(card_id: str, catalog: dict[str, CreditCard] | None = None) -> CreditCard:
    cards = catalog if catalog is not None else load_catalog()
    try:
        return cards[card_id]
    except KeyError:
        known = ", ".join(sorted(cards))
        raise KeyError(f"unknown card {card_id!r}; known cards: {known}") from None


def all_cards(catalog: dict[str, CreditCard] | None = None) -> list[CreditCard]:
    cards = catalog if catalog is not None else load_catalog()
    return list(cards.values())


def initialize_benefits(card: CreditCard) -> list[Benefit]:
    """Fresh, zeroed working benefits for ``card`` in catalog order."""

    return [Benefit.from_definition(d) for d in card.benefits]


__all__ = [
    "CATALOG_ENV",
    "DEFAULT_CATALOG_PATH",
    "CatalogError",
    "all_cards",
    "get_card",
    "initialize_benefits",
    "load_catalog",
]
