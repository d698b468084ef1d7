# ruff: noqa: I001
"""CLI for the ``card_benefits`` package.

Exposes callable command handlers (``cmd_list_cards``, ``cmd_analyze``) that
return process exit codes, and a Typer-based console interface wrapping them.
Environment variables are loaded from a local ``.env`` using
``python-dotenv`` before any command runs. Business logic lives in
``card_benefits.api`` and the pipeline modules.

Configuration (environment):

- ``CARD_BENEFITS_LOG_LEVEL``: log level for the package logger, unless
  ``--log-level`` is given.
- ``CARD_BENEFITS_CATALOG``: path to an alternative catalog JSON file.
- ``CARD_BENEFITS_DEFAULT_CARD``: card used when ``--card`` is omitted.
"""

from __future__ import annotations

import json
import os
import sys
from dataclasses import asdict
from pathlib import Path
from collections.abc import Sequence

import typer
from dotenv import load_dotenv
from rich.console import Console
from rich.table import Table

from .logging_setup import configure_logging
from .models import FileProcessingProgress, ProgressStatus

DEFAULT_CARD_ENV = "CARD_BENEFITS_DEFAULT_CARD"
FALLBACK_CARD_ID = "amexGold"

console = Console()
err_console = Console(stderr=True)


# ---- Small module-level helpers ----------------------------------------------


def _resolve_card_id(card_id: str | None) -> str:
    if card_id and card_id.strip():
        return card_id.strip()
    env_val = os.getenv(DEFAULT_CARD_ENV)
    return env_val.strip() if env_val and env_val.strip() else FALLBACK_CARD_ID


def _read_text_input(text_file: Path | None) -> str | None:
    if text_file is None:
        return None
    if str(text_file) == "-":
        return sys.stdin.read()
    return text_file.read_text(encoding="utf-8")


def _print_progress(progress: FileProcessingProgress) -> None:
    style = {
        ProgressStatus.PROCESSING: "cyan",
        ProgressStatus.COMPLETE: "green",
        ProgressStatus.ERROR: "red",
    }[progress.status]
    err_console.print(
        f"Processing: {progress.current_file} of {progress.total_files} "
        f"{progress.file_name} [{style}]{progress.status}[/{style}]",
        highlight=False,
    )


def _money(value: float) -> str:
    return f"${value:,.2f}"


# ---- Command handlers ---------------------------------------------------------


def cmd_list_cards(*, catalog_path: str | None = None) -> int:
    """Print the cards available in the catalog."""

    from .catalog import CatalogError, all_cards, load_catalog

    try:
        cards = all_cards(load_catalog(catalog_path))
    except CatalogError as e:
        print(f"Error: {e}", file=sys.stderr)
        return 1

    table = Table(title="Cards")
    table.add_column("ID")
    table.add_column("Card")
    table.add_column("Issuer")
    table.add_column("Annual fee", justify="right")
    table.add_column("Benefits", justify="right")
    for card in cards:
        table.add_row(
            card.id, card.display_name, card.issuer, _money(card.annual_fee), str(len(card.benefits))
        )
    console.print(table)
    return 0


def cmd_analyze(
    *,
    card_id: str | None,
    files: Sequence[str | Path] = (),
    text_file: Path | None = None,
    as_json: bool = False,
    catalog_path: str | None = None,
) -> int:
    """Analyze statements for one card and print the benefit utilization.

    Behavior
    --------
    - Pasted text (``text_file``, ``-`` for stdin) is parsed first, then each
      file in order. Per-file progress lines go to stderr.
    - A file that fails to decode is reported and skipped.
    - Output is a table plus summary, or the benefit list as JSON with
      ``as_json``.

    Returns ``0`` on success, ``1`` on usage, catalog or input errors.
    """

    from .api import analyze_paths
    from .catalog import CatalogError, get_card, load_catalog
    from .summary import utilization_percent

    try:
        card = get_card(_resolve_card_id(card_id), load_catalog(catalog_path))
    except (CatalogError, KeyError) as e:
        print(f"Error: {e.args[0] if e.args else e}", file=sys.stderr)
        return 1

    try:
        text = _read_text_input(text_file)
    except (OSError, UnicodeDecodeError) as e:
        print(f"Error: cannot read text input: {e}", file=sys.stderr)
        return 1

    try:
        result = analyze_paths(card, files, text=text, on_progress=_print_progress)
    except ValueError as e:
        print(f"Error: {e}", file=sys.stderr)
        return 1

    if as_json:
        payload = {
            "card": card.id,
            "transactionCount": result.transaction_count,
            "benefits": [b.to_dict() for b in result.benefits],
            "summary": asdict(result.summary),
        }
        print(json.dumps(payload, indent=2))
        return 0

    table = Table(title=f"{card.display_name} benefits")
    table.add_column("Benefit")
    table.add_column("Resets")
    table.add_column("Used", justify="right")
    table.add_column("Total", justify="right")
    table.add_column("%", justify="right")
    table.add_column("Transactions", justify="right")
    for b in result.benefits:
        table.add_row(
            b.name,
            str(b.reset_period),
            _money(b.used_amount),
            _money(b.total_amount),
            f"{utilization_percent(b):.0f}",
            str(len(b.transactions)),
        )
    console.print(table)

    s = result.summary
    console.print(f"Transactions analyzed: {result.transaction_count}")
    console.print(f"Total value available: {_money(s.total_available)}")
    console.print(f"Value captured: {_money(s.total_captured)} ({s.utilization_rate:.1f}%)")
    console.print(f"Annual fee: {_money(s.annual_fee)}")
    color = "green" if s.net_value >= 0 else "red"
    console.print(f"Net value: [{color}]{_money(s.net_value)}[/{color}]")
    return 0


# ---- Typer-based console interface -------------------------------------------


app = typer.Typer(
    no_args_is_help=True,
    add_completion=False,
    help="Reconcile credit-card statements against a card's statement-credit benefits.",
)


@app.command("cards")
def cards_cmd(
    catalog: str | None = typer.Option(
        None, help="Catalog JSON path (falls back to CARD_BENEFITS_CATALOG)."
    ),
) -> None:
    """List the cards in the benefit catalog."""

    raise typer.Exit(cmd_list_cards(catalog_path=catalog))


@app.command("analyze")
def analyze_cmd(
    card: str | None = typer.Option(
        None, "--card", "-c", help="Card id (falls back to CARD_BENEFITS_DEFAULT_CARD)."
    ),
    file: list[Path] | None = typer.Option(
        None, "--file", "-f", help="Statement file (CSV/XLSX). Repeat for several files."
    ),
    text_file: Path | None = typer.Option(
        None, "--text-file", "-t", help="File with pasted transaction lines ('-' for stdin)."
    ),
    as_json: bool = typer.Option(False, "--json", help="Print the benefit list as JSON."),
    catalog: str | None = typer.Option(
        None, help="Catalog JSON path (falls back to CARD_BENEFITS_CATALOG)."
    ),
) -> None:
    """Match statement transactions to the card's benefits."""

    raise typer.Exit(
        cmd_analyze(
            card_id=card,
            files=file or [],
            text_file=text_file,
            as_json=as_json,
            catalog_path=catalog,
        )
    )


@app.callback()
def _root(
    log_level: str | None = typer.Option(
        None, "--log-level", help="Log level (falls back to CARD_BENEFITS_LOG_LEVEL, then INFO)."
    ),
) -> None:
    """Load ``.env`` from the working directory and configure logging."""

    load_dotenv(dotenv_path=Path.cwd() / ".env", override=False)
    try:
        configure_logging(log_level)
    except ValueError as e:
        print(f"Error: {e}", file=sys.stderr)
        raise typer.Exit(1) from None


def main() -> None:
    app()


if __name__ == "__main__":  # pragma: no cover
    main()
