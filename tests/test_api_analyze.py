from __future__ import annotations

import asyncio
from pathlib import Path

import pytest

from card_benefits.aggregate import MemoryStatementFile
from card_benefits.api import analyze, analyze_paths
from card_benefits.catalog import get_card
from card_benefits.models import FileProcessingProgress, ProgressStatus
from card_benefits.summary import summarize, utilization_percent

from tests.helpers import make_benefit

_STATEMENT = (
    b"Date,Description,Amount\n"
    b"03/01/2024,UBER EATS,25.00\n"
    b"03/02/2024,DUNKIN #123,6.50\n"
    b"03/03/2024,RESY NYC,75.00\n"
    b"03/04/2024,WHOLE FOODS,80.00\n"
)


def test_analyze_end_to_end_for_gold_card():
    card = get_card("amexGold")
    events: list[FileProcessingProgress] = []

    result = asyncio.run(
        analyze(
            card,
            files=[MemoryStatementFile("march.csv", _STATEMENT)],
            text="GRUBHUB $30",
            on_progress=events.append,
        )
    )

    used = {b.id: b.used_amount for b in result.benefits}
    assert used == {
        "dining": 10,
        "uber": 10,
        "resy": 50,
        "dunkin": 6.5,
        "hotel": 0,
        "other": 0,
    }
    assert result.transaction_count == 5
    totals = {b.id: b.total_amount for b in result.benefits}
    assert totals["dining"] == 120 and totals["dunkin"] == 84 and totals["resy"] == 100

    s = result.summary
    assert s.total_available == 524
    assert s.total_captured == pytest.approx(76.5)
    assert s.annual_fee == 325
    assert s.net_value == pytest.approx(-248.5)
    assert s.utilization_rate == pytest.approx(76.5 / 524 * 100)
    assert [e.status for e in events] == [ProgressStatus.PROCESSING, ProgressStatus.COMPLETE]


def test_each_run_starts_from_zero():
    card = get_card("amexGold")
    files = [MemoryStatementFile("march.csv", _STATEMENT)]

    first = asyncio.run(analyze(card, files=files))
    second = asyncio.run(analyze(card, files=files))

    assert first.benefits == second.benefits


def test_empty_input_is_rejected():
    with pytest.raises(ValueError, match="nothing to analyze"):
        asyncio.run(analyze(get_card("amexGold"), text="   "))


def test_analyze_paths_reads_files_in_order(tmp_path: Path):
    a = tmp_path / "a.csv"
    b = tmp_path / "b.csv"
    a.write_bytes(b"Date,Description,Amount\n03/01/2024,SAKS FIFTH AVENUE,30.00\n")
    b.write_bytes(b"Date,Description,Amount\n09/01/2024,SAKS FIFTH AVENUE,90.00\n")
    names: list[str] = []

    result = analyze_paths(
        get_card("amexPlatinum"),
        [a, b],
        on_progress=lambda p: names.append(p.file_name),
    )

    saks = next(x for x in result.benefits if x.id == "saks")
    assert saks.total_amount == 100
    assert saks.used_amount == 80
    assert [t.date for t in saks.transactions] == ["03/01/2024", "09/01/2024"]
    assert names == ["a.csv", "a.csv", "b.csv", "b.csv"]


def test_utilization_percent_is_bounded():
    full = make_benefit("resy", 100)
    full.used_amount = 100
    empty = make_benefit("other", 0)

    assert utilization_percent(full) == 100
    assert utilization_percent(empty) == 0


def test_summary_with_nothing_available():
    card = get_card("chaseSapphirePreferred")

    s = summarize([make_benefit("other", 0)], card)

    assert s.utilization_rate == 0
    assert s.net_value == -95
