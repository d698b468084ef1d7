"""Pytest configuration for import paths and environment isolation.

The ``card_benefits`` package lives under ``packages/``; it is put on
``sys.path`` so tests run from a plain checkout without an install.

Configuration is read from ``CARD_BENEFITS_*`` environment variables (and a
local ``.env`` in CLI runs). An autouse fixture clears them so a developer's
shell or ``.env`` cannot change test outcomes.
"""

from __future__ import annotations

import sys
from pathlib import Path

import pytest

_ROOT = Path(__file__).resolve().parents[1]
_PKG_DIR = _ROOT / "packages"
sys.path[:0] = [p for p in [str(_PKG_DIR), str(_ROOT)] if p not in sys.path]

_ENV_VARS = (
    "CARD_BENEFITS_CATALOG",
    "CARD_BENEFITS_DEFAULT_CARD",
    "CARD_BENEFITS_LOG_LEVEL",
)


@pytest.fixture(autouse=True)
def _isolate_env(monkeypatch: pytest.MonkeyPatch, tmp_path: Path) -> None:
    for name in _ENV_VARS:
        monkeypatch.delenv(name, raising=False)
    # CLI runs load ``.env`` from the working directory.
    monkeypatch.chdir(tmp_path)
