from __future__ import annotations

import io
import logging

import pytest

import card_benefits.logging_setup as logging_setup
from card_benefits.logging_setup import configure_logging, get_logger, resolve_level


@pytest.fixture
def pkg_logger(monkeypatch: pytest.MonkeyPatch):
    logger = logging.getLogger("card_benefits")
    saved = (list(logger.handlers), logger.level, logger.propagate)
    monkeypatch.setattr(logging_setup, "_CONFIGURED", False)
    logger.handlers.clear()
    yield logger
    logger.handlers[:] = saved[0]
    logger.setLevel(saved[1])
    logger.propagate = saved[2]


def test_level_names_and_numbers():
    assert resolve_level("debug") == logging.DEBUG
    assert resolve_level(" WARNING ") == logging.WARNING
    assert resolve_level("15") == 15
    assert resolve_level(logging.ERROR) == logging.ERROR


def test_level_falls_back_to_env_then_info(monkeypatch: pytest.MonkeyPatch):
    assert resolve_level() == logging.INFO
    monkeypatch.setenv("CARD_BENEFITS_LOG_LEVEL", "error")
    assert resolve_level() == logging.ERROR
    assert resolve_level("DEBUG") == logging.DEBUG


def test_unknown_level_names_its_source(monkeypatch: pytest.MonkeyPatch):
    with pytest.raises(ValueError, match="'LOUD' from the level argument"):
        resolve_level("LOUD")

    monkeypatch.setenv("CARD_BENEFITS_LOG_LEVEL", "verbose")
    with pytest.raises(ValueError, match="CARD_BENEFITS_LOG_LEVEL"):
        resolve_level()


def test_get_logger_is_silent_until_configured(pkg_logger: logging.Logger):
    get_logger("card_benefits.matching")

    assert [type(h) for h in pkg_logger.handlers] == [logging.NullHandler]


def test_configure_logging_attaches_one_stream_handler(pkg_logger: logging.Logger):
    get_logger("card_benefits.api")
    stream = io.StringIO()

    configure_logging("DEBUG", fmt="%(name)s %(message)s", stream=stream)
    configure_logging("ERROR", stream=io.StringIO())
    get_logger("card_benefits.api").debug("analyze:done card=%s", "amexGold")

    assert len(pkg_logger.handlers) == 1
    assert pkg_logger.level == logging.DEBUG
    assert not pkg_logger.propagate
    assert stream.getvalue() == "card_benefits.api analyze:done card=amexGold\n"


def test_bad_level_leaves_logger_unconfigured(pkg_logger: logging.Logger):
    with pytest.raises(ValueError):
        configure_logging("LOUD", stream=io.StringIO())

    assert pkg_logger.handlers == []
    assert logging_setup._CONFIGURED is False
