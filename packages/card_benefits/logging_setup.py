"""Centralized logging configuration for the ``card_benefits`` package.

This module provides two public helpers:

- ``configure_logging(...)``: attach a single ``StreamHandler`` to the package
  root logger (``"card_benefits"``). Intended to be called once by
  entrypoints (e.g., the CLI) at process startup.
- ``get_logger(name)``: acquire a logger by name, ensuring that the package
  root logger has at least a ``NullHandler`` attached when not configured to
  avoid "No handler" warnings in library contexts.

Library modules must never attach their own handlers. They should only call
``get_logger("card_benefits.<module>")`` and rely on the centralized
configuration performed by the CLI or host application.

The level comes from the ``level`` argument (the CLI passes ``--log-level``), then
``CARD_BENEFITS_LOG_LEVEL``, then ``INFO``. A level name that :mod:`logging`
does not know raises ``ValueError`` naming its source, so a typo in ``.env``
is reported instead of silently logging at ``INFO``.
"""

from __future__ import annotations

import logging
import os
import sys
from typing import IO

_PKG_LOGGER_NAME = "card_benefits"
_LEVEL_ENV = "CARD_BENEFITS_LOG_LEVEL"
_DEFAULT_FORMAT = "%(asctime)s %(name)s %(levelname)s %(message)s"
_CONFIGURED = False


def _level_from_text(text: str, source: str) -> int:
    # Accept numeric strings or standard level names (INFO/DEBUG/etc.).
    name = text.strip().upper()
    if name.isdigit():
        return int(name)
    numeric = logging.getLevelNamesMapping().get(name)
    if numeric is None:
        raise ValueError(f"unknown log level {text!r} from {source}")
    return numeric


def resolve_level(level: int | str | None = None) -> int:
    """Return the numeric level for ``level``, falling back to the environment.

    Raises ``ValueError`` for level names :mod:`logging` does not define.
    """

    if isinstance(level, int):
        return level
    if isinstance(level, str) and level.strip():
        return _level_from_text(level, "the level argument")
    env_val = os.getenv(_LEVEL_ENV)
    if env_val and env_val.strip():
        return _level_from_text(env_val, _LEVEL_ENV)
    return logging.INFO


def configure_logging(
    level: int | str | None = None,
    *,
    fmt: str | None = None,
    stream: IO[str] = sys.stderr,
) -> None:
    """Configure the package root logger exactly once.

    Parameters
    ----------
    level:
        Logging level as ``int`` or level-name string (e.g., ``"DEBUG"``). If
        ``None``, defaults to ``CARD_BENEFITS_LOG_LEVEL`` when set, otherwise
        ``logging.INFO``.
    fmt:
        Optional logging format string. Defaults to
        ``"%(asctime)s %(name)s %(levelname)s %(message)s"``.
    stream:
        The output stream for the single ``StreamHandler`` (defaults to
        ``sys.stderr``).

    Raises ``ValueError`` for an unknown level name; the logger is left
    unconfigured in that case.
    """

    global _CONFIGURED
    if _CONFIGURED:
        return

    resolved = resolve_level(level)
    logger = logging.getLogger(_PKG_LOGGER_NAME)

    # Remove any existing NullHandlers to avoid swallowing logs after config.
    for h in list(logger.handlers):
        if isinstance(h, logging.NullHandler):
            logger.removeHandler(h)

    handler = logging.StreamHandler(stream)
    handler.setLevel(resolved)
    handler.setFormatter(logging.Formatter(fmt or _DEFAULT_FORMAT))

    logger.setLevel(resolved)
    logger.addHandler(handler)
    # Avoid double emission via the root logger.
    logger.propagate = False

    _CONFIGURED = True


def get_logger(name: str) -> logging.Logger:
    """Return a logger by name, ensuring safe defaults for library use.

    When the central configuration hasn't run yet, attach a ``NullHandler`` to
    the package root logger to avoid noisy warnings.
    """

    pkg_logger = logging.getLogger(_PKG_LOGGER_NAME)
    if not _CONFIGURED and not pkg_logger.handlers:
        pkg_logger.addHandler(logging.NullHandler())
    return logging.getLogger(name)


__all__ = ["configure_logging", "get_logger", "resolve_level"]
