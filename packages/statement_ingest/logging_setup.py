"""Package-wide logging for ``statement_ingest``.

Modules log through ``get_logger("statement_ingest.<module>")`` and stay silent
until a host calls :func:`configure_logging`. The CLI does so once per process,
taking the level from ``STATEMENT_INGEST_LOG_LEVEL``.
"""

from __future__ import annotations

import logging
import os
import sys
from typing import IO

_PKG_LOGGER_NAME = "statement_ingest"
LOG_LEVEL_ENV = "STATEMENT_INGEST_LOG_LEVEL"
DEFAULT_FORMAT = "%(asctime)s %(name)s %(levelname)s %(message)s"
_CONFIGURED = False


def _parse_level(level: int | str | None) -> int:
    if level is None:
        level = os.getenv(LOG_LEVEL_ENV) or logging.INFO
    if isinstance(level, int):
        return level
    name = level.strip().upper()
    if name.isdigit():
        return int(name)
    numeric = logging.getLevelNamesMapping().get(name)
    # Unknown names fall back to INFO rather than failing startup.
    return numeric if numeric is not None else logging.INFO


def configure_logging(
    level: int | str | None = None,
    *,
    fmt: str | None = None,
    stream: IO[str] | None = None,
) -> None:
    """Attach one ``StreamHandler`` to the package logger; later calls are no-ops.

    ``level`` defaults to ``STATEMENT_INGEST_LOG_LEVEL`` (else INFO) and
    ``stream`` to the current ``sys.stderr``.
    """

    global _CONFIGURED
    if _CONFIGURED:
        return

    pkg = logging.getLogger(_PKG_LOGGER_NAME)
    for h in [h for h in pkg.handlers if isinstance(h, logging.NullHandler)]:
        pkg.removeHandler(h)

    resolved = _parse_level(level)
    handler = logging.StreamHandler(stream if stream is not None else sys.stderr)
    handler.setLevel(resolved)
    handler.setFormatter(logging.Formatter(fmt or DEFAULT_FORMAT))

    pkg.setLevel(resolved)
    pkg.addHandler(handler)
    pkg.propagate = False
    _CONFIGURED = True


def reset_logging() -> None:
    """Drop every package handler and allow :func:`configure_logging` again."""

    global _CONFIGURED
    pkg = logging.getLogger(_PKG_LOGGER_NAME)
    for h in list(pkg.handlers):
        pkg.removeHandler(h)
    pkg.setLevel(logging.NOTSET)
    pkg.propagate = True
    _CONFIGURED = False


def get_logger(name: str) -> logging.Logger:
    pkg = logging.getLogger(_PKG_LOGGER_NAME)
    if not _CONFIGURED and not pkg.handlers:
        pkg.addHandler(logging.NullHandler())
    return logging.getLogger(name)
