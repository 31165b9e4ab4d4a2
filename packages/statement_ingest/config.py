"""Environment-backed settings for host entrypoints.

The parsing core never reads the environment; hosts such as the CLI call
:func:`load_settings` (after ``python-dotenv`` has populated ``os.environ``)
and pass the values explicitly.

Variables
---------
``STATEMENT_INGEST_LOG_LEVEL``
    Logging level name or number. Defaults to ``INFO``.
``STATEMENT_INGEST_MAX_BYTES``
    Upload size cap in bytes. ``0`` disables the cap. Defaults to 10 MiB.
"""

from __future__ import annotations

import os
from collections.abc import Mapping
from dataclasses import dataclass

from .logging_setup import LOG_LEVEL_ENV, get_logger

MAX_BYTES_ENV = "STATEMENT_INGEST_MAX_BYTES"
DEFAULT_MAX_BYTES = 10 * 1024 * 1024
DEFAULT_LOG_LEVEL = "INFO"

logger = get_logger("statement_ingest.config")


@dataclass(frozen=True, slots=True)
class Settings:
    log_level: str = DEFAULT_LOG_LEVEL
    max_bytes: int | None = DEFAULT_MAX_BYTES


def _parse_max_bytes(raw: str | None) -> int | None:
    if raw is None or not raw.strip():
        return DEFAULT_MAX_BYTES
    try:
        value = int(raw.strip())
    except ValueError:
        logger.warning("ignoring invalid %s=%r", MAX_BYTES_ENV, raw)
        return DEFAULT_MAX_BYTES
    if value < 0:
        logger.warning("ignoring negative %s=%r", MAX_BYTES_ENV, raw)
        return DEFAULT_MAX_BYTES
    return value or None


def load_settings(environ: Mapping[str, str] | None = None) -> Settings:
    env = os.environ if environ is None else environ
    level = (env.get(LOG_LEVEL_ENV) or "").strip() or DEFAULT_LOG_LEVEL
    return Settings(log_level=level, max_bytes=_parse_max_bytes(env.get(MAX_BYTES_ENV)))


__all__ = ["DEFAULT_MAX_BYTES", "MAX_BYTES_ENV", "Settings", "load_settings"]
