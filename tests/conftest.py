"""Pytest configuration for test isolation.

The CLI reads ``STATEMENT_INGEST_*`` variables (optionally from a ``.env`` in
the working directory) and configures the package logger once per process.
Both would leak between tests, so every test gets a clean environment, runs
from its own temporary directory, and starts with unconfigured logging.
"""

from __future__ import annotations

from collections.abc import Iterator
from datetime import date
from pathlib import Path

import pytest

from statement_ingest.logging_setup import reset_logging

DATA_DIR = Path(__file__).resolve().parent / "data"
FIXED_TODAY = date(2030, 1, 1)


@pytest.fixture(autouse=True)
def _isolate_env(tmp_path: Path, monkeypatch: pytest.MonkeyPatch) -> Iterator[None]:
    for var in ("STATEMENT_INGEST_LOG_LEVEL", "STATEMENT_INGEST_MAX_BYTES"):
        monkeypatch.delenv(var, raising=False)
    monkeypatch.chdir(tmp_path)
    reset_logging()
    yield
    reset_logging()


@pytest.fixture
def data_dir() -> Path:
    return DATA_DIR


@pytest.fixture
def today() -> date:
    """A fallback date that can never collide with dates in the fixtures."""

    return FIXED_TODAY
