"""Public API for the ``statement_ingest`` package.

:func:`parse_file` drives the pipeline for one upload::

    decode → check row count → infer columns → normalize rows → finalize

It never raises for problems with the file itself. Decode failures, missing
columns, per-row exceptions and empty results are all reported through the
returned :class:`~statement_ingest.models.ParseResult` (``success`` plus the
``errors`` sequence). Each call is independent and touches no state beyond the
supplied content, so files may be parsed concurrently.
"""

from __future__ import annotations

from collections.abc import Sequence
from dataclasses import dataclass, field
from datetime import date
from os import PathLike
from pathlib import Path
from typing import IO

from .errors import DecodeError, SchemaInferenceError
from .ingest.decoder import decode, file_kind, read_bytes, read_path
from .ingest.normalizers import normalize_row
from .ingest.profiles import detect_profile, get_profile
from .ingest.schema import infer_columns, require_columns
from .logging_setup import get_logger
from .models import Cell, ColumnMapping, Grid, ParsedTransaction, ParseResult

logger = get_logger("statement_ingest.api")

EMPTY_FILE_MESSAGE = "File appears to be empty or has no data rows."
NO_TRANSACTIONS_MESSAGE = "No valid transactions found in the file."


def _failure(
    message: str,
    *,
    total_rows: int = 0,
    profile: str | None = None,
    mapping: ColumnMapping | None = None,
) -> ParseResult:
    return ParseResult(
        success=False,
        errors=(message,),
        total_rows=total_rows,
        profile=profile,
        mapping=mapping,
    )


@dataclass(slots=True)
class _RowFold:
    """Accumulator for the row-processing stage."""

    transactions: list[ParsedTransaction] = field(default_factory=list)
    errors: list[str] = field(default_factory=list)

    def step(
        self,
        row_number: int,
        row: Sequence[Cell],
        *,
        mapping: ColumnMapping,
        today: date,
        notes: str,
    ) -> None:
        if not row:
            return
        try:
            candidate = normalize_row(mapping, row, today=today, notes=notes)
        except Exception as exc:
            logger.warning("row %d skipped: %s", row_number, exc)
            self.errors.append(f"Row {row_number}: {str(exc) or type(exc).__name__}")
            return
        if candidate is not None:
            self.transactions.append(candidate)


def parse_grid(
    grid: Grid,
    *,
    filename: str,
    today: date | None = None,
    profile: str | None = None,
) -> ParseResult:
    """Run inference and row normalization over an already decoded grid."""

    if len(grid) < 2:
        return _failure(EMPTY_FILE_MESSAGE)

    headers = grid[0]
    rows = grid[1:]
    profile_name = profile or detect_profile(headers)
    mapping = infer_columns(headers, get_profile(profile_name))
    try:
        require_columns(headers, mapping)
    except SchemaInferenceError as exc:
        logger.warning("%s: %s", filename, exc)
        return _failure(str(exc), total_rows=len(rows), profile=profile_name, mapping=mapping)

    today = today or date.today()
    notes = f"Imported from {filename}"
    fold = _RowFold()
    for offset, row in enumerate(rows):
        # +2: one for the header row, one for 1-based numbering.
        fold.step(offset + 2, row, mapping=mapping, today=today, notes=notes)

    errors = list(fold.errors)
    if not fold.transactions:
        errors.append(NO_TRANSACTIONS_MESSAGE)

    logger.info(
        "%s: %d of %d rows parsed (profile=%s)",
        filename,
        len(fold.transactions),
        len(rows),
        profile_name,
    )
    return ParseResult(
        success=bool(fold.transactions),
        transactions=tuple(fold.transactions),
        errors=tuple(errors),
        total_rows=len(rows),
        valid_rows=len(fold.transactions),
        profile=profile_name,
        mapping=mapping,
    )


def parse_file(
    filename: str,
    data: bytes | bytearray | IO[bytes],
    *,
    today: date | None = None,
    max_bytes: int | None = None,
    profile: str | None = None,
) -> ParseResult:
    """Parse an uploaded bank statement into transaction candidates.

    Parameters
    ----------
    filename:
        Original file name. Used for format selection (``.csv``, ``.xls``,
        ``.xlsx``) and for the ``notes`` provenance string.
    data:
        Raw file content, as bytes or a binary stream.
    today:
        Date used when a row's date cannot be interpreted. Defaults to
        ``date.today()`` at call time.
    max_bytes:
        Optional size cap; larger content is reported as a decode failure.
    profile:
        Force an institution profile (``generic``, ``chase``, ``amex``)
        instead of detecting it from the header row.
    """

    try:
        file_kind(filename)
        grid = decode(filename, read_bytes(data, max_bytes=max_bytes))
    except DecodeError as exc:
        logger.warning("%s: decode failed: %s", filename, exc)
        return _failure(str(exc))
    except Exception as exc:
        logger.exception("%s: unexpected failure while decoding", filename)
        return _failure(f"Failed to parse file: {exc}")

    try:
        return parse_grid(grid, filename=filename, today=today, profile=profile)
    except Exception as exc:
        logger.exception("%s: unexpected failure while parsing", filename)
        return _failure(f"Failed to parse file: {exc}")


def parse_path(
    path: str | PathLike[str],
    *,
    today: date | None = None,
    max_bytes: int | None = None,
    profile: str | None = None,
) -> ParseResult:
    """Read ``path`` from disk and delegate to :func:`parse_file`."""

    name = Path(path).name
    try:
        file_kind(name)
        data = read_path(path, max_bytes=max_bytes)
    except DecodeError as exc:
        logger.warning("%s: %s", name, exc)
        return _failure(str(exc))
    return parse_file(name, data, today=today, max_bytes=max_bytes, profile=profile)


__all__ = [
    "EMPTY_FILE_MESSAGE",
    "NO_TRANSACTIONS_MESSAGE",
    "parse_file",
    "parse_grid",
    "parse_path",
]
