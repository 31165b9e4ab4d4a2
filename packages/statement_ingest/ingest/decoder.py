"""Tabular decoder: raw upload → :data:`~statement_ingest.models.Grid`.

Format selection is by filename extension only (no content sniffing):

- ``.csv``: delimited text parsed with the stdlib :mod:`csv` module in strict
  mode (RFC 4180 quoting, embedded newlines, doubled quotes). Lines that parse
  to zero fields are dropped; header cells are trimmed. Malformed quoting
  raises :class:`~statement_ingest.errors.DecodeError` and no partial grid is
  returned.
- ``.xls`` / ``.xlsx``: only the first sheet is read via ``pandas.read_excel``
  (``openpyxl`` / ``xlrd`` engines). Blank cells become ``None``.

Everything else is rejected with
:class:`~statement_ingest.errors.UnsupportedFormatError`.
"""

from __future__ import annotations

import csv
import io
import math
from collections.abc import Sequence
from os import PathLike
from pathlib import Path
from typing import IO, Any

import pandas as pd

from ..errors import DecodeError, UnsupportedFormatError
from ..logging_setup import get_logger
from ..models import Cell, Grid

logger = get_logger("statement_ingest.ingest.decoder")

CSV_EXTENSIONS: frozenset[str] = frozenset({".csv"})
SPREADSHEET_EXTENSIONS: frozenset[str] = frozenset({".xls", ".xlsx"})
TEXT_ENCODINGS: tuple[str, ...] = ("utf-8-sig", "cp1252", "latin-1")


def file_kind(filename: str) -> str:
    """Return ``"csv"`` or ``"spreadsheet"`` for a supported filename.

    Raises :class:`UnsupportedFormatError` for any other extension.
    """

    suffix = Path(filename).suffix.lower()
    if suffix in CSV_EXTENSIONS:
        return "csv"
    if suffix in SPREADSHEET_EXTENSIONS:
        return "spreadsheet"
    raise UnsupportedFormatError(filename)


def read_bytes(source: bytes | bytearray | IO[bytes], *, max_bytes: int | None = None) -> bytes:
    """Read an upload fully into memory, enforcing an optional size cap."""

    try:
        if isinstance(source, (bytes, bytearray)):
            data = bytes(source)
        else:
            # Read one byte past the cap so oversized streams are detected
            # without loading them entirely.
            data = source.read() if not max_bytes else source.read(max_bytes + 1)
    except OSError as exc:
        raise DecodeError(f"Could not read file: {exc}") from exc
    if max_bytes and len(data) > max_bytes:
        raise DecodeError(f"File is too large (limit is {max_bytes} bytes).")
    return data


def read_path(path: str | PathLike[str], *, max_bytes: int | None = None) -> bytes:
    p = Path(path)
    try:
        with p.open("rb") as f:
            return read_bytes(f, max_bytes=max_bytes)
    except FileNotFoundError as exc:
        raise DecodeError(f"File not found: {p}") from exc
    except PermissionError as exc:
        raise DecodeError(f"Permission denied: {p}") from exc
    except IsADirectoryError as exc:
        raise DecodeError(f"Not a file: {p}") from exc
    except OSError as exc:
        raise DecodeError(f"Could not read file: {exc}") from exc


def decode_text(data: bytes) -> str:
    for encoding in TEXT_ENCODINGS:
        try:
            text = data.decode(encoding)
        except UnicodeDecodeError:
            continue
        logger.debug("decoded text with %s encoding", encoding)
        return text
    # latin-1 maps every byte, so this is unreachable in practice.
    raise DecodeError(f"Could not decode text with any of: {', '.join(TEXT_ENCODINGS)}")


def parse_csv_text(text: str) -> Grid:
    """Parse delimited text into a grid of strings."""

    grid: Grid = []
    try:
        with io.StringIO(text, newline="") as f:
            reader = csv.reader(f, strict=True)
            for row in reader:
                if not row:
                    continue
                grid.append(list(row))
    except csv.Error as exc:
        raise DecodeError(str(exc)) from exc
    if grid:
        grid[0] = [cell.strip() if isinstance(cell, str) else cell for cell in grid[0]]
    return grid


def _coerce_cell(value: Any) -> Cell:
    if value is None:
        return None
    if value is pd.NaT:
        return None
    if isinstance(value, float) and math.isnan(value):
        return None
    if isinstance(value, pd.Timestamp):
        return value.to_pydatetime()
    return value


def parse_spreadsheet(data: bytes, *, filename: str) -> Grid:
    """Read the first sheet of a workbook into a grid of raw cell values."""

    try:
        frame = pd.read_excel(io.BytesIO(data), sheet_name=0, header=None, dtype=object)
    except Exception as exc:
        raise DecodeError(f"Could not read spreadsheet {filename!r}: {exc}") from exc

    grid: Grid = []
    for values in frame.itertuples(index=False, name=None):
        grid.append(_trim_trailing_blanks([_coerce_cell(v) for v in values]))
    if grid:
        grid[0] = [cell.strip() if isinstance(cell, str) else cell for cell in grid[0]]
    return grid


def _trim_trailing_blanks(row: Sequence[Cell]) -> list[Cell]:
    # pandas pads every row to the widest one; drop the padding.
    end = len(row)
    while end > 0 and row[end - 1] is None:
        end -= 1
    return list(row[:end])


def decode(filename: str, data: bytes) -> Grid:
    """Decode file content into a grid based on ``filename``'s extension."""

    kind = file_kind(filename)
    if kind == "csv":
        return parse_csv_text(decode_text(data))
    return parse_spreadsheet(data, filename=filename)


__all__ = [
    "CSV_EXTENSIONS",
    "SPREADSHEET_EXTENSIONS",
    "decode",
    "decode_text",
    "file_kind",
    "parse_csv_text",
    "parse_spreadsheet",
    "read_bytes",
    "read_path",
]
