"""Exceptions raised inside the ingestion pipeline.

Stages raise these; only :func:`statement_ingest.api.parse_file` turns them into
``ParseResult`` data, so nothing here ever crosses the public boundary.
"""

from __future__ import annotations

from collections.abc import Sequence


class DecodeError(ValueError):
    """The file could not be turned into a grid (unreadable or malformed)."""


class UnsupportedFormatError(DecodeError):
    """The filename extension is not one of ``.csv``, ``.xls`` or ``.xlsx``."""

    def __init__(self, filename: str) -> None:
        super().__init__("Unsupported file format. Please use CSV, XLS, or XLSX files.")
        self.filename = filename


class SchemaInferenceError(ValueError):
    """Required columns could not be located in the header row."""

    def __init__(self, *, headers: Sequence[str], missing: Sequence[str]) -> None:
        self.headers = tuple(headers)
        self.missing = tuple(missing)
        super().__init__(
            "Could not find required columns. Expected: Date, Description, Amount. "
            f"Found headers: {', '.join(self.headers)}"
        )


__all__ = ["DecodeError", "UnsupportedFormatError", "SchemaInferenceError"]
