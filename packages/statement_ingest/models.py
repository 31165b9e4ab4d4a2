"""Data models and type aliases for ``statement_ingest``.

The ingestion pipeline moves through three shapes:

- a :data:`Grid` of raw cell values as decoded from a CSV or spreadsheet,
- a :class:`ColumnMapping` naming which physical column holds each role,
- :class:`ParsedTransaction` candidates collected into a :class:`ParseResult`.

All records are frozen. A ``ParseResult`` is built once per upload attempt and
handed to the caller, which owns every persistence and category-linking
decision.
"""

from __future__ import annotations

from dataclasses import dataclass
from datetime import date, datetime
from decimal import Decimal
from typing import Any, TypeAlias

# ---------------------------------------------------------------------------
# Grid
# ---------------------------------------------------------------------------

Cell: TypeAlias = str | int | float | Decimal | datetime | date | bool | None
"""A single raw cell value.

Delimited text always yields ``str``. Spreadsheets may also yield numbers,
``datetime`` values for date-formatted cells, and ``None`` for blank cells.
"""

Row: TypeAlias = list[Cell]
Grid: TypeAlias = list[Row]
"""Row-major view of a decoded file. Row 0 is conventionally the header."""


# ---------------------------------------------------------------------------
# Column mapping
# ---------------------------------------------------------------------------

NOT_FOUND = -1
"""Sentinel index for a role that no header matched."""

REQUIRED_ROLES: tuple[str, ...] = ("date", "description", "amount")
ROLES: tuple[str, ...] = (*REQUIRED_ROLES, "category")


@dataclass(frozen=True, slots=True)
class ColumnMapping:
    """Column indices for one parse run.

    Each attribute is either a valid index into the header row or
    :data:`NOT_FOUND`. ``category`` may stay unresolved; the other three must
    resolve before any data row is normalized.
    """

    date: int = NOT_FOUND
    description: int = NOT_FOUND
    amount: int = NOT_FOUND
    category: int = NOT_FOUND

    def missing_required(self) -> list[str]:
        return [role for role in REQUIRED_ROLES if getattr(self, role) == NOT_FOUND]

    @property
    def is_complete(self) -> bool:
        return not self.missing_required()

    def to_dict(self) -> dict[str, int | None]:
        return {
            role: (None if getattr(self, role) == NOT_FOUND else getattr(self, role))
            for role in ROLES
        }


# ---------------------------------------------------------------------------
# Output records
# ---------------------------------------------------------------------------


@dataclass(frozen=True, slots=True)
class ParsedTransaction:
    """A normalized transaction candidate produced from exactly one data row.

    Attributes
    ----------
    date:
        Calendar date as ``YYYY-MM-DD``.
    description:
        Non-empty, whitespace-trimmed text.
    amount:
        Non-negative magnitude. The sign of the source value is never kept;
        callers treat imported rows as expenses.
    category:
        Free-text label suggestion from the source file, not a reference to a
        persisted category.
    notes:
        Provenance string, e.g. ``"Imported from statement.csv"``.
    """

    date: str
    description: str
    amount: Decimal
    category: str | None = None
    notes: str | None = None

    def to_dict(self) -> dict[str, Any]:
        return {
            "date": self.date,
            "description": self.description,
            "amount": format(self.amount, "f"),
            "category": self.category,
            "notes": self.notes,
        }


@dataclass(frozen=True, slots=True)
class ParseResult:
    """Aggregate outcome of one ingestion attempt.

    ``errors`` holds human-readable warnings in the order they were produced.
    ``profile`` and ``mapping`` record what schema inference chose and are
    ``None`` when the run stopped before inference.
    """

    success: bool
    transactions: tuple[ParsedTransaction, ...] = ()
    errors: tuple[str, ...] = ()
    total_rows: int = 0
    valid_rows: int = 0
    profile: str | None = None
    mapping: ColumnMapping | None = None

    def __post_init__(self) -> None:
        if self.valid_rows != len(self.transactions):
            raise ValueError(
                f"valid_rows={self.valid_rows} does not match "
                f"{len(self.transactions)} transactions"
            )
        if self.success != (len(self.transactions) > 0):
            raise ValueError("success must be true iff at least one transaction was parsed")

    @property
    def warnings(self) -> tuple[str, ...]:
        return self.errors

    def to_dict(self) -> dict[str, Any]:
        return {
            "success": self.success,
            "transactions": [tx.to_dict() for tx in self.transactions],
            "errors": list(self.errors),
            "total_rows": self.total_rows,
            "valid_rows": self.valid_rows,
            "profile": self.profile,
            "mapping": self.mapping.to_dict() if self.mapping is not None else None,
        }


__all__ = [
    "Cell",
    "Row",
    "Grid",
    "NOT_FOUND",
    "REQUIRED_ROLES",
    "ROLES",
    "ColumnMapping",
    "ParsedTransaction",
    "ParseResult",
]
