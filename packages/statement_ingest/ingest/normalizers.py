"""Row normalization: one raw data row → :class:`ParsedTransaction` or skip.

Amounts are magnitudes only. Text amounts lose currency symbols, thousands
separators, parentheses and quote characters; whatever numeric prefix remains
is parsed, and anything unparsable becomes zero. Zero-amount rows and rows
without a description are skipped by :func:`normalize_row`.

Dates are lossy by policy: when no interpretation yields a real calendar date
the injected ``today`` is used instead of rejecting the row. Slash/dash/dot
dates are read month/day/year first and day/month/year second, so ambiguous
values such as ``05/06/2024`` always resolve as May 6.
"""

from __future__ import annotations

import math
import numbers
import re
from collections.abc import Sequence
from datetime import date, datetime
from decimal import Decimal

from ..models import NOT_FOUND, Cell, ColumnMapping, ParsedTransaction

# ---------------------------------------------------------------------------
# Amounts
# ---------------------------------------------------------------------------

ZERO = Decimal("0")

_AMOUNT_NOISE = re.compile(r"[$€£¥₹,\s()\"“”]")
_NUMERIC_PREFIX = re.compile(r"[+-]?(?:\d+(?:\.\d*)?|\.\d+)(?:[eE][+-]?\d+)?")


def normalize_amount(value: Cell) -> Decimal:
    """Return the non-negative magnitude of a raw amount cell."""

    if value is None:
        return ZERO
    if isinstance(value, numbers.Real) and not isinstance(value, bool):
        if isinstance(value, float) and not math.isfinite(value):
            return ZERO
        try:
            return abs(Decimal(str(value)))
        except ArithmeticError:
            return ZERO

    s = _AMOUNT_NOISE.sub("", str(value)).strip()
    if not s or s == "-":
        return ZERO
    match = _NUMERIC_PREFIX.match(s)
    if match is None:
        return ZERO
    try:
        return abs(Decimal(match.group(0)))
    except ArithmeticError:
        # InvalidOperation, or Overflow for exponents beyond the decimal context.
        return ZERO


# ---------------------------------------------------------------------------
# Dates
# ---------------------------------------------------------------------------

_DIRECT_FORMATS: tuple[str, ...] = (
    "%Y/%m/%d",
    "%b %d, %Y",
    "%B %d, %Y",
    "%d %b %Y",
    "%d %B %Y",
)
_DATE_SEPARATORS = re.compile(r"[/\-.]")
_DIGITS = re.compile(r"[0-9]+")


def _parse_direct(s: str) -> date | None:
    try:
        return date.fromisoformat(s)
    except ValueError:
        pass
    try:
        return datetime.fromisoformat(s).date()
    except ValueError:
        pass
    for fmt in _DIRECT_FORMATS:
        try:
            return datetime.strptime(s, fmt).date()
        except ValueError:
            continue
    return None


def _year(part: str) -> int:
    # Two-digit years are always 20YY, never 19YY.
    y = int(part)
    return 2000 + y if len(part) <= 2 else y


def _parse_parts(s: str) -> date | None:
    # Some exports append a time ("03/15/2024 10:42"); only the date token counts.
    token = s.split()[0]
    parts = _DATE_SEPARATORS.split(token)
    if len(parts) != 3 or not all(_DIGITS.fullmatch(p) for p in parts):
        return None
    first, second, year_part = parts
    for month_part, day_part in ((first, second), (second, first)):
        try:
            return date(_year(year_part), int(month_part), int(day_part))
        except (ValueError, OverflowError):
            continue
    return None


def normalize_date(value: Cell, *, today: date) -> str:
    """Return ``YYYY-MM-DD`` for a raw date cell, falling back to ``today``."""

    if isinstance(value, datetime):
        return value.date().isoformat()
    if isinstance(value, date):
        return value.isoformat()
    if value is None:
        return today.isoformat()
    s = str(value).strip()
    if not s:
        return today.isoformat()
    parsed = _parse_direct(s) or _parse_parts(s)
    return (parsed or today).isoformat()


# ---------------------------------------------------------------------------
# Text and rows
# ---------------------------------------------------------------------------


def normalize_text(value: Cell) -> str:
    if value is None:
        return ""
    return str(value).strip()


def _cell(row: Sequence[Cell], index: int) -> Cell:
    if index == NOT_FOUND or index >= len(row):
        return None
    return row[index]


def normalize_row(
    mapping: ColumnMapping,
    row: Sequence[Cell],
    *,
    today: date,
    notes: str | None = None,
) -> ParsedTransaction | None:
    """Normalize one data row; ``None`` means the row carries no transaction."""

    description = normalize_text(_cell(row, mapping.description))
    amount = normalize_amount(_cell(row, mapping.amount))
    if not description or amount == ZERO:
        return None

    category = None
    if mapping.category != NOT_FOUND:
        category = normalize_text(_cell(row, mapping.category)) or None

    return ParsedTransaction(
        date=normalize_date(_cell(row, mapping.date), today=today),
        description=description,
        amount=amount,
        category=category,
        notes=notes,
    )


__all__ = [
    "normalize_amount",
    "normalize_date",
    "normalize_row",
    "normalize_text",
]
