"""Schema inference: header row → :class:`~statement_ingest.models.ColumnMapping`.

For each role the active profile's candidates are tried in priority order. A
header matches a candidate when either normalized string contains the other.
The first candidate with any matching header wins, and among several matching
headers the lowest column index wins. Headers that normalize to an empty
string never match.
"""

from __future__ import annotations

from collections.abc import Sequence

from ..errors import SchemaInferenceError
from ..models import NOT_FOUND, ROLES, ColumnMapping
from .profiles import HeaderProfile, detect_profile, get_profile, normalize_header


def find_column_index(headers: Sequence[object], candidates: Sequence[str]) -> int:
    normalized = [normalize_header(h) for h in headers]
    for candidate in candidates:
        name = normalize_header(candidate)
        if not name:
            continue
        for idx, header in enumerate(normalized):
            if header and (name in header or header in name):
                return idx
    return NOT_FOUND


def infer_columns(
    headers: Sequence[object], profile: HeaderProfile | str | None = None
) -> ColumnMapping:
    """Map each role to a column index using ``profile`` (detected when ``None``)."""

    if profile is None:
        profile = detect_profile(headers)
    if isinstance(profile, str):
        profile = get_profile(profile)
    return ColumnMapping(
        **{role: find_column_index(headers, profile.candidates(role)) for role in ROLES}
    )


def header_labels(headers: Sequence[object]) -> list[str]:
    return ["" if h is None else str(h) for h in headers]


def require_columns(headers: Sequence[object], mapping: ColumnMapping) -> ColumnMapping:
    """Raise :class:`SchemaInferenceError` unless date/description/amount resolved."""

    missing = mapping.missing_required()
    if missing:
        raise SchemaInferenceError(headers=header_labels(headers), missing=missing)
    return mapping


__all__ = ["find_column_index", "header_labels", "infer_columns", "require_columns"]
