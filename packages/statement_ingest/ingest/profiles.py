"""Per-institution header name dictionaries and profile detection.

Each profile lists, per role, the header names that export format is known to
use, in priority order. Names are stored already normalized (lowercase,
alphanumerics and spaces only). The table is built once at import time and is
read-only afterwards.

Detection is a best-effort classification over the normalized header set:

- ``chase``: some header contains ``post date`` or ``transaction date``
- ``amex``: an exact ``date`` header alongside an exact ``description`` header
- ``generic``: anything else
"""

from __future__ import annotations

import re
from collections.abc import Iterable, Mapping, Sequence
from dataclasses import dataclass
from types import MappingProxyType

_NON_ALNUM_SPACE = re.compile(r"[^a-z0-9\s]")


def normalize_header(name: object) -> str:
    """Lowercase, drop everything but ``[a-z0-9]`` and whitespace, then trim."""

    if name is None:
        return ""
    return _NON_ALNUM_SPACE.sub("", str(name).lower()).strip()


@dataclass(frozen=True, slots=True)
class HeaderProfile:
    """Candidate header names for each role within one export layout."""

    name: str
    date: tuple[str, ...]
    description: tuple[str, ...]
    amount: tuple[str, ...]
    category: tuple[str, ...]

    def candidates(self, role: str) -> tuple[str, ...]:
        return getattr(self, role)


GENERIC = "generic"
CHASE = "chase"
AMEX = "amex"

PROFILES: Mapping[str, HeaderProfile] = MappingProxyType(
    {
        GENERIC: HeaderProfile(
            name=GENERIC,
            date=("date", "transaction date", "posting date", "trans date"),
            description=("description", "memo", "payee", "merchant", "transaction description"),
            amount=("amount", "debit amount", "credit amount", "transaction amount"),
            category=("category", "type", "transaction type"),
        ),
        CHASE: HeaderProfile(
            name=CHASE,
            date=("transaction date", "post date"),
            description=("description",),
            amount=("amount",),
            category=("type", "category"),
        ),
        AMEX: HeaderProfile(
            name=AMEX,
            date=("date",),
            description=("description",),
            amount=("amount",),
            category=("category",),
        ),
    }
)


def detect_profile(headers: Iterable[object]) -> str:
    """Classify a header row into a profile name.

    Deterministic: the same header set always yields the same profile.
    """

    normalized: Sequence[str] = [normalize_header(h) for h in headers]
    if any("post date" in h or "transaction date" in h for h in normalized):
        return CHASE
    if "date" in normalized and "description" in normalized:
        return AMEX
    return GENERIC


def get_profile(name: str) -> HeaderProfile:
    try:
        return PROFILES[name]
    except KeyError:
        raise ValueError(
            f"unknown profile: {name!r} (expected one of {', '.join(PROFILES)})"
        ) from None


__all__ = [
    "AMEX",
    "CHASE",
    "GENERIC",
    "HeaderProfile",
    "PROFILES",
    "detect_profile",
    "get_profile",
    "normalize_header",
]
