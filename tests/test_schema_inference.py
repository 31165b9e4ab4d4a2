from __future__ import annotations

import pytest

from statement_ingest.errors import SchemaInferenceError
from statement_ingest.ingest.profiles import (
    AMEX,
    CHASE,
    GENERIC,
    PROFILES,
    detect_profile,
    get_profile,
    normalize_header,
)
from statement_ingest.ingest.schema import find_column_index, infer_columns, require_columns
from statement_ingest.models import NOT_FOUND, ColumnMapping

# Literal header rows as exported by each institution.
CHASE_HEADERS = ["Transaction Date", "Post Date", "Description", "Category", "Type", "Amount", "Memo"]
AMEX_HEADERS = ["Date", "Description", "Card Member", "Account #", "Amount", "Category"]
ALLIANT_HEADERS = ["Date", "Description", "Amount", "Balance"]
GENERIC_HEADERS = ["Posting Date", "Payee", "Amount ($)", "Balance"]


@pytest.mark.parametrize(
    ("raw", "expected"),
    [
        ("Amount ($)", "amount"),
        ("  Transaction-Date ", "transactiondate"),
        ("Account #", "account"),
        ("Café", "caf"),
        ("", ""),
        (None, ""),
        (2024, "2024"),
    ],
)
def test_normalize_header(raw, expected):
    assert normalize_header(raw) == expected


def test_profiles_table_is_read_only():
    with pytest.raises(TypeError):
        PROFILES["new_bank"] = PROFILES[GENERIC]  # type: ignore[index]
    with pytest.raises(AttributeError):
        PROFILES[GENERIC].date = ("when",)  # type: ignore[misc]


def test_get_profile_unknown_name():
    with pytest.raises(ValueError, match="unknown profile"):
        get_profile("bank_of_nowhere")


# ---- profile detection ------------------------------------------------------------


@pytest.mark.parametrize(
    ("headers", "profile"),
    [
        (CHASE_HEADERS, CHASE),
        (["Post Date", "Description", "Amount"], CHASE),
        (AMEX_HEADERS, AMEX),
        (ALLIANT_HEADERS, AMEX),
        (GENERIC_HEADERS, GENERIC),
        (["Date", "Memo", "Amount"], GENERIC),
        (["Foo", "Bar"], GENERIC),
        ([], GENERIC),
    ],
)
def test_detect_profile(headers, profile):
    assert detect_profile(headers) == profile


def test_detect_profile_is_deterministic():
    assert {detect_profile(list(AMEX_HEADERS)) for _ in range(5)} == {AMEX}


# ---- column matching ---------------------------------------------------------------


def test_chase_columns():
    mapping = infer_columns(CHASE_HEADERS)
    # "type" outranks "category" in the chase profile.
    assert mapping == ColumnMapping(date=0, description=2, amount=5, category=4)


def test_amex_columns():
    mapping = infer_columns(AMEX_HEADERS)
    assert mapping == ColumnMapping(date=0, description=1, amount=4, category=5)


def test_generic_columns_match_by_substring():
    mapping = infer_columns(GENERIC_HEADERS)
    assert mapping == ColumnMapping(date=0, description=1, amount=2, category=NOT_FOUND)


def test_candidate_priority_beats_column_order():
    # "description" is tried before "memo" even though Memo is the first column.
    headers = ["Memo", "Date", "Transaction Description", "Amount"]
    assert infer_columns(headers, GENERIC).description == 2


def test_ties_resolve_to_lowest_index():
    headers = ["Debit Amount", "Credit Amount", "Date", "Description"]
    assert find_column_index(headers, ("amount",)) == 0


def test_header_contained_in_candidate_matches():
    # Normalized header "trans" is a substring of candidate "trans date".
    assert find_column_index(["Trans", "Other"], ("trans date",)) == 0


def test_empty_headers_never_match():
    headers = ["", "Date", "Description", "Amount"]
    mapping = infer_columns(headers, GENERIC)
    assert mapping == ColumnMapping(date=1, description=2, amount=3, category=NOT_FOUND)


def test_explicit_profile_overrides_detection():
    mapping = infer_columns(["Date", "Description", "Amount", "Type"], AMEX)
    assert mapping.category == NOT_FOUND
    mapping = infer_columns(["Date", "Description", "Amount", "Type"], get_profile(GENERIC))
    assert mapping.category == 3


def test_non_string_headers_are_tolerated():
    mapping = infer_columns([None, "Date", 42, "Description", "Amount"])
    assert (mapping.date, mapping.description, mapping.amount) == (1, 3, 4)


# ---- required-role check ----------------------------------------------------------


def test_require_columns_passes_complete_mapping():
    mapping = infer_columns(AMEX_HEADERS)
    assert require_columns(AMEX_HEADERS, mapping) is mapping
    assert mapping.is_complete


def test_require_columns_names_headers_found():
    headers = ["Foo", "Bar"]
    mapping = infer_columns(headers)
    with pytest.raises(SchemaInferenceError) as exc_info:
        require_columns(headers, mapping)
    err = exc_info.value
    assert err.missing == ("date", "description", "amount")
    assert "Found headers: Foo, Bar" in str(err)


def test_missing_required_lists_only_unresolved_roles():
    mapping = ColumnMapping(date=0, description=NOT_FOUND, amount=2)
    assert mapping.missing_required() == ["description"]
    assert mapping.to_dict() == {"date": 0, "description": None, "amount": 2, "category": None}
