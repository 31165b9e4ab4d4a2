"""Public interface for the ``statement_ingest`` package.

This module exposes the package's API functions and public models/types as the
stable import surface. There is no runtime logic here, only symbol re-exports.
"""

from .api import parse_file, parse_grid, parse_path
from .errors import DecodeError, SchemaInferenceError, UnsupportedFormatError
from .models import (
    NOT_FOUND,
    ColumnMapping,
    Grid,
    ParsedTransaction,
    ParseResult,
)

__all__ = [
    # API
    "parse_file",
    "parse_grid",
    "parse_path",
    # Models / types
    "NOT_FOUND",
    "ColumnMapping",
    "Grid",
    "ParsedTransaction",
    "ParseResult",
    # Errors
    "DecodeError",
    "SchemaInferenceError",
    "UnsupportedFormatError",
]
