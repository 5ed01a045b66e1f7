"""Table description parsing.

Extracts table name, ordered columns and primary key from
table_name(...) / table_attr(...) declarations.
"""
from __future__ import annotations

from .extractor import (
    Column,
    ColumnMatch,
    TableSchema,
    extract,
    extract_table_name,
    extract_table_schema,
    iter_column_matches,
    matches_table_declaration,
    validate_table_schema,
)

__all__ = [
    "Column",
    "ColumnMatch",
    "TableSchema",
    "extract",
    "extract_table_name",
    "extract_table_schema",
    "iter_column_matches",
    "matches_table_declaration",
    "validate_table_schema",
]
