"""Table description extractor.

Parses the declarative table description selected by the user:

    table_name("ORDERS");
    table_attr("ID").primarykey;
    table_attr("TOTAL");

into a TableSchema that the procedure renderer consumes.
"""
from __future__ import annotations

import logging
import re
from dataclasses import dataclass
from typing import Iterator

from crud_generator.errors import PrimaryKeyError, SchemaParseError

logger = logging.getLogger(__name__)

# The precheck is anchored: the selection must open with the table declaration.
TABLE_DECLARATION_PATTERN = re.compile(
    r'^\s*table_name\s*\(\s*"(\w+)"\s*\)\s*;',
    re.IGNORECASE | re.ASCII
)
TABLE_NAME_PATTERN = re.compile(
    r'table_name\s*\(\s*"(\w+)"\s*\)\s*;',
    re.IGNORECASE | re.ASCII
)
COLUMN_PATTERN = re.compile(
    r'table_attr\s*\(\s*"(\w+)"\s*\)\s*(?:\.primarykey\s*)?;',
    re.IGNORECASE | re.ASCII
)
PRIMARY_KEY_SUFFIX_PATTERN = re.compile(r'\.primarykey\s*;$', re.IGNORECASE)


@dataclass(frozen=True)
class Column:
    """Column declared with table_attr(...)."""
    name: str
    is_primary_key: bool = False


@dataclass(frozen=True)
class ColumnMatch:
    """One table_attr(...) match in the scanned text."""
    name: str
    is_primary_key: bool
    start: int
    end: int
    text: str

    def to_column(self) -> Column:
        return Column(name=self.name, is_primary_key=self.is_primary_key)


@dataclass(frozen=True)
class TableSchema:
    """Parsed table description."""
    table_name: str
    columns: tuple[Column, ...]
    primary_key_name: str = ""

    @property
    def non_key_columns(self) -> tuple[Column, ...]:
        return tuple(col for col in self.columns if not col.is_primary_key)

    @property
    def primary_key_columns(self) -> tuple[Column, ...]:
        return tuple(col for col in self.columns if col.is_primary_key)

    @property
    def column_names(self) -> list[str]:
        return [col.name for col in self.columns]


def matches_table_declaration(text: str) -> bool:
    """Check that text opens with a table_name("...") declaration."""
    return TABLE_DECLARATION_PATTERN.match(text) is not None


def extract_table_name(text: str) -> str:
    """Return the first declared table name, or an empty string."""
    match = TABLE_NAME_PATTERN.search(text)
    return match.group(1) if match else ""


def iter_column_matches(text: str) -> Iterator[ColumnMatch]:
    """Yield every table_attr(...) declaration, left to right.

    Args:
        text: Selected table description

    Yields:
        ColumnMatch for each non-overlapping match
    """
    for match in COLUMN_PATTERN.finditer(text):
        matched = match.group(0)
        yield ColumnMatch(
            name=match.group(1),
            is_primary_key=PRIMARY_KEY_SUFFIX_PATTERN.search(matched) is not None,
            start=match.start(),
            end=match.end(),
            text=matched
        )


def extract_table_schema(text: str) -> TableSchema:
    """Extract table name, ordered columns and primary key from text.

    Does not validate the result. When several columns are flagged as
    primary key the last one wins; when none is flagged the primary key
    name is empty.

    Args:
        text: Selected table description

    Returns:
        TableSchema (possibly with empty table name or no columns)
    """
    table_name = extract_table_name(text)

    columns = []
    primary_key_name = ""
    for column_match in iter_column_matches(text):
        columns.append(column_match.to_column())
        if column_match.is_primary_key:
            primary_key_name = column_match.name

    logger.debug(
        f"Extracted table '{table_name}' with {len(columns)} columns "
        f"(primary key: '{primary_key_name}')"
    )

    return TableSchema(
        table_name=table_name,
        columns=tuple(columns),
        primary_key_name=primary_key_name
    )


extract = extract_table_schema


def validate_table_schema(schema: TableSchema, require_primary_key: bool = True) -> TableSchema:
    """Check that a schema can be rendered into a usable package.

    Args:
        schema: Extracted schema
        require_primary_key: Reject schemas without a primary key, or
            with nothing but the primary key

    Returns:
        The same schema, for chaining

    Raises:
        SchemaParseError: If the table name or the column list is empty
        PrimaryKeyError: If the primary key is missing or is the only column
    """
    if not schema.table_name or not schema.columns:
        raise SchemaParseError()

    flagged = schema.primary_key_columns
    if len(flagged) > 1:
        names = ", ".join(col.name for col in flagged)
        logger.warning(
            f"Table {schema.table_name} flags several primary keys ({names}); "
            f"using {schema.primary_key_name}"
        )

    if not require_primary_key:
        return schema

    if not schema.primary_key_name:
        raise PrimaryKeyError(
            f"Table {schema.table_name} has no column marked .primarykey."
        )
    if not schema.non_key_columns:
        raise PrimaryKeyError(
            f"Table {schema.table_name} has no columns besides its primary key."
        )

    return schema
