"""Error types raised while generating CRUD packages.

Every error carries the message shown to the user by the editor command.
"""
from __future__ import annotations


class CrudGeneratorError(Exception):
    """Base class for all generator errors."""

    message = "CRUD generation failed."

    def __init__(self, message: str | None = None) -> None:
        super().__init__(message or self.message)
        self.message = message or self.message


class NoActiveEditorError(CrudGeneratorError):
    message = "No active editor found."


class SelectionFormatError(CrudGeneratorError):
    message = "Selected text does not match the expected format."


class SchemaParseError(CrudGeneratorError):
    message = "Failed to parse the table schema."


class PrimaryKeyError(SchemaParseError):
    """Raised when the primary key designation is unusable."""
    message = "Table schema has no usable primary key."


class DocumentUpdateError(CrudGeneratorError):
    message = "Failed to update the document."
