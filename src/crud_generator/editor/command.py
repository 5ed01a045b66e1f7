"""The generate-CRUD editor command.

Reads the selection from a surface, generates the package specification
and body, and writes them back right after the selected text.
"""
from __future__ import annotations

import logging
from dataclasses import dataclass

from crud_generator.config.generator import GeneratorConfig
from crud_generator.errors import (
    CrudGeneratorError,
    DocumentUpdateError,
    NoActiveEditorError,
    SelectionFormatError,
)
from crud_generator.editor.surface import EditorSurface, Notifier
from crud_generator.procedures.renderer import PackageSource, render_table_schema
from crud_generator.sql_schema.extractor import (
    TableSchema,
    extract_table_schema,
    matches_table_declaration,
    validate_table_schema,
)

logger = logging.getLogger(__name__)


@dataclass(frozen=True)
class GeneratedCrud:
    """Result of one generation run."""
    selection: str
    schema: TableSchema
    package: PackageSource

    @property
    def table_name(self) -> str:
        return self.schema.table_name

    def expanded_selection(self) -> str:
        return f"{self.selection}\n\n{self.package.declarations}\n\n{self.package.definitions}"


def build_crud_text(selection: str, config: GeneratorConfig | None = None) -> GeneratedCrud:
    """Parse a selection and render its CRUD package.

    Args:
        selection: Selected table description
        config: Generator configuration (defaults if None)

    Returns:
        GeneratedCrud with the schema and rendered package

    Raises:
        SelectionFormatError: If the selection doesn't open with table_name(...)
        SchemaParseError: If no table name or no columns were found
        PrimaryKeyError: If a primary key is required and unusable
    """
    config = config or GeneratorConfig()

    if not matches_table_declaration(selection):
        raise SelectionFormatError()

    schema = extract_table_schema(selection)
    validate_table_schema(schema, require_primary_key=config.validation.require_primary_key)

    package = render_table_schema(schema, config.naming)
    return GeneratedCrud(selection=selection, schema=schema, package=package)


def expand_selection(full_text: str, generated: GeneratedCrud) -> str:
    """Insert the generated blocks after the first occurrence of the selection."""
    return full_text.replace(generated.selection, generated.expanded_selection(), 1)


def generate_crud(
    surface: EditorSurface | None,
    notifier: Notifier,
    config: GeneratorConfig | None = None
) -> GeneratedCrud | None:
    """Run the generate-CRUD command against an editing surface.

    Errors are reported through the notifier; the document is either fully
    rewritten or left untouched.

    Args:
        surface: Active editing surface, or None when there is none
        notifier: Where to show error/info messages
        config: Generator configuration (defaults if None)

    Returns:
        GeneratedCrud on success, None on failure
    """
    try:
        if surface is None:
            raise NoActiveEditorError()

        generated = build_crud_text(surface.get_selection(), config)
        updated_text = expand_selection(surface.get_full_text(), generated)

        if not surface.replace_all(updated_text):
            raise DocumentUpdateError()

    except CrudGeneratorError as e:
        logger.warning(f"CRUD generation aborted: {e.message}")
        notifier.show_error(e.message)
        return None

    logger.info(
        f"Generated {len(generated.package.procedures)} procedures "
        f"in {generated.package.package_name}"
    )
    notifier.show_info(
        f"CRUD operations for {generated.table_name} generated and updated successfully."
    )
    return generated
