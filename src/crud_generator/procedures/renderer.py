"""Oracle PL/SQL CRUD package renderer.

Renders a package specification and a package body with five procedures
for one table:

    create_<T>      insert every non-key column
    update_<T>      update every non-key column by primary key
    delete_<T>      delete by primary key
    gid_<T>_by_id   open a cursor on one row and return it
    get_all_<T>     open a cursor on the whole table and return it

The renderer does not validate its input. An empty primary key name
produces text such as "WHERE  = u_".
"""
from __future__ import annotations

from dataclasses import dataclass, field
from typing import Iterable, Sequence

from crud_generator.config.generator import NamingConfig
from crud_generator.sql_schema.extractor import Column, TableSchema

INDENT = "  "
STATEMENT_INDENT = INDENT * 2
PARAMETER_SEPARATOR = ",\n"


@dataclass(frozen=True)
class Procedure:
    """A package procedure, rendered both as declaration and definition."""
    name: str
    parameters: tuple[str, ...] = ()
    statements: tuple[str, ...] = ()
    local_declarations: tuple[str, ...] = ()
    takes_arguments: bool = True

    def signature(self) -> str:
        header = f"{INDENT}PROCEDURE {self.name}"
        if not self.takes_arguments:
            return header

        parameter_block = PARAMETER_SEPARATOR.join(self.parameters)
        if parameter_block:
            parameter_block += "\n"
        return f"{header}(\n{parameter_block}{INDENT})"

    def declaration(self) -> str:
        return f"{self.signature()};"

    def definition(self) -> str:
        lines = [f"{self.signature()} IS"]
        lines.extend(f"{STATEMENT_INDENT}{decl}" for decl in self.local_declarations)
        lines.append(f"{INDENT}BEGIN")
        lines.extend(f"{STATEMENT_INDENT}{stmt}" for stmt in self.statements)
        lines.append(f"{INDENT}END {self.name};")
        return "\n".join(lines)


@dataclass(frozen=True)
class PackageSource:
    """Rendered package specification and body."""
    table_name: str
    package_name: str
    declarations: str
    definitions: str
    procedures: tuple[Procedure, ...] = field(default=(), compare=False, repr=False)

    def as_text(self) -> str:
        return f"{self.declarations}\n\n{self.definitions}"


def _parameter(prefix: str, table_name: str, column_name: str) -> str:
    return f"{STATEMENT_INDENT}{prefix}{column_name} IN {table_name}.{column_name}%TYPE"


def _comma_list(items: Iterable[str]) -> str:
    return ", ".join(items)


def build_procedures(
    table_name: str,
    columns: Sequence[Column],
    primary_key_name: str,
    naming: NamingConfig | None = None
) -> tuple[Procedure, ...]:
    """Build the five CRUD procedures for a table.

    Args:
        table_name: Table the package operates on
        columns: Columns in declaration order
        primary_key_name: Lookup column for update/delete/get-by-id
        naming: Parameter prefixes (defaults: c_, u_, d_, gid_)

    Returns:
        Procedures in package order: create, update, delete, get-by-id, get-all
    """
    naming = naming or NamingConfig()
    value_columns = [col.name for col in columns if not col.is_primary_key]
    pk = primary_key_name

    c_ = naming.create_prefix
    u_ = naming.update_prefix
    d_ = naming.delete_prefix
    gid_ = naming.get_by_id_prefix

    create = Procedure(
        name=f"create_{table_name}",
        parameters=tuple(_parameter(c_, table_name, name) for name in value_columns),
        statements=(
            f"INSERT INTO {table_name} ({_comma_list(value_columns)})",
            f"VALUES ({_comma_list(c_ + name for name in value_columns)});",
            "COMMIT;",
        )
    )

    set_clause = f",\n{STATEMENT_INDENT}{INDENT}".join(
        f"{name} = {u_}{name}" for name in value_columns
    )
    update = Procedure(
        name=f"update_{table_name}",
        parameters=(
            _parameter(u_, table_name, pk),
            *(_parameter(u_, table_name, name) for name in value_columns),
        ),
        statements=(
            f"UPDATE {table_name} SET",
            f"{INDENT}{set_clause}",
            f"WHERE {pk} = {u_}{pk};",
            "COMMIT;",
        )
    )

    delete = Procedure(
        name=f"delete_{table_name}",
        parameters=(_parameter(d_, table_name, pk),),
        statements=(
            f"DELETE FROM {table_name} WHERE {pk} = {d_}{pk};",
            "COMMIT;",
        )
    )

    get_by_id = Procedure(
        name=f"gid_{table_name}_by_id",
        parameters=(_parameter(gid_, table_name, pk),),
        local_declarations=("c_gid SYS_REFCURSOR;",),
        statements=(
            f"OPEN c_gid FOR SELECT * FROM {table_name} WHERE {pk} = {gid_}{pk};",
            "DBMS_SQL.RETURN_RESULT(c_gid);",
        )
    )

    get_all = Procedure(
        name=f"get_all_{table_name}",
        takes_arguments=False,
        local_declarations=("c_g_all SYS_REFCURSOR;",),
        statements=(
            f"OPEN c_g_all FOR SELECT * FROM {table_name};",
            "DBMS_SQL.RETURN_RESULT(c_g_all);",
        )
    )

    return (create, update, delete, get_by_id, get_all)


def _package_block(opening: str, package_name: str, members: Iterable[str]) -> str:
    body = "".join(f"{member}\n\n" for member in members)
    return f"{opening}\n{body}END {package_name};\n"


def render_crud_package(
    table_name: str,
    columns: Sequence[Column],
    primary_key_name: str,
    naming: NamingConfig | None = None
) -> PackageSource:
    """Render the package specification and body for a table.

    Args:
        table_name: Table the package operates on
        columns: Columns in declaration order
        primary_key_name: Lookup column for update/delete/get-by-id
        naming: Naming conventions (defaults from NamingConfig)

    Returns:
        PackageSource with declarations and definitions text
    """
    naming = naming or NamingConfig()
    package_name = naming.package_name(table_name)
    procedures = build_procedures(table_name, columns, primary_key_name, naming)

    declarations = _package_block(
        f"CREATE OR REPLACE PACKAGE {package_name} IS",
        package_name,
        (proc.declaration() for proc in procedures)
    )
    definitions = _package_block(
        f"CREATE OR REPLACE PACKAGE BODY {package_name} IS",
        package_name,
        (proc.definition() for proc in procedures)
    )

    return PackageSource(
        table_name=table_name,
        package_name=package_name,
        declarations=declarations,
        definitions=definitions,
        procedures=procedures
    )


render = render_crud_package


def render_table_schema(schema: TableSchema, naming: NamingConfig | None = None) -> PackageSource:
    """Render a package from an extracted TableSchema."""
    return render_crud_package(
        schema.table_name,
        schema.columns,
        schema.primary_key_name,
        naming
    )
