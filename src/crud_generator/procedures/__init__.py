"""PL/SQL package rendering and inspection."""
from __future__ import annotations

from .renderer import (
    PackageSource,
    Procedure,
    build_procedures,
    render,
    render_crud_package,
    render_table_schema,
)

from .inspector import (
    PackageRoutine,
    RoutineParameter,
    parse_package_body,
    parse_package_spec,
    summarize_routines,
)

__all__ = [
    # Renderer
    "PackageSource",
    "Procedure",
    "build_procedures",
    "render",
    "render_crud_package",
    "render_table_schema",
    # Inspector
    "PackageRoutine",
    "RoutineParameter",
    "parse_package_body",
    "parse_package_spec",
    "summarize_routines",
]
