"""CRUD package generator for Oracle PL/SQL.

Turns a ``table_name(...)`` / ``table_attr(...)`` description into a
package specification and body with create/update/delete/get procedures.
"""
from __future__ import annotations

__version__ = "0.1.0"
