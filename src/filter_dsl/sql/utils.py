"""
Statement introspection helpers for the filter compiler.
"""

from __future__ import annotations

from typing import TYPE_CHECKING, Any

from sqlalchemy.schema import Table
from sqlalchemy.sql.selectable import Join

if TYPE_CHECKING:
    from sqlalchemy.sql import Select


def extract_tables_from_statement(stmt: Select[Any]) -> list[Table]:
    """
    Extract all tables present in the FROM clause of a statement
    (including joins), in FROM order.
    """
    tables: list[Table] = []
    for from_obj in stmt.get_final_froms():
        _extract_tables_recursive(from_obj, tables)
    return tables


def _extract_tables_recursive(from_obj: object, tables: list[Table]) -> None:
    """Recursively extract tables from a FROM object (Table or Join)."""
    table: Any = None
    if isinstance(from_obj, Join):
        _extract_tables_recursive(from_obj.left, tables)
        _extract_tables_recursive(from_obj.right, tables)
        return
    if isinstance(from_obj, Table):
        table = from_obj
    elif hasattr(from_obj, "element"):  # Alias / AliasedClass
        element = from_obj.element
        table = getattr(element, "__table__", element)
    elif hasattr(from_obj, "__table__"):  # DeclarativeBase model
        table = from_obj.__table__
    if isinstance(table, Table) and table not in tables:
        tables.append(table)


def get_table_name(stmt: Select[Any]) -> str | None:
    """Name of the first table the statement selects from, if any."""
    tables = extract_tables_from_statement(stmt)
    return tables[0].name if tables else None
