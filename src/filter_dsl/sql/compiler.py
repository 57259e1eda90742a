"""
Compile a canonical filter tree into WHERE predicates on a SQLAlchemy ``Select``.

Top-level keys are AND-combined in iteration order. ``or`` compiles to a
single grouped predicate ``(g0) OR (g1) ...`` where every group is the
conjunction of its own fields; an explicit ``and`` groups the same way with
AND between the members. Operator keys with no relational form (document-only
operators, unknown names, already-compiled ``$`` keys) are skipped::

    stmt = apply_filter(
        select(users),
        {"status": "active", "or": [{"role": "admin"}, {"age": {"gte": 18}}]},
    )
    # SELECT ... FROM users
    # WHERE users.status = :status_1
    #   AND (users.role = :role_1 OR users.age >= :age_1)

Field names are qualified with the table name, taken from the statement's
own FROM list unless ``table_name`` is given.
"""

from __future__ import annotations

import logging
from collections.abc import Mapping
from typing import TYPE_CHECKING, Any

import sqlalchemy as sa

from ..casing import KeyTransform, to_snake_case
from ..operators import FilterOperator
from .operators import DEFAULT_SQLA_REGISTRY
from .utils import extract_tables_from_statement, get_table_name

if TYPE_CHECKING:
    from sqlalchemy import ColumnElement
    from sqlalchemy.sql import Select

    from .strategy import SQLAlchemyOperatorRegistry

logger = logging.getLogger("filter_dsl.sql.compiler")


def resolve_column(
    stmt: Select[Any], field: str, table_name: str | None = None
) -> ColumnElement[Any]:
    """Return the column expression *field* refers to.

    When the statement selects from a table called *table_name* its real
    column is used; otherwise the name is qualified textually
    (``table_name.field``), or left bare when no table name is known.
    """
    if not table_name:
        return sa.column(field)
    for table in extract_tables_from_statement(stmt):
        if table.name == table_name:
            if field in table.c:
                return table.c[field]
            return sa.column(field)
    return sa.literal_column(f"{table_name}.{field}")


def _conjunction(clauses: list[ColumnElement[bool]]) -> ColumnElement[bool]:
    if not clauses:
        return sa.true()
    if len(clauses) == 1:
        return clauses[0]
    return sa.and_(*clauses)


def _field_clauses(
    column: ColumnElement[Any],
    field: str,
    value: Any,
    registry: SQLAlchemyOperatorRegistry,
) -> list[ColumnElement[bool]]:
    if isinstance(value, Mapping):
        clauses = []
        for key, operand in value.items():
            op = FilterOperator.from_key(key)
            if op is None or not registry.has(op):
                logger.debug("Skipping operator %r on %s: no SQL form", key, field)
                continue
            clauses.append(registry.apply(op, column, operand))
        return clauses
    if isinstance(value, (list, tuple)):
        return [registry.apply(FilterOperator.IN, column, list(value))]
    return [registry.apply(FilterOperator.EQ, column, value)]


def _group_clauses(
    stmt: Select[Any],
    groups: Any,
    *,
    table_name: str | None,
    key_transform: KeyTransform | None,
    registry: SQLAlchemyOperatorRegistry,
) -> list[ColumnElement[bool]]:
    if isinstance(groups, Mapping):
        groups = [groups]
    if not isinstance(groups, (list, tuple)):
        return []
    return [
        _conjunction(
            build_filter_clauses(
                stmt,
                tree,
                table_name=table_name,
                key_transform=key_transform,
                registry=registry,
            )
        )
        for tree in groups
        if isinstance(tree, Mapping)
    ]


def build_filter_clauses(
    stmt: Select[Any],
    filter: Mapping[str, Any],
    *,
    table_name: str | None = None,
    key_transform: KeyTransform | None = None,
    registry: SQLAlchemyOperatorRegistry | None = None,
) -> list[ColumnElement[bool]]:
    """Return the predicates for *filter*, one per top-level key, in order."""
    registry = registry or DEFAULT_SQLA_REGISTRY
    clauses: list[ColumnElement[bool]] = []
    for key, value in filter.items():
        op = FilterOperator.from_key(key)
        if op is FilterOperator.OR or op is FilterOperator.AND:
            groups = _group_clauses(
                stmt,
                value,
                table_name=table_name,
                key_transform=key_transform,
                registry=registry,
            )
            if groups:
                combine = sa.or_ if op is FilterOperator.OR else sa.and_
                clauses.append(combine(*groups))
            continue
        if op is FilterOperator.NOR or str(key).startswith("$"):
            logger.debug("Skipping %r: no SQL form", key)
            continue
        field = key_transform(key) if key_transform else key
        column = resolve_column(stmt, field, table_name)
        clauses.extend(_field_clauses(column, field, value, registry))
    return clauses


def apply_filter(
    stmt: Select[Any],
    filter: Mapping[str, Any] | None,
    *,
    table_name: str | None = None,
    key_transform: KeyTransform | None = None,
    registry: SQLAlchemyOperatorRegistry | None = None,
) -> Select[Any]:
    """Return *stmt* with the WHERE predicates of *filter* added.

    Args:
        stmt: The statement to narrow. It is not modified.
        filter: Canonical filter tree or flat ``{field: value}`` map.
        table_name: Qualifier for field names. Defaults to the first table
            in the statement's FROM list.
        key_transform: Applied to every field name before qualification,
            e.g. :func:`~filter_dsl.casing.to_snake_case`.
        registry: Operator strategies to use.
    """
    if not filter:
        return stmt
    if table_name is None:
        table_name = get_table_name(stmt)
    clauses = build_filter_clauses(
        stmt,
        filter,
        table_name=table_name,
        key_transform=key_transform,
        registry=registry,
    )
    return stmt.where(*clauses) if clauses else stmt


def apply_filter_snake_case(
    stmt: Select[Any],
    filter: Mapping[str, Any] | None,
    *,
    table_name: str | None = None,
    registry: SQLAlchemyOperatorRegistry | None = None,
) -> Select[Any]:
    """:func:`apply_filter` for camelCase filters over snake_case columns."""
    return apply_filter(
        stmt,
        filter,
        table_name=table_name,
        key_transform=to_snake_case,
        registry=registry,
    )


def apply_or_filter(
    stmt: Select[Any],
    groups: Any,
    *,
    table_name: str | None = None,
    key_transform: KeyTransform | None = None,
    registry: SQLAlchemyOperatorRegistry | None = None,
) -> Select[Any]:
    """Add one ``(g0) OR (g1) ...`` predicate built from *groups*."""
    if table_name is None:
        table_name = get_table_name(stmt)
    clauses = _group_clauses(
        stmt,
        groups,
        table_name=table_name,
        key_transform=key_transform,
        registry=registry or DEFAULT_SQLA_REGISTRY,
    )
    if not clauses:
        return stmt
    return stmt.where(sa.or_(*clauses))
