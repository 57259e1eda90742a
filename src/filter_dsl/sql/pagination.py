"""
Offset and cursor pagination over SQLAlchemy ``Select`` statements.

The caller passes a base statement (``select(User)`` or
``select(users_table)``); the filter, ordering and window are added here.
The statement is generative, so the list, count and edge-probe queries are
independent derivations of the same base. They run one after another
because an ``AsyncSession`` cannot be used concurrently.

Rows are ORM instances when the statement selects a single mapped entity,
plain ``dict`` mappings otherwise.
"""

from __future__ import annotations

import logging
from collections.abc import Callable, Mapping
from typing import TYPE_CHECKING, Any

from sqlalchemy import func, select

from ..casing import KeyTransform
from ..config import DEFAULT_PAGINATION, PaginationDefaults
from ..normalize import normalize_operators
from ..pagination import (
    CursorPage,
    OffsetPage,
    SortDirection,
    build_offset_page,
    clamp_limit,
    clamp_page,
)
from .compiler import apply_filter, resolve_column
from .modifiers import apply_order_by, apply_pagination
from .utils import extract_tables_from_statement, get_table_name

if TYPE_CHECKING:
    from sqlalchemy.ext.asyncio import AsyncSession
    from sqlalchemy.sql import Select

    from .strategy import SQLAlchemyOperatorRegistry

logger = logging.getLogger("filter_dsl.sql.pagination")

RowMapper = Callable[[Any], Any]


def _selects_entity(stmt: Select[Any]) -> bool:
    descriptions = stmt.column_descriptions
    if len(descriptions) != 1:
        return False
    entity = descriptions[0].get("entity")
    return entity is not None and descriptions[0].get("expr") is entity


async def _fetch_rows(session: AsyncSession, stmt: Select[Any]) -> list[Any]:
    result = await session.execute(stmt)
    if _selects_entity(stmt):
        return list(result.scalars().all())
    return [dict(row) for row in result.mappings().all()]


async def _count(session: AsyncSession, stmt: Select[Any]) -> int:
    subquery = stmt.order_by(None).limit(None).offset(None).subquery()
    result = await session.execute(select(func.count()).select_from(subquery))
    return int(result.scalar_one())


async def _exists(session: AsyncSession, stmt: Select[Any]) -> bool:
    result = await session.execute(select(stmt.order_by(None).exists()))
    return bool(result.scalar())


def _sort_value(row: Any, *names: str) -> Any:
    for name in names:
        if isinstance(row, Mapping):
            if name in row:
                return row[name]
        elif hasattr(row, name):
            return getattr(row, name)
    return None


def _primary_key_order(
    stmt: Select[Any], table_name: str | None, order: SortDirection
) -> list[Any]:
    tables = extract_tables_from_statement(stmt)
    if not tables:
        return []
    table = next((t for t in tables if t.name == table_name), tables[0])
    return [
        col.asc() if order is SortDirection.ASC else col.desc()
        for col in table.primary_key.columns
    ]


def _filtered(
    stmt: Select[Any],
    filter: Mapping[str, Any] | None,
    *,
    table_name: str | None,
    key_transform: KeyTransform | None,
    registry: SQLAlchemyOperatorRegistry | None,
) -> Select[Any]:
    tree = normalize_operators(dict(filter or {}))
    if isinstance(tree, list):
        tree = {"and": tree} if tree else {}
    return apply_filter(
        stmt,
        tree,
        table_name=table_name,
        key_transform=key_transform,
        registry=registry,
    )


async def paginate_offset(
    session: AsyncSession,
    stmt: Select[Any],
    *,
    filter: Mapping[str, Any] | None = None,
    sort_field: str | None = None,
    direction: Any = None,
    page: Any = None,
    limit: Any = None,
    table_name: str | None = None,
    key_transform: KeyTransform | None = None,
    map_row: RowMapper | None = None,
    registry: SQLAlchemyOperatorRegistry | None = None,
    defaults: PaginationDefaults | None = None,
) -> OffsetPage:
    """Fetch one page/limit window of *stmt* narrowed by *filter*.

    Without ``sort_field`` rows are ordered by the primary key of the
    selected table, or left in database order when it has none. ``page``
    and ``limit`` are coerced and clamped to ``>= 1``.
    """
    defaults = defaults or DEFAULT_PAGINATION
    page = clamp_page(page, defaults.page)
    limit = clamp_limit(limit, defaults.limit)
    order = SortDirection.parse(
        direction if direction is not None else defaults.offset_direction
    )
    if table_name is None:
        table_name = get_table_name(stmt)

    filtered = _filtered(
        stmt,
        filter,
        table_name=table_name,
        key_transform=key_transform,
        registry=registry,
    )
    list_stmt = filtered
    if sort_field:
        column_name = key_transform(sort_field) if key_transform else sort_field
        list_stmt = apply_order_by(
            list_stmt, (column_name, order), table_name=table_name
        )
    else:
        list_stmt = list_stmt.order_by(
            *_primary_key_order(list_stmt, table_name, order)
        )
    list_stmt = apply_pagination(list_stmt, page=page, limit=limit)

    logger.debug("Offset page %d (limit %d) of %s", page, limit, table_name)
    rows = await _fetch_rows(session, list_stmt)
    total_count = await _count(session, filtered)

    items = [map_row(r) for r in rows] if map_row else rows
    return build_offset_page(items, total_count=total_count, page=page, limit=limit)


async def paginate_cursor(
    session: AsyncSession,
    stmt: Select[Any],
    *,
    sort_field: str,
    filter: Mapping[str, Any] | None = None,
    direction: Any = None,
    limit: Any = None,
    cursor: Any = None,
    table_name: str | None = None,
    key_transform: KeyTransform | None = None,
    map_row: RowMapper | None = None,
    registry: SQLAlchemyOperatorRegistry | None = None,
    defaults: PaginationDefaults | None = None,
) -> CursorPage:
    """Fetch the page of *stmt* that follows *cursor* in *sort_field* order.

    ``cursor`` must be a value previously returned as ``next`` (or
    ``previous``, with the direction reversed). Rows sharing a sort value
    across a page boundary may be skipped; sort on a unique column.
    """
    defaults = defaults or DEFAULT_PAGINATION
    limit = clamp_limit(limit, defaults.limit)
    order = SortDirection.parse(
        direction if direction is not None else defaults.cursor_direction
    )
    if table_name is None:
        table_name = get_table_name(stmt)

    filtered = _filtered(
        stmt,
        filter,
        table_name=table_name,
        key_transform=key_transform,
        registry=registry,
    )
    column_name = key_transform(sort_field) if key_transform else sort_field
    column = resolve_column(filtered, column_name, table_name)
    ascending = order is SortDirection.ASC

    def before(value: Any) -> Any:
        return column < value if ascending else column > value

    def after(value: Any) -> Any:
        return column > value if ascending else column < value

    page_stmt = filtered.order_by(column.asc() if ascending else column.desc())
    if cursor is not None and cursor != "":
        page_stmt = page_stmt.where(after(cursor))

    logger.debug(
        "Cursor page of %s after %r (limit %d) sorted by %s %s",
        table_name,
        cursor,
        limit,
        column_name,
        order.value,
    )
    rows = await _fetch_rows(session, page_stmt.limit(limit))
    total_count = await _count(session, filtered)

    previous = next_ = None
    if rows:
        first = _sort_value(rows[0], column_name, sort_field)
        last = _sort_value(rows[-1], column_name, sort_field)
        if await _exists(session, filtered.where(before(first))):
            previous = first
        if await _exists(session, filtered.where(after(last))):
            next_ = last

    items = [map_row(r) for r in rows] if map_row else rows
    return CursorPage(
        items=items,
        total_count=total_count,
        order=order,
        next=next_,
        previous=previous,
    )
