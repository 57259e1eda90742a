"""ORDER BY and LIMIT/OFFSET helpers for ``Select`` statements."""

from __future__ import annotations

from collections.abc import Iterable, Iterator, Mapping
from typing import TYPE_CHECKING, Any

from ..config import DEFAULT_PAGINATION, PaginationDefaults
from ..pagination import SortDirection, clamp_limit, clamp_page
from .compiler import resolve_column
from .utils import get_table_name

if TYPE_CHECKING:
    from sqlalchemy.sql import Select

OrderByItem = str | tuple[str, Any] | Mapping[str, Any]


def _order_items(
    order_by: OrderByItem | Iterable[OrderByItem],
) -> Iterator[tuple[Any, Any]]:
    items: Iterable[Any]
    if isinstance(order_by, (str, tuple, Mapping)):
        items = [order_by]
    else:
        items = order_by
    for item in items:
        if isinstance(item, str):
            yield item, None
        elif isinstance(item, Mapping):
            yield item.get("column"), item.get("direction")
        elif item:
            yield item[0], item[1] if len(item) > 1 else None


def apply_order_by(
    stmt: Select[Any],
    order_by: OrderByItem | Iterable[OrderByItem] | None,
    *,
    table_name: str | None = None,
) -> Select[Any]:
    """Append ORDER BY terms to *stmt*.

    *order_by* is one item or a list of items, each a column name, a
    ``(column, direction)`` pair or a ``{"column": ..., "direction": ...}``
    mapping. Direction defaults to ascending. Items without a column are
    ignored.

    Raises:
        InvalidSortDirectionError: If a direction is not asc/desc.
    """
    if not order_by:
        return stmt
    if table_name is None:
        table_name = get_table_name(stmt)
    for column_name, direction in _order_items(order_by):
        if not column_name:
            continue
        order = SortDirection.parse(direction or SortDirection.ASC)
        column = resolve_column(stmt, column_name, table_name)
        stmt = stmt.order_by(
            column.asc() if order is SortDirection.ASC else column.desc()
        )
    return stmt


def apply_pagination(
    stmt: Select[Any],
    *,
    page: Any = None,
    limit: Any = None,
    defaults: PaginationDefaults | None = None,
) -> Select[Any]:
    """Apply LIMIT/OFFSET for the 1-based *page* of size *limit*."""
    defaults = defaults or DEFAULT_PAGINATION
    page = clamp_page(page, defaults.page)
    limit = clamp_limit(limit, defaults.limit)
    return stmt.limit(limit).offset((page - 1) * limit)
