"""
Offset and cursor pagination over a motor collection.

Both functions normalize and compile the filter themselves, so raw
query-string decoded filters can be passed straight through. The list and
count queries are issued concurrently, as are the two edge probes of cursor
pagination. A failure in any of them cancels its sibling and propagates
unchanged.
"""

from __future__ import annotations

import asyncio
import logging
from collections.abc import Awaitable, Callable, Mapping
from typing import TYPE_CHECKING, Any

from bson import ObjectId

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
from .compiler import to_mongo

if TYPE_CHECKING:
    from motor.motor_asyncio import AsyncIOMotorCollection

logger = logging.getLogger("filter_dsl.mongo.pagination")

RowMapper = Callable[[dict[str, Any]], Any]


def _compile(filter: Mapping[str, Any] | None) -> dict[str, Any]:
    tree = normalize_operators(dict(filter or {}))
    if isinstance(tree, list):
        # top-level index keys decode to a list of conjoined trees
        tree = {"and": tree} if tree else {}
    return to_mongo(tree)


async def _run_all(*aws: Awaitable[Any]) -> list[Any]:
    tasks = [asyncio.ensure_future(aw) for aw in aws]
    try:
        return list(await asyncio.gather(*tasks))
    except Exception:
        for task in tasks:
            task.cancel()
        # reap the cancelled siblings; the first failure is what propagates
        await asyncio.gather(*tasks, return_exceptions=True)
        raise


def _combine(base: dict[str, Any], predicate: dict[str, Any]) -> dict[str, Any]:
    if not base:
        return predicate
    return {"$and": [base, predicate]}


def _get_path(doc: Mapping[str, Any], path: str) -> Any:
    value: Any = doc
    for part in path.split("."):
        if not isinstance(value, Mapping):
            return None
        value = value.get(part)
    return value


def _coerce_cursor(cursor: Any, sort_field: str) -> Any:
    if sort_field == "_id" and isinstance(cursor, str) and ObjectId.is_valid(cursor):
        return ObjectId(cursor)
    return cursor


async def _fetch(
    collection: AsyncIOMotorCollection,
    query: dict[str, Any],
    *,
    sort_field: str,
    order: SortDirection,
    limit: int,
    skip: int = 0,
    projection: Any = None,
) -> list[dict[str, Any]]:
    cursor = collection.find(query, projection).sort(sort_field, order.mongo)
    if skip:
        cursor = cursor.skip(skip)
    cursor = cursor.limit(limit)
    return [doc async for doc in cursor]


async def _exists(collection: AsyncIOMotorCollection, query: dict[str, Any]) -> bool:
    return await collection.find_one(query, {"_id": 1}) is not None


async def paginate_offset(
    collection: AsyncIOMotorCollection,
    *,
    filter: Mapping[str, Any] | None = None,
    sort_field: str | None = None,
    direction: Any = None,
    page: Any = None,
    limit: Any = None,
    projection: Any = None,
    map_row: RowMapper | None = None,
    defaults: PaginationDefaults | None = None,
) -> OffsetPage:
    """Fetch one page/limit window of *collection*.

    ``page`` and ``limit`` are coerced to ints and clamped to ``>= 1``. A
    page past the end yields an empty ``items`` list with the real totals.
    """
    defaults = defaults or DEFAULT_PAGINATION
    page = clamp_page(page, defaults.page)
    limit = clamp_limit(limit, defaults.limit)
    order = SortDirection.parse(
        direction if direction is not None else defaults.offset_direction
    )
    sort_field = sort_field or defaults.cursor_field
    query = _compile(filter)

    logger.debug(
        "Offset page %d (limit %d) sorted by %s %s: %s",
        page,
        limit,
        sort_field,
        order.value,
        query,
    )
    rows, total_count = await _run_all(
        _fetch(
            collection,
            query,
            sort_field=sort_field,
            order=order,
            limit=limit,
            skip=(page - 1) * limit,
            projection=projection,
        ),
        collection.count_documents(query),
    )
    items = [map_row(r) for r in rows] if map_row else rows
    return build_offset_page(items, total_count=total_count, page=page, limit=limit)


async def paginate_cursor(
    collection: AsyncIOMotorCollection,
    *,
    filter: Mapping[str, Any] | None = None,
    sort_field: str | None = None,
    direction: Any = None,
    limit: Any = None,
    cursor: Any = None,
    projection: Any = None,
    map_row: RowMapper | None = None,
    defaults: PaginationDefaults | None = None,
) -> CursorPage:
    """Fetch the page of *collection* that follows *cursor*.

    Without a cursor the first page is returned. ``next`` is the sort value
    of the last row when rows exist after it; ``previous`` is the sort value
    of the first row when rows exist before it. Both are ``None`` on an
    empty page. ``total_count`` ignores the cursor.
    """
    defaults = defaults or DEFAULT_PAGINATION
    limit = clamp_limit(limit, defaults.limit)
    order = SortDirection.parse(
        direction if direction is not None else defaults.cursor_direction
    )
    sort_field = sort_field or defaults.cursor_field
    before, after = ("$lt", "$gt") if order is SortDirection.ASC else ("$gt", "$lt")

    base = _compile(filter)
    query = base
    if cursor is not None and cursor != "":
        cursor = _coerce_cursor(cursor, sort_field)
        query = _combine(base, {sort_field: {after: cursor}})

    logger.debug(
        "Cursor page after %r (limit %d) sorted by %s %s: %s",
        cursor,
        limit,
        sort_field,
        order.value,
        base,
    )
    rows, total_count = await _run_all(
        _fetch(
            collection,
            query,
            sort_field=sort_field,
            order=order,
            limit=limit,
            projection=projection,
        ),
        collection.count_documents(base),
    )

    previous = next_ = None
    if rows:
        first = _get_path(rows[0], sort_field)
        last = _get_path(rows[-1], sort_field)
        has_previous, has_next = await _run_all(
            _exists(collection, _combine(base, {sort_field: {before: first}})),
            _exists(collection, _combine(base, {sort_field: {after: last}})),
        )
        previous = first if has_previous else None
        next_ = last if has_next else None

    items = [map_row(r) for r in rows] if map_row else rows
    return CursorPage(
        items=items,
        total_count=total_count,
        order=order,
        next=next_,
        previous=previous,
    )
