"""
Backend-independent pagination primitives.

The Mongo and SQLAlchemy engines (``filter_dsl.mongo.pagination`` and
``filter_dsl.sql.pagination``) both return the page models defined here.
``model_dump(by_alias=True)`` yields the camelCase wire shape
(``list``, ``totalCount``, ``hasNext``, ...).
"""

from __future__ import annotations

import math
from enum import Enum
from typing import Any

from pydantic import BaseModel, ConfigDict, Field
from pydantic.alias_generators import to_camel

from .exceptions import InvalidSortDirectionError


class SortDirection(str, Enum):
    ASC = "asc"
    DESC = "desc"

    @classmethod
    def parse(cls, value: Any) -> SortDirection:
        """Accept ``"asc"``/``"desc"`` (any case), ``1``/``-1`` or a member."""
        if isinstance(value, SortDirection):
            return value
        if isinstance(value, int) and not isinstance(value, bool):
            if value == 1:
                return cls.ASC
            if value == -1:
                return cls.DESC
            raise InvalidSortDirectionError(value)
        if isinstance(value, str):
            try:
                return cls(value.strip().lower())
            except ValueError:
                pass
        raise InvalidSortDirectionError(value)

    @property
    def mongo(self) -> int:
        return 1 if self is SortDirection.ASC else -1


class _Page(BaseModel):
    model_config = ConfigDict(
        alias_generator=to_camel,
        populate_by_name=True,
        frozen=True,
    )

    items: list[Any] = Field(default_factory=list, alias="list")
    total_count: int = 0


class OffsetPage(_Page):
    """One page of an offset (page/limit) query."""

    total_pages: int = 0
    current_page: int = 1
    has_next: bool = False
    has_previous: bool = False


class CursorPage(_Page):
    """One page of a cursor query.

    ``next`` / ``previous`` hold the sort-field value of the last / first row
    when more rows exist in that direction, else ``None``.
    """

    order: SortDirection = SortDirection.DESC
    next: Any = None
    previous: Any = None


def _coerce_int(value: Any, default: int) -> int:
    if value is None or isinstance(value, bool):
        return default
    try:
        return int(value)
    except (TypeError, ValueError, OverflowError):
        return default


def clamp_page(page: Any, default: int = 1) -> int:
    """Coerce *page* to an int ``>= 1``."""
    return max(1, _coerce_int(page, default))


def clamp_limit(limit: Any, default: int = 10) -> int:
    """Coerce *limit* to an int ``>= 1``."""
    return max(1, _coerce_int(limit, default))


def total_pages_for(total_count: int, limit: int) -> int:
    if total_count <= 0:
        return 0
    return math.ceil(total_count / limit)


def build_offset_page(
    items: list[Any], *, total_count: int, page: int, limit: int
) -> OffsetPage:
    total_pages = total_pages_for(total_count, limit)
    return OffsetPage(
        items=items,
        total_count=total_count,
        total_pages=total_pages,
        current_page=page,
        has_next=page < total_pages,
        has_previous=page > 1,
    )
