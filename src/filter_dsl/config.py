"""Pagination defaults."""

from __future__ import annotations

from dataclasses import dataclass


@dataclass(frozen=True, slots=True)
class PaginationDefaults:
    """Fallback values for pagination calls.

    Attributes:
        limit: Page size used when the caller passes none (or garbage).
        page: Page number used by offset pagination when none is given.
        offset_direction: Sort direction for offset pagination.
        cursor_direction: Sort direction for cursor pagination.
        cursor_field: Sort field for Mongo pagination when none is given.
    """

    limit: int = 10
    page: int = 1
    offset_direction: str = "asc"
    cursor_direction: str = "desc"
    cursor_field: str = "_id"


DEFAULT_PAGINATION = PaginationDefaults()
