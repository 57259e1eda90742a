"""Filter DSL normalization, MongoDB and SQLAlchemy compilers, and pagination.

Backend-specific pagination lives in :mod:`filter_dsl.mongo` and
:mod:`filter_dsl.sql`.
"""

from __future__ import annotations

from .casing import camel_case_keys, snake_case_keys, to_camel_case, to_snake_case
from .config import DEFAULT_PAGINATION, PaginationDefaults
from .exceptions import (
    FilterDslError,
    InvalidSortDirectionError,
    UnsupportedOperatorError,
)
from .mongo import cast_iso_dates, to_mongo
from .normalize import normalize, normalize_operators
from .operators import (
    ARRAY_OPERATORS,
    DOCUMENT_ONLY_OPERATORS,
    FIELD_OPERATORS,
    LOGICAL_OPERATORS,
    FilterOperator,
)
from .pagination import (
    CursorPage,
    OffsetPage,
    SortDirection,
    clamp_limit,
    clamp_page,
    total_pages_for,
)
from .sql import apply_filter, apply_filter_snake_case

__all__ = [
    # Normalizer
    "normalize",
    "normalize_operators",
    # Operators
    "FilterOperator",
    "ARRAY_OPERATORS",
    "LOGICAL_OPERATORS",
    "FIELD_OPERATORS",
    "DOCUMENT_ONLY_OPERATORS",
    # Compilers
    "to_mongo",
    "cast_iso_dates",
    "apply_filter",
    "apply_filter_snake_case",
    # Pagination
    "SortDirection",
    "OffsetPage",
    "CursorPage",
    "clamp_page",
    "clamp_limit",
    "total_pages_for",
    # Configuration
    "PaginationDefaults",
    "DEFAULT_PAGINATION",
    # Casing
    "to_snake_case",
    "snake_case_keys",
    "to_camel_case",
    "camel_case_keys",
    # Exceptions
    "FilterDslError",
    "InvalidSortDirectionError",
    "UnsupportedOperatorError",
]
