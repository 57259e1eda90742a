"""
MongoDB backend: filter document compiler and pagination over motor.

Public API:
    - ``to_mongo(tree)`` - compile a canonical filter tree to a filter document
    - ``cast_iso_dates(value)`` - turn ISO date-time strings into ``datetime``
    - ``paginate_offset`` / ``paginate_cursor`` - page through a collection
    - ``MONGO_OPERATORS`` / ``LOGICAL_SYMBOLS`` - the operator table
"""

from .compiler import cast_iso_dates, to_mongo
from .operators import LOGICAL_SYMBOLS, MONGO_OPERATORS, like_to_regex
from .pagination import paginate_cursor, paginate_offset

__all__ = [
    "to_mongo",
    "cast_iso_dates",
    "paginate_offset",
    "paginate_cursor",
    "MONGO_OPERATORS",
    "LOGICAL_SYMBOLS",
    "like_to_regex",
]
