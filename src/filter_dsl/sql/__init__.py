"""
SQLAlchemy backend: WHERE compiler, modifiers and pagination.

Public API:
    - ``apply_filter(stmt, tree)`` - add the filter's predicates to a ``Select``
    - ``apply_filter_snake_case`` / ``apply_or_filter`` - variants of the above
    - ``apply_order_by`` / ``apply_pagination`` - ORDER BY and LIMIT/OFFSET
    - ``paginate_offset`` / ``paginate_cursor`` - page through a statement
    - ``DEFAULT_SQLA_REGISTRY`` - the default operator registry
    - ``SQLAlchemyOperator`` / ``SQLAlchemyOperatorRegistry`` - extension
      points for custom operators
"""

from .compiler import (
    apply_filter,
    apply_filter_snake_case,
    apply_or_filter,
    build_filter_clauses,
    resolve_column,
)
from .modifiers import apply_order_by, apply_pagination
from .operators import DEFAULT_SQLA_REGISTRY, build_default_sqla_registry
from .pagination import paginate_cursor, paginate_offset
from .strategy import SQLAlchemyOperator, SQLAlchemyOperatorRegistry
from .utils import extract_tables_from_statement, get_table_name

__all__ = [
    "apply_filter",
    "apply_filter_snake_case",
    "apply_or_filter",
    "build_filter_clauses",
    "resolve_column",
    "apply_order_by",
    "apply_pagination",
    "paginate_offset",
    "paginate_cursor",
    "DEFAULT_SQLA_REGISTRY",
    "build_default_sqla_registry",
    "SQLAlchemyOperator",
    "SQLAlchemyOperatorRegistry",
    "extract_tables_from_statement",
    "get_table_name",
]
