"""
Set membership operators: in, nin.

A scalar operand is treated as a one-element list. ``None`` inside the
list is pulled out and compiled to an explicit NULL test, because
``col IN (NULL)`` never matches and ``col NOT IN (NULL, ...)`` never
matches anything at all. ``nin`` without ``None`` keeps NULL rows, as a
document store does for missing fields.
"""

from __future__ import annotations

from typing import TYPE_CHECKING, Any, cast

import sqlalchemy as sa

from ...operators import FilterOperator
from ..strategy import SQLAlchemyOperator

if TYPE_CHECKING:
    from sqlalchemy.sql.elements import ColumnElement


def _split(value: Any) -> tuple[list[Any], bool]:
    if not isinstance(value, (list, tuple, set, frozenset)):
        value = [value]
    values = [v for v in value if v is not None]
    return values, len(values) != len(value)


class InOperator(SQLAlchemyOperator):
    operators = (FilterOperator.IN,)

    def apply(self, column: Any, value: Any) -> ColumnElement[bool]:
        values, with_null = _split(value)
        if with_null:
            return sa.or_(column.in_(values), column.is_(None))
        return cast("ColumnElement[bool]", column.in_(values))


class NotInOperator(SQLAlchemyOperator):
    operators = (FilterOperator.NIN,)

    def apply(self, column: Any, value: Any) -> ColumnElement[bool]:
        values, with_null = _split(value)
        if with_null:
            return sa.and_(column.not_in(values), column.is_not(None))
        return sa.or_(column.not_in(values), column.is_(None))
