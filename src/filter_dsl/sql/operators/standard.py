"""
Comparison operators: eq, ne (alias neq), gt, gte, lt, lte.

Inequality follows document-store semantics, where a missing or null field
is "not equal" to any non-null value. SQL three-valued logic would drop
those rows, so ``ne`` with a non-null operand adds ``OR column IS NULL``.
Ordering comparisons never match NULL in either store and need no help.
"""

from __future__ import annotations

import operator
from collections.abc import Callable
from typing import TYPE_CHECKING, Any, ClassVar, cast

import sqlalchemy as sa

from ...operators import FilterOperator
from ..strategy import SQLAlchemyOperator

if TYPE_CHECKING:
    from sqlalchemy.sql.elements import ColumnElement


class EqualOperator(SQLAlchemyOperator):
    # column == None renders as IS NULL
    operators = (FilterOperator.EQ,)

    def apply(self, column: Any, value: Any) -> ColumnElement[bool]:
        return cast("ColumnElement[bool]", column == value)


class NotEqualOperator(SQLAlchemyOperator):
    operators = (FilterOperator.NE, FilterOperator.NEQ)

    def apply(self, column: Any, value: Any) -> ColumnElement[bool]:
        if value is None:
            return cast("ColumnElement[bool]", column.is_not(None))
        return sa.or_(column != value, column.is_(None))


class RangeOperator(SQLAlchemyOperator):
    """gt / gte / lt / lte, keyed by the Python comparison they render."""

    _COMPARISONS: ClassVar[dict[FilterOperator, Callable[[Any, Any], Any]]] = {
        FilterOperator.GT: operator.gt,
        FilterOperator.GTE: operator.ge,
        FilterOperator.LT: operator.lt,
        FilterOperator.LTE: operator.le,
    }

    def __init__(self, op: FilterOperator) -> None:
        self._compare = self._COMPARISONS[op]
        self.operators = (op,)

    def apply(self, column: Any, value: Any) -> ColumnElement[bool]:
        return cast("ColumnElement[bool]", self._compare(column, value))

    @classmethod
    def all(cls) -> list[RangeOperator]:
        return [cls(op) for op in cls._COMPARISONS]
