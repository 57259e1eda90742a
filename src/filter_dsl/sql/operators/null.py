"""
Null check operators: isNull, isNotNull.

The operator value is a flag: ``{"isNull": false}`` means IS NOT NULL and
``{"isNotNull": false}`` means IS NULL. Query-string spellings such as
``"false"`` or ``"0"`` count as false.
"""

from __future__ import annotations

from typing import TYPE_CHECKING, Any, cast

from ...operators import FilterOperator
from ..strategy import SQLAlchemyOperator

if TYPE_CHECKING:
    from sqlalchemy.sql.elements import ColumnElement


def _flag(value: Any) -> bool:
    if isinstance(value, str):
        return value.strip().lower() not in ("false", "0", "")
    return bool(value)


class IsNullOperator(SQLAlchemyOperator):
    operators = (FilterOperator.IS_NULL,)

    def apply(self, column: Any, value: Any) -> ColumnElement[bool]:
        if _flag(value):
            return cast("ColumnElement[bool]", column.is_(None))
        return cast("ColumnElement[bool]", column.is_not(None))


class IsNotNullOperator(SQLAlchemyOperator):
    operators = (FilterOperator.IS_NOT_NULL,)

    def apply(self, column: Any, value: Any) -> ColumnElement[bool]:
        if _flag(value):
            return cast("ColumnElement[bool]", column.is_not(None))
        return cast("ColumnElement[bool]", column.is_(None))
