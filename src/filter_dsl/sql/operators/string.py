"""Pattern operators: like, ilike."""

from __future__ import annotations

from typing import TYPE_CHECKING, Any, cast

from ...operators import FilterOperator
from ..strategy import SQLAlchemyOperator

if TYPE_CHECKING:
    from sqlalchemy.sql.elements import ColumnElement


class LikeOperator(SQLAlchemyOperator):
    operators = (FilterOperator.LIKE,)

    def apply(self, column: Any, value: Any) -> ColumnElement[bool]:
        return cast("ColumnElement[bool]", column.like(str(value)))


class ILikeOperator(SQLAlchemyOperator):
    operators = (FilterOperator.ILIKE,)

    def apply(self, column: Any, value: Any) -> ColumnElement[bool]:
        return cast("ColumnElement[bool]", column.ilike(str(value)))
