"""
Relational operator table.

Each field operator with a relational form maps to one
:class:`SQLAlchemyOperator`. The registry is built once and checked against
the vocabulary: an operator that is neither registered nor listed in
``DOCUMENT_ONLY_OPERATORS`` is a build-time error, so adding a new
``FilterOperator`` member without a SQL form (or an explicit opt-out) fails
at import rather than silently matching nothing.
"""

from __future__ import annotations

from abc import ABC, abstractmethod
from collections.abc import Iterable, Iterator
from typing import TYPE_CHECKING, Any

from ..exceptions import UnsupportedOperatorError
from ..operators import DOCUMENT_ONLY_OPERATORS, FIELD_OPERATORS, FilterOperator

if TYPE_CHECKING:
    from sqlalchemy import ColumnElement


class SQLAlchemyOperator(ABC):
    """Turns one operator value into a predicate on a column.

    Subclasses declare the operators they serve in ``operators``; a single
    strategy may serve aliases (``ne`` / ``neq``).
    """

    operators: tuple[FilterOperator, ...] = ()

    @abstractmethod
    def apply(self, column: Any, value: Any) -> ColumnElement[bool]: ...


class SQLAlchemyOperatorRegistry:
    """Operator table for the relational compiler."""

    def __init__(self, strategies: Iterable[SQLAlchemyOperator] = ()) -> None:
        self._table: dict[FilterOperator, SQLAlchemyOperator] = {}
        for strategy in strategies:
            self.register(strategy)

    def register(self, strategy: SQLAlchemyOperator) -> None:
        for op in strategy.operators:
            if op in DOCUMENT_ONLY_OPERATORS:
                raise UnsupportedOperatorError(op, "document-only operator")
            self._table[op] = strategy

    def has(self, op: FilterOperator) -> bool:
        return op in self._table

    def __iter__(self) -> Iterator[FilterOperator]:
        return iter(self._table)

    def missing(self) -> frozenset[FilterOperator]:
        """Field operators with neither a strategy nor a document-only opt-out."""
        return frozenset(FIELD_OPERATORS - DOCUMENT_ONLY_OPERATORS - self._table.keys())

    def check_coverage(self) -> None:
        missing = self.missing()
        if missing:
            names = ", ".join(sorted(op.value for op in missing))
            raise UnsupportedOperatorError(names, "no relational strategy")

    def apply(
        self, op: FilterOperator, column: Any, value: Any
    ) -> ColumnElement[bool]:
        try:
            strategy = self._table[op]
        except KeyError:
            raise UnsupportedOperatorError(op, "no relational strategy") from None
        return strategy.apply(column, value)
