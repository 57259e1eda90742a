"""
Closed vocabulary of filter DSL operators.

Both backends dispatch on :class:`FilterOperator` through explicit tables
(``filter_dsl.mongo.operators.MONGO_OPERATORS`` and
``filter_dsl.sql.operators.DEFAULT_SQLA_REGISTRY``). Every field operator
must appear in the Mongo table and either in the SQLAlchemy registry or in
``DOCUMENT_ONLY_OPERATORS``.
"""

from __future__ import annotations

from enum import Enum


class FilterOperator(str, Enum):
    """Operator keys accepted in a filter tree."""

    # Comparison
    EQ = "eq"
    NE = "ne"
    NEQ = "neq"
    GT = "gt"
    GTE = "gte"
    LT = "lt"
    LTE = "lte"

    # Membership
    IN = "in"
    NIN = "nin"

    # Pattern matching
    LIKE = "like"
    ILIKE = "ilike"

    # Nullability
    IS_NULL = "isNull"
    IS_NOT_NULL = "isNotNull"

    # Element / evaluation / array (document store)
    EXISTS = "exists"
    TYPE = "type"
    REGEX = "regex"
    OPTIONS = "options"
    MOD = "mod"
    TEXT = "text"
    ALL = "all"
    SIZE = "size"
    ELEM_MATCH = "elemMatch"
    NOT = "not"

    # Logical grouping
    AND = "and"
    OR = "or"
    NOR = "nor"

    @classmethod
    def from_key(cls, key: object) -> FilterOperator | None:
        """Return the operator for *key*, or ``None`` when it is unknown."""
        try:
            return cls(key)
        except ValueError:
            return None


ARRAY_OPERATORS: frozenset[FilterOperator] = frozenset(
    {FilterOperator.IN, FilterOperator.NIN}
)

LOGICAL_OPERATORS: frozenset[FilterOperator] = frozenset(
    {FilterOperator.AND, FilterOperator.OR, FilterOperator.NOR}
)

# Keys whose value the normalizer always turns into a sequence.
SEQUENCE_KEYS: frozenset[str] = frozenset({"in", "nin", "or", "and"})

FIELD_OPERATORS: frozenset[FilterOperator] = frozenset(
    op for op in FilterOperator if op not in LOGICAL_OPERATORS
)

DOCUMENT_ONLY_OPERATORS: frozenset[FilterOperator] = frozenset(
    {
        FilterOperator.EXISTS,
        FilterOperator.TYPE,
        FilterOperator.REGEX,
        FilterOperator.OPTIONS,
        FilterOperator.MOD,
        FilterOperator.TEXT,
        FilterOperator.ALL,
        FilterOperator.SIZE,
        FilterOperator.ELEM_MATCH,
        FilterOperator.NOT,
        FilterOperator.NOR,
    }
)
