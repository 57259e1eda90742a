"""
Document-store operator table.

Each :class:`FilterOperator` maps to a translator ``(value, compile_value)
-> dict`` returning the ``$``-prefixed entries it contributes to a field
condition. ``compile_value`` recursively compiles nested operator objects.
"""

from __future__ import annotations

import re
from collections.abc import Callable, Mapping
from typing import Any

from ..operators import FilterOperator

Translator = Callable[[Any, Callable[[Any], Any]], dict[str, Any]]


def _is_false(value: Any) -> bool:
    if isinstance(value, str):
        return value.strip().lower() in ("false", "0", "")
    return not value


def _symbol(name: str) -> Translator:
    def translate(value: Any, compile_value: Callable[[Any], Any]) -> dict[str, Any]:
        return {name: compile_value(value)}

    return translate


def _null_check(is_null: bool) -> Translator:
    def translate(value: Any, _compile_value: Callable[[Any], Any]) -> dict[str, Any]:
        want_null = is_null != _is_false(value)
        return {"$eq": None} if want_null else {"$ne": None}

    return translate


def like_to_regex(pattern: str) -> str:
    """Translate a SQL LIKE pattern (``%`` / ``_`` wildcards) to an anchored regex."""
    escaped = re.escape(pattern).replace("%", ".*").replace("_", ".")
    return f"^{escaped}$"


def _like(case_insensitive: bool) -> Translator:
    def translate(value: Any, _compile_value: Callable[[Any], Any]) -> dict[str, Any]:
        return {
            "$regex": like_to_regex(str(value)),
            "$options": "i" if case_insensitive else "",
        }

    return translate


def _elem_match(value: Any, compile_value: Callable[[Any], Any]) -> dict[str, Any]:
    # Operator object ({"gt": 90}) or sub-document filter ({"score": {"gt": 90}}).
    # A sub-document whose fields all share operator names ({"type": "book"})
    # is read as an operator object.
    if isinstance(value, Mapping) and value and not all(
        str(k).startswith("$") or FilterOperator.from_key(k) is not None for k in value
    ):
        from .compiler import to_mongo

        return {"$elemMatch": to_mongo(value)}
    return {"$elemMatch": compile_value(value)}


MONGO_OPERATORS: dict[FilterOperator, Translator] = {
    FilterOperator.EQ: _symbol("$eq"),
    FilterOperator.NE: _symbol("$ne"),
    FilterOperator.NEQ: _symbol("$ne"),
    FilterOperator.GT: _symbol("$gt"),
    FilterOperator.GTE: _symbol("$gte"),
    FilterOperator.LT: _symbol("$lt"),
    FilterOperator.LTE: _symbol("$lte"),
    FilterOperator.IN: _symbol("$in"),
    FilterOperator.NIN: _symbol("$nin"),
    FilterOperator.LIKE: _like(case_insensitive=False),
    FilterOperator.ILIKE: _like(case_insensitive=True),
    FilterOperator.IS_NULL: _null_check(is_null=True),
    FilterOperator.IS_NOT_NULL: _null_check(is_null=False),
    FilterOperator.EXISTS: _symbol("$exists"),
    FilterOperator.TYPE: _symbol("$type"),
    FilterOperator.REGEX: _symbol("$regex"),
    FilterOperator.OPTIONS: _symbol("$options"),
    FilterOperator.MOD: _symbol("$mod"),
    FilterOperator.TEXT: _symbol("$text"),
    FilterOperator.ALL: _symbol("$all"),
    FilterOperator.SIZE: _symbol("$size"),
    FilterOperator.ELEM_MATCH: _elem_match,
    FilterOperator.NOT: _symbol("$not"),
}

LOGICAL_SYMBOLS: dict[FilterOperator, str] = {
    FilterOperator.AND: "$and",
    FilterOperator.OR: "$or",
    FilterOperator.NOR: "$nor",
}
