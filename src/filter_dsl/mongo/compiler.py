"""
Compile a canonical filter tree into a MongoDB filter document.

Example::

    to_mongo({
        "userId": {"in": ["123", "456"]},
        "status": "active",
        "or": [{"role": {"eq": "admin"}}, {"age": {"gte": 18}}],
    })
    # {
    #     "userId": {"$in": ["123", "456"]},
    #     "status": {"$eq": "active"},
    #     "$or": [{"role": {"$eq": "admin"}}, {"age": {"$gte": 18}}],
    # }

Keys that already carry a ``$`` prefix are left as they are, so compiling a
compiled document again is a no-op. Operator keys outside the vocabulary are
prefixed blindly (``weirdOp`` -> ``$weirdOp``) and left for the server to
reject.
"""

from __future__ import annotations

import datetime
import re
from collections.abc import Mapping
from typing import Any

from ..operators import FilterOperator
from .operators import LOGICAL_SYMBOLS, MONGO_OPERATORS

_COMPILED_LOGICAL = frozenset(LOGICAL_SYMBOLS.values())

_ISO_DATETIME = re.compile(r"^\d{4}-\d{2}-\d{2}T", re.ASCII)


def to_mongo(query: Mapping[str, Any] | None = None) -> dict[str, Any]:
    """Return the MongoDB filter document for a canonical filter tree."""
    if not query:
        return {}
    result: dict[str, Any] = {}
    for key, condition in query.items():
        op = FilterOperator.from_key(key)
        if op in LOGICAL_SYMBOLS:
            result[LOGICAL_SYMBOLS[op]] = _compile_logical(condition)
        elif isinstance(key, str) and key.startswith("$"):
            result[key] = (
                _compile_logical(condition) if key in _COMPILED_LOGICAL else condition
            )
        elif isinstance(condition, Mapping):
            result[key] = _convert_condition(condition)
        elif isinstance(condition, (list, tuple)):
            result[key] = {"$in": list(condition)}
        else:
            result[key] = {"$eq": condition}
    return result


def _compile_logical(condition: Any) -> Any:
    if isinstance(condition, (list, tuple)):
        return [to_mongo(c) if isinstance(c, Mapping) else c for c in condition]
    if isinstance(condition, Mapping):
        return [to_mongo(condition)]
    return condition


def _compile_value(value: Any) -> Any:
    if isinstance(value, Mapping):
        return _convert_condition(value)
    return value


def _convert_condition(condition: Mapping[str, Any]) -> dict[str, Any]:
    """Rewrite the operator keys of one field condition to Mongo form."""
    result: dict[str, Any] = {}
    for key, value in condition.items():
        if isinstance(key, str) and key.startswith("$"):
            result[key] = value
            continue
        op = FilterOperator.from_key(key)
        translate = MONGO_OPERATORS.get(op) if op is not None else None
        if translate is None:
            result[f"${key}"] = _compile_value(value)
        else:
            result.update(translate(value, _compile_value))
    return result


def _parse_iso_datetime(value: str) -> datetime.datetime | None:
    try:
        result = datetime.datetime.fromisoformat(value.replace("Z", "+00:00"))
    except ValueError:
        return None
    if result.tzinfo is not None:
        result = result.astimezone(datetime.timezone.utc)
    return result


def cast_iso_dates(value: Any) -> Any:
    """Return a copy of *value* with ISO-8601 date-time strings as ``datetime``.

    Only strings shaped ``YYYY-MM-DDT...`` that parse are converted; plain
    dates, other strings, numbers, booleans and existing ``datetime``
    values are returned unchanged.
    """
    if isinstance(value, Mapping):
        return {k: cast_iso_dates(v) for k, v in value.items()}
    if isinstance(value, (list, tuple)):
        return [cast_iso_dates(v) for v in value]
    if isinstance(value, str) and _ISO_DATETIME.match(value):
        parsed = _parse_iso_datetime(value)
        return parsed if parsed is not None else value
    return value
