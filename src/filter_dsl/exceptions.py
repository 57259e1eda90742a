"""
Filter DSL exception hierarchy.

All exceptions inherit from ``FilterDslError`` and provide ``to_dict()``
for API-friendly error responses. Failures raised by the underlying store
clients (pymongo, SQLAlchemy) are never wrapped by this package.
"""

from __future__ import annotations

from typing import Any


class FilterDslError(Exception):
    """Base exception for all filter DSL errors."""

    def to_dict(self) -> dict[str, Any]:
        return {
            "error": self.__class__.__name__,
            "message": str(self),
        }


class InvalidSortDirectionError(FilterDslError, ValueError):
    """Sort direction is neither ascending nor descending."""

    def __init__(self, direction: Any) -> None:
        self.direction = direction
        super().__init__(f"Invalid order direction: {direction!r}")

    def to_dict(self) -> dict[str, Any]:
        return {
            "error": "INVALID_SORT_DIRECTION",
            "direction": str(self.direction),
            "valid_directions": ["asc", "desc"],
        }


class UnsupportedOperatorError(FilterDslError, ValueError):
    """Operator has no form in the backend asked to compile it."""

    def __init__(self, operator: Any, reason: str) -> None:
        self.operator = operator
        self.reason = reason
        name = getattr(operator, "value", operator)
        super().__init__(f"Unsupported operator {name!s}: {reason}")

    def to_dict(self) -> dict[str, Any]:
        return {
            "error": "UNSUPPORTED_OPERATOR",
            "operator": str(getattr(self.operator, "value", self.operator)),
            "reason": self.reason,
        }
