"""
SQLAlchemy operator implementations and default registry.

Usage::

    from filter_dsl.sql.operators import DEFAULT_SQLA_REGISTRY

    expr = DEFAULT_SQLA_REGISTRY.apply(FilterOperator.GTE, column, 18)
"""

from __future__ import annotations

from ..strategy import SQLAlchemyOperatorRegistry
from .null import IsNotNullOperator, IsNullOperator
from .set import InOperator, NotInOperator
from .standard import EqualOperator, NotEqualOperator, RangeOperator
from .string import ILikeOperator, LikeOperator


def build_default_sqla_registry() -> SQLAlchemyOperatorRegistry:
    """Create the registry for every operator that has a relational form.

    Raises:
        UnsupportedOperatorError: If a field operator is neither covered
            here nor declared document-only.
    """
    registry = SQLAlchemyOperatorRegistry(
        [
            EqualOperator(),
            NotEqualOperator(),
            *RangeOperator.all(),
            InOperator(),
            NotInOperator(),
            LikeOperator(),
            ILikeOperator(),
            IsNullOperator(),
            IsNotNullOperator(),
        ]
    )
    registry.check_coverage()
    return registry


DEFAULT_SQLA_REGISTRY: SQLAlchemyOperatorRegistry = build_default_sqla_registry()

__all__ = [
    "DEFAULT_SQLA_REGISTRY",
    "build_default_sqla_registry",
    "SQLAlchemyOperatorRegistry",
]
