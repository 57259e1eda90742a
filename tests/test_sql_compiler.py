"""Tests for the SQLAlchemy WHERE compiler and statement modifiers."""

from __future__ import annotations

from typing import Any

import pytest
import sqlalchemy as sa
from sqlalchemy import Column, DateTime, Integer, MetaData, String, Table, select

from filter_dsl.casing import to_snake_case
from filter_dsl.exceptions import InvalidSortDirectionError
from filter_dsl.sql.compiler import (
    apply_filter,
    apply_filter_snake_case,
    apply_or_filter,
    resolve_column,
)
from filter_dsl.sql.modifiers import apply_order_by, apply_pagination
from tests.conftest import UserRecord

_metadata = MetaData()

users = Table(
    "users",
    _metadata,
    Column("id", Integer, primary_key=True),
    Column("user_id", Integer),
    Column("name", String),
    Column("status", String),
    Column("role", String),
    Column("age", Integer),
    Column("nickname", String),
    Column("created_at", DateTime),
)


def where_sql(stmt: Any) -> str:
    return str(stmt.whereclause.compile(compile_kwargs={"literal_binds": True}))


def full_sql(stmt: Any) -> str:
    return str(stmt.compile(compile_kwargs={"literal_binds": True}))


def test_scalar_and_operator_object():
    stmt = apply_filter(select(users), {"status": "active", "age": {"gte": 18}})
    assert where_sql(stmt) == "users.status = 'active' AND users.age >= 18"


def test_keys_apply_in_iteration_order():
    stmt = apply_filter(select(users), {"age": {"gte": 18}, "status": "active"})
    assert where_sql(stmt) == "users.age >= 18 AND users.status = 'active'"


def test_comparison_operators():
    stmt = apply_filter(
        select(users),
        {"age": {"gt": 1, "gte": 2, "lt": 9, "lte": 8}},
    )
    assert where_sql(stmt) == (
        "users.age > 1 AND users.age >= 2 AND users.age < 9 AND users.age <= 8"
    )


def test_ne_keeps_null_rows():
    stmt = apply_filter(select(users), {"status": {"ne": "a", "neq": "b"}})
    assert where_sql(stmt) == (
        "(users.status != 'a' OR users.status IS NULL)"
        " AND (users.status != 'b' OR users.status IS NULL)"
    )


def test_ne_none_is_is_not_null():
    stmt = apply_filter(select(users), {"nickname": {"ne": None}})
    assert where_sql(stmt) == "users.nickname IS NOT NULL"


def test_list_value_is_implicit_in():
    stmt = apply_filter(select(users), {"status": ["active", "pending"]})
    assert where_sql(stmt) == "users.status IN ('active', 'pending')"


def test_nin_keeps_null_rows():
    stmt = apply_filter(select(users), {"status": {"nin": ["banned"]}})
    sql = where_sql(stmt)
    assert "users.status NOT IN ('banned')" in sql
    assert sql.endswith(" OR users.status IS NULL")


def test_nin_with_none_excludes_null_rows():
    stmt = apply_filter(select(users), {"nickname": {"nin": ["x", None]}})
    sql = where_sql(stmt)
    assert "users.nickname NOT IN ('x')" in sql
    assert sql.endswith(" AND users.nickname IS NOT NULL")


def test_in_with_none_matches_null_rows():
    stmt = apply_filter(select(users), {"nickname": {"in": ["x", None]}})
    assert where_sql(stmt) == "users.nickname IN ('x') OR users.nickname IS NULL"


def test_in_wraps_scalar():
    stmt = apply_filter(select(users), {"status": {"in": "active"}})
    assert where_sql(stmt) == "users.status IN ('active')"


def test_none_is_is_null():
    stmt = apply_filter(select(users), {"nickname": None})
    assert where_sql(stmt) == "users.nickname IS NULL"


@pytest.mark.parametrize(
    ("condition", "expected"),
    [
        ({"isNull": True}, "users.nickname IS NULL"),
        ({"isNull": False}, "users.nickname IS NOT NULL"),
        ({"isNull": "false"}, "users.nickname IS NOT NULL"),
        ({"isNotNull": True}, "users.nickname IS NOT NULL"),
        ({"isNotNull": False}, "users.nickname IS NULL"),
    ],
)
def test_null_checks(condition, expected):
    stmt = apply_filter(select(users), {"nickname": condition})
    assert where_sql(stmt) == expected


def test_like_and_ilike():
    stmt = apply_filter(select(users), {"name": {"like": "jo%"}})
    assert where_sql(stmt) == "users.name LIKE 'jo%'"
    stmt = apply_filter(select(users), {"name": {"ilike": "jo%"}})
    assert where_sql(stmt) == "lower(users.name) LIKE lower('jo%')"


def test_or_groups_are_conjunctions():
    stmt = apply_filter(
        select(users),
        {
            "status": "active",
            "or": [{"role": "admin"}, {"age": {"gte": 18}, "name": "x"}],
        },
    )
    assert where_sql(stmt) == (
        "users.status = 'active' AND "
        "(users.role = 'admin' OR users.age >= 18 AND users.name = 'x')"
    )


def test_explicit_and():
    stmt = apply_filter(
        select(users), {"and": [{"age": {"gte": 18}}, {"age": {"lt": 30}}]}
    )
    assert where_sql(stmt) == "users.age >= 18 AND users.age < 30"


def test_unknown_and_document_only_operators_are_skipped(caplog):
    with caplog.at_level("DEBUG", logger="filter_dsl.sql.compiler"):
        stmt = apply_filter(
            select(users),
            {"age": {"weirdOp": 1, "gt": 3, "exists": True}, "nor": [{"a": 1}]},
        )
    assert where_sql(stmt) == "users.age > 3"
    assert "weirdOp" in caplog.text


def test_only_skipped_operators_leaves_statement_unchanged():
    base = select(users)
    assert apply_filter(base, {"tags": {"size": 2}}) is base
    assert apply_filter(base, {}) is base
    assert apply_filter(base, None) is base


def test_statement_is_not_mutated():
    base = select(users)
    apply_filter(base, {"status": "active"})
    assert base.whereclause is None


def test_snake_case_wrapper():
    stmt = apply_filter_snake_case(
        select(users), {"userId": 5, "or": [{"createdAt": {"isNull": True}}]}
    )
    assert where_sql(stmt) == "users.user_id = 5 AND users.created_at IS NULL"


def test_orm_entity_with_key_transform():
    stmt = apply_filter(
        select(UserRecord),
        {"createdAt": {"isNotNull": True}},
        key_transform=to_snake_case,
    )
    assert where_sql(stmt) == "users.created_at IS NOT NULL"


def test_explicit_table_name_not_in_from():
    stmt = apply_filter(select(users), {"age": 3}, table_name="accounts")
    assert where_sql(stmt) == "accounts.age = 3"


def test_no_table_leaves_names_bare():
    stmt = apply_filter(select(sa.column("age")), {"age": {"gt": 3}})
    assert where_sql(stmt) == "age > 3"


def test_resolve_column_uses_table_column():
    assert resolve_column(select(users), "age", "users") is users.c.age


def test_apply_or_filter():
    stmt = apply_or_filter(select(users), [{"role": "admin"}, {"status": "active"}])
    assert where_sql(stmt) == "users.role = 'admin' OR users.status = 'active'"


def test_apply_order_by():
    stmt = apply_order_by(select(users), [("age", "desc"), {"column": "name"}])
    assert "ORDER BY users.age DESC, users.name ASC" in full_sql(stmt)


def test_apply_order_by_single_and_empty():
    assert "ORDER BY users.age ASC" in full_sql(apply_order_by(select(users), "age"))
    base = select(users)
    assert apply_order_by(base, None) is base
    assert apply_order_by(base, {"direction": "desc"}) is base


def test_apply_order_by_invalid_direction():
    with pytest.raises(InvalidSortDirectionError) as exc:
        apply_order_by(select(users), ("age", "sideways"))
    assert exc.value.to_dict()["error"] == "INVALID_SORT_DIRECTION"


def test_apply_pagination():
    sql = full_sql(apply_pagination(select(users), page="3", limit=5))
    assert "LIMIT 5 OFFSET 10" in sql


def test_apply_pagination_clamps():
    sql = full_sql(apply_pagination(select(users), page=0, limit=-4))
    assert "LIMIT 1 OFFSET 0" in sql
