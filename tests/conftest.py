"""Shared fixtures: in-memory MongoDB (mongomock-motor) and SQLite (aiosqlite)."""

from __future__ import annotations

import datetime
from typing import TYPE_CHECKING, Any

import pytest
from mongomock_motor import AsyncMongoMockClient
from sqlalchemy import DateTime, Integer, String
from sqlalchemy.ext.asyncio import AsyncSession, async_sessionmaker, create_async_engine
from sqlalchemy.orm import DeclarativeBase, Mapped, mapped_column

if TYPE_CHECKING:
    from collections.abc import AsyncGenerator

pytest_plugins = ["pytest_asyncio"]

BASE_TIME = datetime.datetime(2024, 1, 1, 12, 0, 0)


class Base(DeclarativeBase):
    pass


class UserRecord(Base):
    __tablename__ = "users"
    id: Mapped[int] = mapped_column(Integer, primary_key=True)
    name: Mapped[str] = mapped_column(String)
    status: Mapped[str] = mapped_column(String)
    role: Mapped[str] = mapped_column(String)
    age: Mapped[int] = mapped_column(Integer)
    nickname: Mapped[str | None] = mapped_column(String, nullable=True)
    created_at: Mapped[datetime.datetime] = mapped_column(DateTime)


def make_users(count: int) -> list[dict[str, Any]]:
    """Deterministic user rows shared by both stores."""
    statuses = ["active", "inactive", "pending"]
    roles = ["admin", "user"]
    return [
        {
            "id": i,
            "name": f"user{i:02d}",
            "status": statuses[i % 3],
            "role": roles[i % 2],
            "age": 15 + i,
            "nickname": None if i % 4 == 0 else f"nick{i}",
            "created_at": BASE_TIME + datetime.timedelta(minutes=i),
        }
        for i in range(1, count + 1)
    ]


@pytest.fixture
def mongo_db() -> Any:
    client = AsyncMongoMockClient(default_database_name="test_db")
    return client.get_database("test_db")


@pytest.fixture
async def users_collection(mongo_db: Any) -> Any:
    """``users`` collection seeded with 15 rows, ``_id`` = row number."""
    collection = mongo_db["users"]
    docs = [{"_id": row["id"], **row} for row in make_users(15)]
    await collection.insert_many(docs)
    return collection


@pytest.fixture
async def session() -> AsyncGenerator[AsyncSession, None]:
    engine = create_async_engine("sqlite+aiosqlite:///:memory:")
    async with engine.begin() as conn:
        await conn.run_sync(Base.metadata.create_all)
    factory = async_sessionmaker(engine, expire_on_commit=False)
    async with factory() as s:
        yield s
    await engine.dispose()


@pytest.fixture
async def users_session(session: AsyncSession) -> AsyncSession:
    """Session over a ``users`` table seeded with the same 15 rows."""
    session.add_all([UserRecord(**row) for row in make_users(15)])
    await session.commit()
    return session
