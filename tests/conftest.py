"""
Pytest configuration and fixtures for actorstore tests.
"""

from __future__ import annotations

from typing import AsyncGenerator

import pytest
from sqlalchemy.ext.asyncio import AsyncEngine, AsyncSession, async_sessionmaker, create_async_engine
from sqlalchemy.pool import StaticPool

from actorstore.config.settings import Settings
from actorstore.db.models import Base
from tests.factories.actor_factory import (
    ANON_IP,
    create_anonymous_actor,
    create_registered_actor,
)


@pytest.fixture
def mock_settings() -> Settings:
    """Settings pointing at an in-memory SQLite database."""
    return Settings(
        database_url="sqlite+aiosqlite:///:memory:",
        log_level="INFO",
    )


@pytest.fixture
async def db_engine() -> AsyncGenerator[AsyncEngine, None]:
    """
    Provide an in-memory SQLite engine with the schema created.

    StaticPool keeps a single connection so every session sees the same
    in-memory database.
    """
    engine = create_async_engine(
        "sqlite+aiosqlite:///:memory:",
        poolclass=StaticPool,
    )
    async with engine.begin() as conn:
        await conn.run_sync(Base.metadata.create_all)

    yield engine

    await engine.dispose()


@pytest.fixture
async def db_session(db_engine: AsyncEngine) -> AsyncGenerator[AsyncSession, None]:
    """
    Provide a session over a database seeded with three actors.

    - actor 42: registered user 24, "TestUser"
    - actor 43: anonymous, ANON_IP
    - actor 44: registered user 25, "TestUser1"
    """
    session_factory = async_sessionmaker(
        db_engine,
        class_=AsyncSession,
        expire_on_commit=False,
    )

    async with session_factory() as session:
        session.add_all(
            [
                create_registered_actor(actor_id=42, actor_user=24, actor_name="TestUser"),
                create_anonymous_actor(actor_id=43, actor_name=ANON_IP),
                create_registered_actor(actor_id=44, actor_user=25, actor_name="TestUser1"),
            ]
        )
        await session.commit()

        try:
            yield session
        finally:
            await session.rollback()
            await session.close()
