"""
Database engine and session management for the actor store.

The engine is created on first use from ``settings.effective_database_url``
so that importing actorstore never opens a connection. Schema changes in
deployed databases go through alembic; ``create_tables``/``drop_tables``
back the ``actorstore db init`` and ``actorstore db reset`` commands.
"""

from __future__ import annotations

from collections.abc import AsyncGenerator
from typing import Any

from sqlalchemy.ext.asyncio import (
    AsyncEngine,
    AsyncSession,
    async_sessionmaker,
    create_async_engine,
)

from actorstore.config.settings import settings
from actorstore.db.models import Base


class DatabaseManager:
    """Lazily created async engine and session factory for the actor table."""

    def __init__(self) -> None:
        self._engine: AsyncEngine | None = None
        self._session_factory: async_sessionmaker[AsyncSession] | None = None

    def get_engine(self) -> AsyncEngine:
        """Return the async engine, creating it on first call."""
        if self._engine is None:
            engine_kwargs: dict[str, Any] = {
                "echo": settings.debug or settings.db_log_queries,
                "pool_pre_ping": True,
            }
            # SQLite has no server-side connection lifetime to recycle against
            if not settings.is_sqlite:
                engine_kwargs["pool_recycle"] = 3600

            self._engine = create_async_engine(
                settings.effective_database_url, **engine_kwargs
            )
        return self._engine

    def get_session_factory(self) -> async_sessionmaker[AsyncSession]:
        """Return the session factory bound to the engine."""
        if self._session_factory is None:
            self._session_factory = async_sessionmaker(
                bind=self.get_engine(),
                class_=AsyncSession,
                expire_on_commit=False,
            )
        return self._session_factory

    async def get_session(self) -> AsyncGenerator[AsyncSession, None]:
        """
        Yield one session, committing when the caller's block succeeds.

        Any exception raised while the session is open, including a failed
        commit, rolls the transaction back and propagates.
        """
        async with self.get_session_factory()() as session:
            try:
                yield session
                await session.commit()
            except Exception:
                await session.rollback()
                raise
            finally:
                await session.close()

    async def close(self) -> None:
        """Dispose of the engine; the next call to get_engine() starts over."""
        if self._engine is not None:
            await self._engine.dispose()
            self._engine = None
        self._session_factory = None

    async def create_tables(self) -> None:
        """Create the actor table if it does not exist."""
        async with self.get_engine().begin() as conn:
            await conn.run_sync(Base.metadata.create_all)

    async def drop_tables(self) -> None:
        """Drop the actor table and every stored actor with it."""
        async with self.get_engine().begin() as conn:
            await conn.run_sync(Base.metadata.drop_all)


db_manager = DatabaseManager()


async def get_db_session() -> AsyncGenerator[AsyncSession, None]:
    """Yield a database session from the global manager."""
    async for session in db_manager.get_session():
        yield session
