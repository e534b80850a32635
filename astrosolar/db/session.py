"""
Async database engine and session factory.

Uses SQLAlchemy 2.x async engine (asyncpg for PostgreSQL, aiosqlite for
local SQLite files and tests). The engine is created from DATABASE_URL at
application startup and owned by SqlStorage.

CHANGELOG:
- 2026-10-18: Take the URL from Settings instead of the environment
- 2026-10-18: Initial creation
"""

from sqlalchemy.ext.asyncio import (
    AsyncEngine,
    AsyncSession,
    async_sessionmaker,
    create_async_engine,
)

from astrosolar.db.models import Base


def create_engine(database_url: str) -> AsyncEngine:
    """Create an async SQLAlchemy engine.

    Args:
        database_url: SQLAlchemy async URL, e.g.
            ``postgresql+asyncpg://user:pw@host/db``.

    Returns:
        AsyncEngine: Configured async engine.

    Raises:
        RuntimeError: If database_url is empty.
    """
    if not database_url:
        raise RuntimeError("DATABASE_URL is required for SQL storage")
    return create_async_engine(database_url, echo=False)


def create_session_factory(engine: AsyncEngine) -> async_sessionmaker[AsyncSession]:
    """Create an async session factory bound to *engine*.

    Returns:
        async_sessionmaker: Factory for creating AsyncSession instances.
    """
    return async_sessionmaker(engine, class_=AsyncSession, expire_on_commit=False)


async def create_schema(engine: AsyncEngine) -> None:
    """Create all tables that do not exist yet.

    Intended for SQLite development databases and tests; PostgreSQL
    deployments are migrated with Alembic.
    """
    async with engine.begin() as connection:
        await connection.run_sync(Base.metadata.create_all)
