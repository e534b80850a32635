"""
Storage package.

Exports the Storage interface, both implementations and the factory that
picks one from Settings.

CHANGELOG:
- 2026-10-18: Initial creation
"""

from astrosolar.config import Settings
from astrosolar.db.session import create_engine, create_schema, create_session_factory
from astrosolar.storage.base import Storage
from astrosolar.storage.memory import MemoryStorage
from astrosolar.storage.sql import SqlStorage


async def create_storage(settings: Settings) -> Storage:
    """Return SqlStorage when DATABASE_URL is set, else MemoryStorage.

    SQLite databases get their tables created on startup; other backends
    are expected to be migrated with Alembic.
    """
    if not settings.database_url:
        return MemoryStorage()
    engine = create_engine(settings.database_url)
    if engine.dialect.name == "sqlite":
        await create_schema(engine)
    return SqlStorage(create_session_factory(engine), engine=engine)


__all__ = ["MemoryStorage", "SqlStorage", "Storage", "create_storage"]
