"""Async PostgreSQL engine and per-request sessions.

Sessions autobegin: every repository call joins the session's current
transaction, and the settlement engine or the calling service ends it with
commit() or rollback(). Repositories never commit.
"""

from collections.abc import AsyncGenerator

from sqlalchemy.ext.asyncio import (
    AsyncEngine,
    AsyncSession,
    async_sessionmaker,
    create_async_engine,
)

from config.settings import settings

engine: AsyncEngine = create_async_engine(
    settings.DATABASE_URL,
    echo=settings.DEBUG,
    pool_size=10,
    max_overflow=5,
    pool_pre_ping=True,
    connect_args={"server_settings": {"application_name": "price-rush"}},
)

async_session_factory = async_sessionmaker(engine, expire_on_commit=False)


async def get_db_session() -> AsyncGenerator[AsyncSession, None]:
    """FastAPI dependency; an uncommitted transaction is rolled back on close."""
    async with async_session_factory() as session:
        yield session
