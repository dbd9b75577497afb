"""Async engine and session factory shared by the unit of work."""

from typing import Any, AsyncGenerator

from sqlalchemy.ext.asyncio import AsyncSession, async_sessionmaker, create_async_engine

from core.config import settings


def _connect_args(url: str) -> dict[str, Any]:
    # Supavisor in transaction mode cannot reuse asyncpg prepared statements
    if "pooler.supabase.com" in url:
        return {"statement_cache_size": 0}
    return {}


engine = create_async_engine(
    settings.async_database_url,
    echo=settings.debug,
    pool_pre_ping=True,
    pool_size=settings.database_pool_size,
    max_overflow=settings.database_max_overflow,
    connect_args=_connect_args(settings.database_url),
)

async_session_factory = async_sessionmaker(
    bind=engine,
    class_=AsyncSession,
    expire_on_commit=False,
    autoflush=False,
)


async def get_async_session() -> AsyncGenerator[AsyncSession, None]:
    """Request-scoped session, used directly only by the readiness probe."""
    async with async_session_factory() as session:
        yield session
