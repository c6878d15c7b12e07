"""
Async database engine and request-scoped sessions.
One session per request: committed when the handler succeeds, rolled back when it raises.
"""

import logging
from collections.abc import AsyncGenerator
from typing import Annotated

from fastapi import Depends
from sqlalchemy.ext.asyncio import AsyncEngine, AsyncSession, async_sessionmaker, create_async_engine

from marketplace.config import get_settings
from marketplace.db.base import Base

logger = logging.getLogger(__name__)
settings = get_settings()


def _engine_options(url: str) -> dict:
    if url.startswith("sqlite"):
        # SQLite has no server-side pool to size
        return {"echo": settings.debug}
    return {
        "echo": settings.debug,
        "pool_pre_ping": True,
        "pool_size": 10,
        "max_overflow": 20,
    }


engine: AsyncEngine = create_async_engine(settings.database_url, **_engine_options(settings.database_url))

async_session_maker = async_sessionmaker(
    engine,
    class_=AsyncSession,
    expire_on_commit=False,
    autoflush=False,
)


async def get_db() -> AsyncGenerator[AsyncSession, None]:
    """Yield a database session per request."""
    async with async_session_maker() as session:
        try:
            yield session
            await session.commit()
        except Exception:
            await session.rollback()
            raise


async def create_tables() -> None:
    """Create any missing tables and indexes (startup convenience when not using Alembic)."""
    from marketplace.db import models  # noqa: F401 - register mappers on Base.metadata

    async with engine.begin() as conn:
        await conn.run_sync(Base.metadata.create_all)
    logger.info("Database tables ensured")


async def dispose_engine() -> None:
    await engine.dispose()


DbSession = Annotated[AsyncSession, Depends(get_db)]
