"""
Async SQLAlchemy engine and session factory
"""

import logging

from sqlalchemy.ext.asyncio import AsyncEngine, AsyncSession, async_sessionmaker, create_async_engine
from sqlalchemy.orm import declarative_base
from sqlalchemy.pool import StaticPool

from eventbook.core.config import settings

logger = logging.getLogger(__name__)

Base = declarative_base()


def create_engine(database_url: str | None = None, **engine_kwargs) -> AsyncEngine:
    """Create an async engine for the configured database URL.

    In-memory SQLite needs a single shared connection, otherwise every
    checkout would see a fresh, empty database.
    """
    url = database_url or settings.DATABASE_URL
    if url.startswith("sqlite") and ":memory:" in url:
        engine_kwargs.setdefault("poolclass", StaticPool)
    return create_async_engine(url, echo=settings.SQL_ECHO, **engine_kwargs)


def create_session_factory(engine: AsyncEngine) -> async_sessionmaker[AsyncSession]:
    return async_sessionmaker(engine, class_=AsyncSession, expire_on_commit=False)


async def init_models(engine: AsyncEngine) -> None:
    """Create tables and indexes if they do not exist yet"""
    # Import models so that they register with Base.metadata
    from eventbook import models  # noqa: F401

    async with engine.begin() as conn:
        await conn.run_sync(Base.metadata.create_all)
    logger.info("Database tables created")
