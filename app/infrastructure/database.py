"""Database configuration and session management.

Provides async SQLAlchemy engine and session factory.
"""

from collections.abc import AsyncGenerator
from typing import Any

from sqlalchemy import text
from sqlalchemy.ext.asyncio import AsyncSession, async_sessionmaker, create_async_engine
from sqlalchemy.orm import declarative_base
from sqlalchemy.pool import NullPool

from app.infrastructure.config import settings

engine_options: dict[str, Any] = {"echo": settings.debug}
if settings.database_url.startswith("sqlite"):
    # SQLite connections are cheap and must not be shared across event loops
    engine_options["poolclass"] = NullPool
else:
    engine_options["pool_pre_ping"] = True

# Create async engine
engine = create_async_engine(settings.database_url, **engine_options)

# Session factory
async_session_factory = async_sessionmaker(
    engine,
    class_=AsyncSession,
    expire_on_commit=False,
)

# Base class for models
Base = declarative_base()


async def get_session() -> AsyncGenerator[AsyncSession, None]:
    """Get database session.

    Yields:
        AsyncSession for database operations.
    """
    async with async_session_factory() as session:
        try:
            yield session
            await session.commit()
        except Exception:
            await session.rollback()
            raise


async def create_tables() -> None:
    """Create database tables if they don't exist."""
    # Register every mapped model on the metadata
    import app.auth.models  # noqa: F401
    import app.catalog.models  # noqa: F401

    async with engine.begin() as conn:
        await conn.run_sync(Base.metadata.create_all)


async def drop_tables() -> None:
    """Drop all database tables."""
    async with engine.begin() as conn:
        await conn.run_sync(Base.metadata.drop_all)


async def check_connection() -> bool:
    """Check that the database answers a trivial query.

    Returns:
        True if the database is reachable.
    """
    async with engine.connect() as conn:
        await conn.execute(text("SELECT 1"))
    return True
