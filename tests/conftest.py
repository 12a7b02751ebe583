"""Shared test fixtures.

The database and upload directory are pointed at a temporary location
before the application is imported, so settings pick them up.
"""

import asyncio
import os
import tempfile
from collections.abc import AsyncGenerator, Generator

_TEST_ROOT = tempfile.mkdtemp(prefix="catalog-tests-")
os.environ["DATABASE_URL"] = f"sqlite+aiosqlite:///{_TEST_ROOT}/test.db"
os.environ["UPLOAD_DIR"] = os.path.join(_TEST_ROOT, "uploads")
os.environ["CREATE_TABLES_ON_STARTUP"] = "false"
os.environ["JWT_SECRET"] = "test-secret"

import pytest  # noqa: E402
import pytest_asyncio  # noqa: E402
from sqlalchemy.ext.asyncio import AsyncSession  # noqa: E402

from app.infrastructure.database import (  # noqa: E402
    async_session_factory,
    create_tables,
    drop_tables,
)


async def _reset_database() -> None:
    await drop_tables()
    await create_tables()


@pytest.fixture(autouse=True)
def reset_database() -> Generator[None, None, None]:
    """Start every test with empty tables."""
    asyncio.run(_reset_database())
    yield


@pytest_asyncio.fixture
async def session() -> AsyncGenerator[AsyncSession, None]:
    """Provide a database session."""
    async with async_session_factory() as session:
        yield session


async def _insert(products: list) -> None:
    async with async_session_factory() as session:
        session.add_all(products)
        await session.commit()


@pytest.fixture
def insert_products():
    """Insert product rows from synchronous tests."""

    def insert(products: list) -> list:
        asyncio.run(_insert(products))
        return products

    return insert
