"""Test fixtures for the Slotbook backend."""
from __future__ import annotations

import os
from collections.abc import AsyncIterator

import pytest
import pytest_asyncio
from httpx import ASGITransport, AsyncClient
from sqlalchemy.ext.asyncio import create_async_engine

os.environ.setdefault("DATABASE_URL", "sqlite+aiosqlite:///./test.db")

from slotbook.core.config import get_settings
from slotbook.db.base import Base
from slotbook.db.session import dispose_engine, get_sessionmaker
from slotbook.main import app
from slotbook.services import tenant_service


@pytest.fixture(scope="session")
def db_url(tmp_path_factory: pytest.TempPathFactory) -> str:
    """Provide a temporary SQLite database URL for the test session."""
    db_path = tmp_path_factory.mktemp("db") / "test.db"
    return f"sqlite+aiosqlite:///{db_path}"


@pytest_asyncio.fixture()
async def reset_database(db_url: str) -> AsyncIterator[None]:
    """Drop and recreate the database schema for an isolated test."""
    os.environ["DATABASE_URL"] = db_url
    get_settings.cache_clear()
    get_settings()

    await dispose_engine(db_url)
    engine = create_async_engine(db_url)
    async with engine.begin() as connection:
        await connection.run_sync(Base.metadata.drop_all)
        await connection.run_sync(Base.metadata.create_all)
    await engine.dispose()
    yield
    await dispose_engine(db_url)


@pytest_asyncio.fixture()
async def app_context(
    reset_database: None, db_url: str
) -> AsyncIterator[dict[str, object]]:
    """Yield an async client and a seeded tenant with default settings."""
    sessionmaker = get_sessionmaker(db_url)
    async with sessionmaker() as session:
        tenant = await tenant_service.create_tenant(
            session,
            slug="salon-bella",
            name="Salon Bella",
            email="hello@salon-bella.example",
        )
        context: dict[str, object] = {
            "tenant_id": tenant.id,
            "tenant_slug": tenant.slug,
        }

    transport = ASGITransport(app=app)
    async with AsyncClient(transport=transport, base_url="http://test") as client:
        context["client"] = client
        yield context
