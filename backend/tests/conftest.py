"""
Record Shop Backend — Test Configuration (conftest.py)
========================================================

What:  Shared pytest fixtures for the entire test suite.
How:   pytest auto-discovers conftest.py and makes fixtures available to all tests.

Fixture Hierarchy:
    Function-scoped (created fresh for each test):
    ├── mock_db_session: Mock AsyncSession for service-level unit tests
    ├── fixed_clock:     Clock pinned to 2024-06-01 UTC
    ├── db_engine:       In-memory SQLite (aiosqlite) with foreign keys ON
    ├── db_session:      AsyncSession bound to db_engine
    ├── test_client:     HTTPX AsyncClient with get_db_session overridden
    └── auth_headers:    Cookie header carrying a valid session token
"""

import os

# Settings are read at import time; configure them before importing recordshop
os.environ["DATABASE_URL"] = "sqlite+aiosqlite:///:memory:"
os.environ["SECRET_KEY"] = "test-secret-not-real"
os.environ["LOG_LEVEL"] = "WARNING"

from datetime import datetime, timezone
from typing import AsyncGenerator
from unittest.mock import AsyncMock, MagicMock

import pytest
import pytest_asyncio
from httpx import ASGITransport, AsyncClient
from sqlalchemy import event
from sqlalchemy.ext.asyncio import AsyncSession, async_sessionmaker, create_async_engine
from sqlalchemy.pool import StaticPool

import recordshop.models  # noqa: F401
from recordshop.database import Base, get_db_session
from recordshop.security import create_access_token


# ══════════════════════════════════════════════════════════════════════════
# Function-Scoped Fixtures
# ══════════════════════════════════════════════════════════════════════════

@pytest.fixture
def mock_db_session():
    """
    Provides a mock async database session.

    Usage:
        async def test_list(mock_db_session):
            mock_db_session.execute.return_value.scalars.return_value.all.return_value = []
    """
    session = AsyncMock()
    session.execute = AsyncMock()
    session.flush = AsyncMock()
    session.commit = AsyncMock()
    session.rollback = AsyncMock()
    session.close = AsyncMock()
    session.add = MagicMock()
    return session


@pytest.fixture
def fixed_clock():
    return lambda: datetime(2024, 6, 1, 12, 0, tzinfo=timezone.utc)


@pytest_asyncio.fixture
async def db_engine():
    """
    In-memory SQLite database with the full schema.

    StaticPool keeps one connection, so every session (and every request in
    API tests) sees the same database. PRAGMA foreign_keys makes SQLite apply
    ON DELETE SET NULL like PostgreSQL does.
    """
    engine = create_async_engine("sqlite+aiosqlite://", poolclass=StaticPool)

    @event.listens_for(engine.sync_engine, "connect")
    def _enable_foreign_keys(dbapi_connection, connection_record):
        cursor = dbapi_connection.cursor()
        cursor.execute("PRAGMA foreign_keys=ON")
        cursor.close()

    async with engine.begin() as conn:
        await conn.run_sync(Base.metadata.create_all)

    yield engine

    await engine.dispose()


@pytest_asyncio.fixture
async def db_session(db_engine) -> AsyncGenerator[AsyncSession, None]:
    factory = async_sessionmaker(db_engine, class_=AsyncSession, expire_on_commit=False)
    async with factory() as session:
        yield session


@pytest_asyncio.fixture
async def test_client(db_engine):
    """
    HTTPX AsyncClient talking to the FastAPI app through ASGITransport.

    get_db_session is overridden with one bound to the test engine, keeping
    the commit-on-success / rollback-on-error behaviour of the real dependency.
    """
    from recordshop.main import app

    factory = async_sessionmaker(db_engine, class_=AsyncSession, expire_on_commit=False)

    async def override_get_db_session():
        async with factory() as session:
            try:
                yield session
                await session.commit()
            except Exception:
                await session.rollback()
                raise

    app.dependency_overrides[get_db_session] = override_get_db_session
    transport = ASGITransport(app=app)
    async with AsyncClient(transport=transport, base_url="http://test") as client:
        yield client
    app.dependency_overrides.clear()


@pytest.fixture
def auth_headers():
    return {"Cookie": f"token={create_access_token(user_id=1)}"}


@pytest.fixture
def ok_computer():
    return {
        "title": "OK Computer",
        "artist": "Radiohead",
        "genre": "Alt Rock",
        "style": "Art Rock",
        "release_year": 1997,
    }
