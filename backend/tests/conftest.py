"""
Pytest fixtures.

The app runs against a fresh in-memory SQLite database per test; the
session dependency is overridden so requests and direct repository calls
see the same data.
"""

import os

os.environ["DATABASE_URL"] = "sqlite+aiosqlite://"

from collections.abc import AsyncGenerator  # noqa: E402
from types import SimpleNamespace  # noqa: E402

import pytest  # noqa: E402
import pytest_asyncio  # noqa: E402
from httpx import ASGITransport, AsyncClient  # noqa: E402
from sqlalchemy.ext.asyncio import AsyncSession, async_sessionmaker, create_async_engine  # noqa: E402
from sqlalchemy.pool import StaticPool  # noqa: E402

import db.inventory  # noqa: E402,F401
from db.database import Base, get_async_session  # noqa: E402
from main import app  # noqa: E402


@pytest_asyncio.fixture
async def engine():
    engine = create_async_engine(
        "sqlite+aiosqlite://",
        poolclass=StaticPool,
        connect_args={"check_same_thread": False},
    )
    async with engine.begin() as conn:
        await conn.run_sync(Base.metadata.create_all)
    yield engine
    await engine.dispose()


@pytest.fixture
def session_maker(engine) -> async_sessionmaker:
    return async_sessionmaker(engine, expire_on_commit=False)


@pytest_asyncio.fixture
async def db(session_maker) -> AsyncGenerator[AsyncSession, None]:
    async with session_maker() as session:
        yield session


@pytest_asyncio.fixture
async def client(session_maker) -> AsyncGenerator[AsyncClient, None]:
    async def _override_session():
        async with session_maker() as session:
            yield session

    app.dependency_overrides[get_async_session] = _override_session
    async with AsyncClient(transport=ASGITransport(app=app), base_url="http://test") as c:
        yield c
    app.dependency_overrides.clear()


@pytest.fixture
def make_event():
    """Build a lightweight event record for the pure ledger functions."""
    def _make(type_, units, created_at):
        return SimpleNamespace(type=type_, units=units, created_at=created_at)
    return _make


@pytest.fixture
def make_item():
    def _make(name, current_units, restock_point, deleted=False):
        return SimpleNamespace(
            name=name,
            current_units=current_units,
            restock_point=restock_point,
            deleted=deleted,
        )
    return _make
