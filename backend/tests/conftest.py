"""Test configuration — in-memory database and shared fixtures."""
import os

# Must be set before progresspoint.core.database creates its engine
os.environ.setdefault("DATABASE_URL", "sqlite+aiosqlite:///:memory:")

from datetime import datetime, timezone

import pytest
import pytest_asyncio
from httpx import ASGITransport, AsyncClient
from sqlalchemy.ext.asyncio import async_sessionmaker, create_async_engine
from sqlalchemy.pool import StaticPool

from progresspoint.core.database import Base, get_db
from progresspoint.main import app
from progresspoint.models import Exercise, User


@pytest.fixture
def fixed_now():
    """Reference instant used by engine tests: 2025-03-10 12:00 UTC."""
    return datetime(2025, 3, 10, 12, 0, tzinfo=timezone.utc)


@pytest_asyncio.fixture
async def session_factory():
    engine = create_async_engine(
        "sqlite+aiosqlite:///:memory:",
        connect_args={"check_same_thread": False},
        poolclass=StaticPool,
    )
    async with engine.begin() as conn:
        await conn.run_sync(Base.metadata.create_all)

    yield async_sessionmaker(engine, expire_on_commit=False)

    await engine.dispose()


@pytest_asyncio.fixture
async def seeded(session_factory):
    """Two users and a small exercise catalog."""
    async with session_factory() as session:
        alice = User(email="alice@test.com", username="alice")
        bob = User(email="bob@test.com", username="bob")
        bench = Exercise(name="Bench Press", category="Chest")
        squat = Exercise(name="Squat", category="Legs")
        pull_up = Exercise(name="Pull Up", category="Back")
        session.add_all([alice, bob, bench, squat, pull_up])
        await session.commit()

    return {
        "alice": alice,
        "bob": bob,
        "bench": bench,
        "squat": squat,
        "pull_up": pull_up,
    }


@pytest_asyncio.fixture
async def client(session_factory):
    async def override_get_db():
        async with session_factory() as session:
            try:
                yield session
                await session.commit()
            except Exception:
                await session.rollback()
                raise

    app.dependency_overrides[get_db] = override_get_db
    async with AsyncClient(transport=ASGITransport(app=app), base_url="http://test") as c:
        yield c
    app.dependency_overrides.clear()


@pytest.fixture
def auth_headers():
    """Headers the auth gateway would forward for a user."""
    def _headers(user):
        return {"X-User-Id": str(user.id)}
    return _headers
