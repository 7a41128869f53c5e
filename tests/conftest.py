import os
import sys
import uuid

# Ensure the marketplace package is on sys.path for imports during tests
sys.path.insert(0, os.path.dirname(os.path.dirname(os.path.abspath(__file__))))

# Settings are read at import time, so they must exist before importing the app
os.environ.setdefault("DATABASE_URL", "sqlite+aiosqlite:///:memory:")
os.environ.setdefault("JWT_SECRET_KEY", "test-secret-key")
os.environ["CREATE_TABLES_ON_STARTUP"] = "false"

import pytest_asyncio
from httpx import AsyncClient, ASGITransport
from sqlalchemy.ext.asyncio import AsyncSession, create_async_engine
from sqlalchemy.orm import sessionmaker
from sqlalchemy.pool import StaticPool

from marketplace.main import app
from marketplace.core.database import Base, get_db, session_scope
from marketplace.core.security import create_access_token
from marketplace.models.user import User, UserRoleEnum


@pytest_asyncio.fixture
async def engine():
    # one shared in-memory database per test
    test_engine = create_async_engine(
        "sqlite+aiosqlite://",
        connect_args={"check_same_thread": False},
        poolclass=StaticPool,
    )
    async with test_engine.begin() as conn:
        await conn.run_sync(Base.metadata.create_all)
    yield test_engine
    await test_engine.dispose()


@pytest_asyncio.fixture
async def session_factory(engine):
    return sessionmaker(bind=engine, class_=AsyncSession, expire_on_commit=False)


@pytest_asyncio.fixture
async def client(session_factory):
    async def override_get_db():
        # same rollback-on-error scope as production, bound to the test database
        async with session_scope(session_factory) as session:
            yield session

    app.dependency_overrides[get_db] = override_get_db
    async with AsyncClient(transport=ASGITransport(app=app), base_url="http://test") as ac:
        yield ac
    app.dependency_overrides.clear()


def auth_headers(user_id: str, role: str) -> dict:
    token = create_access_token({"sub": f"{user_id}@example.com", "user_id": user_id, "role": role})
    return {"Authorization": f"Bearer {token}"}


@pytest_asyncio.fixture
async def make_user(session_factory):
    """Insert a user directly and return (user_id, auth headers)."""
    async def _make(role: str = "freelancer", name: str = "Jane Doe", is_active: bool = True):
        user_id = str(uuid.uuid4())
        async with session_factory() as session:
            session.add(User(
                user_id=user_id,
                name=name,
                email=f"{user_id}@example.com",
                password_hash="not-a-real-hash",
                role=UserRoleEnum(role),
                is_active=is_active,
            ))
            await session.commit()
        return user_id, auth_headers(user_id, role)

    return _make
