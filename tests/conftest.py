"""
Pytest fixtures - isolated in-memory database, app per test, auth helpers and factories.
"""

import itertools
import os
from decimal import Decimal
from typing import AsyncGenerator

# The module-level app in aubazaar.main must not reach for Postgres or Redis
os.environ.setdefault("DATABASE_URL", "sqlite+aiosqlite://")
os.environ.setdefault("REDIS_URL", "")

import pytest
import pytest_asyncio
from httpx import ASGITransport, AsyncClient
from sqlalchemy.ext.asyncio import AsyncSession, async_sessionmaker, create_async_engine
from sqlalchemy.pool import StaticPool

from aubazaar.config import Settings
from aubazaar.core.security import create_access_token, hash_password
from aubazaar.db.base import Base
from aubazaar.db.models import Listing, User
from aubazaar.db.session import get_db
from aubazaar.main import create_app
from aubazaar.schemas.auth import TokenClaims

# In-memory SQLite shared by every connection of one engine; a fresh database per test
TEST_DATABASE_URL = "sqlite+aiosqlite://"
TEST_PASSWORD = "password123"
TEST_PASSWORD_HASH = hash_password(TEST_PASSWORD)


@pytest.fixture
def settings(tmp_path) -> Settings:
    return Settings(
        _env_file=None,
        database_url=TEST_DATABASE_URL,
        redis_url="",
        secret_key="test-secret",
        upload_dir=str(tmp_path / "uploads"),
    )


@pytest.fixture
def app(settings):
    return create_app(settings)


@pytest_asyncio.fixture
async def engine():
    engine = create_async_engine(TEST_DATABASE_URL, poolclass=StaticPool)
    async with engine.begin() as conn:
        await conn.run_sync(Base.metadata.create_all)
    yield engine
    await engine.dispose()


@pytest_asyncio.fixture
async def session(engine) -> AsyncGenerator[AsyncSession, None]:
    async_session = async_sessionmaker(engine, class_=AsyncSession, expire_on_commit=False)
    async with async_session() as s:
        yield s


@pytest_asyncio.fixture
async def client(app, session: AsyncSession):
    async def override_get_db():
        yield session

    app.dependency_overrides[get_db] = override_get_db
    async with AsyncClient(
        transport=ASGITransport(app=app),
        base_url="http://test",
    ) as ac:
        yield ac
    app.dependency_overrides.clear()


@pytest_asyncio.fixture
async def store_app(settings, tmp_path):
    """App on a file-backed store with the real request-scoped session (commit and rollback)."""
    app = create_app(
        settings.model_copy(update={"database_url": f"sqlite+aiosqlite:///{tmp_path / 'store.db'}"})
    )
    ctx = app.state.context
    async with ctx.engine.begin() as conn:
        await conn.run_sync(Base.metadata.create_all)
    yield app
    await ctx.aclose()


@pytest_asyncio.fixture
async def store_client(store_app):
    async with AsyncClient(
        transport=ASGITransport(app=store_app),
        base_url="http://test",
    ) as ac:
        yield ac


@pytest.fixture
def user_factory(session: AsyncSession):
    counter = itertools.count(1)

    async def make(**overrides) -> User:
        n = next(counter)
        data = {
            "email": f"user{n}@students.africa.edu",
            "hashed_password": TEST_PASSWORD_HASH,
            "full_name": f"User {n}",
            "role": "student",
            "email_verified": True,
        }
        data.update(overrides)
        user = User(**data)
        session.add(user)
        await session.flush()
        await session.refresh(user)
        return user

    return make


@pytest.fixture
def listing_factory(session: AsyncSession):
    counter = itertools.count(1)

    async def make(user: User, **overrides) -> Listing:
        n = next(counter)
        data = {
            "user_id": user.id,
            "title": f"Item {n}",
            "description": "Lightly used",
            "price": Decimal("10.00"),
            "category": "Electronics",
            "condition": "Good",
            "location": "Main campus",
            "status": "active",
            "images": [],
            "view_count": 0,
        }
        data.update(overrides)
        listing = Listing(**data)
        session.add(listing)
        await session.flush()
        await session.refresh(listing)
        return listing

    return make


@pytest_asyncio.fixture
async def test_user(user_factory) -> User:
    return await user_factory(email="test@students.africa.edu", full_name="Test User", phone="0771234567")


@pytest.fixture
def make_headers(settings):
    def make(user: User) -> dict:
        token = create_access_token(TokenClaims(id=user.id, email=user.email, role=user.role), settings)
        return {"Authorization": f"Bearer {token}"}

    return make


@pytest.fixture
def auth_headers(test_user: User, make_headers) -> dict:
    return make_headers(test_user)
