"""
Pytest fixtures - isolated in-memory database, HTTP client, users and auth headers.
"""

import os

# Configure before the app (and its cached settings/engine) are imported.
os.environ.setdefault("DATABASE_URL", "sqlite+aiosqlite://")
os.environ.setdefault("AUTO_CREATE_TABLES", "false")
os.environ.setdefault("SECRET_KEY", "test-secret")

from typing import AsyncGenerator

import pytest
import pytest_asyncio
from httpx import ASGITransport, AsyncClient
from sqlalchemy.ext.asyncio import AsyncSession, async_sessionmaker, create_async_engine
from sqlalchemy.pool import StaticPool

from marketplace.core.security import create_access_token, hash_password
from marketplace.db.base import Base
from marketplace.db.models import Item, ItemCategory, ItemCondition, ItemStatus, User
from marketplace.db.session import get_db
from marketplace.main import app

TEST_DATABASE_URL = "sqlite+aiosqlite://"
PASSWORD = "password123"


@pytest_asyncio.fixture
async def engine():
    # One shared connection so every session sees the same in-memory database
    engine = create_async_engine(
        TEST_DATABASE_URL,
        connect_args={"check_same_thread": False},
        poolclass=StaticPool,
    )
    async with engine.begin() as conn:
        await conn.run_sync(Base.metadata.create_all)
    yield engine
    async with engine.begin() as conn:
        await conn.run_sync(Base.metadata.drop_all)
    await engine.dispose()


@pytest_asyncio.fixture
async def session(engine) -> AsyncGenerator[AsyncSession, None]:
    async_session = async_sessionmaker(engine, class_=AsyncSession, expire_on_commit=False)
    async with async_session() as s:
        yield s


@pytest_asyncio.fixture
async def client(session: AsyncSession):
    async def override_get_db():
        yield session

    app.dependency_overrides[get_db] = override_get_db
    async with AsyncClient(
        transport=ASGITransport(app=app),
        base_url="http://test",
    ) as ac:
        yield ac
    app.dependency_overrides.clear()


async def _create_user(session: AsyncSession, username: str, email: str) -> User:
    user = User(
        username=username,
        email=email,
        hashed_password=hash_password(PASSWORD),
        location="Vilnius",
        rating=4.5,
        review_count=2,
    )
    session.add(user)
    await session.flush()
    await session.refresh(user)
    return user


@pytest_asyncio.fixture
async def test_user(session: AsyncSession) -> User:
    return await _create_user(session, "seller", "seller@market.io")


@pytest_asyncio.fixture
async def other_user(session: AsyncSession) -> User:
    return await _create_user(session, "buyer", "buyer@market.io")


@pytest.fixture
def auth_headers(test_user: User) -> dict:
    return {"Authorization": f"Bearer {create_access_token(test_user.id)}"}


@pytest.fixture
def other_headers(other_user: User) -> dict:
    return {"Authorization": f"Bearer {create_access_token(other_user.id)}"}


@pytest.fixture
def item_payload() -> dict:
    return {
        "title": "Denim jacket",
        "description": "Barely worn, size M.",
        "price": 25.0,
        "category": "Clothing",
        "condition": "Very good",
        "brand": "Levi's",
        "images": ["https://img.market.io/jacket-1.jpg"],
    }


@pytest.fixture
def make_item(session: AsyncSession, test_user: User):
    """Insert an item directly, bypassing the API (e.g. to seed non-active listings)."""

    async def _make(**overrides) -> Item:
        fields = {
            "title": "Item",
            "description": "Description",
            "price": 10.0,
            "category": ItemCategory.CLOTHING,
            "condition": ItemCondition.GOOD,
            "images": ["https://img.market.io/a.jpg"],
            "seller_id": test_user.id,
            "status": ItemStatus.ACTIVE,
        }
        fields.update(overrides)
        item = Item(**fields)
        session.add(item)
        await session.flush()
        await session.refresh(item)
        return item

    return _make
