"""
Shared fixtures: an in-memory database per test, a ProfileStore bound to
it, and an HTTP client for the app with get_db pointed at the same engine.
"""

import pytest
import pytest_asyncio
from httpx import ASGITransport, AsyncClient
from sqlalchemy.ext.asyncio import AsyncSession, async_sessionmaker, create_async_engine
from sqlalchemy.pool import StaticPool

from devconnector import models  # noqa: F401
from devconnector.auth import create_access_token, hash_password
from devconnector.database import Base, enable_sqlite_foreign_keys, get_db
from devconnector.main import create_app
from devconnector.models import User
from devconnector.services import ProfileStore


@pytest_asyncio.fixture
async def engine():
    engine = create_async_engine(
        "sqlite+aiosqlite://",
        poolclass=StaticPool,
        connect_args={"check_same_thread": False},
    )
    enable_sqlite_foreign_keys(engine)
    async with engine.begin() as conn:
        await conn.run_sync(Base.metadata.create_all)
    yield engine
    await engine.dispose()


@pytest.fixture
def session_factory(engine):
    return async_sessionmaker(engine, class_=AsyncSession, expire_on_commit=False)


@pytest_asyncio.fixture
async def db(session_factory):
    async with session_factory() as session:
        yield session


@pytest.fixture
def store(db):
    return ProfileStore(db)


@pytest_asyncio.fixture
async def user(db) -> User:
    user = User(
        name="Ada Lovelace",
        email="ada@example.com",
        avatar="https://www.gravatar.com/avatar/ada",
        password=hash_password("analytical"),
    )
    db.add(user)
    await db.commit()
    await db.refresh(user)
    return user


@pytest.fixture
def app(session_factory):
    app = create_app()

    async def override_get_db():
        async with session_factory() as session:
            yield session

    app.dependency_overrides[get_db] = override_get_db
    return app


@pytest_asyncio.fixture
async def client(app):
    async with AsyncClient(transport=ASGITransport(app=app), base_url="http://test") as client:
        yield client


@pytest_asyncio.fixture
async def registered(client):
    """Register a user through the API; returns (user_id, headers)."""
    response = await client.post(
        "/api/users",
        json={"name": "Grace Hopper", "email": "grace@example.com", "password": "cobol1959"},
    )
    assert response.status_code == 200
    headers = {"Authorization": f"Bearer {response.json()['token']}"}

    me = await client.get("/api/auth", headers=headers)
    return me.json()["id"], headers


@pytest.fixture
def token_for():
    return create_access_token
