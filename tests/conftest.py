"""Shared fixtures: in-memory SQLite database, application and HTTP client.

Every test gets a fresh database. The app is built with test settings and
its session factory is pointed at the test engine, so no lifespan run is
needed.
"""

from unittest.mock import MagicMock

import pytest
from httpx import ASGITransport, AsyncClient
from sqlalchemy.ext.asyncio import AsyncSession, async_sessionmaker, create_async_engine
from sqlalchemy.pool import StaticPool

from todoapi.app import create_app
from todoapi.config import Settings
from todoapi.database import create_schema
from todoapi.logger import LoggerService


@pytest.fixture
def settings() -> Settings:
    return Settings(
        database_url="sqlite+aiosqlite:///:memory:",
        jwt_secret="test-access-secret",
        jwt_expiration_time=300,
        jwt_refresh_secret="test-refresh-secret",
        jwt_refresh_expiration_time=600,
        bcrypt_rounds=4,
    )


@pytest.fixture
def logger() -> MagicMock:
    return MagicMock(spec=LoggerService)


@pytest.fixture
async def engine():
    engine = create_async_engine(
        "sqlite+aiosqlite:///:memory:",
        connect_args={"check_same_thread": False},
        poolclass=StaticPool,
    )
    await create_schema(engine)
    yield engine
    await engine.dispose()


@pytest.fixture
def session_factory(engine):
    return async_sessionmaker(engine, class_=AsyncSession, expire_on_commit=False)


@pytest.fixture
async def db(session_factory):
    async with session_factory() as session:
        yield session


@pytest.fixture
def app(settings, session_factory):
    app = create_app(settings)
    app.state.session_factory = session_factory
    return app


@pytest.fixture
async def client(app):
    transport = ASGITransport(app=app)
    async with AsyncClient(transport=transport, base_url="http://test") as client:
        yield client
