"""
Shared fixtures following kkb_fastapi pattern.

Database fixtures are opt-in. Tests that request ``test_async_client``,
``test_db_session`` or a factory run against the Postgres database from
test.toml, with every table dropped and recreated per test. The analytics
client reads from an in-memory store and needs no database.
"""
import logging
import uuid

import pytest
import pytest_asyncio
from httpx import ASGITransport, AsyncClient
from jose import jwt
from sqlalchemy.ext.asyncio import create_async_engine
from sqlalchemy.pool import NullPool

from app.core.config import ConfigFile, get_config
from app.core.dependencies import get_reading_store
from app.create_app import get_app
from app.database import Base
from app.database.base import get_db_url, get_engine_kw
from app.database.session_manager.db_session import Database
from app.test.factory.in_memory_store import InMemoryReadingStore

logging.basicConfig(
    level=logging.INFO, format="%(asctime)s - %(name)s - %(levelname)s - %(message)s"
)

BASE_URL = "http://testserver"


def make_client(app, headers: dict) -> AsyncClient:
    return AsyncClient(
        transport=ASGITransport(app=app),
        base_url=BASE_URL,
        headers=headers,
        follow_redirects=True,
    )


@pytest.fixture(scope="session")
def test_config():
    return get_config(ConfigFile.TEST)


@pytest.fixture
def auth_user_id():
    """Subject of the access token sent by the test clients."""
    return uuid.uuid4()


@pytest.fixture
def auth_headers(test_config, auth_user_id):
    auth = test_config.section("auth")
    token = jwt.encode(
        {"sub": str(auth_user_id), "email": f"{auth_user_id.hex[:8]}@example.com"},
        auth["jwt_secret"],
        algorithm=auth["jwt_algorithm"],
    )
    return {"Authorization": f"Bearer {token}"}


@pytest_asyncio.fixture
async def db_cleanup(test_config):
    """Recreate all tables before the test and drop them after it."""
    engine = create_async_engine(get_db_url(test_config), poolclass=NullPool)

    async with engine.begin() as conn:
        await conn.run_sync(Base.metadata.drop_all)
        await conn.run_sync(Base.metadata.create_all)

    yield

    async with engine.begin() as conn:
        await conn.run_sync(Base.metadata.drop_all)
    await engine.dispose()


@pytest_asyncio.fixture
async def initialize_db_session(test_config, db_cleanup):
    """Point the Database singleton, and so the factories, at the test database."""
    Database.init(get_db_url(test_config), engine_kw=get_engine_kw(test_config))

    yield

    await Database.dispose()


@pytest_asyncio.fixture
async def test_app(test_config):
    app = get_app(ConfigFile.TEST)

    yield app

    app.dependency_overrides.clear()


@pytest_asyncio.fixture
async def test_async_client(test_app, initialize_db_session, auth_headers):
    """Authenticated client backed by the test database."""
    async with make_client(test_app, auth_headers) as client:
        yield client


@pytest.fixture
def in_memory_store():
    return InMemoryReadingStore()


@pytest_asyncio.fixture
async def analytics_client(test_app, in_memory_store, auth_headers):
    """Authenticated client whose analytics read from ``in_memory_store``."""
    test_app.dependency_overrides[get_reading_store] = lambda: in_memory_store

    async with make_client(test_app, auth_headers) as client:
        yield client


@pytest_asyncio.fixture
async def test_db_session(initialize_db_session):
    async with Database() as session:
        yield session
