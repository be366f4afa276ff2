import os
import asyncio
import pytest
import pytest_asyncio
from httpx import AsyncClient, ASGITransport
from sqlalchemy.ext.asyncio import AsyncSession
from typing import AsyncGenerator

# Configure database for tests via settings module rather than hardcoding directly.
# Allow overriding with TEST_DATABASE_URL; fall back to a local sqlite file.
test_db_url = os.environ.get("TEST_DATABASE_URL", "sqlite+aiosqlite:///./tests/test.db")
os.environ["DATABASE_URL"] = test_db_url

from usermanagement.core import config as _config  # noqa: E402
_config.get_settings.cache_clear()  # ensure new env vars are picked up # type: ignore[attr-defined]
_settings = _config.get_settings()

from usermanagement.api.main import app  # noqa: E402
from usermanagement.db.session import AsyncSessionLocal, engine, Base  # noqa: E402
from sqlalchemy import text  # noqa: E402


async def _create_schema():
    async with engine.begin() as conn:
        await conn.run_sync(Base.metadata.drop_all)
        await conn.run_sync(Base.metadata.create_all)


async def _drop_schema():
    async with engine.begin() as conn:
        await conn.run_sync(Base.metadata.drop_all)


@pytest.fixture(autouse=True, scope="session")
def prepare_db():
    # run on a throwaway loop; each test gets its own loop and connections
    asyncio.run(_create_schema())
    yield
    asyncio.run(_drop_schema())

@pytest.fixture(scope="session")
def settings():
    """Expose application settings to tests if needed."""
    return _settings

@pytest_asyncio.fixture()
async def db_session() -> AsyncGenerator[AsyncSession, None]:
    async with AsyncSessionLocal() as session:  # type: ignore
        yield session

@pytest_asyncio.fixture()
async def client():
    # httpx >=0.28 removed the 'app=' shortcut; use ASGITransport explicitly
    transport = ASGITransport(app=app)
    async with AsyncClient(transport=transport, base_url="http://test") as c:
        yield c

@pytest_asyncio.fixture(autouse=True)
async def _clear_tables():
    """Ensure isolated tests by clearing the users table before each test.

    On sqlite the table is recreated instead so AUTOINCREMENT ids start at 1
    again for every test.
    """
    if _settings.is_sqlite:
        await _create_schema()
    else:
        async with AsyncSessionLocal() as session:  # type: ignore
            await session.execute(text("TRUNCATE TABLE users RESTART IDENTITY"))
            await session.commit()
    yield


def user_payload(**overrides):
    """Valid create/update body in wire (camelCase) form."""
    body = {
        "userName": "johndoe",
        "firstName": "John",
        "lastName": "Doe",
        "email": "john@doe.com",
        "userStatus": "A",
        "department": "IT",
    }
    body.update(overrides)
    return body


@pytest.fixture()
def make_payload():
    return user_payload
