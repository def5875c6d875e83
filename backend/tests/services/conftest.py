"""Service test fixtures — async DB, request context and FastAPI test client.

Invariants:
    - Every test gets a fresh in-memory SQLite database
    - get_db dependency overridden to use the test engine
    - ctx is a RequestContext over the same test DB, acting user unset

Design Decisions:
    - SQLite in-memory with StaticPool: one shared connection, so the
      client's sessions and test_db see the same data
"""

import pytest
from sqlalchemy.ext.asyncio import (
    AsyncSession, create_async_engine, async_sessionmaker,
)
from sqlalchemy.pool import StaticPool
from httpx import ASGITransport, AsyncClient

from taskshare.core.token_codec import TokenCodec
from taskshare.db.base import Base
from taskshare.infrastructure.database import get_db
from taskshare.infrastructure.repositories import (
    SqlTaskListRepository, SqlToDoRepository, SqlUserRepository,
)
from taskshare.main import app
from taskshare.schemas.operations import SignUpArguments
from taskshare.services.handle_auth import AuthHandlers
from taskshare.services.request_context import RequestContext
import taskshare.models  # noqa: F401

SECRET = "test-secret-for-tokens-only"


@pytest.fixture
async def test_engine():
    engine = create_async_engine(
        "sqlite+aiosqlite:///:memory:", echo=False, poolclass=StaticPool,
    )
    async with engine.begin() as conn:
        await conn.run_sync(Base.metadata.create_all)
    yield engine
    async with engine.begin() as conn:
        await conn.run_sync(Base.metadata.drop_all)
    await engine.dispose()


@pytest.fixture
async def test_session_factory(test_engine):
    return async_sessionmaker(
        test_engine, class_=AsyncSession, expire_on_commit=False,
    )


@pytest.fixture
async def test_db(test_session_factory):
    async with test_session_factory() as session:
        yield session


@pytest.fixture
def codec():
    return TokenCodec(SECRET)


@pytest.fixture
def ctx(test_db, codec):
    """RequestContext over the test DB; set ctx.acting_user per test."""
    return RequestContext(
        users=SqlUserRepository(test_db),
        task_lists=SqlTaskListRepository(test_db),
        todos=SqlToDoRepository(test_db),
        codec=codec,
    )


@pytest.fixture
def sign_up(ctx):
    """Create a user through AuthHandlers; returns the UserRecord."""
    async def _sign_up(email: str, name: str, password: str = "pw"):
        result = await AuthHandlers(ctx).sign_up(
            SignUpArguments(email=email, password=password, name=name),
        )
        return result.user
    return _sign_up


@pytest.fixture
async def client(test_session_factory):
    """FastAPI test client with DB dependency overridden."""
    async def override_get_db():
        async with test_session_factory() as session:
            yield session

    app.dependency_overrides[get_db] = override_get_db

    async with AsyncClient(
        transport=ASGITransport(app=app), base_url="http://test",
    ) as c:
        yield c

    app.dependency_overrides.clear()
