"""Task Store Connection — async engine, per-request sessions, readiness ping.

Invariants:
    - A session that fails mid-request is rolled back before it is closed
    - Connection-level failures (OperationalError, InterfaceError) surface as
      StoreUnavailableError (503); nothing is retried
    - Every other SQLAlchemy error is re-raised unchanged: repositories own the
      translation of constraint violations (duplicate email → EMAIL_TAKEN), and
      anything left over is a bug for the catch-all handler
    - Domain errors raised by handlers pass through untouched

Design Decisions:
    - Module-level store initialized by the lifespan, not at import
    - expire_on_commit=False: repositories build records from rows after commit
    - Pool sizing only for server databases; SQLite keeps its own pool class
"""

import logging
from contextlib import asynccontextmanager
from typing import AsyncGenerator

from sqlalchemy import text
from sqlalchemy.exc import InterfaceError, OperationalError, SQLAlchemyError
from sqlalchemy.ext.asyncio import (
    AsyncSession, async_sessionmaker, create_async_engine,
)

from taskshare.core.errors import StoreUnavailableError

logger = logging.getLogger(__name__)

_UNAVAILABLE = (OperationalError, InterfaceError)


def _engine_options(database_url: str, pool_size: int, max_overflow: int) -> dict:
    if database_url.startswith("sqlite"):
        return {}
    return {
        "pool_pre_ping": True,
        "pool_size": pool_size,
        "max_overflow": max_overflow,
        "pool_recycle": 3600,
    }


class TaskStore:
    """Owns the engine and hands out one AsyncSession per request."""

    def __init__(
        self, database_url: str, pool_size: int = 20, max_overflow: int = 10,
    ):
        self.engine = create_async_engine(
            database_url, **_engine_options(database_url, pool_size, max_overflow),
        )
        self._sessions = async_sessionmaker(
            self.engine, class_=AsyncSession, expire_on_commit=False,
        )

    @asynccontextmanager
    async def session(self) -> AsyncGenerator[AsyncSession, None]:
        async with self._sessions() as session:
            try:
                yield session
            except _UNAVAILABLE as e:
                await session.rollback()
                logger.error(f"Task store unreachable: {e}")
                raise StoreUnavailableError("execute") from e
            except SQLAlchemyError:
                await session.rollback()
                raise

    async def ping(self) -> bool:
        """True when a trivial query round-trips (readiness probe)."""
        try:
            async with self.engine.connect() as conn:
                await conn.execute(text("SELECT 1"))
        except SQLAlchemyError as e:
            logger.error(f"Task store ping failed: {e}")
            return False
        return True

    async def dispose(self) -> None:
        await self.engine.dispose()


store: TaskStore | None = None


def init_store(database_url: str, **kwargs) -> TaskStore:
    global store
    store = TaskStore(database_url, **kwargs)
    return store


async def get_db() -> AsyncGenerator[AsyncSession, None]:
    """FastAPI dependency: the request's session."""
    if store is None:
        raise RuntimeError("Task store not initialized")
    async with store.session() as session:
        yield session
