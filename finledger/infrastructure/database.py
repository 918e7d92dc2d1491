"""Database: async engine, per-request sessions, and storage error translation.

Invariants:
    - A session that raises is rolled back before the error propagates
    - SQLAlchemy failures surface as DatabaseError (503), never as driver exceptions;
      an IntegrityError (e.g. a concurrent duplicate email) is one of them
    - SQLite connections run with foreign keys on, so ON DELETE CASCADE on
      transactions.user_id holds under aiosqlite as it does under asyncpg
    - db_manager is None until init_db() runs in the app lifespan

Design Decisions:
    - expire_on_commit=False: services return ORM rows after commit and the API serializes
      them outside the session
    - Pool sizing applies to server databases only; SQLite gets SQLAlchemy's default pool
"""

import logging
from contextlib import asynccontextmanager
from typing import AsyncGenerator

from sqlalchemy import event, text
from sqlalchemy.exc import IntegrityError, OperationalError, SQLAlchemyError
from sqlalchemy.ext.asyncio import (
    AsyncEngine, AsyncSession, async_sessionmaker, create_async_engine,
)

from finledger.core.errors import DatabaseError

logger = logging.getLogger(__name__)


def enable_sqlite_foreign_keys(engine: AsyncEngine) -> None:
    """Run PRAGMA foreign_keys=ON on every new SQLite connection. No-op elsewhere."""
    if engine.dialect.name != "sqlite":
        return

    @event.listens_for(engine.sync_engine, "connect")
    def _on_connect(dbapi_connection, _record):
        cursor = dbapi_connection.cursor()
        cursor.execute("PRAGMA foreign_keys=ON")
        cursor.close()


def _translate(exc: SQLAlchemyError) -> DatabaseError:
    if isinstance(exc, IntegrityError):
        return DatabaseError("Conflicting write rejected by the database", "write")
    if isinstance(exc, OperationalError):
        return DatabaseError("Database unavailable", "connect")
    return DatabaseError("Database operation failed", "query")


class DatabaseSessionManager:
    """Owns the engine and hands out sessions that clean up after themselves."""

    def __init__(
        self, database_url: str, pool_size: int = 20, max_overflow: int = 10,
    ):
        engine_options: dict = {"pool_pre_ping": True}
        if not database_url.startswith("sqlite"):
            engine_options.update(
                pool_size=pool_size, max_overflow=max_overflow, pool_recycle=1800,
            )
        self.engine = create_async_engine(database_url, **engine_options)
        enable_sqlite_foreign_keys(self.engine)
        self._session_factory = async_sessionmaker(
            self.engine, class_=AsyncSession, expire_on_commit=False,
        )

    @asynccontextmanager
    async def session(self) -> AsyncGenerator[AsyncSession, None]:
        async with self._session_factory() as session:
            try:
                yield session
            except SQLAlchemyError as exc:
                await session.rollback()
                logger.error(
                    "Storage failure: %s", exc.__class__.__name__,
                    extra={"error_code": "DATABASE_ERROR"},
                )
                raise _translate(exc) from exc

    async def health_check(self) -> bool:
        """True when a trivial round-trip to the database succeeds."""
        try:
            async with self.engine.connect() as conn:
                await conn.execute(text("SELECT 1"))
        except (SQLAlchemyError, OSError) as exc:
            logger.warning("Readiness probe failed: %s", exc)
            return False
        return True

    async def dispose(self) -> None:
        await self.engine.dispose()


db_manager: DatabaseSessionManager | None = None


def init_db(database_url: str, **engine_options) -> DatabaseSessionManager:
    global db_manager
    db_manager = DatabaseSessionManager(database_url, **engine_options)
    return db_manager


async def get_db() -> AsyncGenerator[AsyncSession, None]:
    """FastAPI dependency: one session per request."""
    if db_manager is None:
        raise RuntimeError("init_db() has not been called")
    async with db_manager.session() as session:
        yield session
