"""Database manager: rollback and error translation at the session boundary."""

import pytest
from sqlalchemy import text

from finledger.core.errors import DatabaseError
from finledger.infrastructure.database import DatabaseSessionManager


@pytest.fixture
async def manager():
    mgr = DatabaseSessionManager("sqlite+aiosqlite:///:memory:")
    yield mgr
    await mgr.dispose()


async def test_health_check_succeeds(manager):
    assert await manager.health_check() is True


async def test_bad_sql_becomes_database_error(manager):
    with pytest.raises(DatabaseError) as exc_info:
        async with manager.session() as session:
            await session.execute(text("SELECT * FROM no_such_table"))
    assert exc_info.value.http_status == 503
    assert exc_info.value.code == "DATABASE_ERROR"


async def test_foreign_keys_are_enforced(manager):
    async with manager.session() as session:
        result = await session.execute(text("PRAGMA foreign_keys"))
        assert result.scalar() == 1
