"""Fixtures for service and route tests: one throwaway SQLite database per test.

Invariants:
    - Each test starts from an empty schema built from Base.metadata
    - Connections run PRAGMA foreign_keys=ON; without it SQLite ignores
      ON DELETE CASCADE and account removal would leave orphaned transactions
    - Route tests and direct DB assertions share the same engine, so a row written
      through the API is visible to test_db

Design Decisions:
    - The readiness probe reads database.db_manager rather than get_db, so overriding the
      dependency alone is not enough; `client` also swaps in a manager bound to the test engine
    - bcrypt runs at its minimum cost here (rounds=4, and PASSWORD_HASH_ROUNDS=4 for the app)
"""

import pytest
from httpx import ASGITransport, AsyncClient
from sqlalchemy.ext.asyncio import async_sessionmaker, create_async_engine

import finledger.infrastructure.database as db_module
import finledger.models  # noqa: F401
from finledger.core.access_policy import Principal
from finledger.db.base import Base
from finledger.infrastructure.database import (
    DatabaseSessionManager, enable_sqlite_foreign_keys, get_db,
)
from finledger.infrastructure.repositories import (
    SqlTransactionRepository, SqlUserRepository,
)
from finledger.infrastructure.security import BcryptPasswordHasher, JoseTokenIssuer
from finledger.main import app
from finledger.schemas.user import UserCreate
from finledger.services.account_service import AccountService
from finledger.services.auth_service import AuthService
from finledger.services.ledger_service import LedgerService
from finledger.services.user_directory import UserDirectory


@pytest.fixture
async def test_engine():
    engine = create_async_engine("sqlite+aiosqlite:///:memory:")
    enable_sqlite_foreign_keys(engine)
    async with engine.begin() as conn:
        await conn.run_sync(Base.metadata.create_all)
    yield engine
    await engine.dispose()


@pytest.fixture
def test_session_factory(test_engine):
    # same session options as the app: rows stay readable after commit
    return async_sessionmaker(test_engine, expire_on_commit=False)


@pytest.fixture
async def test_db(test_session_factory):
    async with test_session_factory() as session:
        yield session


@pytest.fixture
def hasher():
    return BcryptPasswordHasher(rounds=4)


@pytest.fixture
def tokens():
    return JoseTokenIssuer("service-test-secret", expire_minutes=5)


@pytest.fixture
def user_repo(test_db):
    return SqlUserRepository(test_db)


@pytest.fixture
def transaction_repo(test_db):
    return SqlTransactionRepository(test_db)


@pytest.fixture
def ledger(transaction_repo):
    return LedgerService(transaction_repo)


@pytest.fixture
def accounts(user_repo, hasher):
    return AccountService(user_repo, hasher)


@pytest.fixture
def auth(user_repo, hasher, tokens):
    return AuthService(user_repo, hasher, tokens)


@pytest.fixture
def directory(user_repo):
    return UserDirectory(user_repo)


@pytest.fixture
async def alice(accounts):
    return await accounts.register(UserCreate(
        email="alice@example.com", password="alice-password",
        first_name="Alice", last_name="Liddell",
    ))


@pytest.fixture
async def bob(accounts):
    return await accounts.register(UserCreate(
        email="bob@example.com", password="bob-password",
        first_name="Bob", last_name="Builder",
    ))


@pytest.fixture
def as_principal():
    """Build the Principal a request authenticated as this user would carry."""
    def _as_principal(user) -> Principal:
        return Principal(id=user.id, is_admin=user.is_admin)
    return _as_principal


@pytest.fixture
async def client(test_engine, test_session_factory, monkeypatch):
    """HTTP client against the app, with every request using the test database."""
    async def session_per_request():
        async with test_session_factory() as session:
            yield session

    manager = DatabaseSessionManager.__new__(DatabaseSessionManager)
    manager.engine = test_engine
    manager._session_factory = test_session_factory
    monkeypatch.setattr(db_module, "db_manager", manager)
    app.dependency_overrides[get_db] = session_per_request

    transport = ASGITransport(app=app)
    try:
        async with AsyncClient(transport=transport, base_url="http://finledger.test") as http:
            yield http
    finally:
        app.dependency_overrides.pop(get_db, None)


@pytest.fixture
def signup(client):
    """Sign up through the API; the helper returns {"headers": ..., "user": ...}."""
    async def _signup(email: str, password: str = "s3cret-pass", **profile) -> dict:
        res = await client.post(
            "/api/v1/auth/signup",
            json={"email": email, "password": password, **profile},
        )
        assert res.status_code == 201, res.text
        body = res.json()
        return {
            "headers": {"Authorization": f"Bearer {body['access_token']}"},
            "user": body["user"],
        }
    return _signup
