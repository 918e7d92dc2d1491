"""Request Dependencies: per-request wiring of repositories, services, and the principal.

Invariants:
    - One AsyncSession per request (get_db is cached by FastAPI within a request)
    - Protected routes depend on get_current_principal; a missing or bad token never
      reaches a service

Design Decisions:
    - HTTPBearer(auto_error=False): missing credentials raise our own
      AuthenticationRequiredError so the error envelope stays uniform
    - Hasher and token issuer built from cached settings, overridable in tests
"""

from fastapi import Depends
from fastapi.security import HTTPAuthorizationCredentials, HTTPBearer
from sqlalchemy.ext.asyncio import AsyncSession

from finledger.config import get_settings
from finledger.core.access_policy import Principal
from finledger.core.errors import AuthenticationRequiredError
from finledger.core.repository_protocols import PasswordHasher, TokenIssuer
from finledger.infrastructure.database import get_db
from finledger.infrastructure.repositories import (
    SqlTransactionRepository, SqlUserRepository,
)
from finledger.infrastructure.security import BcryptPasswordHasher, JoseTokenIssuer
from finledger.services.account_service import AccountService
from finledger.services.auth_service import AuthService
from finledger.services.ledger_service import LedgerService
from finledger.services.user_directory import UserDirectory

bearer_scheme = HTTPBearer(auto_error=False)


def get_password_hasher() -> PasswordHasher:
    return BcryptPasswordHasher(rounds=get_settings().password_hash_rounds)


def get_token_issuer() -> TokenIssuer:
    settings = get_settings()
    return JoseTokenIssuer(
        settings.jwt_secret_key,
        algorithm=settings.jwt_algorithm,
        expire_minutes=settings.access_token_expire_minutes,
    )


def get_auth_service(
    db: AsyncSession = Depends(get_db),
    hasher: PasswordHasher = Depends(get_password_hasher),
    tokens: TokenIssuer = Depends(get_token_issuer),
) -> AuthService:
    return AuthService(SqlUserRepository(db), hasher, tokens)


def get_account_service(
    db: AsyncSession = Depends(get_db),
    hasher: PasswordHasher = Depends(get_password_hasher),
) -> AccountService:
    return AccountService(SqlUserRepository(db), hasher)


def get_ledger_service(db: AsyncSession = Depends(get_db)) -> LedgerService:
    return LedgerService(SqlTransactionRepository(db))


def get_user_directory(db: AsyncSession = Depends(get_db)) -> UserDirectory:
    return UserDirectory(SqlUserRepository(db))


async def get_current_principal(
    credentials: HTTPAuthorizationCredentials | None = Depends(bearer_scheme),
    auth: AuthService = Depends(get_auth_service),
) -> Principal:
    """Resolve the bearer token on the request into a Principal."""
    if credentials is None:
        raise AuthenticationRequiredError()
    return await auth.resolve_principal(credentials.credentials)
