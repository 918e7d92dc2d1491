"""Auth Service: signup, login, and bearer-token principal resolution.

Invariants:
    - Login reports the same InvalidCredentialsError for unknown email and wrong password
    - Signup with a registered email raises EmailTakenError and creates nothing
    - Resolving a principal touches the user's last_seen_at
"""

import logging

from finledger.core.access_policy import Principal
from finledger.core.domain_types import UserId
from finledger.core.errors import InvalidCredentialsError, InvalidTokenError
from finledger.core.repository_protocols import (
    PasswordHasher, TokenIssuer, UserLike, UserRepository,
)
from finledger.schemas.user import LoginRequest, UserCreate
from finledger.services.account_service import AccountService

logger = logging.getLogger(__name__)


class AuthService:
    """Credential checks and token issuance on top of AccountService."""

    def __init__(
        self, users: UserRepository, hasher: PasswordHasher, tokens: TokenIssuer,
    ):
        self.users = users
        self.hasher = hasher
        self.tokens = tokens
        self.accounts = AccountService(users, hasher)

    async def sign_up(self, data: UserCreate) -> tuple[str, UserLike]:
        user = await self.accounts.register(data)
        return self.tokens.issue(user.id, user.email), user

    async def login(self, data: LoginRequest) -> tuple[str, UserLike]:
        user = await self.users.get_by_email(data.email)
        if user is None:
            raise InvalidCredentialsError()
        if not await self.hasher.verify(data.password, user.password_hash):
            logger.warning("Failed login", extra={"user_id": user.id})
            raise InvalidCredentialsError()
        return self.tokens.issue(user.id, user.email), user

    async def resolve_principal(self, token: str) -> Principal:
        """Turn a bearer token into a Principal, or raise InvalidTokenError."""
        user_id = self.tokens.decode_subject(token)
        user = await self.users.get(user_id)
        if user is None:
            raise InvalidTokenError()
        await self.accounts.touch_last_seen(user)
        return Principal(id=UserId(user.id), is_admin=user.is_admin)
