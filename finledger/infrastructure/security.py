"""Security Primitives: bcrypt password hashing and JWT access tokens.

Invariants:
    - Plaintext passwords never leave this module except as bcrypt input
    - Tokens carry sub=<user id as string> and username=<email>, and always expire
    - Any decode failure surfaces as InvalidTokenError (never a raw library exception)

Design Decisions:
    - bcrypt runs in a worker thread: hashing is CPU-bound and would block the event loop
    - Rounds configurable so tests can use the bcrypt minimum (4)
"""

import asyncio
from datetime import datetime, timedelta, timezone

import bcrypt
from jose import JWTError, jwt

from finledger.core.domain_types import UserId
from finledger.core.errors import InvalidTokenError


class BcryptPasswordHasher:
    """PasswordHasher backed by bcrypt with a per-hash random salt."""

    def __init__(self, rounds: int = 10):
        self.rounds = rounds

    async def hash(self, plaintext: str) -> str:
        return await asyncio.to_thread(self._hash_sync, plaintext)

    async def verify(self, plaintext: str, digest: str) -> bool:
        return await asyncio.to_thread(self._verify_sync, plaintext, digest)

    def _hash_sync(self, plaintext: str) -> str:
        salt = bcrypt.gensalt(rounds=self.rounds)
        return bcrypt.hashpw(plaintext.encode("utf-8"), salt).decode("utf-8")

    @staticmethod
    def _verify_sync(plaintext: str, digest: str) -> bool:
        try:
            return bcrypt.checkpw(plaintext.encode("utf-8"), digest.encode("utf-8"))
        except ValueError:
            # malformed digest or over-long password
            return False


class JoseTokenIssuer:
    """TokenIssuer producing HS256 JWTs via python-jose."""

    def __init__(
        self, secret_key: str, algorithm: str = "HS256", expire_minutes: int = 60 * 24,
    ):
        self.secret_key = secret_key
        self.algorithm = algorithm
        self.expire_minutes = expire_minutes

    def issue(self, user_id: int, username: str) -> str:
        expire = datetime.now(timezone.utc) + timedelta(minutes=self.expire_minutes)
        claims = {"sub": str(user_id), "username": username, "exp": expire}
        return jwt.encode(claims, self.secret_key, algorithm=self.algorithm)

    def decode_subject(self, token: str) -> UserId:
        try:
            payload = jwt.decode(token, self.secret_key, algorithms=[self.algorithm])
            return UserId(int(payload["sub"]))
        except (JWTError, KeyError, TypeError, ValueError):
            raise InvalidTokenError() from None
