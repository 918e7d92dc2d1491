"""Boundary Protocols: contracts between the services and their collaborators.

Invariants:
    - Core NEVER imports from infrastructure; dependency arrows point inward only
    - All IO (store, hashing, token signing) is reached through Protocol types
    - Implementations provided by infrastructure via dependency injection

Design Decisions:
    - Protocol over ABC: structural subtyping, fakes in tests need no inheritance
    - Repositories return row objects typed as *Like protocols so services are not coupled
      to the ORM classes
    - sum_by_type groups on the discriminant column and leaves the signed arithmetic to the service
"""

from datetime import datetime
from decimal import Decimal
from typing import Any, Protocol

from finledger.core.domain_types import TransactionType, UserId
from finledger.core.pagination import PageRequest


class UserLike(Protocol):
    """Structural contract for a stored user."""
    id: int
    email: str
    password_hash: str
    first_name: str | None
    last_name: str | None
    is_admin: bool
    created_at: datetime
    last_seen_at: datetime | None


class TransactionLike(Protocol):
    """Structural contract for a stored transaction."""
    id: int
    user_id: int
    amount: Decimal
    category: str
    type: str
    reason: str | None
    date: datetime
    created_at: datetime


class UserRepository(Protocol):
    """Contract for user persistence."""
    async def get(self, user_id: int) -> UserLike | None: ...
    async def get_by_email(self, email: str) -> UserLike | None: ...
    async def add(self, **fields: Any) -> UserLike: ...
    async def save(self, user: UserLike) -> UserLike: ...
    async def delete(self, user_id: int) -> None: ...
    async def find_page(
        self, page: PageRequest, email: str | None = None, search: str | None = None,
    ) -> tuple[list[UserLike], int]: ...


class TransactionRepository(Protocol):
    """Contract for transaction persistence. Listing and aggregation are owner-filtered."""
    async def get(self, transaction_id: int) -> TransactionLike | None: ...
    async def add(self, **fields: Any) -> TransactionLike: ...
    async def save(self, transaction: TransactionLike) -> TransactionLike: ...
    async def delete(self, transaction_id: int) -> None: ...
    async def find_page(
        self, owner_id: UserId, page: PageRequest,
    ) -> tuple[list[TransactionLike], int]: ...
    async def sum_by_type(self, owner_id: UserId) -> dict[TransactionType, Decimal]: ...


class PasswordHasher(Protocol):
    """Salted one-way password hashing."""
    async def hash(self, plaintext: str) -> str: ...
    async def verify(self, plaintext: str, digest: str) -> bool: ...


class TokenIssuer(Protocol):
    """Signs and verifies access tokens carrying a user id."""
    def issue(self, user_id: int, username: str) -> str: ...
    def decode_subject(self, token: str) -> UserId: ...
