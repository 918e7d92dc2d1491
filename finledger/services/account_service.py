"""Account Service: profile, password, and account lifecycle for one user at a time.

Invariants:
    - Email uniqueness is pre-checked on register and on profile update (EmailTakenError);
      the unique index on users.email closes the remaining race
    - Password changes and account deletion require the current password
    - remove_account deletes the user row; the FK cascade removes the user's transactions

Design Decisions:
    - Updating the email to the value the user already has is not a collision
    - No session invalidation on password change: access tokens are stateless and expire
      on their own (access_token_expire_minutes)
"""

import logging
from datetime import datetime, timezone

from finledger.core.access_policy import Principal
from finledger.core.errors import (
    EmailTakenError, ErrorContext, IncorrectPasswordError, ResourceNotFoundError,
)
from finledger.core.repository_protocols import PasswordHasher, UserLike, UserRepository
from finledger.schemas.user import ProfileUpdate, UserCreate

logger = logging.getLogger(__name__)


class AccountService:
    """Self-service operations on a single user record."""

    def __init__(self, users: UserRepository, hasher: PasswordHasher):
        self.users = users
        self.hasher = hasher

    async def register(self, data: UserCreate) -> UserLike:
        """Create a user after checking the email is free."""
        if await self.users.get_by_email(data.email) is not None:
            raise EmailTakenError(data.email)
        password_hash = await self.hasher.hash(data.password)
        user = await self.users.add(
            email=data.email,
            password_hash=password_hash,
            first_name=data.first_name,
            last_name=data.last_name,
        )
        logger.info("User registered", extra={"user_id": user.id})
        return user

    async def get_profile(self, user_id: int) -> UserLike:
        user = await self.users.get(user_id)
        if user is None:
            raise ResourceNotFoundError("User", user_id)
        return user

    async def update_profile(self, user_id: int, patch: ProfileUpdate) -> UserLike:
        """Apply the profile fields present in the patch."""
        user = await self.get_profile(user_id)
        changes = patch.changes()
        if "email" in changes:
            holder = await self.users.get_by_email(changes["email"])
            if holder is not None and holder.id != user.id:
                raise EmailTakenError(
                    changes["email"], ErrorContext(user_id=user_id),
                )
        for field, value in changes.items():
            setattr(user, field, value)
        return await self.users.save(user)

    async def update_password(
        self, current_password: str, new_password: str, principal: Principal,
    ) -> None:
        user = await self.get_profile(principal.id)
        if not await self.hasher.verify(current_password, user.password_hash):
            raise IncorrectPasswordError(ErrorContext(user_id=principal.id))
        user.password_hash = await self.hasher.hash(new_password)
        await self.users.save(user)
        logger.info("Password changed", extra={"user_id": principal.id})

    async def verify_password(self, user_id: int, password: str) -> None:
        """Guard for destructive actions. No side effects."""
        user = await self.get_profile(user_id)
        if not await self.hasher.verify(password, user.password_hash):
            raise IncorrectPasswordError(ErrorContext(user_id=user_id))

    async def remove_account(self, user_id: int) -> UserLike:
        """Hard-delete the user and return the record as it was."""
        user = await self.get_profile(user_id)
        await self.users.delete(user.id)
        logger.info("Account removed", extra={"user_id": user_id})
        return user

    async def touch_last_seen(self, user: UserLike) -> UserLike:
        user.last_seen_at = datetime.now(timezone.utc)
        return await self.users.save(user)
