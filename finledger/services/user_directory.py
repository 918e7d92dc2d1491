"""User Directory: administrator listing and lookup of users.

Invariants:
    - Every call requires an admin principal (AdminRequiredError otherwise)
    - Listing shares offset/limit/sort resolution with the transaction ledger
"""

from finledger.core.access_policy import Principal, require_admin
from finledger.core.domain_types import SortOrder
from finledger.core.errors import ResourceNotFoundError
from finledger.core.pagination import USER_SORT_FIELDS, Page, build_page_request
from finledger.core.repository_protocols import UserLike, UserRepository


class UserDirectory:

    def __init__(self, users: UserRepository):
        self.users = users

    async def list(
        self,
        principal: Principal,
        offset: int | None = None,
        limit: int | None = None,
        sort_field: str | None = None,
        sort_order: SortOrder | str | None = None,
        email: str | None = None,
        search: str | None = None,
    ) -> Page[UserLike]:
        """Users matching an exact email and/or a "first last" name substring."""
        require_admin(principal)
        page = build_page_request(USER_SORT_FIELDS, offset, limit, sort_field, sort_order)
        items, total = await self.users.find_page(page, email=email, search=search)
        return Page(items=items, total=total, offset=page.offset, limit=page.limit)

    async def get(self, user_id: int, principal: Principal) -> UserLike:
        require_admin(principal)
        user = await self.users.get(user_id)
        if user is None:
            raise ResourceNotFoundError("User", user_id)
        return user
