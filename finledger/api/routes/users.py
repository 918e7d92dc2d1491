"""User Directory Routes: admin-only listing and lookup.

Invariants:
    - Non-admin principals get 403 ADMIN_REQUIRED
    - email filters exactly; search matches "first last" case-insensitively
"""

from fastapi import APIRouter, Depends, Query

from finledger.api.dependencies import get_current_principal, get_user_directory
from finledger.core.access_policy import Principal
from finledger.core.pagination import DEFAULT_LIMIT, MAX_LIMIT
from finledger.schemas.pagination import ResultsMetadata
from finledger.schemas.user import UserList, UserResponse
from finledger.services.user_directory import UserDirectory

router = APIRouter(prefix="/api/v1/users", tags=["users"])


@router.get("", response_model=UserList)
async def list_users(
    offset: int = Query(0, ge=0),
    limit: int = Query(DEFAULT_LIMIT, ge=0, le=MAX_LIMIT),
    sort_field: str | None = Query(None, alias="sortField", max_length=50),
    sort_order: str | None = Query(
        None, alias="sortOrder", pattern=r"^(?i:asc|desc)$",
    ),
    email: str | None = Query(None, max_length=255),
    search: str | None = Query(None, alias="searchQuery", max_length=200),
    principal: Principal = Depends(get_current_principal),
    directory: UserDirectory = Depends(get_user_directory),
):
    page = await directory.list(
        principal, offset, limit, sort_field, sort_order,
        email=email, search=search,
    )
    return UserList(
        data=[UserResponse.model_validate(u) for u in page.items],
        meta=ResultsMetadata(**page.meta()),
    )


@router.get("/{user_id}", response_model=UserResponse)
async def get_user(
    user_id: int,
    principal: Principal = Depends(get_current_principal),
    directory: UserDirectory = Depends(get_user_directory),
):
    return await directory.get(user_id, principal)
