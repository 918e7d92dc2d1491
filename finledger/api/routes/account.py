"""Account Routes: the authenticated user's own profile, password, balance, and removal.

Invariants:
    - Every route acts on the principal resolved from the bearer token, never on a path id
    - DELETE requires the current password in the body before anything is removed
"""

from fastapi import APIRouter, Depends, Response, status

from finledger.api.dependencies import (
    get_account_service, get_current_principal, get_ledger_service,
)
from finledger.core.access_policy import Principal
from finledger.schemas.transaction import AccountBalance
from finledger.schemas.user import (
    AccountDeletion, PasswordUpdate, ProfileUpdate, UserResponse,
)
from finledger.services.account_service import AccountService
from finledger.services.ledger_service import LedgerService

router = APIRouter(prefix="/api/v1/account", tags=["account"])


@router.get("", response_model=UserResponse)
async def get_profile(
    principal: Principal = Depends(get_current_principal),
    accounts: AccountService = Depends(get_account_service),
):
    return await accounts.get_profile(principal.id)


@router.get("/balance", response_model=AccountBalance)
async def get_account_balance(
    principal: Principal = Depends(get_current_principal),
    ledger: LedgerService = Depends(get_ledger_service),
):
    """Credits minus debits over all of the caller's transactions."""
    return AccountBalance(balance=await ledger.get_account_balance(principal))


@router.patch("/profile", response_model=UserResponse)
async def update_profile(
    body: ProfileUpdate,
    principal: Principal = Depends(get_current_principal),
    accounts: AccountService = Depends(get_account_service),
):
    return await accounts.update_profile(principal.id, body)


@router.patch("/password", status_code=status.HTTP_204_NO_CONTENT)
async def update_password(
    body: PasswordUpdate,
    principal: Principal = Depends(get_current_principal),
    accounts: AccountService = Depends(get_account_service),
):
    await accounts.update_password(body.current_password, body.new_password, principal)
    return Response(status_code=status.HTTP_204_NO_CONTENT)


@router.delete("", response_model=UserResponse)
async def remove_account(
    body: AccountDeletion,
    principal: Principal = Depends(get_current_principal),
    accounts: AccountService = Depends(get_account_service),
):
    """Delete the caller's account (and, via FK cascade, its transactions)."""
    await accounts.verify_password(principal.id, body.password)
    return await accounts.remove_account(principal.id)
