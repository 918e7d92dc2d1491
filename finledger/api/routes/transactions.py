"""Transaction Routes: CRUD and listing over the caller's ledger.

Invariants:
    - 404 when the id does not exist, 403 when it belongs to someone else
    - Listing query params: offset, limit (0 = default), sortField, sortOrder (asc|desc, any case)
"""

from fastapi import APIRouter, Depends, Query, status

from finledger.api.dependencies import get_current_principal, get_ledger_service
from finledger.core.access_policy import Principal
from finledger.core.pagination import DEFAULT_LIMIT, MAX_LIMIT
from finledger.schemas.pagination import ResultsMetadata
from finledger.schemas.transaction import (
    TransactionCreate, TransactionList, TransactionResponse, TransactionUpdate,
)
from finledger.services.ledger_service import LedgerService

router = APIRouter(prefix="/api/v1/transactions", tags=["transactions"])


@router.post(
    "", response_model=TransactionResponse,
    status_code=status.HTTP_201_CREATED,
)
async def create_transaction(
    body: TransactionCreate,
    principal: Principal = Depends(get_current_principal),
    ledger: LedgerService = Depends(get_ledger_service),
):
    return await ledger.create(body, principal)


@router.get("", response_model=TransactionList)
async def list_transactions(
    offset: int = Query(0, ge=0),
    limit: int = Query(DEFAULT_LIMIT, ge=0, le=MAX_LIMIT),
    sort_field: str | None = Query(None, alias="sortField", max_length=50),
    sort_order: str | None = Query(
        None, alias="sortOrder", pattern=r"^(?i:asc|desc)$",
    ),
    principal: Principal = Depends(get_current_principal),
    ledger: LedgerService = Depends(get_ledger_service),
):
    """List the caller's transactions with pagination."""
    page = await ledger.list(principal, offset, limit, sort_field, sort_order)
    return TransactionList(
        data=[TransactionResponse.model_validate(t) for t in page.items],
        meta=ResultsMetadata(**page.meta()),
    )


@router.get("/{transaction_id}", response_model=TransactionResponse)
async def get_transaction(
    transaction_id: int,
    principal: Principal = Depends(get_current_principal),
    ledger: LedgerService = Depends(get_ledger_service),
):
    return await ledger.get(transaction_id, principal)


@router.patch("/{transaction_id}", response_model=TransactionResponse)
async def update_transaction(
    transaction_id: int,
    body: TransactionUpdate,
    principal: Principal = Depends(get_current_principal),
    ledger: LedgerService = Depends(get_ledger_service),
):
    return await ledger.update(transaction_id, body, principal)


@router.delete("/{transaction_id}", response_model=TransactionResponse)
async def delete_transaction(
    transaction_id: int,
    principal: Principal = Depends(get_current_principal),
    ledger: LedgerService = Depends(get_ledger_service),
):
    """Delete and return the transaction as it was."""
    return await ledger.remove(transaction_id, principal)
