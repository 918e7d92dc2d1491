"""Ledger Service: transaction CRUD and the per-user signed balance.

Invariants:
    - type is always recomputed from category (create and every update)
    - get/update/remove check existence first (ResourceNotFoundError), then ownership
      (UnauthorizedAccessError)
    - Listings and balances only ever see the principal's own rows
    - Balance over an empty ledger is Decimal("0"), never None

Design Decisions:
    - Patch applies exactly the fields the caller sent (TransactionUpdate.changes()):
      omitted means unchanged, null/"" reason clears it
    - Existence-before-ownership ordering kept: callers can tell "missing" from "not yours"
      (ids are sequential integers, so existence leaks little beyond what ids already show)
    - remove() returns the pre-deletion snapshot (attributes stay loaded: expire_on_commit=False)
"""

import logging
from datetime import datetime, timezone
from decimal import Decimal
from enum import Enum

from finledger.core.access_policy import Principal, authorize
from finledger.core.classification import classify_transaction
from finledger.core.domain_types import SortOrder, TransactionType
from finledger.core.errors import ErrorContext, ResourceNotFoundError
from finledger.core.pagination import (
    TRANSACTION_SORT_FIELDS, Page, build_page_request,
)
from finledger.core.repository_protocols import TransactionLike, TransactionRepository
from finledger.schemas.transaction import TransactionCreate, TransactionUpdate

logger = logging.getLogger(__name__)


class LedgerService:
    """Transaction ledger operations scoped to one principal per call."""

    def __init__(self, transactions: TransactionRepository):
        self.transactions = transactions

    async def create(
        self, data: TransactionCreate, principal: Principal,
    ) -> TransactionLike:
        """Record a new transaction owned by the principal."""
        transaction = await self.transactions.add(
            user_id=principal.id,
            amount=data.amount,
            category=data.category.value,
            type=classify_transaction(data.category).value,
            reason=data.reason,
            date=data.date or datetime.now(timezone.utc),
        )
        logger.info(
            "Transaction created",
            extra={"user_id": principal.id, "transaction_id": transaction.id},
        )
        return transaction

    async def list(
        self,
        principal: Principal,
        offset: int | None = None,
        limit: int | None = None,
        sort_field: str | None = None,
        sort_order: SortOrder | str | None = None,
    ) -> Page[TransactionLike]:
        """One page of the principal's transactions plus the pre-pagination total."""
        page = build_page_request(
            TRANSACTION_SORT_FIELDS, offset, limit, sort_field, sort_order,
        )
        items, total = await self.transactions.find_page(principal.id, page)
        return Page(items=items, total=total, offset=page.offset, limit=page.limit)

    async def get(self, transaction_id: int, principal: Principal) -> TransactionLike:
        transaction = await self.transactions.get(transaction_id)
        if transaction is None:
            raise ResourceNotFoundError(
                "Transaction", transaction_id, ErrorContext(user_id=principal.id),
            )
        authorize(transaction, principal)
        return transaction

    async def update(
        self, transaction_id: int, patch: TransactionUpdate, principal: Principal,
    ) -> TransactionLike:
        """Apply the fields present in the patch, then reclassify."""
        transaction = await self.get(transaction_id, principal)
        for field, value in patch.changes().items():
            setattr(transaction, field, value.value if isinstance(value, Enum) else value)
        transaction.type = classify_transaction(transaction.category).value
        transaction = await self.transactions.save(transaction)
        logger.info(
            "Transaction updated",
            extra={"user_id": principal.id, "transaction_id": transaction_id},
        )
        return transaction

    async def remove(self, transaction_id: int, principal: Principal) -> TransactionLike:
        """Hard-delete and return the record as it was."""
        transaction = await self.get(transaction_id, principal)
        await self.transactions.delete(transaction.id)
        logger.info(
            "Transaction deleted",
            extra={"user_id": principal.id, "transaction_id": transaction_id},
        )
        return transaction

    async def get_account_balance(self, principal: Principal) -> Decimal:
        """Credits minus debits over the principal's ledger."""
        totals = await self.transactions.sum_by_type(principal.id)
        credits = totals.get(TransactionType.CREDIT) or Decimal("0")
        debits = totals.get(TransactionType.DEBIT) or Decimal("0")
        return credits - debits
