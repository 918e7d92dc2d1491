"""SQL Repositories: SQLAlchemy implementations of the core repository Protocols.

Invariants:
    - Every listing and aggregate is filtered by owner in SQL, never in Python
    - Sort columns come only from core/pagination allow-lists (attribute names, not raw input)
    - Aggregates coalesce NULL to zero before leaving the repository
    - Writes commit immediately; the request-scoped session rolls back on failure

Design Decisions:
    - Thin classes over a shared AsyncSession: one per request via FastAPI dependencies
    - Secondary order on id keeps pages stable when the sort column has ties
"""

import logging
from decimal import Decimal
from typing import Any

from sqlalchemy import delete, func, select
from sqlalchemy.ext.asyncio import AsyncSession

from finledger.core.domain_types import SortOrder, TransactionType, UserId
from finledger.core.pagination import PageRequest
from finledger.models.transaction import Transaction
from finledger.models.user import User

logger = logging.getLogger(__name__)


def _ordering(model, page: PageRequest) -> tuple:
    column = getattr(model, page.sort_attribute)
    if page.sort_order is SortOrder.ASC:
        return column.asc(), model.id.asc()
    return column.desc(), model.id.desc()


def _to_decimal(value: Any) -> Decimal:
    if value is None:
        return Decimal("0")
    if isinstance(value, Decimal):
        return value
    return Decimal(str(value))


def _escape_like(term: str) -> str:
    return (
        term.replace("\\", "\\\\").replace("%", "\\%").replace("_", "\\_")
    )


class SqlUserRepository:
    """User persistence backed by the users table."""

    def __init__(self, db: AsyncSession):
        self.db = db

    async def get(self, user_id: int) -> User | None:
        return await self.db.get(User, user_id)

    async def get_by_email(self, email: str) -> User | None:
        result = await self.db.execute(select(User).where(User.email == email))
        return result.scalar_one_or_none()

    async def add(self, **fields: Any) -> User:
        user = User(**fields)
        return await self.save(user)

    async def save(self, user: User) -> User:
        self.db.add(user)
        await self.db.commit()
        await self.db.refresh(user)
        return user

    async def delete(self, user_id: int) -> None:
        await self.db.execute(delete(User).where(User.id == user_id))
        await self.db.commit()

    async def find_page(
        self, page: PageRequest, email: str | None = None, search: str | None = None,
    ) -> tuple[list[User], int]:
        conditions = []
        if email:
            conditions.append(User.email == email)
        if search:
            full_name = (
                func.coalesce(User.first_name, "") + " "
                + func.coalesce(User.last_name, "")
            )
            conditions.append(
                full_name.ilike(f"%{_escape_like(search)}%", escape="\\"),
            )

        total = await self.db.scalar(
            select(func.count()).select_from(User).where(*conditions),
        )
        result = await self.db.execute(
            select(User)
            .where(*conditions)
            .order_by(*_ordering(User, page))
            .offset(page.offset)
            .limit(page.limit),
        )
        return list(result.scalars().all()), total or 0


class SqlTransactionRepository:
    """Transaction persistence backed by the transactions table."""

    def __init__(self, db: AsyncSession):
        self.db = db

    async def get(self, transaction_id: int) -> Transaction | None:
        return await self.db.get(Transaction, transaction_id)

    async def add(self, **fields: Any) -> Transaction:
        transaction = Transaction(**fields)
        return await self.save(transaction)

    async def save(self, transaction: Transaction) -> Transaction:
        self.db.add(transaction)
        await self.db.commit()
        await self.db.refresh(transaction)
        return transaction

    async def delete(self, transaction_id: int) -> None:
        await self.db.execute(
            delete(Transaction).where(Transaction.id == transaction_id),
        )
        await self.db.commit()

    async def find_page(
        self, owner_id: UserId, page: PageRequest,
    ) -> tuple[list[Transaction], int]:
        owned = Transaction.user_id == owner_id
        total = await self.db.scalar(
            select(func.count()).select_from(Transaction).where(owned),
        )
        result = await self.db.execute(
            select(Transaction)
            .where(owned)
            .order_by(*_ordering(Transaction, page))
            .offset(page.offset)
            .limit(page.limit),
        )
        return list(result.scalars().all()), total or 0

    async def sum_by_type(self, owner_id: UserId) -> dict[TransactionType, Decimal]:
        result = await self.db.execute(
            select(
                Transaction.type,
                func.coalesce(func.sum(Transaction.amount), 0),
            )
            .where(Transaction.user_id == owner_id)
            .group_by(Transaction.type),
        )
        return {
            TransactionType(type_): _to_decimal(total)
            for type_, total in result.all()
        }
