"""Transaction ORM: persists one ledger entry owned by a user.

Invariants:
    - user_id is set on insert and never reassigned
    - amount is a positive magnitude; the sign comes from type
    - type is derived from category by core/classification.py, never taken from input
    - date defaults to the insert time when the caller omits it

Design Decisions:
    - Numeric(12, 2) for amount: exact decimal arithmetic in SUM()
    - category/type as String columns holding str-Enum values (portable across PG and SQLite)
    - ON DELETE CASCADE on user_id: account removal drops the ledger at the storage level
"""

from datetime import datetime, timezone
from decimal import Decimal

from sqlalchemy import DateTime, ForeignKey, Integer, Numeric, String, Text
from sqlalchemy.orm import Mapped, mapped_column

from finledger.db.base import Base


class Transaction(Base):
    """A single credit or debit in a user's ledger."""
    __tablename__ = "transactions"

    id: Mapped[int] = mapped_column(Integer, primary_key=True, autoincrement=True)
    user_id: Mapped[int] = mapped_column(
        Integer, ForeignKey("users.id", ondelete="CASCADE"),
        nullable=False, index=True,
    )
    amount: Mapped[Decimal] = mapped_column(Numeric(12, 2), nullable=False)
    category: Mapped[str] = mapped_column(String(30), nullable=False)
    type: Mapped[str] = mapped_column(String(10), nullable=False)
    reason: Mapped[str | None] = mapped_column(Text, nullable=True)
    date: Mapped[datetime] = mapped_column(
        DateTime(timezone=True),
        nullable=False,
        default=lambda: datetime.now(timezone.utc),
    )
    created_at: Mapped[datetime] = mapped_column(
        DateTime(timezone=True),
        nullable=False,
        default=lambda: datetime.now(timezone.utc),
    )
