"""User ORM: persists identity, credentials hash, and profile fields.

Invariants:
    - id is an autoincrement integer primary key
    - email is unique (index-backed) and stored case-sensitive as given
    - password_hash holds a bcrypt digest; the plaintext is never stored or returned
    - last_seen_at is null until the first authenticated request

Design Decisions:
    - No relationship() to transactions: ownership lives in transactions.user_id and the
      FK's ON DELETE CASCADE removes a user's ledger with the user
    - is_admin flag gates the user directory endpoints
"""

from datetime import datetime, timezone

from sqlalchemy import Boolean, DateTime, Integer, String
from sqlalchemy.orm import Mapped, mapped_column

from finledger.db.base import Base


class User(Base):
    """Registered account holder."""
    __tablename__ = "users"

    id: Mapped[int] = mapped_column(Integer, primary_key=True, autoincrement=True)
    email: Mapped[str] = mapped_column(
        String(255), nullable=False, unique=True, index=True,
    )
    password_hash: Mapped[str] = mapped_column(String(255), nullable=False)
    first_name: Mapped[str | None] = mapped_column(String(100), nullable=True)
    last_name: Mapped[str | None] = mapped_column(String(100), nullable=True)
    is_admin: Mapped[bool] = mapped_column(
        Boolean, nullable=False, default=False,
    )
    created_at: Mapped[datetime] = mapped_column(
        DateTime(timezone=True),
        nullable=False,
        default=lambda: datetime.now(timezone.utc),
    )
    last_seen_at: Mapped[datetime | None] = mapped_column(
        DateTime(timezone=True), nullable=True,
    )
