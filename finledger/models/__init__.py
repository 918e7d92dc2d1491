"""ORM Models: SQLAlchemy declarative models for users and their transactions.

Invariants:
    - All models inherit from Base (db/base.py)
    - User is the owner; transactions reference it by foreign key only

Design Decisions:
    - One file per entity for locality
    - All models imported here so Base.metadata is complete before create_all / alembic
"""

from finledger.models.user import User  # noqa: F401
from finledger.models.transaction import Transaction  # noqa: F401
