"""Domain Types: identity types and enums shared across the ledger.

Invariants:
    - UserId and TransactionId wrap integers; never pass bare ints between layers
    - Every valid category/type/sort order is an Enum member, no raw string matching

Design Decisions:
    - NewType over dataclass wrappers: zero runtime cost, full type-checker support
    - str Enums: serialize to JSON and store in String columns without custom encoders
    - Category values keep the camelCase spelling existing clients send ("loanPayment")
"""

from enum import Enum
from typing import NewType


# --- Identity Types ----------------------------------------------------------

UserId = NewType("UserId", int)
TransactionId = NewType("TransactionId", int)


# --- Enums -------------------------------------------------------------------

class TransactionCategory(str, Enum):
    """What a transaction was for. Drives credit/debit classification."""
    REVENUE = "revenue"
    GRANT = "grant"
    LOAN_PAYMENT = "loanPayment"
    DEBT = "debt"
    SHOPPING = "shopping"
    FOOD = "food"
    TRANSPORT = "transport"
    HOUSING = "housing"
    UTILITIES = "utilities"
    HEALTH = "health"
    EDUCATION = "education"
    LEISURE = "leisure"
    TAXES = "taxes"
    SAVINGS = "savings"
    OTHER = "other"


class TransactionType(str, Enum):
    """Direction of money flow. Exactly two values."""
    CREDIT = "credit"
    DEBIT = "debit"


class SortOrder(str, Enum):
    ASC = "asc"
    DESC = "desc"

    @classmethod
    def parse(cls, value: "str | SortOrder | None") -> "SortOrder":
        """Case-insensitive parse; None means the default (descending)."""
        if value is None:
            return cls.DESC
        if isinstance(value, cls):
            return value
        return cls(value.strip().lower())
