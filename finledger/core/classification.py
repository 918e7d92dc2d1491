"""Transaction Classification: category -> credit/debit mapping.

Invariants:
    - type is a pure function of category
    - revenue, grant, loanPayment, debt are credits; every other category is a debit

Design Decisions:
    - frozenset membership over a per-category table: new categories default to debit
"""

from finledger.core.domain_types import TransactionCategory, TransactionType

CREDIT_CATEGORIES: frozenset[TransactionCategory] = frozenset({
    TransactionCategory.REVENUE,
    TransactionCategory.GRANT,
    TransactionCategory.LOAN_PAYMENT,
    TransactionCategory.DEBT,
})


def classify_transaction(category: TransactionCategory | str) -> TransactionType:
    """Return the transaction type implied by a category. Pure, no IO."""
    if TransactionCategory(category) in CREDIT_CATEGORIES:
        return TransactionType.CREDIT
    return TransactionType.DEBIT
