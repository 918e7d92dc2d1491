"""Services: orchestrate repositories and security primitives around core rules.

Invariants:
    - Every service call that touches per-user data receives an explicit Principal
    - Services raise FinLedgerError subclasses only; the API layer translates them
"""
