"""Core Domain: pure ledger rules, errors, and boundary contracts.

Invariants:
    - No IO in core; everything here is importable without a database
    - Core never imports from services/, infrastructure/, or api/

Design Decisions:
    - Functional core, imperative shell: services orchestrate IO around these rules
"""
