"""Infrastructure Layer: database, security primitives, and logging.

Invariants:
    - Infrastructure implements core Protocols; core never imports from here
    - SQLAlchemy exceptions are mapped to DatabaseError at the session boundary
"""
