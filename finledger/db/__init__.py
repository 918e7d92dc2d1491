"""Database Metadata: SQLAlchemy declarative Base shared by all ORM models.

Design Decisions:
    - asyncpg driver for PostgreSQL in production, aiosqlite in tests
"""
