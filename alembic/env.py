"""Alembic environment for finledger.

The target URL comes from finledger.config (DATABASE_URL / .env) so migrations and the
app always agree on the database; alembic.ini's sqlalchemy.url is only used when the
setting is absent from the environment.
"""

import asyncio
import os
from logging.config import fileConfig

from sqlalchemy import pool
from sqlalchemy.ext.asyncio import async_engine_from_config

from alembic import context

import finledger.models  # noqa: F401  (registers tables on Base.metadata)
from finledger.config import get_settings
from finledger.db.base import Base

config = context.config
if config.config_file_name is not None:
    fileConfig(config.config_file_name)

if "DATABASE_URL" in os.environ:
    config.set_main_option("sqlalchemy.url", get_settings().database_url)

target_metadata = Base.metadata


def _configure(**options) -> None:
    context.configure(
        target_metadata=target_metadata, compare_type=True, **options,
    )
    with context.begin_transaction():
        context.run_migrations()


async def _migrate_online() -> None:
    engine = async_engine_from_config(
        config.get_section(config.config_ini_section, {}),
        prefix="sqlalchemy.",
        poolclass=pool.NullPool,
    )
    async with engine.connect() as connection:
        await connection.run_sync(lambda conn: _configure(connection=conn))
    await engine.dispose()


if context.is_offline_mode():
    _configure(
        url=config.get_main_option("sqlalchemy.url"),
        literal_binds=True,
        dialect_opts={"paramstyle": "named"},
    )
else:
    asyncio.run(_migrate_online())
