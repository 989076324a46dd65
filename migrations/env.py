# migrations/env.py
# Copyright (c) ValueScope.
# SPDX-License-Identifier: MIT
"""Alembic environment for the valuation tables.

The database URL comes from the application settings (``DATABASE_URL``,
read from the environment or ``.env``), so migrations always target the
database the service itself uses. Online runs go through the async driver.
"""

from __future__ import annotations

import asyncio
import logging.config

from alembic import context
from sqlalchemy import pool
from sqlalchemy.engine import Connection
from sqlalchemy.ext.asyncio import create_async_engine

from valuescope_api.config.settings import get_settings
from valuescope_api.infrastructure.database.models import valuation as _valuation_models  # noqa: F401
from valuescope_api.infrastructure.database.models.base import metadata as target_metadata

config = context.config

if config.config_file_name is not None:
    logging.config.fileConfig(config.config_file_name)

VERSION_TABLE_OPTIONS = {"version_table": "alembic_version", "version_table_schema": "public"}


def run_migrations_offline() -> None:
    """Emit the migration SQL without connecting."""
    context.configure(
        url=get_settings().database_url,
        target_metadata=target_metadata,
        literal_binds=True,
        dialect_opts={"paramstyle": "named"},
        include_schemas=True,
        **VERSION_TABLE_OPTIONS,
    )
    with context.begin_transaction():
        context.run_migrations()


def do_run_migrations(connection: Connection) -> None:
    context.configure(
        connection=connection,
        target_metadata=target_metadata,
        compare_type=True,
        include_schemas=True,
        **VERSION_TABLE_OPTIONS,
    )
    with context.begin_transaction():
        context.run_migrations()


async def run_migrations_online() -> None:
    engine = create_async_engine(get_settings().database_url, poolclass=pool.NullPool)
    async with engine.connect() as connection:
        await connection.run_sync(do_run_migrations)
    await engine.dispose()


if context.is_offline_mode():
    run_migrations_offline()
else:
    asyncio.run(run_migrations_online())
