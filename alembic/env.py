from __future__ import annotations

import asyncio
from logging.config import fileConfig

from alembic import context
from sqlalchemy import pool
from sqlalchemy.engine import Connection
from sqlalchemy.ext.asyncio import create_async_engine

from duty_roster.core.config import get_settings
from duty_roster.db import models  # noqa: F401  # registers dutyplan and dutyplanrun
from duty_roster.db.base import Base

config = context.config

if config.config_file_name is not None:
    fileConfig(config.config_file_name, disable_existing_loggers=False)

target_metadata = Base.metadata

# Async drivers used by the application; offline SQL generation needs the sync dialect.
ASYNC_DRIVERS = ("+asyncpg", "+aiosqlite")


def _database_url() -> str:
    return config.get_main_option("sqlalchemy.url") or get_settings().database_url


def _sync_url(url: str) -> str:
    for driver in ASYNC_DRIVERS:
        url = url.replace(driver, "")
    return url


def run_migrations_offline() -> None:
    context.configure(
        url=_sync_url(_database_url()),
        target_metadata=target_metadata,
        literal_binds=True,
        dialect_opts={"paramstyle": "named"},
    )
    with context.begin_transaction():
        context.run_migrations()


def _apply(connection: Connection) -> None:
    context.configure(connection=connection, target_metadata=target_metadata)
    with context.begin_transaction():
        context.run_migrations()


async def run_migrations_online() -> None:
    engine = create_async_engine(_database_url(), poolclass=pool.NullPool)
    async with engine.begin() as connection:
        await connection.run_sync(_apply)
    await engine.dispose()


if context.is_offline_mode():
    run_migrations_offline()
else:
    asyncio.run(run_migrations_online())
