"""Alembic environment for the FeeScope ``wallet_stats`` report cache."""

from __future__ import annotations

import asyncio
from logging.config import fileConfig

from alembic import context
from sqlalchemy.engine import Connection

from feescope.core.config import get_settings
from feescope.db.models import WalletStats
from feescope.infrastructure.database.session import build_engine

config = context.config

if config.config_file_name is not None:
    fileConfig(config.config_file_name)

target_metadata = WalletStats.metadata
MANAGED_TABLES = {WalletStats.__tablename__}


def include_object(obj, name, type_, reflected, compare_to) -> bool:
    # Leave tables that other tools keep in the same database alone.
    if type_ == "table":
        return name in MANAGED_TABLES
    return True


def _offline_url() -> str:
    # Offline scripts are rendered with the sync sqlite dialect.
    return get_settings().database_url.replace("sqlite+aiosqlite", "sqlite")


def _configure(**kwargs) -> None:
    context.configure(
        target_metadata=target_metadata,
        include_object=include_object,
        render_as_batch=get_settings().database_url.startswith("sqlite"),
        compare_type=True,
        **kwargs,
    )


def run_migrations_offline() -> None:
    _configure(url=_offline_url(), literal_binds=True, dialect_opts={"paramstyle": "named"})
    with context.begin_transaction():
        context.run_migrations()


def _run_sync(connection: Connection) -> None:
    _configure(connection=connection)
    with context.begin_transaction():
        context.run_migrations()


async def run_migrations_online() -> None:
    engine = build_engine(get_settings())
    try:
        async with engine.connect() as connection:
            await connection.run_sync(_run_sync)
    finally:
        await engine.dispose()


if context.is_offline_mode():
    run_migrations_offline()
else:
    asyncio.run(run_migrations_online())
