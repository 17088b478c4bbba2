"""
Alembic environment configuration.

This file is run by Alembic whenever you execute a migration command.
It sets up the database connection and tells Alembic about our models.

Migrations run through the same async engine builder as the application,
so SQLite test databases get the same transaction handling.
"""

import asyncio
from logging.config import fileConfig

from alembic import context
from sqlalchemy.engine import Connection

from app.core.config import settings
from app.core.db import Base, build_engine

# Import all models so they register with Base.metadata
import app.models  # noqa: F401

# =============================================================================
# ALEMBIC CONFIG
# =============================================================================

config = context.config

# Set up Python logging from alembic.ini, leaving application loggers alone
if config.config_file_name is not None:
    fileConfig(config.config_file_name, disable_existing_loggers=False)

target_metadata = Base.metadata


def get_url() -> str:
    """
    Database URL for this run.

    An explicit sqlalchemy.url (set by the test fixtures, or with
    `alembic -x`-style tooling) wins over the application settings.
    """
    return config.get_main_option("sqlalchemy.url") or settings.database_url


# =============================================================================
# MIGRATION FUNCTIONS
# =============================================================================


def run_migrations_offline() -> None:
    """
    Run migrations in 'offline' mode.

    Usage: alembic upgrade head --sql > migration.sql
    """
    context.configure(
        url=get_url(),
        target_metadata=target_metadata,
        literal_binds=True,
        dialect_opts={"paramstyle": "named"},
    )

    with context.begin_transaction():
        context.run_migrations()


def do_run_migrations(connection: Connection) -> None:
    context.configure(
        connection=connection,
        target_metadata=target_metadata,
        render_as_batch=connection.dialect.name == "sqlite",
    )

    with context.begin_transaction():
        context.run_migrations()


async def run_async_migrations() -> None:
    engine = build_engine(settings.model_copy(update={"database_url": get_url(), "debug": False}))
    async with engine.connect() as connection:
        await connection.run_sync(do_run_migrations)
    await engine.dispose()


def run_migrations_online() -> None:
    """
    Run migrations in 'online' mode.

    Usage: alembic upgrade head
    """
    asyncio.run(run_async_migrations())


# =============================================================================
# RUN THE APPROPRIATE MODE
# =============================================================================

if context.is_offline_mode():
    run_migrations_offline()
else:
    run_migrations_online()
