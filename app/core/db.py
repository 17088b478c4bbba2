"""
Database connection and session management.

SQLAlchemy 2.0 async pattern:
- Engine: manages the connection pool
- Session factory: creates database sessions
- Base: parent class for all our ORM models

Engines are built per application (see app.main.create_app) instead of
at import time, so a test can hand the factory its own database URL.
"""

from typing import AsyncIterator

from fastapi import Request
from sqlalchemy import event
from sqlalchemy.ext.asyncio import (
    AsyncEngine,
    AsyncSession,
    async_sessionmaker,
    create_async_engine,
)
from sqlalchemy.orm import DeclarativeBase

from app.core.config import Settings


# =============================================================================
# BASE MODEL CLASS
# =============================================================================
# All our database models inherit from this. SQLAlchemy uses it to:
# - Track all models in one registry
# - Generate database tables from model definitions (Alembic autogenerate)

class Base(DeclarativeBase):
    """Base class for all SQLAlchemy ORM models."""
    pass


# =============================================================================
# DATABASE ENGINE
# =============================================================================
# - echo=settings.debug: when True, logs all SQL statements
# - pool_pre_ping=True: tests connections before using them


def build_engine(settings: Settings) -> AsyncEngine:
    """
    Create the async engine for the configured database.

    SQLite's driver opens transactions lazily and never emits BEGIN for
    SAVEPOINT work, which breaks nested transactions. For SQLite URLs we
    take over transaction control: the driver's own BEGIN is disabled and
    we emit it ourselves whenever SQLAlchemy begins a transaction.
    """
    engine = create_async_engine(
        settings.database_url,
        echo=settings.debug,
        pool_pre_ping=True,
    )

    if settings.is_sqlite:
        @event.listens_for(engine.sync_engine, "connect")
        def _disable_driver_begin(dbapi_connection, connection_record):
            dbapi_connection.isolation_level = None

        @event.listens_for(engine.sync_engine, "begin")
        def _emit_begin(conn):
            conn.exec_driver_sql("BEGIN")

    return engine


# =============================================================================
# SESSION FACTORY
# =============================================================================
# - expire_on_commit=False: objects remain usable after commit
#   (without this, accessing attributes after commit would trigger a refresh,
#   which an async session cannot do implicitly)


def build_sessionmaker(engine: AsyncEngine) -> async_sessionmaker[AsyncSession]:
    """Create the session factory bound to ``engine``."""
    return async_sessionmaker(
        bind=engine,
        class_=AsyncSession,
        expire_on_commit=False,
    )


# =============================================================================
# DEPENDENCY: GET DATABASE SESSION
# =============================================================================
# The session factory lives on app.state (set by create_app). Tests replace
# this whole dependency through app.dependency_overrides[get_db].


async def get_db(request: Request) -> AsyncIterator[AsyncSession]:
    """
    Dependency that provides a database session.

    Usage in a route:
        @router.get("/my-models")
        async def list_my_models(db: AsyncSession = Depends(get_db)):
            # use db here
    """
    session_factory = request.app.state.session_factory
    async with session_factory() as session:
        yield session
