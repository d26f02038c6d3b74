"""
Database configuration and session management.
Uses the SQLAlchemy 2.0 asyncio extension.
"""

import os
from collections.abc import AsyncGenerator
from contextlib import asynccontextmanager
from functools import lru_cache

from sqlalchemy import event
from sqlalchemy.ext.asyncio import (
    AsyncEngine,
    AsyncSession,
    async_sessionmaker,
    create_async_engine,
)

from accommodation_shared.config.settings import settings


def _calculate_pool_size() -> int:
    """
    Calculate pool size based on CPU cores.
    Formula: (2 * CPU cores) + 1, capped at 20 for reasonable limits.
    """
    if settings.db_pool_size > 0:
        return settings.db_pool_size
    cores = os.cpu_count() or 4
    return min(cores * 2 + 1, 20)


def enable_sqlite_foreign_keys(engine: AsyncEngine) -> None:
    """
    Enforce foreign keys (and their ON DELETE rules) on every SQLite connection.

    SQLite ships with enforcement off; server databases always enforce.
    """

    @event.listens_for(engine.sync_engine, "connect")
    def _set_foreign_keys(dbapi_connection, connection_record):
        cursor = dbapi_connection.cursor()
        cursor.execute("PRAGMA foreign_keys=ON")
        cursor.close()


@lru_cache
def get_engine() -> AsyncEngine:
    """
    Create the application engine on first use.

    Pool and timeout settings only apply to server databases;
    SQLite only gets foreign-key enforcement switched on.
    """
    if settings.is_sqlite:
        engine = create_async_engine(settings.database_url, echo=settings.db_echo)
        enable_sqlite_foreign_keys(engine)
        return engine

    return create_async_engine(
        settings.database_url,
        pool_pre_ping=True,  # Verify connections before using
        pool_size=_calculate_pool_size(),
        max_overflow=settings.db_max_overflow,
        pool_timeout=settings.db_pool_timeout,
        pool_recycle=settings.db_pool_recycle,
        connect_args={"connect_timeout": settings.db_connect_timeout},
        echo=settings.db_echo,
    )


def create_session_factory(engine: AsyncEngine) -> async_sessionmaker[AsyncSession]:
    """
    Session factory for an engine.

    expire_on_commit is disabled so entities returned from a committed unit
    of work stay readable without another round trip.
    """
    return async_sessionmaker(
        bind=engine,
        autoflush=False,
        expire_on_commit=False,
    )


@lru_cache
def get_session_factory() -> async_sessionmaker[AsyncSession]:
    return create_session_factory(get_engine())


async def get_db() -> AsyncGenerator[AsyncSession, None]:
    """
    Request-scoped session dependency.

    Usage:
        async def handler(db: AsyncSession = Depends(get_db)):
            return await AirportService(db).list_all()

    The session is automatically closed after the request completes.
    """
    async with get_session_factory()() as db:
        yield db


@asynccontextmanager
async def get_db_context() -> AsyncGenerator[AsyncSession, None]:
    """
    Context manager for database sessions outside of a request.

    Usage:
        async with get_db_context() as db:
            await RestaurantService(db).list_all()
    """
    async with get_session_factory()() as db:
        yield db


async def safe_commit(db: AsyncSession) -> None:
    """
    Commit with automatic rollback on failure.

    Also rolls back when the commit is cancelled. Raises the original
    exception after rolling back.
    """
    try:
        await db.commit()
    except BaseException:
        await db.rollback()
        raise


async def init_db(engine: AsyncEngine | None = None) -> None:
    """Create all tables for the ORM models (development and tests)."""
    from accommodation_api.models import Base

    engine = engine or get_engine()
    async with engine.begin() as conn:
        await conn.run_sync(Base.metadata.create_all)
