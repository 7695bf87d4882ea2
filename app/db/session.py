"""
Database session management for async SQLAlchemy.

PostgreSQL is used when DATABASE_URL is set in the environment, with a
SQLite fallback for development. Each request gets one session, committed
when the request succeeds and rolled back on any error, so every registry
operation is a single atomic state transition.
"""

import logging
import os
from collections.abc import AsyncGenerator

from sqlalchemy.ext.asyncio import AsyncSession, async_sessionmaker, create_async_engine

from app.config import get_settings

logger = logging.getLogger(__name__)
settings = get_settings()

# Determine database URL: use env var if set, otherwise fallback to SQLite for dev
_env_database_url = os.environ.get("DATABASE_URL")

if _env_database_url:
    _active_database_url = _env_database_url
    _using_sqlite_fallback = False
elif settings.USE_SQLITE_FALLBACK:
    _active_database_url = settings.SQLITE_FALLBACK_URL
    _using_sqlite_fallback = True
    logger.warning(
        f"DATABASE_URL not set, using SQLite fallback: {settings.SQLITE_FALLBACK_URL}"
    )
else:
    _active_database_url = settings.DATABASE_URL
    _using_sqlite_fallback = False


if "sqlite" in _active_database_url:
    engine = create_async_engine(
        _active_database_url,
        echo=settings.DEBUG,
        connect_args={"check_same_thread": False},
    )
else:
    engine = create_async_engine(
        _active_database_url,
        echo=settings.DEBUG,
        pool_size=5,
        max_overflow=10,
        pool_pre_ping=True,
    )


def is_using_sqlite_fallback() -> bool:
    """Check if we're using the SQLite development fallback."""
    return _using_sqlite_fallback


def get_active_database_url() -> str:
    """Get the active database URL being used."""
    return _active_database_url


# Session factory
AsyncSessionLocal = async_sessionmaker(
    bind=engine,
    class_=AsyncSession,
    expire_on_commit=False,
    autocommit=False,
    autoflush=False,
)


async def get_db() -> AsyncGenerator[AsyncSession, None]:
    """
    Dependency that provides a database session.

    The session is committed after the endpoint returns and rolled back
    if it raises, so a failed operation leaves no writes behind.
    """
    async with AsyncSessionLocal() as session:
        try:
            yield session
            await session.commit()
        except Exception:
            await session.rollback()
            raise
        finally:
            await session.close()
