"""
EditMatch — Async database engine and request-scoped sessions.

A single engine per process is built from ``DATABASE_URL``.  The same URL is
shared with Alembic and ``psql``, so a plain ``postgresql://`` scheme is
accepted and switched to the asyncpg driver here.
"""

from __future__ import annotations

import logging
from typing import AsyncGenerator

from sqlalchemy.ext.asyncio import (
    AsyncEngine,
    AsyncSession,
    async_sessionmaker,
    create_async_engine,
)
from sqlalchemy.orm import DeclarativeBase

from editmatch.config import Settings, get_settings

logger = logging.getLogger(__name__)

ASYNC_SCHEME = "postgresql+asyncpg://"


class Base(DeclarativeBase):
    """Declarative base shared by ``editmatch.models``."""
    pass


def async_database_url(url: str) -> str:
    """Return ``url`` with its scheme pointed at the asyncpg dialect."""
    for scheme in ("postgresql://", "postgres://"):
        if url.startswith(scheme):
            return ASYNC_SCHEME + url[len(scheme):]
    return url


def build_engine(settings: Settings) -> AsyncEngine:
    """Create the pooled async engine; no connection is opened here."""
    url = async_database_url(settings.DATABASE_URL)
    engine = create_async_engine(
        url,
        echo=(settings.LOG_LEVEL == "DEBUG"),
        pool_size=settings.DB_POOL_SIZE,
        max_overflow=settings.DB_MAX_OVERFLOW,
        pool_recycle=settings.DB_POOL_RECYCLE_SECONDS,
        pool_timeout=30,
        pool_pre_ping=True,
    )
    logger.info(
        "Database engine created (pool_size=%d, max_overflow=%d)",
        settings.DB_POOL_SIZE,
        settings.DB_MAX_OVERFLOW,
    )
    return engine


engine = build_engine(get_settings())

async_session_factory: async_sessionmaker[AsyncSession] = async_sessionmaker(
    bind=engine,
    class_=AsyncSession,
    expire_on_commit=False,
)


async def get_db() -> AsyncGenerator[AsyncSession, None]:
    """FastAPI dependency: one session per request.

    The session commits when the route returns normally and rolls back if
    anything raised, including the service errors mapped to 4xx responses.
    """
    async with async_session_factory() as session:
        try:
            yield session
        except Exception:
            await session.rollback()
            raise
        await session.commit()
