"""
Async SQLAlchemy engine and session factory.

The engine is created once by the application lifespan and stored on
`app.state`; nothing here is created at import time.
"""

from __future__ import annotations

from sqlalchemy.ext.asyncio import (
    AsyncEngine,
    AsyncSession,
    async_sessionmaker,
    create_async_engine,
)

from gym_enrollment.core.config import Settings


def build_engine(settings: Settings) -> AsyncEngine:
    """Create the async engine described by *settings*."""
    options: dict[str, object] = {
        "echo": settings.DB_ECHO,
        "pool_pre_ping": True,
    }
    if not settings.is_sqlite:
        options.update(
            pool_size=settings.DB_POOL_SIZE,
            max_overflow=settings.DB_MAX_OVERFLOW,
            pool_timeout=settings.DB_POOL_TIMEOUT,
        )
    return create_async_engine(settings.DATABASE_URL, **options)


def build_session_factory(engine: AsyncEngine) -> async_sessionmaker[AsyncSession]:
    """Session factory handed to request handlers."""
    return async_sessionmaker(
        engine,
        class_=AsyncSession,
        expire_on_commit=False,
    )
