"""
Schema bootstrap — create tables and seed the default batch slots.

Safe to run on every startup: `create_all` skips existing tables and
`seed_batches` only inserts slots that are missing, so existing
occupancy counters and fees are never reset.
"""

from __future__ import annotations

from sqlalchemy.ext.asyncio import AsyncEngine, AsyncSession, async_sessionmaker

from gym_enrollment.core.config import Settings
from gym_enrollment.core.constants import DEFAULT_BATCH_TIMES
from gym_enrollment.core.logging import get_logger
from gym_enrollment.db.models import Base
from gym_enrollment.repositories import batches as batch_repository

logger = get_logger(__name__)


async def create_tables(engine: AsyncEngine) -> None:
    """Create every table registered on `Base.metadata`."""
    async with engine.begin() as conn:
        await conn.run_sync(Base.metadata.create_all)


async def seed_default_batches(
    session_factory: async_sessionmaker[AsyncSession],
    settings: Settings,
) -> int:
    """Insert the default time slots that do not exist yet. Returns how many were added."""
    async with session_factory() as session:
        created = await batch_repository.seed_batches(
            session,
            DEFAULT_BATCH_TIMES,
            max_capacity=settings.DEFAULT_BATCH_CAPACITY,
            monthly_fee=settings.DEFAULT_MONTHLY_FEE,
        )
        await session.commit()
    logger.info("Batch slots seeded", created=len(created))
    return len(created)


async def init_db(
    engine: AsyncEngine,
    session_factory: async_sessionmaker[AsyncSession],
    settings: Settings,
) -> None:
    """Create tables, then seed batches."""
    await create_tables(engine)
    await seed_default_batches(session_factory, settings)
