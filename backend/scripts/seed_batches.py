"""
Create tables and seed the default batch slots.
Run: python -m scripts.seed_batches  (from backend/)
"""

import asyncio

from gym_enrollment.core.config import settings
from gym_enrollment.core.logging import setup_logging
from gym_enrollment.db.bootstrap import create_tables, seed_default_batches
from gym_enrollment.db.session import build_engine, build_session_factory


async def seed():
    """Create schema and insert missing batch slots."""
    engine = build_engine(settings)
    try:
        await create_tables(engine)
        created = await seed_default_batches(build_session_factory(engine), settings)
    finally:
        await engine.dispose()
    print(f"Seeded {created} batch slot(s).")


if __name__ == "__main__":
    setup_logging(settings.LOG_LEVEL)
    asyncio.run(seed())
