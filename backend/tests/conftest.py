"""Pytest configuration and shared fixtures.

Integration tests run against a throw-away SQLite file per test. Every
transaction starts with ``BEGIN IMMEDIATE`` so concurrent sessions queue
on the database write lock the way row locks serialize them on Postgres.
"""

from collections.abc import AsyncGenerator
from datetime import time
from decimal import Decimal

import pytest
from httpx import ASGITransport, AsyncClient
from sqlalchemy import event, update
from sqlalchemy.ext.asyncio import AsyncEngine, AsyncSession, async_sessionmaker, create_async_engine

from gym_enrollment.core.constants import DEFAULT_BATCH_TIMES
from gym_enrollment.db.bootstrap import create_tables
from gym_enrollment.db.models import Batch
from gym_enrollment.db.session import build_session_factory
from gym_enrollment.main import app
from gym_enrollment.repositories import batches as batch_repository


# =============================================================================
# Database Fixtures
# =============================================================================


@pytest.fixture
async def engine(tmp_path) -> AsyncGenerator[AsyncEngine, None]:
    """Async engine on a fresh SQLite file with all tables created."""
    engine = create_async_engine(
        f"sqlite+aiosqlite:///{tmp_path / 'gym_test.db'}",
        connect_args={"timeout": 30},
    )

    @event.listens_for(engine.sync_engine, "connect")
    def _on_connect(dbapi_connection, connection_record):
        # Take over transaction control from the driver.
        dbapi_connection.isolation_level = None
        cursor = dbapi_connection.cursor()
        cursor.execute("PRAGMA foreign_keys=ON")
        cursor.close()

    @event.listens_for(engine.sync_engine, "begin")
    def _on_begin(conn):
        conn.exec_driver_sql("BEGIN IMMEDIATE")

    await create_tables(engine)
    yield engine
    await engine.dispose()


@pytest.fixture
def session_factory(engine: AsyncEngine) -> async_sessionmaker[AsyncSession]:
    return build_session_factory(engine)


@pytest.fixture
async def db(session_factory) -> AsyncGenerator[AsyncSession, None]:
    """A single session for service/repository tests."""
    async with session_factory() as session:
        yield session


@pytest.fixture
async def seeded(session_factory) -> None:
    """The five default slots, capacity 30, fee 1000.00."""
    async with session_factory() as session:
        await batch_repository.seed_batches(
            session,
            DEFAULT_BATCH_TIMES,
            max_capacity=30,
            monthly_fee=Decimal("1000.00"),
        )
        await session.commit()


@pytest.fixture
def set_batch(session_factory):
    """Overwrite columns of a seeded batch, e.g. ``await set_batch(time(6), current_capacity=30)``."""

    async def _set(batch_time: time, **values) -> None:
        async with session_factory() as session:
            await session.execute(
                update(Batch).where(Batch.batch_time == batch_time).values(**values)
            )
            await session.commit()

    return _set


@pytest.fixture
def get_batch(session_factory):
    """Read a batch in its own session so the committed state is seen."""

    async def _get(batch_time: time) -> Batch | None:
        async with session_factory() as session:
            return await batch_repository.get_batch_by_time(session, batch_time)

    return _get


# =============================================================================
# HTTP Client Fixtures
# =============================================================================


@pytest.fixture
async def client(session_factory, seeded) -> AsyncGenerator[AsyncClient, None]:
    """httpx client bound to the app, using the test session factory."""
    app.state.session_factory = session_factory
    transport = ASGITransport(app=app)
    async with AsyncClient(transport=transport, base_url="http://test") as ac:
        yield ac
