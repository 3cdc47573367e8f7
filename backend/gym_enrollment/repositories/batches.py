"""
Batch repository containing all data-access operations for gym_batches.

Seat accounting never reads-then-writes: `reserve_seat` and `release_seat`
are single conditional UPDATEs whose affected-row count says whether the
change happened, so concurrent requests cannot push `current_capacity`
past `max_capacity` or below zero.
"""

from __future__ import annotations

from collections.abc import Iterable
from datetime import time
from decimal import Decimal

from sqlalchemy import select, update
from sqlalchemy.ext.asyncio import AsyncSession

from gym_enrollment.db.models.batch import Batch


async def list_batches(db: AsyncSession, *, only_open: bool = False) -> list[Batch]:
    """All batches ordered by time, optionally only those with a free seat."""
    stmt = select(Batch).order_by(Batch.batch_time)
    if only_open:
        stmt = stmt.where(Batch.current_capacity < Batch.max_capacity)
    result = await db.execute(stmt)
    return list(result.scalars().all())


async def get_batch_by_time(
    db: AsyncSession,
    batch_time: time,
    *,
    for_update: bool = False,
) -> Batch | None:
    """Fetch a batch by its time slot, optionally taking a row lock."""
    stmt = select(Batch).where(Batch.batch_time == batch_time)
    if for_update:
        stmt = stmt.with_for_update()
    result = await db.execute(stmt)
    return result.scalar_one_or_none()


async def lock_batches(db: AsyncSession, batch_times: Iterable[time]) -> list[Batch]:
    """Row-lock several batches in a stable order (by time) to avoid deadlocks."""
    stmt = (
        select(Batch)
        .where(Batch.batch_time.in_(sorted(set(batch_times))))
        .order_by(Batch.batch_time)
        .with_for_update()
    )
    result = await db.execute(stmt)
    return list(result.scalars().all())


async def reserve_seat(db: AsyncSession, batch_time: time) -> bool:
    """Take one seat. Returns False when the batch is full or missing."""
    stmt = (
        update(Batch)
        .where(
            Batch.batch_time == batch_time,
            Batch.current_capacity < Batch.max_capacity,
        )
        .values(current_capacity=Batch.current_capacity + 1)
        .execution_options(synchronize_session=False)
    )
    result = await db.execute(stmt)
    return result.rowcount == 1


async def release_seat(db: AsyncSession, batch_time: time) -> bool:
    """Give back one seat. Returns False when the counter is already zero."""
    stmt = (
        update(Batch)
        .where(
            Batch.batch_time == batch_time,
            Batch.current_capacity > 0,
        )
        .values(current_capacity=Batch.current_capacity - 1)
        .execution_options(synchronize_session=False)
    )
    result = await db.execute(stmt)
    return result.rowcount == 1


async def seed_batches(
    db: AsyncSession,
    batch_times: Iterable[time],
    *,
    max_capacity: int,
    monthly_fee: Decimal,
) -> list[Batch]:
    """Insert the given time slots that do not exist yet; existing rows are untouched."""
    wanted = sorted(set(batch_times))
    result = await db.execute(select(Batch.batch_time).where(Batch.batch_time.in_(wanted)))
    existing = set(result.scalars().all())

    created = [
        Batch(
            batch_time=slot,
            current_capacity=0,
            max_capacity=max_capacity,
            monthly_fee=monthly_fee,
        )
        for slot in wanted
        if slot not in existing
    ]
    db.add_all(created)
    await db.flush()
    return created
