"""
Enrollment repository — monthly enrollment rows plus the read-only
reporting queries built on them (unpaid list, dues, current batch).
"""

from __future__ import annotations

from datetime import date, time
from decimal import Decimal
from typing import Any

from sqlalchemy import func, select
from sqlalchemy.ext.asyncio import AsyncSession

from gym_enrollment.core.constants import PaymentStatus
from gym_enrollment.db.models.batch import Batch
from gym_enrollment.db.models.enrollment import Enrollment
from gym_enrollment.db.models.member import Member


async def create_enrollment(
    db: AsyncSession,
    *,
    member_id: int,
    batch_time: time,
    month: date,
    amount: Decimal,
    payment_status: str = PaymentStatus.PENDING.value,
) -> Enrollment:
    """Insert an enrollment for (member, month)."""
    enrollment = Enrollment(
        member_id=member_id,
        batch_time=batch_time,
        month=month,
        amount=amount,
        payment_status=payment_status,
    )
    db.add(enrollment)
    await db.flush()
    return enrollment


async def get_enrollment_for_month(
    db: AsyncSession,
    member_id: int,
    month: date,
    *,
    for_update: bool = False,
) -> Enrollment | None:
    """The member's enrollment for the month starting on *month*, if any."""
    stmt = select(Enrollment).where(
        Enrollment.member_id == member_id,
        Enrollment.month == month,
    )
    if for_update:
        stmt = stmt.with_for_update()
    result = await db.execute(stmt)
    return result.scalar_one_or_none()


async def move_enrollment(
    db: AsyncSession,
    enrollment: Enrollment,
    *,
    batch_time: time,
    amount: Decimal,
) -> Enrollment:
    """Point an existing enrollment at another batch; it becomes pending again."""
    enrollment.batch_time = batch_time
    enrollment.amount = amount
    enrollment.payment_status = PaymentStatus.PENDING.value
    await db.flush()
    return enrollment


# ─── Reporting ────────────────────────────────
async def list_unpaid(db: AsyncSession) -> list[dict[str, Any]]:
    """Pending enrollments with the member's name and email, newest month first."""
    stmt = (
        select(
            Member.name,
            Member.email,
            Enrollment.batch_time,
            Enrollment.amount,
            Enrollment.payment_status,
            Enrollment.month,
        )
        .join(Member, Member.id == Enrollment.member_id)
        .where(Enrollment.payment_status == PaymentStatus.PENDING.value)
        .order_by(Enrollment.month.desc(), Member.name)
    )
    result = await db.execute(stmt)
    return [dict(row) for row in result.mappings().all()]


async def list_outstanding_dues(db: AsyncSession) -> list[dict[str, Any]]:
    """Per-member count and sum of pending enrollments."""
    stmt = (
        select(
            Member.name,
            Member.email,
            func.count(Enrollment.id).label("pending_months"),
            func.sum(Enrollment.amount).label("total_dues"),
        )
        .join(Enrollment, Enrollment.member_id == Member.id)
        .where(Enrollment.payment_status == PaymentStatus.PENDING.value)
        .group_by(Member.id, Member.name, Member.email)
        .order_by(Member.name)
    )
    result = await db.execute(stmt)
    return [dict(row) for row in result.mappings().all()]


async def get_current_batch(
    db: AsyncSession,
    member_id: int,
    month: date,
) -> dict[str, Any] | None:
    """Enrollment + batch details for one member and month."""
    stmt = (
        select(
            Enrollment.batch_time,
            Enrollment.payment_status,
            Enrollment.month,
            Batch.monthly_fee,
            Batch.current_capacity,
            Batch.max_capacity,
        )
        .join(Batch, Batch.batch_time == Enrollment.batch_time)
        .where(Enrollment.member_id == member_id, Enrollment.month == month)
    )
    result = await db.execute(stmt)
    row = result.mappings().one_or_none()
    return dict(row) if row is not None else None
