"""
Enrollment transaction manager.

Each public coroutine runs one all-or-nothing unit of work on the session
it is given:

    enroll_member   validate batch / fee / email, create member, enrollment,
                    optional payment, reserve a seat
    change_batch    move a member to another batch from next month on,
                    releasing the old seat and reserving the new one

All validation happens before the first write. Whatever goes wrong, the
transaction is rolled back before the exception leaves this module, so a
handler can never answer while a transaction is still open.
"""

from __future__ import annotations

from collections.abc import AsyncIterator
from contextlib import asynccontextmanager
from datetime import date

from sqlalchemy.exc import IntegrityError
from sqlalchemy.ext.asyncio import AsyncSession

from gym_enrollment.api.schemas.enrollment import (
    ChangeBatchRequest,
    ChangeBatchResponse,
    EnrollRequest,
    EnrollResponse,
)
from gym_enrollment.core.constants import PaymentStatus
from gym_enrollment.core.dates import month_start, next_month_start
from gym_enrollment.core.errors import (
    EnrollmentError,
    InternalError,
    NotFoundError,
    ServiceUnavailableError,
    ValidationError,
    is_store_unavailable,
)
from gym_enrollment.core.logging import get_logger
from gym_enrollment.repositories import batches as batch_repository
from gym_enrollment.repositories import enrollments as enrollment_repository
from gym_enrollment.repositories import members as member_repository
from gym_enrollment.repositories import payments as payment_repository

logger = get_logger(__name__)


@asynccontextmanager
async def unit_of_work(db: AsyncSession, operation: str) -> AsyncIterator[None]:
    """Commit on success; roll back and translate the error otherwise."""
    try:
        yield
        await db.commit()
    except EnrollmentError as exc:
        await db.rollback()
        logger.info(
            "Operation rejected",
            operation=operation,
            reason=exc.message,
            status=exc.status_code,
        )
        raise
    except Exception as exc:
        await db.rollback()
        if is_store_unavailable(exc):
            logger.exception("Store unavailable", operation=operation)
            raise ServiceUnavailableError() from exc
        logger.exception("Operation failed", operation=operation)
        raise InternalError() from exc


# ─── Enroll ───────────────────────────────────
async def enroll_member(
    db: AsyncSession,
    payload: EnrollRequest,
    *,
    today: date | None = None,
) -> EnrollResponse:
    """Register a new member into a batch for the current month."""
    month = month_start(today or date.today())
    payment_status = payload.payment_status or PaymentStatus.PENDING

    async with unit_of_work(db, "Enrollment"):
        batch = await batch_repository.get_batch_by_time(
            db, payload.batch_time, for_update=True
        )
        if batch is None:
            raise ValidationError("Invalid batch time")
        if batch.is_full:
            raise ValidationError("Selected batch is full")
        if payload.payment_amount < batch.monthly_fee:
            raise ValidationError(
                "Insufficient payment amount",
                details={"required_amount": batch.monthly_fee},
            )
        if await member_repository.get_member_by_email(db, payload.email) is not None:
            raise ValidationError("Email already registered")

        try:
            member = await member_repository.create_member(
                db,
                name=payload.name,
                email=payload.email,
                phone=payload.phone,
                address=payload.address,
            )
        except IntegrityError as exc:
            # Another request registered the same email after our check.
            raise ValidationError("Email already registered") from exc

        enrollment = await enrollment_repository.create_enrollment(
            db,
            member_id=member.id,
            batch_time=batch.batch_time,
            month=month,
            amount=payload.payment_amount,
            payment_status=payment_status.value,
        )

        if payment_status == PaymentStatus.PAID:
            await payment_repository.create_payment(
                db,
                enrollment_id=enrollment.id,
                amount=payload.payment_amount,
            )

        if not await batch_repository.reserve_seat(db, batch.batch_time):
            raise ValidationError("Selected batch is full")

    logger.info(
        "Member enrolled",
        member_id=member.id,
        enrollment_id=enrollment.id,
        batch_time=str(batch.batch_time),
        month=month.isoformat(),
        payment_status=payment_status.value,
    )
    return EnrollResponse(
        member_id=member.id,
        enrollment_id=enrollment.id,
        batch_time=batch.batch_time,
    )


# ─── Change batch ─────────────────────────────
async def change_batch(
    db: AsyncSession,
    payload: ChangeBatchRequest,
    *,
    today: date | None = None,
) -> ChangeBatchResponse:
    """
    Move a member to `new_batch_time` starting next month.

    The old seat (next month's batch if already set, otherwise this month's)
    is released and a seat in the new batch is reserved in the same
    transaction; next month's enrollment is created or updated with the new
    batch's fee and a pending status.
    """
    current_month = month_start(today or date.today())
    target_month = next_month_start(current_month)

    async with unit_of_work(db, "Batch change"):
        new_batch = await batch_repository.get_batch_by_time(db, payload.new_batch_time)
        if new_batch is None:
            raise ValidationError("Invalid batch time")
        if new_batch.is_full:
            raise ValidationError("Selected batch is full")

        member = await member_repository.get_member_by_email_and_name(
            db, payload.email, payload.name, for_update=True
        )
        if member is None:
            raise NotFoundError("Member not found. Please check your email and name.")

        current = await enrollment_repository.get_enrollment_for_month(
            db, member.id, current_month
        )
        if current is None:
            raise NotFoundError("No active enrollment found for current month")

        upcoming = await enrollment_repository.get_enrollment_for_month(
            db, member.id, target_month, for_update=True
        )
        old_batch_time = upcoming.batch_time if upcoming is not None else current.batch_time
        if old_batch_time == new_batch.batch_time:
            raise ValidationError("Already enrolled in this batch")

        await batch_repository.lock_batches(db, [old_batch_time, new_batch.batch_time])
        if not await batch_repository.reserve_seat(db, new_batch.batch_time):
            raise ValidationError("Selected batch is full")
        if not await batch_repository.release_seat(db, old_batch_time):
            logger.warning(
                "Old batch occupancy already zero",
                member_id=member.id,
                batch_time=str(old_batch_time),
            )

        if upcoming is None:
            try:
                upcoming = await enrollment_repository.create_enrollment(
                    db,
                    member_id=member.id,
                    batch_time=new_batch.batch_time,
                    month=target_month,
                    amount=new_batch.monthly_fee,
                    payment_status=PaymentStatus.PENDING.value,
                )
            except IntegrityError as exc:
                # A parallel change for the same member created the row first.
                raise ValidationError("Batch change already in progress, please retry") from exc
        else:
            await enrollment_repository.move_enrollment(
                db,
                upcoming,
                batch_time=new_batch.batch_time,
                amount=new_batch.monthly_fee,
            )

    logger.info(
        "Batch changed",
        member_id=member.id,
        enrollment_id=upcoming.id,
        old_batch_time=str(old_batch_time),
        new_batch_time=str(new_batch.batch_time),
        month=target_month.isoformat(),
    )
    return ChangeBatchResponse(new_batch_time=new_batch.batch_time, month=target_month)
