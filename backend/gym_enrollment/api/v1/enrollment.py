"""Enrollment endpoints: batches, enroll, change-batch, and dues reporting."""

from __future__ import annotations

from datetime import date

from fastapi import APIRouter, Depends, status
from sqlalchemy.ext.asyncio import AsyncSession

from gym_enrollment.api.deps import get_db
from gym_enrollment.api.schemas.enrollment import (
    BatchResponse,
    ChangeBatchRequest,
    ChangeBatchResponse,
    CurrentBatchResponse,
    EnrollRequest,
    EnrollResponse,
    OutstandingDuesResponse,
    UnpaidEnrollmentResponse,
)
from gym_enrollment.core.dates import month_start
from gym_enrollment.core.errors import NotFoundError
from gym_enrollment.repositories import batches as batch_repository
from gym_enrollment.repositories import enrollments as enrollment_repository
from gym_enrollment.services import enrollment as enrollment_service

router = APIRouter(tags=["Enrollment"])


@router.get("/available-batches", response_model=list[BatchResponse])
async def list_available_batches(
    only_open: bool = False,
    db: AsyncSession = Depends(get_db),
) -> list[BatchResponse]:
    """All batch slots with occupancy and fee; `only_open=true` hides full ones."""
    batches = await batch_repository.list_batches(db, only_open=only_open)
    return [BatchResponse.model_validate(batch) for batch in batches]


@router.post(
    "/enroll",
    response_model=EnrollResponse,
    status_code=status.HTTP_201_CREATED,
)
async def enroll(payload: EnrollRequest, db: AsyncSession = Depends(get_db)) -> EnrollResponse:
    """Register a member into a batch for the current month."""
    return await enrollment_service.enroll_member(db, payload)


@router.get("/unpaid", response_model=list[UnpaidEnrollmentResponse])
async def list_unpaid(db: AsyncSession = Depends(get_db)) -> list[UnpaidEnrollmentResponse]:
    """Enrollments still waiting for payment."""
    rows = await enrollment_repository.list_unpaid(db)
    return [UnpaidEnrollmentResponse(**row) for row in rows]


@router.get("/outstanding-dues", response_model=list[OutstandingDuesResponse])
async def list_outstanding_dues(
    db: AsyncSession = Depends(get_db),
) -> list[OutstandingDuesResponse]:
    """Pending months and total dues per member."""
    rows = await enrollment_repository.list_outstanding_dues(db)
    return [OutstandingDuesResponse(**row) for row in rows]


@router.post("/change-batch", response_model=ChangeBatchResponse)
async def change_batch(
    payload: ChangeBatchRequest,
    db: AsyncSession = Depends(get_db),
) -> ChangeBatchResponse:
    """Move a member to another batch from next month on."""
    return await enrollment_service.change_batch(db, payload)


@router.get("/member/{member_id}/current-batch", response_model=CurrentBatchResponse)
async def get_current_batch(
    member_id: int,
    db: AsyncSession = Depends(get_db),
) -> CurrentBatchResponse:
    """The member's batch for the current month."""
    row = await enrollment_repository.get_current_batch(
        db, member_id, month_start(date.today())
    )
    if row is None:
        raise NotFoundError("No active enrollment found for this month")
    return CurrentBatchResponse(**row)


@router.get("/test")
async def ping() -> dict[str, str]:
    """Liveness probe for the enrollment API."""
    return {"message": "API is working"}
