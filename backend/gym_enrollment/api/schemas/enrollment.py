"""Enrollment request/response schemas."""

from __future__ import annotations

from datetime import date, time
from decimal import Decimal

from pydantic import BaseModel, ConfigDict, Field

from gym_enrollment.core.constants import PaymentStatus


# ─── Requests ─────────────────────────────────
class EnrollRequest(BaseModel):
    """Request payload for POST /enroll."""

    name: str = Field(..., min_length=1, max_length=255)
    email: str = Field(..., min_length=3, max_length=255, pattern=r"^[^@\s]+@[^@\s]+$")
    address: str | None = None
    phone: str = Field(..., min_length=1, max_length=15)
    batch_time: time
    payment_amount: Decimal = Field(..., gt=0, max_digits=10, decimal_places=2)
    payment_status: PaymentStatus | None = None


class ChangeBatchRequest(BaseModel):
    """Request payload for POST /change-batch."""

    email: str = Field(..., min_length=3, max_length=255)
    name: str = Field(..., min_length=1, max_length=255)
    new_batch_time: time


# ─── Responses ────────────────────────────────
class BatchResponse(BaseModel):
    """One row of GET /available-batches."""

    model_config = ConfigDict(from_attributes=True)

    batch_time: time
    current_capacity: int
    max_capacity: int
    monthly_fee: float


class EnrollResponse(BaseModel):
    """Result of a committed enrollment."""

    model_config = ConfigDict(populate_by_name=True)

    message: str = "Enrollment successful"
    member_id: int = Field(..., alias="memberId")
    enrollment_id: int = Field(..., alias="enrollmentId")
    batch_time: time


class ChangeBatchResponse(BaseModel):
    """Result of a committed batch change."""

    message: str = "Batch changed for next month"
    new_batch_time: time
    month: date


class UnpaidEnrollmentResponse(BaseModel):
    name: str
    email: str
    batch_time: time
    amount: float
    payment_status: PaymentStatus
    month: date


class OutstandingDuesResponse(BaseModel):
    name: str
    email: str
    pending_months: int
    total_dues: float


class CurrentBatchResponse(BaseModel):
    """Current-month enrollment joined with its batch."""

    batch_time: time
    payment_status: PaymentStatus
    month: date
    monthly_fee: float
    current_capacity: int
    max_capacity: int
