"""API schema package."""

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

__all__ = [
    "BatchResponse",
    "ChangeBatchRequest",
    "ChangeBatchResponse",
    "CurrentBatchResponse",
    "EnrollRequest",
    "EnrollResponse",
    "OutstandingDuesResponse",
    "UnpaidEnrollmentResponse",
]
