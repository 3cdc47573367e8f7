"""
Domain exception hierarchy for enrollment operations.

Every exception carries the HTTP status it maps to and an optional
``details`` dict that is merged into the JSON error body, e.g.
``{"error": "Insufficient payment amount", "required_amount": 1000.0}``.
The exception handlers registered in ``main.py`` do the translation.
"""

from __future__ import annotations

from typing import Any

from fastapi import status
from sqlalchemy.exc import DBAPIError, OperationalError
from sqlalchemy.exc import TimeoutError as PoolTimeoutError


class EnrollmentError(Exception):
    """Base exception for all enrollment errors."""

    status_code: int = status.HTTP_500_INTERNAL_SERVER_ERROR

    def __init__(
        self,
        message: str,
        *,
        details: dict[str, Any] | None = None,
    ) -> None:
        self.message = message
        self.details = details or {}
        super().__init__(message)

    def to_body(self) -> dict[str, Any]:
        """JSON body sent to the client."""
        return {"error": self.message, **self.details}


class ValidationError(EnrollmentError):
    """Request rejected by a business rule (full batch, duplicate email, ...)."""

    status_code = status.HTTP_400_BAD_REQUEST


class NotFoundError(EnrollmentError):
    """Member or enrollment does not exist."""

    status_code = status.HTTP_404_NOT_FOUND


class InternalError(EnrollmentError):
    """Unexpected failure; the cause is logged, never returned."""

    def __init__(self, message: str = "Internal server error") -> None:
        super().__init__(message)


class ServiceUnavailableError(EnrollmentError):
    """The store could not be reached or timed out."""

    status_code = status.HTTP_503_SERVICE_UNAVAILABLE

    def __init__(self, message: str = "Service temporarily unavailable") -> None:
        super().__init__(message)


def is_store_unavailable(exc: BaseException) -> bool:
    """True when *exc* means the store is down or timed out rather than a bug."""
    if isinstance(exc, (OperationalError, PoolTimeoutError, TimeoutError)):
        return True
    return isinstance(exc, DBAPIError) and exc.connection_invalidated
