"""Unit tests for the error hierarchy and request schemas."""

from datetime import time
from decimal import Decimal

import pydantic
import pytest

from gym_enrollment.api.schemas.enrollment import EnrollRequest
from gym_enrollment.core.constants import PaymentStatus
from gym_enrollment.core.errors import (
    EnrollmentError,
    InternalError,
    NotFoundError,
    ServiceUnavailableError,
    ValidationError,
)

pytestmark = pytest.mark.unit


class TestErrors:

    def test_status_codes(self):
        assert ValidationError("x").status_code == 400
        assert NotFoundError("x").status_code == 404
        assert InternalError().status_code == 500
        assert ServiceUnavailableError().status_code == 503
        assert issubclass(ValidationError, EnrollmentError)

    def test_body_merges_details(self):
        err = ValidationError("Insufficient payment amount", details={"required_amount": 1000})

        assert err.to_body() == {"error": "Insufficient payment amount", "required_amount": 1000}

    def test_internal_error_message_is_generic(self):
        assert InternalError().to_body() == {"error": "Internal server error"}


class TestEnrollRequest:

    def test_parses_short_batch_time_and_amount(self):
        req = EnrollRequest(
            name="A", email="a@x.com", phone="111", batch_time="06:00", payment_amount=1000
        )

        assert req.batch_time == time(6, 0)
        assert req.payment_amount == Decimal("1000")
        assert req.payment_status is None
        assert req.address is None

    def test_accepts_paid_status(self):
        req = EnrollRequest(
            name="A", email="a@x.com", phone="111", batch_time="06:00:00",
            payment_amount="1000.00", payment_status="paid",
        )

        assert req.payment_status is PaymentStatus.PAID

    @pytest.mark.parametrize("amount", [0, -10])
    def test_rejects_non_positive_amount(self, amount):
        with pytest.raises(pydantic.ValidationError):
            EnrollRequest(
                name="A", email="a@x.com", phone="111", batch_time="06:00", payment_amount=amount
            )

    def test_rejects_malformed_email(self):
        with pytest.raises(pydantic.ValidationError):
            EnrollRequest(
                name="A", email="not-an-email", phone="111", batch_time="06:00", payment_amount=1000
            )
