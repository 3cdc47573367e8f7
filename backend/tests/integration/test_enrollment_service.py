"""Integration tests for the enroll transaction against SQLite."""

import asyncio
from datetime import date, time
from decimal import Decimal
from unittest.mock import AsyncMock

import pytest
from sqlalchemy import func, select

from gym_enrollment.api.schemas.enrollment import EnrollRequest
from gym_enrollment.core.errors import ValidationError
from gym_enrollment.db.models import Enrollment, Member, Payment
from gym_enrollment.repositories import members as member_repository
from gym_enrollment.services.enrollment import enroll_member

pytestmark = pytest.mark.integration

TODAY = date(2026, 3, 15)
SIX_AM = time(6, 0)


def make_request(**overrides) -> EnrollRequest:
    data = {
        "name": "A",
        "email": "a@x.com",
        "phone": "111",
        "batch_time": "06:00:00",
        "payment_amount": 1000,
        "payment_status": "paid",
    }
    data.update(overrides)
    return EnrollRequest(**data)


async def count(session_factory, model) -> int:
    async with session_factory() as session:
        return await session.scalar(select(func.count()).select_from(model))


class TestEnrollMember:
    """Tests for a single enrollment."""

    async def test_paid_enrollment_creates_member_enrollment_payment(
        self, db, session_factory, seeded, get_batch
    ):
        result = await enroll_member(db, make_request(), today=TODAY)

        assert result.batch_time == SIX_AM
        assert await count(session_factory, Member) == 1
        assert await count(session_factory, Payment) == 1

        async with session_factory() as session:
            enrollment = await session.get(Enrollment, result.enrollment_id)
            assert enrollment.member_id == result.member_id
            assert enrollment.month == date(2026, 3, 1)
            assert enrollment.amount == Decimal("1000.00")
            assert enrollment.payment_status == "paid"
            payment = await session.scalar(select(Payment))
            assert payment.enrollment_id == enrollment.id
            assert payment.amount == Decimal("1000.00")
            assert payment.transaction_id.startswith("TXN")

        batch = await get_batch(SIX_AM)
        assert batch.current_capacity == 1

    async def test_pending_enrollment_has_no_payment(self, db, session_factory, seeded):
        result = await enroll_member(
            db, make_request(payment_status="pending", payment_amount=1200), today=TODAY
        )

        assert await count(session_factory, Payment) == 0
        async with session_factory() as session:
            enrollment = await session.get(Enrollment, result.enrollment_id)
            assert enrollment.payment_status == "pending"
            assert enrollment.amount == Decimal("1200.00")

    async def test_missing_payment_status_defaults_to_pending(self, db, session_factory, seeded):
        result = await enroll_member(db, make_request(payment_status=None), today=TODAY)

        async with session_factory() as session:
            enrollment = await session.get(Enrollment, result.enrollment_id)
        assert enrollment.payment_status == "pending"
        assert await count(session_factory, Payment) == 0

    async def test_unknown_batch_is_rejected(self, db, session_factory, seeded):
        with pytest.raises(ValidationError, match="Invalid batch time"):
            await enroll_member(db, make_request(batch_time="09:30:00"), today=TODAY)
        assert await count(session_factory, Member) == 0

    async def test_insufficient_payment_writes_nothing(self, db, session_factory, seeded, get_batch):
        with pytest.raises(ValidationError) as exc_info:
            await enroll_member(db, make_request(payment_amount=500), today=TODAY)

        assert exc_info.value.message == "Insufficient payment amount"
        assert exc_info.value.details == {"required_amount": Decimal("1000.00")}
        assert await count(session_factory, Member) == 0
        assert await count(session_factory, Enrollment) == 0
        assert await count(session_factory, Payment) == 0
        assert (await get_batch(SIX_AM)).current_capacity == 0

    async def test_full_batch_is_rejected_and_capacity_unchanged(
        self, db, session_factory, seeded, set_batch, get_batch
    ):
        await set_batch(SIX_AM, current_capacity=30)

        with pytest.raises(ValidationError, match="Selected batch is full"):
            await enroll_member(db, make_request(), today=TODAY)

        assert (await get_batch(SIX_AM)).current_capacity == 30
        assert await count(session_factory, Member) == 0

    async def test_duplicate_email_keeps_first_member(self, session_factory, seeded, get_batch):
        async with session_factory() as session:
            first = await enroll_member(session, make_request(name="First"), today=TODAY)

        async with session_factory() as session:
            with pytest.raises(ValidationError, match="Email already registered"):
                await enroll_member(
                    session,
                    make_request(name="Second", email="A@X.com"),
                    today=TODAY,
                )

        async with session_factory() as session:
            members = (await session.scalars(select(Member))).all()
        assert [m.id for m in members] == [first.member_id]
        assert members[0].name == "First"
        assert (await get_batch(SIX_AM)).current_capacity == 1

    async def test_email_taken_after_check_maps_to_duplicate(
        self, session_factory, seeded, get_batch, monkeypatch
    ):
        async with session_factory() as session:
            await enroll_member(session, make_request(name="First"), today=TODAY)

        # The pre-check misses the existing row, so the unique index rejects the insert.
        monkeypatch.setattr(
            member_repository, "get_member_by_email", AsyncMock(return_value=None)
        )
        async with session_factory() as session:
            with pytest.raises(ValidationError, match="Email already registered"):
                await enroll_member(session, make_request(name="Second"), today=TODAY)

        assert await count(session_factory, Member) == 1
        assert await count(session_factory, Enrollment) == 1
        assert await count(session_factory, Payment) == 1
        assert (await get_batch(SIX_AM)).current_capacity == 1


class TestConcurrentEnrollment:
    """Seat reservation under concurrent requests."""

    async def test_never_exceeds_capacity(self, session_factory, seeded, set_batch, get_batch):
        await set_batch(SIX_AM, current_capacity=27)  # 3 seats left
        attempts = 8

        async def attempt(i: int):
            async with session_factory() as session:
                return await enroll_member(
                    session,
                    make_request(name=f"M{i}", email=f"m{i}@x.com"),
                    today=TODAY,
                )

        results = await asyncio.gather(
            *(attempt(i) for i in range(attempts)), return_exceptions=True
        )

        succeeded = [r for r in results if not isinstance(r, Exception)]
        failed = [r for r in results if isinstance(r, Exception)]
        assert len(succeeded) == 3
        assert len(failed) == attempts - 3
        assert all(isinstance(err, ValidationError) for err in failed)
        assert {err.message for err in failed} == {"Selected batch is full"}

        batch = await get_batch(SIX_AM)
        assert batch.current_capacity == batch.max_capacity == 30
        assert await count(session_factory, Member) == 3

    async def test_same_email_registers_once(self, session_factory, seeded, get_batch):
        attempts = 4

        async def attempt(i: int):
            async with session_factory() as session:
                return await enroll_member(
                    session,
                    make_request(name=f"M{i}", email="same@x.com"),
                    today=TODAY,
                )

        results = await asyncio.gather(
            *(attempt(i) for i in range(attempts)), return_exceptions=True
        )

        failed = [r for r in results if isinstance(r, Exception)]
        assert len(failed) == attempts - 1
        assert all(isinstance(err, ValidationError) for err in failed)
        assert {err.message for err in failed} == {"Email already registered"}

        assert await count(session_factory, Member) == 1
        assert await count(session_factory, Enrollment) == 1
        assert (await get_batch(SIX_AM)).current_capacity == 1
