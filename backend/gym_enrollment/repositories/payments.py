"""
Payment repository — payment rows are insert-only.
"""

from __future__ import annotations

import time
import uuid
from decimal import Decimal

from sqlalchemy.ext.asyncio import AsyncSession

from gym_enrollment.core.constants import TRANSACTION_ID_PREFIX
from gym_enrollment.db.models.payment import Payment


def generate_transaction_id(now_ms: int | None = None) -> str:
    """
    `TXN<epoch-ms>-<12 hex chars>`.

    The millisecond part keeps ids roughly time-ordered; the random suffix
    keeps them unique when two payments land in the same millisecond.
    """
    if now_ms is None:
        now_ms = time.time_ns() // 1_000_000
    return f"{TRANSACTION_ID_PREFIX}{now_ms}-{uuid.uuid4().hex[:12]}"


async def create_payment(
    db: AsyncSession,
    *,
    enrollment_id: int,
    amount: Decimal,
    transaction_id: str | None = None,
) -> Payment:
    """Record a payment against an enrollment."""
    payment = Payment(
        enrollment_id=enrollment_id,
        amount=amount,
        transaction_id=transaction_id or generate_transaction_id(),
    )
    db.add(payment)
    await db.flush()
    return payment

