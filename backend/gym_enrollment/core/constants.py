"""Shared constants and enums used across the application."""

from datetime import time
from enum import StrEnum


class PaymentStatus(StrEnum):
    """Payment state of a monthly enrollment."""

    PENDING = "pending"
    PAID = "paid"


# Daily time slots seeded at bootstrap.
DEFAULT_BATCH_TIMES: tuple[time, ...] = (
    time(6, 0),
    time(7, 0),
    time(8, 0),
    time(17, 0),
    time(18, 0),
)

TRANSACTION_ID_PREFIX = "TXN"

API_PREFIX = "/api/enrollment"
