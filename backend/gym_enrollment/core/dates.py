"""Calendar-month helpers; enrollments are keyed by the first day of a month."""

from __future__ import annotations

from datetime import date


def month_start(day: date) -> date:
    """First day of the month containing *day*."""
    return day.replace(day=1)


def next_month_start(day: date) -> date:
    """First day of the month after the one containing *day*."""
    if day.month == 12:
        return date(day.year + 1, 1, 1)
    return date(day.year, day.month + 1, 1)
