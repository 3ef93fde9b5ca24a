"""Calendar window helpers for stats and analytics."""

from __future__ import annotations

import calendar
from datetime import date, timedelta

from ..errors import ValidationError

ANALYTICS_PERIODS = ("week", "month", "year")


def months_before(day: date, months: int) -> date:
    """Same day-of-month ``months`` earlier, clamped to the month's length."""

    index = day.year * 12 + (day.month - 1) - months
    year, month = divmod(index, 12)
    month += 1
    return date(year, month, min(day.day, calendar.monthrange(year, month)[1]))


def period_start(period: str, today: date) -> date:
    """First day included in an analytics ``period`` ending today."""

    if period == "week":
        return today - timedelta(days=7)
    if period == "month":
        return months_before(today, 1)
    if period == "year":
        return months_before(today, 12)
    raise ValidationError(f"Unknown period: {period}; expected one of {', '.join(ANALYTICS_PERIODS)}")


def bucket_key(day: date, period: str) -> str:
    """Daily buckets for week/month, monthly buckets for year."""

    if period == "year":
        return day.strftime("%Y-%m")
    return day.isoformat()
