"""
Date helpers for subscription terms
"""
import calendar
from datetime import datetime, timezone


def utcnow() -> datetime:
    """Current UTC time as a naive datetime, matching what pymongo returns from BSON dates"""
    return datetime.now(timezone.utc).replace(tzinfo=None)


def add_months(value: datetime, months: int) -> datetime:
    """
    Add calendar months to a datetime

    The day is clamped to the last valid day of the target month, so
    Jan 31 + 1 month is Feb 29 in a leap year and Feb 28 otherwise.
    Time of day is preserved.

    Args:
        value: Starting datetime
        months: Number of months to add (may be negative)

    Returns:
        Shifted datetime
    """
    month_index = value.month - 1 + months
    year = value.year + month_index // 12
    month = month_index % 12 + 1
    day = min(value.day, calendar.monthrange(year, month)[1])
    return value.replace(year=year, month=month, day=day)
