"""
Date and time utilities for the Smart SAC backend
"""

from datetime import datetime, timedelta, timezone
from typing import Callable

from dateutil.relativedelta import relativedelta

# Source of "now" for anything that stamps rows; injectable for tests.
Clock = Callable[[], datetime]


class DateTimeHelper:
    """Date and time manipulation utilities"""

    @staticmethod
    def utcnow() -> datetime:
        """Current timezone-aware UTC datetime"""
        return datetime.now(timezone.utc)

    @staticmethod
    def add_months(value: datetime, months: int) -> datetime:
        """
        Add calendar months, clamping to the last day of the target month
        (e.g. Nov 30 + 3 months -> Feb 28/29).
        """
        return value + relativedelta(months=months)

    @staticmethod
    def add_days(value: datetime, days: int) -> datetime:
        return value + timedelta(days=days)

    @staticmethod
    def as_utc(value: datetime) -> datetime:
        """
        Treat naive datetimes as UTC.

        Some drivers (SQLite) return naive values for timezone-aware columns.
        """
        if value.tzinfo is None:
            return value.replace(tzinfo=timezone.utc)
        return value.astimezone(timezone.utc)
