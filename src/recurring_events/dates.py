"""Calendar date arithmetic.

All helpers take and return ``datetime.date`` values, which are immutable,
so every operation hands back a new date and never touches its input.
Month and year arithmetic clamps to the last valid day of the target month
instead of spilling into the following one.
"""

from __future__ import annotations

from datetime import date, datetime, timedelta
from typing import Any

from dateutil.parser import isoparse
from dateutil.relativedelta import relativedelta

from .const import DAYS_IN_WEEK, FEBRUARY
from .exceptions import InvalidDateError

_DAYS_PER_MONTH = (31, 28, 31, 30, 31, 30, 31, 31, 30, 31, 30, 31)


def is_leap_year(year: int) -> bool:
    """Return whether ``year`` is a Gregorian leap year."""
    if year % 400 == 0:
        return True
    if year % 100 == 0:
        return False
    return year % 4 == 0


def days_in_month(year: int, month: int) -> int:
    """Return the number of days in ``month`` (1-12) of ``year``."""
    if not 1 <= month <= 12:
        raise ValueError(f"month must be in 1..12, got {month}")
    if month == FEBRUARY and is_leap_year(year):
        return 29
    return _DAYS_PER_MONTH[month - 1]


def clamp_day_to_month(year: int, month: int, desired_day: int) -> date:
    """Build a date in ``year``/``month``, pulling ``desired_day`` back to
    the month's last day when the month is too short for it."""
    return date(year, month, min(desired_day, days_in_month(year, month)))


def add_days(value: date, days: int) -> date:
    return value + timedelta(days=days)


def add_weeks(value: date, weeks: int) -> date:
    return add_days(value, weeks * DAYS_IN_WEEK)


def add_months(value: date, months: int) -> date:
    """Shift ``value`` by ``months`` calendar months.

    Jan 31 + 1 month is Feb 28 (or Feb 29 in a leap year), never early March.
    """
    return value + relativedelta(months=months)


def add_years(value: date, years: int) -> date:
    """Shift ``value`` by ``years``; Feb 29 lands on Feb 28 in common years."""
    return value + relativedelta(years=years)


def format_date(value: date) -> str:
    """Format as zero-padded ``YYYY-MM-DD``."""
    return value.isoformat()


def parse_date(value: Any) -> date:
    """Coerce ``value`` to a ``date``.

    Accepts ``date``, ``datetime`` (time part dropped) and ISO 8601 strings.

    Raises:
        InvalidDateError: If the value cannot be interpreted as a date.
    """
    if isinstance(value, datetime):
        return value.date()
    if isinstance(value, date):
        return value
    if isinstance(value, str):
        try:
            return isoparse(value.strip()).date()
        except (ValueError, OverflowError) as err:
            raise InvalidDateError(value) from err
    raise InvalidDateError(value)
