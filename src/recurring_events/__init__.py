"""Recurring calendar event generation and an async client for storing it."""

from .const import RECURRENCE_HORIZON, __version__
from ._client import EventsApiClient
from .dates import (
    add_days,
    add_months,
    add_weeks,
    add_years,
    clamp_day_to_month,
    days_in_month,
    format_date,
    is_leap_year,
    parse_date,
)
from .exceptions import (
    ApiConnectionError,
    ApiResponseError,
    InvalidDateError,
    InvalidIntervalError,
    RecurrenceError,
    RecurringEventsError,
    UnsupportedRepeatTypeError,
)
from .groups import (
    apply_group_update,
    detach_occurrence,
    find_recurring_group,
    is_same_group,
)
from .models import Event, EventTemplate, Occurrence, RepeatSpec, RepeatType
from .recurrence import RecurrenceGenerator, generate_recurring_events

__all__ = [
    "__version__",
    "RECURRENCE_HORIZON",
    "EventsApiClient",
    "RecurrenceGenerator",
    "generate_recurring_events",
    "add_days",
    "add_months",
    "add_weeks",
    "add_years",
    "clamp_day_to_month",
    "days_in_month",
    "format_date",
    "is_leap_year",
    "parse_date",
    "apply_group_update",
    "detach_occurrence",
    "find_recurring_group",
    "is_same_group",
    "ApiConnectionError",
    "ApiResponseError",
    "InvalidDateError",
    "InvalidIntervalError",
    "RecurrenceError",
    "RecurringEventsError",
    "UnsupportedRepeatTypeError",
    "Event",
    "EventTemplate",
    "Occurrence",
    "RepeatSpec",
    "RepeatType",
]
