"""Exception hierarchy for the recurring events package."""

from __future__ import annotations

from typing import Any


class RecurringEventsError(Exception):
    """Base exception for all recurring events errors."""


class RecurrenceError(RecurringEventsError):
    """A recurrence rule or its inputs cannot be expanded."""


class UnsupportedRepeatTypeError(RecurrenceError):
    """The repeat type is not one of none/daily/weekly/monthly/yearly.

    Attributes:
        repeat_type: The offending value as supplied by the caller.
    """

    def __init__(self, repeat_type: Any) -> None:
        super().__init__(f"Unsupported repeat type: {repeat_type!r}")
        self.repeat_type = repeat_type


class InvalidIntervalError(RecurrenceError):
    """The recurrence interval is not a positive integer.

    Attributes:
        interval: The offending value as supplied by the caller.
    """

    def __init__(self, interval: Any) -> None:
        super().__init__(f"Invalid recurrence interval: {interval!r}")
        self.interval = interval


class InvalidDateError(RecurrenceError):
    """A date value could not be interpreted as a calendar date."""

    def __init__(self, value: Any) -> None:
        super().__init__(f"Invalid date: {value!r}")
        self.value = value


class ApiConnectionError(RecurringEventsError):
    """Events API is unreachable (network error, DNS, timeout)."""


class ApiResponseError(RecurringEventsError):
    """Events API returned an unexpected error response.

    Attributes:
        status_code: HTTP status code, if available.
    """

    def __init__(self, message: str, *, status_code: int | None = None) -> None:
        super().__init__(message)
        self.status_code = status_code
