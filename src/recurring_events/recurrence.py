"""Expansion of a recurring event into its dated occurrences."""

from __future__ import annotations

import logging
from datetime import date
from typing import Any

from .const import FEBRUARY, LAST_DAY_OF_MONTH, LEAP_DAY, RECURRENCE_HORIZON
from .dates import (
    add_days,
    add_months,
    add_weeks,
    add_years,
    clamp_day_to_month,
    days_in_month,
    is_leap_year,
    parse_date,
)
from .exceptions import InvalidIntervalError
from .models import EventTemplate, Occurrence, RepeatSpec, RepeatType, parse_repeat_type

_LOGGER = logging.getLogger(__name__)


class RecurrenceGenerator:
    """Generates occurrence dates for recurring events.

    No occurrence is ever produced after ``horizon``, whatever end date the
    caller asks for.

    Usage::

        generator = RecurrenceGenerator(horizon=date(2026, 6, 30))
        occurrences = generator.generate(
            template, RepeatSpec(RepeatType.WEEKLY, 2), "2026-01-05", "2026-03-31"
        )
    """

    def __init__(self, horizon: date | str = RECURRENCE_HORIZON) -> None:
        self._horizon = parse_date(horizon)

    @property
    def horizon(self) -> date:
        return self._horizon

    def effective_end_date(self, repeat_end_date: date) -> date:
        """Clamp a requested end date to the horizon."""
        if repeat_end_date > self._horizon:
            _LOGGER.debug(
                "Clamping end date %s to recurrence horizon %s",
                repeat_end_date, self._horizon,
            )
            return self._horizon
        return repeat_end_date

    def generate(
        self,
        base_event: EventTemplate,
        repeat: RepeatSpec,
        start_date: date | str,
        repeat_end_date: date | str | None = None,
    ) -> list[Occurrence]:
        """Expand ``base_event`` into occurrences between the start and end dates.

        Both bounds are inclusive. The result is strictly ascending by date.
        ``start_date`` after the effective end yields an empty list.

        When ``repeat_end_date`` is omitted, the rule's own ``end_date`` is
        used, falling back to the horizon. A non-repeating event is bounded
        by its own start date.

        Raises:
            UnsupportedRepeatTypeError: If ``repeat.type`` is not a known type.
            InvalidIntervalError: If ``repeat.interval`` is not a positive
                integer for a repeating type.
            InvalidDateError: If a date argument cannot be parsed.
        """
        repeat_type = parse_repeat_type(repeat.type)
        start = parse_date(start_date)

        if repeat_type is RepeatType.NONE:
            end = parse_date(repeat_end_date) if repeat_end_date is not None else start
            if start > self.effective_end_date(end):
                return []
            return [base_event.at(start)]

        interval = _validate_interval(repeat.interval)
        if repeat_end_date is None:
            repeat_end_date = repeat.end_date or self._horizon
        end = self.effective_end_date(parse_date(repeat_end_date))

        occurrences: list[Occurrence] = []
        current = start
        while current <= end:
            if _should_emit(repeat_type, current, start):
                occurrences.append(base_event.at(current))
            else:
                _LOGGER.debug("Skipping %s candidate %s", repeat_type.value, current)
            try:
                current = _next_candidate(repeat_type, current, interval, start)
            except (OverflowError, ValueError):
                # next step falls past date.max, so past any reachable end
                _LOGGER.debug(
                    "Stopping at %s: next %s step is out of range",
                    current, repeat_type.value,
                )
                break

        _LOGGER.debug(
            "Generated %d %s occurrence(s) of %r from %s to %s",
            len(occurrences), repeat_type.value, base_event.title, start, end,
        )
        return occurrences


_DEFAULT_GENERATOR = RecurrenceGenerator()


def generate_recurring_events(
    base_event: EventTemplate,
    repeat: RepeatSpec,
    start_date: date | str,
    repeat_end_date: date | str | None = None,
    *,
    horizon: date | str | None = None,
) -> list[Occurrence]:
    """Expand a recurring event, see ``RecurrenceGenerator.generate``.

    ``horizon`` overrides the default ``RECURRENCE_HORIZON`` for this call.
    """
    generator = _DEFAULT_GENERATOR if horizon is None else RecurrenceGenerator(horizon)
    return generator.generate(base_event, repeat, start_date, repeat_end_date)


# --------------------------------------------------------------------------- #
#  Stepping helpers
# --------------------------------------------------------------------------- #


def _validate_interval(interval: Any) -> int:
    # bool is an int subclass; True is not a meaningful step
    if isinstance(interval, bool) or not isinstance(interval, int) or interval < 1:
        raise InvalidIntervalError(interval)
    return interval


def _should_emit(repeat_type: RepeatType, candidate: date, start: date) -> bool:
    """Decide whether the candidate for this step becomes an occurrence.

    A series started on the 31st only lands in 31-day months, and one started
    on Feb 29 only lands in leap years. No substitute day is emitted.
    """
    if repeat_type is RepeatType.MONTHLY and start.day == LAST_DAY_OF_MONTH:
        return days_in_month(candidate.year, candidate.month) == LAST_DAY_OF_MONTH
    if (
        repeat_type is RepeatType.YEARLY
        and start.month == FEBRUARY
        and start.day == LEAP_DAY
    ):
        return is_leap_year(candidate.year)
    return True


def _next_candidate(
    repeat_type: RepeatType,
    current: date,
    interval: int,
    start: date,
) -> date:
    """Return the next candidate, re-pinned to the series' original day."""
    if repeat_type is RepeatType.DAILY:
        return add_days(current, interval)
    if repeat_type is RepeatType.WEEKLY:
        return add_weeks(current, interval)
    if repeat_type is RepeatType.MONTHLY:
        shifted = add_months(current, interval)
        return clamp_day_to_month(shifted.year, shifted.month, start.day)
    # yearly
    shifted = add_years(current, interval)
    return clamp_day_to_month(shifted.year, start.month, start.day)
