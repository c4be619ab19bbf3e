"""Helpers for treating persisted occurrences of one series as a group.

The events API stores every occurrence as an independent event with no
series identifier. Occurrences of the same series are recognised by sharing
their repeat type, title and time slot.
"""

from __future__ import annotations

from collections.abc import Iterable
from dataclasses import replace

from .models import Event, RepeatType


def is_same_group(event: Event, reference: Event) -> bool:
    """Whether ``event`` belongs to the same recurring series as ``reference``."""
    return (
        event.is_recurring
        and reference.is_recurring
        and RepeatType(event.repeat.type) is RepeatType(reference.repeat.type)
        and event.title == reference.title
        and event.start_time == reference.start_time
        and event.end_time == reference.end_time
    )


def find_recurring_group(events: Iterable[Event], reference: Event) -> list[Event]:
    """Return the members of ``reference``'s series, in input order.

    A non-recurring reference has no group, so the result is empty.
    """
    return [event for event in events if is_same_group(event, reference)]


def apply_group_update(group_event: Event, modified: Event) -> Event:
    """Copy the editable fields of ``modified`` onto one group member.

    The member keeps its own id, date and repeat rule.
    """
    return replace(
        group_event,
        title=modified.title,
        description=modified.description,
        location=modified.location,
        category=modified.category,
        notification_time=modified.notification_time,
        start_time=modified.start_time,
        end_time=modified.end_time,
    )


def detach_occurrence(event: Event) -> Event:
    """Turn one occurrence into a standalone event by clearing its repeat type."""
    return event.with_repeat_type(RepeatType.NONE)
