"""Data models for recurring events and the events API."""

from __future__ import annotations

import enum
import logging
from dataclasses import dataclass, field, replace
from datetime import date
from typing import Any

from .dates import format_date
from .exceptions import UnsupportedRepeatTypeError

_LOGGER = logging.getLogger(__name__)


class RepeatType(str, enum.Enum):
    """Cadence unit of a recurrence rule."""

    NONE = "none"
    DAILY = "daily"
    WEEKLY = "weekly"
    MONTHLY = "monthly"
    YEARLY = "yearly"


@dataclass(frozen=True)
class RepeatSpec:
    """A recurrence rule.

    ``end_date`` is the rule's own requested end (``YYYY-MM-DD``). It is
    advisory: generation is bounded by the end date handed to the generator
    and by the recurrence horizon.
    """

    type: RepeatType | str = RepeatType.NONE
    interval: int = 1
    end_date: str | None = None

    @classmethod
    def from_api_response(cls, data: dict[str, Any] | None) -> RepeatSpec:
        """Construct from a decamelized API response dict.

        Unknown repeat types are read as ``none`` so that one odd stored
        event does not make the whole listing unreadable.
        """
        if not data:
            return cls()
        return cls(
            type=_parse_stored_repeat_type(data.get("type")),
            interval=data.get("interval", 1),
            end_date=data.get("end_date") or None,
        )

    def to_api_dict(self) -> dict[str, Any]:
        body: dict[str, Any] = {
            "type": RepeatType(self.type).value,
            "interval": self.interval,
        }
        if self.end_date:
            body["end_date"] = self.end_date
        return body


@dataclass(frozen=True)
class EventTemplate:
    """Everything about an event except its identity and its date.

    Use ``at()`` to materialize an occurrence on a given day.
    """

    title: str
    start_time: str  # HH:MM
    end_time: str  # HH:MM
    description: str = ""
    location: str = ""
    category: str = ""
    notification_time: int = 10  # minutes before start
    repeat: RepeatSpec = field(default_factory=RepeatSpec)

    def at(self, day: date) -> Occurrence:
        """Return an occurrence of this template dated ``day``."""
        return Occurrence(
            date=format_date(day),
            title=self.title,
            start_time=self.start_time,
            end_time=self.end_time,
            description=self.description,
            location=self.location,
            category=self.category,
            notification_time=self.notification_time,
            repeat=self.repeat,
        )


@dataclass(frozen=True)
class Occurrence:
    """One concrete dated instance of an event template, not yet persisted."""

    date: str  # YYYY-MM-DD
    title: str
    start_time: str
    end_time: str
    description: str = ""
    location: str = ""
    category: str = ""
    notification_time: int = 10
    repeat: RepeatSpec = field(default_factory=RepeatSpec)

    def to_api_dict(self) -> dict[str, Any]:
        """Convert to a dict for the API request body (snake_case)."""
        return {
            "title": self.title,
            "date": self.date,
            "start_time": self.start_time,
            "end_time": self.end_time,
            "description": self.description,
            "location": self.location,
            "category": self.category,
            "repeat": self.repeat.to_api_dict(),
            "notification_time": self.notification_time,
        }


@dataclass(frozen=True)
class Event:
    """A persisted event as returned by the events API.

    Use ``dataclasses.replace()`` to derive modified copies.
    """

    id: str
    date: str
    title: str
    start_time: str
    end_time: str
    description: str = ""
    location: str = ""
    category: str = ""
    notification_time: int = 10
    repeat: RepeatSpec = field(default_factory=RepeatSpec)

    @classmethod
    def from_api_response(cls, data: dict[str, Any]) -> Event:
        """Construct from a decamelized API response dict."""
        return cls(
            id=str(data["id"]),
            date=data["date"],
            title=data.get("title", ""),
            start_time=data.get("start_time", ""),
            end_time=data.get("end_time", ""),
            description=data.get("description") or "",
            location=data.get("location") or "",
            category=data.get("category") or "",
            notification_time=data.get("notification_time", 10),
            repeat=RepeatSpec.from_api_response(data.get("repeat")),
        )

    @property
    def is_recurring(self) -> bool:
        """Whether this event belongs to a recurring series."""
        return self.repeat.type != RepeatType.NONE

    def to_api_dict(self) -> dict[str, Any]:
        """Convert to a dict for a PUT request body (snake_case)."""
        return {"id": self.id, **self.as_occurrence().to_api_dict()}

    def as_occurrence(self) -> Occurrence:
        """Drop the identity, keeping every other field."""
        return Occurrence(
            date=self.date,
            title=self.title,
            start_time=self.start_time,
            end_time=self.end_time,
            description=self.description,
            location=self.location,
            category=self.category,
            notification_time=self.notification_time,
            repeat=self.repeat,
        )

    def with_repeat_type(self, repeat_type: RepeatType) -> Event:
        return replace(self, repeat=replace(self.repeat, type=repeat_type))


def parse_repeat_type(value: Any) -> RepeatType:
    """Parse a repeat type.

    Raises:
        UnsupportedRepeatTypeError: For anything other than the five known types.
    """
    try:
        return RepeatType(value)
    except ValueError as err:
        raise UnsupportedRepeatTypeError(value) from err


def _parse_stored_repeat_type(value: Any) -> RepeatType:
    """Parse a repeat type read back from the API, defaulting to NONE."""
    if value is None:
        return RepeatType.NONE
    try:
        return parse_repeat_type(value)
    except UnsupportedRepeatTypeError:
        _LOGGER.debug("Unknown stored repeat type %r, reading as none", value)
        return RepeatType.NONE
