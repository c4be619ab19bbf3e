"""Constants for the recurring events package."""

from datetime import date
from typing import Final

__version__ = "0.1.0"

# Hard ceiling: no occurrence is ever generated after this date.
RECURRENCE_HORIZON: Final = date(2025, 12, 31)

DAYS_IN_WEEK: Final = 7
LAST_DAY_OF_MONTH: Final = 31
FEBRUARY: Final = 2
LEAP_DAY: Final = 29

DEFAULT_BASE_URL: Final = "http://localhost:3000"
EVENTS_ENDPOINT: Final = "/api/events"
EVENT_DETAIL_ENDPOINT: Final = "/api/events/{event_id}"

DEFAULT_THROTTLE_SECONDS: Final = 0.1
