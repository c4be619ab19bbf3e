"""Events API client."""

from __future__ import annotations

import logging
from collections.abc import Iterable
from datetime import date
from typing import Any

import aiohttp

from ._serialization import camelize, decamelize
from ._throttle import RequestThrottle
from .const import (
    DEFAULT_BASE_URL,
    DEFAULT_THROTTLE_SECONDS,
    EVENT_DETAIL_ENDPOINT,
    EVENTS_ENDPOINT,
    RECURRENCE_HORIZON,
)
from .exceptions import ApiConnectionError, ApiResponseError
from .groups import apply_group_update, detach_occurrence, find_recurring_group
from .models import Event, EventTemplate, Occurrence
from .recurrence import RecurrenceGenerator

_LOGGER = logging.getLogger(__name__)


class EventsApiClient:
    """Async client for the calendar's events REST API.

    Usage::

        async with aiohttp.ClientSession() as session:
            client = EventsApiClient(session, base_url="http://localhost:3000")
            created = await client.async_create_recurring_event(
                template, date(2025, 1, 6), date(2025, 3, 31)
            )

    If no session is provided, the client creates and manages its own.
    The caller is responsible for calling ``async_close()`` when done
    (or use the client as an async context manager).

    Every bulk operation issues its requests one at a time, in order. The
    first failing request aborts the operation and its error propagates;
    requests already sent are not rolled back.
    """

    def __init__(
        self,
        session: aiohttp.ClientSession | None = None,
        *,
        base_url: str = DEFAULT_BASE_URL,
        request_interval: float = DEFAULT_THROTTLE_SECONDS,
        horizon: date | str = RECURRENCE_HORIZON,
    ) -> None:
        self._owns_session = session is None
        self._session = session or aiohttp.ClientSession()
        self._base_url = base_url.rstrip("/")
        self._throttle = RequestThrottle(min_interval=request_interval)
        self._generator = RecurrenceGenerator(horizon=horizon)

    async def __aenter__(self) -> EventsApiClient:
        return self

    async def __aexit__(self, *_: Any) -> None:
        await self.async_close()

    async def async_close(self) -> None:
        """Close the HTTP session if the client owns it."""
        if self._owns_session:
            await self._session.close()

    # ------------------------------------------------------------------ #
    #  Single events
    # ------------------------------------------------------------------ #

    async def async_get_events(self) -> list[Event]:
        """Fetch every stored event."""
        data = await self._request("GET", EVENTS_ENDPOINT)
        raw = data if isinstance(data, list) else (data or {}).get("events", [])
        return [Event.from_api_response(e) for e in raw]

    async def async_create_event(self, occurrence: Occurrence) -> Event:
        """Store a new event; the backend assigns its id."""
        data = await self._request(
            "POST", EVENTS_ENDPOINT, json_body=occurrence.to_api_dict()
        )
        return Event.from_api_response(data)

    async def async_update_event(self, event: Event) -> Event:
        """Replace a stored event."""
        url = EVENT_DETAIL_ENDPOINT.format(event_id=event.id)
        data = await self._request("PUT", url, json_body=event.to_api_dict())
        return Event.from_api_response(data) if data else event

    async def async_delete_event(self, event_id: str) -> None:
        """Delete a stored event."""
        url = EVENT_DETAIL_ENDPOINT.format(event_id=event_id)
        await self._request("DELETE", url)

    # ------------------------------------------------------------------ #
    #  Recurring series
    # ------------------------------------------------------------------ #

    async def async_create_events(self, occurrences: Iterable[Occurrence]) -> list[Event]:
        """Store each occurrence with its own POST, in order."""
        created: list[Event] = []
        for occurrence in occurrences:
            try:
                created.append(await self.async_create_event(occurrence))
            except (ApiConnectionError, ApiResponseError):
                _LOGGER.warning(
                    "Failed to store occurrence %s of %r after %d stored",
                    occurrence.date, occurrence.title, len(created),
                )
                raise
        return created

    async def async_create_recurring_event(
        self,
        template: EventTemplate,
        start_date: date | str,
        end_date: date | str | None = None,
    ) -> list[Event]:
        """Expand ``template`` by its repeat rule and store every occurrence.

        Raises:
            RecurrenceError: If the repeat rule or dates are invalid; nothing
                is sent in that case.
        """
        occurrences = self._generator.generate(
            template, template.repeat, start_date, end_date
        )
        return await self.async_create_events(occurrences)

    async def async_update_single_recurring_event(self, event: Event) -> Event:
        """Save ``event`` detached from its series as a standalone event."""
        return await self.async_update_event(detach_occurrence(event))

    async def async_update_all_recurring_events(
        self,
        modified: Event,
        original: Event | None = None,
    ) -> list[Event]:
        """Apply the edits in ``modified`` to every member of its series.

        The series is identified from ``original`` when given (the event as
        it was before editing), otherwise from ``modified``. Each member keeps
        its own id, date and repeat rule.
        """
        group = find_recurring_group(await self.async_get_events(), original or modified)
        _LOGGER.debug("Updating %d event(s) in series %r", len(group), modified.title)
        updated: list[Event] = []
        for member in group:
            updated.append(
                await self.async_update_event(apply_group_update(member, modified))
            )
        return updated

    async def async_delete_all_recurring_events(self, reference: Event) -> int:
        """Delete every member of ``reference``'s series.

        Returns:
            The number of events deleted.
        """
        group = find_recurring_group(await self.async_get_events(), reference)
        _LOGGER.debug("Deleting %d event(s) in series %r", len(group), reference.title)
        for member in group:
            await self.async_delete_event(member.id)
        return len(group)

    # ------------------------------------------------------------------ #
    #  Internal HTTP layer
    # ------------------------------------------------------------------ #

    async def _request(
        self,
        method: str,
        path: str,
        *,
        json_body: dict[str, Any] | None = None,
    ) -> Any:
        """Execute an API request with throttling and serialization.

        Outgoing JSON bodies are camelized; incoming JSON responses are
        decamelized.

        Raises:
            ApiResponseError: On non-2xx responses.
            ApiConnectionError: On network errors.
        """
        await self._throttle.acquire()

        kwargs: dict[str, Any] = {}
        if json_body is not None:
            kwargs["json"] = camelize(json_body)

        url = f"{self._base_url}{path}"
        _LOGGER.debug("%s %s", method, url)
        try:
            async with self._session.request(method, url, **kwargs) as resp:
                if resp.status == 204:
                    return None

                if resp.status >= 400:
                    body = await resp.text()
                    raise ApiResponseError(
                        f"API error: HTTP {resp.status} - {body}",
                        status_code=resp.status,
                    )

                data = await resp.json(content_type=None)
                return decamelize(data)

        except aiohttp.ClientError as err:
            raise ApiConnectionError(f"Connection error: {err}") from err
