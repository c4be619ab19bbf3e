"""Conftest: an in-memory events backend for exercising the API client.

The backend mirrors the calendar server's ``/api/events`` routes: GET lists,
POST assigns a sequential id, PUT merges, DELETE removes. Tests drive the
client with ``asyncio.run`` against an ``aiohttp.test_utils.TestServer``.
"""

from __future__ import annotations

import asyncio
from collections.abc import Awaitable, Callable
from typing import Any

import pytest
from aiohttp import web
from aiohttp.test_utils import TestServer

from recurring_events import EventsApiClient


class FakeEventsBackend:
    """In-memory store behind the fake ``/api/events`` routes."""

    def __init__(
        self,
        events: list[dict[str, Any]] | None = None,
        *,
        fail_post_after: int | None = None,
        delete_status: int = 204,
    ) -> None:
        self.events: list[dict[str, Any]] = [dict(e) for e in events or []]
        self.requests: list[tuple[str, str, Any]] = []
        self._next_id = len(self.events) + 1
        self._fail_post_after = fail_post_after
        self._delete_status = delete_status

    def make_app(self) -> web.Application:
        app = web.Application()
        app.router.add_get("/api/events", self._list)
        app.router.add_post("/api/events", self._create)
        app.router.add_put("/api/events/{event_id}", self._update)
        app.router.add_delete("/api/events/{event_id}", self._delete)
        return app

    def _find(self, event_id: str) -> int | None:
        for index, event in enumerate(self.events):
            if event["id"] == event_id:
                return index
        return None

    async def _list(self, request: web.Request) -> web.Response:
        self.requests.append(("GET", request.path, None))
        return web.json_response({"events": self.events})

    async def _create(self, request: web.Request) -> web.Response:
        body = await request.json()
        self.requests.append(("POST", request.path, dict(body)))
        posted = sum(1 for method, _, _ in self.requests if method == "POST")
        if self._fail_post_after is not None and posted > self._fail_post_after:
            return web.Response(status=500, text="storage full")
        body["id"] = str(self._next_id)
        self._next_id += 1
        self.events.append(body)
        return web.json_response(body, status=201)

    async def _update(self, request: web.Request) -> web.Response:
        event_id = request.match_info["event_id"]
        body = await request.json()
        self.requests.append(("PUT", request.path, body))
        index = self._find(event_id)
        if index is None:
            return web.Response(status=404, text="not found")
        self.events[index] = {**self.events[index], **body}
        return web.json_response(self.events[index])

    async def _delete(self, request: web.Request) -> web.Response:
        event_id = request.match_info["event_id"]
        self.requests.append(("DELETE", request.path, None))
        if self._delete_status >= 400:
            return web.Response(status=self._delete_status)
        index = self._find(event_id)
        if index is not None:
            self.events.pop(index)
        return web.Response(status=204)


async def _run_against(
    backend: FakeEventsBackend,
    func: Callable[[EventsApiClient], Awaitable[Any]],
    client_kwargs: dict[str, Any],
) -> Any:
    async with TestServer(backend.make_app()) as server:
        base_url = str(server.make_url("/")).rstrip("/")
        async with EventsApiClient(
            base_url=base_url, request_interval=0, **client_kwargs
        ) as client:
            return await func(client)


@pytest.fixture
def run_client() -> Callable[..., Any]:
    """Run ``func(client)`` against a fresh server wrapping ``backend``."""

    def _run(
        backend: FakeEventsBackend,
        func: Callable[[EventsApiClient], Awaitable[Any]],
        **client_kwargs: Any,
    ) -> Any:
        return asyncio.run(_run_against(backend, func, client_kwargs))

    return _run


@pytest.fixture
def make_backend() -> Callable[..., FakeEventsBackend]:
    """Factory for a ``FakeEventsBackend`` seeded with camelCase event dicts."""
    return FakeEventsBackend
