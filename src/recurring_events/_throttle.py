"""Spacing between consecutive events API requests."""

from __future__ import annotations

import asyncio
import time

from .const import DEFAULT_THROTTLE_SECONDS


class RequestThrottle:
    """Ensures a minimum interval between consecutive API requests.

    Bulk operations (one POST per occurrence of a series) otherwise hit
    the backend in a tight loop. An interval of ``0`` disables spacing.
    """

    def __init__(self, min_interval: float = DEFAULT_THROTTLE_SECONDS) -> None:
        if min_interval < 0:
            raise ValueError(f"min_interval must be >= 0, got {min_interval}")
        self._min_interval = min_interval
        self._last_request: float | None = None
        self._lock = asyncio.Lock()

    async def acquire(self) -> None:
        """Wait until the minimum interval has elapsed since the last request."""
        if not self._min_interval:
            return
        async with self._lock:
            if self._last_request is not None:
                wait = self._min_interval - (time.monotonic() - self._last_request)
                if wait > 0:
                    await asyncio.sleep(wait)
            self._last_request = time.monotonic()
