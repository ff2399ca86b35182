"""Utilities for spacing out calls to the registry API."""
from __future__ import annotations

import logging
import threading
import time
from typing import Callable, Optional

from .models import CompanyRecord

LOGGER = logging.getLogger(__name__)


class RateLimiter:
    """Token bucket style rate limiter enforcing minimum interval between calls."""

    def __init__(
        self,
        calls_per_minute: Optional[float],
        *,
        clock: Callable[[], float] = time.monotonic,
        sleep: Callable[[float], None] = time.sleep,
    ) -> None:
        self._interval = 60.0 / float(calls_per_minute) if calls_per_minute else 0.0
        self._clock = clock
        self._sleep = sleep
        self._lock = threading.Lock()
        self._next_available = 0.0

    @property
    def interval(self) -> float:
        return self._interval

    def acquire(self) -> None:
        if self._interval <= 0:
            return
        with self._lock:
            now = self._clock()
            if now < self._next_available:
                wait = self._next_available - now
                LOGGER.debug("Sleeping for %.2f seconds to respect the rate limit", wait)
                self._sleep(wait)
                now = self._clock()
            self._next_available = now + self._interval


class RateLimitedClient:
    """Wrapper that enforces rate limiting when invoking a lookup client."""

    def __init__(self, client, *, rate_limiter: Optional[RateLimiter] = None) -> None:
        self._client = client
        self._rate_limiter = rate_limiter or RateLimiter(None)

    def lookup(self, number: str) -> CompanyRecord:
        self._rate_limiter.acquire()
        return self._client.lookup(number)

    def __getattr__(self, item):  # pragma: no cover - simple delegation
        return getattr(self._client, item)
