"""Transient copy-to-clipboard acknowledgment flags."""
from __future__ import annotations

import threading
import time
from typing import Callable, Dict, List


class CopyFeedback:
    """Track which fields were copied recently.

    Each field maps to the monotonic time its acknowledgment expires. A new
    acknowledgment for the same field replaces the pending expiry.
    """

    def __init__(self, window_seconds: float = 1.0, *, clock: Callable[[], float] = time.monotonic) -> None:
        self.window_seconds = window_seconds
        self._clock = clock
        self._lock = threading.Lock()
        self._expiry: Dict[str, float] = {}

    def acknowledge(self, field_id: str) -> None:
        with self._lock:
            self._expiry[field_id] = self._clock() + self.window_seconds

    def is_acknowledged(self, field_id: str) -> bool:
        with self._lock:
            expiry = self._expiry.get(field_id)
            return expiry is not None and self._clock() < expiry

    def expire(self) -> List[str]:
        """Drop elapsed acknowledgments and return their field ids."""

        with self._lock:
            now = self._clock()
            expired = [field_id for field_id, expiry in self._expiry.items() if now >= expiry]
            for field_id in expired:
                del self._expiry[field_id]
            return expired

    def clear(self) -> None:
        with self._lock:
            self._expiry.clear()

    @property
    def active(self) -> List[str]:
        with self._lock:
            now = self._clock()
            return [field_id for field_id, expiry in self._expiry.items() if now < expiry]
