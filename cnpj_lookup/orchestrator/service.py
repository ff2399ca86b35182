"""Lookup orchestrator that owns the displayed state."""
from __future__ import annotations

import logging
import queue
import threading
from concurrent.futures import Future, ThreadPoolExecutor
from typing import Callable, Optional, Protocol, Tuple

from ..client import RegistryLookupError
from ..cnpj import ValidationError, normalize, validate
from ..feedback import CopyFeedback
from ..models import CompanyRecord

LOGGER = logging.getLogger(__name__)

LookupEvent = Tuple[str, int, Optional[CompanyRecord], Optional[str]]


class LookupClientProtocol(Protocol):
    """Protocol defining the interface that lookup clients must follow."""

    def lookup(self, number: str) -> CompanyRecord:  # pragma: no cover - runtime protocol
        """Return the company record for a validated number."""


class LookupOrchestrator:
    """Validate input, run lookups in the background and apply their results.

    Every method is meant to be called from the single thread that owns the
    display state. Worker threads only put events on :attr:`event_queue`;
    :meth:`process_events` applies them. Each submitted lookup gets a
    sequence number and only the most recent one may update the state.
    """

    def __init__(
        self,
        client: LookupClientProtocol,
        *,
        clipboard: Optional[Callable[[str], None]] = None,
        feedback: Optional[CopyFeedback] = None,
        executor: Optional[ThreadPoolExecutor] = None,
        max_workers: Optional[int] = None,
    ) -> None:
        self._client = client
        self._clipboard = clipboard
        self.feedback = feedback or CopyFeedback()
        self._executor = executor or ThreadPoolExecutor(max_workers=max_workers)
        self.event_queue: "queue.Queue[LookupEvent]" = queue.Queue()
        self._sequence = 0
        self._completed = 0
        self._seq_lock = threading.Lock()

        self.input_text = ""
        self.number = ""
        self.record: Optional[CompanyRecord] = None
        self.error_message: Optional[str] = None

    # ------------------------------------------------------------------
    def set_input(self, raw: str) -> str:
        self.number = normalize(raw)
        self.input_text = self.number
        return self.number

    # ------------------------------------------------------------------
    def submit(self) -> Optional["Future[None]"]:
        """Start a lookup for the current number.

        Returns ``None`` when validation fails; the error message is set, the
        current record is left untouched and lookups still in flight are
        discarded when they complete.
        """

        try:
            number = validate(self.number)
        except ValidationError as exc:
            self._invalidate_in_flight()
            self.error_message = str(exc)
            return None

        self.error_message = None
        with self._seq_lock:
            self._sequence += 1
            sequence = self._sequence
        LOGGER.debug("Submitting lookup #%s for %s", sequence, number)
        return self._executor.submit(self._worker, sequence, number)

    def _worker(self, sequence: int, number: str) -> None:
        try:
            record = self._client.lookup(number)
        except RegistryLookupError as exc:
            self.event_queue.put(("lookup", sequence, None, str(exc)))
            return
        except Exception as exc:  # pragma: no cover - unexpected client failure
            LOGGER.exception("Lookup #%s for %s failed unexpectedly", sequence, number)
            self.event_queue.put(("lookup", sequence, None, str(exc) or exc.__class__.__name__))
            return
        self.event_queue.put(("lookup", sequence, record, None))

    # ------------------------------------------------------------------
    def process_events(self) -> bool:
        """Apply queued results on the calling thread; return True on change."""

        changed = False
        try:
            while True:
                event = self.event_queue.get_nowait()
                changed = self._handle_event(event) or changed
        except queue.Empty:
            pass
        return changed

    def _handle_event(self, event: LookupEvent) -> bool:
        kind, sequence, record, error = event
        if kind != "lookup":  # pragma: no cover - only one event kind today
            return False
        with self._seq_lock:
            latest = self._sequence
        self._completed = max(self._completed, sequence)
        if sequence != latest:
            LOGGER.debug("Discarding stale lookup #%s (latest is #%s)", sequence, latest)
            return False
        if error is not None:
            self.error_message = error
        else:
            self.record = record
            self.error_message = None
        return True

    @property
    def pending(self) -> bool:
        with self._seq_lock:
            return self._completed < self._sequence

    # ------------------------------------------------------------------
    def _invalidate_in_flight(self) -> None:
        with self._seq_lock:
            self._sequence += 1
            self._completed = self._sequence

    def reset(self) -> None:
        self._invalidate_in_flight()
        self.input_text = ""
        self.number = ""
        self.record = None
        self.error_message = None

    # ------------------------------------------------------------------
    def copy(self, field_id: str, value: Optional[str]) -> None:
        if value is None:
            return
        if self._clipboard is not None:
            self._clipboard(value)
        self.feedback.acknowledge(field_id)

    # ------------------------------------------------------------------
    def shutdown(self) -> None:
        self._executor.shutdown(wait=False, cancel_futures=True)
        close = getattr(self._client, "close", None)
        if callable(close):
            close()
