"""Debounced propagation of rapidly changing input."""

import logging
import threading
from typing import Any, Callable

from ..timers import ThreadingScheduler

logger = logging.getLogger(__name__)


class Debouncer:
    """Publish a value only after input has been quiet for ``delay`` seconds.

    Each ``push`` cancels the pending timer and starts a new one, so a burst
    of pushes publishes once, with the last value. A scheduler is anything
    with ``call_later(delay, callback)`` returning a handle with ``cancel()``.
    """

    def __init__(self, delay: float, on_publish: Callable[[Any], None],
                 scheduler=None):
        if delay < 0:
            raise ValueError("delay must be non-negative")
        self.delay = delay
        self.on_publish = on_publish
        self.scheduler = scheduler or ThreadingScheduler()
        self._lock = threading.Lock()
        # Held from taking a value until on_publish returns, so publications
        # never overlap or land out of order.
        self._publish_lock = threading.RLock()
        self._handle = None
        self._pending_value = None
        self._has_pending = False
        # Bumped on every push/cancel so a timer that fires after being
        # superseded recognises itself as stale.
        self._generation = 0

    @property
    def pending(self) -> bool:
        return self._has_pending

    def push(self, value: Any) -> None:
        """Replace the pending value and restart the quiet-period timer."""
        with self._lock:
            self._cancel_locked()
            self._generation += 1
            generation = self._generation
            self._pending_value = value
            self._has_pending = True
            self._handle = self.scheduler.call_later(
                self.delay, lambda: self._fire(generation)
            )

    def flush(self) -> None:
        """Publish the pending value now, if there is one.

        Waits for a publication already in progress on a timer thread.
        """
        with self._publish_lock:
            with self._lock:
                if not self._has_pending:
                    return
                value = self._take_locked()
            self.on_publish(value)

    def cancel(self) -> None:
        """Drop the pending value without publishing it."""
        with self._lock:
            self._cancel_locked()
            self._generation += 1
            self._pending_value = None
            self._has_pending = False

    def _fire(self, generation: int) -> None:
        with self._publish_lock:
            with self._lock:
                if generation != self._generation or not self._has_pending:
                    logger.debug("Discarding superseded debounce timer")
                    return
                value = self._take_locked()
            self.on_publish(value)

    def _take_locked(self) -> Any:
        self._cancel_locked()
        self._generation += 1
        value = self._pending_value
        self._pending_value = None
        self._has_pending = False
        return value

    def _cancel_locked(self) -> None:
        if self._handle is not None:
            self._handle.cancel()
            self._handle = None
