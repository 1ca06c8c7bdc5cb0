"""Cancellable timers used for debouncing and transient notices.

A scheduler is anything with ``call_later(delay, callback)`` returning a
handle that has ``cancel()``.
"""

import asyncio
import threading
from typing import Callable, Optional


class ThreadingScheduler:
    """Runs callbacks on ``threading.Timer`` threads."""

    def call_later(self, delay: float, callback: Callable[[], None]):
        timer = threading.Timer(delay, callback)
        timer.daemon = True
        timer.start()
        return timer


class AsyncioScheduler:
    """Runs callbacks on an asyncio event loop.

    Without an explicit loop, ``call_later`` must be called from a coroutine
    running on the loop that should own the timer.
    """

    def __init__(self, loop: Optional[asyncio.AbstractEventLoop] = None):
        self.loop = loop

    def call_later(self, delay: float, callback: Callable[[], None]):
        loop = self.loop or asyncio.get_running_loop()
        return loop.call_later(delay, callback)
