"""Tests for the debouncer and its schedulers."""

import asyncio
import threading

import pytest

from npoconnect.directory import Debouncer
from npoconnect.timers import AsyncioScheduler, ThreadingScheduler


class TestDebouncer:
    def test_burst_publishes_last_value_once(self, scheduler):
        published = []
        debouncer = Debouncer(0.3, published.append, scheduler)
        for value in ("a", "ab", "abc"):
            debouncer.push(value)
            scheduler.advance(0.1)
        assert published == []
        scheduler.advance(0.3)
        assert published == ["abc"]

    def test_spaced_inputs_each_publish(self, scheduler):
        published = []
        debouncer = Debouncer(0.3, published.append, scheduler)
        for value in ("a", "ab", "abc"):
            debouncer.push(value)
            scheduler.advance(0.5)
        assert published == ["a", "ab", "abc"]

    def test_at_most_one_pending_timer(self, scheduler):
        debouncer = Debouncer(0.3, lambda value: None, scheduler)
        debouncer.push("a")
        debouncer.push("b")
        assert len(scheduler.active) == 1
        assert debouncer.pending

    def test_nothing_published_again_after_quiet_period(self, scheduler):
        published = []
        debouncer = Debouncer(0.3, published.append, scheduler)
        debouncer.push("a")
        scheduler.advance(5)
        assert published == ["a"]
        assert not debouncer.pending

    def test_flush(self, scheduler):
        published = []
        debouncer = Debouncer(0.3, published.append, scheduler)
        debouncer.flush()
        assert published == []
        debouncer.push("now")
        debouncer.flush()
        scheduler.advance(1)
        assert published == ["now"]

    def test_cancel(self, scheduler):
        published = []
        debouncer = Debouncer(0.3, published.append, scheduler)
        debouncer.push("dropped")
        debouncer.cancel()
        scheduler.advance(1)
        assert published == []
        assert not debouncer.pending

    def test_stale_timer_is_ignored(self):
        # A handle whose cancel() cannot stop an already-running callback.
        callbacks = []

        class LateScheduler:
            def call_later(self, delay, callback):
                callbacks.append(callback)
                return type("Handle", (), {"cancel": lambda self: None})()

        published = []
        debouncer = Debouncer(0.3, published.append, LateScheduler())
        debouncer.push("old")
        debouncer.push("new")
        callbacks[0]()
        assert published == []
        callbacks[1]()
        assert published == ["new"]

    def test_negative_delay(self, scheduler):
        with pytest.raises(ValueError):
            Debouncer(-1, print, scheduler)


class TestSchedulers:
    def test_threading_scheduler(self):
        done = threading.Event()
        published = []

        def publish(value):
            published.append(value)
            done.set()

        debouncer = Debouncer(0.01, publish, ThreadingScheduler())
        debouncer.push("first")
        debouncer.push("second")
        assert done.wait(timeout=2)
        assert published == ["second"]

    def test_asyncio_scheduler(self):
        published = []

        async def run():
            debouncer = Debouncer(0.01, published.append, AsyncioScheduler())
            debouncer.push("first")
            debouncer.push("second")
            await asyncio.sleep(0.1)

        asyncio.run(run())
        assert published == ["second"]

    def test_flush_waits_for_timer_publication(self):
        entered = threading.Event()
        release = threading.Event()
        published = []

        def publish(value):
            if value == "a":
                entered.set()
                release.wait(timeout=2)
            published.append(value)

        debouncer = Debouncer(0.01, publish, ThreadingScheduler())
        debouncer.push("a")
        assert entered.wait(timeout=2)

        debouncer.push("ab")
        flusher = threading.Thread(target=debouncer.flush)
        flusher.start()
        flusher.join(timeout=0.1)
        assert flusher.is_alive()

        release.set()
        flusher.join(timeout=2)
        assert not flusher.is_alive()
        assert published == ["a", "ab"]
        assert not debouncer.pending
