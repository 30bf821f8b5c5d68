#!/usr/bin/env python3
# registrar/db/debounce.py
from __future__ import annotations

"""
Cancellable scheduled task for trailing-edge debouncing.

Every schedule() call cancels the pending timer and starts a new one, so a
burst of triggers closer together than `delay` fires the callback once,
`delay` seconds after the last trigger.

Failures inside a timer-fired callback are not caught here: a sync callback
raises into the event loop's exception handler, an async one is reported
to it when the task finishes. flush() runs the callback inline instead, so
its caller sees the exception.
"""

import asyncio
import inspect
from typing import Any, Awaitable, Callable, Optional, Union

DebounceCallback = Callable[[], Union[None, Awaitable[Any]]]


class DebouncedTask:
    """Schedule, cancel-if-pending and reschedule one callback."""

    def __init__(self, delay: float, callback: DebounceCallback, *, name: str = "debounced") -> None:
        if delay < 0:
            raise ValueError("delay must be >= 0")
        self.delay = delay
        self.name = name
        self.fire_count = 0
        self._callback = callback
        self._handle: Optional[asyncio.TimerHandle] = None
        self._task: Optional[asyncio.Future] = None

    @property
    def pending(self) -> bool:
        """True while a timer is armed and has not fired yet."""
        return self._handle is not None

    def schedule(self) -> None:
        """(Re)arm the timer. Must be called from inside a running loop."""
        loop = asyncio.get_running_loop()
        self.cancel()
        self._handle = loop.call_later(self.delay, self._fire)

    def cancel(self) -> bool:
        """Disarm the timer; returns True if one was pending."""
        if self._handle is None:
            return False
        self._handle.cancel()
        self._handle = None
        return True

    async def flush(self) -> None:
        """Fire a pending callback now and wait for any in-flight run."""
        if self.cancel():
            self.fire_count += 1
            result = self._callback()
            if inspect.isawaitable(result):
                await result
        if self._task is not None:
            await self._task

    def _fire(self) -> None:
        self._handle = None
        self.fire_count += 1
        result = self._callback()
        if inspect.isawaitable(result):
            self._task = asyncio.ensure_future(result)
            self._task.add_done_callback(self._on_done)

    def _on_done(self, task: asyncio.Future) -> None:
        if task is self._task:
            self._task = None
        if task.cancelled():
            return
        exc = task.exception()
        if exc is not None:
            task.get_loop().call_exception_handler({
                "message": f"Debounced task '{self.name}' failed",
                "exception": exc,
                "future": task,
            })
