#!/usr/bin/env python3
# registrar/host/events.py
from __future__ import annotations

"""
Minimal lifecycle event bus.

Listeners are called in registration order. A listener returning an
awaitable is scheduled as a task on the running loop; the bus keeps a
reference until it finishes.
"""

import asyncio
import inspect
from typing import Any, Callable

Listener = Callable[..., Any]


class EventBus:
    """Named events with plain or async listeners."""

    def __init__(self) -> None:
        self._listeners: dict[str, list[Listener]] = {}
        self._once: set[tuple[str, int]] = set()
        self._tasks: set[asyncio.Future] = set()

    def on(self, event: str, listener: Listener) -> Listener:
        self._listeners.setdefault(event, []).append(listener)
        return listener

    def once(self, event: str, listener: Listener) -> Listener:
        self.on(event, listener)
        self._once.add((event, id(listener)))
        return listener

    def off(self, event: str, listener: Listener) -> bool:
        listeners = self._listeners.get(event, [])
        if listener not in listeners:
            return False
        listeners.remove(listener)
        self._once.discard((event, id(listener)))
        return True

    def listeners(self, event: str) -> list[Listener]:
        return list(self._listeners.get(event, []))

    def emit(self, event: str, *args: Any) -> int:
        """Call every listener for `event`; returns how many ran."""
        listeners = self.listeners(event)
        for listener in listeners:
            if (event, id(listener)) in self._once:
                self.off(event, listener)
            result = listener(*args)
            if inspect.isawaitable(result):
                task = asyncio.ensure_future(result)
                self._tasks.add(task)
                task.add_done_callback(self._tasks.discard)
        return len(listeners)
