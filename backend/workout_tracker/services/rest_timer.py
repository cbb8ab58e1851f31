# workout_tracker/services/rest_timer.py
"""Countdown between sets.

One ``RestTimer`` holds at most one countdown. Each countdown runs as an
asyncio task with its own cancellation token; the token is checked after
every sleep and before the tick is committed, so a stopped or replaced
countdown never changes ``remaining`` again.
"""
from __future__ import annotations
import asyncio
from typing import Awaitable, Callable

DEFAULT_REST_SECONDS = 75

Sleep = Callable[[float], Awaitable[None]]


class _CancelToken:
    __slots__ = ("cancelled",)

    def __init__(self) -> None:
        self.cancelled = False


class RestTimer:
    def __init__(self, duration: int = DEFAULT_REST_SECONDS, *, interval: float = 1.0, sleep: Sleep = asyncio.sleep):
        if duration <= 0:
            raise ValueError("duration must be positive")
        self.duration = duration
        self.remaining = duration
        self.is_running = False
        self._interval = interval
        self._sleep = sleep
        self._task: asyncio.Task | None = None
        self._token: _CancelToken | None = None

    def start(self, duration: int | None = None) -> None:
        """Replace any running countdown with a fresh one. Needs a running event loop."""
        if duration is not None and duration <= 0:
            raise ValueError("duration must be positive")
        loop = asyncio.get_running_loop()
        self.stop()
        if duration is not None:
            self.duration = duration
        self.remaining = self.duration
        self.is_running = True
        token = _CancelToken()
        self._token = token
        self._task = loop.create_task(self._countdown(token))

    def stop(self) -> None:
        if self._token is not None:
            self._token.cancelled = True
        if self._task is not None and not self._task.done():
            self._task.cancel()
        self._task = None
        self._token = None
        self.is_running = False

    async def wait(self) -> None:
        """Block until the current countdown ends or is cancelled."""
        task = self._task
        if task is not None:
            await asyncio.wait({task})

    async def _countdown(self, token: _CancelToken) -> None:
        while not token.cancelled and self.remaining > 0:
            await self._sleep(self._interval)
            if token.cancelled:
                return
            self.remaining -= 1
        if not token.cancelled:
            self.is_running = False
