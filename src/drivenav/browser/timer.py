"""Cancellable one-shot timer on the asyncio loop."""

from __future__ import annotations

import asyncio
from typing import Any, Callable, Optional, Protocol


class TimerHandle(Protocol):
    def cancel(self) -> None: ...


Scheduler = Callable[[float, Callable[[], Any]], TimerHandle]


class CancellableTimer:
    """
    start / cancel / fire-once.

    Starting while pending cancels the previous callback. The scheduler
    defaults to the running loop's call_later; tests inject a virtual clock.
    """

    def __init__(self, scheduler: Optional[Scheduler] = None) -> None:
        self._scheduler = scheduler
        self._handle: Optional[TimerHandle] = None

    @property
    def pending(self) -> bool:
        return self._handle is not None

    def start(self, delay: float, callback: Callable[[], Any]) -> None:
        self.cancel()
        scheduler = self._scheduler or asyncio.get_running_loop().call_later

        def _fire() -> None:
            self._handle = None
            callback()

        self._handle = scheduler(delay, _fire)

    def cancel(self) -> None:
        if self._handle is not None:
            self._handle.cancel()
            self._handle = None
