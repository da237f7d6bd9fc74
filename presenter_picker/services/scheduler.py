# type: ignore
# pyright: reportMissingImports=false, reportGeneralTypeErrors=false
"""
Service: Timer facility — one-shot and periodic callbacks.
Production code binds to the running asyncio loop; tests drive a manual clock
through the same interface.
"""

import asyncio
from typing import Any, Callable, Optional


class Scheduler:
    """Schedule callbacks; every returned handle exposes cancel()."""

    def call_later(self, delay: float, callback: Callable[[], None]) -> Any:
        raise NotImplementedError

    def call_every(
        self, interval: float, callback: Callable[[], None]
    ) -> "PeriodicHandle":
        """Fire `callback` every `interval` seconds until cancelled."""
        handle = PeriodicHandle(self, interval, callback)
        handle.start()
        return handle


class AsyncioScheduler(Scheduler):
    """Scheduler backed by the event loop serving the current request."""

    def __init__(self, loop: Optional[asyncio.AbstractEventLoop] = None) -> None:
        self._loop = loop

    def call_later(self, delay: float, callback: Callable[[], None]) -> asyncio.TimerHandle:
        loop = self._loop or asyncio.get_running_loop()
        return loop.call_later(delay, callback)


class PeriodicHandle:
    """Re-arms a one-shot timer after every fire until cancelled."""

    def __init__(
        self, scheduler: Scheduler, interval: float, callback: Callable[[], None]
    ) -> None:
        self._scheduler = scheduler
        self._interval = interval
        self._callback = callback
        self._handle: Any = None
        self._cancelled = False

    def start(self) -> None:
        self._handle = self._scheduler.call_later(self._interval, self._fire)

    def _fire(self) -> None:
        if self._cancelled:
            return
        # Re-arm first so the callback itself may cancel this handle.
        self.start()
        self._callback()

    def cancel(self) -> None:
        self._cancelled = True
        if self._handle is not None:
            self._handle.cancel()
            self._handle = None

    def cancelled(self) -> bool:
        return self._cancelled
