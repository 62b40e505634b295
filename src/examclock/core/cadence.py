"""Cancellable periodic callbacks on the asyncio event loop."""

from __future__ import annotations

import asyncio
import logging
from typing import Callable, Protocol

logger = logging.getLogger(__name__)


class Cadence(Protocol):
    """A periodic activity owned by the component that started it."""

    @property
    def active(self) -> bool: ...

    def start(self, callback: Callable[[], None]) -> None: ...

    def cancel(self) -> None: ...


CadenceFactory = Callable[[float], Cadence]


class LoopCadence:
    """Invoke a callback every *interval* seconds on the running event loop.

    Deadlines are anchored to the start time so the cadence does not drift
    when a callback runs late.  ``cancel()`` cancels the pending handle
    before returning, so no callback fires after it, including a cancel
    issued from inside the callback itself.
    """

    def __init__(self, interval: float) -> None:
        if interval <= 0:
            raise ValueError(f"interval must be positive, got {interval}")
        self._interval = interval
        self._callback: Callable[[], None] | None = None
        self._loop: asyncio.AbstractEventLoop | None = None
        self._handle: asyncio.TimerHandle | None = None
        self._anchor = 0.0
        self._fired = 0

    @property
    def interval(self) -> float:
        """Seconds between callbacks."""
        return self._interval

    @property
    def active(self) -> bool:
        """True between ``start()`` and ``cancel()``."""
        return self._callback is not None

    def start(self, callback: Callable[[], None]) -> None:
        """Begin firing *callback*; restarting an active cadence resets it.

        Must be called from within a running event loop.
        """
        self.cancel()
        self._loop = asyncio.get_running_loop()
        self._callback = callback
        self._anchor = self._loop.time()
        self._fired = 0
        self._schedule_next()

    def cancel(self) -> None:
        """Stop firing; no callback runs after this returns."""
        if self._handle is not None:
            self._handle.cancel()
            self._handle = None
        self._callback = None

    # -- private helpers -----------------------------------------------------

    def _schedule_next(self) -> None:
        assert self._loop is not None
        deadline = self._anchor + (self._fired + 1) * self._interval
        self._handle = self._loop.call_at(deadline, self._fire)

    def _fire(self) -> None:
        self._handle = None
        callback = self._callback
        if callback is None:
            return
        self._fired += 1
        try:
            callback()
        finally:
            # The callback may have cancelled or restarted us.
            if self._callback is callback and self._handle is None:
                self._schedule_next()


def loop_cadence(interval: float) -> LoopCadence:
    """Default ``CadenceFactory``."""
    return LoopCadence(interval)
