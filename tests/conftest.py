"""Shared test doubles: hand-driven cadences and a settable wall clock."""

from __future__ import annotations

from datetime import datetime
from typing import Callable

import pytest


class ManualCadence:
    """A cadence that only fires when the test calls ``fire()``."""

    def __init__(self, interval: float) -> None:
        self.interval = interval
        self.callback: Callable[[], None] | None = None
        self.starts = 0
        self.cancels = 0

    @property
    def active(self) -> bool:
        return self.callback is not None

    def start(self, callback: Callable[[], None]) -> None:
        self.callback = callback
        self.starts += 1

    def cancel(self) -> None:
        self.callback = None
        self.cancels += 1

    def fire(self, times: int = 1) -> None:
        """Deliver up to *times* callbacks, stopping early once cancelled."""
        for _ in range(times):
            if self.callback is None:
                return
            self.callback()


class CadenceRecorder:
    """``CadenceFactory`` that remembers every cadence it hands out."""

    def __init__(self) -> None:
        self.created: list[ManualCadence] = []

    def __call__(self, interval: float) -> ManualCadence:
        cadence = ManualCadence(interval)
        self.created.append(cadence)
        return cadence

    def by_interval(self, interval: float) -> ManualCadence:
        return next(c for c in self.created if c.interval == interval)


class FakeNow:
    """Settable replacement for ``datetime.now``."""

    def __init__(self, value: datetime) -> None:
        self.value = value

    def __call__(self) -> datetime:
        return self.value


@pytest.fixture()
def cadences() -> CadenceRecorder:
    return CadenceRecorder()


@pytest.fixture()
def fake_now() -> FakeNow:
    return FakeNow(datetime(2025, 6, 2, 8, 47, 12, 345000))
