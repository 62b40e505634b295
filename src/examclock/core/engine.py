"""Countdown engine — a tick-driven exam timer state machine."""

from __future__ import annotations

import logging
from dataclasses import dataclass
from enum import Enum
from typing import Callable

from examclock.core import policy
from examclock.core.cadence import Cadence, CadenceFactory, loop_cadence
from examclock.core.config import TICK_INTERVAL_SECONDS, TimerConfig

logger = logging.getLogger(__name__)


class EngineEvent(Enum):
    """Notifications emitted after each engine state change."""

    STARTED = "started"
    PAUSED = "paused"
    RESET = "reset"
    PRIMARY_ELAPSED = "primary_elapsed"
    HARD_STOPPED = "hard_stopped"
    EXTRA_TIME_CHANGED = "extra_time_changed"


EngineListener = Callable[[EngineEvent], None]


@dataclass
class TimerState:
    """Mutable countdown state, owned by a single ``CountdownEngine``."""

    remaining_seconds: int
    is_running: bool = False
    hard_stopped: bool = False
    extra_time_enabled: bool = False


class CountdownEngine:
    """Counts an exam down one second per tick, optionally into extra time.

    Every command is safe to call from a UI without checking state first:
    a command whose precondition does not hold does nothing.  Ticks come
    from a cadence created through *cadence_factory*; the engine cancels it
    whenever it stops running, so no tick is ever delivered to a stopped
    engine.
    """

    def __init__(
        self,
        config: TimerConfig | None = None,
        cadence_factory: CadenceFactory = loop_cadence,
    ) -> None:
        self._config: TimerConfig = config if config is not None else TimerConfig()
        self._state = TimerState(remaining_seconds=self._config.total_duration_seconds)
        self._cadence: Cadence = cadence_factory(TICK_INTERVAL_SECONDS)
        self._listeners: list[EngineListener] = []

    # -- public interface ----------------------------------------------------

    def start(self) -> None:
        """Start or resume the countdown.

        Ignored while running, once hard-stopped, or when extra time is on
        and the clock already sits at the extra-time floor.
        """
        if self._state.is_running:
            logger.debug("start() ignored: already running")
            return
        if self._state.hard_stopped:
            logger.debug("start() ignored: hard-stopped")
            return
        if self._at_extra_time_floor():
            logger.debug("start() ignored: at extra-time floor")
            return

        self._state.is_running = True
        self._cadence.start(self.tick)
        logger.info("Countdown started at %ds remaining", self._state.remaining_seconds)
        self._emit(EngineEvent.STARTED)

    def pause(self) -> None:
        """Freeze the countdown.  Ignored unless running."""
        if not self._state.is_running:
            logger.debug("pause() ignored: not running")
            return

        self._stop_running()
        logger.info("Countdown paused at %ds remaining", self._state.remaining_seconds)
        self._emit(EngineEvent.PAUSED)

    def reset(self) -> None:
        """Return to the initial state and tell listeners to disarm."""
        self._cadence.cancel()
        self._state.remaining_seconds = self._config.total_duration_seconds
        self._state.is_running = False
        self._state.hard_stopped = False
        logger.info("Countdown reset to %ds", self._state.remaining_seconds)
        self._emit(EngineEvent.RESET)

    def tick(self) -> None:
        """Advance the countdown by one second."""
        if not self._state.is_running:
            logger.debug("tick() ignored: not running")
            return

        previous = self._state.remaining_seconds
        new_value = previous - 1
        limit = self._config.extra_time_limit_seconds

        if not self._state.extra_time_enabled and new_value <= 0:
            self._hard_stop(0)
        elif self._state.extra_time_enabled and new_value <= limit:
            self._hard_stop(limit)
        elif previous > 0 and new_value <= 0:
            self._state.remaining_seconds = new_value
            logger.info("Primary time elapsed; extra time running")
            self._emit(EngineEvent.PRIMARY_ELAPSED)
        else:
            self._state.remaining_seconds = new_value

    def set_extra_time_enabled(self, enabled: bool) -> None:
        """Enable or disable extra time without touching the remaining time.

        Ignored once the clock has hard-stopped at the extra-time floor.
        """
        if self._at_extra_time_floor():
            logger.debug("set_extra_time_enabled() ignored: at extra-time floor")
            return
        if self._state.extra_time_enabled == enabled:
            return

        self._state.extra_time_enabled = enabled
        logger.info("Extra time %s", "enabled" if enabled else "disabled")
        self._emit(EngineEvent.EXTRA_TIME_CHANGED)

    def toggle_extra_time(self) -> None:
        """Flip the extra-time setting, subject to ``set_extra_time_enabled``."""
        self.set_extra_time_enabled(not self._state.extra_time_enabled)

    def add_listener(self, listener: EngineListener) -> None:
        """Register *listener* to be called with each ``EngineEvent``."""
        self._listeners.append(listener)

    def close(self) -> None:
        """Cancel the tick cadence and stop running.  Call on teardown."""
        self._stop_running()

    def is_paused_and_not_finished(self) -> bool:
        """True when an auto-start could still begin the countdown."""
        return not self._state.is_running and not self.is_finished

    # -- state ---------------------------------------------------------------

    @property
    def config(self) -> TimerConfig:
        """The fixed configuration this engine was built with."""
        return self._config

    @property
    def remaining_seconds(self) -> int:
        """Seconds left; negative during extra time."""
        return self._state.remaining_seconds

    @property
    def is_running(self) -> bool:
        """True while the tick cadence is active."""
        return self._state.is_running

    @property
    def hard_stopped(self) -> bool:
        """True once ticking has stopped for good, until reset."""
        return self._state.hard_stopped

    @property
    def extra_time_enabled(self) -> bool:
        """True if the countdown may continue below zero."""
        return self._state.extra_time_enabled

    @property
    def primary_time_elapsed(self) -> bool:
        """True once the primary duration has run out."""
        return self._state.remaining_seconds <= 0

    @property
    def is_finished(self) -> bool:
        """True once the primary time is up or the clock has hard-stopped."""
        return self.primary_time_elapsed or self._state.hard_stopped

    @property
    def elapsed_seconds(self) -> int:
        """Seconds consumed since the start of the exam."""
        return policy.elapsed_seconds(self._config, self._state.remaining_seconds)

    @property
    def progress_percent(self) -> float:
        """Share of the primary duration consumed, 0 to 100."""
        return policy.progress_percent(self._config, self._state.remaining_seconds)

    @property
    def is_warning(self) -> bool:
        """True inside the final-warning window."""
        return policy.is_warning(self._config, self._state.remaining_seconds)

    @property
    def is_restricted(self) -> bool:
        """True inside the initial no-leaving window."""
        return policy.is_restricted(self._config, self._state.remaining_seconds)

    # -- private helpers -----------------------------------------------------

    def _at_extra_time_floor(self) -> bool:
        return (
            self._state.extra_time_enabled
            and self._state.remaining_seconds <= self._config.extra_time_limit_seconds
        )

    def _stop_running(self) -> None:
        self._cadence.cancel()
        self._state.is_running = False

    def _hard_stop(self, floor: int) -> None:
        self._stop_running()
        self._state.remaining_seconds = floor
        self._state.hard_stopped = True
        logger.info("Countdown hard-stopped at %ds", floor)
        self._emit(EngineEvent.HARD_STOPPED)

    def _emit(self, event: EngineEvent) -> None:
        for listener in list(self._listeners):
            listener(event)
