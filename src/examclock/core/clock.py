"""ExamClock — wires the countdown engine and the auto-start scheduler."""

from __future__ import annotations

from dataclasses import dataclass
from datetime import datetime
from typing import Callable

from examclock.core.cadence import CadenceFactory, loop_cadence
from examclock.core.config import POLL_INTERVAL_SECONDS, TimerConfig
from examclock.core.engine import CountdownEngine, EngineListener
from examclock.core.scheduler import AutoStartScheduler


@dataclass(frozen=True)
class ClockStatus:
    """Everything a presentation layer reads on each render."""

    remaining_seconds: int
    is_running: bool
    is_finished: bool
    primary_time_elapsed: bool
    hard_stopped: bool
    extra_time_enabled: bool
    elapsed_seconds: int
    progress_percent: float
    is_warning: bool
    is_restricted: bool
    auto_start_armed: bool
    auto_start_target: datetime | None


class ExamClock:
    """The command/state surface a presentation layer talks to.

    The scheduler is subscribed to engine events, so a manual start or a
    reset disarms any pending auto-start.
    """

    def __init__(
        self,
        config: TimerConfig | None = None,
        cadence_factory: CadenceFactory = loop_cadence,
        now: Callable[[], datetime] = datetime.now,
        poll_interval: float = POLL_INTERVAL_SECONDS,
    ) -> None:
        self.engine = CountdownEngine(config, cadence_factory=cadence_factory)
        self.scheduler = AutoStartScheduler(
            self.engine,
            cadence_factory=cadence_factory,
            now=now,
            poll_interval=poll_interval,
        )
        self.engine.add_listener(self.scheduler.handle_engine_event)

    @property
    def config(self) -> TimerConfig:
        """The fixed configuration of the underlying engine."""
        return self.engine.config

    # -- commands ------------------------------------------------------------

    def start(self) -> None:
        """Start or resume the countdown."""
        self.engine.start()

    def pause(self) -> None:
        """Pause the countdown."""
        self.engine.pause()

    def reset(self) -> None:
        """Restore the initial state and disarm auto-start."""
        self.engine.reset()

    def toggle_extra_time(self) -> None:
        """Flip the extra-time setting."""
        self.engine.toggle_extra_time()

    def set_extra_time_enabled(self, enabled: bool) -> None:
        """Enable or disable extra time."""
        self.engine.set_extra_time_enabled(enabled)

    def arm_auto_start(self) -> None:
        """Schedule a start at the next :00 or :30."""
        self.scheduler.arm()

    def disarm_auto_start(self) -> None:
        """Cancel a pending auto-start."""
        self.scheduler.disarm()

    def add_listener(self, listener: EngineListener) -> None:
        """Register *listener* for engine events."""
        self.engine.add_listener(listener)

    def close(self) -> None:
        """Cancel both cadences."""
        self.scheduler.close()
        self.engine.close()

    # -- state ---------------------------------------------------------------

    def status(self) -> ClockStatus:
        """Snapshot every observable value for rendering."""
        engine = self.engine
        return ClockStatus(
            remaining_seconds=engine.remaining_seconds,
            is_running=engine.is_running,
            is_finished=engine.is_finished,
            primary_time_elapsed=engine.primary_time_elapsed,
            hard_stopped=engine.hard_stopped,
            extra_time_enabled=engine.extra_time_enabled,
            elapsed_seconds=engine.elapsed_seconds,
            progress_percent=engine.progress_percent,
            is_warning=engine.is_warning,
            is_restricted=engine.is_restricted,
            auto_start_armed=self.scheduler.armed,
            auto_start_target=self.scheduler.target_instant,
        )
