"""Timer state machine: countdown engine, auto-start scheduler and wiring."""

from examclock.core.clock import ClockStatus, ExamClock
from examclock.core.config import ConfigurationError, TimerConfig
from examclock.core.engine import CountdownEngine, EngineEvent
from examclock.core.scheduler import AutoStartScheduler, next_half_hour

__all__ = [
    "AutoStartScheduler",
    "ClockStatus",
    "ConfigurationError",
    "CountdownEngine",
    "EngineEvent",
    "ExamClock",
    "TimerConfig",
    "next_half_hour",
]
