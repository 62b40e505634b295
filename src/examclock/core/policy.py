"""Derived status: pure functions of the config and remaining time."""

from examclock.core.config import TimerConfig


def elapsed_seconds(config: TimerConfig, remaining_seconds: int) -> int:
    """Seconds consumed so far; exceeds the total during extra time."""
    return config.total_duration_seconds - remaining_seconds


def progress_percent(config: TimerConfig, remaining_seconds: int) -> float:
    """Share of the primary duration consumed, clamped to 0..100."""
    elapsed = elapsed_seconds(config, remaining_seconds)
    percent = elapsed / config.total_duration_seconds * 100
    return min(100.0, max(0.0, percent))


def is_warning(config: TimerConfig, remaining_seconds: int) -> bool:
    """True inside the final-warning window."""
    return 0 < remaining_seconds <= config.warning_threshold_seconds


def is_restricted(config: TimerConfig, remaining_seconds: int) -> bool:
    """True while candidates may not leave the room."""
    elapsed = elapsed_seconds(config, remaining_seconds)
    return 0 < elapsed <= config.restriction_duration_seconds
