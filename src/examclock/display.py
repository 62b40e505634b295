"""Text projection of clock state: time formats, advisory lines, timeline.

Nothing here holds state; every function reads a ``ClockStatus``.
"""

from __future__ import annotations

from dataclasses import dataclass
from datetime import datetime

from examclock.core.clock import ClockStatus
from examclock.core.config import TimerConfig

TIME_OVER_MESSAGE = "Writing Time Over. Please STOP writing and remain seated."
IN_PROGRESS_MESSAGE = "The exam is in progress. Check the timer frequently."


@dataclass(frozen=True)
class TimelineMarker:
    label: str
    percent: float
    passed: bool


def _split(total_seconds: int) -> tuple[int, int, int]:
    absolute = abs(total_seconds)
    return absolute // 3600, (absolute % 3600) // 60, absolute % 60


def format_hmmss(total_seconds: int) -> str:
    """Format *total_seconds* as ``H:MM:SS``, prefixed with ``-`` when negative."""
    h, m, s = _split(total_seconds)
    text = f"{h}:{m:02d}:{s:02d}"
    return f"-{text}" if total_seconds < 0 else text


def format_hmm(total_seconds: int) -> str:
    """Format *total_seconds* as ``H:MM``, prefixed with ``-`` when negative."""
    h, m, _ = _split(total_seconds)
    text = f"{h}:{m:02d}"
    return f"-{text}" if total_seconds < 0 else text


def format_mmss(total_seconds: int) -> str:
    """Format the magnitude of *total_seconds* as ``MM:SS`` (no sign)."""
    absolute = abs(total_seconds)
    return f"{absolute // 60:02d}:{absolute % 60:02d}"


def format_wall_time(instant: datetime) -> str:
    """Format *instant* as a 12-hour ``h:MM AM/PM`` time."""
    hour = instant.hour % 12 or 12
    suffix = "AM" if instant.hour < 12 else "PM"
    return f"{hour}:{instant.minute:02d} {suffix}"


def status_messages(status: ClockStatus, config: TimerConfig) -> list[str]:
    """Return the advisory lines to show for *status*, top to bottom."""
    lines: list[str] = []

    if status.auto_start_armed and not status.is_running and status.auto_start_target:
        lines.append(f"Auto-Starting at {format_wall_time(status.auto_start_target)}")

    at_floor = (
        status.extra_time_enabled
        and status.remaining_seconds <= config.extra_time_limit_seconds
    )
    if at_floor or (status.is_finished and status.remaining_seconds >= 0):
        lines.append(TIME_OVER_MESSAGE)
    elif status.is_warning:
        minutes = config.warning_threshold_seconds // 60
        lines.append(
            f"You may NOT leave the room in the final {minutes} minutes of the exam. "
            "Please remain seated and raise your hand if you need a supervisor."
        )
    elif status.is_restricted:
        minutes = config.restriction_duration_seconds // 60
        lines.append(f"You may not leave the room in the first {minutes} minutes of the exam.")
        lines.append("Please stay in your seat. If you need a supervisor, raise your hand.")
    else:
        lines.append(IN_PROGRESS_MESSAGE)

    if status.remaining_seconds < 0 and status.extra_time_enabled:
        lines.append(f"(Extra Time: {format_mmss(status.remaining_seconds)})")

    return lines


def timeline_markers(
    status: ClockStatus, config: TimerConfig, interval_minutes: int = 15
) -> list[TimelineMarker]:
    """Markers from ``Start`` to ``Finish`` every *interval_minutes*."""
    if interval_minutes <= 0:
        raise ValueError(f"interval_minutes must be positive, got {interval_minutes}")

    total = config.total_duration_seconds
    positions = list(range(0, total, interval_minutes * 60)) + [total]

    markers = []
    for seconds in positions:
        if seconds == 0:
            label = "Start"
            passed = status.elapsed_seconds > 0
        else:
            label = "Finish" if seconds == total else format_hmm(seconds)
            passed = seconds <= status.elapsed_seconds
        markers.append(TimelineMarker(label, seconds / total * 100, passed))
    return markers
