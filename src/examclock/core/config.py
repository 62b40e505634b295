"""Fixed timer configuration."""

from __future__ import annotations

from dataclasses import dataclass

DEFAULT_DURATION_MINUTES = 180
DEFAULT_WARNING_MINUTES = 15
DEFAULT_RESTRICTION_MINUTES = 45
DEFAULT_EXTRA_TIME_LIMIT_MINUTES = -30

TICK_INTERVAL_SECONDS = 1.0
POLL_INTERVAL_SECONDS = 0.5


class ConfigurationError(ValueError):
    """Raised when a ``TimerConfig`` is constructed with invalid values."""


@dataclass(frozen=True)
class TimerConfig:
    """Durations governing a single exam countdown, all in whole seconds.

    ``extra_time_limit_seconds`` is the most negative value the clock may
    reach while extra time is enabled, so it is zero or below.
    """

    total_duration_seconds: int = DEFAULT_DURATION_MINUTES * 60
    warning_threshold_seconds: int = DEFAULT_WARNING_MINUTES * 60
    restriction_duration_seconds: int = DEFAULT_RESTRICTION_MINUTES * 60
    extra_time_limit_seconds: int = DEFAULT_EXTRA_TIME_LIMIT_MINUTES * 60

    def __post_init__(self) -> None:
        for name in (
            "total_duration_seconds",
            "warning_threshold_seconds",
            "restriction_duration_seconds",
            "extra_time_limit_seconds",
        ):
            value = getattr(self, name)
            if isinstance(value, bool) or not isinstance(value, int):
                raise ConfigurationError(
                    f"{name} must be an integer, got {type(value).__name__}"
                )
        if self.total_duration_seconds <= 0:
            raise ConfigurationError(
                f"total_duration_seconds must be positive, got {self.total_duration_seconds}"
            )
        if self.warning_threshold_seconds < 0:
            raise ConfigurationError(
                f"warning_threshold_seconds must not be negative, "
                f"got {self.warning_threshold_seconds}"
            )
        if self.restriction_duration_seconds < 0:
            raise ConfigurationError(
                f"restriction_duration_seconds must not be negative, "
                f"got {self.restriction_duration_seconds}"
            )
        if self.extra_time_limit_seconds > 0:
            raise ConfigurationError(
                f"extra_time_limit_seconds must be zero or negative, "
                f"got {self.extra_time_limit_seconds}"
            )
