"""Auto-start scheduler — starts the countdown at the next half hour."""

from __future__ import annotations

import logging
from datetime import datetime, timedelta
from typing import Callable, Protocol

from examclock.core.cadence import Cadence, CadenceFactory, loop_cadence
from examclock.core.config import POLL_INTERVAL_SECONDS
from examclock.core.engine import EngineEvent

logger = logging.getLogger(__name__)


class StartTarget(Protocol):
    """What the scheduler needs from the countdown it drives."""

    def start(self) -> None: ...

    def is_paused_and_not_finished(self) -> bool: ...


def next_half_hour(now: datetime) -> datetime:
    """Return the first ``:00`` or ``:30`` boundary strictly after *now*."""
    if now.minute < 30:
        target = now.replace(minute=30, second=0, microsecond=0)
    else:
        target = (now + timedelta(hours=1)).replace(minute=0, second=0, microsecond=0)
    return target


class AutoStartScheduler:
    """Arms, waits for a wall-clock boundary, then starts the target once.

    States run ``disarmed -> armed (no target) -> armed (target set) ->
    disarmed``.  The target instant is computed once per arming; polling
    only begins after it is set.  If the target stops being paused and
    unfinished for any reason other than our own firing, the scheduler
    disarms rather than contend for control.
    """

    def __init__(
        self,
        target: StartTarget,
        cadence_factory: CadenceFactory = loop_cadence,
        now: Callable[[], datetime] = datetime.now,
        poll_interval: float = POLL_INTERVAL_SECONDS,
    ) -> None:
        if not 0 < poll_interval <= 1.0:
            raise ValueError(f"poll_interval must be in (0, 1], got {poll_interval}")
        self._target = target
        self._now = now
        self._poll: Cadence = cadence_factory(poll_interval)
        self._armed = False
        self._target_instant: datetime | None = None

    @property
    def armed(self) -> bool:
        """True from arming until firing, disarm or invalidation."""
        return self._armed

    @property
    def target_instant(self) -> datetime | None:
        """The wall-clock instant an armed scheduler will fire at."""
        return self._target_instant

    def set_armed(self, armed: bool) -> None:
        """Arm or disarm; see ``arm()`` and ``disarm()``."""
        if armed:
            self.arm()
        else:
            self.disarm()

    def arm(self) -> None:
        """Arm the scheduler.  Ignored unless the target is paused and unfinished."""
        if self._armed:
            return
        if not self._target.is_paused_and_not_finished():
            logger.debug("arm() ignored: countdown running or finished")
            return

        self._armed = True
        self._target_instant = next_half_hour(self._now())
        self._poll.start(self.poll)
        logger.info("Auto-start armed for %s", self._target_instant.isoformat())

    def disarm(self) -> None:
        """Stop polling and forget the target.  Safe to call at any time."""
        was_armed = self._armed
        self._poll.cancel()
        self._armed = False
        self._target_instant = None
        if was_armed:
            logger.info("Auto-start disarmed")

    def poll(self) -> None:
        """Check the wall clock and fire once the target instant is reached."""
        if not self._armed or self._target_instant is None:
            return
        if not self._target.is_paused_and_not_finished():
            self.disarm()
            return
        if self._now() < self._target_instant:
            return

        logger.info("Auto-start firing at %s", self._target_instant.isoformat())
        self.disarm()
        self._target.start()

    def sync(self) -> None:
        """Disarm if the target is no longer eligible for auto-start."""
        if self._armed and not self._target.is_paused_and_not_finished():
            logger.debug("Countdown left the paused state; disarming auto-start")
            self.disarm()

    def handle_engine_event(self, event: EngineEvent) -> None:
        """Disarm on reset; otherwise re-check eligibility."""
        if event is EngineEvent.RESET:
            self.disarm()
        else:
            self.sync()

    def close(self) -> None:
        """Cancel polling and disarm.  Call on teardown."""
        self.disarm()
