"""Tests for the auto-start scheduler, driven against a fake countdown."""

from datetime import datetime, timedelta

import pytest

from examclock.core.engine import EngineEvent
from examclock.core.scheduler import AutoStartScheduler, next_half_hour


class FakeTarget:
    """Satisfies only what the scheduler needs: start() and eligibility."""

    def __init__(self) -> None:
        self.eligible = True
        self.start_calls = 0

    def start(self) -> None:
        self.start_calls += 1
        self.eligible = False

    def is_paused_and_not_finished(self) -> bool:
        return self.eligible


@pytest.fixture()
def target() -> FakeTarget:
    return FakeTarget()


@pytest.fixture()
def scheduler(target, cadences, fake_now) -> AutoStartScheduler:
    return AutoStartScheduler(target, cadence_factory=cadences, now=fake_now)


@pytest.fixture()
def poller(scheduler, cadences):
    return cadences.created[0]


# ---------------------------------------------------------------------------
# next_half_hour()
# ---------------------------------------------------------------------------


class TestNextHalfHour:
    @pytest.mark.parametrize(
        ("now", "expected"),
        [
            (datetime(2025, 6, 2, 8, 0, 0), datetime(2025, 6, 2, 8, 30)),
            (datetime(2025, 6, 2, 8, 29, 59, 999999), datetime(2025, 6, 2, 8, 30)),
            (datetime(2025, 6, 2, 8, 30, 0), datetime(2025, 6, 2, 9, 0)),
            (datetime(2025, 6, 2, 8, 47, 12), datetime(2025, 6, 2, 9, 0)),
            (datetime(2025, 6, 2, 23, 45, 0), datetime(2025, 6, 3, 0, 0)),
            (datetime(2025, 12, 31, 23, 30, 1), datetime(2026, 1, 1, 0, 0)),
        ],
    )
    def test_boundaries(self, now: datetime, expected: datetime) -> None:
        assert next_half_hour(now) == expected

    def test_always_future_and_on_boundary(self) -> None:
        start = datetime(2025, 6, 2, 0, 0, 0)
        for step in range(0, 24 * 3600, 97):
            now = start + timedelta(seconds=step, microseconds=step % 1000)
            target = next_half_hour(now)
            assert target > now
            assert target.minute in (0, 30)
            assert target.second == 0 and target.microsecond == 0
            assert target - now <= timedelta(minutes=30)


# ---------------------------------------------------------------------------
# Arming and disarming
# ---------------------------------------------------------------------------


class TestSchedulerArming:
    def test_starts_disarmed(self, scheduler, poller) -> None:
        assert not scheduler.armed
        assert scheduler.target_instant is None
        assert not poller.active

    def test_poll_interval_is_sub_second(self, poller) -> None:
        assert 0 < poller.interval <= 1.0

    def test_arm_computes_target_then_polls(self, scheduler, poller) -> None:
        scheduler.set_armed(True)
        assert scheduler.armed
        assert scheduler.target_instant == datetime(2025, 6, 2, 9, 0)
        assert poller.active

    def test_arm_rejected_when_not_eligible(self, scheduler, target, poller) -> None:
        target.eligible = False
        scheduler.set_armed(True)
        assert not scheduler.armed
        assert scheduler.target_instant is None
        assert not poller.active

    def test_target_computed_once_per_arming(self, scheduler, fake_now) -> None:
        scheduler.arm()
        fake_now.value = datetime(2025, 6, 2, 8, 59, 0)
        scheduler.poll()
        scheduler.arm()
        assert scheduler.target_instant == datetime(2025, 6, 2, 9, 0)

    def test_rearm_recomputes_target(self, scheduler, fake_now) -> None:
        scheduler.arm()
        scheduler.disarm()
        fake_now.value = datetime(2025, 6, 2, 9, 5, 0)
        scheduler.arm()
        assert scheduler.target_instant == datetime(2025, 6, 2, 9, 30)

    def test_disarm_clears_target_and_polling(self, scheduler, poller) -> None:
        scheduler.arm()
        scheduler.set_armed(False)
        assert not scheduler.armed
        assert scheduler.target_instant is None
        assert not poller.active

    def test_invalid_poll_interval(self, target, cadences) -> None:
        with pytest.raises(ValueError):
            AutoStartScheduler(target, cadence_factory=cadences, poll_interval=2.0)


# ---------------------------------------------------------------------------
# Firing
# ---------------------------------------------------------------------------


class TestSchedulerFiring:
    def test_does_not_fire_before_target(self, scheduler, target, poller, fake_now) -> None:
        scheduler.arm()
        fake_now.value = datetime(2025, 6, 2, 8, 59, 59, 999999)
        poller.fire(5)
        assert target.start_calls == 0
        assert scheduler.armed

    def test_fires_once_at_target(self, scheduler, target, poller, fake_now) -> None:
        scheduler.arm()
        fake_now.value = datetime(2025, 6, 2, 9, 0, 0)
        poller.fire(5)
        assert target.start_calls == 1
        assert not scheduler.armed
        assert scheduler.target_instant is None
        assert not poller.active

    def test_fires_when_boundary_overshot(self, scheduler, target, poller, fake_now) -> None:
        scheduler.arm()
        fake_now.value = datetime(2025, 6, 2, 9, 0, 0, 400000)
        poller.fire()
        assert target.start_calls == 1

    def test_state_cleared_before_start_is_called(self, scheduler, target, fake_now) -> None:
        seen = []
        target.start = lambda: seen.append((scheduler.armed, scheduler.target_instant))
        scheduler.arm()
        fake_now.value = datetime(2025, 6, 2, 9, 0, 0)
        scheduler.poll()
        assert seen == [(False, None)]


# ---------------------------------------------------------------------------
# Invalidation by the countdown
# ---------------------------------------------------------------------------


class TestSchedulerInvalidation:
    def test_sync_disarms_when_target_leaves_paused(self, scheduler, target, poller) -> None:
        scheduler.arm()
        target.eligible = False
        scheduler.sync()
        assert not scheduler.armed
        assert scheduler.target_instant is None
        assert not poller.active

    def test_poll_disarms_when_target_leaves_paused(
        self, scheduler, target, poller, fake_now
    ) -> None:
        scheduler.arm()
        target.eligible = False
        fake_now.value = datetime(2025, 6, 2, 9, 0, 0)
        poller.fire()
        assert target.start_calls == 0
        assert not scheduler.armed

    def test_sync_keeps_armed_while_eligible(self, scheduler) -> None:
        scheduler.arm()
        scheduler.sync()
        assert scheduler.armed

    def test_reset_event_disarms(self, scheduler) -> None:
        scheduler.arm()
        scheduler.handle_engine_event(EngineEvent.RESET)
        assert not scheduler.armed
        assert scheduler.target_instant is None

    def test_started_event_disarms_when_ineligible(self, scheduler, target) -> None:
        scheduler.arm()
        target.eligible = False
        scheduler.handle_engine_event(EngineEvent.STARTED)
        assert not scheduler.armed

    def test_close_cancels_polling(self, scheduler, poller) -> None:
        scheduler.arm()
        scheduler.close()
        assert not poller.active
        assert not scheduler.armed
        assert scheduler.target_instant is None
