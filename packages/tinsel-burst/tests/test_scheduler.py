"""Tests for BurstScheduler timing and lifecycle."""
import pytest

from tinsel import DisposedError, Mode, ParameterError
from tinsel_burst import BurstMode, BurstScheduler


class TestTrigger:
    """Direct trigger/update behavior."""

    def test_starts_normal(self):
        scheduler = BurstScheduler()
        assert scheduler.mode is BurstMode.NORMAL
        assert scheduler.multiplier == 1.0
        assert scheduler.expiry is None

    def test_trigger_boosts_immediately(self):
        scheduler = BurstScheduler(duration=3.0, boost=2.0)
        scheduler.trigger(0.0)
        assert scheduler.bursting
        assert scheduler.multiplier == 2.0
        assert scheduler.expiry == 3.0

    def test_reverts_after_exact_duration(self):
        scheduler = BurstScheduler(duration=3.0)
        scheduler.trigger(0.0)
        assert not scheduler.update(2.999)
        assert scheduler.multiplier == 2.0
        assert scheduler.update(3.0)
        assert scheduler.multiplier == 1.0
        assert scheduler.state.armed_at is None

    def test_retrigger_restarts_window(self):
        """Re-arming at 1.5s measures 3.0s from the second trigger."""
        scheduler = BurstScheduler(duration=3.0)
        scheduler.trigger(0.0)
        scheduler.update(1.5)
        scheduler.trigger(1.5)
        assert scheduler.expiry == 4.5
        scheduler.update(3.0)
        assert scheduler.bursting
        scheduler.update(4.49)
        assert scheduler.bursting
        scheduler.update(4.5)
        assert not scheduler.bursting

    def test_retrigger_does_not_stack_boost(self):
        scheduler = BurstScheduler(boost=2.0)
        scheduler.trigger(0.0)
        scheduler.trigger(0.5)
        scheduler.trigger(1.0)
        assert scheduler.multiplier == 2.0

    def test_update_when_normal_is_noop(self):
        scheduler = BurstScheduler()
        assert not scheduler.update(100.0)

    def test_cancel(self):
        scheduler = BurstScheduler()
        scheduler.trigger(0.0)
        scheduler.cancel()
        assert scheduler.mode is BurstMode.NORMAL
        assert scheduler.expiry is None


class TestObserve:
    """Mode-edge driven behavior."""

    def test_scatter_edge_arms(self):
        scheduler = BurstScheduler()
        scheduler.observe(Mode.FORMATION, 0.0)
        assert scheduler.mode is BurstMode.NORMAL
        assert scheduler.observe(Mode.SCATTERED, 1.0) is BurstMode.BURST
        assert scheduler.expiry == 4.0

    def test_holding_scattered_does_not_rearm(self):
        scheduler = BurstScheduler(duration=3.0)
        scheduler.observe(Mode.SCATTERED, 0.0)
        scheduler.observe(Mode.SCATTERED, 2.0)
        assert scheduler.expiry == 3.0
        assert scheduler.observe(Mode.SCATTERED, 3.0) is BurstMode.NORMAL
        assert scheduler.observe(Mode.SCATTERED, 10.0) is BurstMode.NORMAL

    def test_first_observation_scattered_arms(self):
        scheduler = BurstScheduler()
        assert scheduler.observe(Mode.SCATTERED, 5.0) is BurstMode.BURST

    def test_return_to_formation_cancels(self):
        scheduler = BurstScheduler()
        scheduler.observe(Mode.SCATTERED, 0.0)
        assert scheduler.observe(Mode.FORMATION, 1.0) is BurstMode.NORMAL
        assert scheduler.multiplier == 1.0

    def test_rescatter_restarts_window(self):
        scheduler = BurstScheduler(duration=3.0)
        scheduler.observe(Mode.SCATTERED, 0.0)
        scheduler.observe(Mode.FORMATION, 1.0)
        scheduler.observe(Mode.SCATTERED, 1.5)
        assert scheduler.expiry == 4.5


class TestLifecycle:
    def test_rejects_non_positive_duration(self):
        with pytest.raises(ParameterError):
            BurstScheduler(duration=0.0)
        with pytest.raises(ParameterError):
            BurstScheduler(duration=-3.0)

    def test_rejects_non_positive_boost(self):
        with pytest.raises(ParameterError):
            BurstScheduler(boost=0.0)

    def test_dispose_cancels_pending_reversion(self):
        scheduler = BurstScheduler()
        scheduler.trigger(0.0)
        scheduler.dispose()
        assert scheduler.disposed
        assert scheduler.multiplier == 1.0
        assert scheduler.expiry is None

    def test_disposed_scheduler_refuses_trigger(self):
        scheduler = BurstScheduler()
        scheduler.dispose()
        with pytest.raises(DisposedError):
            scheduler.trigger(1.0)

    def test_disposed_scheduler_ignores_mode(self):
        scheduler = BurstScheduler()
        scheduler.dispose()
        assert scheduler.observe(Mode.SCATTERED, 0.0) is BurstMode.NORMAL
