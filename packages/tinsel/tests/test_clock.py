"""Tests for clock advancement and FrameContext generation."""

import random

import pytest
from tinsel.clock import Clock
from tinsel.types import FrameContext, Mode, ParameterError

_test_rng = random.Random(0)


def test_clock_initialization():
    clock = Clock()
    assert clock.max_dt == 0.1
    assert clock.frame_number == 0
    assert clock.elapsed == 0.0
    assert clock.dt == 0.0


def test_non_positive_max_dt_rejected():
    with pytest.raises(ParameterError):
        Clock(max_dt=0.0)
    with pytest.raises(ParameterError):
        Clock(max_dt=-1.0)


def test_advance_increments_frame_number():
    clock = Clock()
    assert clock.advance(1 / 60) == 1
    assert clock.advance(1 / 60) == 2
    assert clock.frame_number == 2


def test_advance_accumulates_elapsed_when_not_supplied():
    clock = Clock()
    clock.advance(0.05)
    clock.advance(0.05)
    assert clock.elapsed == pytest.approx(0.1)


def test_advance_uses_host_elapsed():
    clock = Clock()
    clock.advance(0.016, elapsed=12.5)
    assert clock.elapsed == 12.5


def test_stalled_frame_delta_is_clamped():
    """A 5 second stall is delivered as max_dt, but wall time still advances."""
    clock = Clock(max_dt=0.1)
    clock.advance(5.0)
    assert clock.dt == 0.1
    assert clock.elapsed == pytest.approx(5.0)


def test_negative_delta_rejected():
    clock = Clock()
    with pytest.raises(ValueError):
        clock.advance(-0.01)


def test_elapsed_cannot_run_backwards():
    clock = Clock()
    clock.advance(0.1, elapsed=2.0)
    with pytest.raises(ValueError):
        clock.advance(0.1, elapsed=1.0)


def test_context_carries_frame_state_and_mode():
    clock = Clock()
    clock.advance(0.02, elapsed=3.0)
    ctx = clock.context(Mode.SCATTERED, _test_rng)
    assert isinstance(ctx, FrameContext)
    assert ctx.frame_number == 1
    assert ctx.dt == 0.02
    assert ctx.elapsed == 3.0
    assert ctx.mode is Mode.SCATTERED
    assert ctx.random is _test_rng


def test_context_is_frozen():
    clock = Clock()
    ctx = clock.context(Mode.FORMATION, _test_rng)
    with pytest.raises(AttributeError):
        ctx.mode = Mode.SCATTERED  # type: ignore[misc]


def test_reset():
    clock = Clock()
    clock.advance(0.05)
    clock.reset()
    assert clock.frame_number == 0
    assert clock.elapsed == 0.0
    assert clock.dt == 0.0


def test_mode_toggled():
    assert Mode.SCATTERED.toggled() is Mode.FORMATION
    assert Mode.FORMATION.toggled() is Mode.SCATTERED
