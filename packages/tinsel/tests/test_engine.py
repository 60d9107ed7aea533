"""Tests for engine stepping, mode propagation and disposal."""

from dataclasses import dataclass

import pytest

from tinsel.engine import Engine
from tinsel.types import DisposedError, Mode
from tinsel.world import World


@dataclass
class Counter:
    value: int


def test_engine_init_defaults():
    engine = Engine()
    assert engine.clock.frame_number == 0
    assert engine.clock.max_dt == 0.1
    assert isinstance(engine.world, World)
    assert not engine.disposed


def test_systems_run_in_order():
    engine = Engine()
    order = []
    engine.add_system(lambda w, c: order.append("transition"))
    engine.add_system(lambda w, c: order.append("render"))
    engine.step(1 / 60, Mode.FORMATION)
    assert order == ["transition", "render"]


def test_step_passes_mode_explicitly():
    engine = Engine()
    modes = []
    engine.add_system(lambda w, c: modes.append(c.mode))
    engine.step(1 / 60, Mode.FORMATION)
    engine.step(1 / 60, Mode.SCATTERED)
    assert modes == [Mode.FORMATION, Mode.SCATTERED]


def test_step_returns_context():
    engine = Engine()
    ctx = engine.step(0.02, Mode.SCATTERED, elapsed=4.0)
    assert ctx.frame_number == 1
    assert ctx.elapsed == 4.0
    assert ctx.dt == 0.02


def test_step_clamps_large_delta():
    engine = Engine(max_dt=0.05)
    ctx = engine.step(2.0, Mode.FORMATION)
    assert ctx.dt == 0.05


def test_run_fixed_frames():
    engine = Engine()
    frames = []
    engine.add_system(lambda w, c: frames.append(c.frame_number))
    last = engine.run(4, 0.1, Mode.FORMATION)
    assert frames == [1, 2, 3, 4]
    assert last is not None
    assert last.elapsed == pytest.approx(0.4)


def test_run_zero_frames_returns_none():
    engine = Engine()
    assert engine.run(0, 0.1, Mode.FORMATION) is None


def test_same_seed_same_random_stream():
    a = Engine(seed=7)
    b = Engine(seed=7)
    assert a.seed == 7
    assert [a.random.random() for _ in range(3)] == [b.random.random() for _ in range(3)]


def test_random_seed_when_not_given():
    assert isinstance(Engine().seed, int)


def test_context_random_is_engine_rng():
    engine = Engine(seed=3)
    seen = []
    engine.add_system(lambda w, c: seen.append(c.random))
    engine.step(0.01, Mode.FORMATION)
    assert seen == [engine.random]


def test_dispose_runs_hooks_then_clears_world():
    engine = Engine()
    eid = engine.world.spawn()
    engine.world.attach(eid, Counter(1))
    calls = []
    engine.on_dispose(lambda w: calls.append(w.has(eid, Counter)))
    engine.dispose()
    assert calls == [True]
    assert engine.world.entities() == frozenset()
    assert engine.disposed


def test_dispose_is_idempotent():
    engine = Engine()
    calls = []
    engine.on_dispose(lambda w: calls.append(1))
    engine.dispose()
    engine.dispose()
    assert calls == [1]


def test_step_after_dispose_raises():
    engine = Engine()
    engine.dispose()
    with pytest.raises(DisposedError):
        engine.step(0.01, Mode.FORMATION)
