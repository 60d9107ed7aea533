"""Engine - per-frame system dispatch and disposal."""

import os
import random
from typing import Callable

from tinsel.clock import Clock
from tinsel.types import DisposedError, FrameContext, Mode, System
from tinsel.world import World


class Engine:
    """Runs registered systems once per host frame.

    Unlike a fixed-rate loop the engine never paces itself: the rendering
    host calls :meth:`step` with its own frame delta and elapsed time.
    """

    def __init__(self, seed: int | None = None, max_dt: float = 0.1) -> None:
        self._clock = Clock(max_dt)
        self._world = World()
        self._systems: list[System] = []
        self._dispose_hooks: list[Callable[[World], None]] = []
        self._disposed = False

        if seed is None:
            seed = int.from_bytes(os.urandom(8), "big")
        self._seed = seed
        self._rng = random.Random(seed)

    @property
    def world(self) -> World:
        return self._world

    @property
    def clock(self) -> Clock:
        return self._clock

    @property
    def seed(self) -> int:
        return self._seed

    @property
    def random(self) -> random.Random:
        return self._rng

    @property
    def disposed(self) -> bool:
        return self._disposed

    def add_system(self, system: System) -> None:
        self._systems.append(system)

    def on_dispose(self, hook: Callable[[World], None]) -> None:
        self._dispose_hooks.append(hook)

    def step(self, dt: float, mode: Mode, elapsed: float | None = None) -> FrameContext:
        if self._disposed:
            raise DisposedError("Cannot step a disposed engine")
        self._clock.advance(dt, elapsed)
        ctx = self._clock.context(mode, self._rng)
        for system in self._systems:
            system(self._world, ctx)
        return ctx

    def run(self, frames: int, dt: float, mode: Mode) -> FrameContext | None:
        """Step ``frames`` times with a fixed delta. Returns the last context."""
        ctx = None
        for _ in range(frames):
            ctx = self.step(dt, mode)
        return ctx

    def dispose(self) -> None:
        """Run dispose hooks, then despawn every entity. Idempotent."""
        if self._disposed:
            return
        for hook in self._dispose_hooks:
            hook(self._world)
        self._world.clear()
        self._systems.clear()
        self._disposed = True
