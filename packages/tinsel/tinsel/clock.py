"""Clock and FrameContext for host-driven, variable-timestep frames."""

import random

from tinsel.types import FrameContext, Mode, ParameterError


class Clock:
    """Tracks frame count and elapsed time supplied by the rendering host.

    The raw frame delta is clamped to ``max_dt`` so a stalled frame (an
    inactive browser tab, a debugger pause) cannot make animation jump.
    Elapsed time is never clamped: oscillations stay locked to wall time.
    """

    def __init__(self, max_dt: float = 0.1) -> None:
        if max_dt <= 0:
            raise ParameterError("max_dt must be positive")
        self._max_dt = max_dt
        self._dt = 0.0
        self._elapsed = 0.0
        self._frame_number = 0

    @property
    def max_dt(self) -> float:
        return self._max_dt

    @property
    def dt(self) -> float:
        return self._dt

    @property
    def elapsed(self) -> float:
        return self._elapsed

    @property
    def frame_number(self) -> int:
        return self._frame_number

    def advance(self, dt: float, elapsed: float | None = None) -> int:
        if dt < 0:
            raise ValueError("dt must be non-negative")
        if elapsed is None:
            elapsed = self._elapsed + dt
        elif elapsed < self._elapsed:
            raise ValueError(
                f"elapsed time cannot run backwards ({elapsed} < {self._elapsed})"
            )
        self._dt = min(dt, self._max_dt)
        self._elapsed = elapsed
        self._frame_number += 1
        return self._frame_number

    def context(self, mode: Mode, rng: random.Random) -> FrameContext:
        return FrameContext(
            frame_number=self._frame_number,
            dt=self._dt,
            elapsed=self._elapsed,
            mode=mode,
            random=rng,
        )

    def reset(self) -> None:
        self._dt = 0.0
        self._elapsed = 0.0
        self._frame_number = 0
