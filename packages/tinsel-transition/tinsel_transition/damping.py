"""Frame-rate independent exponential smoothing."""
from __future__ import annotations

import math

from tinsel.types import ParameterError

MAX_DT = 0.1
EPSILON = 1e-3


def damp(current: float, target: float, rate: float, dt: float) -> float:
    """Move ``current`` toward ``target`` by ``1 - e^(-rate*dt)`` of the gap.

    Two half-length steps land where one full step does, so the
    result does not depend on the frame rate. Never overshoots for
    ``rate, dt >= 0``.
    """
    return current + (target - current) * (1.0 - math.exp(-rate * dt))


def advance(
    progress: float,
    target_on: bool,
    rate_on: float,
    rate_off: float,
    dt: float,
    max_dt: float = MAX_DT,
    epsilon: float = EPSILON,
) -> float:
    """Return ``progress`` after one frame heading to 1 (``target_on``) or 0.

    ``rate_on`` drives assembly and ``rate_off`` dispersal. ``dt`` is clamped
    to ``[0, max_dt]``; once within ``epsilon`` of the target the value snaps
    onto it. The result always lies in [0, 1].
    """
    if rate_on <= 0 or rate_off <= 0:
        raise ParameterError(
            f"transition rates must be positive, got on={rate_on} off={rate_off}"
        )
    dt = min(max(dt, 0.0), max_dt)
    target = 1.0 if target_on else 0.0
    rate = rate_on if target_on else rate_off

    progress = damp(progress, target, rate, dt)
    if abs(target - progress) < epsilon:
        progress = target
    return min(1.0, max(0.0, progress))
