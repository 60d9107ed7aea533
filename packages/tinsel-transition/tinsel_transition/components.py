"""Transition component."""
from __future__ import annotations

from dataclasses import dataclass

from tinsel.types import ParameterError

from tinsel_transition.damping import EPSILON, MAX_DT


@dataclass
class Transition:
    """Progress of one subsystem between scattered (0.0) and formed (1.0).

    Assembly defaults to a slower rate than dispersal. Frame deltas above
    ``max_dt`` are clamped.
    """

    rate_on: float = 1.0
    rate_off: float = 2.5
    progress: float = 0.0
    epsilon: float = EPSILON
    max_dt: float = MAX_DT

    def __post_init__(self) -> None:
        if self.rate_on <= 0 or self.rate_off <= 0:
            raise ParameterError("transition rates must be positive")
        if not 0.0 <= self.progress <= 1.0:
            raise ParameterError(f"progress must lie in [0, 1], got {self.progress}")
        if self.epsilon <= 0:
            raise ParameterError("epsilon must be positive")
        if self.max_dt <= 0:
            raise ParameterError("max_dt must be positive")

    @property
    def settled(self) -> bool:
        return self.progress in (0.0, 1.0)
