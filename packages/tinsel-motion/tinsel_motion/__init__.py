"""tinsel-motion - Oscillating embellishments layered over blended positions."""
from __future__ import annotations

from tinsel_motion.oscillators import (
    MotionProfile,
    bob,
    breathe,
    mix,
    pulse,
    spin,
    transition_scale,
    wave,
    wiggle,
)

__all__ = [
    "MotionProfile",
    "bob",
    "breathe",
    "mix",
    "pulse",
    "spin",
    "transition_scale",
    "wave",
    "wiggle",
]
