"""Secondary motion: bob, pulse, spin and their per-layer variants.

Every function is pure and accepts scalars or numpy arrays; ``phase`` and
``seed`` arrays broadcast against scalar ``elapsed`` and ``progress``, so a
whole batch is displaced in one call. ``progress`` is the subsystem's
scattered (0) to formed (1) value.
"""
from __future__ import annotations

from dataclasses import dataclass

import numpy as np
from numpy.typing import ArrayLike

from tinsel.types import ParameterError


@dataclass(frozen=True)
class MotionProfile:
    """Constants for ornament-style secondary motion.

    Attributes:
        loose_amplitude: Bob amplitude while scattered.
        tight_amplitude: Bob amplitude once formed.
        bob_frequency: Angular frequency of the vertical bob (rad/s).
        sway_frequency: Angular frequency of the horizontal sway (rad/s).
        sway_ratio: Horizontal amplitude as a fraction of the vertical one.
        pulse_amplitude: Relative size of the scale pulse.
        pulse_frequency: Angular frequency of the scale pulse (rad/s).
        scattered_scale: Scale factor while scattered.
        formed_scale: Scale factor once formed.
    """

    loose_amplitude: float = 0.2
    tight_amplitude: float = 0.05
    bob_frequency: float = 0.5
    sway_frequency: float = 0.3
    sway_ratio: float = 0.5
    pulse_amplitude: float = 0.05
    pulse_frequency: float = 2.0
    scattered_scale: float = 0.6
    formed_scale: float = 1.0

    def __post_init__(self) -> None:
        if self.loose_amplitude < 0 or self.tight_amplitude < 0:
            raise ParameterError("bob amplitudes must be non-negative")
        if not 0.0 <= self.pulse_amplitude < 1.0:
            raise ParameterError("pulse amplitude must lie in [0, 1)")
        if self.scattered_scale <= 0 or self.formed_scale <= 0:
            raise ParameterError("transition scales must be positive")


def mix(a: ArrayLike, b: ArrayLike, t: ArrayLike) -> np.ndarray:
    """Linear blend from ``a`` (t=0) to ``b`` (t=1)."""
    a = np.asarray(a, dtype=float)
    return a + (np.asarray(b, dtype=float) - a) * t


def bob(
    elapsed: float, phase: ArrayLike, progress: float, profile: MotionProfile
) -> tuple[np.ndarray, np.ndarray]:
    """Return ``(dx, dy)``: a vertical bob and a smaller horizontal sway.

    The amplitude shrinks from loose to tight as the subsystem forms.
    """
    amplitude = mix(profile.loose_amplitude, profile.tight_amplitude, progress)
    dy = np.sin(elapsed * profile.bob_frequency + np.asarray(phase)) * amplitude
    dx = np.cos(elapsed * profile.sway_frequency + np.asarray(phase)) * (
        amplitude * profile.sway_ratio
    )
    return dx, dy


def pulse(elapsed: float, phase: ArrayLike, profile: MotionProfile) -> np.ndarray:
    return 1.0 + profile.pulse_amplitude * np.sin(
        elapsed * profile.pulse_frequency + np.asarray(phase)
    )


def transition_scale(progress: float, profile: MotionProfile) -> np.ndarray:
    return mix(profile.scattered_scale, profile.formed_scale, progress)


def spin(
    rotation: ArrayLike, speed: ArrayLike, multiplier: float, dt: float
) -> np.ndarray:
    """Accumulate ``speed * multiplier * dt``. Angles are left unwrapped."""
    return np.asarray(rotation, dtype=float) + np.asarray(speed) * multiplier * dt


def breathe(elapsed: float, seed: ArrayLike, progress: float) -> np.ndarray:
    """Vertical drift for foliage: a wide wander while scattered, a calm breath once formed."""
    seed = np.asarray(seed)
    calm = np.sin(elapsed * 1.5 + seed * 10.0) * 0.1
    chaotic = np.sin(elapsed * 0.5 + seed * 5.0) * 0.5
    return mix(chaotic, calm, progress)


def wave(
    elapsed: float,
    index: ArrayLike,
    progress: float,
    amplitude: float = 0.1,
    spacing: float = 0.2,
) -> np.ndarray:
    """Travelling wave along an ordered strand; flat while scattered."""
    return np.sin(elapsed + np.asarray(index) * spacing) * amplitude * progress


def wiggle(elapsed: float, speed: float, amplitude: float) -> float:
    return float(np.sin(elapsed * speed) * amplitude)
