"""Closed-form point generators for the two scene arrangements.

Every sampler takes an injectable ``rng`` (anything with a ``random()``
method returning a float in [0, 1), normally a :class:`random.Random`).
Passing ``None`` falls back to the module-level :mod:`random` source.
"""
from __future__ import annotations

import math
import random
from typing import Protocol

from tinsel.types import DomainError, ParameterError

from tinsel_shapes.vec import Vec3


class RandomSource(Protocol):
    def random(self) -> float: ...


def _source(rng: RandomSource | None) -> RandomSource:
    return random if rng is None else rng


def sample_sphere_volume(radius: float, rng: RandomSource | None = None) -> Vec3:
    """Uniform point inside a solid sphere centred on the origin.

    Direction comes from two angles (``acos`` on the polar one so the poles
    are not oversampled) and the radius from the cube root of a uniform
    value, which keeps the density constant per unit volume.
    """
    if radius < 0:
        raise ParameterError(f"radius must be non-negative, got {radius}")
    src = _source(rng)
    theta = 2.0 * math.pi * src.random()
    phi = math.acos(2.0 * src.random() - 1.0)
    r = src.random() ** (1.0 / 3.0) * radius

    sin_phi = math.sin(phi)
    return (
        r * sin_phi * math.cos(theta),
        r * sin_phi * math.sin(theta),
        r * math.cos(phi),
    )


def sample_formation_curve(
    t: float,
    max_radius: float,
    height: float,
    turns: float = 8.0,
    jitter: float = 0.5,
    rng: RandomSource | None = None,
    min_radius: float = 0.0,
) -> Vec3:
    """Point on a helix that tapers from ``max_radius`` at t=0 to a point at t=1.

    ``y`` runs linearly over ``[-height/2, height/2]``. Each axis then gets an
    independent uniform offset in ``[-jitter/2, jitter/2]``.
    """
    if not 0.0 <= t <= 1.0:
        raise DomainError(f"t must lie in [0, 1], got {t}")
    src = _source(rng)

    y = (t - 0.5) * height
    radius = min_radius + max_radius * (1.0 - t)
    angle = t * math.pi * 2.0 * turns
    x = math.cos(angle) * radius
    z = math.sin(angle) * radius

    jx = (src.random() - 0.5) * jitter
    jy = (src.random() - 0.5) * jitter
    jz = (src.random() - 0.5) * jitter
    return (x + jx, y + jy, z + jz)


def sample_height(
    rng: RandomSource | None = None,
    lo: float = 0.0,
    hi: float = 1.0,
    bias: float = 1.0,
) -> float:
    """Normalized height in ``[lo, hi]``.

    A ``bias`` below 1 skews samples toward ``hi``, thinning out the wide
    base of the formation.
    """
    if not 0.0 <= lo <= hi <= 1.0:
        raise ParameterError(f"height range must satisfy 0 <= lo <= hi <= 1, got ({lo}, {hi})")
    if bias <= 0:
        raise ParameterError("bias must be positive")
    return lo + _source(rng).random() ** bias * (hi - lo)


def normalize(value: float, max_value: float, min_value: float) -> float:
    if max_value == min_value:
        raise DomainError(
            f"cannot normalize against an empty range (max == min == {min_value})"
        )
    return (value - min_value) / (max_value - min_value)
