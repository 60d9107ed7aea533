"""3-vector helpers operating on plain float tuples."""
from __future__ import annotations

import math

Vec3 = tuple[float, float, float]

ORIGIN: Vec3 = (0.0, 0.0, 0.0)


def add(a: Vec3, b: Vec3) -> Vec3:
    return (a[0] + b[0], a[1] + b[1], a[2] + b[2])


def sub(a: Vec3, b: Vec3) -> Vec3:
    return (a[0] - b[0], a[1] - b[1], a[2] - b[2])


def scale(v: Vec3, s: float) -> Vec3:
    return (v[0] * s, v[1] * s, v[2] * s)


def lerp(a: Vec3, b: Vec3, t: float) -> Vec3:
    """Blend from ``a`` (t=0) to ``b`` (t=1)."""
    return (
        a[0] + (b[0] - a[0]) * t,
        a[1] + (b[1] - a[1]) * t,
        a[2] + (b[2] - a[2]) * t,
    )


def dot(a: Vec3, b: Vec3) -> float:
    return a[0] * b[0] + a[1] * b[1] + a[2] * b[2]


def magnitude(v: Vec3) -> float:
    return math.sqrt(dot(v, v))


def normalize(v: Vec3) -> Vec3:
    mag = magnitude(v)
    if mag == 0.0:
        return v
    return scale(v, 1.0 / mag)


def with_length(v: Vec3, length: float) -> Vec3:
    """Rescale ``v`` to ``length`` keeping its direction. Zero vectors stay zero."""
    mag = magnitude(v)
    if mag == 0.0:
        return v
    return scale(v, length / mag)


def rotate_y(v: Vec3, angle: float) -> Vec3:
    """Right-handed rotation about the vertical (y) axis."""
    c = math.cos(angle)
    s = math.sin(angle)
    return (v[0] * c + v[2] * s, v[1], -v[0] * s + v[2] * c)
