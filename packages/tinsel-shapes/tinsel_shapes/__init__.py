"""tinsel-shapes - Point generators for the scattered and formation arrangements."""
from __future__ import annotations

from tinsel_shapes import vec
from tinsel_shapes.generators import (
    normalize,
    sample_formation_curve,
    sample_height,
    sample_sphere_volume,
)

__all__ = [
    "normalize",
    "sample_formation_curve",
    "sample_height",
    "sample_sphere_volume",
    "vec",
]
