"""Dual-position entities and their batched form."""
from __future__ import annotations

from dataclasses import dataclass
from typing import Sequence

import numpy as np

from tinsel.types import ParameterError
from tinsel_shapes import vec
from tinsel_shapes.vec import Vec3


@dataclass(frozen=True)
class DualPositionEntity:
    """An element with a fixed home in each arrangement.

    Both positions are chosen once at population time and never change;
    only the blend between them moves.
    """

    scatter_pos: Vec3
    formation_pos: Vec3
    base_scale: float = 1.0
    phase: float = 0.0
    rotation_speed: Vec3 = vec.ORIGIN

    def blend(self, progress: float) -> Vec3:
        return vec.lerp(self.scatter_pos, self.formation_pos, progress)


@dataclass(frozen=True, eq=False)
class DualPositionBatch:
    """Structure-of-arrays view over many :class:`DualPositionEntity`.

    Arrays are read-only; per-frame results are always fresh arrays.
    """

    scatter: np.ndarray
    formation: np.ndarray
    base_scale: np.ndarray
    phase: np.ndarray
    rotation_speed: np.ndarray

    def __post_init__(self) -> None:
        n = len(self.scatter)
        if self.scatter.shape != (n, 3) or self.formation.shape != (n, 3):
            raise ParameterError("scatter and formation must both be (N, 3) arrays")
        if self.rotation_speed.shape != (n, 3):
            raise ParameterError("rotation_speed must be an (N, 3) array")
        if self.base_scale.shape != (n,) or self.phase.shape != (n,):
            raise ParameterError("base_scale and phase must be (N,) arrays")
        for array in (self.scatter, self.formation, self.base_scale, self.phase, self.rotation_speed):
            array.setflags(write=False)

    @classmethod
    def stack(cls, entities: Sequence[DualPositionEntity]) -> DualPositionBatch:
        return cls(
            scatter=np.array([e.scatter_pos for e in entities], dtype=float).reshape(-1, 3),
            formation=np.array([e.formation_pos for e in entities], dtype=float).reshape(-1, 3),
            base_scale=np.array([e.base_scale for e in entities], dtype=float),
            phase=np.array([e.phase for e in entities], dtype=float),
            rotation_speed=np.array([e.rotation_speed for e in entities], dtype=float).reshape(-1, 3),
        )

    def __len__(self) -> int:
        return len(self.scatter)

    def __getitem__(self, index: int) -> DualPositionEntity:
        return DualPositionEntity(
            scatter_pos=tuple(float(c) for c in self.scatter[index]),
            formation_pos=tuple(float(c) for c in self.formation[index]),
            base_scale=float(self.base_scale[index]),
            phase=float(self.phase[index]),
            rotation_speed=tuple(float(c) for c in self.rotation_speed[index]),
        )

    def blend(self, progress: float) -> np.ndarray:
        """Positions at ``progress``: exactly ``scatter`` at 0, ``formation`` at 1."""
        if progress == 0.0:
            return self.scatter.copy()
        if progress == 1.0:
            return self.formation.copy()
        return self.scatter + (self.formation - self.scatter) * progress


@dataclass(frozen=True)
class Transform:
    """Position, Euler rotation (radians) and uniform scale for one object.

    ``order`` names the axis order the rotation is applied in.
    """

    position: Vec3
    rotation: Vec3
    scale: float
    order: str = "XYZ"
