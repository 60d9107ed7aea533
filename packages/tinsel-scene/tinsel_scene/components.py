"""Scene components attached to subsystem entities."""
from __future__ import annotations

from dataclasses import dataclass, field

import numpy as np

from tinsel_shapes import vec
from tinsel_shapes.vec import Vec3

from tinsel_scene.config import CharacterConfig, MarkerConfig, OrnamentConfig
from tinsel_scene.entities import DualPositionEntity, DualPositionBatch

FOLIAGE = "foliage"
SPIRAL = "spiral"


@dataclass
class Subsystem:
    """Name tag for an entity the scene controls as a unit."""

    name: str


@dataclass(eq=False)
class ParticleLayer:
    """A point-sprite layer. ``seeds`` are per-point randoms in [0, 1)."""

    kind: str
    scatter: np.ndarray
    formation: np.ndarray
    seeds: np.ndarray
    sizes: np.ndarray
    spin_rate: float = 0.0
    rotation_y: float = 0.0

    def __len__(self) -> int:
        return len(self.scatter)


@dataclass(eq=False)
class OrnamentGroup:
    config: OrnamentConfig
    batch: DualPositionBatch
    rotations: np.ndarray = field(default=None)  # type: ignore[assignment]

    def __post_init__(self) -> None:
        if self.rotations is None:
            self.rotations = np.zeros((len(self.batch), 3))


@dataclass
class Marker:
    entity: DualPositionEntity
    config: MarkerConfig
    spin: float = 0.0


@dataclass
class Character:
    """The hidden character. ``highlight`` eases toward ``active``."""

    entity: DualPositionEntity
    config: CharacterConfig
    rotation: Vec3 = vec.ORIGIN
    active: bool = False
    highlight: float = 0.0
