"""tinsel-scene - The decorative scene: population, per-frame systems and controller."""
from __future__ import annotations

from tinsel_scene.components import (
    Character,
    Marker,
    OrnamentGroup,
    ParticleLayer,
    Subsystem,
)
from tinsel_scene.config import (
    DEFAULT_ORNAMENTS,
    CameraConfig,
    CharacterConfig,
    FoliageConfig,
    MarkerConfig,
    OrnamentConfig,
    SceneConfig,
    SpiralConfig,
)
from tinsel_scene.entities import DualPositionBatch, DualPositionEntity, Transform
from tinsel_scene.output import FrameOutput, InstanceFrame, PointFrame
from tinsel_scene.scene import Scene

__all__ = [
    "DEFAULT_ORNAMENTS",
    "CameraConfig",
    "Character",
    "CharacterConfig",
    "DualPositionBatch",
    "DualPositionEntity",
    "FoliageConfig",
    "FrameOutput",
    "InstanceFrame",
    "Marker",
    "MarkerConfig",
    "OrnamentConfig",
    "OrnamentGroup",
    "ParticleLayer",
    "PointFrame",
    "Scene",
    "SceneConfig",
    "SpiralConfig",
    "Subsystem",
    "Transform",
]
