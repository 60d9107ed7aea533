"""Per-frame render data handed back to the host."""
from __future__ import annotations

from dataclasses import dataclass, field
from types import MappingProxyType
from typing import Mapping

import numpy as np

from tinsel.types import FrameContext, Mode
from tinsel_shapes.vec import Vec3

from tinsel_scene.entities import Transform


@dataclass(frozen=True, eq=False)
class PointFrame:
    """Point sprites in scene-local coordinates, rotated ``rotation_y`` about the axis."""

    positions: np.ndarray
    sizes: np.ndarray
    alphas: np.ndarray
    progress: float
    rotation_y: float = 0.0


@dataclass(frozen=True, eq=False)
class InstanceFrame:
    """One instanced mesh draw: per-instance transforms plus shared material."""

    kind: str
    color: str
    roughness: float
    metalness: float
    positions: np.ndarray
    rotations: np.ndarray
    scales: np.ndarray


@dataclass(frozen=True, eq=False)
class FrameOutput:
    """Everything a renderer needs for one frame.

    Subsystem data is in scene-local coordinates; add ``origin`` to place it
    in the world. ``camera`` is in world coordinates and ``orbit_speed`` is
    the auto-orbit speed used this frame.
    """

    frame_number: int
    elapsed: float
    mode: Mode
    origin: Vec3
    camera: Vec3
    focus: Vec3
    orbit_speed: float
    layers: Mapping[str, PointFrame]
    groups: Mapping[str, InstanceFrame]
    marker: Transform | None
    character: Transform | None
    progress: Mapping[str, float]


@dataclass
class FrameBuffer:
    """Mutable collector the scene systems write into during a step."""

    layers: dict[str, PointFrame] = field(default_factory=dict)
    groups: dict[str, InstanceFrame] = field(default_factory=dict)
    marker: Transform | None = None
    character: Transform | None = None
    camera: Vec3 | None = None
    focus: Vec3 | None = None
    orbit_speed: float = 0.0

    def reset(self) -> None:
        self.layers = {}
        self.groups = {}
        self.marker = None
        self.character = None
        self.camera = None
        self.focus = None
        self.orbit_speed = 0.0

    def freeze(
        self, ctx: FrameContext, origin: Vec3, progress: dict[str, float]
    ) -> FrameOutput:
        return FrameOutput(
            frame_number=ctx.frame_number,
            elapsed=ctx.elapsed,
            mode=ctx.mode,
            origin=origin,
            camera=self.camera if self.camera is not None else origin,
            focus=self.focus if self.focus is not None else origin,
            orbit_speed=self.orbit_speed,
            layers=MappingProxyType(dict(self.layers)),
            groups=MappingProxyType(dict(self.groups)),
            marker=self.marker,
            character=self.character,
            progress=MappingProxyType(dict(progress)),
        )
