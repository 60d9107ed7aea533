"""Scene configuration dataclasses.

Everything here is immutable and validated on construction; a bad value is
rejected before any population is built.
"""
from __future__ import annotations

import math
from dataclasses import dataclass, field

from tinsel.types import Mode, ParameterError
from tinsel_motion import MotionProfile
from tinsel_shapes.vec import Vec3

ORNAMENT_KINDS = ("box", "sphere", "diamond")

RESERVED_NAMES = frozenset({"foliage", "spiral", "marker", "character", "camera"})


def _require_positive(**values: float) -> None:
    for name, value in values.items():
        if value <= 0:
            raise ParameterError(f"{name} must be positive, got {value}")


def _require_non_negative(**values: float) -> None:
    for name, value in values.items():
        if value < 0:
            raise ParameterError(f"{name} must be non-negative, got {value}")


@dataclass(frozen=True)
class FoliageConfig:
    """Dense needle particles wound around the formation.

    Attributes:
        count: Number of particles.
        max_radius: Radius of the formation base.
        height: Formation height.
        turns: Helix turns from base to tip.
        jitter: Per-axis spread around the ideal helix.
        height_bias: Exponent applied to uniform heights (below 1 thins the base).
        scatter_radius: Radius of the scattered cloud.
        rate_on: Assembly rate.
        rate_off: Dispersal rate.
    """

    count: int = 6000
    max_radius: float = 6.0
    height: float = 14.0
    turns: float = 15.0
    jitter: float = 0.6
    height_bias: float = 0.8
    scatter_radius: float = 15.0
    rate_on: float = 1.0
    rate_off: float = 2.5

    def __post_init__(self) -> None:
        _require_positive(
            count=self.count,
            height=self.height,
            height_bias=self.height_bias,
            rate_on=self.rate_on,
            rate_off=self.rate_off,
        )
        _require_non_negative(
            max_radius=self.max_radius,
            jitter=self.jitter,
            scatter_radius=self.scatter_radius,
        )


@dataclass(frozen=True)
class SpiralConfig:
    """Sparse strand of glowing points spiralling up the formation."""

    count: int = 120
    radius: float = 7.0
    inner_radius: float = 0.5
    height: float = 15.0
    loops: float = 4.0
    scatter_radius: float = 20.0
    spin_rate: float = 0.15
    rate_on: float = 1.0
    rate_off: float = 2.5

    def __post_init__(self) -> None:
        _require_positive(
            count=self.count,
            height=self.height,
            rate_on=self.rate_on,
            rate_off=self.rate_off,
        )
        _require_non_negative(
            radius=self.radius,
            inner_radius=self.inner_radius,
            scatter_radius=self.scatter_radius,
        )


@dataclass(frozen=True)
class OrnamentConfig:
    """One instanced group of ornaments sharing kind, colour and material.

    ``t_range`` restricts the group to a band of normalized formation
    height; ``(0.0, 0.15)`` keeps it near the base.
    """

    name: str
    count: int
    kind: str
    color: str
    scale_factor: float = 1.0
    t_range: tuple[float, float] = (0.0, 1.0)
    roughness: float = 0.2
    metalness: float = 0.8
    max_radius: float = 5.5
    height: float = 13.0
    turns: float = 15.0
    jitter: float = 1.2
    scatter_radius: float = 14.0
    rate_on: float = 1.0
    rate_off: float = 2.5
    burst_duration: float = 3.0
    burst_boost: float = 2.0
    motion: MotionProfile = field(default_factory=MotionProfile)

    def __post_init__(self) -> None:
        if not self.name:
            raise ParameterError("ornament group needs a name")
        if self.name in RESERVED_NAMES:
            raise ParameterError(f"ornament group name {self.name!r} is reserved")
        if self.kind not in ORNAMENT_KINDS:
            raise ParameterError(
                f"unknown ornament kind {self.kind!r}, expected one of {ORNAMENT_KINDS}"
            )
        lo, hi = self.t_range
        if not 0.0 <= lo <= hi <= 1.0:
            raise ParameterError(f"t_range must satisfy 0 <= min <= max <= 1, got {self.t_range}")
        if not (0.0 <= self.roughness <= 1.0 and 0.0 <= self.metalness <= 1.0):
            raise ParameterError("roughness and metalness must lie in [0, 1]")
        _require_positive(
            count=self.count,
            scale_factor=self.scale_factor,
            height=self.height,
            rate_on=self.rate_on,
            rate_off=self.rate_off,
            burst_duration=self.burst_duration,
            burst_boost=self.burst_boost,
        )
        _require_non_negative(
            max_radius=self.max_radius,
            jitter=self.jitter,
            scatter_radius=self.scatter_radius,
        )


@dataclass(frozen=True)
class MarkerConfig:
    """The crowning marker that sits on the formation's tip."""

    formation_pos: Vec3 = (0.0, 7.8, 0.0)
    scatter_radius: float = 12.0
    lift: float = 5.0
    hover_amplitude: float = 0.1
    hover_frequency: float = 2.0
    spin_rate: float = 1.5
    wobble_amplitude: float = 0.1
    wobble_frequency: float = 1.5
    scattered_scale: float = 0.4
    formed_scale: float = 1.0
    rate_on: float = 1.0
    rate_off: float = 2.5
    burst_duration: float = 3.0
    burst_boost: float = 2.0

    def __post_init__(self) -> None:
        _require_positive(
            scattered_scale=self.scattered_scale,
            formed_scale=self.formed_scale,
            rate_on=self.rate_on,
            rate_off=self.rate_off,
            burst_duration=self.burst_duration,
            burst_boost=self.burst_boost,
        )
        _require_non_negative(scatter_radius=self.scatter_radius)


@dataclass(frozen=True)
class CharacterConfig:
    """The hidden character tucked into a lower branch.

    Attributes:
        angle: Azimuth of its hiding spot around the formation axis.
        radius: Distance of the hiding spot from the axis.
        y: Height of the hiding spot.
        highlight_rate: Rate of the move in front of the camera and back.
        front_distance: How far ahead of the camera it stands when highlighted.
        tumble_rate: Spin (rad/s) about x and y while it floats scattered.
        tumble_below: Progress under which an idle character tumbles.
        highlight_scale: Scale when highlighted, small enough to stay in frame.
    """

    angle: float = math.pi * 0.25
    radius: float = 3.2
    y: float = -2.5
    scatter_radius: float = 15.0
    rate_on: float = 1.0
    rate_off: float = 2.0
    highlight_rate: float = 3.0
    front_distance: float = 5.0
    tumble_rate: float = 0.5
    tumble_below: float = 0.9
    wiggle_speed: float = 4.0
    wiggle_amplitude: float = 0.1
    active_wiggle_speed: float = 12.0
    active_wiggle_amplitude: float = 0.3
    scattered_scale: float = 0.3
    formed_scale: float = 0.6
    highlight_scale: float = 0.15

    def __post_init__(self) -> None:
        _require_positive(
            rate_on=self.rate_on,
            rate_off=self.rate_off,
            highlight_rate=self.highlight_rate,
            front_distance=self.front_distance,
            scattered_scale=self.scattered_scale,
            formed_scale=self.formed_scale,
            highlight_scale=self.highlight_scale,
        )
        _require_non_negative(
            radius=self.radius,
            scatter_radius=self.scatter_radius,
            tumble_rate=self.tumble_rate,
        )
        if not 0.0 <= self.tumble_below <= 1.0:
            raise ParameterError("tumble_below must lie in [0, 1]")


@dataclass(frozen=True)
class CameraConfig:
    """Initial camera placement and its distance/orbit behaviour."""

    position: Vec3 = (0.0, 0.0, 33.0)
    focus: Vec3 = (0.0, 0.0, 0.0)
    formation_distance: float = 33.0
    scattered_distance: float = 5.0
    speed: float = 2.5
    threshold: float = 0.1
    min_distance: float = 0.1
    orbit_speed: float = 0.3
    orbit_burst_speed: float = 2.0
    burst_duration: float = 3.0

    def __post_init__(self) -> None:
        if self.position == self.focus:
            raise ParameterError("camera cannot start on its focal point")
        _require_positive(
            formation_distance=self.formation_distance,
            scattered_distance=self.scattered_distance,
            speed=self.speed,
            burst_duration=self.burst_duration,
        )
        _require_non_negative(
            threshold=self.threshold,
            min_distance=self.min_distance,
            orbit_speed=self.orbit_speed,
            orbit_burst_speed=self.orbit_burst_speed,
        )
        if min(self.formation_distance, self.scattered_distance) <= self.min_distance:
            raise ParameterError("camera target distances must exceed min_distance")


DEFAULT_ORNAMENTS: tuple[OrnamentConfig, ...] = (
    OrnamentConfig("red_boxes", 60, "box", "#8B0000", scale_factor=0.8, metalness=0.9, roughness=0.15),
    OrnamentConfig("emerald_boxes", 80, "box", "#0B3E25", scale_factor=0.7, metalness=0.8, roughness=0.2),
    OrnamentConfig("gold_spheres", 150, "sphere", "#FFD700", scale_factor=0.5, metalness=1.0, roughness=0.1),
    OrnamentConfig("champagne_spheres", 50, "sphere", "#F5E6C8", scale_factor=0.9, metalness=0.9, roughness=0.15),
    OrnamentConfig("diamonds", 100, "diamond", "#FFFFE0", scale_factor=0.4),
    # bottom fillers
    OrnamentConfig("base_boxes", 30, "box", "#A00000", scale_factor=0.9, t_range=(0.0, 0.45), metalness=0.95, roughness=0.2),
    OrnamentConfig("base_spheres", 40, "sphere", "#D4AF37", scale_factor=0.6, t_range=(0.0, 0.4), metalness=1.0, roughness=0.15),
    # base anchor
    OrnamentConfig("anchor_boxes", 15, "box", "#B8860B", scale_factor=1.2, t_range=(0.0, 0.15), metalness=0.9, roughness=0.3),
)


@dataclass(frozen=True)
class SceneConfig:
    """Whole-scene configuration. A ``None`` subsystem is left out."""

    foliage: FoliageConfig | None = field(default_factory=FoliageConfig)
    spiral: SpiralConfig | None = field(default_factory=SpiralConfig)
    ornaments: tuple[OrnamentConfig, ...] = DEFAULT_ORNAMENTS
    marker: MarkerConfig | None = field(default_factory=MarkerConfig)
    character: CharacterConfig | None = field(default_factory=CharacterConfig)
    camera: CameraConfig = field(default_factory=CameraConfig)
    origin: Vec3 = (0.0, -1.0, 0.0)
    initial_mode: Mode = Mode.FORMATION
    max_dt: float = 0.1

    def __post_init__(self) -> None:
        _require_positive(max_dt=self.max_dt)
        if self.camera.speed * self.max_dt >= 1.0:
            raise ParameterError(
                f"camera speed * max_dt must be below 1, got {self.camera.speed * self.max_dt}"
            )
        names = [o.name for o in self.ornaments]
        if len(names) != len(set(names)):
            raise ParameterError(f"ornament group names must be unique, got {names}")
