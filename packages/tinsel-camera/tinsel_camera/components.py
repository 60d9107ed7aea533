"""Camera components."""
from __future__ import annotations

from dataclasses import dataclass

from tinsel.types import DomainError, ParameterError
from tinsel_shapes import vec
from tinsel_shapes.vec import Vec3


@dataclass
class CameraRig:
    """Camera position around a fixed focal point.

    The view vector runs from ``focus`` to ``position``. Its direction belongs
    to the user's orbit input; controllers here only change its length.
    """

    position: Vec3 = (0.0, 0.0, 33.0)
    focus: Vec3 = vec.ORIGIN

    @property
    def offset(self) -> Vec3:
        return vec.sub(self.position, self.focus)

    @property
    def distance(self) -> float:
        return vec.magnitude(self.offset)

    @property
    def direction(self) -> Vec3:
        """Unit vector from the focus toward the camera."""
        offset = self.offset
        if vec.magnitude(offset) == 0.0:
            raise DomainError("camera sits on its focal point; view direction is undefined")
        return vec.normalize(offset)

    @property
    def forward(self) -> Vec3:
        """Unit vector the camera looks along."""
        return vec.scale(self.direction, -1.0)

    def set_distance(self, distance: float) -> None:
        if distance <= 0:
            raise ParameterError(f"camera distance must be positive, got {distance}")
        offset = self.offset
        if vec.magnitude(offset) == 0.0:
            raise DomainError("cannot rescale a zero-length view vector")
        self.position = vec.add(self.focus, vec.with_length(offset, distance))


@dataclass
class AutoOrbit:
    """Idle drift around the vertical axis, faster while a burst lasts.

    Speeds use orbit-control units: 1.0 is one revolution per minute.
    """

    speed: float = 0.3
    burst_speed: float = 2.0

    def __post_init__(self) -> None:
        if self.speed < 0 or self.burst_speed < 0:
            raise ParameterError("orbit speeds must be non-negative")
