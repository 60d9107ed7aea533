"""CameraRangeController - eases the viewing distance between two presets."""
from __future__ import annotations

import math

from tinsel.types import Mode, ParameterError

from tinsel_camera.components import CameraRig


def orbit_angle(speed: float, dt: float) -> float:
    """Radians turned in ``dt`` seconds at an orbit-control ``speed``."""
    return 2.0 * math.pi / 60.0 * speed * dt


class CameraRangeController:
    """Pulls the camera to ``formation_distance`` or ``scattered_distance``.

    Each frame the distance moves by ``(target - d) * dt * speed``. Gaps under
    ``threshold`` are left alone so the camera comes to rest, and an inward
    step that would put the camera at or inside ``min_distance`` is skipped.
    With ``speed * max_dt < 1`` and both targets beyond ``min_distance`` every
    step lands between the current distance and the target.
    """

    def __init__(
        self,
        formation_distance: float = 33.0,
        scattered_distance: float = 5.0,
        speed: float = 2.5,
        threshold: float = 0.1,
        min_distance: float = 0.1,
        max_dt: float = 0.1,
    ) -> None:
        if formation_distance <= 0 or scattered_distance <= 0:
            raise ParameterError("camera target distances must be positive")
        if speed <= 0:
            raise ParameterError(f"camera speed must be positive, got {speed}")
        if threshold < 0 or min_distance < 0:
            raise ParameterError("threshold and min_distance must be non-negative")
        if max_dt <= 0:
            raise ParameterError("max_dt must be positive")
        if min(formation_distance, scattered_distance) <= min_distance:
            raise ParameterError(
                f"camera target distances must exceed min_distance ({min_distance})"
            )
        if speed * max_dt >= 1.0:
            raise ParameterError(
                f"speed * max_dt must be below 1 so a frame cannot overshoot, got {speed * max_dt}"
            )
        self.formation_distance = formation_distance
        self.scattered_distance = scattered_distance
        self.speed = speed
        self.threshold = threshold
        self.min_distance = min_distance
        self.max_dt = max_dt

    def target(self, mode: Mode) -> float:
        if mode is Mode.FORMATION:
            return self.formation_distance
        return self.scattered_distance

    def step_distance(self, distance: float, mode: Mode, dt: float) -> float:
        """Return the distance after one frame without touching any rig."""
        diff = self.target(mode) - distance
        if abs(diff) <= self.threshold:
            return distance
        dt = min(max(dt, 0.0), self.max_dt)
        new = distance + diff * dt * self.speed
        if math.isnan(new) or (new <= self.min_distance and new < distance):
            return distance
        return new

    def update(self, rig: CameraRig, mode: Mode, dt: float) -> bool:
        """Rescale ``rig``'s view vector. Returns True if the camera moved."""
        distance = rig.distance
        if distance == 0.0:
            return False
        new = self.step_distance(distance, mode, dt)
        if new == distance:
            return False
        rig.set_distance(new)
        return True
