"""tinsel-camera - Viewing-distance transitions that keep the user's angle."""
from __future__ import annotations

from tinsel_camera.components import AutoOrbit, CameraRig
from tinsel_camera.controller import CameraRangeController, orbit_angle
from tinsel_camera.systems import make_camera_system, make_orbit_system

__all__ = [
    "AutoOrbit",
    "CameraRangeController",
    "CameraRig",
    "make_camera_system",
    "make_orbit_system",
    "orbit_angle",
]
