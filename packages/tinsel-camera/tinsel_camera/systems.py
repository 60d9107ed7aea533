"""System factories for camera motion."""
from __future__ import annotations

from typing import TYPE_CHECKING, Callable

from tinsel_burst import BurstScheduler
from tinsel_shapes import vec

from tinsel_camera.components import AutoOrbit, CameraRig
from tinsel_camera.controller import CameraRangeController, orbit_angle

if TYPE_CHECKING:
    from tinsel import FrameContext, World


def make_orbit_system() -> Callable[[World, FrameContext], None]:
    """Spin rigs carrying AutoOrbit around their focus.

    A rig that also carries a BurstScheduler drifts at ``burst_speed``
    while the burst lasts.
    """

    def orbit_system(world: World, ctx: FrameContext) -> None:
        for eid, (rig, orbit) in world.query(CameraRig, AutoOrbit):
            speed = orbit.speed
            if world.has(eid, BurstScheduler) and world.get(eid, BurstScheduler).bursting:
                speed = orbit.burst_speed
            if speed == 0.0:
                continue
            offset = vec.rotate_y(rig.offset, orbit_angle(speed, ctx.dt))
            rig.position = vec.add(rig.focus, offset)

    return orbit_system


def make_camera_system() -> Callable[[World, FrameContext], None]:
    """Ease every rig carrying a CameraRangeController toward its mode distance."""

    def camera_system(world: World, ctx: FrameContext) -> None:
        for _, (rig, controller) in world.query(CameraRig, CameraRangeController):
            controller.update(rig, ctx.mode, ctx.dt)

    return camera_system
