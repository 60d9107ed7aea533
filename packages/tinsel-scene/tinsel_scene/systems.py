"""System factories that turn scene state into frame output.

Each factory closes over the scene's :class:`FrameBuffer` and writes one
kind of render data into it. They read transition progress and burst
multipliers computed earlier in the same frame, so they must run after the
transition and burst systems.
"""
from __future__ import annotations

import math
from typing import TYPE_CHECKING, Callable

import numpy as np

from tinsel_burst import BurstScheduler
from tinsel_camera import AutoOrbit, CameraRig
from tinsel_motion import bob, breathe, mix, pulse, spin, transition_scale, wave, wiggle
from tinsel_shapes import vec
from tinsel_shapes.vec import Vec3
from tinsel_transition import Transition, advance
from tinsel_transition.damping import MAX_DT

from tinsel_scene.components import (
    FOLIAGE,
    Character,
    Marker,
    OrnamentGroup,
    ParticleLayer,
    Subsystem,
)
from tinsel_scene.entities import Transform
from tinsel_scene.output import FrameBuffer, InstanceFrame, PointFrame

if TYPE_CHECKING:
    from tinsel import FrameContext, World

SPIRAL_ALPHA = 0.6


def look_rotation(source: Vec3, target: Vec3, roll: float = 0.0) -> Vec3:
    """YXZ Euler angles turning an object's +z axis from ``source`` toward ``target``."""
    dx, dy, dz = vec.sub(target, source)
    yaw = math.atan2(dx, dz)
    pitch = math.atan2(-dy, math.hypot(dx, dz))
    return (pitch, yaw, roll)


def _layer_frame(layer: ParticleLayer, progress: float, elapsed: float) -> PointFrame:
    positions = layer.scatter + (layer.formation - layer.scatter) * progress
    if layer.kind == FOLIAGE:
        positions[:, 1] += breathe(elapsed, layer.seeds, progress)
        alphas = 0.8 + 0.2 * np.sin(elapsed * 3.0 + layer.seeds * 10.0)
    else:
        positions[:, 1] += wave(elapsed, np.arange(len(layer)), progress)
        alphas = np.full(len(layer), SPIRAL_ALPHA)
    return PointFrame(
        positions=positions,
        sizes=layer.sizes,
        alphas=alphas,
        progress=progress,
        rotation_y=layer.rotation_y,
    )


def make_layer_system(buffer: FrameBuffer) -> Callable[[World, FrameContext], None]:
    def layer_system(world: World, ctx: FrameContext) -> None:
        for _, (tag, layer, transition) in world.query(Subsystem, ParticleLayer, Transition):
            layer.rotation_y += layer.spin_rate * ctx.dt
            buffer.layers[tag.name] = _layer_frame(layer, transition.progress, ctx.elapsed)

    return layer_system


def make_ornament_system(buffer: FrameBuffer) -> Callable[[World, FrameContext], None]:
    """Blend, bob, spin and pulse every ornament group."""

    def ornament_system(world: World, ctx: FrameContext) -> None:
        for _, (tag, group, transition, burst) in world.query(
            Subsystem, OrnamentGroup, Transition, BurstScheduler
        ):
            p = transition.progress
            batch = group.batch
            profile = group.config.motion

            positions = batch.blend(p)
            dx, dy = bob(ctx.elapsed, batch.phase, p, profile)
            positions[:, 0] += dx
            positions[:, 1] += dy

            group.rotations = spin(group.rotations, batch.rotation_speed, burst.multiplier, ctx.dt)
            scales = (
                batch.base_scale
                * group.config.scale_factor
                * pulse(ctx.elapsed, batch.phase, profile)
                * transition_scale(p, profile)
            )
            buffer.groups[tag.name] = InstanceFrame(
                kind=group.config.kind,
                color=group.config.color,
                roughness=group.config.roughness,
                metalness=group.config.metalness,
                positions=positions,
                rotations=group.rotations.copy(),
                scales=scales,
            )

    return ornament_system


def make_marker_system(buffer: FrameBuffer) -> Callable[[World, FrameContext], None]:
    def marker_system(world: World, ctx: FrameContext) -> None:
        for _, (marker, transition, burst) in world.query(Marker, Transition, BurstScheduler):
            config = marker.config
            p = transition.progress
            x, y, z = marker.entity.blend(p)
            y += math.sin(ctx.elapsed * config.hover_frequency) * config.hover_amplitude
            marker.spin += ctx.dt * config.spin_rate * burst.multiplier
            wobble = math.sin(ctx.elapsed * config.wobble_frequency) * config.wobble_amplitude
            buffer.marker = Transform(
                position=(x, y, z),
                rotation=(0.0, marker.spin, wobble),
                scale=float(mix(config.scattered_scale, config.formed_scale, p)),
            )

    return marker_system


def _camera(world: World) -> CameraRig | None:
    for _, (rig,) in world.query(CameraRig):
        return rig
    return None


def make_character_system(
    buffer: FrameBuffer, origin: Vec3, max_dt: float = MAX_DT
) -> Callable[[World, FrameContext], None]:
    """Place the hidden character, pulling it in front of the camera when highlighted.

    The camera lives in world coordinates while the character lives under
    ``origin``, so the camera is shifted into scene-local space first.
    """

    def character_system(world: World, ctx: FrameContext) -> None:
        rig = _camera(world)
        for _, (character, transition) in world.query(Character, Transition):
            config = character.config
            p = transition.progress
            character.highlight = advance(
                character.highlight,
                character.active,
                config.highlight_rate,
                config.highlight_rate,
                ctx.dt,
                max_dt=max_dt,
            )
            m = character.highlight

            resting = character.entity.blend(p)
            center = (0.0, character.entity.formation_pos[1], 0.0)
            if rig is not None:
                eye = vec.sub(rig.position, origin)
                front = vec.add(eye, vec.scale(rig.forward, config.front_distance))
            else:
                eye = vec.add(center, (0.0, 0.0, 1.0))
                front = resting
            position = vec.lerp(resting, front, m)

            if p < config.tumble_below and m < 0.1:
                rx, ry, rz = character.rotation
                step = ctx.dt * config.tumble_rate
                character.rotation = (rx + step, ry + step, rz)
            else:
                if character.active:
                    roll = wiggle(ctx.elapsed, config.active_wiggle_speed, config.active_wiggle_amplitude)
                else:
                    roll = wiggle(ctx.elapsed, config.wiggle_speed, config.wiggle_amplitude)
                character.rotation = look_rotation(position, vec.lerp(center, eye, m), roll)

            base = float(mix(config.scattered_scale, config.formed_scale, p))
            buffer.character = Transform(
                position=position,
                rotation=character.rotation,
                scale=float(mix(base, config.highlight_scale, m)),
                order="YXZ",
            )

    return character_system


def make_camera_output_system(buffer: FrameBuffer) -> Callable[[World, FrameContext], None]:
    def camera_output_system(world: World, ctx: FrameContext) -> None:
        for eid, (rig,) in world.query(CameraRig):
            buffer.camera = rig.position
            buffer.focus = rig.focus
            if world.has(eid, AutoOrbit):
                orbit = world.get(eid, AutoOrbit)
                bursting = world.has(eid, BurstScheduler) and world.get(eid, BurstScheduler).bursting
                buffer.orbit_speed = orbit.burst_speed if bursting else orbit.speed
            return

    return camera_output_system
