"""Builders that lay out each subsystem's population once, up front.

All randomness is drawn from the ``rng`` passed in, so a seeded engine
always yields the same scene.
"""
from __future__ import annotations

import math

import numpy as np

from tinsel_shapes import normalize, sample_formation_curve, sample_height, sample_sphere_volume
from tinsel_shapes.generators import RandomSource

from tinsel_scene.components import (
    FOLIAGE,
    SPIRAL,
    Character,
    Marker,
    OrnamentGroup,
    ParticleLayer,
)
from tinsel_scene.config import (
    CharacterConfig,
    FoliageConfig,
    MarkerConfig,
    OrnamentConfig,
    SpiralConfig,
)
from tinsel_scene.entities import DualPositionBatch, DualPositionEntity

# Smallest base scale per ornament kind; samples land in [lo, 2 * lo).
KIND_SCALES = {"box": 0.2, "sphere": 0.15, "diamond": 0.1}

LARGE_VARIANT = 1.35
# Below this normalized height ornaments are enlarged to fill the base.
UPPER_BAND = 0.66
LOWER_BAND_BOOST = 1.25
MAX_ROTATION_SPEED = 0.3


def _readonly(values: list) -> np.ndarray:
    array = np.array(values, dtype=float)
    array.setflags(write=False)
    return array


def build_foliage(config: FoliageConfig, rng: RandomSource) -> ParticleLayer:
    scatter, formation, seeds = [], [], []
    for _ in range(config.count):
        t = sample_height(rng, bias=config.height_bias)
        formation.append(
            sample_formation_curve(
                t, config.max_radius, config.height, config.turns, config.jitter, rng
            )
        )
        scatter.append(sample_sphere_volume(config.scatter_radius, rng))
        seeds.append(rng.random())
    seed_array = _readonly(seeds)
    return ParticleLayer(
        kind=FOLIAGE,
        scatter=_readonly(scatter),
        formation=_readonly(formation),
        seeds=seed_array,
        sizes=_readonly(seed_array * 80.0 + 20.0),
    )


def build_spiral(config: SpiralConfig, rng: RandomSource) -> ParticleLayer:
    """Evenly spaced points up a tapering spiral; ``t`` follows the index."""
    scatter, formation, seeds = [], [], []
    for i in range(config.count):
        t = normalize(i, config.count, 0)
        formation.append(
            sample_formation_curve(
                t,
                config.radius,
                config.height,
                config.loops,
                0.0,
                rng,
                min_radius=config.inner_radius,
            )
        )
        scatter.append(sample_sphere_volume(config.scatter_radius, rng))
        seeds.append(rng.random())
    seed_array = _readonly(seeds)
    return ParticleLayer(
        kind=SPIRAL,
        scatter=_readonly(scatter),
        formation=_readonly(formation),
        seeds=seed_array,
        sizes=_readonly(seed_array * 0.5 + 0.5),
        spin_rate=config.spin_rate,
    )


def build_ornament_entities(
    config: OrnamentConfig, rng: RandomSource
) -> list[DualPositionEntity]:
    lo, hi = config.t_range
    min_scale = KIND_SCALES[config.kind]
    entities = []
    for _ in range(config.count):
        t = sample_height(rng, lo, hi)
        formation = sample_formation_curve(
            t, config.max_radius, config.height, config.turns, config.jitter, rng
        )
        variant = LARGE_VARIANT if rng.random() < 0.5 else 1.0
        band = 1.0 if t > UPPER_BAND else LOWER_BAND_BOOST
        base_scale = (min_scale + rng.random() * min_scale) * variant * band
        scatter = sample_sphere_volume(config.scatter_radius, rng)
        rotation_speed = tuple(
            (rng.random() - 0.5) * 2.0 * MAX_ROTATION_SPEED for _ in range(3)
        )
        entities.append(
            DualPositionEntity(
                scatter_pos=scatter,
                formation_pos=formation,
                base_scale=base_scale,
                phase=rng.random() * math.pi * 2.0,
                rotation_speed=rotation_speed,
            )
        )
    return entities


def build_ornaments(config: OrnamentConfig, rng: RandomSource) -> OrnamentGroup:
    return OrnamentGroup(config, DualPositionBatch.stack(build_ornament_entities(config, rng)))


def build_marker(config: MarkerConfig, rng: RandomSource) -> Marker:
    """The scattered marker always floats above its formed height."""
    x, y, z = sample_sphere_volume(config.scatter_radius, rng)
    entity = DualPositionEntity(
        scatter_pos=(x, abs(y) + config.lift, z),
        formation_pos=config.formation_pos,
    )
    return Marker(entity, config)


def build_character(config: CharacterConfig, rng: RandomSource) -> Character:
    formation = (
        math.cos(config.angle) * config.radius,
        config.y,
        math.sin(config.angle) * config.radius,
    )
    entity = DualPositionEntity(
        scatter_pos=sample_sphere_volume(config.scatter_radius, rng),
        formation_pos=formation,
    )
    return Character(entity, config)
