"""Tests for population builders and dual-position batches."""
import math
import random

import numpy as np
import pytest

from tinsel import ParameterError
from tinsel_scene import (
    CharacterConfig,
    DualPositionBatch,
    DualPositionEntity,
    FoliageConfig,
    MarkerConfig,
    OrnamentConfig,
    SpiralConfig,
)
from tinsel_scene.populate import (
    build_character,
    build_foliage,
    build_marker,
    build_ornament_entities,
    build_ornaments,
    build_spiral,
)


class TestDualPositionBatch:
    def _entities(self):
        return [
            DualPositionEntity((1.0, 2.0, 3.0), (0.0, 0.0, 0.0), 0.5, 1.0, (0.1, 0.2, 0.3)),
            DualPositionEntity((-4.0, 0.0, 2.0), (1.0, 1.0, 1.0), 0.7, 2.0, (0.0, 0.0, 0.0)),
        ]

    def test_blend_endpoints_exact(self):
        batch = DualPositionBatch.stack(self._entities())
        np.testing.assert_array_equal(batch.blend(0.0), batch.scatter)
        np.testing.assert_array_equal(batch.blend(1.0), batch.formation)

    def test_blend_midpoint(self):
        batch = DualPositionBatch.stack(self._entities())
        np.testing.assert_allclose(batch.blend(0.5)[0], [0.5, 1.0, 1.5])

    def test_blend_returns_writable_copy(self):
        batch = DualPositionBatch.stack(self._entities())
        out = batch.blend(0.0)
        out[0, 0] = 99.0
        assert batch.scatter[0, 0] == 1.0

    def test_arrays_read_only(self):
        batch = DualPositionBatch.stack(self._entities())
        with pytest.raises(ValueError):
            batch.scatter[0, 0] = 5.0

    def test_indexing_recovers_entity(self):
        entities = self._entities()
        batch = DualPositionBatch.stack(entities)
        assert len(batch) == 2
        assert batch[1] == entities[1]

    def test_shape_mismatch_rejected(self):
        with pytest.raises(ParameterError):
            DualPositionBatch(
                scatter=np.zeros((2, 3)),
                formation=np.zeros((3, 3)),
                base_scale=np.ones(2),
                phase=np.zeros(2),
                rotation_speed=np.zeros((2, 3)),
            )

    def test_entity_blend(self):
        entity = self._entities()[0]
        assert entity.blend(0.0) == (1.0, 2.0, 3.0)
        assert entity.blend(1.0) == (0.0, 0.0, 0.0)


class TestFoliage:
    def test_counts_and_bounds(self):
        config = FoliageConfig(count=500)
        layer = build_foliage(config, random.Random(7))
        assert len(layer) == 500
        assert layer.scatter.shape == (500, 3)
        assert np.all(np.linalg.norm(layer.scatter, axis=1) <= config.scatter_radius + 1e-9)
        half = config.height / 2 + config.jitter / 2
        assert np.all(np.abs(layer.formation[:, 1]) <= half + 1e-9)

    def test_sizes_follow_seeds(self):
        layer = build_foliage(FoliageConfig(count=100), random.Random(7))
        np.testing.assert_allclose(layer.sizes, layer.seeds * 80.0 + 20.0)
        assert np.all((layer.sizes >= 20.0) & (layer.sizes < 100.0))

    def test_arrays_read_only(self):
        layer = build_foliage(FoliageConfig(count=10), random.Random(7))
        with pytest.raises(ValueError):
            layer.formation[0, 0] = 1.0

    def test_same_seed_same_layer(self):
        a = build_foliage(FoliageConfig(count=50), random.Random(11))
        b = build_foliage(FoliageConfig(count=50), random.Random(11))
        np.testing.assert_array_equal(a.scatter, b.scatter)
        np.testing.assert_array_equal(a.formation, b.formation)


class TestSpiral:
    def test_evenly_spaced_heights(self):
        config = SpiralConfig(count=120)
        layer = build_spiral(config, random.Random(3))
        for i in (0, 30, 119):
            t = i / 120
            assert layer.formation[i, 1] == pytest.approx((t - 0.5) * config.height)

    def test_radius_tapers_to_inner_radius(self):
        config = SpiralConfig(count=120)
        layer = build_spiral(config, random.Random(3))
        for i in (0, 60, 119):
            t = i / 120
            radius = math.hypot(layer.formation[i, 0], layer.formation[i, 2])
            assert radius == pytest.approx(config.inner_radius + config.radius * (1 - t))

    def test_sizes_and_spin(self):
        layer = build_spiral(SpiralConfig(count=40), random.Random(3))
        assert np.all((layer.sizes >= 0.5) & (layer.sizes < 1.0))
        assert layer.spin_rate == 0.15


class TestOrnaments:
    def test_count_and_rotation_bounds(self):
        config = OrnamentConfig("gold", 200, "sphere", "#FFD700")
        entities = build_ornament_entities(config, random.Random(5))
        assert len(entities) == 200
        for e in entities:
            assert all(abs(s) <= 0.3 for s in e.rotation_speed)
            assert 0.0 <= e.phase < 2 * math.pi
            assert math.dist(e.scatter_pos, (0.0, 0.0, 0.0)) <= config.scatter_radius + 1e-9

    def test_base_scale_bounds(self):
        config = OrnamentConfig("boxes", 300, "box", "#8B0000")
        for e in build_ornament_entities(config, random.Random(5)):
            assert 0.2 <= e.base_scale < 0.4 * 1.35 * 1.25

    def test_both_variants_appear(self):
        config = OrnamentConfig("boxes", 300, "box", "#8B0000", t_range=(0.8, 1.0))
        scales = [e.base_scale for e in build_ornament_entities(config, random.Random(5))]
        assert any(s >= 0.4 for s in scales)
        assert any(s < 0.27 for s in scales)

    def test_height_range_respected(self):
        config = OrnamentConfig("anchor", 100, "box", "#B8860B", t_range=(0.0, 0.15))
        top = (0.15 - 0.5) * config.height + config.jitter / 2
        for e in build_ornament_entities(config, random.Random(5)):
            assert e.formation_pos[1] <= top + 1e-9
            # the whole band sits below the upper cut, so every one is enlarged
            assert e.base_scale >= 0.2 * 1.25

    def test_group_starts_unrotated(self):
        group = build_ornaments(OrnamentConfig("gold", 12, "sphere", "#FFD700"), random.Random(5))
        assert len(group.batch) == 12
        np.testing.assert_array_equal(group.rotations, np.zeros((12, 3)))


class TestMarkerAndCharacter:
    def test_marker_scatter_floats_high(self):
        config = MarkerConfig()
        rng = random.Random(9)
        for _ in range(50):
            marker = build_marker(config, rng)
            assert marker.entity.scatter_pos[1] >= config.lift
            assert marker.entity.formation_pos == (0.0, 7.8, 0.0)

    def test_character_hiding_spot(self):
        config = CharacterConfig()
        character = build_character(config, random.Random(9))
        x, y, z = character.entity.formation_pos
        assert x == pytest.approx(math.cos(math.pi / 4) * 3.2)
        assert z == pytest.approx(math.sin(math.pi / 4) * 3.2)
        assert y == -2.5
        assert not character.active
        assert character.highlight == 0.0
