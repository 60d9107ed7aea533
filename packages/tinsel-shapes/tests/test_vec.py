"""Tests for 3-vector helpers."""
from __future__ import annotations

import math

import pytest

from tinsel_shapes import vec


class TestArithmetic:
    def test_add(self) -> None:
        assert vec.add((1.0, 2.0, 3.0), (4.0, 5.0, 6.0)) == (5.0, 7.0, 9.0)

    def test_sub(self) -> None:
        assert vec.sub((5.0, 3.0, 1.0), (1.0, 2.0, 1.0)) == (4.0, 1.0, 0.0)

    def test_scale(self) -> None:
        assert vec.scale((1.0, -2.0, 0.5), 2.0) == (2.0, -4.0, 1.0)

    def test_dot(self) -> None:
        assert vec.dot((1.0, 2.0, 3.0), (4.0, 5.0, 6.0)) == 32.0


class TestLerp:
    def test_endpoints(self) -> None:
        a = (0.0, 1.0, 2.0)
        b = (10.0, -1.0, 4.0)
        assert vec.lerp(a, b, 0.0) == a
        assert vec.lerp(a, b, 1.0) == b

    def test_midpoint(self) -> None:
        assert vec.lerp((0.0, 0.0, 0.0), (2.0, 4.0, -6.0), 0.5) == (1.0, 2.0, -3.0)


class TestLength:
    def test_magnitude(self) -> None:
        assert vec.magnitude((2.0, 3.0, 6.0)) == 7.0

    def test_normalize(self) -> None:
        n = vec.normalize((0.0, 3.0, 4.0))
        assert n == pytest.approx((0.0, 0.6, 0.8))

    def test_normalize_zero_returns_zero(self) -> None:
        assert vec.normalize(vec.ORIGIN) == vec.ORIGIN

    def test_with_length_keeps_direction(self) -> None:
        v = vec.with_length((0.0, 3.0, 4.0), 10.0)
        assert v == pytest.approx((0.0, 6.0, 8.0))

    def test_with_length_zero_vector(self) -> None:
        assert vec.with_length(vec.ORIGIN, 5.0) == vec.ORIGIN


class TestRotateY:
    def test_quarter_turn(self) -> None:
        v = vec.rotate_y((0.0, 1.0, 1.0), math.pi / 2)
        assert v == pytest.approx((1.0, 1.0, 0.0), abs=1e-12)

    def test_preserves_length_and_height(self) -> None:
        v = (3.0, -2.0, 4.0)
        r = vec.rotate_y(v, 0.7)
        assert vec.magnitude(r) == pytest.approx(vec.magnitude(v))
        assert r[1] == v[1]
