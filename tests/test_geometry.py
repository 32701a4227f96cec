"""Tests for geometric operations over parameter spaces."""

import random

import numpy as np
import pytest

from hypercal.core.errors import EmptyInputError, IncompatibleGeometryError
from hypercal.core.geometry import (
    centroid,
    generate_random,
    generate_random_within,
    homothetic_transform,
)
from hypercal.core.hypercube import MappingSystem, ParameterSpace


def make_point(x: float, y: float) -> ParameterSpace:
    p = ParameterSpace()
    p.define("x", 0.0, 10.0, x)
    p.define("y", 0.0, 2.0, y)
    return p


class TestCentroid:
    def test_two_points(self):
        c = centroid([make_point(0.0, 0.0), make_point(10.0, 2.0)])
        assert c.as_dict() == {"x": 5.0, "y": 1.0}
        assert c.get_min_value("x") == 0.0
        assert c.get_max_value("y") == 2.0

    def test_single_point(self):
        p = make_point(3.3, 1.7)
        assert centroid([p]).as_dict() == p.as_dict()

    def test_duplicate_point(self):
        p = make_point(3.3, 1.7)
        assert centroid([p, p]).as_dict() == p.as_dict()

    def test_accepts_generator(self):
        c = centroid(make_point(float(i), 1.0) for i in range(5))
        assert c.get_value("x") == pytest.approx(2.0)

    def test_empty(self):
        with pytest.raises(EmptyInputError):
            centroid([])

    def test_mismatched_variables(self):
        other = ParameterSpace()
        other.define("x", 0.0, 10.0, 1.0)
        other.define("z", 0.0, 2.0, 1.0)
        with pytest.raises(IncompatibleGeometryError):
            centroid([make_point(1.0, 1.0), other])

    def test_mismatched_bounds(self):
        other = make_point(1.0, 1.0)
        other.set_max_value("y", 3.0)
        with pytest.raises(IncompatibleGeometryError) as exc:
            centroid([make_point(1.0, 1.0), other])
        assert exc.value.name == "y"

    def test_does_not_mutate_inputs(self):
        a, b = make_point(0.0, 0.0), make_point(10.0, 2.0)
        before = (a.clone(), b.clone())
        result = centroid([a, b])
        result.set_value("x", 99.0)
        assert (a, b) == before

    def test_variable_order_follows_first_point(self):
        a = make_point(1.0, 1.0)
        b = ParameterSpace()
        b.define("y", 0.0, 2.0, 1.0)
        b.define("x", 0.0, 10.0, 3.0)
        c = centroid([a, b])
        assert c.variable_names() == ["x", "y"]
        assert c.as_dict() == {"x": 2.0, "y": 1.0}


class TestHomotheticTransform:
    def test_factor_one_gives_point(self):
        base, point = make_point(0.1, 0.7), make_point(0.3, 1.9)
        assert homothetic_transform(base, point, 1.0).as_dict() == point.as_dict()

    def test_factor_zero_gives_base(self):
        base, point = make_point(0.1, 0.7), make_point(0.3, 1.9)
        assert homothetic_transform(base, point, 0.0).as_dict() == base.as_dict()

    def test_reflection(self):
        base, point = make_point(5.0, 1.0), make_point(7.0, 1.5)
        reflected = homothetic_transform(base, point, -1.0)
        assert reflected.as_dict() == {"x": 3.0, "y": 0.5}

    def test_contraction(self):
        base, point = make_point(4.0, 0.0), make_point(8.0, 2.0)
        assert homothetic_transform(base, point, 0.5).as_dict() == {"x": 6.0, "y": 1.0}

    def test_result_may_leave_bounds(self):
        base, point = make_point(9.0, 1.0), make_point(2.0, 1.0)
        result = homothetic_transform(base, point, -1.0)
        assert result.get_value("x") == 16.0
        assert result.out_of_bounds() == ["x"]

    def test_bounds_copied_from_point(self):
        base = make_point(1.0, 1.0)
        point = make_point(2.0, 1.0)
        point.set_min_max_value("x", -20.0, 20.0, 2.0)
        result = homothetic_transform(base, point, 2.0)
        assert (result.get_min_value("x"), result.get_max_value("x")) == (-20.0, 20.0)

    def test_mismatched_variables(self):
        other = ParameterSpace()
        other.define("x", 0.0, 10.0, 1.0)
        with pytest.raises(IncompatibleGeometryError):
            homothetic_transform(other, make_point(1.0, 1.0), 0.5)


class TestRandomSampling:
    def test_generate_random_within_declared_bounds(self, rng):
        point = ParameterSpace()
        point.define("a", -3.0, 7.0, 0.0)
        point.define("b", 100.0, 100.5, 100.0)
        for _ in range(500):
            sample = generate_random(point, rng)
            for name in point:
                assert point.get_min_value(name) <= sample.get_value(name) <= point.get_max_value(name)
            assert sample.bounds()[0].tolist() == point.bounds()[0].tolist()

    def test_generate_random_is_independent(self, rng):
        point = make_point(1.0, 1.0)
        sample = generate_random(point, rng)
        sample.set_min_value("x", 5.0)
        assert point.get_min_value("x") == 0.0

    def test_generate_random_deterministic_given_seed(self):
        point = make_point(1.0, 1.0)
        a = generate_random(point, np.random.default_rng(7))
        b = generate_random(point, np.random.default_rng(7))
        assert a == b

    def test_generate_random_accepts_stdlib_random(self):
        sample = generate_random(make_point(1.0, 1.0), random.Random(3))
        assert sample.is_within_bounds()

    def test_generate_random_within_span(self, rng):
        points = [make_point(2.0, 0.5), make_point(4.0, 1.5), make_point(3.0, 1.0)]
        for _ in range(500):
            sample = generate_random_within(points, rng)
            assert 2.0 <= sample.get_value("x") <= 4.0
            assert 0.5 <= sample.get_value("y") <= 1.5
            # declared bounds kept, not the span
            assert sample.get_min_value("x") == 0.0
            assert sample.get_max_value("x") == 10.0

    def test_generate_random_within_degenerate_span(self, rng):
        points = [make_point(2.0, 0.5), make_point(2.0, 1.5)]
        sample = generate_random_within(points, rng)
        assert sample.get_value("x") == 2.0

    def test_generate_random_within_empty(self, rng):
        with pytest.raises(EmptyInputError):
            generate_random_within([], rng)

    def test_generate_random_within_mismatched(self, rng):
        other = ParameterSpace()
        other.define("x", 0.0, 10.0, 1.0)
        with pytest.raises(IncompatibleGeometryError):
            generate_random_within([make_point(1.0, 1.0), other], rng)

    def test_generate_random_within_mismatched_bounds(self, rng):
        other = make_point(1.0, 1.0)
        other.set_min_value("x", -1.0)
        with pytest.raises(IncompatibleGeometryError):
            generate_random_within([make_point(1.0, 1.0), other], rng)


def test_descriptions_not_built_when_debug_disabled(monkeypatch, rng):
    """Geometry and apply skip describe() unless DEBUG logging is on."""

    def fail(self):
        raise AssertionError("describe() called with DEBUG disabled")

    a, b = make_point(1.0, 0.5), make_point(3.0, 1.5)
    monkeypatch.setattr(ParameterSpace, "describe", fail)
    centroid([a, b])
    homothetic_transform(a, b, -1.0)
    generate_random_within([a, b], rng)
    generate_random(a, rng)
    a.apply(MappingSystem({"x": 0.0, "y": 0.0}))
