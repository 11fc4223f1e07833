import math

import pytest
from hypothesis import given
from hypothesis import strategies as st

from linetrace.geometry import (
    CubicCurve,
    Vec2,
    Vec4,
    bezier_coefficients,
    lagrange_coefficients,
    saturation,
    sinc,
)

finite = st.floats(min_value=-100.0, max_value=100.0, allow_nan=False)


@given(finite, finite, finite, finite)
def test_bezier_endpoints(p1, p2, p3, p4):
    coes = bezier_coefficients(p1, p2, p3, p4)
    curve = CubicCurve(coes, coes)
    assert curve.point(0.0).x == pytest.approx(p1, abs=1e-9)
    assert curve.point(1.0).x == pytest.approx(p4, abs=1e-7)


@given(finite, finite, finite, finite)
def test_lagrange_passes_through_samples(p1, p2, p3, p4):
    coes = lagrange_coefficients(p1, p2, p3, p4)
    curve = CubicCurve(coes, Vec4(0.0, 0.0, 0.0, 0.0))
    for u, expected in ((0.0, p1), (1 / 3, p2), (2 / 3, p3), (1.0, p4)):
        assert curve.point(u).x == pytest.approx(expected, abs=1e-6)


def test_vec_unpacking():
    x, y = Vec2(1.5, -2.0)
    assert (x, y) == (1.5, -2.0)
    assert tuple(Vec4(1.0, 2.0, 3.0, 4.0)) == (1.0, 2.0, 3.0, 4.0)


def test_straight_line_heading_and_radius():
    line = CubicCurve(Vec4(0.0, 0.0, 1.0, 0.0), Vec4(0.0, 0.0, 1.0, 0.0))
    assert line.heading(0.4) == pytest.approx(math.pi / 4)
    assert math.isnan(line.curvature_radius(0.4))


def test_parabola_radius_at_vertex():
    parabola = CubicCurve(Vec4(0.0, 0.0, 1.0, 0.0), Vec4(0.0, 1.0, 0.0, 0.0))
    assert parabola.curvature_radius(0.0) == pytest.approx(0.5)


def test_radius_sign_follows_turn_direction():
    left = CubicCurve(Vec4(0.0, 0.0, 1.0, 0.0), Vec4(0.0, 1.0, 0.0, 0.0))
    right = CubicCurve(Vec4(0.0, 0.0, 1.0, 0.0), Vec4(0.0, -1.0, 0.0, 0.0))
    assert left.curvature_radius(0.2) == pytest.approx(-right.curvature_radius(0.2))
    assert left.curvature_radius(0.2) > 0


@given(st.floats(min_value=-5.0, max_value=5.0), st.floats(min_value=-5.0, max_value=5.0))
def test_nearest_parameter_on_line(px, py):
    line = CubicCurve(Vec4(0.0, 0.0, 1.0, 0.0), Vec4(0.0, 0.0, 0.0, 0.0))
    assert line.nearest_parameter(Vec2(px, py), 0.0) == pytest.approx(px, abs=1e-9)


def test_nearest_parameter_recovers_point_on_curve():
    curve = CubicCurve(bezier_coefficients(0.0, 1.0, 2.0, 3.0), bezier_coefficients(0.0, 1.0, 1.0, 0.0))
    target = curve.point(0.6)
    u = curve.nearest_parameter(target, 0.5)
    assert u == pytest.approx(0.6, abs=1e-6)


def test_nearest_parameter_constant_curve_keeps_u():
    dot = CubicCurve(Vec4(0.0, 0.0, 0.0, 1.0), Vec4(0.0, 0.0, 0.0, 1.0))
    assert dot.nearest_parameter(Vec2(3.0, 3.0), 0.25) == 0.25


@given(finite, finite, finite)
def test_saturation_bounds(x, a, b):
    lo, hi = min(a, b), max(a, b)
    result = saturation(x, lo, hi)
    assert lo <= result <= hi
    if lo <= x <= hi:
        assert result == x


def test_saturation_limits():
    assert saturation(2.0, -1.0, 1.0) == 1.0
    assert saturation(-2.0, -1.0, 1.0) == -1.0


def test_sinc_values():
    assert sinc(0.0) == 1.0
    assert sinc(math.pi) == pytest.approx(0.0, abs=1e-12)


@given(st.floats(min_value=-50.0, max_value=50.0))
def test_sinc_is_even_and_bounded(x):
    assert sinc(x) == pytest.approx(sinc(-x))
    assert abs(sinc(x)) <= 1.0