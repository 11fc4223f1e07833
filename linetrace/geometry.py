"""Planar vectors, parametric cubic curves and small numeric helpers."""

from __future__ import annotations

import math
from collections.abc import Iterator
from dataclasses import dataclass


@dataclass(frozen=True)
class Vec2:
    """A point or vector in the plane."""

    x: float
    y: float

    def __iter__(self) -> Iterator[float]:
        yield self.x
        yield self.y


@dataclass(frozen=True)
class Vec4:
    """Coefficients of the cubic ``a*u**3 + b*u**2 + c*u + d``."""

    a: float
    b: float
    c: float
    d: float

    def __iter__(self) -> Iterator[float]:
        yield self.a
        yield self.b
        yield self.c
        yield self.d


def _value(coes: Vec4, u: float) -> float:
    return coes.a * u * u * u + coes.b * u * u + coes.c * u + coes.d


def _first_derivative(coes: Vec4, u: float) -> float:
    return 3.0 * coes.a * u * u + 2.0 * coes.b * u + coes.c


def _second_derivative(coes: Vec4, u: float) -> float:
    return 6.0 * coes.a * u + 2.0 * coes.b


def lagrange_coefficients(p1: float, p2: float, p3: float, p4: float) -> Vec4:
    """Cubic through ``p1..p4`` at ``u = 0, 1/3, 2/3, 1``."""
    return Vec4(
        (-9 * p1 + 27 * p2 - 27 * p3 + 9 * p4) / 2.0,
        (18 * p1 - 45 * p2 + 36 * p3 - 9 * p4) / 2.0,
        (-11 * p1 + 18 * p2 - 9 * p3 + 2 * p4) / 2.0,
        p1,
    )


def bezier_coefficients(p1: float, p2: float, p3: float, p4: float) -> Vec4:
    """Polynomial coefficients of a cubic Bezier with control values ``p1..p4``."""
    return Vec4(
        -p1 + 3.0 * p2 - 3.0 * p3 + p4,
        3.0 * p1 - 6.0 * p2 + 3.0 * p3,
        -3.0 * p1 + 3.0 * p2,
        p1,
    )


@dataclass(frozen=True)
class CubicCurve:
    """A planar curve whose coordinates are cubics in the parameter ``u``."""

    x: Vec4
    y: Vec4

    def point(self, u: float) -> Vec2:
        """Position on the curve at parameter ``u``."""
        return Vec2(_value(self.x, u), _value(self.y, u))

    def heading(self, u: float) -> float:
        """Angle of the tangent at ``u``, in radians."""
        return math.atan2(_first_derivative(self.y, u), _first_derivative(self.x, u))

    def curvature_radius(self, u: float) -> float:
        """Signed radius of curvature at ``u``; NaN where the curve is straight."""
        dx = _first_derivative(self.x, u)
        dy = _first_derivative(self.y, u)
        den = dx * _second_derivative(self.y, u) - dy * _second_derivative(self.x, u)
        speed = math.hypot(dy, dx)
        if den == 0.0:
            return math.nan
        return speed * speed * speed / den

    def nearest_parameter(self, point: Vec2, u: float) -> float:
        """Refine ``u`` towards the curve parameter closest to ``point``.

        Runs five Newton steps on the derivative of the squared distance.
        """
        cx, cy = self.x, self.y
        ox = cx.d - point.x
        oy = cy.d - point.y
        k0 = 3.0 * (cx.a * cx.a + cy.a * cy.a)
        k1 = 5.0 * (cx.a * cx.b + cy.a * cy.b)
        k2 = 4.0 * cx.a * cx.c + 2.0 * cx.b * cx.b + 4.0 * cy.a * cy.c + 2.0 * cy.b * cy.b
        k3 = 3.0 * (cx.a * ox + cx.b * cx.c + cy.a * oy + cy.b * cy.c)
        k4 = 2.0 * cx.b * ox + cx.c * cx.c + 2.0 * cy.b * oy + cy.c * cy.c
        k5 = cx.c * ox + cy.c * oy

        for _ in range(5):
            slope = 5.0 * k0 * u**4 + 4.0 * k1 * u**3 + 3.0 * k2 * u * u + 2.0 * k3 * u + k4
            if slope != 0.0:
                residual = k0 * u**5 + k1 * u**4 + k2 * u**3 + k3 * u * u + k4 * u + k5
                u -= residual / slope
        return u


def saturation(x: float, x_min: float, x_max: float) -> float:
    """Clamp ``x`` into ``[x_min, x_max]``."""
    if x < x_min:
        return x_min
    if x > x_max:
        return x_max
    return x


def sinc(x: float) -> float:
    """Unnormalised sinc, ``sin(x)/x`` with ``sinc(0) == 1``."""
    if x == 0.0:
        return 1.0
    return math.sin(x) / x