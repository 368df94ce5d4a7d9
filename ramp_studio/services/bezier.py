"""
Bezier Easing — CSS cubic-bezier timing curves.

The curve runs from (0, 0) to (1, 1) with two interior control points
(x1, y1) and (x2, y2). Evaluating at t means solving x(s) = t for the curve
parameter s, then returning y(s).

Control points are clamped into [0, 1]. That keeps x(s) monotonic, so every
t has a solution; y(s) may still overshoot backwards (e.g. y1=1, y2=0) and
callers get that shape as-is.
"""
from __future__ import annotations

from functools import lru_cache

import numpy as np

NEWTON_ITERATIONS = 4
NEWTON_MIN_SLOPE = 0.001
SUBDIVISION_PRECISION = 1e-7
SUBDIVISION_MAX_ITERATIONS = 10

SPLINE_TABLE_SIZE = 11
SAMPLE_STEP_SIZE = 1.0 / (SPLINE_TABLE_SIZE - 1)


def _clamp01(v: float) -> float:
    return 0.0 if v < 0.0 else 1.0 if v > 1.0 else float(v)


def _coefficients(p1: float, p2: float) -> tuple[float, float, float]:
    # Polynomial form of a 1-D cubic bezier with P0=0, P3=1.
    a = 1.0 - 3.0 * p2 + 3.0 * p1
    b = 3.0 * p2 - 6.0 * p1
    c = 3.0 * p1
    return a, b, c


def _calc_bezier(s, p1: float, p2: float):
    a, b, c = _coefficients(p1, p2)
    return ((a * s + b) * s + c) * s


def _slope(s: float, p1: float, p2: float) -> float:
    a, b, c = _coefficients(p1, p2)
    return 3.0 * a * s * s + 2.0 * b * s + c


class BezierEasing:
    """Callable easing curve; precomputes an x(s) sample table for inversion."""

    def __init__(self, x1: float, y1: float, x2: float, y2: float) -> None:
        self.x1 = _clamp01(x1)
        self.y1 = _clamp01(y1)
        self.x2 = _clamp01(x2)
        self.y2 = _clamp01(y2)
        self._linear = self.x1 == self.y1 and self.x2 == self.y2
        grid = np.linspace(0.0, 1.0, SPLINE_TABLE_SIZE)
        self._samples = _calc_bezier(grid, self.x1, self.x2)

    @property
    def control_points(self) -> tuple[float, float, float, float]:
        return self.x1, self.y1, self.x2, self.y2

    def __call__(self, t: float) -> float:
        t = _clamp01(t)
        if self._linear:
            return t
        # Exact endpoints; the numeric search would otherwise leave ~1e-7 residue.
        if t == 0.0 or t == 1.0:
            return t
        return float(_calc_bezier(self._solve_s(t), self.y1, self.y2))

    def _solve_s(self, x: float) -> float:
        """Find s with x(s) == x."""
        # Locate the sample interval, then interpolate linearly as a first guess.
        interval_start = 0.0
        current = 1
        last = SPLINE_TABLE_SIZE - 1
        while current != last and self._samples[current] <= x:
            interval_start += SAMPLE_STEP_SIZE
            current += 1
        current -= 1

        lo_x = float(self._samples[current])
        hi_x = float(self._samples[current + 1])
        span = hi_x - lo_x
        dist = (x - lo_x) / span if span > 0.0 else 0.0
        guess = interval_start + dist * SAMPLE_STEP_SIZE

        initial_slope = _slope(guess, self.x1, self.x2)
        if initial_slope >= NEWTON_MIN_SLOPE:
            return self._newton(x, guess)
        if initial_slope == 0.0:
            return guess
        return self._subdivide(x, interval_start, interval_start + SAMPLE_STEP_SIZE)

    def _newton(self, x: float, guess: float) -> float:
        for _ in range(NEWTON_ITERATIONS):
            slope = _slope(guess, self.x1, self.x2)
            if slope == 0.0:
                return guess
            guess -= (_calc_bezier(guess, self.x1, self.x2) - x) / slope
        return guess

    def _subdivide(self, x: float, a: float, b: float) -> float:
        current_s = a
        for _ in range(SUBDIVISION_MAX_ITERATIONS):
            current_s = a + (b - a) / 2.0
            current_x = _calc_bezier(current_s, self.x1, self.x2) - x
            if abs(current_x) <= SUBDIVISION_PRECISION:
                break
            if current_x > 0.0:
                b = current_s
            else:
                a = current_s
        return current_s


@lru_cache(maxsize=64)
def _easing(x1: float, y1: float, x2: float, y2: float) -> BezierEasing:
    return BezierEasing(x1, y1, x2, y2)


def ease(t: float, x1: float, y1: float, x2: float, y2: float) -> float:
    """Eased progress of the curve (x1, y1, x2, y2) at t in [0, 1]."""
    return _easing(float(x1), float(y1), float(x2), float(y2))(t)
