"""
Easing functions for animations.

Every curve takes a local progress value t in [0.0, 1.0] and returns the
shaped value, with shape(0) == 0 and shape(1) == 1 exactly. Elastic and back
curves overshoot outside [0, 1] in between; tweens extrapolate accordingly.

The Penner families are built from their "in" form:
- out(t)    = 1 - in(1 - t)
- in_out(t) = in(2t) / 2 for the first half, mirrored for the second

Based on:
- Robert Penner's Easing Functions
- https://easings.net/
- CSS cubic-bezier() timing functions for the EASE presets
"""
import math
from functools import wraps
from typing import Callable, Union

from stagger.animation.types import EasingCurve, EasingFunction


def _pinned(fn: EasingFunction) -> EasingFunction:
    """Make the endpoints exact regardless of floating point drift."""
    @wraps(fn)
    def wrapper(t: float) -> float:
        if t == 0.0 or t == 1.0:
            return float(t)
        return fn(t)
    return wrapper


def _out(ease_in: EasingFunction) -> EasingFunction:
    return _pinned(lambda t: 1.0 - ease_in(1.0 - t))


def _in_out(ease_in: EasingFunction) -> EasingFunction:
    def shaped(t: float) -> float:
        if t < 0.5:
            return ease_in(2.0 * t) / 2.0
        return 1.0 - ease_in(2.0 - 2.0 * t) / 2.0
    return _pinned(shaped)


# Linear (no easing)
@_pinned
def linear(t: float) -> float:
    """Linear interpolation - no easing."""
    return t


# "In" forms - accelerating from zero velocity
@_pinned
def quad_in(t: float) -> float:
    return t * t


@_pinned
def cubic_in(t: float) -> float:
    return t * t * t


@_pinned
def quart_in(t: float) -> float:
    return t * t * t * t


@_pinned
def quint_in(t: float) -> float:
    return t * t * t * t * t


@_pinned
def sine_in(t: float) -> float:
    return 1.0 - math.cos(t * math.pi / 2.0)


@_pinned
def expo_in(t: float) -> float:
    return math.pow(2.0, 10.0 * (t - 1.0))


@_pinned
def circ_in(t: float) -> float:
    return 1.0 - math.sqrt(max(0.0, 1.0 - t * t))


@_pinned
def elastic_in(t: float) -> float:
    """Elastic ease-in - spring-like wind-up that dips below zero."""
    return -math.pow(2.0, 10.0 * (t - 1.0)) * math.sin((t - 1.1) * 5.0 * math.pi)


_BACK_OVERSHOOT = 1.70158


@_pinned
def back_in(t: float) -> float:
    """Back ease-in - backs up slightly before accelerating."""
    c = _BACK_OVERSHOOT
    return t * t * ((c + 1.0) * t - c)


@_pinned
def bounce_out(t: float) -> float:
    """Bounce ease-out - decaying bounces settling at 1."""
    n1 = 7.5625
    d1 = 2.75

    if t < 1 / d1:
        return n1 * t * t
    elif t < 2 / d1:
        t -= 1.5 / d1
        return n1 * t * t + 0.75
    elif t < 2.5 / d1:
        t -= 2.25 / d1
        return n1 * t * t + 0.9375
    t -= 2.625 / d1
    return n1 * t * t + 0.984375


@_pinned
def bounce_in(t: float) -> float:
    return 1.0 - bounce_out(1.0 - t)


quad_out = _out(quad_in)
quad_in_out = _in_out(quad_in)
cubic_out = _out(cubic_in)
cubic_in_out = _in_out(cubic_in)
quart_out = _out(quart_in)
quart_in_out = _in_out(quart_in)
quint_out = _out(quint_in)
quint_in_out = _in_out(quint_in)
sine_out = _out(sine_in)
sine_in_out = _in_out(sine_in)
expo_out = _out(expo_in)
expo_in_out = _in_out(expo_in)
circ_out = _out(circ_in)
circ_in_out = _in_out(circ_in)
elastic_out = _out(elastic_in)
elastic_in_out = _in_out(elastic_in)
back_out = _out(back_in)
back_in_out = _in_out(back_in)
bounce_in_out = _in_out(bounce_in)


class CubicBezier:
    """
    Cubic bezier easing defined by two control points (a, b) and (c, d).

    The curve runs from (0, 0) to (1, 1). transform() solves x(m) = t for
    the curve parameter m by bisection and returns y(m).
    """

    _ERROR_BOUND = 1e-6
    _MAX_ITERATIONS = 64

    def __init__(self, a: float, b: float, c: float, d: float):
        if not (0.0 <= a <= 1.0 and 0.0 <= c <= 1.0):
            raise ValueError(f"CubicBezier x control points must be in [0, 1], got {a}, {c}")
        self.a = a
        self.b = b
        self.c = c
        self.d = d

    def __repr__(self) -> str:
        return f"CubicBezier({self.a}, {self.b}, {self.c}, {self.d})"

    @staticmethod
    def _evaluate(p1: float, p2: float, m: float) -> float:
        inv = 1.0 - m
        return 3.0 * p1 * inv * inv * m + 3.0 * p2 * inv * m * m + m * m * m

    def transform(self, t: float) -> float:
        if t == 0.0 or t == 1.0:
            return float(t)
        lo, hi = 0.0, 1.0
        mid = t
        for _ in range(self._MAX_ITERATIONS):
            mid = (lo + hi) / 2.0
            x = self._evaluate(self.a, self.c, mid)
            if abs(t - x) < self._ERROR_BOUND:
                break
            if x < t:
                lo = mid
            else:
                hi = mid
        return self._evaluate(self.b, self.d, mid)

    __call__ = transform


ease_default = CubicBezier(0.25, 0.1, 0.25, 1.0)
ease_in = CubicBezier(0.42, 0.0, 1.0, 1.0)
ease_out = CubicBezier(0.0, 0.0, 0.58, 1.0)
ease_in_out = CubicBezier(0.42, 0.0, 0.58, 1.0)


# Easing function lookup table
EASING_FUNCTIONS: dict[EasingCurve, EasingFunction] = {
    EasingCurve.LINEAR: linear,

    EasingCurve.EASE: ease_default,
    EasingCurve.EASE_IN: ease_in,
    EasingCurve.EASE_OUT: ease_out,
    EasingCurve.EASE_IN_OUT: ease_in_out,

    EasingCurve.QUAD_IN: quad_in,
    EasingCurve.QUAD_OUT: quad_out,
    EasingCurve.QUAD_IN_OUT: quad_in_out,

    EasingCurve.CUBIC_IN: cubic_in,
    EasingCurve.CUBIC_OUT: cubic_out,
    EasingCurve.CUBIC_IN_OUT: cubic_in_out,

    EasingCurve.QUART_IN: quart_in,
    EasingCurve.QUART_OUT: quart_out,
    EasingCurve.QUART_IN_OUT: quart_in_out,

    EasingCurve.QUINT_IN: quint_in,
    EasingCurve.QUINT_OUT: quint_out,
    EasingCurve.QUINT_IN_OUT: quint_in_out,

    EasingCurve.SINE_IN: sine_in,
    EasingCurve.SINE_OUT: sine_out,
    EasingCurve.SINE_IN_OUT: sine_in_out,

    EasingCurve.EXPO_IN: expo_in,
    EasingCurve.EXPO_OUT: expo_out,
    EasingCurve.EXPO_IN_OUT: expo_in_out,

    EasingCurve.CIRC_IN: circ_in,
    EasingCurve.CIRC_OUT: circ_out,
    EasingCurve.CIRC_IN_OUT: circ_in_out,

    EasingCurve.ELASTIC_IN: elastic_in,
    EasingCurve.ELASTIC_OUT: elastic_out,
    EasingCurve.ELASTIC_IN_OUT: elastic_in_out,

    EasingCurve.BACK_IN: back_in,
    EasingCurve.BACK_OUT: back_out,
    EasingCurve.BACK_IN_OUT: back_in_out,

    EasingCurve.BOUNCE_IN: bounce_in,
    EasingCurve.BOUNCE_OUT: bounce_out,
    EasingCurve.BOUNCE_IN_OUT: bounce_in_out,
}


CurveSpec = Union[EasingCurve, str, Callable[[float], float]]


def get_easing_function(curve: CurveSpec) -> EasingFunction:
    """
    Resolve an easing function.

    Args:
        curve: EasingCurve member, its string value (e.g. ``"ease_in_out"``),
            or any callable taking and returning a float

    Returns:
        Easing function that maps t in [0, 1] with f(0) == 0 and f(1) == 1

    Raises:
        ValueError: If curve is not a known curve or callable
    """
    if isinstance(curve, EasingCurve):
        if curve not in EASING_FUNCTIONS:
            raise ValueError(f"Unknown easing curve: {curve}")
        return EASING_FUNCTIONS[curve]
    if isinstance(curve, str):
        try:
            return EASING_FUNCTIONS[EasingCurve(curve.strip().lower())]
        except ValueError:
            raise ValueError(f"Unknown easing curve: {curve!r}") from None
    if callable(curve):
        return curve
    raise ValueError(f"Unknown easing curve: {curve!r}")


def ease(t: float, curve: CurveSpec) -> float:
    """
    Apply easing function to a time value.

    Args:
        t: Time value, clamped into [0.0, 1.0]
        curve: Easing curve to apply

    Returns:
        Eased value (may leave [0, 1] for overshooting curves)
    """
    t = max(0.0, min(1.0, t))
    return get_easing_function(curve)(t)
