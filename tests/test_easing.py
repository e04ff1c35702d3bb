"""Tests for easing curves."""
import pytest

from stagger.animation import EASING_FUNCTIONS, CubicBezier, EasingCurve, ease, get_easing_function
from stagger.animation.easing import (
    back_in, back_out, bounce_out, ease_in_out, elastic_out, linear, quad_in, quad_out,
    sine_in, sine_out,
)


def _samples(n=200):
    return [i / n for i in range(n + 1)]


@pytest.mark.parametrize("curve", list(EasingCurve))
def test_every_curve_is_registered(curve):
    assert curve in EASING_FUNCTIONS


@pytest.mark.parametrize("curve", list(EasingCurve))
def test_endpoints_are_exact(curve):
    fn = get_easing_function(curve)
    assert fn(0.0) == 0.0
    assert fn(1.0) == 1.0


def test_basic_shapes():
    assert linear(0.5) == 0.5
    assert quad_in(0.5) < 0.5   # Slower at start
    assert quad_out(0.5) > 0.5  # Faster at start
    assert 0.0 <= sine_in(0.5) <= 1.0
    assert 0.0 <= sine_out(0.5) <= 1.0


def test_overshooting_curves_leave_unit_range():
    assert min(back_in(t) for t in _samples()) < 0.0
    assert max(back_out(t) for t in _samples()) > 1.0
    assert max(elastic_out(t) for t in _samples()) > 1.0
    assert abs(bounce_out(1.0) - 1.0) < 1e-9


@pytest.mark.parametrize("curve", [
    EasingCurve.LINEAR, EasingCurve.EASE, EasingCurve.EASE_IN,
    EasingCurve.EASE_OUT, EasingCurve.EASE_IN_OUT,
])
def test_reference_curves_are_monotonic(curve):
    fn = get_easing_function(curve)
    values = [fn(t) for t in _samples()]
    assert all(b >= a - 1e-9 for a, b in zip(values, values[1:]))


def test_cubic_bezier_matches_known_points():
    # CSS "ease" is fast in the middle: y(0.5) is roughly 0.8024
    assert get_easing_function(EasingCurve.EASE)(0.5) == pytest.approx(0.8024, abs=1e-3)
    # Symmetric ease-in-out passes through the centre
    assert ease_in_out(0.5) == pytest.approx(0.5, abs=1e-4)
    # Diagonal control points reduce to linear
    diagonal = CubicBezier(1 / 3, 1 / 3, 2 / 3, 2 / 3)
    assert diagonal(0.3) == pytest.approx(0.3, abs=1e-4)


def test_cubic_bezier_rejects_bad_x_control_points():
    with pytest.raises(ValueError):
        CubicBezier(-0.1, 0.0, 0.5, 1.0)


def test_lookup_by_name_and_callable():
    assert get_easing_function("ease_in_out") is get_easing_function(EasingCurve.EASE_IN_OUT)
    assert get_easing_function(" Quad_In ") is quad_in

    def custom(t):
        return t

    assert get_easing_function(custom) is custom


@pytest.mark.parametrize("bad", ["wobble", 42, None])
def test_unknown_curve_raises(bad):
    with pytest.raises(ValueError):
        get_easing_function(bad)


def test_ease_clamps_input():
    assert ease(-0.5, EasingCurve.LINEAR) == 0.0
    assert ease(1.5, EasingCurve.QUAD_OUT) == 1.0
    assert ease(0.5, "quad_in") == 0.25
