"""Tests for AnimatedProperty and StaggeredAnimation."""
import pytest

from stagger.animation import (
    AnimatedProperty,
    EasingCurve,
    IntervalConfigError,
    IntervalSpec,
    StaggeredAnimation,
    Tween,
)


def test_opacity_example():
    prop = AnimatedProperty("opacity", IntervalSpec(0.0, 0.10), Tween(0.0, 1.0), EasingCurve.LINEAR)
    assert prop.local_progress(0.05) == pytest.approx(0.5)
    assert prop.value_at(0.05) == pytest.approx(0.5)


def test_width_before_its_interval_holds_begin_value():
    prop = AnimatedProperty("width", IntervalSpec(0.125, 0.25), Tween(50.0, 150.0), EasingCurve.EASE)
    assert prop.local_progress(0.0) == 0.0
    assert prop.value_at(0.0) == 50.0


def test_end_of_timeline_yields_exact_end_values():
    prop = AnimatedProperty("x", IntervalSpec(0.5, 1.0), Tween(-3.0, 7.25), EasingCurve.BOUNCE_IN_OUT)
    assert prop.value_at(1.0) == 7.25


def test_easing_is_applied_after_interval_mapping():
    prop = AnimatedProperty("x", IntervalSpec(0.0, 0.5), Tween(0.0, 100.0), EasingCurve.QUAD_IN)
    # local 0.5 -> quad_in 0.25 -> 25
    assert prop.eased_progress(0.25) == pytest.approx(0.25)
    assert prop.value_at(0.25) == pytest.approx(25.0)


def test_overshoot_curve_extrapolates_value():
    prop = AnimatedProperty("x", IntervalSpec(0.0, 1.0), Tween(0.0, 100.0), EasingCurve.BACK_OUT)
    peak = max(prop.value_at(i / 100) for i in range(101))
    assert peak > 100.0


def test_property_validation():
    with pytest.raises(ValueError):
        AnimatedProperty("", IntervalSpec(), Tween(0.0, 1.0))
    with pytest.raises(IntervalConfigError):
        AnimatedProperty("x", (0.0, 1.0), Tween(0.0, 1.0))
    with pytest.raises(TypeError):
        AnimatedProperty("x", IntervalSpec(), (0.0, 1.0))
    with pytest.raises(ValueError):
        AnimatedProperty("x", IntervalSpec(), Tween(0.0, 1.0), "not_a_curve")


def test_compute_all_is_ordered_and_pure(two_step_scene):
    first = two_step_scene.compute_all(0.25)
    second = two_step_scene.compute_all(0.25)
    assert list(first) == ["fade", "grow"]
    assert first == second
    assert first["fade"] == pytest.approx(0.5)
    assert first["grow"] == 10.0


def test_compute_all_at_bounds(two_step_scene):
    assert two_step_scene.compute_all(0.0) == two_step_scene.begin_values()
    assert two_step_scene.compute_all(1.0) == two_step_scene.end_values()


def test_duplicate_property_name_is_rejected(two_step_scene):
    with pytest.raises(ValueError):
        two_step_scene.animate("fade", 1.0, 0.0, 0.5, 1.0)
    assert len(two_step_scene) == 2


def test_animate_rejects_bad_interval():
    scene = StaggeredAnimation()
    with pytest.raises(IntervalConfigError):
        scene.animate("x", 0.0, 1.0, 0.6, 0.4)
    assert len(scene) == 0


def test_collection_helpers(two_step_scene):
    assert "fade" in two_step_scene
    assert two_step_scene.names == ["fade", "grow"]
    assert two_step_scene["grow"].end_value == 20.0
    assert [p.name for p in two_step_scene] == ["fade", "grow"]
    assert two_step_scene.active_at(0.5) == ["fade", "grow"]
    assert two_step_scene.active_at(0.75) == ["grow"]
    assert two_step_scene.overlapping_pairs() == []
    assert two_step_scene.span == IntervalSpec(0.0, 1.0)
    assert two_step_scene.value_of("grow", 0.75) == pytest.approx(15.0)
    assert two_step_scene.remove_property("fade")
    assert not two_step_scene.remove_property("fade")


def test_empty_scene():
    scene = StaggeredAnimation()
    assert scene.compute_all(0.5) == {}
    assert scene.span is None
