"""Tests for the staggered box demo scene."""
import logging

import pytest
from PySide6.QtGui import QColor

from stagger.animation import BorderRadius, Direction, EdgeInsets, EasingCurve
from stagger.demo import INDIGO_100, ORANGE_400, StaggerDemo, build_staggered_scene


@pytest.fixture
def demo(qt_app):
    d = StaggerDemo(duration_ms=2000)
    yield d
    d.dispose()


def _run(demo, dt=0.5, limit=100):
    play = demo.play()
    for _ in range(limit):
        if play.done():
            break
        demo.driver.advance(dt)
    return play


def test_scene_layout():
    scene = build_staggered_scene()
    assert scene.names == ["opacity", "width", "height", "padding", "border_radius", "color"]
    assert scene.overlapping_pairs() == [("height", "padding")]
    assert scene["color"].interval.end == 0.75


def test_scene_begin_and_end_values():
    scene = build_staggered_scene()
    start = scene.compute_all(0.0)
    assert start["opacity"] == 0.0
    assert start["width"] == 50.0
    assert start["padding"] == EdgeInsets.only(bottom=16.0)
    assert start["border_radius"] == BorderRadius.circular(4.0)
    assert start["color"] == QColor(INDIGO_100)

    end = scene.compute_all(1.0)
    assert end["opacity"] == 1.0
    assert end["height"] == 150.0
    assert end["padding"] == EdgeInsets.only(bottom=75.0)
    assert end["border_radius"] == BorderRadius.circular(75.0)
    assert end["color"] == QColor(ORANGE_400)


def test_scene_mid_interval_values():
    scene = build_staggered_scene()
    assert scene.value_of("opacity", 0.05) == pytest.approx(0.8024, abs=1e-3)
    # Later properties have not started yet
    assert scene.value_of("width", 0.05) == 50.0
    # Colour change is the last step; everything else is done by then
    values = scene.compute_all(0.6)
    assert values["border_radius"] == BorderRadius.circular(75.0)
    assert values["color"] not in (QColor(INDIGO_100), QColor(ORANGE_400))


def test_scene_with_linear_curve():
    scene = build_staggered_scene(EasingCurve.LINEAR)
    assert scene.value_of("width", 0.1875) == pytest.approx(100.0)


def test_play_runs_forward_then_back(demo):
    frames = []
    demo.driver.values_changed.connect(lambda values: frames.append(values))

    play = _run(demo)

    assert play.result(timeout=0) is Direction.REVERSE
    assert demo.driver.progress == 0.0
    assert demo.values == demo.scene.begin_values()
    assert any(f == demo.scene.end_values() for f in frames)


def test_on_values_callback(qt_app):
    seen = []
    d = StaggerDemo(duration_ms=1000, on_values=seen.append)
    try:
        _run(d, dt=0.25)
        assert len(seen) == 8
        assert seen[3]["opacity"] == 1.0
    finally:
        d.dispose()


def test_play_twice_returns_same_future(demo, caplog):
    first = demo.play()
    with caplog.at_level(logging.WARNING):
        second = demo.play()
    assert second is first


def test_dispose_mid_play_cancels(qt_app):
    d = StaggerDemo()
    play = d.play()
    d.driver.advance(0.5)
    d.dispose()
    assert play.cancelled()
    assert d.driver.is_disposed


def test_cancel_during_reverse_cancels_play(demo):
    play = demo.play()
    demo.driver.advance(2.0)
    assert demo.driver.direction is Direction.REVERSE
    demo.driver.advance(0.5)
    demo.driver.cancel()
    assert play.cancelled()
    assert demo.driver.progress == pytest.approx(0.75)


def test_time_dilation_stretches_play(qt_app):
    d = StaggerDemo(duration_ms=1000, time_dilation=10.0)
    try:
        d.play()
        d.driver.advance(1.0)
        assert d.driver.progress == pytest.approx(0.1)
    finally:
        d.dispose()


def test_each_tick_emits_one_values_mapping(demo):
    emitted = []
    delivered = []
    demo.driver.values_changed.connect(lambda values: emitted.append(values))
    demo.on_values = delivered.append

    _run(demo)

    assert demo.driver.tick_count == 8
    assert len(emitted) == demo.driver.tick_count
    assert len(delivered) == demo.driver.tick_count
    assert demo.driver.listener_count() == 1
