"""
Shared pytest fixtures for stagger tests.
"""
import logging
import sys

import pytest
from PySide6.QtCore import QCoreApplication

from stagger.animation import AnimationDriver, StaggeredAnimation, Tween


@pytest.fixture(scope='session')
def qt_app():
    """Create QCoreApplication instance for tests."""
    app = QCoreApplication.instance()
    if app is None:
        app = QCoreApplication(sys.argv[:1])
    yield app
    # Don't quit - causes issues with pytest


@pytest.fixture
def driver(qt_app):
    """One-second driver, disposed after the test."""
    drv = AnimationDriver(duration=1.0, name="test_driver")
    yield drv
    drv.dispose()


@pytest.fixture
def two_step_scene():
    """Two properties animating back to back."""
    scene = StaggeredAnimation()
    scene.animate("fade", 0.0, 1.0, 0.0, 0.5)
    scene.animate("grow", 10.0, 20.0, 0.5, 1.0, tween=Tween(10.0, 20.0))
    return scene


@pytest.fixture
def restore_root_logging():
    """Remove any handlers a test adds to the root logger."""
    root = logging.getLogger()
    handlers = list(root.handlers)
    level = root.level
    yield
    for handler in list(root.handlers):
        if handler not in handlers:
            root.removeHandler(handler)
            handler.close()
    root.setLevel(level)
