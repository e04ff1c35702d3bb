"""Staggered animation framework."""

from .types import (
    AnimationConfigError,
    IntervalConfigError,
    AnimationState,
    Direction,
    EasingCurve,
    DriverConfig,
)
from .easing import CubicBezier, ease, get_easing_function, EASING_FUNCTIONS
from .interval import IntervalSpec, local_progress
from .geometry import EdgeInsets, BorderRadius
from .tween import (
    Tween,
    ColorTween,
    CompositeTween,
    EdgeInsetsTween,
    BorderRadiusTween,
    lerp_scalar,
)
from .sequence import AnimatedProperty, StaggeredAnimation
from .driver import AnimationDriver
from .ticker import FrameTicker

__all__ = [
    # Types
    'AnimationConfigError',
    'IntervalConfigError',
    'AnimationState',
    'Direction',
    'EasingCurve',
    'DriverConfig',

    # Easing
    'CubicBezier',
    'ease',
    'get_easing_function',
    'EASING_FUNCTIONS',

    # Intervals and values
    'IntervalSpec',
    'local_progress',
    'EdgeInsets',
    'BorderRadius',
    'Tween',
    'ColorTween',
    'CompositeTween',
    'EdgeInsetsTween',
    'BorderRadiusTween',
    'lerp_scalar',

    # Sequencing
    'AnimatedProperty',
    'StaggeredAnimation',
    'AnimationDriver',
    'FrameTicker',
]
