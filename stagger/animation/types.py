"""
Animation types, enums, dataclasses and errors.

Defines the core types used by the staggered animation sequencer.
"""
import math
from enum import Enum
from dataclasses import dataclass
from typing import Any, Callable, Optional

from stagger.constants.timing import DEFAULT_TIME_DILATION


class AnimationConfigError(ValueError):
    """Raised at construction time for an invalid animation configuration."""


class IntervalConfigError(AnimationConfigError):
    """Raised when an interval's bounds are out of range or empty."""


class AnimationState(Enum):
    """State of an animation driver."""
    IDLE = "idle"
    RUNNING_FORWARD = "running_forward"
    RUNNING_REVERSE = "running_reverse"
    CANCELLED = "cancelled"

    @property
    def is_running(self) -> bool:
        return self in (AnimationState.RUNNING_FORWARD, AnimationState.RUNNING_REVERSE)


class Direction(Enum):
    """Direction the driving progress value moves in."""
    FORWARD = "forward"
    REVERSE = "reverse"

    @property
    def sign(self) -> int:
        return 1 if self is Direction.FORWARD else -1

    @property
    def target(self) -> float:
        """Terminal progress value for a run in this direction."""
        return 1.0 if self is Direction.FORWARD else 0.0


class EasingCurve(Enum):
    """
    Easing curve types for animations.

    Easing functions control the rate of change of the animated value over time.
    """
    # Basic
    LINEAR = "linear"

    # Cubic-bezier presets
    EASE = "ease"
    EASE_IN = "ease_in"
    EASE_OUT = "ease_out"
    EASE_IN_OUT = "ease_in_out"

    # Quadratic
    QUAD_IN = "quad_in"
    QUAD_OUT = "quad_out"
    QUAD_IN_OUT = "quad_in_out"

    # Cubic
    CUBIC_IN = "cubic_in"
    CUBIC_OUT = "cubic_out"
    CUBIC_IN_OUT = "cubic_in_out"

    # Quartic
    QUART_IN = "quart_in"
    QUART_OUT = "quart_out"
    QUART_IN_OUT = "quart_in_out"

    # Quintic
    QUINT_IN = "quint_in"
    QUINT_OUT = "quint_out"
    QUINT_IN_OUT = "quint_in_out"

    # Sine
    SINE_IN = "sine_in"
    SINE_OUT = "sine_out"
    SINE_IN_OUT = "sine_in_out"

    # Exponential
    EXPO_IN = "expo_in"
    EXPO_OUT = "expo_out"
    EXPO_IN_OUT = "expo_in_out"

    # Circular
    CIRC_IN = "circ_in"
    CIRC_OUT = "circ_out"
    CIRC_IN_OUT = "circ_in_out"

    # Elastic
    ELASTIC_IN = "elastic_in"
    ELASTIC_OUT = "elastic_out"
    ELASTIC_IN_OUT = "elastic_in_out"

    # Back
    BACK_IN = "back_in"
    BACK_OUT = "back_out"
    BACK_IN_OUT = "back_in_out"

    # Bounce
    BOUNCE_IN = "bounce_in"
    BOUNCE_OUT = "bounce_out"
    BOUNCE_IN_OUT = "bounce_in_out"


def _check_positive(name: str, value: Any) -> None:
    if not isinstance(value, (int, float)) or isinstance(value, bool):
        raise AnimationConfigError(f"{name} must be a number, got {type(value).__name__}")
    if not math.isfinite(value) or value <= 0:
        raise AnimationConfigError(f"{name} must be positive and finite, got {value}")


@dataclass
class DriverConfig:
    """Configuration for an AnimationDriver."""
    duration: float                                  # Forward run length in seconds
    reverse_duration: Optional[float] = None         # Reverse run length (defaults to duration)
    time_dilation: float = DEFAULT_TIME_DILATION     # >1.0 slows every run down

    def __post_init__(self):
        """Validate driver config."""
        _check_positive("duration", self.duration)
        if self.reverse_duration is not None:
            _check_positive("reverse_duration", self.reverse_duration)
        _check_positive("time_dilation", self.time_dilation)

    def duration_for(self, direction: Direction) -> float:
        """Effective wall-clock length of a full run in ``direction``."""
        base = self.duration
        if direction is Direction.REVERSE and self.reverse_duration is not None:
            base = self.reverse_duration
        return base * self.time_dilation


# Type aliases for callbacks
EasingFunction = Callable[[float], float]
ProgressListener = Callable[[float], None]          # progress: 0.0-1.0
ValuesListener = Callable[[dict], None]             # {property name: value}
