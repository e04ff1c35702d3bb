"""Timing constants for the stagger library.

Values are in seconds unless the name says otherwise.
"""

# =============================================================================
# Frame Ticker
# =============================================================================

DEFAULT_FPS = 60
"""Target tick rate for FrameTicker."""

MIN_FPS = 10
"""Lowest tick rate accepted by FrameTicker.set_target_fps()."""

MAX_FPS = 240
"""Highest tick rate accepted by FrameTicker.set_target_fps()."""

MAX_FRAME_DELTA_S = 0.5
"""Wall-clock deltas above this are clamped to avoid jumps after stalls."""

SLOW_TICK_WARN_MS = 50.0
"""Per-driver advance() time above which a [PERF] warning is logged."""

# =============================================================================
# Driver Defaults
# =============================================================================

DEFAULT_TIME_DILATION = 1.0
"""Global slow-motion factor; 1.0 is real time."""

# =============================================================================
# Demo Scene
# =============================================================================

DEMO_DURATION_MS = 2000
"""Forward (and reverse) length of the demo staggered animation."""

DEMO_TIME_DILATION = 10.0
"""Slow-motion factor the demo uses so the stagger is easy to watch."""
