"""
Demo scene: a box that fades in, grows, drops down, rounds off and changes
colour in six staggered steps, then plays the whole thing backwards.
"""
from concurrent.futures import Future
from typing import Callable, Dict, Optional

from stagger.animation import (
    AnimationDriver,
    BorderRadius,
    BorderRadiusTween,
    EasingCurve,
    EdgeInsets,
    EdgeInsetsTween,
    StaggeredAnimation,
)
from stagger.constants.timing import DEMO_DURATION_MS
from stagger.logging.logger import get_logger
from stagger.utils.color_utils import parse_hex

logger = get_logger(__name__)

INDIGO_100 = "#C5CAE9"
ORANGE_400 = "#FFA726"


def build_staggered_scene(curve=EasingCurve.EASE) -> StaggeredAnimation:
    """The six-property staggered box animation."""
    scene = StaggeredAnimation()
    scene.animate("opacity", 0.0, 1.0, 0.0, 0.100, curve)
    scene.animate("width", 50.0, 150.0, 0.125, 0.250, curve)
    scene.animate("height", 50.0, 150.0, 0.250, 0.375, curve)
    scene.animate(
        "padding", None, None, 0.250, 0.375, curve,
        tween=EdgeInsetsTween(EdgeInsets.only(bottom=16.0), EdgeInsets.only(bottom=75.0)),
    )
    scene.animate(
        "border_radius", None, None, 0.375, 0.500, curve,
        tween=BorderRadiusTween(BorderRadius.circular(4.0), BorderRadius.circular(75.0)),
    )
    scene.animate("color", parse_hex(INDIGO_100), parse_hex(ORANGE_400), 0.500, 0.750, curve)
    return scene


class StaggerDemo:
    """
    Scene controller owning one driver and the staggered scene.

    play() runs the driver forward and, once that completes, in reverse.
    dispose() tears the scene down; a play in flight is cancelled.

    The scene is attached to the driver exactly once. Consumers swap
    ``on_values`` instead of attaching again, so each tick computes and
    emits one values mapping.
    """

    def __init__(self, duration_ms: int = DEMO_DURATION_MS, time_dilation: float = 1.0,
                 on_values: Optional[Callable[[Dict[str, object]], None]] = None):
        self.scene = build_staggered_scene()
        self.driver = AnimationDriver(
            duration=duration_ms / 1000.0,
            time_dilation=time_dilation,
            name="stagger_demo",
        )
        self.on_values = on_values
        self.driver.attach(self.scene, self._deliver_values)
        self._play: Optional[Future] = None

    def _deliver_values(self, values: Dict[str, object]) -> None:
        if self.on_values is not None:
            self.on_values(values)

    @property
    def values(self) -> Dict[str, object]:
        """Current value of every property."""
        return self.scene.compute_all(self.driver.progress)

    def play(self) -> Future:
        """
        Play forward then backward.

        Returns:
            Future resolved with Direction.REVERSE once the box is back at its
            start, or cancelled if either half is cancelled.
        """
        if self._play is not None and not self._play.done():
            logger.warning("[ANIM] Demo already playing")
            return self._play

        play: Future = Future()
        self._play = play

        def _after_reverse(run: Future) -> None:
            if run.cancelled():
                play.cancel()
            else:
                play.set_result(run.result())

        def _after_forward(run: Future) -> None:
            if run.cancelled():
                play.cancel()
                return
            self.driver.reverse().add_done_callback(_after_reverse)

        logger.info("[ANIM] Demo playing (duration=%.2fs, dilation=%.1f)",
                    self.driver.duration, self.driver.time_dilation)
        self.driver.start(from_progress=0.0).add_done_callback(_after_forward)
        return play

    def dispose(self) -> None:
        self.driver.dispose()
        if self._play is not None and not self._play.done():
            self._play.cancel()
        logger.debug("[ANIM] Demo disposed")


__all__ = ["build_staggered_scene", "StaggerDemo"]
