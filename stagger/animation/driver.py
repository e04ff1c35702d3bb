"""
Animation driver.

Owns the single global progress value of a staggered animation scene and
moves it forward or backward as the owner feeds it frame deltas through
advance(). Every tick the new progress is published synchronously to all
registered listeners (and the progress_changed signal) before the next tick
is accepted, so listeners never observe a partially updated scene.

STATE MACHINE:
    IDLE/CANCELLED --start()--> RUNNING_FORWARD --progress hits 1.0--> IDLE
    IDLE/CANCELLED --reverse()--> RUNNING_REVERSE --progress hits 0.0--> IDLE
    RUNNING_* --cancel()--> CANCELLED

Completion is only signalled if the run is still active after listeners have
seen the terminal tick; a listener that cancels during that tick suppresses
the completion notification and the run's future is cancelled instead.
"""
import itertools
import math
import time
from concurrent.futures import Future
from typing import Callable, Dict, Optional

from PySide6.QtCore import QObject, Signal

from stagger.animation.sequence import StaggeredAnimation
from stagger.animation.types import (
    AnimationConfigError, AnimationState, Direction, DriverConfig, ProgressListener,
)
from stagger.constants.timing import DEFAULT_TIME_DILATION, SLOW_TICK_WARN_MS
from stagger.logging.logger import get_logger, is_perf_metrics_enabled, is_verbose_logging

logger = get_logger(__name__)


class AnimationDriver(QObject):
    """
    Time-driven progress value in [0.0, 1.0] shared by many properties.

    Driven cooperatively: nothing happens between advance() calls. Use
    FrameTicker to drive it from the Qt event loop.
    """

    # Signals
    started = Signal(object)          # Direction
    progress_changed = Signal(float)  # 0.0 to 1.0
    values_changed = Signal(object)   # {property name: value}
    completed = Signal(object)        # Direction that finished
    cancelled = Signal()
    state_changed = Signal(object)    # AnimationState

    def __init__(self, duration: float, reverse_duration: Optional[float] = None,
                 time_dilation: float = DEFAULT_TIME_DILATION, name: str = "driver"):
        """
        Initialize driver.

        Args:
            duration: Length of a full forward run in seconds
            reverse_duration: Length of a full reverse run (defaults to duration)
            time_dilation: Slow-motion factor applied to both durations
            name: Label used in log messages

        Raises:
            AnimationConfigError: If a duration or the dilation is not positive
        """
        super().__init__()

        self.name = name
        self._config = DriverConfig(
            duration=duration,
            reverse_duration=reverse_duration,
            time_dilation=time_dilation,
        )

        self._state = AnimationState.IDLE
        self._direction = Direction.FORWARD
        self._progress = 0.0
        self._future: Optional[Future] = None
        self._run_id = 0
        self._tick_count = 0
        self._disposed = False

        self._listeners: Dict[int, ProgressListener] = {}
        self._listener_ids = itertools.count(1)

        logger.debug(
            "[ANIM] Driver %s created (duration=%.3fs, reverse=%s, dilation=%.2f)",
            name, duration, reverse_duration, time_dilation,
        )

    @classmethod
    def from_config(cls, config: DriverConfig, name: str = "driver") -> "AnimationDriver":
        return cls(
            duration=config.duration,
            reverse_duration=config.reverse_duration,
            time_dilation=config.time_dilation,
            name=name,
        )

    # ------------------------------------------------------------------
    # Read-only state
    # ------------------------------------------------------------------

    @property
    def progress(self) -> float:
        return self._progress

    @property
    def state(self) -> AnimationState:
        return self._state

    @property
    def direction(self) -> Direction:
        return self._direction

    @property
    def is_running(self) -> bool:
        return self._state.is_running

    @property
    def is_disposed(self) -> bool:
        return self._disposed

    @property
    def duration(self) -> float:
        return self._config.duration

    @property
    def reverse_duration(self) -> Optional[float]:
        return self._config.reverse_duration

    @property
    def tick_count(self) -> int:
        """Number of advance() calls that moved progress."""
        return self._tick_count

    @property
    def time_dilation(self) -> float:
        return self._config.time_dilation

    @time_dilation.setter
    def time_dilation(self, value: float) -> None:
        self._config = DriverConfig(
            duration=self._config.duration,
            reverse_duration=self._config.reverse_duration,
            time_dilation=value,
        )
        logger.debug("[ANIM] Driver %s time dilation set to %.2f", self.name, value)

    # ------------------------------------------------------------------
    # Listeners
    # ------------------------------------------------------------------

    def add_listener(self, callback: ProgressListener) -> int:
        """
        Register a callback receiving the new progress on every tick.

        Returns:
            Listener ID for remove_listener()

        Raises:
            ValueError: If callback is not callable
        """
        self._check_alive()
        if not callable(callback):
            raise ValueError("Listener must be callable")
        listener_id = next(self._listener_ids)
        self._listeners[listener_id] = callback
        return listener_id

    def remove_listener(self, listener_id: int) -> bool:
        return self._listeners.pop(listener_id, None) is not None

    def listener_count(self) -> int:
        return len(self._listeners)

    def attach(self, sequence: StaggeredAnimation,
               callback: Optional[Callable[[dict], None]] = None) -> int:
        """
        Publish ``sequence.compute_all(progress)`` on every tick.

        The computed mapping is emitted through values_changed and passed to
        ``callback`` when one is given.

        Returns:
            Listener ID for remove_listener()
        """
        def _publish_values(progress: float) -> None:
            values = sequence.compute_all(progress)
            if is_verbose_logging():
                logger.debug("[ANIM] %s @ %.4f -> %s", self.name, progress, values)
            self.values_changed.emit(values)
            if callback is not None:
                callback(values)

        return self.add_listener(_publish_values)

    # ------------------------------------------------------------------
    # Commands
    # ------------------------------------------------------------------

    def start(self, from_progress: Optional[float] = None) -> Future:
        """
        Run progress forward toward 1.0.

        Args:
            from_progress: Optional progress to jump to before running

        Returns:
            Future resolved with Direction.FORWARD on natural completion,
            or cancelled if the run is cancelled or superseded.
        """
        self._check_alive()
        if self._state is AnimationState.RUNNING_FORWARD and from_progress is None:
            logger.warning("[ANIM] Driver %s already running forward", self.name)
            return self._future
        if from_progress is not None:
            self._progress = self._validated_progress(from_progress)
        return self._begin_run(Direction.FORWARD)

    forward = start

    def reverse(self, from_progress: Optional[float] = None) -> Future:
        """
        Run progress backward toward 0.0.

        Returns:
            Future resolved with Direction.REVERSE on natural completion,
            or cancelled if the run is cancelled or superseded.
        """
        self._check_alive()
        if self._state is AnimationState.RUNNING_REVERSE and from_progress is None:
            logger.warning("[ANIM] Driver %s already running in reverse", self.name)
            return self._future
        if from_progress is not None:
            self._progress = self._validated_progress(from_progress)
        return self._begin_run(Direction.REVERSE)

    def cancel(self) -> bool:
        """
        Cancel the current run.

        Progress stays where it is. The pending completion future is
        cancelled and the completed signal will not fire for this run.

        Returns:
            True if a running animation was cancelled
        """
        if not self._state.is_running:
            return False

        self._run_id += 1
        future, self._future = self._future, None
        self._set_state(AnimationState.CANCELLED)
        self.cancelled.emit()
        if future is not None:
            future.cancel()
        logger.debug("[ANIM] Driver %s cancelled at progress %.4f", self.name, self._progress)
        return True

    def seek(self, progress: float) -> None:
        """
        Jump to ``progress`` and publish it without running.

        Raises:
            RuntimeError: If the driver is running or disposed
        """
        self._check_alive()
        if self._state.is_running:
            raise RuntimeError(f"Cannot seek driver {self.name} while it is running")
        self._progress = self._validated_progress(progress)
        self._publish()

    def dispose(self) -> None:
        """Cancel any run, drop listeners and refuse further commands."""
        if self._disposed:
            return
        self.cancel()
        self._listeners.clear()
        self._disposed = True
        logger.debug("[ANIM] Driver %s disposed", self.name)

    def advance(self, delta_time: float) -> bool:
        """
        Advance progress by ``delta_time`` seconds.

        Args:
            delta_time: Time since last tick in seconds (non-negative)

        Returns:
            True if the driver is still running after this tick

        Raises:
            ValueError: If delta_time is negative or not finite
        """
        self._check_alive()
        if not math.isfinite(delta_time) or delta_time < 0:
            raise ValueError(f"delta_time must be a non-negative number, got {delta_time}")
        if not self._state.is_running:
            return False

        run_id = self._run_id
        direction = self._direction
        span = self._config.duration_for(direction)
        step = direction.sign * delta_time / span
        self._progress = min(1.0, max(0.0, self._progress + step))
        self._tick_count += 1

        self._publish()

        # A listener may have cancelled or restarted the run during delivery.
        if self._run_id != run_id:
            return self._state.is_running

        if self._progress == direction.target:
            self._complete(direction)
        return self._state.is_running

    # ------------------------------------------------------------------
    # Internals
    # ------------------------------------------------------------------

    def _begin_run(self, direction: Direction) -> Future:
        superseded, self._future = self._future, None
        self._run_id += 1
        if superseded is not None:
            superseded.cancel()

        future: Future = Future()
        self._future = future
        self._direction = direction
        self._set_state(
            AnimationState.RUNNING_FORWARD if direction is Direction.FORWARD
            else AnimationState.RUNNING_REVERSE
        )
        self.started.emit(direction)
        logger.debug(
            "[ANIM] Driver %s started %s from %.4f",
            self.name, direction.value, self._progress,
        )

        if self._progress == direction.target:
            self._complete(direction)
        return future

    def _complete(self, direction: Direction) -> None:
        future, self._future = self._future, None
        self._set_state(AnimationState.IDLE)
        self.completed.emit(direction)
        logger.debug("[ANIM] Driver %s completed %s", self.name, direction.value)
        if future is not None and not future.done():
            future.set_result(direction)

    def _publish(self) -> None:
        progress = self._progress
        _publish_start = time.perf_counter()
        self.progress_changed.emit(progress)
        for listener_id, listener in list(self._listeners.items()):
            if listener_id not in self._listeners:
                continue
            try:
                listener(progress)
            except Exception as e:
                logger.error(
                    "[ANIM] Listener %d on driver %s failed: %s",
                    listener_id, self.name, e, exc_info=True,
                )
        _publish_elapsed = (time.perf_counter() - _publish_start) * 1000.0
        if _publish_elapsed > SLOW_TICK_WARN_MS and is_perf_metrics_enabled():
            logger.warning(
                "[PERF] [ANIM] Slow tick publish on %s: %.2fms (listeners=%d)",
                self.name, _publish_elapsed, len(self._listeners),
            )

    def _set_state(self, state: AnimationState) -> None:
        if state is self._state:
            return
        self._state = state
        self.state_changed.emit(state)

    def _check_alive(self) -> None:
        if self._disposed:
            raise RuntimeError(f"Driver {self.name} has been disposed")

    @staticmethod
    def _validated_progress(progress: float) -> float:
        if not isinstance(progress, (int, float)) or isinstance(progress, bool):
            raise AnimationConfigError(f"progress must be a number, got {type(progress).__name__}")
        if not math.isfinite(progress) or not 0.0 <= progress <= 1.0:
            raise AnimationConfigError(f"progress must be within [0, 1], got {progress}")
        return float(progress)
