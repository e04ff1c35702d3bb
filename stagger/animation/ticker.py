"""
Frame ticker.

Drives registered AnimationDrivers from a Qt PreciseTimer. Each timeout
measures the wall-clock delta since the previous tick, clamps stalls and
calls advance() on every running driver. The timer stops by itself once no
driver is running and no tick listener is registered.
"""
import time
from typing import Callable, Dict, List, Optional

from PySide6.QtCore import QObject, QTimer, Signal, Qt

from stagger.animation.driver import AnimationDriver
from stagger.constants.timing import (
    DEFAULT_FPS, MAX_FPS, MAX_FRAME_DELTA_S, MIN_FPS, SLOW_TICK_WARN_MS,
)
from stagger.logging.logger import get_logger, is_perf_metrics_enabled

logger = get_logger(__name__)


class FrameTicker(QObject):
    """Periodic tick source for one or more drivers."""

    # Signals
    tick = Signal(float)             # clamped delta time in seconds
    driver_finished = Signal(str)    # driver name, after it stops running

    def __init__(self, fps: int = DEFAULT_FPS):
        """
        Initialize ticker.

        Args:
            fps: Target ticks per second, clamped to [MIN_FPS, MAX_FPS]
        """
        super().__init__()

        self.fps = self._clamp_fps(fps)
        self.frame_time = 1.0 / self.fps

        self._drivers: List[AnimationDriver] = []
        self._tick_listeners: Dict[int, Callable[[float], None]] = {}
        self._last_update_time: Optional[float] = None

        # `[PERF] [ANIM]` profiling for the current active period, logged
        # once when the timer stops.
        self._profile_start_ts: Optional[float] = None
        self._profile_last_ts: Optional[float] = None
        self._profile_frame_count: int = 0
        self._profile_min_dt: float = 0.0
        self._profile_max_dt: float = 0.0

        self._timer = QTimer()
        self._timer.setTimerType(Qt.TimerType.PreciseTimer)
        self._timer.setInterval(int(self.frame_time * 1000))
        self._timer.timeout.connect(self._on_timeout)

        logger.info("FrameTicker initialized (fps=%d)", self.fps)

    @staticmethod
    def _clamp_fps(fps) -> int:
        try:
            return max(MIN_FPS, min(MAX_FPS, int(fps)))
        except (TypeError, ValueError):
            logger.warning("[ANIM] Invalid fps %r, using %d", fps, DEFAULT_FPS)
            return DEFAULT_FPS

    def is_active(self) -> bool:
        return self._timer.isActive()

    def set_target_fps(self, fps: int) -> None:
        """Update target FPS and reconfigure the timer interval."""
        new_fps = self._clamp_fps(fps)
        if new_fps == self.fps:
            return
        self.fps = new_fps
        self.frame_time = 1.0 / self.fps
        was_active = self._timer.isActive()
        if was_active:
            self._timer.stop()
        self._timer.setInterval(int(self.frame_time * 1000))
        if was_active:
            self._last_update_time = time.perf_counter()
            self._timer.start()
        logger.info("FrameTicker target FPS set to %d", self.fps)

    # ------------------------------------------------------------------
    # Registration
    # ------------------------------------------------------------------

    def add_driver(self, driver: AnimationDriver) -> None:
        """Drive ``driver`` on every tick; starts the timer when it runs."""
        if driver in self._drivers:
            return
        self._drivers.append(driver)
        driver.started.connect(self._on_driver_started)
        if driver.is_running:
            self.start()

    def remove_driver(self, driver: AnimationDriver) -> bool:
        if driver not in self._drivers:
            return False
        self._drivers.remove(driver)
        try:
            driver.started.disconnect(self._on_driver_started)
        except (RuntimeError, TypeError):
            logger.debug("[ANIM] started signal already disconnected", exc_info=True)
        self._stop_if_idle()
        return True

    def driver_count(self) -> int:
        return len(self._drivers)

    def running_count(self) -> int:
        return sum(1 for d in self._drivers if d.is_running)

    def add_tick_listener(self, callback: Callable[[float], None]) -> int:
        """Add a listener receiving the clamped delta on every tick.

        Listeners keep the timer alive even when no driver is running.
        """
        listener_id = id(callback)
        self._tick_listeners[listener_id] = callback
        self.start()
        return listener_id

    def remove_tick_listener(self, listener_id: int) -> None:
        self._tick_listeners.pop(listener_id, None)
        self._stop_if_idle()

    # ------------------------------------------------------------------
    # Timer control
    # ------------------------------------------------------------------

    def start(self) -> None:
        """Start the tick loop."""
        if self._timer.isActive():
            return
        now = time.perf_counter()
        self._last_update_time = now
        self._profile_start_ts = now
        self._profile_last_ts = None
        self._profile_frame_count = 0
        self._profile_min_dt = 0.0
        self._profile_max_dt = 0.0
        self._timer.start()
        logger.debug("FrameTicker started")

    def stop(self) -> None:
        """Stop the tick loop."""
        if self._timer.isActive():
            self._timer.stop()
            self._log_profile_summary()
            logger.debug("FrameTicker stopped")

    def cleanup(self) -> None:
        """Stop ticking and dispose of every registered driver."""
        logger.debug("Cleaning up FrameTicker")
        self.stop()
        for driver in list(self._drivers):
            self.remove_driver(driver)
            driver.dispose()
        self._tick_listeners.clear()
        self._timer.deleteLater()
        logger.info("FrameTicker cleanup complete")

    def _stop_if_idle(self) -> None:
        if not self._tick_listeners and self.running_count() == 0:
            self.stop()

    def _on_driver_started(self, _direction) -> None:
        self.start()

    # ------------------------------------------------------------------
    # Tick
    # ------------------------------------------------------------------

    def _on_timeout(self) -> None:
        current_time = time.perf_counter()
        if self._last_update_time is None:
            self._last_update_time = current_time
            return
        delta_time = current_time - self._last_update_time
        self._last_update_time = current_time
        self.step(delta_time)

    def step(self, delta_time: float) -> float:
        """
        Run one tick with an explicit delta.

        Called by the timer; also usable directly for deterministic stepping.

        Returns:
            The clamped delta actually applied
        """
        if delta_time > MAX_FRAME_DELTA_S:
            if is_perf_metrics_enabled():
                logger.info(
                    "[PERF] [ANIM] Large frame dt=%.2fms clamped to %.0fms (target=%.2fms, drivers=%d)",
                    delta_time * 1000.0,
                    MAX_FRAME_DELTA_S * 1000.0,
                    self.frame_time * 1000.0,
                    self.running_count(),
                )
            delta_time = MAX_FRAME_DELTA_S
        delta_time = max(0.0, delta_time)

        if delta_time > 0.0:
            if self._profile_min_dt == 0.0 or delta_time < self._profile_min_dt:
                self._profile_min_dt = delta_time
            if delta_time > self._profile_max_dt:
                self._profile_max_dt = delta_time
        self._profile_last_ts = time.perf_counter()
        self._profile_frame_count += 1

        for driver in list(self._drivers):
            if not driver.is_running:
                continue
            _advance_start = time.perf_counter()
            still_running = driver.advance(delta_time)
            _advance_elapsed = (time.perf_counter() - _advance_start) * 1000.0
            if _advance_elapsed > SLOW_TICK_WARN_MS and is_perf_metrics_enabled():
                logger.warning("[PERF] [ANIM] Slow driver advance (%s): %.2fms",
                               driver.name, _advance_elapsed)
            if not still_running:
                self.driver_finished.emit(driver.name)

        for cb in list(self._tick_listeners.values()):
            try:
                cb(delta_time)
            except Exception as e:
                logger.debug("[ANIM] Tick listener failed: %s", e, exc_info=True)

        self.tick.emit(delta_time)
        self._stop_if_idle()
        return delta_time

    def _log_profile_summary(self) -> None:
        """Emit a concise `[PERF] [ANIM]` summary for the last active run."""
        try:
            if (
                is_perf_metrics_enabled()
                and self._profile_start_ts is not None
                and self._profile_last_ts is not None
                and self._profile_frame_count > 0
            ):
                elapsed = max(0.0, self._profile_last_ts - self._profile_start_ts)
                if elapsed > 0.0:
                    logger.info(
                        "[PERF] [ANIM] FrameTicker metrics: duration=%.1fms, "
                        "frames=%d, avg_fps=%.1f, dt_min=%.2fms, dt_max=%.2fms, "
                        "drivers=%d, fps_target=%d",
                        elapsed * 1000.0,
                        self._profile_frame_count,
                        self._profile_frame_count / elapsed,
                        self._profile_min_dt * 1000.0,
                        self._profile_max_dt * 1000.0,
                        self.driver_count(),
                        self.fps,
                    )
        finally:
            self._profile_start_ts = None
            self._profile_last_ts = None
            self._profile_frame_count = 0
            self._profile_min_dt = 0.0
            self._profile_max_dt = 0.0
