"""
stagger - demo entry point.

Plays the staggered box animation forward and then backward and prints the
property values as it goes.

Modes:
- real time (default): a FrameTicker drives the scene on a QCoreApplication
  event loop; values are printed every ``--print-every`` ticks.
- ``--steps N``: deterministic run, N equal ticks per direction, no timer.
"""
import argparse
import os
import sys
from typing import Dict, List, Optional

from PySide6.QtCore import QCoreApplication, QTimer
from PySide6.QtGui import QColor

from stagger.animation import BorderRadius, EdgeInsets, FrameTicker
from stagger.constants.timing import (
    DEFAULT_FPS, DEFAULT_TIME_DILATION, DEMO_DURATION_MS, DEMO_TIME_DILATION,
)
from stagger.demo import StaggerDemo
from stagger.logging.logger import get_logger, setup_logging
from versioning import APP_NAME, APP_VERSION

logger = get_logger(__name__)


def _env_time_dilation() -> float:
    raw = os.getenv("STAGGER_TIME_DILATION")
    if raw is None:
        return DEFAULT_TIME_DILATION
    try:
        return float(raw)
    except ValueError:
        logger.warning("Ignoring invalid STAGGER_TIME_DILATION=%r", raw)
        return DEFAULT_TIME_DILATION


def resolve_time_dilation(args: argparse.Namespace) -> float:
    """--time-dilation wins, then --slow, then $STAGGER_TIME_DILATION."""
    if args.time_dilation is not None:
        return args.time_dilation
    if args.slow:
        return DEMO_TIME_DILATION
    return _env_time_dilation()


def build_parser() -> argparse.ArgumentParser:
    parser = argparse.ArgumentParser(
        prog=APP_NAME,
        description="Play the staggered animation demo forward and backward.",
    )
    parser.add_argument("--debug", "-d", action="store_true", help="Enable debug logging")
    parser.add_argument("--verbose", action="store_true", help="Log every computed frame")
    parser.add_argument("--duration-ms", type=int, default=DEMO_DURATION_MS,
                        help="Length of each direction in milliseconds")
    parser.add_argument("--fps", type=int, default=DEFAULT_FPS, help="Ticker rate")
    parser.add_argument("--time-dilation", type=float, default=None,
                        help="Slow-motion factor (default: $STAGGER_TIME_DILATION or 1.0)")
    parser.add_argument("--slow", action="store_true",
                        help=f"Slow motion: time dilation {DEMO_TIME_DILATION:g} unless --time-dilation is given")
    parser.add_argument("--steps", type=int, default=None,
                        help="Deterministic mode: ticks per direction, no timer")
    parser.add_argument("--print-every", type=int, default=6,
                        help="Real-time mode: print every Nth tick")
    parser.add_argument("--version", action="version", version=f"{APP_NAME} {APP_VERSION}")
    return parser


def format_value(value) -> str:
    if isinstance(value, float):
        return f"{value:.3f}"
    if isinstance(value, QColor):
        return value.name(QColor.NameFormat.HexArgb)
    if isinstance(value, EdgeInsets):
        return f"EdgeInsets({value.left:.1f}, {value.top:.1f}, {value.right:.1f}, {value.bottom:.1f})"
    if isinstance(value, BorderRadius):
        if value.is_uniform:
            return f"BorderRadius.circular({value.top_left:.1f})"
        return (f"BorderRadius({value.top_left:.1f}, {value.top_right:.1f}, "
                f"{value.bottom_right:.1f}, {value.bottom_left:.1f})")
    return str(value)


def format_frame(progress: float, values: Dict[str, object]) -> str:
    parts = [f"{name}={format_value(v)}" for name, v in values.items()]
    return f"{progress:6.3f}  " + "  ".join(parts)


def run_steps(demo: StaggerDemo, steps: int, out=None) -> List[str]:
    """Play the demo with ``steps`` equal ticks per direction."""
    out = out if out is not None else sys.stdout
    lines: List[str] = []

    def _emit(values: Dict[str, object]) -> None:
        line = format_frame(demo.driver.progress, values)
        lines.append(line)
        print(line, file=out)

    previous, demo.on_values = demo.on_values, _emit
    try:
        play = demo.play()
        forward_span = demo.driver.duration * demo.driver.time_dilation
        dt = forward_span / steps
        # One extra tick per direction absorbs floating point shortfall.
        for _ in range(2 * (steps + 1)):
            if play.done():
                break
            demo.driver.advance(dt)
    finally:
        demo.on_values = previous
    return lines


def run_realtime(app: QCoreApplication, demo: StaggerDemo, fps: int, print_every: int) -> int:
    ticker = FrameTicker(fps=fps)
    ticker.add_driver(demo.driver)

    counter = {"ticks": 0}

    def _maybe_print(values: Dict[str, object]) -> None:
        counter["ticks"] += 1
        if counter["ticks"] % max(1, print_every) == 0:
            print(format_frame(demo.driver.progress, values))

    demo.on_values = _maybe_print
    play = demo.play()
    play.add_done_callback(lambda _f: QTimer.singleShot(0, app.quit))

    app.exec()
    print(format_frame(demo.driver.progress, demo.values))
    ticker.cleanup()
    return 0 if play.done() and not play.cancelled() else 1


def main(argv: Optional[List[str]] = None) -> int:
    args = build_parser().parse_args(argv)
    setup_logging(debug=args.debug, verbose=args.verbose)

    time_dilation = resolve_time_dilation(args)
    app = QCoreApplication.instance() or QCoreApplication(sys.argv[:1])

    exit_code = 0
    demo = StaggerDemo(duration_ms=args.duration_ms, time_dilation=time_dilation)
    try:
        if args.steps is not None:
            if args.steps <= 0:
                logger.error("--steps must be positive, got %d", args.steps)
                return 2
            run_steps(demo, args.steps)
        else:
            exit_code = run_realtime(app, demo, args.fps, args.print_every)
    except Exception as e:
        logger.exception("Fatal error in main: %s", e)
        exit_code = 1
    finally:
        demo.dispose()

    logger.info("%s exiting (code=%d)", APP_NAME, exit_code)
    return exit_code


if __name__ == "__main__":
    sys.exit(main())
