"""
Centralized logging configuration for the stagger animation library.

Uses a rotating file handler with logs stored in a logs/ directory.
Includes colored console output for debug mode.
"""
import logging
import os
import sys
from logging.handlers import RotatingFileHandler
from pathlib import Path
from typing import Optional


_VERBOSE: bool = False
_PERF_METRICS_ENABLED: bool = True
# Base directory for logs. Defaults to the project root; setup_logging() can
# point it somewhere else so get_log_dir() always matches the active handler.
_BASE_DIR: Path = Path(__file__).parent.parent.parent

_TRUTHY = ("1", "true", "on", "yes")
_FALSY = ("0", "false", "off", "no")

_env_perf = os.getenv("STAGGER_PERF_METRICS")
if _env_perf is not None:
    if _env_perf.strip().lower() in _FALSY:
        _PERF_METRICS_ENABLED = False
    elif _env_perf.strip().lower() in _TRUTHY:
        _PERF_METRICS_ENABLED = True


class ColoredFormatter(logging.Formatter):
    """Formatter that adds colors to console output."""

    # ANSI color codes
    COLORS = {
        'DEBUG': '\033[36m',       # Cyan
        'INFO': '\033[32m',        # Green
        'WARNING': '\033[33m',     # Yellow
        'ERROR': '\033[31m',       # Red
        'CRITICAL': '\033[35m',    # Magenta
    }
    PERF_COLOR = '\033[38;5;135m'  # Purple for [PERF] telemetry
    RESET = '\033[0m'
    BOLD = '\033[1m'

    def format(self, record):
        original_levelname = record.levelname

        if '[PERF]' in str(record.msg):
            color = self.PERF_COLOR
        else:
            color = self.COLORS.get(record.levelname)

        if color is None:
            return super().format(record)

        record.levelname = f"{self.BOLD}{color}{record.levelname}{self.RESET}"
        try:
            message = super().format(record)
        finally:
            record.levelname = original_levelname
        return f"{color}{message}{self.RESET}"


class SuppressingStreamHandler(logging.StreamHandler):
    """Stream handler that collapses consecutive lines from the same source.

    Per-tick DEBUG output from a running driver is extremely repetitive, so
    repeated DEBUG/INFO lines from the same logger/level are folded into a
    single "[N Suppressed: CHECK LOG]" summary. File logs are unaffected.
    """

    def __init__(self, *args, **kwargs):
        super().__init__(*args, **kwargs)
        self._last_name: Optional[str] = None
        self._last_level: Optional[int] = None
        self._suppress_count: int = 0
        self._last_record: Optional[logging.LogRecord] = None

    def emit(self, record: logging.LogRecord) -> None:
        try:
            self._emit_with_suppression(record)
        except Exception:
            self.handleError(record)

    def _emit_with_suppression(self, record: logging.LogRecord) -> None:
        if record.levelno >= logging.WARNING:
            self._flush_summary()
            super().emit(record)
            self._reset_run(None)
            return

        if (
            self._last_name is not None
            and record.name == self._last_name
            and record.levelno == self._last_level
        ):
            self._suppress_count += 1
            self._last_record = record
            return

        self._flush_summary()
        super().emit(record)
        self._reset_run(record)

    def _reset_run(self, record: Optional[logging.LogRecord]) -> None:
        self._last_name = record.name if record is not None else None
        self._last_level = record.levelno if record is not None else None
        self._suppress_count = 0
        self._last_record = record

    def _flush_summary(self) -> None:
        if self._suppress_count <= 0 or self._last_record is None:
            self._suppress_count = 0
            return

        last = self._last_record
        summary = logging.LogRecord(
            last.name,
            last.levelno,
            last.pathname,
            last.lineno,
            f"[{self._suppress_count} Suppressed: CHECK LOG]",
            args=None,
            exc_info=None,
        )
        summary.created = last.created
        summary.msecs = last.msecs
        summary.relativeCreated = last.relativeCreated
        super().emit(summary)
        self._suppress_count = 0

    def close(self) -> None:
        try:
            self._flush_summary()
        finally:
            super().close()


def get_log_dir() -> Path:
    """Return the directory used for log files."""
    return _BASE_DIR / "logs"


def setup_logging(debug: bool = False, verbose: bool = False,
                  log_dir: Optional[Path] = None) -> None:
    """
    Configure library logging with file rotation.

    Args:
        debug: If True, set log level to DEBUG and enable console output.
        verbose: When True, enables per-tick value dumps from drivers and
            sequences. Verbose mode also implies debug-level logging.
        log_dir: Optional base directory; logs are written to
            ``<log_dir>/logs/stagger.log``.
    """
    global _VERBOSE, _BASE_DIR

    debug_enabled = debug or verbose
    if log_dir is not None:
        _BASE_DIR = Path(log_dir)

    logs = get_log_dir()
    logs.mkdir(parents=True, exist_ok=True)
    log_file = logs / "stagger.log"

    level = logging.DEBUG if debug_enabled else logging.INFO
    fmt = '%(asctime)s - %(name)-30s - %(levelname)-8s - %(message)s'

    # File handler with rotation (1MB max, keep 5 backups)
    file_handler = RotatingFileHandler(
        log_file,
        maxBytes=1 * 1024 * 1024,
        backupCount=5,
        encoding='utf-8'
    )
    file_handler.setFormatter(logging.Formatter(fmt, datefmt='%Y-%m-%d %H:%M:%S'))
    file_handler.setLevel(level)

    root_logger = logging.getLogger()
    root_logger.setLevel(level)
    root_logger.addHandler(file_handler)

    if debug_enabled:
        console_handler = SuppressingStreamHandler(sys.stdout)
        if sys.stdout.isatty():
            console_handler.setFormatter(ColoredFormatter(fmt, datefmt='%H:%M:%S'))
        else:
            console_handler.setFormatter(logging.Formatter(fmt, datefmt='%H:%M:%S'))
        console_handler.setLevel(level)
        root_logger.addHandler(console_handler)

    _VERBOSE = bool(verbose)

    root_logger.info(
        "Stagger logging initialized (debug=%s, verbose=%s)",
        debug_enabled,
        _VERBOSE,
    )


def get_logger(name: str) -> logging.Logger:
    """Get a logger instance for a stagger module."""
    return logging.getLogger(name)


def is_verbose_logging() -> bool:
    """Return True when verbose debug logging is enabled globally."""
    return _VERBOSE


def is_perf_metrics_enabled() -> bool:
    """Return True when PERF metrics/telemetry are enabled globally."""
    return _PERF_METRICS_ENABLED


def set_perf_metrics_enabled(enabled: bool) -> None:
    """Toggle `[PERF]` telemetry at runtime."""
    global _PERF_METRICS_ENABLED
    _PERF_METRICS_ENABLED = bool(enabled)
