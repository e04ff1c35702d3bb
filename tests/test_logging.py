"""Tests for logging setup and console handlers."""
import io
import logging

from stagger.logging import logger as stagger_logger
from stagger.logging.logger import (
    ColoredFormatter,
    SuppressingStreamHandler,
    get_log_dir,
    is_perf_metrics_enabled,
    is_verbose_logging,
    set_perf_metrics_enabled,
    setup_logging,
)


def _make_logger(name, handler):
    log = logging.getLogger(name)
    log.handlers = [handler]
    log.setLevel(logging.DEBUG)
    log.propagate = False
    return log


def test_suppressing_handler_collapses_repeats():
    stream = io.StringIO()
    handler = SuppressingStreamHandler(stream)
    handler.setFormatter(logging.Formatter("%(message)s"))
    log = _make_logger("test.suppress.repeats", handler)

    for i in range(4):
        log.debug("tick %d", i)
    log.info("done")
    handler.close()

    lines = stream.getvalue().splitlines()
    assert lines == ["tick 0", "[3 Suppressed: CHECK LOG]", "done"]


def test_suppressing_handler_never_hides_warnings():
    stream = io.StringIO()
    handler = SuppressingStreamHandler(stream)
    handler.setFormatter(logging.Formatter("%(levelname)s %(message)s"))
    log = _make_logger("test.suppress.warnings", handler)

    log.warning("first")
    log.warning("second")
    log.debug("a")
    log.debug("b")
    log.error("boom")
    handler.close()

    assert stream.getvalue().splitlines() == [
        "WARNING first",
        "WARNING second",
        "DEBUG a",
        "DEBUG [1 Suppressed: CHECK LOG]",
        "ERROR boom",
    ]


def test_colored_formatter_wraps_levels_and_perf_lines():
    formatter = ColoredFormatter("%(levelname)s %(message)s")
    record = logging.LogRecord("x", logging.WARNING, __file__, 1, "careful", None, None)
    output = formatter.format(record)
    assert output.startswith(ColoredFormatter.COLORS["WARNING"])
    assert output.endswith(ColoredFormatter.RESET)
    assert record.levelname == "WARNING"

    perf = logging.LogRecord("x", logging.INFO, __file__, 1, "[PERF] [ANIM] slow", None, None)
    assert formatter.format(perf).startswith(ColoredFormatter.PERF_COLOR)


def test_setup_logging_writes_rotating_file(tmp_path, monkeypatch, restore_root_logging):
    monkeypatch.setattr(stagger_logger, "_BASE_DIR", tmp_path)
    monkeypatch.setattr(stagger_logger, "_VERBOSE", False)

    setup_logging(debug=False, verbose=True, log_dir=tmp_path)

    assert is_verbose_logging()
    assert get_log_dir() == tmp_path / "logs"
    logging.getLogger("stagger.test").info("hello from the test")
    for handler in logging.getLogger().handlers:
        handler.flush()

    content = (tmp_path / "logs" / "stagger.log").read_text(encoding="utf-8")
    assert "Stagger logging initialized" in content
    assert "hello from the test" in content


def test_perf_metrics_toggle(monkeypatch):
    monkeypatch.setattr(stagger_logger, "_PERF_METRICS_ENABLED", True)
    set_perf_metrics_enabled(False)
    assert not is_perf_metrics_enabled()
    set_perf_metrics_enabled(True)
    assert is_perf_metrics_enabled()
