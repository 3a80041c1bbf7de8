from __future__ import annotations

import logging
import sys
from io import StringIO

from dqaudit.logging.init import (
    LOGGER_NAME,
    SUMMARY_LEVEL,
    LabeledFormatter,
    get_logger,
    log_summary,
    reset_logging,
    set_debug,
    setup_logging,
)


def test_setup_logging_creates_logger_with_labeled_formatter(fresh_logging):
    logger = setup_logging()
    assert logger.name == LOGGER_NAME
    assert logger.level == logging.INFO
    assert len(logger.handlers) == 1
    assert isinstance(logger.handlers[0].formatter, LabeledFormatter)
    assert logger.propagate is False


def test_setup_logging_is_idempotent(fresh_logging):
    first = setup_logging()
    second = setup_logging()
    assert first is second
    assert len(second.handlers) == 1


def test_get_logger_configures_on_first_use(fresh_logging):
    assert get_logger() is setup_logging()


def test_logging_labeled_prefixes():
    captured = StringIO()
    logger = logging.getLogger("test_dqaudit_labels")
    logger.setLevel(logging.DEBUG)
    for handler in logger.handlers[:]:
        logger.removeHandler(handler)
    handler = logging.StreamHandler(captured)
    handler.setFormatter(LabeledFormatter())
    logger.addHandler(handler)
    logger.propagate = False

    logger.debug("d")
    logger.info("i")
    logger.warning("w")
    logger.error("e")
    logger.log(SUMMARY_LEVEL, "s")

    assert captured.getvalue().strip().split("\n") == ["DEBUG d", "INFO i", "WARN w", "ERROR e", "SUMMARY s"]


def test_log_summary_and_module_propagation(fresh_logging, capsys):
    setup_logging()
    log_summary("columns=1 rows=2")
    # モジュールロガーはアプリロガーへ伝播する
    logging.getLogger("dqaudit.services.orchestrator").info("from module")
    out = capsys.readouterr().out
    assert "SUMMARY columns=1 rows=2" in out
    assert "INFO from module" in out


def test_set_debug_toggles_level(fresh_logging, capsys):
    setup_logging()
    logging.getLogger("dqaudit.tabular.cleaner").debug("hidden")
    set_debug(True)
    logging.getLogger("dqaudit.tabular.cleaner").debug("shown")
    set_debug(False)
    out = capsys.readouterr().out
    assert "hidden" not in out
    assert "DEBUG shown" in out


def test_reset_logging_forces_new_setup(fresh_logging):
    setup_logging()
    reset_logging()
    logger = setup_logging()
    assert len(logger.handlers) == 1


def test_setup_logging_writes_to_given_stream(fresh_logging):
    captured = StringIO()
    setup_logging(stream=captured)
    get_logger().warning("careful")
    assert captured.getvalue() == "WARN careful\n"


def test_log_summary_accepts_rendered_line(fresh_logging, capsys):
    setup_logging()
    log_summary("SUMMARY columns=2 rows=3 valid_rows=3 bad_cells=0 elapsed_sec=0.1")
    out = capsys.readouterr().out
    assert out == "SUMMARY columns=2 rows=3 valid_rows=3 bad_cells=0 elapsed_sec=0.1\n"


def test_formatter_appends_traceback_after_labeled_line():
    formatter = LabeledFormatter()
    try:
        raise ValueError("bad value")
    except ValueError:
        record = logging.LogRecord("dqaudit", logging.ERROR, __file__, 1, "failed", None, sys.exc_info())
    lines = formatter.format(record).splitlines()
    assert lines[0] == "ERROR failed"
    assert lines[-1] == "ValueError: bad value"
