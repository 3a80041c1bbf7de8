from __future__ import annotations

import logging
import sys
from typing import TextIO

"""Logging initialization with labeled prefixes.

Every line written by the application logger starts with a label
(INFO|WARN|ERROR|DEBUG|SUMMARY). SUMMARY is a custom level used for the one
line run summary. Standard logging only; module loggers under the "dqaudit"
namespace (dqaudit.services.orchestrator, dqaudit.tabular.cleaner, ...)
propagate into the single handler configured here, and --debug lowers the
level of the whole namespace at once.
"""

__all__ = [
    "LEVEL_LABELS",
    "LOGGER_NAME",
    "SUMMARY_LEVEL",
    "LabeledFormatter",
    "setup_logging",
    "get_logger",
    "log_summary",
    "reset_logging",
    "set_debug",
]

LOGGER_NAME = "dqaudit"
SUMMARY_PREFIX = "SUMMARY "

# Custom SUMMARY level (between INFO=20 and WARNING=30)
SUMMARY_LEVEL = 25

LEVEL_LABELS = {
    logging.DEBUG: "DEBUG",
    logging.INFO: "INFO",
    logging.WARNING: "WARN",
    logging.ERROR: "ERROR",
    logging.CRITICAL: "CRITICAL",
    SUMMARY_LEVEL: "SUMMARY",
}

_logger: logging.Logger | None = None


class LabeledFormatter(logging.Formatter):
    """Formatter producing `LABEL message` lines.

    A traceback attached with exc_info follows on the next lines so that
    the first line keeps the labeled shape.
    """

    def format(self, record: logging.LogRecord) -> str:
        label = LEVEL_LABELS.get(record.levelno, record.levelname)
        line = f"{label} {record.getMessage()}"
        if record.exc_info:
            line = f"{line}\n{self.formatException(record.exc_info)}"
        return line


def setup_logging(stream: TextIO | None = None) -> logging.Logger:
    """Configure the "dqaudit" logger once and return it.

    Args:
        stream: Destination of the labeled lines; sys.stdout when omitted,
            looked up at call time so captured stdout is honoured

    Returns:
        Logger at INFO level. The handler itself passes DEBUG through, so
        set_debug() only has to move the logger level.
    """
    global _logger

    if _logger is not None:
        return _logger

    logging.addLevelName(SUMMARY_LEVEL, "SUMMARY")

    logger = logging.getLogger(LOGGER_NAME)
    logger.setLevel(logging.INFO)
    for handler in logger.handlers[:]:
        logger.removeHandler(handler)

    handler = logging.StreamHandler(stream if stream is not None else sys.stdout)
    handler.setLevel(logging.DEBUG)
    handler.setFormatter(LabeledFormatter())
    logger.addHandler(handler)

    # ルートロガーへの伝播を止めて二重出力を防ぐ
    logger.propagate = False

    _logger = logger
    return logger


def get_logger() -> logging.Logger:
    """Get the configured application logger, configuring it on first use."""
    if _logger is None:
        return setup_logging()
    return _logger


def set_debug(enabled: bool = True) -> None:
    """Switch the application logger between DEBUG and INFO."""
    get_logger().setLevel(logging.DEBUG if enabled else logging.INFO)


def log_summary(line: str) -> None:
    """Log a run summary at SUMMARY level.

    Accepts either the bare fields or a full line from render_summary_line;
    the label is written by the formatter, never twice.
    """
    get_logger().log(SUMMARY_LEVEL, line.removeprefix(SUMMARY_PREFIX))


def reset_logging() -> None:
    """Forget the configured logger so the next setup_logging() starts over (tests)."""
    global _logger
    _logger = None
