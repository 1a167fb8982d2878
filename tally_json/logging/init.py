from __future__ import annotations

import logging
import sys
from typing import TextIO

"""Console logging for tally-json.

Every line is ``<LABEL> <message>`` with LABEL one of DEBUG, INFO, WARN, ERROR
or SUMMARY. SUMMARY (level 25) carries the run's closing metrics line. Module
loggers live under ``tally_json`` and reach the console through its single
handler.
"""

__all__ = [
    "setup_logging",
    "get_logger",
    "log_summary",
    "redirect",
    "reset_logging",
    "set_debug",
    "LabeledFormatter",
    "LOGGER_NAME",
    "SUMMARY_LEVEL",
]

LOGGER_NAME = "tally_json"
SUMMARY_LEVEL = 25

_LABELS = {
    logging.DEBUG: "DEBUG",
    logging.INFO: "INFO",
    logging.WARNING: "WARN",
    logging.ERROR: "ERROR",
    logging.CRITICAL: "CRITICAL",
    SUMMARY_LEVEL: "SUMMARY",
}

_logger: logging.Logger | None = None


class LabeledFormatter(logging.Formatter):
    """``WARN file=a.xlsx ...``; a traceback, when attached, follows on the next lines."""

    def format(self, record: logging.LogRecord) -> str:
        line = f"{_LABELS.get(record.levelno, record.levelname)} {record.getMessage()}"
        if record.exc_info:
            line = f"{line}\n{self.formatException(record.exc_info)}"
        return line


def setup_logging(level: int = logging.INFO, stream: TextIO | None = None) -> logging.Logger:
    """Attach the console handler to the ``tally_json`` logger once per process.

    Later calls return the same logger untouched until ``reset_logging``.
    """
    global _logger
    if _logger is not None:
        return _logger

    logging.addLevelName(SUMMARY_LEVEL, "SUMMARY")
    logger = logging.getLogger(LOGGER_NAME)
    for old in list(logger.handlers):
        logger.removeHandler(old)

    console = logging.StreamHandler(stream if stream is not None else sys.stdout)
    console.setFormatter(LabeledFormatter())
    logger.addHandler(console)
    logger.setLevel(level)
    logger.propagate = False  # console lines only, never duplicated by root

    _logger = logger
    return logger


def get_logger() -> logging.Logger:
    return _logger if _logger is not None else setup_logging()


def redirect(stream: TextIO) -> None:
    """Move console output to ``stream`` (stderr while stdout carries JSON)."""
    for handler in get_logger().handlers:
        if isinstance(handler, logging.StreamHandler):
            handler.setStream(stream)


def set_debug(logger: logging.Logger | None = None) -> None:
    target = logger if logger is not None else get_logger()
    target.setLevel(logging.DEBUG)
    for handler in target.handlers:
        handler.setLevel(logging.DEBUG)


def log_summary(message: str) -> None:
    get_logger().log(SUMMARY_LEVEL, message)


def reset_logging() -> None:
    """Forget the configured logger so the next setup starts fresh (tests)."""
    global _logger
    _logger = None
